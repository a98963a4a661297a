from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import List, Optional, Tuple

from config import settings
from database import get_db_session
from engine.anomaly import AnomalyReport, detect
from engine.forecast import TrendAnalysis, build_trend_analysis
from store import revenue
from store.revenue import RevenueObservation

log = logging.getLogger(__name__)


def clamp_lookback(days: Optional[int]) -> int:
    if days is None:
        days = settings.forecast_default_lookback_days
    return max(1, min(int(days), settings.forecast_max_lookback_days))


class ForecastService:
    """Reads revenue history and runs the forecasting engine over it.

    Holds no state; every call fetches its own window and returns a fresh
    result. Database errors are propagated to the caller unchanged.
    """

    def _fetch_sync(self, project_id: Optional[int], limit: int) -> List[RevenueObservation]:
        with get_db_session() as db:
            return revenue.fetch_recent(db, project_id, limit)

    async def fetch_history(self, project_id: Optional[int], limit: int) -> List[RevenueObservation]:
        return await asyncio.to_thread(self._fetch_sync, project_id, limit)

    async def generate_forecast(self, project_id: Optional[int] = None, days: Optional[int] = None) -> TrendAnalysis:
        lookback = clamp_lookback(days)
        history = await self.fetch_history(project_id, lookback)
        if not history:
            log.info("generate_forecast: no history for project=%s", project_id)
        current, next_, future = revenue.split_series(history)
        return build_trend_analysis(current, next_, future)

    async def detect_anomalies(self, project_id: Optional[int] = None) -> AnomalyReport:
        history = await self.fetch_history(project_id, settings.anomaly_window)
        report = detect([o.date for o in history], [o.current_period_value for o in history])
        if report.has_anomalies:
            log.info("detect_anomalies: project=%s flagged=%d", project_id, len(report.anomalies))
        return report

    async def record_observation(
        self,
        *,
        record_date: date,
        current_period_value: float,
        next_period_value: float,
        future_period_value: float,
        project_id: Optional[int] = None,
    ) -> Tuple[RevenueObservation, bool]:
        observation = RevenueObservation(
            date=record_date,
            current_period_value=current_period_value,
            next_period_value=next_period_value,
            future_period_value=future_period_value,
            project_id=project_id,
        )

        def _upsert() -> Tuple[RevenueObservation, bool]:
            with get_db_session() as db:
                return revenue.upsert(db, observation)

        return await asyncio.to_thread(_upsert)

    async def list_observations(self, project_id: Optional[int] = None, limit: Optional[int] = None) -> List[RevenueObservation]:
        return await self.fetch_history(project_id, clamp_lookback(limit))


forecast_service = ForecastService()
