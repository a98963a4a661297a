"""
Forecast routes exposing the blended revenue forecast and anomaly report for a project or the whole ledger.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Any, Optional

from fastapi import APIRouter, Query

from api.responses import AnomalyReportResponse, TrendAnalysisResponse
from api.routes.exception import handle_exceptions
from config import settings
from services.forecast_service import forecast_service

router = APIRouter(tags=["Forecast"])


def _coerce_query_value(value: Any, cast: Any) -> Any:
    # Allow direct unit-test invocation without FastAPI Query parsing.
    raw = value.default if hasattr(value, "default") else value
    return cast(raw) if raw is not None else None


@router.get("/forecast", summary="Seven day forecast, monthly projection, risk and recommendations")
@handle_exceptions
async def revenue_forecast(
    project_id: Optional[int] = Query(default=None, ge=1),
    days: int = Query(default=settings.forecast_default_lookback_days, ge=1, le=settings.forecast_max_lookback_days),
) -> TrendAnalysisResponse:
    project_id = _coerce_query_value(project_id, int)
    days = _coerce_query_value(days, int)
    analysis = await forecast_service.generate_forecast(project_id, days)
    return TrendAnalysisResponse.from_analysis(analysis)


@router.get("/forecast/anomalies", summary="Spikes, drops and sharp swings in recent daily revenue")
@handle_exceptions
async def revenue_anomalies(
    project_id: Optional[int] = Query(default=None, ge=1),
) -> AnomalyReportResponse:
    project_id = _coerce_query_value(project_id, int)
    report = await forecast_service.detect_anomalies(project_id)
    return AnomalyReportResponse.from_report(report)
