"""
Response models for API endpoints.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import datetime as dt
from dataclasses import asdict
from typing import Any, List, Optional

import numpy as np
from pydantic import BaseModel, Field, model_serializer

from engine.anomaly import AnomalyReport
from engine.enums import AnomalyType, RiskLevel, Severity, Trend
from engine.forecast import TrendAnalysis
from store.revenue import RevenueObservation


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    return obj


class NpModel(BaseModel):

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


class ForecastPoint(NpModel):

    predicted: float = Field(ge=0.0)
    confidence: float = Field(ge=0.0, le=1.0)
    trend: Trend
    change_rate: float
    volatility: float


class MonthlyProjectionModel(NpModel):

    current_month: float
    next_month: float
    future_month: float


class TrendAnalysisResponse(NpModel):

    daily_forecast: List[ForecastPoint]
    monthly_projection: MonthlyProjectionModel
    risk_assessment: RiskLevel
    recommendations: List[str]

    @classmethod
    def from_analysis(cls, analysis: TrendAnalysis) -> "TrendAnalysisResponse":
        return cls.model_validate(asdict(analysis))


class AnomalyModel(NpModel):

    date: dt.date
    type: AnomalyType
    severity: Severity
    description: str
    value: float
    z_score: Optional[float] = None
    change_rate: Optional[float] = None


class AnomalyReportResponse(NpModel):

    has_anomalies: bool
    anomalies: List[AnomalyModel]

    @classmethod
    def from_report(cls, report: AnomalyReport) -> "AnomalyReportResponse":
        return cls.model_validate(asdict(report))


class RevenueRecordResponse(BaseModel):

    date: dt.date
    current_month_revenue: float
    next_month_revenue: float
    future_month_revenue: float
    project_id: Optional[int] = None

    @classmethod
    def from_observation(cls, obs: RevenueObservation) -> "RevenueRecordResponse":
        return cls(
            date=obs.date,
            current_month_revenue=obs.current_period_value,
            next_month_revenue=obs.next_period_value,
            future_month_revenue=obs.future_period_value,
            project_id=obs.project_id,
        )


class RevenueRecordWriteResponse(BaseModel):

    record: RevenueRecordResponse
    created: bool


class RevenueRecordList(BaseModel):

    records: List[RevenueRecordResponse]
    count: int
