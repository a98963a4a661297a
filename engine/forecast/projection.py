"""
Projection logic combining the linear and smoothing models over the three revenue horizons into a short daily forecast, a monthly projection, a risk level and recommendations.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from engine.enums import RiskLevel
from engine.forecast.models import (
    ForecastResult,
    exponential_smoothing,
    linear_trend,
    seasonal_adjustment,
)
from engine.forecast.recommendations import (
    NO_HISTORY_MESSAGE,
    RecommendationContext,
    recommend,
)
from config import settings


@dataclass(frozen=True)
class MonthlyProjection:
    current_month: float = 0.0
    next_month: float = 0.0
    future_month: float = 0.0


@dataclass(frozen=True)
class TrendAnalysis:
    daily_forecast: List[ForecastResult]
    monthly_projection: MonthlyProjection
    risk_assessment: RiskLevel
    recommendations: List[str] = field(default_factory=list)


def empty_analysis() -> TrendAnalysis:
    return TrendAnalysis(
        daily_forecast=[],
        monthly_projection=MonthlyProjection(),
        risk_assessment=RiskLevel.high,
        recommendations=[NO_HISTORY_MESSAGE],
    )


def assess_risk(volatility: float, confidence: float) -> RiskLevel:
    for max_volatility, min_confidence, label in settings.risk_levels:
        if volatility < max_volatility and confidence > min_confidence:
            return RiskLevel(label)
    return RiskLevel.high


def daily_forecast(
    linear: ForecastResult,
    smoothed: ForecastResult,
    seasonal_factor: float,
    horizon: int | None = None,
) -> List[ForecastResult]:
    # the same seasonal factor is applied to every day of the horizon
    if horizon is None:
        horizon = settings.forecast_horizon_days
    confidence = (linear.confidence + smoothed.confidence) / 2
    volatility = (linear.volatility + smoothed.volatility) / 2

    out: List[ForecastResult] = []
    for i in range(1, horizon + 1):
        linear_pred = linear.predicted + (linear.change_rate / 100) * linear.predicted * i
        smoothed_pred = smoothed.predicted * (1 + smoothed.change_rate / 100 * i)
        blended = (
            linear_pred * settings.forecast_linear_blend
            + smoothed_pred * settings.forecast_smoothing_blend
        ) * seasonal_factor
        out.append(ForecastResult(
            predicted=max(0.0, blended),
            confidence=confidence,
            trend=linear.trend,
            change_rate=linear.change_rate,
            volatility=volatility,
        ))
    return out


def build_trend_analysis(
    current: Sequence[float],
    next_: Sequence[float],
    future: Sequence[float],
) -> TrendAnalysis:
    """Forecast all three horizons from ascending series of equal length."""
    if len(current) == 0:
        return empty_analysis()

    current_linear = linear_trend(current)
    next_linear = linear_trend(next_)
    future_linear = linear_trend(future)

    current_smoothed = exponential_smoothing(current)
    next_smoothed = exponential_smoothing(next_)
    future_smoothed = exponential_smoothing(future)

    seasonal_factor = seasonal_adjustment(current)

    projection = MonthlyProjection(
        current_month=(current_linear.predicted + current_smoothed.predicted) / 2,
        next_month=(next_linear.predicted + next_smoothed.predicted) / 2,
        future_month=(future_linear.predicted + future_smoothed.predicted) / 2,
    )

    linears = (current_linear, next_linear, future_linear)
    avg_volatility = sum(r.volatility for r in linears) / len(linears)
    avg_confidence = sum(r.confidence for r in linears) / len(linears)

    recommendations = recommend(RecommendationContext(
        current=current_linear,
        next=next_linear,
        future=future_linear,
        volatility=avg_volatility,
        confidence=avg_confidence,
    ))

    return TrendAnalysis(
        daily_forecast=daily_forecast(current_linear, current_smoothed, seasonal_factor),
        monthly_projection=projection,
        risk_assessment=assess_risk(avg_volatility, avg_confidence),
        recommendations=recommendations,
    )
