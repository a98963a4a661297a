"""
Forecast models for daily revenue series: an ordinary least squares trend line over the most recent window, single exponential smoothing over the whole series, and a periodic seasonal factor, each producing a bounded confidence score and qualitative trend for downstream projection.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from engine.enums import Trend
from config import settings


@dataclass(frozen=True)
class ForecastResult:
    predicted: float
    confidence: float
    trend: Trend
    change_rate: float
    volatility: float


def _degenerate(predicted: float = 0.0) -> ForecastResult:
    return ForecastResult(
        predicted=float(predicted),
        confidence=settings.forecast_confidence_floor,
        trend=Trend.stable,
        change_rate=0.0,
        volatility=0.0,
    )


def _linear_fit(vals: np.ndarray) -> tuple[float, float]:
    n = len(vals)
    x = np.arange(n, dtype=float)
    x_sum = float(np.sum(x))
    y_sum = float(np.sum(vals))
    xy_sum = float(np.sum(x * vals))
    x2_sum = float(np.sum(x * x))
    slope = (n * xy_sum - x_sum * y_sum) / (n * x2_sum - x_sum * x_sum)
    intercept = (y_sum - slope * x_sum) / n
    return slope, intercept


def _r_squared(vals: np.ndarray, slope: float, intercept: float) -> tuple[float, float]:
    fitted = slope * np.arange(len(vals), dtype=float) + intercept
    ss_res = float(np.sum((vals - fitted) ** 2))
    ss_tot = float(np.sum((vals - np.mean(vals)) ** 2))
    r2 = 1.0 - ss_res / ss_tot if ss_tot > 0 else 0.0
    return r2, ss_res


def linear_trend(values: Sequence[float], window: int | None = None) -> ForecastResult:
    """Fit a straight line to the last ``window`` points and predict one step ahead.

    Fewer than three points is not an error: the last value is carried
    forward with the lowest confidence and a stable trend.
    """
    if window is None:
        window = settings.forecast_linear_window
    if len(values) < settings.forecast_linear_min_samples:
        return _degenerate(values[-1] if len(values) else 0.0)

    n = min(len(values), window)
    if n < 2:
        return _degenerate(values[-1])
    recent = np.array(values[-n:], dtype=float)

    slope, intercept = _linear_fit(recent)
    predicted = slope * n + intercept

    r2, ss_res = _r_squared(recent, slope, intercept)
    confidence = max(settings.forecast_confidence_floor, min(settings.forecast_confidence_cap, r2))

    y_mean = float(np.mean(recent))
    denom = y_mean if y_mean != 0 else 1.0
    change_rate = slope / denom * 100
    volatility = math.sqrt(ss_res / n) / denom

    return ForecastResult(
        predicted=max(0.0, predicted),
        confidence=confidence,
        trend=Trend.from_change_rate(change_rate),
        change_rate=change_rate,
        volatility=volatility,
    )


def _ema(vals: Sequence[float], alpha: float) -> np.ndarray:
    result = np.zeros(len(vals))
    result[0] = vals[0]
    for i in range(1, len(vals)):
        result[i] = alpha * vals[i] + (1 - alpha) * result[i - 1]
    return result


def exponential_smoothing(values: Sequence[float], alpha: float | None = None) -> ForecastResult:
    if alpha is None:
        alpha = settings.forecast_smoothing_alpha
    if len(values) == 0:
        return _degenerate()

    arr = np.array(values, dtype=float)
    smoothed = _ema(arr, alpha)

    recent = smoothed[-settings.forecast_smoothing_trend_window:]
    if len(recent) > 1 and recent[0] != 0:
        change_rate = float((recent[-1] - recent[0]) / recent[0] * 100)
    else:
        change_rate = 0.0

    last = float(smoothed[-1])
    rms = math.sqrt(float(np.mean((arr - smoothed) ** 2)))
    volatility = rms / (last if last != 0 else 1.0)

    return ForecastResult(
        predicted=last,
        confidence=max(
            settings.forecast_smoothing_confidence_floor,
            settings.forecast_smoothing_confidence_base - volatility,
        ),
        trend=Trend.from_change_rate(change_rate),
        change_rate=change_rate,
        volatility=volatility,
    )


def seasonal_adjustment(values: Sequence[float], period: int | None = None) -> float:
    """Ratio of the latest point's season average to the mean of all season averages.

    Returns the neutral factor 1.0 until at least two full periods are available.
    """
    if period is None:
        period = settings.forecast_seasonal_period
    if len(values) < period * 2:
        return 1.0

    arr = np.array(values, dtype=float)
    seasons = [float(np.mean(arr[i::period])) for i in range(period)]
    overall = float(np.mean(seasons))
    if overall == 0:
        return 1.0
    return seasons[(len(values) - 1) % period] / overall
