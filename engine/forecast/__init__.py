"""
Forecasting logic for daily revenue series, including linear trend and exponential smoothing models, seasonal adjustment, blended daily projection, risk assessment and rule-based recommendations.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


from engine.forecast.models import (
    ForecastResult,
    exponential_smoothing,
    linear_trend,
    seasonal_adjustment,
)
from engine.forecast.projection import MonthlyProjection, TrendAnalysis, build_trend_analysis
from engine.forecast.recommendations import recommend

__all__ = [
    "ForecastResult", "linear_trend", "exponential_smoothing", "seasonal_adjustment",
    "MonthlyProjection", "TrendAnalysis", "build_trend_analysis", "recommend",
]
