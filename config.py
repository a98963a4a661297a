"""
Constants and configuration for the Revcast forecasting service.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import List, Tuple

from pydantic_settings import BaseSettings


REVCAST_DATABASE_URL = os.getenv("REVCAST_DATABASE_URL", "sqlite:///./revcast.db")
REVCAST_HOST = os.getenv("REVCAST_HOST", "0.0.0.0")
REVCAST_PORT = int(os.getenv("REVCAST_PORT", "4330"))

HEALTH_PATH = "/health"


class Settings(BaseSettings):
    database_url: str = REVCAST_DATABASE_URL
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_pool_timeout: int = 30
    db_pool_recycle: int = 1800

    host: str = REVCAST_HOST
    port: int = REVCAST_PORT

    # history retrieval
    forecast_default_lookback_days: int = 30
    forecast_max_lookback_days: int = 365

    # linear regression model
    forecast_linear_window: int = 7
    forecast_linear_min_samples: int = 3
    forecast_confidence_floor: float = 0.1
    forecast_confidence_cap: float = 0.95

    # exponential smoothing model
    forecast_smoothing_alpha: float = 0.3
    forecast_smoothing_trend_window: int = 5
    forecast_smoothing_confidence_base: float = 0.8
    forecast_smoothing_confidence_floor: float = 0.2

    # |change rate| below this percentage is reported as a stable trend
    forecast_stable_change_pct: float = 2.0

    # seasonal adjustment and daily projection
    forecast_seasonal_period: int = 7
    forecast_horizon_days: int = 7
    forecast_linear_blend: float = 0.6
    forecast_smoothing_blend: float = 0.4

    # risk assessment: (max volatility, min confidence, label), first match wins
    risk_levels: List[Tuple[float, float, str]] = [
        (0.1, 0.7, "low"),
        (0.2, 0.5, "medium"),
    ]

    # recommendation rule thresholds
    recommend_decline_change_pct: float = -5.0
    recommend_growth_change_pct: float = 10.0
    recommend_high_volatility: float = 0.3
    recommend_low_volatility: float = 0.1
    recommend_low_confidence: float = 0.5
    recommend_period_shift_pct: float = 15.0

    # anomaly detection
    anomaly_window: int = 30
    anomaly_min_samples: int = 5
    anomaly_zscore_threshold: float = 2.5
    anomaly_zscore_high: float = 3.0
    anomaly_change_pct_threshold: float = 50.0
    anomaly_change_pct_high: float = 100.0

    model_config = {
        "env_prefix": "REVCAST_",
        "extra": "ignore",
    }


settings = Settings()
