"""
Enumerations for Trend, Risk Level, Severity and Anomaly Types

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum


class Trend(str, Enum):
    increasing = "increasing"
    decreasing = "decreasing"
    stable = "stable"

    @classmethod
    def from_change_rate(cls, change_rate: float) -> Trend:
        # the stable band is configurable so tuning does not touch the models
        from config import settings

        if abs(change_rate) < settings.forecast_stable_change_pct:
            return cls.stable
        if change_rate > 0:
            return cls.increasing
        return cls.decreasing


class RiskLevel(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class Severity(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class AnomalyType(str, Enum):
    spike = "spike"
    drop = "drop"
    volatility = "volatility"
