"""
Test cases for enums used by the forecasting engine, including Trend classification, RiskLevel, Severity and AnomalyType values.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from config import settings
from engine.enums import AnomalyType, RiskLevel, Severity, Trend


@pytest.mark.parametrize("rate, expected", [
    (0.0, Trend.stable),
    (1.99, Trend.stable),
    (-1.99, Trend.stable),
    (2.0, Trend.increasing),
    (-2.0, Trend.decreasing),
    (25.0, Trend.increasing),
])
def test_trend_from_change_rate(rate, expected):
    assert Trend.from_change_rate(rate) == expected


def test_trend_band_follows_settings(monkeypatch):
    monkeypatch.setattr(settings, "forecast_stable_change_pct", 10.0)
    assert Trend.from_change_rate(5.0) == Trend.stable


def test_enum_values():
    assert [s.value for s in Severity] == ["low", "medium", "high"]
    assert [r.value for r in RiskLevel] == ["low", "medium", "high"]
    assert AnomalyType.volatility.value == "volatility"
