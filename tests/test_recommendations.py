"""
Test cases for the recommendation rule table: each threshold, rule ordering, simultaneous matches and the default message.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from engine.enums import Trend
from engine.forecast.models import ForecastResult
from engine.forecast.recommendations import (
    DEFAULT_MESSAGE,
    RULES,
    RecommendationContext,
    recommend,
)


def _fr(predicted=100.0, trend=Trend.stable, change_rate=0.0):
    return ForecastResult(
        predicted=predicted, confidence=0.8, trend=trend, change_rate=change_rate, volatility=0.15,
    )


def _ctx(current=None, next_=None, future=None, volatility=0.15, confidence=0.8):
    return RecommendationContext(
        current=current or _fr(),
        next=next_ or _fr(),
        future=future or _fr(),
        volatility=volatility,
        confidence=confidence,
    )


def _rule_message(index):
    return RULES[index][1]


def test_default_when_nothing_matches():
    assert recommend(_ctx()) == [DEFAULT_MESSAGE]


@pytest.mark.parametrize("change_rate, fires", [(-5.0, False), (-5.1, True), (-30.0, True)])
def test_decline_rule(change_rate, fires):
    ctx = _ctx(current=_fr(trend=Trend.decreasing, change_rate=change_rate))
    assert (_rule_message(0) in recommend(ctx)) is fires


@pytest.mark.parametrize("change_rate, fires", [(10.0, False), (10.5, True)])
def test_growth_rule(change_rate, fires):
    ctx = _ctx(current=_fr(trend=Trend.increasing, change_rate=change_rate))
    assert (_rule_message(1) in recommend(ctx)) is fires


def test_next_period_decline_rule():
    ctx = _ctx(next_=_fr(trend=Trend.decreasing, change_rate=-3.0))
    assert recommend(ctx) == [_rule_message(2)]


@pytest.mark.parametrize("volatility, expected", [
    (0.31, [1]),
    (0.3, []),
    (0.1, []),
    (0.09, [2]),
])
def test_volatility_rules(volatility, expected):
    msgs = recommend(_ctx(volatility=volatility))
    high, low = _rule_message(3), _rule_message(4)
    found = [1 if m == high else 2 for m in msgs if m in (high, low)]
    assert found == expected


def test_low_confidence_rule():
    assert recommend(_ctx(confidence=0.49)) == [_rule_message(5)]
    assert recommend(_ctx(confidence=0.5)) == [DEFAULT_MESSAGE]


@pytest.mark.parametrize("next_predicted, index", [(116.0, 6), (84.0, 7)])
def test_period_shift_rules(next_predicted, index):
    ctx = _ctx(current=_fr(predicted=100.0), next_=_fr(predicted=next_predicted))
    assert recommend(ctx) == [_rule_message(index)]


def test_period_shift_at_threshold_is_quiet():
    ctx = _ctx(current=_fr(predicted=100.0), next_=_fr(predicted=115.0))
    assert recommend(ctx) == [DEFAULT_MESSAGE]


def test_period_shift_skipped_on_zero_current():
    ctx = _ctx(current=_fr(predicted=0.0), next_=_fr(predicted=500.0))
    assert ctx.period_shift_pct is None
    assert recommend(ctx) == [DEFAULT_MESSAGE]


def test_rules_accumulate_in_order():
    ctx = _ctx(
        current=_fr(predicted=100.0, trend=Trend.decreasing, change_rate=-12.0),
        next_=_fr(predicted=70.0, trend=Trend.decreasing, change_rate=-8.0),
        volatility=0.45,
        confidence=0.3,
    )
    assert recommend(ctx) == [
        _rule_message(0),
        _rule_message(2),
        _rule_message(3),
        _rule_message(5),
        _rule_message(7),
    ]
