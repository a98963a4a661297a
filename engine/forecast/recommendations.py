"""
Rule table turning forecast outcomes into revenue management recommendations. Rules are evaluated in declaration order and every matching rule contributes its message; a fixed default is emitted when none match.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from engine.enums import Trend
from engine.forecast.models import ForecastResult
from config import settings


NO_HISTORY_MESSAGE = (
    "Not enough historical data to forecast yet; keep recording daily revenue figures."
)
DEFAULT_MESSAGE = (
    "Revenue is performing steadily; keep monitoring and maintain the current strategy."
)


@dataclass(frozen=True)
class RecommendationContext:
    current: ForecastResult
    next: ForecastResult
    future: ForecastResult
    volatility: float
    confidence: float

    @property
    def period_shift_pct(self) -> Optional[float]:
        # percentage change from the current period prediction to the next
        if self.current.predicted == 0:
            return None
        return (self.next.predicted - self.current.predicted) / self.current.predicted * 100


Rule = Tuple[Callable[[RecommendationContext], bool], str]


def _shift_above(ctx: RecommendationContext) -> bool:
    shift = ctx.period_shift_pct
    return shift is not None and shift > settings.recommend_period_shift_pct


def _shift_below(ctx: RecommendationContext) -> bool:
    shift = ctx.period_shift_pct
    return shift is not None and shift < -settings.recommend_period_shift_pct


RULES: List[Rule] = [
    (
        lambda ctx: ctx.current.trend == Trend.decreasing
        and ctx.current.change_rate < settings.recommend_decline_change_pct,
        "Current period revenue is trending down; strengthen marketing and customer retention.",
    ),
    (
        lambda ctx: ctx.current.trend == Trend.increasing
        and ctx.current.change_rate > settings.recommend_growth_change_pct,
        "Current period revenue is performing strongly; keep the current strategy and prepare to expand capacity.",
    ),
    (
        lambda ctx: ctx.next.trend == Trend.decreasing,
        "Next period revenue is expected to decline; prepare counter-measures in advance.",
    ),
    (
        lambda ctx: ctx.volatility > settings.recommend_high_volatility,
        "Revenue is highly volatile; analyse the causes and put a stabilisation plan in place.",
    ),
    (
        lambda ctx: ctx.volatility < settings.recommend_low_volatility,
        "Revenue is relatively stable, which suits long-term planning.",
    ),
    (
        lambda ctx: ctx.confidence < settings.recommend_low_confidence,
        "Forecast confidence is low; record data more frequently to improve accuracy.",
    ),
    (
        _shift_above,
        "Next period revenue is expected to grow sharply; prepare enough resources for the extra demand.",
    ),
    (
        _shift_below,
        "Next period revenue is expected to drop sharply; review the market strategy and adjust operations.",
    ),
]


def recommend(ctx: RecommendationContext) -> List[str]:
    messages = [message for predicate, message in RULES if predicate(ctx)]
    return messages or [DEFAULT_MESSAGE]
