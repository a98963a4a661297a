"""
Revenue record store: typed reads of the most recent daily observations and upserts of new ones.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from db_models import DailyRevenueRecord

log = logging.getLogger(__name__)

_CENTS = Decimal("0.01")

_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


@dataclass(frozen=True)
class RevenueObservation:
    date: date
    current_period_value: float
    next_period_value: float
    future_period_value: float
    project_id: Optional[int] = None


def _to_observation(row: DailyRevenueRecord) -> RevenueObservation:
    return RevenueObservation(
        date=row.date,
        current_period_value=float(row.current_month_revenue),
        next_period_value=float(row.next_month_revenue),
        future_period_value=float(row.future_month_revenue),
        project_id=row.project_id,
    )


def _scoped(stmt, project_id: Optional[int]):
    stmt = stmt.where(DailyRevenueRecord.is_deleted.is_(False))
    if project_id is not None:
        stmt = stmt.where(DailyRevenueRecord.project_id == project_id)
    return stmt


def fetch_recent(session: Session, project_id: Optional[int], limit: int) -> List[RevenueObservation]:
    """Return up to ``limit`` most recent non-deleted observations, oldest first."""
    stmt = _scoped(select(DailyRevenueRecord), project_id)
    stmt = stmt.order_by(DailyRevenueRecord.date.desc()).limit(limit)
    rows = session.execute(stmt).scalars().all()
    log.debug("fetch_recent project=%s limit=%d rows=%d", project_id, limit, len(rows))
    return [_to_observation(r) for r in reversed(rows)]


def split_series(observations: List[RevenueObservation]) -> Tuple[List[float], List[float], List[float]]:
    return (
        [o.current_period_value for o in observations],
        [o.next_period_value for o in observations],
        [o.future_period_value for o in observations],
    )


def _money(value: float) -> Decimal:
    # two places, as stored by the Numeric(14, 2) columns
    return Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_UP)


def _find(session: Session, project_id: Optional[int], day: date) -> Optional[DailyRevenueRecord]:
    stmt = select(DailyRevenueRecord).where(DailyRevenueRecord.date == day)
    if project_id is None:
        stmt = stmt.where(DailyRevenueRecord.project_id.is_(None))
    else:
        stmt = stmt.where(DailyRevenueRecord.project_id == project_id)
    stmt = stmt.execution_options(populate_existing=True)
    return session.execute(stmt).scalars().first()


def _conflict_target(project_id: Optional[int]) -> Dict[str, Any]:
    if project_id is None:
        return {"index_elements": ["date"], "index_where": DailyRevenueRecord.project_id.is_(None)}
    return {"index_elements": ["project_id", "date"]}


def upsert(session: Session, observation: RevenueObservation) -> Tuple[RevenueObservation, bool]:
    """Insert or overwrite the record for ``(project_id, date)``; returns ``(row, created)``.

    On SQLite and PostgreSQL the write is a single ``INSERT ... ON CONFLICT DO
    UPDATE``, so two writers racing on the same day end up with one row and
    the later figures. Other backends fall back to select-then-write.
    """
    figures = {
        "current_month_revenue": _money(observation.current_period_value),
        "next_month_revenue": _money(observation.next_period_value),
        "future_month_revenue": _money(observation.future_period_value),
        "is_deleted": False,
    }
    existing = _find(session, observation.project_id, observation.date)
    created = existing is None

    insert = _UPSERT_INSERTS.get(session.get_bind().dialect.name)
    if insert is None:
        row = existing
        if row is None:
            row = DailyRevenueRecord(project_id=observation.project_id, date=observation.date)
            session.add(row)
        for key, value in figures.items():
            setattr(row, key, value)
        session.flush()
    else:
        stmt = insert(DailyRevenueRecord).values(
            project_id=observation.project_id, date=observation.date, **figures
        )
        stmt = stmt.on_conflict_do_update(
            set_={**figures, "updated_at": func.now()},
            **_conflict_target(observation.project_id),
        )
        session.execute(stmt)

    row = _find(session, observation.project_id, observation.date)
    log.debug("upsert project=%s date=%s created=%s", observation.project_id, observation.date, created)
    return _to_observation(row), created
