"""
SQLAlchemy models for the daily revenue records read by the forecasting engine.
"""
from __future__ import annotations

import datetime as dt
from decimal import Decimal

from sqlalchemy import Boolean, Date, DateTime, Index, Integer, Numeric, UniqueConstraint, func, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class DailyRevenueRecord(Base):
    __tablename__ = "daily_revenue_records"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    current_month_revenue: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    next_month_revenue: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    future_month_revenue: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("project_id", "date", name="uq_daily_revenue_project_date"),
        # NULL project ids never collide under the constraint above
        Index(
            "uq_daily_revenue_unscoped_date",
            "date",
            unique=True,
            sqlite_where=text("project_id IS NULL"),
            postgresql_where=text("project_id IS NULL"),
        ),
        Index("ix_daily_revenue_deleted_date", "is_deleted", "date"),
        Index("ix_daily_revenue_project_deleted_date", "project_id", "is_deleted", "date"),
    )
