from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field


class RevenueRecordRequest(BaseModel):
    date: dt.date
    current_month_revenue: float = Field(default=0.0, ge=0.0)
    next_month_revenue: float = Field(default=0.0, ge=0.0)
    future_month_revenue: float = Field(default=0.0, ge=0.0)
    project_id: Optional[int] = Field(default=None, ge=1)
