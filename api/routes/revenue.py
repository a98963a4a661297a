"""
Revenue record routes for recording daily figures and reading back the window the forecaster uses.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Optional

from fastapi import APIRouter, Query

from api.requests import RevenueRecordRequest
from api.responses import RevenueRecordList, RevenueRecordResponse, RevenueRecordWriteResponse
from api.routes.exception import handle_exceptions
from api.routes.forecast import _coerce_query_value
from config import settings
from services.forecast_service import forecast_service

router = APIRouter(tags=["Revenue"])


@router.post("/revenue/records", summary="Record or overwrite one day of revenue figures")
@handle_exceptions
async def record_revenue(req: RevenueRecordRequest) -> RevenueRecordWriteResponse:
    obs, created = await forecast_service.record_observation(
        record_date=req.date,
        current_period_value=req.current_month_revenue,
        next_period_value=req.next_month_revenue,
        future_period_value=req.future_month_revenue,
        project_id=req.project_id,
    )
    return RevenueRecordWriteResponse(record=RevenueRecordResponse.from_observation(obs), created=created)


@router.get("/revenue/records", summary="Most recent daily revenue records, oldest first")
@handle_exceptions
async def list_revenue(
    project_id: Optional[int] = Query(default=None, ge=1),
    limit: int = Query(default=settings.forecast_default_lookback_days, ge=1, le=settings.forecast_max_lookback_days),
) -> RevenueRecordList:
    project_id = _coerce_query_value(project_id, int)
    limit = _coerce_query_value(limit, int)
    rows = await forecast_service.list_observations(project_id, limit)
    records = [RevenueRecordResponse.from_observation(o) for o in rows]
    return RevenueRecordList(records=records, count=len(records))
