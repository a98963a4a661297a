"""
Tests for forecast, revenue record and health route semantics.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import date, timedelta

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

import database
from api.requests import RevenueRecordRequest
from api.routes import forecast as forecast_route
from api.routes import revenue as revenue_route
from api.routes.exception import handle_exceptions
from config import settings
from engine.anomaly import Anomaly, AnomalyReport
from engine.enums import AnomalyType, Severity
from engine.forecast.projection import empty_analysis
from store.revenue import RevenueObservation


class DummyService:
    def __init__(self):
        self.calls = []

    async def generate_forecast(self, project_id=None, days=None):
        self.calls.append(("forecast", project_id, days))
        return empty_analysis()

    async def detect_anomalies(self, project_id=None):
        self.calls.append(("anomalies", project_id))
        return AnomalyReport(has_anomalies=True, anomalies=[Anomaly(
            date=date(2026, 3, 5),
            type=AnomalyType.spike,
            severity=Severity.high,
            description="Revenue spiked 300.0% above the average",
            value=500.0,
            z_score=4.359,
        )])

    async def record_observation(self, **kwargs):
        self.calls.append(("record", kwargs))
        return RevenueObservation(
            date=kwargs["record_date"],
            current_period_value=kwargs["current_period_value"],
            next_period_value=kwargs["next_period_value"],
            future_period_value=kwargs["future_period_value"],
            project_id=kwargs["project_id"],
        ), True

    async def list_observations(self, project_id=None, limit=None):
        self.calls.append(("list", project_id, limit))
        return []


@pytest.mark.asyncio
async def test_forecast_route_uses_defaults(monkeypatch):
    dummy = DummyService()
    monkeypatch.setattr(forecast_route, "forecast_service", dummy)

    res = await forecast_route.revenue_forecast()

    assert dummy.calls == [("forecast", None, settings.forecast_default_lookback_days)]
    body = res.model_dump(mode="json")
    assert body["risk_assessment"] == "high"
    assert body["daily_forecast"] == []
    assert len(body["recommendations"]) == 1


@pytest.mark.asyncio
async def test_anomaly_route_serializes_report(monkeypatch):
    dummy = DummyService()
    monkeypatch.setattr(forecast_route, "forecast_service", dummy)

    res = await forecast_route.revenue_anomalies(project_id=4)

    assert dummy.calls == [("anomalies", 4)]
    body = res.model_dump(mode="json")
    assert body["has_anomalies"] is True
    assert body["anomalies"][0]["type"] == "spike"
    assert body["anomalies"][0]["date"] == "2026-03-05"


@pytest.mark.asyncio
async def test_record_route_forwards_fields(monkeypatch):
    dummy = DummyService()
    monkeypatch.setattr(revenue_route, "forecast_service", dummy)

    req = RevenueRecordRequest(date=date(2026, 3, 1), current_month_revenue=1200.0, project_id=2)
    res = await revenue_route.record_revenue(req)

    assert res.created is True
    assert res.record.current_month_revenue == 1200.0
    assert dummy.calls[0][1]["project_id"] == 2
    assert dummy.calls[0][1]["next_period_value"] == 0.0


@pytest.mark.asyncio
async def test_route_errors_become_500(monkeypatch):
    class Broken(DummyService):
        async def detect_anomalies(self, project_id=None):
            raise RuntimeError("db gone")

    monkeypatch.setattr(forecast_route, "forecast_service", Broken())
    with pytest.raises(HTTPException) as excinfo:
        await forecast_route.revenue_anomalies()
    assert excinfo.value.status_code == 500
    assert excinfo.value.detail == "db gone"


def test_handle_exceptions_sync_passthrough():
    @handle_exceptions
    def not_found():
        raise HTTPException(status_code=404, detail="missing")

    @handle_exceptions
    def broken():
        raise ValueError("bad")

    with pytest.raises(HTTPException) as nf:
        not_found()
    assert nf.value.status_code == 404
    with pytest.raises(HTTPException) as err:
        broken()
    assert err.value.status_code == 500


def test_app_end_to_end(monkeypatch):
    import main

    database.dispose_database()
    monkeypatch.setattr(settings, "database_url", "sqlite://")
    start = date(2026, 4, 1)
    try:
        with TestClient(main.app) as client:
            assert client.get("/api/v1/health").json() == {"status": "ok", "database": "up"}

            empty = client.get("/api/v1/forecast").json()
            assert empty["risk_assessment"] == "high"
            assert empty["daily_forecast"] == []

            for i, v in enumerate([100, 110, 120, 130, 140, 150, 160, 170]):
                resp = client.post("/api/v1/revenue/records", json={
                    "date": (start + timedelta(days=i)).isoformat(),
                    "current_month_revenue": v,
                    "next_month_revenue": v,
                    "future_month_revenue": v,
                })
                assert resp.status_code == 200
                assert resp.json()["created"] is True

            listed = client.get("/api/v1/revenue/records", params={"limit": 3}).json()
            assert listed["count"] == 3
            assert listed["records"][-1]["current_month_revenue"] == 170.0

            body = client.get("/api/v1/forecast", params={"days": 30}).json()
            assert len(body["daily_forecast"]) == 7
            assert body["daily_forecast"][0]["trend"] == "increasing"
            assert body["risk_assessment"] == "low"

            anomalies = client.get("/api/v1/forecast/anomalies").json()
            assert anomalies == {"has_anomalies": False, "anomalies": []}

            assert client.get("/api/v1/forecast", params={"days": 0}).status_code == 422
            assert client.post("/api/v1/revenue/records", json={
                "date": start.isoformat(), "current_month_revenue": -1,
            }).status_code == 422
    finally:
        database.dispose_database()
