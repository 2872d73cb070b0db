"""Health check endpoint tests."""

import pytest


@pytest.mark.asyncio
async def test_health_check(client):
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "ttreviews-moderation"
    assert data["version"] == "1.0.0"


@pytest.mark.asyncio
async def test_readiness_reports_database_and_notifier(client):
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"] == {"database": "ok", "discord_notifications": "enabled"}


@pytest.mark.asyncio
async def test_trace_id_header(client):
    response = await client.get("/api/v1/health/live")
    assert response.headers.get("X-Trace-ID", "").startswith("trc_")
