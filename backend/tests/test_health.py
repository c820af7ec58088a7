"""Health endpoint tests."""

import pytest


@pytest.mark.asyncio
async def test_health_returns_ok(client):
    resp = await client.get("/api/v1/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["version"] == "0.1.0"
    assert "time" in data


@pytest.mark.asyncio
async def test_ready_reports_store_sizes(client, auth_header):
    await client.post("/api/v1/notes", json={"title": "one"}, headers=auth_header)
    resp = await client.get("/api/v1/health/ready")
    assert resp.status_code == 200
    data = resp.json()
    assert data["users"] == 1
    assert data["notes"] == 1
