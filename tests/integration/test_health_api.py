"""Health and root endpoints."""

import pytest
from fastapi.testclient import TestClient


@pytest.mark.asyncio
async def test_health(async_client):
    resp = await async_client.get("/api/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "healthy"
    assert body["checks"]["database"]["connected"] is True


@pytest.mark.asyncio
async def test_database_health(async_client):
    resp = await async_client.get("/api/health/database")
    assert resp.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_root(async_client):
    resp = await async_client.get("/")
    assert resp.json()["message"] == "Notekeeper API"


@pytest.mark.asyncio
async def test_cors_preflight(async_client):
    resp = await async_client.options(
        "/api/notes",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "GET"},
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://localhost:3000"


@pytest.mark.asyncio
async def test_openapi_documents_error_envelope(async_client):
    schema = (await async_client.get("/openapi.json")).json()
    assert "ErrorResponse" in schema["components"]["schemas"]
    assert "401" in schema["paths"]["/api/notes"]["get"]["responses"]


def test_lifespan_starts_and_stops(test_app):
    with TestClient(test_app) as client:
        assert client.get("/").status_code == 200
