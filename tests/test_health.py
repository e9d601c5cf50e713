"""Health check and schema endpoint tests."""

import pytest

from specforge import __version__
from specforge.schemas.loader import load_schema


@pytest.mark.asyncio
async def test_health_check(client):
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "specforge-api"
    assert data["version"] == __version__


@pytest.mark.asyncio
async def test_list_schemas(client):
    response = await client.get("/api/v1/schemas")
    assert response.json() == {"schemas": ["app-spec", "spec-review"]}


@pytest.mark.asyncio
async def test_get_schema(client):
    response = await client.get("/api/v1/schemas/app-spec")
    assert response.status_code == 200
    assert response.json() == load_schema("app-spec")


@pytest.mark.asyncio
async def test_get_unknown_schema(client):
    response = await client.get("/api/v1/schemas/ticket")
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_trace_id_is_propagated(client):
    response = await client.get("/api/v1/health", headers={"X-Trace-Id": "trc_from_caller"})
    assert response.headers["X-Trace-Id"] == "trc_from_caller"
