"""Tests for the health and readiness endpoints.

  - GET /api/health returns 200 with exactly status, version, timestamp
  - timestamp is ISO8601 UTC, version is MAJOR.MINOR.PATCH
  - GET /api/ready reports readiness once the shared GitHub client exists
"""

import re
from datetime import datetime

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.main import app


@pytest_asyncio.fixture
async def client():
    """ASGI client for testing."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
async def test_health_api_contract(client: AsyncClient):
    """200, exact keys, status ok, semver, ISO8601 UTC."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.headers.get("content-type", "").startswith("application/json")
    data = response.json()
    assert set(data.keys()) == {"status", "version", "timestamp"}
    assert data["status"] == "ok"
    assert re.fullmatch(r"\d+\.\d+\.\d+", data["version"]), f"version must match MAJOR.MINOR.PATCH: {data['version']}"
    ts = data["timestamp"]
    assert ts.endswith("Z"), "timestamp must end with Z"
    dt = datetime.fromisoformat(ts.replace("Z", "+00:00"))
    assert dt.tzinfo is not None


@pytest.mark.asyncio
async def test_ready_returns_200(client: AsyncClient):
    response = await client.get("/api/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["github_authenticated"] in (True, False)
    assert data["uptime_seconds"] >= 0


@pytest.mark.asyncio
async def test_ready_returns_503_without_client(client: AsyncClient, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(app.state, "github_client", None)
    response = await client.get("/api/ready")
    assert response.status_code == 503
    assert response.json() == {"detail": "not ready"}


@pytest.mark.asyncio
async def test_cors_allows_configured_origin(client: AsyncClient):
    response = await client.get("/api/health", headers={"Origin": "http://localhost:3000"})
    assert response.status_code == 200
    assert response.headers.get("access-control-allow-origin") == "http://localhost:3000"
