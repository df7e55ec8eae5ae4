"""Liveness and readiness endpoints."""

from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

router = APIRouter()

HEALTH_VERSION = "1.0.0"
SERVICE_STARTED_AT = datetime.now(timezone.utc)


def _iso_utc(ts: datetime) -> str:
    return ts.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _uptime_seconds(now: datetime) -> int:
    return max(0, int((now - SERVICE_STARTED_AT).total_seconds()))


class HealthResponse(BaseModel):
    """GET /api/health response."""

    model_config = ConfigDict(extra="forbid")
    status: Annotated[str, Field(description="Always 'ok'")]
    version: Annotated[str, Field(description="Semver MAJOR.MINOR.PATCH")]
    timestamp: Annotated[str, Field(description="ISO8601 UTC")]


class ReadyResponse(BaseModel):
    """GET /api/ready response."""

    model_config = ConfigDict(extra="forbid")
    status: Annotated[str, Field(description="Always 'ready'")]
    version: Annotated[str, Field(description="Semver MAJOR.MINOR.PATCH")]
    started_at: Annotated[str, Field(description="ISO8601 UTC when service process started")]
    uptime_seconds: Annotated[int, Field(description="Seconds service has been up")]
    github_authenticated: Annotated[bool, Field(description="Whether a GitHub token is configured")]


@router.get("/health", response_model=HealthResponse)
async def health():
    """Return API health status."""
    return HealthResponse(
        status="ok",
        version=HEALTH_VERSION,
        timestamp=_iso_utc(datetime.now(timezone.utc)),
    )


@router.get("/ready", response_model=ReadyResponse)
async def ready(request: Request):
    """Readiness probe. Returns 200 once the shared GitHub client exists."""
    client = getattr(request.app.state, "github_client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="not ready")
    now = datetime.now(timezone.utc)
    return ReadyResponse(
        status="ready",
        version=HEALTH_VERSION,
        started_at=_iso_utc(SERVICE_STARTED_AT),
        uptime_seconds=_uptime_seconds(now),
        github_authenticated=bool(getattr(client, "authenticated", False)),
    )
