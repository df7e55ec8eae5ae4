"""Environment-driven settings for the GitHub transport and the ranking fan-out."""

from __future__ import annotations

import os
from typing import Optional

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT_SECONDS = 20.0
# GitHub caps per_page at 100.
PER_PAGE_MAX = 100


def github_token() -> Optional[str]:
    token = os.getenv("GH_TOKEN")
    if not token:
        token = os.getenv("GITHUB_TOKEN")
    if token:
        token = token.strip() or None
    return token


def github_api_url() -> str:
    raw = (os.getenv("GITHUB_API_URL") or "").strip()
    return (raw or DEFAULT_API_URL).rstrip("/")


def github_timeout_seconds() -> float:
    raw = os.getenv("GITHUB_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS)).strip()
    try:
        return max(1.0, float(raw))
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS


def contributor_fetch_concurrency() -> Optional[int]:
    """Cap on in-flight contributor listings; None means one task per repository."""
    raw = (os.getenv("GITHUB_CONTRIBUTOR_CONCURRENCY") or "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name, "1" if default else "").strip().lower()
    return raw in {"1", "true", "yes", "on"}


def slow_request_ms_threshold() -> float:
    raw = os.getenv("API_SLOW_REQUEST_MS", "1500").strip()
    try:
        return max(25.0, float(raw))
    except ValueError:
        return 1500.0


def allowed_origins() -> list[str]:
    raw = os.getenv("ALLOWED_ORIGINS", "http://localhost:3000")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    raw = (os.getenv("LOG_LEVEL") or "").strip().upper()
    return raw if raw in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else "INFO"
