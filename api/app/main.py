from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from app.models.error import ErrorDetail
from app.routers import contributors, health
from app.services import github_config
from app.services.github_client import GitHubClient

APP_VERSION = "1.0.0"
DOCS_URL = "/swagger-ui"

app = FastAPI(
    title="GitHub Contributor Ranking API",
    version=APP_VERSION,
    docs_url=DOCS_URL,
    openapi_url="/api-docs/openapi.json",
    openapi_tags=[{"name": "githubrank", "description": "Rank contributors across an organization's repositories"}],
)

# Module loggers under app.* propagate here.
logger = logging.getLogger("app")
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
logger.propagate = False
logger.setLevel(github_config.log_level())
request_logger = logging.getLogger("app.api.slow")


def _client_identity(request: Request) -> str:
    xff = request.headers.get("x-forwarded-for")
    if xff:
        return xff.split(",", 1)[0].strip()
    remote = request.client.host if request.client and request.client.host else ""
    if remote:
        return remote
    return "unknown"


def _correlation_id(request: Request) -> str:
    for key in ("x-request-id", "x-amzn-trace-id", "cf-ray"):
        value = request.headers.get(key)
        if value:
            return value
    return "none"


def _route_path(request: Request) -> str:
    route = request.scope.get("route")
    route_path = str(getattr(route, "path", "") or "") if route is not None else ""
    return route_path or request.url.path


def _apply_runtime_response_headers(response: Response, request: Request, elapsed_ms: float) -> None:
    response.headers["x-githubrank-runtime-ms"] = f"{max(0.1, elapsed_ms):.4f}"
    correlation_id = _correlation_id(request)
    if correlation_id != "none":
        response.headers["x-githubrank-request-id"] = correlation_id


def _create_github_client() -> GitHubClient:
    token = github_config.github_token()
    if token:
        logger.info("github_token_configured source=env")
    else:
        logger.error("github_token_missing hint=set GH_TOKEN for higher rate limits")
    return GitHubClient(token=token)


app.add_middleware(
    CORSMiddleware,
    allow_origins=github_config.allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# One client (connection pool + token) shared by every request.
app.state.github_client = _create_github_client()


@app.get("/", include_in_schema=False, response_class=PlainTextResponse)
async def root():
    """Point visitors at the interactive API docs."""
    return f"Githubrank: GET /org/{{org_name}}/contributors, docs at {DOCS_URL}"


app.include_router(contributors.router, tags=["githubrank"])
app.include_router(health.router, prefix="/api", tags=["health"])


@app.exception_handler(Exception)
async def unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_exception method=%s path=%s error=%s",
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content=ErrorDetail(detail="Internal server error").model_dump())


@app.on_event("shutdown")
async def _close_github_client() -> None:
    client = getattr(app.state, "github_client", None)
    if client is not None:
        await client.aclose()


@app.middleware("http")
async def log_request_runtime(request: Request, call_next):
    start = time.perf_counter()
    status_code: int | None = None
    exc_name: str | None = None
    response = None
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    except Exception as exc:
        status_code = 500
        exc_name = exc.__class__.__name__
        raise
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        if status_code is None:
            status_code = 500
        if response is not None:
            _apply_runtime_response_headers(response, request, elapsed_ms)
        if (
            elapsed_ms >= github_config.slow_request_ms_threshold()
            or github_config.env_flag("API_LOG_ALL_REQUESTS", False)
            or status_code >= 500
        ):
            request_logger.warning(
                "slow_api_request method=%s path=%s raw_path=%s status=%s elapsed_ms=%.2f correlation=%s client=%s exception=%s",
                request.method,
                _route_path(request),
                request.url.path,
                status_code,
                elapsed_ms,
                _correlation_id(request),
                _client_identity(request),
                exc_name or "none",
            )
