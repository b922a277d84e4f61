"""Dev Radar HTTP service.

Exposes profile analysis and activity insights over FastAPI, plus health
and Prometheus endpoints. ``run()`` starts uvicorn with the configured
host and port.
"""

from __future__ import annotations

import time
import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from app.config import Settings, get_settings
from app.exceptions import DevRadarError
from app.logging_config import get_logger, setup_logging
from app.metrics import APP_INFO, HTTP_REQUEST_DURATION, HTTP_REQUESTS_TOTAL
from services.platforms.registry import ADAPTERS

logger = get_logger(__name__)

UNMATCHED_ROUTE = "unmatched"


def upstream_endpoints(settings: Settings) -> dict[str, str]:
    """Base URL each networked platform adapter talks to."""
    return {
        "github": settings.github_api_base,
        "leetcode": settings.leetcode_graphql_url,
        "codeforces": settings.codeforces_api_base,
        "gfg": settings.gfg_stats_api_url,
    }


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings = get_settings()
    setup_logging()
    APP_INFO.info(
        {
            "version": settings.app_version,
            "environment": settings.environment.value,
            "adapters": ",".join(ADAPTERS),
        }
    )
    logger.info(
        "dev_radar_started",
        adapters=sorted(ADAPTERS),
        upstreams=upstream_endpoints(settings),
        github_authenticated=settings.github_token is not None,
        http_timeout=settings.http_timeout,
    )
    yield
    logger.info("dev_radar_stopped")


def _route_label(request: Request) -> str:
    # Route templates keep metric label cardinality bounded.
    route = request.scope.get("route")
    return getattr(route, "path", UNMATCHED_ROUTE)


def _install_request_tracking(app: FastAPI) -> None:
    @app.middleware("http")
    async def track_request(request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        started = time.perf_counter()
        response: Response = await call_next(request)
        elapsed = time.perf_counter() - started

        route = _route_label(request)
        HTTP_REQUESTS_TOTAL.labels(
            method=request.method, endpoint=route, status_code=response.status_code
        ).inc()
        HTTP_REQUEST_DURATION.labels(method=request.method, endpoint=route).observe(elapsed)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{elapsed:.4f}"
        return response


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DevRadarError)
    async def handle_devradar_error(_request: Request, exc: DevRadarError) -> JSONResponse:
        logger.warning("request_rejected", code=exc.code, status_code=exc.status_code)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        logger.exception("request_failed", error_type=type(exc).__name__)
        return JSONResponse(
            status_code=500,
            content=DevRadarError("INTERNAL_ERROR", "An unexpected error occurred.").to_dict(),
        )


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Aggregates public coding-platform profiles into a skill analysis.",
        debug=settings.debug,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=settings.cors_allow_methods,
        allow_headers=["Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID", "X-Response-Time"],
    )
    _install_request_tracking(app)
    _install_error_handlers(app)

    if settings.metrics_enabled:
        app.mount("/metrics", make_asgi_app())

    from api.v1.router import api_v1_router

    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/health", tags=["System"])
    async def health() -> dict:
        return {
            "status": "healthy",
            "version": settings.app_version,
            "environment": settings.environment.value,
            "platforms": list(ADAPTERS),
            "githubAuthenticated": settings.github_token is not None,
        }

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn using the configured bind address."""
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_config=None,
    )
