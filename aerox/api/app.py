"""
AeroX Dashboard - FastAPI Application
=====================================

FastAPI application factory and configuration.
"""

from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles

from aerox import __version__
from aerox.core.config import get_config
from aerox.core.logger import logger
from aerox.api.config import get_api_config
from aerox.api.errors import APIError, ErrorCode, error_response
from aerox.api.middleware import LoggingMiddleware
from aerox.api.models.base import HealthResponse
from aerox.api.routers import (
    auth_router,
    commands_router,
    features_router,
    guilds_router,
    health_router,
    stats_router,
)
from aerox.api.routers.health import build_health
from aerox.services.features import FeatureIndexCache


# =============================================================================
# OpenAPI Documentation
# =============================================================================

API_DESCRIPTION = """
## AeroX Dashboard API

Backend API for the AeroX dashboard and documentation site.

### Features Index

`GET /api/features` returns every command grouped by category and
subcategory. The index is cached for a minute; pass `?refresh=1` to rebuild.

### Authentication

Guild endpoints require a bearer token obtained through Discord OAuth:

1. Open `/api/auth/login` (add `?redirect=1` to be sent back to the dashboard)
2. Use the returned access token in the `Authorization` header

```
Authorization: Bearer <access_token>
```

### Error Responses

All errors follow a consistent format:
```json
{
    "success": false,
    "error_code": "GUILD_NOT_FOUND",
    "message": "Bot is not in this guild",
    "details": null
}
```
"""

OPENAPI_TAGS = [
    {"name": "Health", "description": "Health check and status endpoints"},
    {"name": "Features", "description": "Cached documentation index of all commands"},
    {"name": "Commands", "description": "Flat command catalogue"},
    {"name": "Stats", "description": "Bot status and process stats"},
    {"name": "Auth", "description": "Authentication via Discord OAuth"},
    {"name": "Guilds", "description": "Manageable guilds, channels and roles"},
]


# =============================================================================
# Lifespan
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Handles startup and shutdown events.
    """
    cache: FeatureIndexCache = app.state.features_cache

    logger.tree("API Starting", [
        ("Version", __version__),
        ("Commands Dir", str(cache.commands_root)),
        ("Index TTL", f"{int(cache.ttl.total_seconds() * 1000)}ms"),
        ("Docs Site", "Mounted" if app.state.docs_mounted else "Not found"),
        ("Bot", "Attached" if app.state.bot is not None else "Standalone"),
    ], emoji="🚀")

    yield

    logger.tree("API Stopping", [], emoji="🛑")


# =============================================================================
# Application Factory
# =============================================================================

def create_app(
    bot: Optional[Any] = None,
    features_cache: Optional[FeatureIndexCache] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        bot: Optional Discord bot instance, exposed to handlers via app.state
        features_cache: Cache to serve /api/features from. Built from config
            when omitted.

    Returns:
        Configured FastAPI application
    """
    config = get_config()
    api_config = get_api_config()

    # /docs belongs to the static documentation site
    app = FastAPI(
        title="AeroX Dashboard API",
        description=API_DESCRIPTION,
        version=__version__,
        docs_url=f"{api_config.prefix}/docs" if api_config.debug else None,
        redoc_url=f"{api_config.prefix}/redoc" if api_config.debug else None,
        openapi_url=f"{api_config.prefix}/openapi.json" if api_config.debug else None,
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    # ==========================================================================
    # State
    # ==========================================================================

    app.state.bot = bot
    app.state.features_cache = features_cache or FeatureIndexCache(
        config.commands_dir,
        ttl=timedelta(milliseconds=api_config.features_cache_ttl_ms),
        extension=config.command_extension,
    )

    # ==========================================================================
    # Middleware (order matters - last added = first executed)
    # ==========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(api_config.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(LoggingMiddleware, slow_request_ms=api_config.slow_request_ms)

    # ==========================================================================
    # Exception Handlers
    # ==========================================================================

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        """Return APIError bodies flat instead of nested under "detail"."""
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.detail,
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return error_response(
            ErrorCode.VALIDATION_FAILED,
            details={"errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions with consistent error format."""
        logger.error("Unhandled API Error", [
            ("Path", str(request.url.path)[:50]),
            ("Method", request.method),
            ("Error Type", type(exc).__name__),
            ("Error", str(exc)[:100]),
        ])

        return error_response(
            ErrorCode.SERVER_ERROR,
            details={"path": str(request.url.path)} if api_config.debug else None,
        )

    # ==========================================================================
    # Routers
    # ==========================================================================

    app.include_router(health_router, prefix=api_config.prefix)
    app.include_router(features_router, prefix=api_config.prefix)
    app.include_router(commands_router, prefix=api_config.prefix)
    app.include_router(stats_router, prefix=api_config.prefix)
    app.include_router(auth_router, prefix=api_config.prefix)
    app.include_router(guilds_router, prefix=api_config.prefix)

    # Root health check (for load balancers)
    @app.get("/health", response_model=HealthResponse, include_in_schema=False)
    async def root_health(request: Request) -> HealthResponse:
        return build_health(request)

    @app.get("/", include_in_schema=False)
    async def root() -> RedirectResponse:
        return RedirectResponse(config.dashboard_url)

    # ==========================================================================
    # Documentation Site
    # ==========================================================================

    app.state.docs_mounted = config.docs_dir.is_dir()
    if app.state.docs_mounted:
        app.mount("/docs", StaticFiles(directory=config.docs_dir, html=True), name="docs")

    return app


# =============================================================================
# Module-level app for uvicorn
# =============================================================================

# This allows running with: uvicorn aerox.api.app:app
app = create_app()


__all__ = ["create_app", "app"]
