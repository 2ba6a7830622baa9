"""
AeroX Dashboard - Health Router
===============================

Health check and status endpoint.
"""

import time

from fastapi import APIRouter, Request

from aerox.core.config import get_config
from aerox.core.logger import logger
from aerox.api.models.base import HealthResponse


router = APIRouter(prefix="/health", tags=["Health"])

# Track startup time
_start_time = time.time()


def build_health(request: Request) -> HealthResponse:
    """Health payload shared by /health and /api/health."""
    cache = getattr(request.app.state, "features_cache", None)
    bot = getattr(request.app.state, "bot", None)

    return HealthResponse(
        run_id=logger.run_id,
        uptime_seconds=int(time.time() - _start_time),
        bot_attached=bot is not None,
        features_cached_at=cache.built_at if cache else None,
        features_stale=cache.is_stale if cache else True,
        dashboard=get_config().dashboard_url,
    )


@router.get("", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """
    Basic health check endpoint.

    Never rebuilds the features index; it only reports the cache age.
    """
    return build_health(request)


__all__ = ["router", "build_health"]
