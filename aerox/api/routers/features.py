"""
AeroX Dashboard - Features Router
=================================

Documentation index of every command the bot ships.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from aerox.core.logger import logger
from aerox.api.dependencies import get_features_cache, require_owner
from aerox.api.models.auth import TokenPayload
from aerox.api.models.base import APIResponse, ErrorResponse
from aerox.api.models.features import FeatureIndexResponse
from aerox.services.features import FeatureIndexCache


router = APIRouter(prefix="/features", tags=["Features"])


@router.get("", response_model=FeatureIndexResponse)
async def get_features(
    refresh: Optional[str] = Query(None, description='"1" bypasses the cache'),
    cache: FeatureIndexCache = Depends(get_features_cache),
) -> FeatureIndexResponse:
    """
    Get the features index.

    Served from a cache that is rebuilt when older than its TTL.
    Only refresh=1 forces a rebuild; any other value is ignored.
    """
    force = refresh == "1"
    index = cache.get_index(force_refresh=force)

    if force:
        logger.tree_nested("Features Index Refreshed", [
            (category.name, [
                ("Commands", str(category.total_commands)),
                ("Subcategories", str(len(category.subcategories))),
            ])
            for category in index.categories
        ], emoji="🔄")

    return FeatureIndexResponse.from_index(index)


@router.delete(
    "/cache",
    response_model=APIResponse[dict],
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def invalidate_features(
    payload: TokenPayload = Depends(require_owner),
    cache: FeatureIndexCache = Depends(get_features_cache),
) -> APIResponse[dict]:
    """Drop the cached index so the next read rescans. Owner only."""
    cache.invalidate()
    logger.info("Features Cache Invalidated", [("User ID", str(payload.sub))])
    return APIResponse(success=True, message="Features cache invalidated", data={})


__all__ = ["router"]
