"""
AeroX Dashboard - API Dependencies
==================================

FastAPI dependency injection utilities.
"""

from typing import Any, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from aerox.api.errors import APIError, ErrorCode, forbidden, unauthorized
from aerox.api.models.auth import PartialGuild, TokenPayload
from aerox.api.services.auth import DashboardSession, can_manage_guild, get_auth_service
from aerox.services.features import FeatureIndexCache


# =============================================================================
# Security
# =============================================================================

security = HTTPBearer(auto_error=False)


# =============================================================================
# Application State
# =============================================================================

def get_optional_bot(request: Request) -> Optional[Any]:
    """The attached bot, or None when the API runs standalone."""
    return getattr(request.app.state, "bot", None)


def get_bot(request: Request) -> Any:
    """The attached bot. Raises 503 when none is attached."""
    bot = get_optional_bot(request)
    if bot is None:
        raise APIError(ErrorCode.BOT_NOT_INITIALIZED)
    return bot


def get_features_cache(request: Request) -> FeatureIndexCache:
    """The features index cache created by create_app()."""
    return request.app.state.features_cache


# =============================================================================
# Authentication Dependencies
# =============================================================================

async def require_auth(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenPayload:
    """
    Require a valid token whose dashboard session is still alive.
    Raises 401 otherwise.
    """
    if credentials is None:
        raise unauthorized(ErrorCode.AUTH_MISSING_TOKEN)

    auth_service = get_auth_service()
    payload = auth_service.get_token_payload(credentials.credentials)
    if payload is None:
        raise unauthorized(ErrorCode.AUTH_INVALID_TOKEN)

    if auth_service.get_session(payload.sub) is None:
        raise unauthorized(ErrorCode.AUTH_SESSION_EXPIRED)

    request.state.user_id = payload.sub
    return payload


async def get_current_session(
    payload: TokenPayload = Depends(require_auth),
) -> DashboardSession:
    session = get_auth_service().get_session(payload.sub)
    if session is None:
        raise unauthorized(ErrorCode.AUTH_SESSION_EXPIRED)
    return session


async def require_owner(
    payload: TokenPayload = Depends(require_auth),
) -> TokenPayload:
    """Require the "owner" permission. Raises 403 otherwise."""
    if not payload.is_owner:
        raise forbidden(ErrorCode.AUTH_NOT_OWNER)
    return payload


async def require_guild_access(
    guild_id: str,
    session: DashboardSession = Depends(get_current_session),
) -> PartialGuild:
    """
    Require MANAGE_GUILD on the path's guild_id, or bot ownership.

    Returns:
        The session's entry for the guild. Owners get a placeholder entry
        when the guild is not in their own guild list.
    """
    guild = session.find_guild(guild_id)

    if session.is_owner:
        return guild or PartialGuild(id=guild_id, name="")

    if guild is None or not can_manage_guild(guild):
        raise forbidden(ErrorCode.AUTH_NO_GUILD_ACCESS)
    return guild


__all__ = [
    "security",
    "get_bot",
    "get_optional_bot",
    "get_features_cache",
    "require_auth",
    "get_current_session",
    "require_owner",
    "require_guild_access",
]
