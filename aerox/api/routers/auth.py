"""
AeroX Dashboard - Auth Router
=============================

Discord OAuth login and dashboard session endpoints.
"""

from typing import Optional, Union
from urllib.parse import urlencode

import aiohttp
from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import ValidationError

from aerox.core.config import get_config
from aerox.core.logger import logger
from aerox.api.config import get_api_config
from aerox.api.dependencies import get_current_session, require_auth, security
from aerox.api.errors import APIError, ErrorCode
from aerox.api.models.auth import (
    AuthTokenResponse,
    CurrentUserResponse,
    DiscordUser,
    PartialGuild,
    TokenPayload,
)
from aerox.api.models.base import APIResponse, ErrorResponse
from aerox.api.services.auth import DashboardSession, get_auth_service
from aerox.api.services.discord_oauth import DiscordOAuthClient, OAuthError


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)


def get_oauth_client() -> DiscordOAuthClient:
    """OAuth client built from config. Raises 503 when OAuth is not configured."""
    config = get_config()
    if not config.oauth_enabled:
        raise APIError(ErrorCode.AUTH_OAUTH_NOT_CONFIGURED)
    return DiscordOAuthClient(
        client_id=config.client_id,
        client_secret=config.client_secret,
        redirect_uri=get_api_config().oauth_redirect_uri,
    )


@router.get("/login")
async def login(
    redirect: Optional[str] = Query(None, description='"1" returns the token to the dashboard URL'),
    client: DiscordOAuthClient = Depends(get_oauth_client),
) -> RedirectResponse:
    """Redirect to Discord's authorize page."""
    state = get_auth_service().create_state(redirect=redirect == "1")
    return RedirectResponse(client.authorize_url(state))


@router.get("/callback", response_model=AuthTokenResponse)
async def callback(
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    client: DiscordOAuthClient = Depends(get_oauth_client),
) -> Union[AuthTokenResponse, RedirectResponse]:
    """
    OAuth redirect target.

    Exchanges the code, loads the user and their guilds, and issues a
    dashboard token.
    """
    auth_service = get_auth_service()

    redirect = auth_service.consume_state(state)
    if redirect is None:
        raise APIError(ErrorCode.AUTH_INVALID_STATE)

    if error or not code:
        raise APIError(ErrorCode.AUTH_OAUTH_FAILED, details={"reason": error or "missing_code"})

    try:
        tokens = await client.exchange_code(code)
    except OAuthError as e:
        raise APIError(ErrorCode.AUTH_OAUTH_FAILED, details={"reason": e.reason})
    except aiohttp.ClientError as e:
        logger.error("OAuth Token Exchange Error", [
            ("Error Type", type(e).__name__),
            ("Error", str(e)[:100]),
        ])
        raise APIError(ErrorCode.SERVER_DISCORD_ERROR)

    access_token = tokens["access_token"]
    try:
        user = DiscordUser.model_validate(await client.fetch_user(access_token))
        guilds = [
            PartialGuild.model_validate(g)
            for g in await client.fetch_guilds(access_token)
        ]
    except (OAuthError, aiohttp.ClientError, ValidationError) as e:
        logger.error("Discord Profile Fetch Failed", [
            ("Error Type", type(e).__name__),
            ("Error", str(e)[:100]),
        ])
        raise APIError(ErrorCode.SERVER_DISCORD_ERROR)

    token, expires_at = auth_service.login(
        user,
        guilds,
        discord_access_token=access_token,
        discord_refresh_token=tokens.get("refresh_token"),
    )

    if redirect:
        fragment = urlencode({
            "access_token": token,
            "expires_at": expires_at.isoformat(),
        })
        return RedirectResponse(f"{get_config().dashboard_url.rstrip('/')}/#{fragment}")

    return AuthTokenResponse(access_token=token, expires_at=expires_at)


@router.get("/me", response_model=CurrentUserResponse)
async def me(
    session: DashboardSession = Depends(get_current_session),
) -> CurrentUserResponse:
    """The logged-in user, their guilds, and whether they own the bot."""
    return CurrentUserResponse(
        user=session.user,
        guilds=session.guilds,
        is_owner=session.is_owner,
    )


@router.post("/logout", response_model=APIResponse[dict])
async def logout(
    _: TokenPayload = Depends(require_auth),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> APIResponse[dict]:
    """Revoke the current token and drop the session."""
    get_auth_service().logout(credentials.credentials)
    return APIResponse(success=True, message="Logged out", data={})


__all__ = ["router", "get_oauth_client"]
