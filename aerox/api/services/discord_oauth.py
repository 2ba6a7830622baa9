"""
AeroX Dashboard - Discord OAuth Client
======================================

Thin aiohttp client for the OAuth2 code flow against Discord's REST API.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import aiohttp

from aerox.core.logger import logger


# =============================================================================
# Constants
# =============================================================================

DISCORD_API = "https://discord.com/api/v10"
AUTHORIZE_URL = "https://discord.com/oauth2/authorize"
OAUTH_SCOPES = "identify guilds"

REQUEST_TIMEOUT = aiohttp.ClientTimeout(total=10)


class OAuthError(Exception):
    """Discord rejected a token exchange or an API call made with the user token."""

    def __init__(self, reason: str, status: Optional[int] = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.status = status


# =============================================================================
# Client
# =============================================================================

class DiscordOAuthClient:
    """
    Performs the three HTTP calls of the dashboard login.

    1. exchange_code(): authorization code -> user access token
    2. fetch_user(): GET /users/@me
    3. fetch_guilds(): GET /users/@me/guilds
    """

    def __init__(self, client_id: str, client_secret: str, redirect_uri: str) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri

    def authorize_url(self, state: str) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": OAUTH_SCOPES,
            "state": state,
        }
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> Dict[str, Any]:
        """
        Exchange an authorization code for tokens.

        Raises:
            OAuthError: If Discord rejects the code or returns no access token.
        """
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self.redirect_uri,
        }

        async with aiohttp.ClientSession(timeout=REQUEST_TIMEOUT) as session:
            async with session.post(f"{DISCORD_API}/oauth2/token", data=data) as resp:
                tokens = await resp.json(content_type=None)
                if resp.status != 200:
                    reason = tokens.get("error", "unknown") if isinstance(tokens, dict) else "unknown"
                    logger.warning("OAuth Token Exchange Failed", [
                        ("Status", str(resp.status)),
                        ("Reason", reason),
                    ])
                    raise OAuthError(reason, resp.status)

        if not isinstance(tokens, dict) or not tokens.get("access_token"):
            raise OAuthError("no_access_token")
        return tokens

    async def _get(self, path: str, access_token: str) -> Any:
        headers = {"Authorization": f"Bearer {access_token}"}
        async with aiohttp.ClientSession(timeout=REQUEST_TIMEOUT) as session:
            async with session.get(f"{DISCORD_API}{path}", headers=headers) as resp:
                if resp.status != 200:
                    raise OAuthError(f"GET {path} returned {resp.status}", resp.status)
                return await resp.json()

    async def fetch_user(self, access_token: str) -> Dict[str, Any]:
        return await self._get("/users/@me", access_token)

    async def fetch_guilds(self, access_token: str) -> List[Dict[str, Any]]:
        return await self._get("/users/@me/guilds", access_token)


__all__ = [
    "DISCORD_API",
    "OAuthError",
    "DiscordOAuthClient",
]
