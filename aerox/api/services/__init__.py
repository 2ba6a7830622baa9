"""
AeroX Dashboard - API Services
==============================

Stateful services used by the route handlers.
"""

from .auth import (
    AuthService,
    DashboardSession,
    can_manage_guild,
    get_auth_service,
    reset_auth_service,
)
from .discord_oauth import DiscordOAuthClient, OAuthError

__all__ = [
    "AuthService",
    "DashboardSession",
    "can_manage_guild",
    "get_auth_service",
    "reset_auth_service",
    "DiscordOAuthClient",
    "OAuthError",
]
