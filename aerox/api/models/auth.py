"""
AeroX Dashboard - Auth API Models
=================================

Authentication request/response models.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from aerox.api.models.base import CamelModel


# =============================================================================
# Discord Payloads
# =============================================================================

class DiscordUser(BaseModel):
    """Subset of the /users/@me payload the dashboard uses."""

    id: str
    username: str
    global_name: Optional[str] = None
    avatar: Optional[str] = None


class PartialGuild(BaseModel):
    """Entry of the /users/@me/guilds payload."""

    id: str
    name: str
    icon: Optional[str] = None
    owner: bool = False
    permissions: str = "0"


# =============================================================================
# Response Models
# =============================================================================

class AuthTokenResponse(CamelModel):
    """Response containing the dashboard access token."""

    access_token: str = Field(description="JWT access token")
    token_type: str = "bearer"
    expires_at: Optional[datetime] = Field(None, description="Token expiration time")


class CurrentUserResponse(CamelModel):
    """Body of GET /api/auth/me."""

    user: DiscordUser
    guilds: List[PartialGuild] = Field(default_factory=list)
    is_owner: bool = False


# =============================================================================
# Token Models (Internal Use)
# =============================================================================

class TokenPayload(BaseModel):
    """JWT token payload."""

    sub: int = Field(description="Subject (Discord user ID)")
    exp: datetime = Field(description="Expiration time")
    iat: datetime = Field(description="Issued at time")
    type: str = Field(default="access", description="Token type")
    permissions: List[str] = Field(default_factory=list)

    @property
    def is_owner(self) -> bool:
        return "owner" in self.permissions


__all__ = [
    "DiscordUser",
    "PartialGuild",
    "AuthTokenResponse",
    "CurrentUserResponse",
    "TokenPayload",
]
