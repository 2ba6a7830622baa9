"""
AeroX Dashboard - Guild API Models
==================================

Guild listing and bot-cache lookups.
"""

from typing import List, Optional

from pydantic import Field

from aerox.api.models.base import CamelModel


class ManageableGuild(CamelModel):
    """A guild the logged-in user can manage."""

    id: str
    name: str
    icon: Optional[str] = Field(None, description="CDN icon URL")
    owner: bool = False
    permissions: str = "0"
    bot_present: bool = False


class GuildListResponse(CamelModel):
    guilds: List[ManageableGuild] = Field(default_factory=list)


class ChannelInfo(CamelModel):
    id: str
    name: str
    type: str
    parent_id: Optional[str] = None


class ChannelListResponse(CamelModel):
    channels: List[ChannelInfo] = Field(default_factory=list)


class RoleInfo(CamelModel):
    id: str
    name: str
    color: str
    position: int


class RoleListResponse(CamelModel):
    roles: List[RoleInfo] = Field(default_factory=list)


__all__ = [
    "ManageableGuild",
    "GuildListResponse",
    "ChannelInfo",
    "ChannelListResponse",
    "RoleInfo",
    "RoleListResponse",
]
