"""
AeroX Dashboard - Guilds Router
===============================

Guilds the operator can manage, and lookups in the bot's guild cache.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends

from aerox.api.dependencies import (
    get_bot,
    get_current_session,
    get_optional_bot,
    require_guild_access,
)
from aerox.api.errors import APIError, ErrorCode
from aerox.api.models.auth import PartialGuild
from aerox.api.models.base import ErrorResponse
from aerox.api.models.guilds import (
    ChannelInfo,
    ChannelListResponse,
    GuildListResponse,
    ManageableGuild,
    RoleInfo,
    RoleListResponse,
)
from aerox.api.services.auth import DashboardSession, can_manage_guild


router = APIRouter(
    prefix="/guilds",
    tags=["Guilds"],
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)

CDN_URL = "https://cdn.discordapp.com"


def icon_url(guild: PartialGuild) -> Optional[str]:
    if not guild.icon:
        return None
    ext = "gif" if guild.icon.startswith("a_") else "png"
    return f"{CDN_URL}/icons/{guild.id}/{guild.icon}.{ext}"


def _bot_guild(bot: Any, guild_id: str) -> Any:
    try:
        guild = bot.get_guild(int(guild_id))
    except ValueError:
        guild = None
    if guild is None:
        raise APIError(ErrorCode.GUILD_NOT_FOUND)
    return guild


# =============================================================================
# Routes
# =============================================================================

@router.get("", response_model=GuildListResponse)
async def list_guilds(
    session: DashboardSession = Depends(get_current_session),
    bot: Optional[Any] = Depends(get_optional_bot),
) -> GuildListResponse:
    """List the session's guilds where the user has MANAGE_GUILD."""
    guilds = [
        ManageableGuild(
            id=g.id,
            name=g.name,
            icon=icon_url(g),
            owner=g.owner,
            permissions=g.permissions,
            bot_present=bot is not None and bot.get_guild(int(g.id)) is not None,
        )
        for g in session.guilds
        if can_manage_guild(g)
    ]
    return GuildListResponse(guilds=guilds)


@router.get("/{guild_id}/channels", response_model=ChannelListResponse)
async def list_channels(
    guild_id: str,
    _: PartialGuild = Depends(require_guild_access),
    bot: Any = Depends(get_bot),
) -> ChannelListResponse:
    """Channels of a guild from the bot's cache."""
    guild = _bot_guild(bot, guild_id)
    channels = [
        ChannelInfo(
            id=str(c.id),
            name=c.name,
            type=str(c.type),
            parent_id=str(c.category_id) if c.category_id else None,
        )
        for c in guild.channels
    ]
    return ChannelListResponse(channels=channels)


@router.get("/{guild_id}/roles", response_model=RoleListResponse)
async def list_roles(
    guild_id: str,
    _: PartialGuild = Depends(require_guild_access),
    bot: Any = Depends(get_bot),
) -> RoleListResponse:
    """Roles of a guild, highest first, without @everyone."""
    guild = _bot_guild(bot, guild_id)
    roles = sorted(
        (r for r in guild.roles if not r.is_default()),
        key=lambda r: r.position,
        reverse=True,
    )
    return RoleListResponse(roles=[
        RoleInfo(id=str(r.id), name=r.name, color=str(r.color), position=r.position)
        for r in roles
    ])


__all__ = ["router", "icon_url"]
