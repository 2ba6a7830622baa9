"""
AeroX Dashboard - Stats API Models
==================================

Bot status shown on the dashboard landing page.
"""

from typing import Optional

from aerox.api.models.base import CamelModel


class MemoryUsage(CamelModel):
    rss: int = 0
    vms: int = 0


class BotStats(CamelModel):
    """Body of GET /api/stats. Counts are zero while the bot is offline."""

    status: str = "offline"
    guilds: int = 0
    users: int = 0
    channels: int = 0
    commands: int = 0
    uptime: int = 0  # milliseconds
    ping: Optional[int] = None
    shards: int = 0
    memory: Optional[MemoryUsage] = None


__all__ = ["MemoryUsage", "BotStats"]
