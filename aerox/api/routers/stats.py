"""
AeroX Dashboard - Stats Router
==============================

Bot status for the dashboard landing page.
"""

import math
import os
import time
from typing import Any, Optional

import psutil
from fastapi import APIRouter, Depends

from aerox.core.config import get_config
from aerox.api.dependencies import get_optional_bot
from aerox.api.models.stats import BotStats, MemoryUsage
from aerox.services.features import count_command_files


router = APIRouter(prefix="/stats", tags=["Stats"])


def _process_memory() -> MemoryUsage:
    info = psutil.Process(os.getpid()).memory_info()
    return MemoryUsage(rss=info.rss, vms=info.vms)


def _process_uptime_ms() -> int:
    created = psutil.Process(os.getpid()).create_time()
    return int((time.time() - created) * 1000)


def _latency_ms(bot: Any) -> Optional[int]:
    latency = getattr(bot, "latency", None)
    if latency is None or not math.isfinite(latency):
        return None
    return round(latency * 1000)


def collect_stats(bot: Optional[Any]) -> BotStats:
    """Snapshot of bot and process state. Offline shape when the bot is not ready."""
    config = get_config()
    commands = count_command_files(config.commands_dir, config.command_extension)

    if bot is None or not bot.is_ready():
        return BotStats(status="offline", commands=commands, memory=_process_memory())

    guilds = list(bot.guilds)
    return BotStats(
        status="online",
        guilds=len(guilds),
        users=sum(g.member_count or 0 for g in guilds),
        channels=sum(len(g.channels) for g in guilds),
        commands=commands,
        uptime=_process_uptime_ms(),
        ping=_latency_ms(bot),
        shards=bot.shard_count or 1,
        memory=_process_memory(),
    )


@router.get("", response_model=BotStats)
async def get_stats(bot: Optional[Any] = Depends(get_optional_bot)) -> BotStats:
    """Get bot status, counts, and process memory."""
    return collect_stats(bot)


__all__ = ["router", "collect_stats"]
