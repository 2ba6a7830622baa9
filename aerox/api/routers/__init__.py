"""
AeroX Dashboard - API Routers
=============================

Route handlers for the API.
"""

from .health import router as health_router
from .features import router as features_router
from .commands import router as commands_router
from .stats import router as stats_router
from .auth import router as auth_router
from .guilds import router as guilds_router

__all__ = [
    "health_router",
    "features_router",
    "commands_router",
    "stats_router",
    "auth_router",
    "guilds_router",
]
