"""
AeroX Dashboard - API Models
============================

Pydantic request/response models.
"""

from .base import APIResponse, CamelModel, ErrorResponse, HealthResponse
from .auth import (
    AuthTokenResponse,
    CurrentUserResponse,
    DiscordUser,
    PartialGuild,
    TokenPayload,
)
from .features import (
    CatalogCommandModel,
    CatalogResponse,
    CategoryModel,
    CommandModel,
    FeatureIndexResponse,
    SubcategoryModel,
    SummaryModel,
)
from .guilds import (
    ChannelInfo,
    ChannelListResponse,
    GuildListResponse,
    ManageableGuild,
    RoleInfo,
    RoleListResponse,
)
from .stats import BotStats, MemoryUsage


__all__ = [
    # Base
    "APIResponse",
    "CamelModel",
    "ErrorResponse",
    "HealthResponse",
    # Auth
    "AuthTokenResponse",
    "CurrentUserResponse",
    "DiscordUser",
    "PartialGuild",
    "TokenPayload",
    # Features
    "CatalogCommandModel",
    "CatalogResponse",
    "CategoryModel",
    "CommandModel",
    "FeatureIndexResponse",
    "SubcategoryModel",
    "SummaryModel",
    # Guilds
    "ChannelInfo",
    "ChannelListResponse",
    "GuildListResponse",
    "ManageableGuild",
    "RoleInfo",
    "RoleListResponse",
    # Stats
    "BotStats",
    "MemoryUsage",
]
