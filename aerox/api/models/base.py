"""
AeroX Dashboard - Base API Models
=================================

Common response models and utilities.
"""

from datetime import datetime, timezone
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# Generic Type Variables
# =============================================================================

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Base Models
# =============================================================================

class CamelModel(BaseModel):
    """
    Base for models whose wire names are camelCase.

    Fields are declared snake_case and populated by name; responses are
    serialized by alias, which FastAPI does by default.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None
    timestamp: datetime = Field(default_factory=_utcnow)


class ErrorResponse(BaseModel):
    """Error response model."""

    success: bool = False
    error_code: str
    message: str
    details: Optional[dict[str, Any]] = None


class HealthResponse(CamelModel):
    """Health check response."""

    status: str = "ok"
    message: str = "AeroX Discord Music Bot is running"
    run_id: str
    uptime_seconds: int
    bot_attached: bool
    features_cached_at: Optional[datetime] = None
    features_stale: bool = True
    dashboard: Optional[str] = None
    timestamp: datetime = Field(default_factory=_utcnow)


__all__ = [
    "CamelModel",
    "APIResponse",
    "ErrorResponse",
    "HealthResponse",
]
