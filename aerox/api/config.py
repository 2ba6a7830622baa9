"""
AeroX Dashboard - API Configuration
===================================

Centralized configuration for the FastAPI service.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from aerox.services.features.constants import FEATURES_CACHE_TTL_MS


@dataclass(frozen=True)
class APIConfig:
    """API configuration settings."""

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = False
    prefix: str = "/api"

    # CORS
    cors_origins: Tuple[str, ...] = ("*",)

    # JWT Auth
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_expiry_hours: int = 24 * 7

    # Discord OAuth
    oauth_redirect_uri: str = "http://localhost:3000/api/auth/callback"

    # Features index
    features_cache_ttl_ms: int = FEATURES_CACHE_TTL_MS

    # Request logging
    slow_request_ms: int = 1000


def _split_origins(value: Optional[str]) -> Tuple[str, ...]:
    if not value:
        return ("*",)
    return tuple(o.strip() for o in value.split(",") if o.strip()) or ("*",)


def load_api_config() -> APIConfig:
    """Load API configuration from environment."""
    return APIConfig(
        host=os.getenv("AEROX_API_HOST", "0.0.0.0"),
        port=int(os.getenv("DASHBOARD_PORT", "3000")),
        debug=os.getenv("AEROX_API_DEBUG", "false").lower() == "true",
        cors_origins=_split_origins(os.getenv("AEROX_CORS_ORIGINS")),
        jwt_secret=os.getenv("SESSION_SECRET", ""),
        jwt_expiry_hours=int(os.getenv("AEROX_JWT_EXPIRY_HOURS", str(24 * 7))),
        oauth_redirect_uri=os.getenv(
            "DASHBOARD_CALLBACK_URL", "http://localhost:3000/api/auth/callback"
        ),
        features_cache_ttl_ms=int(
            os.getenv("AEROX_FEATURES_CACHE_TTL_MS", str(FEATURES_CACHE_TTL_MS))
        ),
        slow_request_ms=int(os.getenv("AEROX_SLOW_REQUEST_MS", "1000")),
    )


# Singleton instance
_config: Optional[APIConfig] = None


def get_api_config() -> APIConfig:
    """Get the API configuration singleton."""
    global _config
    if _config is None:
        _config = load_api_config()
    return _config


def reset_api_config() -> None:
    global _config
    _config = None


__all__ = ["APIConfig", "get_api_config", "load_api_config", "reset_api_config"]
