"""
AeroX Dashboard - Configuration Module
======================================

Centralized configuration management with environment variable validation.

DESIGN:
    This module provides a single source of truth for all configuration,
    loaded from environment variables at startup. Using a dataclass ensures
    type safety and one place to look for every knob.

    Key patterns:
    - Singleton pattern via get_config() ensures one Config instance
    - Validation happens once at load time, not on every access
    - Permission helpers centralize owner checks
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Set
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


# =============================================================================
# Defaults
# =============================================================================

DEFAULT_COMMANDS_DIR = Path("src") / "commands"
"""Root of the bot's command source files, relative to the working directory."""

DEFAULT_DOCS_DIR = Path("docsweb")
"""Static documentation site served under /docs."""

DEFAULT_COMMAND_EXTENSION = ".js"
"""File name suffix that marks a command source file."""

DEFAULT_DASHBOARD_URL = "http://localhost:3000"


# =============================================================================
# Configuration Dataclass
# =============================================================================

@dataclass
class Config:
    """
    Dashboard configuration loaded from environment variables.

    DESIGN:
        Nothing here is strictly required: the features index and the
        static docs work without Discord credentials. OAuth endpoints
        report themselves unconfigured when client_id/client_secret
        are missing.

    Attributes:
        client_id: Discord application client ID used for OAuth.
        client_secret: Discord application client secret.
        owner_ids: User IDs with owner access to the dashboard.
        commands_dir: Root directory scanned for command files.
        command_extension: Suffix of command source files.
        docs_dir: Directory of the static documentation site.
        dashboard_url: Where the dashboard frontend lives.
        log_webhook_url: Discord webhook for error alerts.
        timezone: IANA timezone name for log timestamps.
    """

    # -------------------------------------------------------------------------
    # Discord OAuth
    # -------------------------------------------------------------------------

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    owner_ids: Set[int] = field(default_factory=set)

    # -------------------------------------------------------------------------
    # Command Index
    # -------------------------------------------------------------------------

    commands_dir: Path = DEFAULT_COMMANDS_DIR
    command_extension: str = DEFAULT_COMMAND_EXTENSION

    # -------------------------------------------------------------------------
    # Frontend
    # -------------------------------------------------------------------------

    docs_dir: Path = DEFAULT_DOCS_DIR
    dashboard_url: str = DEFAULT_DASHBOARD_URL

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------

    log_webhook_url: Optional[str] = None
    timezone: str = "UTC"

    @property
    def oauth_enabled(self) -> bool:
        """Whether both OAuth credentials are present."""
        return bool(self.client_id and self.client_secret)

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


# =============================================================================
# Validation
# =============================================================================

class ConfigValidationError(Exception):
    """
    Raised when configuration is present but malformed.

    DESIGN:
        Custom exception type allows callers to distinguish config
        errors from other startup failures.
    """

    pass


def _parse_int_set(value: Optional[str], name: str) -> Set[int]:
    """
    Parse comma-separated string to set of integers.

    Args:
        value: Comma-separated string of integers (e.g., "123,456,789").
        name: Variable name for error messages.

    Returns:
        Set of parsed integers, empty set if input is None or empty.

    Raises:
        ConfigValidationError: If any entry is not an integer.
    """
    if not value:
        return set()
    result = set()
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            result.add(int(part))
        except ValueError:
            raise ConfigValidationError(f"Invalid integer in {name}: {part}")
    return result


def _validate_extension(value: Optional[str]) -> str:
    """Normalize the command extension so it always starts with a dot."""
    if not value:
        return DEFAULT_COMMAND_EXTENSION
    value = value.strip()
    return value if value.startswith(".") else f".{value}"


def _validate_timezone(value: Optional[str]) -> str:
    if not value:
        return "UTC"
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigValidationError(f"Unknown timezone for AEROX_TIMEZONE: {value}")
    return value


def _validate_url(value: Optional[str], name: str) -> Optional[str]:
    """
    Validate URL format for webhooks.

    Args:
        value: URL string to validate.
        name: Variable name for error messages.

    Returns:
        URL if valid, None if empty.

    Raises:
        ConfigValidationError: If the value is not an http(s) URL.
    """
    if not value:
        return None
    if not value.startswith(("https://", "http://")):
        raise ConfigValidationError(f"Invalid URL for {name}: {value}")
    return value


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config() -> Config:
    """
    Load and validate configuration from environment variables.

    Returns:
        Validated Config object with all settings.

    Raises:
        ConfigValidationError: If any variable is malformed.
    """
    return Config(
        client_id=os.getenv("DISCORD_CLIENT_ID") or None,
        client_secret=os.getenv("DISCORD_CLIENT_SECRET") or None,
        owner_ids=_parse_int_set(os.getenv("OWNER_IDS"), "OWNER_IDS"),
        commands_dir=Path(os.getenv("AEROX_COMMANDS_DIR") or DEFAULT_COMMANDS_DIR),
        command_extension=_validate_extension(os.getenv("AEROX_COMMAND_EXTENSION")),
        docs_dir=Path(os.getenv("AEROX_DOCS_DIR") or DEFAULT_DOCS_DIR),
        dashboard_url=_validate_url(
            os.getenv("DASHBOARD_URL"), "DASHBOARD_URL"
        ) or DEFAULT_DASHBOARD_URL,
        log_webhook_url=_validate_url(os.getenv("LOG_WEBHOOK_URL"), "LOG_WEBHOOK_URL"),
        timezone=_validate_timezone(os.getenv("AEROX_TIMEZONE")),
    )


# =============================================================================
# Global Config Instance
# =============================================================================

_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance, loading if needed.

    Returns:
        The global Config instance.

    Raises:
        ConfigValidationError: On first call if config is invalid.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached instance so the next get_config() reloads the environment."""
    global _config
    _config = None


def validate_and_log_config() -> None:
    """
    Validate configuration and log results at startup.

    Raises:
        ConfigValidationError: If configuration is malformed.
    """
    from aerox.core.logger import logger

    config = get_config()

    logger.tree("Configuration Validated", [
        ("Commands Dir", str(config.commands_dir)),
        ("Extension", config.command_extension),
        ("Docs Dir", str(config.docs_dir)),
        ("OAuth", "✅ Enabled" if config.oauth_enabled else "❌ Disabled"),
        ("Owners", str(len(config.owner_ids))),
        ("Timezone", config.timezone),
    ], emoji="⚙️")


# =============================================================================
# Permission Helpers
# =============================================================================

def is_owner(user_id: int) -> bool:
    """
    Check if user is a dashboard owner.

    Args:
        user_id: Discord user ID to check.

    Returns:
        True if user is in the owner list.
    """
    return user_id in get_config().owner_ids


__all__ = [
    "Config",
    "ConfigValidationError",
    "get_config",
    "load_config",
    "reset_config",
    "validate_and_log_config",
    "is_owner",
]
