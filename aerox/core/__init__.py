"""
AeroX Dashboard - Core Package
==============================

Configuration and logging shared by every other package.

DESIGN:
    Core modules are singletons or global instances so state stays
    consistent across the application:
    - get_config() returns the same Config instance
    - logger is a global TreeLogger instance
"""

from .config import (
    Config,
    ConfigValidationError,
    get_config,
    is_owner,
)

from .logger import logger, TreeLogger


__all__ = [
    # Config
    "Config",
    "ConfigValidationError",
    "get_config",
    "is_owner",
    # Logger
    "logger",
    "TreeLogger",
]
