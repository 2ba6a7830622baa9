"""
Features Index Constants
========================

Limits and defaults for command metadata extraction and index caching.
"""

from datetime import timedelta


# =============================================================================
# Extraction
# =============================================================================

SCAN_LIMIT = 12_000
"""Only the first SCAN_LIMIT characters of a command file are searched."""

QUOTE_CHARS = "\"'`"
"""Quote characters accepted around string fields and alias tokens."""

UNCATEGORIZED = "uncategorized"
"""Category used when neither a field nor a directory provides one."""


# =============================================================================
# Legacy Catalogue Defaults
# =============================================================================

DEFAULT_DESCRIPTION = "No description"
DEFAULT_COOLDOWN = 3


# =============================================================================
# Cache
# =============================================================================

FEATURES_CACHE_TTL_MS = 60_000
FEATURES_CACHE_TTL = timedelta(milliseconds=FEATURES_CACHE_TTL_MS)
