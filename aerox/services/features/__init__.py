"""
AeroX Dashboard - Features Index
================================

Command metadata extraction, index building, and the refresh cache
behind ``GET /api/features``.
"""

from .cache import CacheSlot, FeatureIndexCache
from .catalog import CatalogEntry, build_catalog, count_command_files, group_by_top_category
from .constants import FEATURES_CACHE_TTL, FEATURES_CACHE_TTL_MS, SCAN_LIMIT, UNCATEGORIZED
from .extractor import (
    extract_aliases,
    extract_enabled_slash,
    extract_number_field,
    extract_string_field,
)
from .index_builder import build_index, parse_command_file, scan_command_files
from .models import (
    CategoryGroup,
    CommandDescriptor,
    FeatureIndex,
    FeatureSummary,
    ParseOutcome,
    ParseResult,
    SubcategoryGroup,
)


__all__ = [
    # Cache
    "CacheSlot",
    "FeatureIndexCache",
    # Catalogue
    "CatalogEntry",
    "build_catalog",
    "count_command_files",
    "group_by_top_category",
    # Constants
    "FEATURES_CACHE_TTL",
    "FEATURES_CACHE_TTL_MS",
    "SCAN_LIMIT",
    "UNCATEGORIZED",
    # Extraction
    "extract_aliases",
    "extract_enabled_slash",
    "extract_number_field",
    "extract_string_field",
    # Building
    "build_index",
    "parse_command_file",
    "scan_command_files",
    # Models
    "CategoryGroup",
    "CommandDescriptor",
    "FeatureIndex",
    "FeatureSummary",
    "ParseOutcome",
    "ParseResult",
    "SubcategoryGroup",
]
