"""
Command Metadata Extractor
==========================

Heuristic field extraction from command source text.

DESIGN:
    This is a tolerant text scan, not a language parser. Every function
    takes the raw file text and returns a value or None, and none of them
    raise for unexpected input. Only the first SCAN_LIMIT characters are
    searched, on the assumption that declarative metadata sits near the
    top of a command file.

    Patterns mirror the declaration style of the bot's command modules:

        name: 'play',
        description: `Play a song
            from a link or search query`,
        aliases: ['p', "pl"],
        enabledSlash: true,
        cooldown: 5,
"""

import re
from functools import lru_cache
from typing import Optional, Pattern, Tuple

from .constants import QUOTE_CHARS, SCAN_LIMIT


_QUOTE_CLASS = f"[{re.escape(QUOTE_CHARS)}]"
_ALIASES_PATTERN = re.compile(r"aliases\s*:\s*\[(.*?)\]", re.DOTALL)
_QUOTED_TOKEN_PATTERN = re.compile(f"{_QUOTE_CLASS}([^{re.escape(QUOTE_CHARS)}]+){_QUOTE_CLASS}")
_ENABLED_SLASH_PATTERN = re.compile(r"enabledSlash\s*:\s*(true|false)")
_WHITESPACE_RUN = re.compile(r"\s+")


# =============================================================================
# Pattern Cache
# =============================================================================

@lru_cache(maxsize=64)
def _string_field_pattern(field_name: str) -> Pattern[str]:
    # Backreference forces the closing quote to match the opening one
    return re.compile(
        rf"{re.escape(field_name)}\s*:\s*({_QUOTE_CLASS})(.*?)\1",
        re.DOTALL,
    )


@lru_cache(maxsize=64)
def _number_field_pattern(field_name: str) -> Pattern[str]:
    return re.compile(rf"{re.escape(field_name)}\s*:\s*(\d+)")


def _head(text: str) -> str:
    return text[:SCAN_LIMIT]


# =============================================================================
# Field Extraction
# =============================================================================

def extract_string_field(text: str, field_name: str) -> Optional[str]:
    """
    Extract a quoted string field such as ``name: 'ping'``.

    Internal whitespace runs (newlines included) collapse to one space
    and the result is trimmed.

    Args:
        text: Raw command source.
        field_name: Field to look for.

    Returns:
        The normalized value, or None when the field is not found.
    """
    match = _string_field_pattern(field_name).search(_head(text))
    if match is None:
        return None
    return _WHITESPACE_RUN.sub(" ", match.group(2)).strip()


def extract_aliases(text: str) -> Tuple[str, ...]:
    """
    Extract every quoted token of an ``aliases: [...]`` list, in order.

    Returns:
        The aliases, or an empty tuple when the list is absent or empty.
    """
    match = _ALIASES_PATTERN.search(_head(text))
    if match is None:
        return ()
    return tuple(_QUOTED_TOKEN_PATTERN.findall(match.group(1)))


def extract_enabled_slash(text: str) -> Optional[bool]:
    """
    Read the literal ``enabledSlash: true|false`` flag.

    Returns:
        The flag, or None when it is not declared.
    """
    match = _ENABLED_SLASH_PATTERN.search(_head(text))
    if match is None:
        return None
    return match.group(1) == "true"


def extract_number_field(text: str, field_name: str) -> Optional[int]:
    """
    Extract an unquoted non-negative integer field such as ``cooldown: 5``.

    Returns:
        The integer, or None when the field is not found.
    """
    match = _number_field_pattern(field_name).search(_head(text))
    if match is None:
        return None
    return int(match.group(1))


__all__ = [
    "extract_string_field",
    "extract_aliases",
    "extract_enabled_slash",
    "extract_number_field",
]
