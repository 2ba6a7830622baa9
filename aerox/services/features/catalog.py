"""
Command Catalogue
=================

Flat command listing used by the dashboard's commands page.

DESIGN:
    Looser than the features index: only ``name`` is required, and
    missing fields fall back to display defaults instead of excluding
    the command. ``category`` here is the full directory path below the
    commands root, and the grouping key is its first segment.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .constants import DEFAULT_COOLDOWN, DEFAULT_DESCRIPTION, UNCATEGORIZED
from .extractor import (
    extract_aliases,
    extract_enabled_slash,
    extract_number_field,
    extract_string_field,
)
from .index_builder import PathLike, collation_key, read_source, scan_command_files


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    description: str
    usage: str
    category: str
    file: str
    aliases: Tuple[str, ...] = ()
    enabled_slash: bool = False
    cooldown: int = DEFAULT_COOLDOWN

    @property
    def top_category(self) -> str:
        return self.category.split("/")[0]


def catalog_entry(text: str, relative_parts: List[str]) -> Optional[CatalogEntry]:
    """Build a catalogue entry from source text, or None when there is no name."""
    name = extract_string_field(text, "name")
    if not name:
        return None

    return CatalogEntry(
        name=name,
        description=extract_string_field(text, "description") or DEFAULT_DESCRIPTION,
        usage=extract_string_field(text, "usage") or name,
        category="/".join(relative_parts[:-1]) or UNCATEGORIZED,
        file=relative_parts[-1],
        aliases=extract_aliases(text),
        enabled_slash=extract_enabled_slash(text) is True,
        cooldown=extract_number_field(text, "cooldown") or DEFAULT_COOLDOWN,
    )


def build_catalog(commands_root: PathLike, extension: str = ".js") -> List[CatalogEntry]:
    """
    List every named command under commands_root.

    Returns:
        Entries ordered by category path then name. Empty if the root is missing.
    """
    root = Path(commands_root)
    if not root.is_dir():
        return []

    entries = []
    for path in scan_command_files(root, extension):
        try:
            text = read_source(path)
        except OSError:
            continue
        entry = catalog_entry(text, list(path.relative_to(root).parts))
        if entry is not None:
            entries.append(entry)

    return sorted(
        entries,
        key=lambda e: (collation_key(e.category), collation_key(e.name), e.file),
    )


def group_by_top_category(entries: List[CatalogEntry]) -> Dict[str, List[CatalogEntry]]:
    groups: Dict[str, List[CatalogEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.top_category, []).append(entry)
    return groups


def count_command_files(commands_root: PathLike, extension: str = ".js") -> int:
    """Count command files without reading them."""
    root = Path(commands_root)
    if not root.is_dir():
        return 0
    return sum(1 for _ in scan_command_files(root, extension))


__all__ = [
    "CatalogEntry",
    "catalog_entry",
    "build_catalog",
    "group_by_top_category",
    "count_command_files",
]
