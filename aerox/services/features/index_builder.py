"""
Features Index Builder
======================

Walks the commands directory and builds the sorted FeatureIndex.

DESIGN:
    Best-effort catalogue, not a verified one. A file that cannot be read
    or lacks a name/description is skipped; nothing here raises for a
    single bad file, and a missing root simply yields an empty index.

    Grouping:
        commands/<category>/<file>                  -> category, no subcategory
        commands/<category>/<a>/<b>/<file>          -> category, subcategory "a/b"
        an explicit ``category:`` field overrides the directory name
"""

import os
import time
from collections import Counter, defaultdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Tuple, Union

from aerox.core.logger import logger

from .constants import UNCATEGORIZED
from .extractor import (
    extract_aliases,
    extract_enabled_slash,
    extract_string_field,
)
from .models import (
    CategoryGroup,
    CommandDescriptor,
    FeatureIndex,
    FeatureSummary,
    ParseOutcome,
    ParseResult,
    SubcategoryGroup,
)


PathLike = Union[str, os.PathLike]
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Traversal
# =============================================================================

def scan_command_files(root: PathLike, extension: str = ".js") -> Iterator[Path]:
    """
    Yield every regular file under root whose name ends with extension.

    Depth is unbounded. Symlinks are not followed and directories that
    cannot be listed are skipped.
    """
    pending = [Path(root)]
    while pending:
        directory = pending.pop()
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    if entry.is_dir(follow_symlinks=False):
                        pending.append(Path(entry.path))
                    elif entry.is_file(follow_symlinks=False) and entry.name.endswith(extension):
                        yield Path(entry.path)
        except OSError:
            continue


def read_source(path: PathLike) -> str:
    """Read a command file as text. Undecodable bytes are replaced, OSError propagates."""
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


# =============================================================================
# Per-File Parsing
# =============================================================================

def describe_command(text: str, relative_parts: List[str]) -> Optional[CommandDescriptor]:
    """
    Build a descriptor from already-read source text.

    Args:
        text: Raw command source.
        relative_parts: Path segments relative to the commands root,
            filename last.

    Returns:
        The descriptor, or None if name or description is missing.
    """
    name = extract_string_field(text, "name")
    description = extract_string_field(text, "description")
    if not name or not description:
        return None

    category = (
        extract_string_field(text, "category")
        or (relative_parts[0] if len(relative_parts) > 1 else None)
        or UNCATEGORIZED
    )
    subcategory = "/".join(relative_parts[1:-1]) if len(relative_parts) > 2 else None

    return CommandDescriptor(
        name=name,
        description=description,
        usage=extract_string_field(text, "usage") or None,
        category=category,
        subcategory=subcategory,
        aliases=extract_aliases(text),
        enabled_slash=extract_enabled_slash(text) is True,
        path="/".join(relative_parts),
    )


def parse_command_file(path: PathLike, commands_root: PathLike) -> ParseResult:
    """Read and describe one command file, reporting why it was skipped if it was."""
    path = Path(path)
    parts = list(path.relative_to(commands_root).parts)
    relative = "/".join(parts)

    try:
        text = read_source(path)
    except OSError:
        return ParseResult(ParseOutcome.UNREADABLE, relative)

    descriptor = describe_command(text, parts)
    if descriptor is None:
        return ParseResult(ParseOutcome.MISSING_FIELDS, relative)
    return ParseResult(ParseOutcome.PARSED, relative, descriptor)


# =============================================================================
# Grouping
# =============================================================================

def collation_key(value: str) -> Tuple[str, str]:
    """
    Sort key approximating locale collation.

    Letters compare case-insensitively first; on a tie the lowercase form
    sorts before the uppercase one ("admin" < "Music", "ban" < "Ban").
    """
    return value.casefold(), value.swapcase()


def _sort_commands(commands: List[CommandDescriptor]) -> tuple:
    return tuple(sorted(commands, key=lambda c: (collation_key(c.name), c.path)))


def group_commands(commands: List[CommandDescriptor]) -> tuple:
    """Group descriptors into sorted CategoryGroups."""
    direct: Dict[str, List[CommandDescriptor]] = defaultdict(list)
    nested: Dict[str, Dict[str, List[CommandDescriptor]]] = defaultdict(lambda: defaultdict(list))

    for command in commands:
        if command.subcategory:
            nested[command.category][command.subcategory].append(command)
        else:
            direct[command.category].append(command)

    groups = []
    for category in sorted(set(direct) | set(nested), key=collation_key):
        subcategories = tuple(
            SubcategoryGroup(name=sub_name, commands=_sort_commands(sub_commands))
            for sub_name, sub_commands in sorted(
                nested.get(category, {}).items(), key=lambda item: collation_key(item[0])
            )
        )
        groups.append(CategoryGroup(
            name=category,
            commands=_sort_commands(direct.get(category, [])),
            subcategories=subcategories,
        ))
    return tuple(groups)


def summarize(commands: List[CommandDescriptor], categories: tuple) -> FeatureSummary:
    return FeatureSummary(
        total_commands=len(commands),
        slash_enabled=sum(1 for c in commands if c.enabled_slash),
        categories=len(categories),
        subcategories=sum(len(c.subcategories) for c in categories),
    )


# =============================================================================
# Build
# =============================================================================

def build_index(
    commands_root: PathLike,
    extension: str = ".js",
    clock: Clock = utc_now,
) -> FeatureIndex:
    """
    Scan commands_root and build a fresh FeatureIndex.

    Args:
        commands_root: Directory holding the command source files.
        extension: File name suffix of command files.
        clock: Returns the generation timestamp.

    Returns:
        A new, immutable FeatureIndex. Empty if the root does not exist.
    """
    root = Path(commands_root)
    if not root.is_dir():
        logger.debug("Features Index Root Missing", [("Root", str(root))])
        return FeatureIndex(generated_at=clock())

    started = time.perf_counter()
    commands: List[CommandDescriptor] = []
    outcomes: Counter = Counter()

    for path in scan_command_files(root, extension):
        result = parse_command_file(path, root)
        outcomes[result.outcome] += 1
        if result.ok:
            commands.append(result.descriptor)

    categories = group_commands(commands)
    summary = summarize(commands, categories)
    index = FeatureIndex(generated_at=clock(), summary=summary, categories=categories)

    logger.debug("Features Index Built", [
        ("Root", str(root)),
        ("Files", str(sum(outcomes.values()))),
        ("Commands", str(summary.total_commands)),
        ("Missing Fields", str(outcomes[ParseOutcome.MISSING_FIELDS])),
        ("Unreadable", str(outcomes[ParseOutcome.UNREADABLE])),
        ("Duration", f"{(time.perf_counter() - started) * 1000:.0f}ms"),
    ])

    return index


__all__ = [
    "scan_command_files",
    "read_source",
    "describe_command",
    "parse_command_file",
    "group_commands",
    "summarize",
    "build_index",
    "collation_key",
    "utc_now",
]
