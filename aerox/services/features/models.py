"""
Features Index Models
=====================

Immutable records produced by the command scanner.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class CommandDescriptor:
    """One discovered command. Only built when name and description were found."""
    name: str
    description: str
    category: str
    path: str  # Relative to the commands root, always "/"-separated
    usage: Optional[str] = None
    subcategory: Optional[str] = None
    aliases: Tuple[str, ...] = ()
    enabled_slash: bool = False


@dataclass(frozen=True)
class SubcategoryGroup:
    """Commands nested two or more directories deep under a category."""
    name: str
    commands: Tuple[CommandDescriptor, ...] = ()


@dataclass(frozen=True)
class CategoryGroup:
    """Commands sharing a category, split into direct and per-subcategory lists."""
    name: str
    commands: Tuple[CommandDescriptor, ...] = ()
    subcategories: Tuple[SubcategoryGroup, ...] = ()

    @property
    def total_commands(self) -> int:
        return len(self.commands) + sum(len(s.commands) for s in self.subcategories)


@dataclass(frozen=True)
class FeatureSummary:
    total_commands: int = 0
    slash_enabled: int = 0
    categories: int = 0
    subcategories: int = 0


@dataclass(frozen=True)
class FeatureIndex:
    """The sorted, summarized command catalogue."""
    generated_at: datetime
    summary: FeatureSummary = field(default_factory=FeatureSummary)
    categories: Tuple[CategoryGroup, ...] = ()

    def iter_commands(self):
        """Yield every descriptor, direct commands before subcategory ones."""
        for category in self.categories:
            yield from category.commands
            for subcategory in category.subcategories:
                yield from subcategory.commands


class ParseOutcome(str, Enum):
    """Why a command file did or did not produce a descriptor."""

    PARSED = "parsed"
    MISSING_FIELDS = "missing_fields"  # name or description absent
    UNREADABLE = "unreadable"  # I/O failure while reading


@dataclass(frozen=True)
class ParseResult:
    outcome: ParseOutcome
    path: str
    descriptor: Optional[CommandDescriptor] = None

    @property
    def ok(self) -> bool:
        return self.outcome is ParseOutcome.PARSED


__all__ = [
    "CommandDescriptor",
    "SubcategoryGroup",
    "CategoryGroup",
    "FeatureSummary",
    "FeatureIndex",
    "ParseOutcome",
    "ParseResult",
]
