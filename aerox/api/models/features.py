"""
AeroX Dashboard - Features API Models
=====================================

Wire format of the features index and the command catalogue.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import Field

from aerox.api.models.base import CamelModel
from aerox.services.features import (
    CatalogEntry,
    CategoryGroup,
    CommandDescriptor,
    FeatureIndex,
)


# =============================================================================
# Features Index
# =============================================================================

class CommandModel(CamelModel):
    """One command in the features index. Nulls are serialized, never omitted."""

    name: str
    description: str
    usage: Optional[str] = None
    aliases: List[str] = Field(default_factory=list)
    enabled_slash: bool = False
    category: str
    subcategory: Optional[str] = None
    path: str

    @classmethod
    def from_descriptor(cls, command: CommandDescriptor) -> "CommandModel":
        return cls(
            name=command.name,
            description=command.description,
            usage=command.usage,
            aliases=list(command.aliases),
            enabled_slash=command.enabled_slash,
            category=command.category,
            subcategory=command.subcategory,
            path=command.path,
        )


class SubcategoryModel(CamelModel):
    name: str
    commands: List[CommandModel] = Field(default_factory=list)


class CategoryModel(CamelModel):
    name: str
    commands: List[CommandModel] = Field(default_factory=list)
    subcategories: List[SubcategoryModel] = Field(default_factory=list)

    @classmethod
    def from_group(cls, group: CategoryGroup) -> "CategoryModel":
        return cls(
            name=group.name,
            commands=[CommandModel.from_descriptor(c) for c in group.commands],
            subcategories=[
                SubcategoryModel(
                    name=sub.name,
                    commands=[CommandModel.from_descriptor(c) for c in sub.commands],
                )
                for sub in group.subcategories
            ],
        )


class SummaryModel(CamelModel):
    total_commands: int = 0
    slash_enabled: int = 0
    categories: int = 0
    subcategories: int = 0


class FeatureIndexResponse(CamelModel):
    """Body of GET /api/features."""

    generated_at: datetime
    summary: SummaryModel
    categories: List[CategoryModel] = Field(default_factory=list)

    @classmethod
    def from_index(cls, index: FeatureIndex) -> "FeatureIndexResponse":
        return cls(
            generated_at=index.generated_at,
            summary=SummaryModel(
                total_commands=index.summary.total_commands,
                slash_enabled=index.summary.slash_enabled,
                categories=index.summary.categories,
                subcategories=index.summary.subcategories,
            ),
            categories=[CategoryModel.from_group(g) for g in index.categories],
        )


# =============================================================================
# Command Catalogue
# =============================================================================

class CatalogCommandModel(CamelModel):
    name: str
    description: str
    usage: str
    aliases: List[str] = Field(default_factory=list)
    enabled_slash: bool = False
    cooldown: int
    category: str
    file: str

    @classmethod
    def from_entry(cls, entry: CatalogEntry) -> "CatalogCommandModel":
        return cls(
            name=entry.name,
            description=entry.description,
            usage=entry.usage,
            aliases=list(entry.aliases),
            enabled_slash=entry.enabled_slash,
            cooldown=entry.cooldown,
            category=entry.category,
            file=entry.file,
        )


class CatalogResponse(CamelModel):
    """Body of GET /api/commands."""

    commands: List[CatalogCommandModel] = Field(default_factory=list)
    categories: Dict[str, List[CatalogCommandModel]] = Field(default_factory=dict)
    total: int = 0


__all__ = [
    "CommandModel",
    "SubcategoryModel",
    "CategoryModel",
    "SummaryModel",
    "FeatureIndexResponse",
    "CatalogCommandModel",
    "CatalogResponse",
]
