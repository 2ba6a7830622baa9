"""
AeroX Dashboard - Commands Router
=================================

Flat command catalogue for the dashboard's commands page.
"""

from fastapi import APIRouter

from aerox.core.config import get_config
from aerox.core.logger import logger
from aerox.api.models.features import CatalogCommandModel, CatalogResponse
from aerox.services.features import build_catalog, group_by_top_category


router = APIRouter(prefix="/commands", tags=["Commands"])


@router.get("", response_model=CatalogResponse)
async def list_commands() -> CatalogResponse:
    """
    List every named command file.

    Read fresh on each request; the features index is the cached view.
    """
    config = get_config()
    entries = build_catalog(config.commands_dir, config.command_extension)

    grouped = group_by_top_category(entries)

    logger.debug("Command Catalogue Built", [
        ("Commands", str(len(entries))),
        ("Categories", str(len(grouped))),
    ])

    return CatalogResponse(
        commands=[CatalogCommandModel.from_entry(e) for e in entries],
        categories={
            name: [CatalogCommandModel.from_entry(e) for e in group]
            for name, group in grouped.items()
        },
        total=len(entries),
    )


__all__ = ["router"]
