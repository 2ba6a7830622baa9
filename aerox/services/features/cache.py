"""
Features Index Cache
====================

Single-slot TTL cache in front of build_index().

DESIGN:
    One slot holding (index, built_at). It is replaced wholesale on
    rebuild and never mutated, so a reader always sees a complete index.
    There is no lock: two requests that both find the slot stale will
    both rebuild and the last write wins. Both results come from the same
    filesystem state, so that only costs a redundant scan.

    The cache is an ordinary object owned by whoever wires up request
    handling (see create_app) so tests can drive it with a fake clock.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Optional

from .constants import FEATURES_CACHE_TTL
from .index_builder import PathLike, build_index, utc_now
from .models import FeatureIndex


Builder = Callable[[Path], FeatureIndex]


@dataclass(frozen=True)
class CacheSlot:
    index: FeatureIndex
    built_at: datetime


class FeatureIndexCache:
    """
    Serves a FeatureIndex, rebuilding only when stale or forced.

    Attributes:
        commands_root: Directory passed to the builder.
        ttl: Age after which the cached index is rebuilt on next access.
    """

    def __init__(
        self,
        commands_root: PathLike,
        ttl: timedelta = FEATURES_CACHE_TTL,
        builder: Optional[Builder] = None,
        clock: Callable[[], datetime] = utc_now,
        extension: str = ".js",
    ) -> None:
        self.commands_root = Path(commands_root)
        self.ttl = ttl
        self._builder = builder or (lambda root: build_index(root, extension=extension))
        self._clock = clock
        self._slot: Optional[CacheSlot] = None

    @property
    def built_at(self) -> Optional[datetime]:
        return self._slot.built_at if self._slot else None

    @property
    def is_stale(self) -> bool:
        """True when the next get_index() call would rebuild."""
        if self._slot is None:
            return True
        return self._clock() - self._slot.built_at > self.ttl

    def get_index(self, force_refresh: bool = False) -> FeatureIndex:
        """
        Return the cached index, rebuilding it first if needed.

        Args:
            force_refresh: Rebuild even if the cached index is fresh.
        """
        if force_refresh or self.is_stale:
            index = self._builder(self.commands_root)
            self._slot = CacheSlot(index=index, built_at=self._clock())
        return self._slot.index

    def invalidate(self) -> None:
        """Empty the slot so the next access rebuilds."""
        self._slot = None


__all__ = ["CacheSlot", "FeatureIndexCache"]
