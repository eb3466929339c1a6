"""Preview cache backed by the previous gallery artifact.

The previous artifact's items are indexed by path. An entry may only be
reused when the file size, file modification time and preview height are
exactly the same as the freshly scanned item's.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from mediagallery.core.models import GalleryPage, MediaItem

logger = logging.getLogger(__name__)


class CacheStore:
    """Read-only lookup of previously computed items.

    The mapping is frozen after construction, so worker threads may read it
    without locking.
    """

    def __init__(self, items: Mapping[str, MediaItem] | None = None) -> None:
        self._items: Mapping[str, MediaItem] = MappingProxyType(dict(items or {}))

    @classmethod
    def empty(cls) -> CacheStore:
        return cls()

    @classmethod
    def from_page(
        cls,
        page: GalleryPage | None,
        requested_height: int | None = None,
    ) -> CacheStore:
        """Build the cache from a decoded artifact.

        Args:
            page: Previous gallery, or None when there is none.
            requested_height: Height explicitly requested for this run. If it
                differs from the previous gallery's height every entry is
                discarded.
        """
        if page is None:
            return cls.empty()

        if requested_height is not None and requested_height != page.config.height:
            logger.info(
                "discarding cached items since preview height changed: %d => %d",
                page.config.height,
                requested_height,
            )
            return cls.empty()

        return cls({item.path: item for item in page.items})

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, path: object) -> bool:
        return path in self._items

    def get(self, path: str) -> MediaItem | None:
        """Return the cached item for ``path``, or None."""
        return self._items.get(path)

    @staticmethod
    def is_reusable(fresh: MediaItem, cached: MediaItem) -> bool:
        """Whether ``cached`` is still valid for the freshly scanned item."""
        return (
            fresh.metadata.file_size == cached.metadata.file_size
            and fresh.metadata.file_modify == cached.metadata.file_modify
            and fresh.metadata.preview_height == cached.metadata.preview_height
        )

    def lookup(self, fresh: MediaItem) -> MediaItem | None:
        """Return the cached item if it can be reused for ``fresh``."""
        cached = self.get(fresh.path)
        if cached is None or not self.is_reusable(fresh, cached):
            return None
        return cached
