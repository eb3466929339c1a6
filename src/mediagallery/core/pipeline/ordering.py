"""Presentation order of gallery items."""

from __future__ import annotations

from mediagallery.core.models import MediaItem, SortMode


def order_items(items: list[MediaItem], sort_by: SortMode) -> list[MediaItem]:
    """Return ``items`` in their final, total order.

    ``file_path`` sorts by path. ``creation_date`` sorts by effective time
    (creation time, else modification time) with the path as tie-break.
    """
    if sort_by is SortMode.CREATION_DATE:
        return sorted(items, key=lambda item: (item.effective_time, item.path))
    return sorted(items, key=lambda item: item.path)
