"""Work planning: split scanned items into cache hits and pending work."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field

from mediagallery.core.models import MediaItem
from mediagallery.core.pipeline.cache import CacheStore

logger = logging.getLogger(__name__)


@dataclass
class WorkPlan:
    """Final item set plus the subset that still needs computing.

    ``pending`` holds the same objects as ``items``, so workers filling a
    pending item update the final set in place.
    """

    items: list[MediaItem] = field(default_factory=list)
    pending: list[MediaItem] = field(default_factory=list)
    reused: int = 0

    @property
    def total(self) -> int:
        return len(self.items)


def plan_work(scanned: list[MediaItem], cache: CacheStore) -> WorkPlan:
    """Merge scan results with the cache.

    A cache hit replaces the scanned item with a copy of the cached one,
    carrying its creation time and preview verbatim.
    """
    plan = WorkPlan()
    for item in scanned:
        cached = cache.lookup(item)
        if cached is not None:
            plan.items.append(dataclasses.replace(cached))
            plan.reused += 1
            continue
        plan.items.append(item)
        plan.pending.append(item)

    logger.info(
        "processing %d items (%d cached, %d pending)",
        plan.total,
        plan.reused,
        len(plan.pending),
    )
    return plan
