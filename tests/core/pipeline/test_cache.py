"""Tests for the preview cache and work planning."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from mediagallery.core.models import (
    GalleryConfig,
    GalleryPage,
    MediaItem,
    MediaMetadata,
    Preview,
    SortMode,
)
from mediagallery.core.pipeline.cache import CacheStore
from mediagallery.core.pipeline.planner import plan_work

MODIFIED = datetime(2021, 7, 4, 10, 0, 0, tzinfo=timezone.utc)
CREATED = datetime(2019, 1, 1, tzinfo=timezone.utc)


def _item(
    path: str,
    *,
    size: int = 100,
    modified: datetime = MODIFIED,
    height: int = 160,
    created: datetime | None = None,
    preview: Preview | None = None,
) -> MediaItem:
    return MediaItem(
        path=path,
        metadata=MediaMetadata(
            file_size=size,
            file_modify=modified,
            media_create=created,
            preview_height=height,
        ),
        preview=preview,
    )


@pytest.fixture
def previous_page() -> GalleryPage:
    preview = Preview("image/jpeg", "AAAA")
    return GalleryPage(
        config=GalleryConfig(height=160, sort_by=SortMode.CREATION_DATE),
        items=[
            _item("photos/a.jpg", created=CREATED, preview=preview),
            _item("photos/b.jpg", preview=preview),
        ],
    )


class TestCacheStore:
    def test_empty_when_no_previous_gallery(self) -> None:
        cache = CacheStore.from_page(None)

        assert len(cache) == 0
        assert cache.get("photos/a.jpg") is None

    def test_indexes_previous_items_by_path(self, previous_page: GalleryPage) -> None:
        cache = CacheStore.from_page(previous_page)

        assert len(cache) == 2
        assert "photos/a.jpg" in cache
        assert cache.get("photos/b.jpg") is previous_page.items[1]

    def test_same_requested_height_keeps_entries(self, previous_page: GalleryPage) -> None:
        assert len(CacheStore.from_page(previous_page, requested_height=160)) == 2

    def test_changed_height_discards_everything(self, previous_page: GalleryPage) -> None:
        assert len(CacheStore.from_page(previous_page, requested_height=200)) == 0

    @pytest.mark.parametrize(
        ("fresh", "reusable"),
        [
            (_item("photos/a.jpg"), True),
            (_item("photos/a.jpg", size=101), False),
            (_item("photos/a.jpg", modified=MODIFIED + timedelta(microseconds=1)), False),
            (_item("photos/a.jpg", height=80), False),
        ],
    )
    def test_is_reusable(self, fresh: MediaItem, reusable: bool) -> None:
        assert CacheStore.is_reusable(fresh, _item("photos/a.jpg")) is reusable

    def test_lookup_unknown_path(self, previous_page: GalleryPage) -> None:
        cache = CacheStore.from_page(previous_page)

        assert cache.lookup(_item("photos/new.jpg")) is None


class TestPlanWork:
    def test_cache_hit_carries_creation_time_and_preview(
        self, previous_page: GalleryPage
    ) -> None:
        cache = CacheStore.from_page(previous_page)

        plan = plan_work([_item("photos/a.jpg")], cache)

        (item,) = plan.items
        assert plan.pending == []
        assert plan.reused == 1
        assert item.metadata.media_create == CREATED
        assert item.preview == previous_page.items[0].preview
        assert item is not previous_page.items[0]

    def test_changed_file_is_pending(self, previous_page: GalleryPage) -> None:
        cache = CacheStore.from_page(previous_page)
        changed = _item("photos/b.jpg", size=999)

        plan = plan_work([_item("photos/a.jpg"), changed], cache)

        assert plan.total == 2
        assert plan.reused == 1
        assert plan.pending == [changed]
        assert plan.items[1] is changed
        assert changed.preview is None

    def test_new_file_is_pending(self) -> None:
        fresh = _item("photos/new.jpg")

        plan = plan_work([fresh], CacheStore.empty())

        assert plan.items == [fresh]
        assert plan.pending == [fresh]
        assert plan.reused == 0

    def test_removed_files_are_dropped(self, previous_page: GalleryPage) -> None:
        plan = plan_work([_item("photos/a.jpg")], CacheStore.from_page(previous_page))

        assert [item.path for item in plan.items] == ["photos/a.jpg"]
