"""Tests for concurrent recomputation of pending items."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from mediagallery.core.models import MediaItem, MediaMetadata, Orientation, Preview, SortMode
from mediagallery.core.pipeline.executor import execute_pending, resolve_worker_count
from mediagallery.core.pipeline.ordering import order_items

MODIFIED = datetime(2021, 7, 4, 10, 0, 0, tzinfo=timezone.utc)


def _pending(*names: str) -> list[MediaItem]:
    return [
        MediaItem(
            path=f"photos/{name}",
            metadata=MediaMetadata(file_size=1, file_modify=MODIFIED, preview_height=160),
        )
        for name in names
    ]


class TestResolveWorkerCount:
    @pytest.mark.parametrize("limit", [None, 0, -3])
    def test_non_positive_means_cpu_count(self, limit: int | None, mocker) -> None:
        mocker.patch("mediagallery.core.pipeline.executor.os.cpu_count", return_value=6)

        assert resolve_worker_count(limit) == 6

    def test_explicit_limit(self) -> None:
        assert resolve_worker_count(3) == 3

    def test_unknown_cpu_count_falls_back_to_one(self, mocker) -> None:
        mocker.patch("mediagallery.core.pipeline.executor.os.cpu_count", return_value=None)

        assert resolve_worker_count(0) == 1


class TestExecutePending:
    def test_every_item_is_processed_once(
        self, temp_dir: Path, fake_extractor, fake_producer
    ) -> None:
        items = _pending("a.jpg", "b.png", "c.gif", "d.mp4", "e.webm")

        report = execute_pending(items, temp_dir, 160, fake_extractor, fake_producer, max_workers=3)

        assert report.processed == 5
        assert report.preview_failures == 0
        assert sorted(fake_extractor.calls) == ["a.jpg", "b.png", "c.gif", "d.mp4", "e.webm"]
        assert fake_producer.names == ["a.jpg", "b.png", "c.gif", "d.mp4", "e.webm"]
        assert all(item.has_preview for item in items)

    def test_creation_time_and_orientation_are_applied(
        self, temp_dir: Path, fake_extractor_cls, fake_producer
    ) -> None:
        created = datetime(2019, 5, 6, 7, 8, 9, tzinfo=timezone.utc)
        extractor = fake_extractor_cls(
            times={"a.jpg": created}, orientation=Orientation.ROTATE_270
        )
        (item,) = _pending("a.jpg")

        execute_pending([item], temp_dir, 120, extractor, fake_producer)

        assert item.metadata.media_create == created
        assert item.orientation is Orientation.ROTATE_270
        assert fake_producer.calls == [("a.jpg", 120, Orientation.ROTATE_270)]

    def test_naive_creation_time_is_stored_as_utc(
        self, temp_dir: Path, fake_extractor_cls, fake_producer
    ) -> None:
        extractor = fake_extractor_cls(times={"a.jpg": datetime(2019, 5, 6, 7, 8, 9)})
        items = _pending("a.jpg", "b.jpg")

        execute_pending(items, temp_dir, 160, extractor, fake_producer)

        assert items[0].metadata.media_create == datetime(
            2019, 5, 6, 7, 8, 9, tzinfo=timezone.utc
        )
        ordered = order_items(items, SortMode.CREATION_DATE)
        assert [item.path for item in ordered] == ["photos/a.jpg", "photos/b.jpg"]

    def test_preview_failure_is_isolated(
        self, temp_dir: Path, fake_extractor, fake_producer_cls
    ) -> None:
        producer = fake_producer_cls(failing={"b.png"})
        items = _pending("a.jpg", "b.png", "c.gif")

        report = execute_pending(items, temp_dir, 160, fake_extractor, producer, max_workers=2)

        assert report.processed == 3
        assert report.preview_failures == 1
        assert [item.has_preview for item in items] == [True, False, True]

    def test_metadata_failure_still_renders_preview(
        self, temp_dir: Path, fake_extractor_cls, fake_producer
    ) -> None:
        extractor = fake_extractor_cls(failing={"a.jpg"})
        (item,) = _pending("a.jpg")

        report = execute_pending([item], temp_dir, 160, extractor, fake_producer)

        assert report.metadata_failures == 1
        assert report.preview_failures == 0
        assert item.metadata.media_create is None
        assert item.orientation is Orientation.IDENTITY
        assert item.has_preview

    def test_files_are_resolved_against_base_dir(
        self, temp_dir: Path, fake_extractor, mocker
    ) -> None:
        producer = mocker.Mock()
        producer.produce.return_value = Preview("image/jpeg", "AAAA")

        execute_pending(_pending("a.jpg"), temp_dir, 160, fake_extractor, producer)

        producer.produce.assert_called_once_with(
            temp_dir / "photos" / "a.jpg", 160, Orientation.IDENTITY
        )

    def test_nothing_pending(self, temp_dir: Path, fake_extractor, fake_producer) -> None:
        report = execute_pending([], temp_dir, 160, fake_extractor, fake_producer)

        assert report.processed == 0
        assert fake_producer.calls == []
