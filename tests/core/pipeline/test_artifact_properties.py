"""Property-based tests for the artifact codec using Hypothesis."""

from __future__ import annotations

import base64
from datetime import datetime, timezone

from hypothesis import given, settings, strategies as st

from mediagallery.core.models import (
    GalleryConfig,
    GalleryPage,
    MediaItem,
    MediaMetadata,
    Preview,
    SortMode,
)
from mediagallery.core.pipeline.artifact import marshal_page, unmarshal_page

_NAME_ALPHABET = st.sampled_from(
    list("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789 _-.#%&'()[]éß")
)

_timestamps = st.datetimes(
    min_value=datetime(1971, 1, 1),
    max_value=datetime(2100, 1, 1),
    timezones=st.just(timezone.utc),
)


@st.composite
def media_item_strategy(draw):
    """Generate an item with a preview and plausible file facts."""
    segments = draw(st.lists(st.text(_NAME_ALPHABET, min_size=1, max_size=12), min_size=1, max_size=3))
    extension = draw(st.sampled_from([".jpg", ".png", ".gif", ".webp", ".webm", ".mp4"]))
    payload = draw(st.binary(min_size=1, max_size=64))
    mime_type = draw(st.sampled_from(["image/jpeg", "image/png", "image/webp"]))
    return MediaItem(
        path="photos/" + "/".join(segments) + extension,
        metadata=MediaMetadata(
            file_size=draw(st.integers(min_value=0, max_value=2**40)),
            file_modify=draw(_timestamps),
            media_create=draw(st.none() | _timestamps),
            preview_height=draw(st.integers(min_value=1, max_value=4096)),
        ),
        preview=Preview(mime_type, base64.b64encode(payload).decode("ascii")),
    )


@st.composite
def gallery_page_strategy(draw):
    config = GalleryConfig(
        height=draw(st.integers(min_value=1, max_value=4096)),
        sort_by=draw(st.sampled_from(list(SortMode))),
        exclude=draw(st.none() | st.sampled_from(["/tmp/", r"\.bak$", "^/photos/(a|b)"])),
    )
    items = draw(st.lists(media_item_strategy(), max_size=8))
    return GalleryPage(config=config, items=items)


@given(gallery_page_strategy())
@settings(max_examples=100, deadline=None)
def test_decode_inverts_encode(page: GalleryPage) -> None:
    """Encoding then decoding yields the same configuration and items."""
    encoded = marshal_page(page)
    decoded = unmarshal_page(encoded)

    assert decoded.config == page.config
    assert decoded.items == page.items
    assert marshal_page(decoded) == encoded
