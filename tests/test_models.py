"""Tests for domain models (core/models.py).

All models are frozen dataclasses — these tests verify immutability,
equality semantics, and the small convenience accessors.
"""

from __future__ import annotations

import pytest

from inv_fallback.core.models import (
    FormatStream,
    InstanceFailure,
    InstanceList,
    SearchItem,
    Thumbnail,
    VideoDetail,
)


# ---------------------------------------------------------------------------
# Fixtures — reusable model instances
# ---------------------------------------------------------------------------

def _make_video(**overrides: object) -> VideoDetail:
    """Factory with sensible defaults for concise tests."""
    defaults: dict[str, object] = {
        "video_id": "abc",
        "title": "Test",
        "author": "Someone",
        "author_id": "UC1",
        "view_count": 10,
        "like_count": 1,
        "description": "",
    }
    defaults.update(overrides)
    return VideoDetail(**defaults)  # type: ignore[arg-type]


def _stream(url: str) -> FormatStream:
    return FormatStream(
        url=url, itag="18", type="video/mp4", quality="medium",
        container="mp4", resolution="360p",
    )


# ---------------------------------------------------------------------------
# InstanceList
# ---------------------------------------------------------------------------

class TestInstanceList:
    def test_order_preserved(self) -> None:
        instances = InstanceList(["https://b.example", "https://a.example"])
        assert list(instances) == ["https://b.example", "https://a.example"]
        assert instances[0] == "https://b.example"

    def test_trailing_slash_and_whitespace_stripped(self) -> None:
        instances = InstanceList([" https://a.example/ "])
        assert instances.urls == ("https://a.example",)

    def test_len_and_bool(self) -> None:
        assert len(InstanceList(["https://a.example"])) == 1
        assert not InstanceList([])

    def test_frozen(self) -> None:
        instances = InstanceList(["https://a.example"])
        with pytest.raises(AttributeError):
            instances.urls = ()  # type: ignore[misc]

    def test_equality(self) -> None:
        assert InstanceList(["https://a.example/"]) == InstanceList(["https://a.example"])


# ---------------------------------------------------------------------------
# VideoDetail
# ---------------------------------------------------------------------------

class TestVideoDetail:
    def test_playable_url_first_stream(self) -> None:
        video = _make_video(format_streams=(_stream("u1"), _stream("u2")))
        assert video.playable_url == "u1"

    def test_playable_url_none_without_streams(self) -> None:
        assert _make_video().playable_url is None

    def test_author_thumbnail_exact_match(self) -> None:
        video = _make_video(author_thumbnails=(
            Thumbnail(url="small", width=48, height=48),
            Thumbnail(url="medium", width=100, height=100),
        ))
        assert video.author_thumbnail() == "medium"
        assert video.author_thumbnail(48, 48) == "small"
        assert video.author_thumbnail(176, 176) is None

    def test_frozen(self) -> None:
        video = _make_video()
        with pytest.raises(AttributeError):
            video.title = "Changed"  # type: ignore[misc]

    def test_equality(self) -> None:
        assert _make_video() == _make_video()
        assert _make_video(video_id="x") != _make_video(video_id="y")


# ---------------------------------------------------------------------------
# Misc
# ---------------------------------------------------------------------------

class TestSearchItem:
    def test_thumbnail_url(self) -> None:
        item = SearchItem(
            video_id="v", title="t", author="a",
            video_thumbnails=(Thumbnail(url="thumb", width=None, height=None),),
        )
        assert item.thumbnail_url == "thumb"

    def test_thumbnail_url_none(self) -> None:
        assert SearchItem(video_id="v", title="t", author="a").thumbnail_url is None


class TestInstanceFailure:
    def test_defaults(self) -> None:
        failure = InstanceFailure(instance="https://a.example", reason="boom")
        assert failure.cause == "network"
        assert failure.status_code is None
