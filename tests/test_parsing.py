"""Tests for raw-payload parsers (core/parsing.py).

Parsers are pure: each test feeds a dict shaped like an Invidious
response and inspects the resulting model.
"""

from __future__ import annotations

from typing import Any

import pytest

from inv_fallback.core.parsing import (
    parse_channel,
    parse_playlist,
    parse_search_results,
    parse_video,
)
from inv_fallback.exceptions import InstanceUnavailableError, ResponseShapeError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _video_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "videoId": "abc",
        "title": "Test",
        "author": "Someone",
        "authorId": "UC1",
        "viewCount": 1234,
        "likeCount": 56,
        "description": "A description",
        "formatStreams": [
            {"url": "https://cdn.example/720.mp4", "itag": "22", "type": "video/mp4",
             "quality": "hd720", "container": "mp4", "resolution": "720p"},
            {"url": "https://cdn.example/360.mp4", "itag": "18"},
        ],
        "authorThumbnails": [
            {"url": "https://img.example/32", "width": 32, "height": 32},
            {"url": "https://img.example/100", "width": 100, "height": 100},
        ],
    }
    payload.update(overrides)
    return payload


# ---------------------------------------------------------------------------
# Video
# ---------------------------------------------------------------------------

class TestParseVideo:
    def test_parses_all_fields(self) -> None:
        video = parse_video(_video_payload())
        assert video.video_id == "abc"
        assert video.title == "Test"
        assert video.author == "Someone"
        assert video.author_id == "UC1"
        assert video.view_count == 1234
        assert video.like_count == 56
        assert len(video.format_streams) == 2
        assert video.format_streams[0].quality == "hd720"

    def test_playable_url_is_first_stream(self) -> None:
        assert parse_video(_video_payload()).playable_url == "https://cdn.example/720.mp4"

    def test_author_thumbnail_100(self) -> None:
        assert parse_video(_video_payload()).author_thumbnail() == "https://img.example/100"

    def test_missing_optional_fields(self) -> None:
        video = parse_video({"videoId": "abc"})
        assert video.title == "Unknown"
        assert video.author == "Unknown"
        assert video.view_count is None
        assert video.playable_url is None
        assert video.author_thumbnail() is None

    def test_numeric_strings_accepted(self) -> None:
        video = parse_video(_video_payload(viewCount="1,000", likeCount="7"))
        assert video.view_count == 1000
        assert video.like_count == 7

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_counts_dropped(self, value: float) -> None:
        video = parse_video(_video_payload(viewCount=value, likeCount=value))
        assert video.video_id == "abc"
        assert video.view_count is None
        assert video.like_count is None

    def test_float_counts_truncated(self) -> None:
        assert parse_video(_video_payload(viewCount=12.9)).view_count == 12

    def test_streams_without_url_skipped(self) -> None:
        video = parse_video(_video_payload(formatStreams=[{"itag": "22"}, "junk"]))
        assert video.format_streams == ()

    @pytest.mark.parametrize("payload", [[], "text", None, 42])
    def test_non_object_rejected(self, payload: Any) -> None:
        with pytest.raises(ResponseShapeError):
            parse_video(payload)

    def test_missing_video_id_rejected(self) -> None:
        with pytest.raises(ResponseShapeError, match="videoId"):
            parse_video({"title": "x"})

    def test_error_payload_rejected(self) -> None:
        with pytest.raises(ResponseShapeError, match="This video is unavailable"):
            parse_video({"error": "This video is unavailable"})

    def test_shape_error_is_instance_failure(self) -> None:
        with pytest.raises(InstanceUnavailableError) as exc_info:
            parse_video([])
        assert exc_info.value.cause == "shape"


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

class TestParseSearch:
    def test_only_videos_kept(self) -> None:
        items = parse_search_results([
            {"type": "video", "videoId": "v1", "title": "One", "author": "A",
             "lengthSeconds": 61,
             "videoThumbnails": [{"url": "https://img.example/v1", "width": 320, "height": 180}]},
            {"type": "channel", "authorId": "UC1", "author": "A"},
            {"type": "playlist", "playlistId": "PL1"},
            {"videoId": "v2", "title": "Two"},
            "junk",
        ])
        assert [item.video_id for item in items] == ["v1", "v2"]
        assert items[0].length_seconds == 61
        assert items[0].thumbnail_url == "https://img.example/v1"
        assert items[1].author == "Unknown"

    def test_empty_list(self) -> None:
        assert parse_search_results([]) == ()

    def test_object_rejected(self) -> None:
        with pytest.raises(ResponseShapeError):
            parse_search_results({"items": []})

    def test_error_object_rejected(self) -> None:
        with pytest.raises(ResponseShapeError, match="error"):
            parse_search_results({"error": "boom"})


# ---------------------------------------------------------------------------
# Channel / playlist
# ---------------------------------------------------------------------------

class TestParseChannel:
    def test_parses(self) -> None:
        channel = parse_channel({
            "author": "Someone",
            "authorId": "UC1",
            "subCount": 99,
            "description": "about",
            "latestVideos": [{"videoId": "v1", "title": "One"}, {"title": "no id"}],
        })
        assert channel.author == "Someone"
        assert channel.sub_count == 99
        assert [v.video_id for v in channel.latest_videos] == ["v1"]

    def test_missing_author_id_rejected(self) -> None:
        with pytest.raises(ResponseShapeError):
            parse_channel({"author": "Someone"})


class TestParsePlaylist:
    def test_parses(self) -> None:
        playlist = parse_playlist({
            "playlistId": "PL1",
            "title": "Mix",
            "author": "Someone",
            "videoCount": 2,
            "videos": [
                {"videoId": "v1", "title": "One", "index": 0, "lengthSeconds": 10},
                {"videoId": "v2", "title": "Two", "index": 1},
            ],
        })
        assert playlist.title == "Mix"
        assert playlist.video_count == 2
        assert [e.index for e in playlist.videos] == [0, 1]
        assert playlist.videos[1].length_seconds is None

    def test_non_object_rejected(self) -> None:
        with pytest.raises(ResponseShapeError):
            parse_playlist(["PL1"])
