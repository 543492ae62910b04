"""Raw-payload → domain-model parsers (pure).

Each parser accepts the JSON value an instance returned and produces a
typed model.  A top-level shape mismatch raises
:class:`~inv_fallback.exceptions.ResponseShapeError`, which the fallback
client treats as a failure of *that instance* and moves on.  Missing
optional fields degrade to defaults instead.
"""

from __future__ import annotations

from typing import Any

from inv_fallback.core.models import (
    Channel,
    FormatStream,
    Playlist,
    PlaylistEntry,
    SearchItem,
    Thumbnail,
    VideoDetail,
)
from inv_fallback.exceptions import ResponseShapeError
from inv_fallback.utils.coerce import safe_int, safe_str

_UNKNOWN = "Unknown"


def _require_dict(payload: Any, what: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ResponseShapeError(
            f"Expected a JSON object for {what}, got {type(payload).__name__}."
        )
    if "error" in payload and len(payload) == 1:
        # Invidious reports upstream failures as {"error": "..."} with 200.
        raise ResponseShapeError(f"Instance reported an error: {payload['error']}")
    return payload


def _dict_items(raw: object) -> list[dict[str, Any]]:
    """Return the dict elements of *raw* if it is a list, else ``[]``."""
    if not isinstance(raw, list):
        return []
    return [entry for entry in raw if isinstance(entry, dict)]


def _parse_thumbnails(raw: object) -> tuple[Thumbnail, ...]:
    return tuple(
        Thumbnail(
            url=safe_str(entry.get("url")),
            width=safe_int(entry.get("width")),
            height=safe_int(entry.get("height")),
        )
        for entry in _dict_items(raw)
        if entry.get("url")
    )


def _parse_format_stream(raw: dict[str, Any]) -> FormatStream:
    return FormatStream(
        url=safe_str(raw.get("url")),
        itag=safe_str(raw.get("itag")),
        type=safe_str(raw.get("type")),
        quality=safe_str(raw.get("quality")),
        container=safe_str(raw.get("container")),
        resolution=safe_str(raw.get("resolution")),
    )


# ---------------------------------------------------------------------------
# Public parsers
# ---------------------------------------------------------------------------

def parse_video(payload: Any) -> VideoDetail:
    """Parse a ``/videos/{id}`` payload."""
    data = _require_dict(payload, "video")
    video_id = safe_str(data.get("videoId"))
    if not video_id:
        raise ResponseShapeError("Video payload has no videoId.")

    return VideoDetail(
        video_id=video_id,
        title=safe_str(data.get("title"), _UNKNOWN),
        author=safe_str(data.get("author"), _UNKNOWN),
        author_id=safe_str(data.get("authorId")),
        view_count=safe_int(data.get("viewCount")),
        like_count=safe_int(data.get("likeCount")),
        description=safe_str(data.get("description")),
        format_streams=tuple(
            _parse_format_stream(entry)
            for entry in _dict_items(data.get("formatStreams"))
            if entry.get("url")
        ),
        author_thumbnails=_parse_thumbnails(data.get("authorThumbnails")),
    )


def _parse_search_item(raw: dict[str, Any]) -> SearchItem:
    return SearchItem(
        video_id=safe_str(raw.get("videoId")),
        title=safe_str(raw.get("title"), _UNKNOWN),
        author=safe_str(raw.get("author"), _UNKNOWN),
        author_id=safe_str(raw.get("authorId")),
        view_count=safe_int(raw.get("viewCount")),
        length_seconds=safe_int(raw.get("lengthSeconds")),
        video_thumbnails=_parse_thumbnails(raw.get("videoThumbnails")),
    )


def _is_video_item(raw: dict[str, Any]) -> bool:
    return raw.get("type", "video") == "video" and bool(raw.get("videoId"))


def parse_search_results(payload: Any) -> tuple[SearchItem, ...]:
    """Parse a ``/search`` payload, keeping only video results."""
    if isinstance(payload, dict):
        _require_dict(payload, "search results")
    if not isinstance(payload, list):
        raise ResponseShapeError(
            f"Expected a JSON array of search results, got {type(payload).__name__}."
        )
    return tuple(
        _parse_search_item(entry)
        for entry in _dict_items(payload)
        if _is_video_item(entry)
    )


def parse_channel(payload: Any) -> Channel:
    """Parse a ``/channels/{id}`` payload."""
    data = _require_dict(payload, "channel")
    author_id = safe_str(data.get("authorId"))
    if not author_id:
        raise ResponseShapeError("Channel payload has no authorId.")

    return Channel(
        author=safe_str(data.get("author"), _UNKNOWN),
        author_id=author_id,
        description=safe_str(data.get("description")),
        sub_count=safe_int(data.get("subCount")),
        author_thumbnails=_parse_thumbnails(data.get("authorThumbnails")),
        latest_videos=tuple(
            _parse_search_item(entry)
            for entry in _dict_items(data.get("latestVideos"))
            if entry.get("videoId")
        ),
    )


def parse_playlist(payload: Any) -> Playlist:
    """Parse a ``/playlists/{id}`` payload."""
    data = _require_dict(payload, "playlist")
    playlist_id = safe_str(data.get("playlistId"))
    if not playlist_id:
        raise ResponseShapeError("Playlist payload has no playlistId.")

    return Playlist(
        playlist_id=playlist_id,
        title=safe_str(data.get("title"), _UNKNOWN),
        author=safe_str(data.get("author"), _UNKNOWN),
        author_id=safe_str(data.get("authorId")),
        video_count=safe_int(data.get("videoCount")),
        description=safe_str(data.get("description")),
        videos=tuple(
            PlaylistEntry(
                video_id=safe_str(entry.get("videoId")),
                title=safe_str(entry.get("title"), _UNKNOWN),
                author=safe_str(entry.get("author"), _UNKNOWN),
                index=safe_int(entry.get("index")),
                length_seconds=safe_int(entry.get("lengthSeconds")),
            )
            for entry in _dict_items(data.get("videos"))
            if entry.get("videoId")
        ),
    )
