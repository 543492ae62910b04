"""Domain models for inv-fallback.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O and zero dependencies
on external packages.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum


# ---------------------------------------------------------------------------
# Configuration values
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class InstanceList:
    """Ordered, immutable list of instance base URLs.

    Order is trial priority: the first URL is tried first on every call.
    Trailing slashes are stripped so that path joining stays uniform.
    """

    urls: tuple[str, ...]

    def __init__(self, urls: Iterable[str]) -> None:
        object.__setattr__(
            self, "urls", tuple(url.strip().rstrip("/") for url in urls)
        )

    def __len__(self) -> int:
        return len(self.urls)

    def __iter__(self) -> Iterator[str]:
        return iter(self.urls)

    def __getitem__(self, index: int) -> str:
        return self.urls[index]


# ---------------------------------------------------------------------------
# Requests and failure records
# ---------------------------------------------------------------------------

class ResourceKind(str, Enum):
    """The four logical resources exposed by the upstream API."""

    VIDEO = "video"
    SEARCH = "search"
    CHANNEL = "channel"
    PLAYLIST = "playlist"


@dataclass(frozen=True, slots=True)
class ResourceRequest:
    """A logical request: resource kind, path with embedded id, query params."""

    kind: ResourceKind
    path: str
    params: Mapping[str, str] = field(default_factory=dict)


class FailureCause(str, Enum):
    """Why a single instance attempt failed."""

    TIMEOUT = "timeout"
    NETWORK = "network"
    HTTP_STATUS = "http_status"
    PARSE = "parse"
    SHAPE = "shape"
    DEADLINE = "deadline"


@dataclass(frozen=True, slots=True)
class InstanceFailure:
    """Diagnostic record of one failed instance attempt."""

    instance: str
    """Base URL of the instance that failed."""

    reason: str
    """Human-readable failure description."""

    cause: str = FailureCause.NETWORK.value
    """One of the :class:`FailureCause` values."""

    status_code: int | None = None
    """HTTP status when ``cause == "http_status"``."""


@dataclass(frozen=True, slots=True)
class InstanceProbe:
    """Outcome of a reachability probe against one instance."""

    instance: str
    ok: bool
    elapsed: float
    failure: InstanceFailure | None = None


# ---------------------------------------------------------------------------
# Typed response shapes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Thumbnail:
    url: str
    width: int | None
    height: int | None


@dataclass(frozen=True, slots=True)
class FormatStream:
    """A muxed, directly playable stream.  ``url`` is passed through verbatim."""

    url: str
    itag: str
    type: str
    quality: str
    container: str
    resolution: str


@dataclass(frozen=True, slots=True)
class VideoDetail:
    """Metadata for a single video as returned by ``/videos/{id}``."""

    video_id: str
    title: str
    author: str
    author_id: str
    view_count: int | None
    like_count: int | None
    description: str
    format_streams: tuple[FormatStream, ...] = ()
    author_thumbnails: tuple[Thumbnail, ...] = ()

    @property
    def playable_url(self) -> str | None:
        """URL of the first format stream, or ``None`` when there is none."""
        if not self.format_streams:
            return None
        return self.format_streams[0].url

    def author_thumbnail(self, width: int = 100, height: int = 100) -> str | None:
        """Return the author thumbnail URL matching *width* x *height*."""
        for thumb in self.author_thumbnails:
            if thumb.width == width and thumb.height == height:
                return thumb.url
        return None


@dataclass(frozen=True, slots=True)
class SearchItem:
    """One video entry from a search result or a channel's video list."""

    video_id: str
    title: str
    author: str
    author_id: str = ""
    view_count: int | None = None
    length_seconds: int | None = None
    video_thumbnails: tuple[Thumbnail, ...] = ()

    @property
    def thumbnail_url(self) -> str | None:
        return self.video_thumbnails[0].url if self.video_thumbnails else None


@dataclass(frozen=True, slots=True)
class Channel:
    author: str
    author_id: str
    description: str
    sub_count: int | None
    author_thumbnails: tuple[Thumbnail, ...] = ()
    latest_videos: tuple[SearchItem, ...] = ()


@dataclass(frozen=True, slots=True)
class PlaylistEntry:
    video_id: str
    title: str
    author: str
    index: int | None
    length_seconds: int | None


@dataclass(frozen=True, slots=True)
class Playlist:
    playlist_id: str
    title: str
    author: str
    author_id: str
    video_count: int | None
    description: str
    videos: tuple[PlaylistEntry, ...] = ()
