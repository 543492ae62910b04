"""Resource request builders and path classification.

The upstream API recognises four path shapes under its prefix::

    /videos/{id}
    /search
    /channels/{id}
    /playlists/{id}

Builders here validate their inputs and raise
:class:`~inv_fallback.exceptions.MalformedRequestError` *before* any
network attempt.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from urllib.parse import quote

from inv_fallback.core.models import ResourceKind, ResourceRequest
from inv_fallback.exceptions import MalformedRequestError

_PATH_PATTERNS: tuple[tuple[ResourceKind, re.Pattern[str]], ...] = (
    (ResourceKind.VIDEO, re.compile(r"^/videos/[^/?#]+$")),
    (ResourceKind.SEARCH, re.compile(r"^/search$")),
    (ResourceKind.CHANNEL, re.compile(r"^/channels/[^/?#]+$")),
    (ResourceKind.PLAYLIST, re.compile(r"^/playlists/[^/?#]+$")),
)

# Incoming query keys in dispatch precedence order.
_DISPATCH_KEYS: tuple[tuple[str, ResourceKind], ...] = (
    ("v", ResourceKind.VIDEO),
    ("q", ResourceKind.SEARCH),
    ("channelid", ResourceKind.CHANNEL),
    ("list", ResourceKind.PLAYLIST),
)


def classify_path(path: str) -> ResourceKind:
    """Return the :class:`ResourceKind` for *path* or raise.

    Raises
    ------
    MalformedRequestError
        If *path* matches none of the four recognised shapes.
    """
    for kind, pattern in _PATH_PATTERNS:
        if pattern.match(path):
            return kind
    raise MalformedRequestError(
        f"Unrecognised resource path: {path!r}",
        hint="Expected /videos/{id}, /search, /channels/{id} or /playlists/{id}.",
    )


def _require(value: str, what: str) -> str:
    stripped = value.strip() if isinstance(value, str) else ""
    if not stripped:
        raise MalformedRequestError(f"{what} must not be empty.")
    return stripped


def _entity_path(prefix: str, entity_id: str, what: str) -> str:
    return f"/{prefix}/{quote(_require(entity_id, what), safe='')}"


def video_request(video_id: str) -> ResourceRequest:
    return ResourceRequest(
        kind=ResourceKind.VIDEO,
        path=_entity_path("videos", video_id, "Video id"),
    )


def search_request(query: str, **extra: str) -> ResourceRequest:
    """Build a search request; *extra* is passed through as query params."""
    params = {"q": _require(query, "Search query")}
    params.update({key: str(value) for key, value in extra.items()})
    return ResourceRequest(kind=ResourceKind.SEARCH, path="/search", params=params)


def channel_request(channel_id: str) -> ResourceRequest:
    return ResourceRequest(
        kind=ResourceKind.CHANNEL,
        path=_entity_path("channels", channel_id, "Channel id"),
    )


def playlist_request(playlist_id: str) -> ResourceRequest:
    return ResourceRequest(
        kind=ResourceKind.PLAYLIST,
        path=_entity_path("playlists", playlist_id, "Playlist id"),
    )


_BUILDERS = {
    ResourceKind.VIDEO: video_request,
    ResourceKind.SEARCH: search_request,
    ResourceKind.CHANNEL: channel_request,
    ResourceKind.PLAYLIST: playlist_request,
}


def build_request(kind: ResourceKind, value: str) -> ResourceRequest:
    """Build the request for *kind* from its single identifying value."""
    return _BUILDERS[kind](value)


def request_from_query(query: Mapping[str, str]) -> ResourceRequest | None:
    """Pick the resource a front-end request asks for.

    Keys are checked in the order ``v``, ``q``, ``channelid``, ``list``;
    the first one with a non-empty value wins.  Returns ``None`` when no
    key is present (the landing page).
    """
    for key, kind in _DISPATCH_KEYS:
        value = query.get(key)
        if value and value.strip():
            return build_request(kind, value)
    return None
