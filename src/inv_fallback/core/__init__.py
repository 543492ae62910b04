"""Core / service layer — resolution logic, models and parsers.

Rules
-----
* No ``print()`` calls.
* No direct network I/O — all requests go through an injected
  :class:`~inv_fallback.core.protocols.Transport`.
* No imports from ``cli`` or ``infra``.
"""

from inv_fallback.core.fallback_client import FallbackResolverClient
from inv_fallback.core.models import (
    Channel,
    FailureCause,
    FormatStream,
    InstanceFailure,
    InstanceList,
    InstanceProbe,
    Playlist,
    PlaylistEntry,
    ResourceKind,
    ResourceRequest,
    SearchItem,
    Thumbnail,
    VideoDetail,
)
from inv_fallback.core.protocols import Transport

__all__: list[str] = [
    "Channel",
    "FailureCause",
    "FallbackResolverClient",
    "FormatStream",
    "InstanceFailure",
    "InstanceList",
    "InstanceProbe",
    "Playlist",
    "PlaylistEntry",
    "ResourceKind",
    "ResourceRequest",
    "SearchItem",
    "Thumbnail",
    "Transport",
    "VideoDetail",
]
