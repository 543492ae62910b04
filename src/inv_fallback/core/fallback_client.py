"""Fallback resolver client — ordered multi-instance resolution.

The client owns an immutable :class:`~inv_fallback.core.models.InstanceList`
and a :class:`~inv_fallback.core.protocols.Transport` injected at
construction time.  One call to :meth:`FallbackResolverClient.resolve`
walks the instances in configured order, one attempt each, and returns
the first usable payload.

Guarantees
----------
* Instances are tried sequentially, in the same order on every call.
* Each instance is attempted at most once per call — no retry, no backoff.
* A failed attempt never aborts the call; only exhaustion does, as
  :class:`~inv_fallback.exceptions.AllInstancesUnavailableError` carrying
  exactly one failure record per instance.
* No mutable state is kept between calls.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from typing import Any, TypeVar
from urllib.parse import urlencode

from inv_fallback.core import parsing, resolution
from inv_fallback.core.models import (
    Channel,
    FailureCause,
    InstanceFailure,
    InstanceList,
    InstanceProbe,
    Playlist,
    ResourceRequest,
    SearchItem,
    VideoDetail,
)
from inv_fallback.core.protocols import Transport
from inv_fallback.core.resources import (
    channel_request,
    classify_path,
    playlist_request,
    search_request,
    video_request,
)
from inv_fallback.exceptions import (
    AllInstancesUnavailableError,
    ConfigurationError,
    InstanceUnavailableError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_API_PREFIX = "/api/v1"
DEFAULT_TIMEOUT = 5.0


class FallbackResolverClient:
    """Resolve logical resource requests against an ordered instance list.

    Parameters
    ----------
    instances:
        Ordered base URLs.  Must be non-empty.
    transport:
        Any object satisfying the :class:`Transport` protocol.
    timeout:
        Per-attempt timeout in seconds, forwarded to the transport.
    api_prefix:
        Path prefix inserted between the base URL and resource path.
    overall_timeout:
        Optional ceiling in seconds for one whole :meth:`resolve` call.
        Instances not yet attempted when it elapses are recorded as
        ``deadline`` failures without being contacted.
    clock:
        Monotonic clock; injectable for tests.
    """

    def __init__(
        self,
        instances: InstanceList,
        transport: Transport,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        api_prefix: str = DEFAULT_API_PREFIX,
        overall_timeout: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if isinstance(instances, str):
            raise ConfigurationError(
                "Instances must be a list of URLs, not a single string.",
            )
        if not isinstance(instances, InstanceList):
            instances = InstanceList(instances)
        if not instances:
            raise ConfigurationError("At least one instance must be configured.")
        self._instances: InstanceList = instances
        self._transport: Transport = transport
        self._timeout: float = timeout
        self._api_prefix: str = "/" + api_prefix.strip("/") if api_prefix.strip("/") else ""
        self._overall_timeout: float | None = overall_timeout
        self._clock: Callable[[], float] = clock

    @property
    def instances(self) -> InstanceList:
        return self._instances

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> FallbackResolverClient:
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    def close(self) -> None:
        """Release the transport, if it holds any resources."""
        close = getattr(self._transport, "close", None)
        if callable(close):
            close()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build_url(
        self,
        instance: str,
        path: str,
        params: Mapping[str, str] | None = None,
    ) -> str:
        """Return ``instance + prefix + path + "?" + query``."""
        query = urlencode(dict(params or {}))
        return f"{instance}{self._api_prefix}{path}?{query}"

    def resolve(
        self,
        path: str,
        params: Mapping[str, str] | None = None,
        *,
        parser: Callable[[Any], T] | None = None,
    ) -> Any:
        """Resolve *path* against the first instance that succeeds.

        Parameters
        ----------
        path:
            One of ``/videos/{id}``, ``/search``, ``/channels/{id}``,
            ``/playlists/{id}``.
        params:
            Query parameters, passed through unvalidated.
        parser:
            Optional payload parser.  When it raises
            :class:`InstanceUnavailableError` (e.g. a shape mismatch) the
            answering instance counts as failed and the next one is tried.

        Raises
        ------
        MalformedRequestError
            If *path* is not a recognised shape.  No request is made.
        AllInstancesUnavailableError
            If every instance failed.
        """
        classify_path(path)
        count = len(self._instances)
        started = self._clock()
        state = resolution.start(count)
        failures: tuple[InstanceFailure, ...] = ()

        while isinstance(state, resolution.Trying):
            instance = self._instances[state.index]
            if self._deadline_passed(started):
                outcome: resolution.Outcome = InstanceFailure(
                    instance=instance,
                    reason="overall deadline exceeded before attempt",
                    cause=FailureCause.DEADLINE.value,
                )
            else:
                outcome = self._attempt(instance, path, params, parser)
            if isinstance(outcome, InstanceFailure):
                logger.warning(
                    "Instance %s failed (%s): %s",
                    outcome.instance, outcome.cause, outcome.reason,
                )
            state, failures = resolution.advance(state, outcome, failures, count)

        if isinstance(state, resolution.Succeeded):
            logger.info(
                "Resolved %s via %s", path, self._instances[state.index],
            )
            return state.payload

        logger.error("All %d instances failed for %s", count, path)
        raise AllInstancesUnavailableError(state.failures)

    def resolve_request(
        self,
        request: ResourceRequest,
        *,
        parser: Callable[[Any], T] | None = None,
    ) -> Any:
        """Resolve a prebuilt :class:`ResourceRequest`."""
        return self.resolve(request.path, request.params, parser=parser)

    # ------------------------------------------------------------------
    # Typed helpers
    # ------------------------------------------------------------------

    def video(self, video_id: str) -> VideoDetail:
        return self.resolve_request(video_request(video_id), parser=parsing.parse_video)

    def search(self, query: str, **extra: str) -> tuple[SearchItem, ...]:
        return self.resolve_request(
            search_request(query, **extra), parser=parsing.parse_search_results,
        )

    def channel(self, channel_id: str) -> Channel:
        return self.resolve_request(
            channel_request(channel_id), parser=parsing.parse_channel,
        )

    def playlist(self, playlist_id: str) -> Playlist:
        return self.resolve_request(
            playlist_request(playlist_id), parser=parsing.parse_playlist,
        )

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def probe(self, path: str = "/trending") -> tuple[InstanceProbe, ...]:
        """GET *path* on every instance and report reachability.

        Unlike :meth:`resolve`, all instances are contacted.  Nothing is
        remembered afterwards.
        """
        results: list[InstanceProbe] = []
        for instance in self._instances:
            began = self._clock()
            outcome = self._attempt(instance, path, None, None)
            elapsed = self._clock() - began
            if isinstance(outcome, InstanceFailure):
                results.append(
                    InstanceProbe(instance=instance, ok=False, elapsed=elapsed, failure=outcome)
                )
            else:
                results.append(InstanceProbe(instance=instance, ok=True, elapsed=elapsed))
        return tuple(results)

    # ------------------------------------------------------------------
    # Single attempt (safe boundary)
    # ------------------------------------------------------------------

    def _attempt(
        self,
        instance: str,
        path: str,
        params: Mapping[str, str] | None,
        parser: Callable[[Any], Any] | None,
    ) -> resolution.Outcome:
        """Try one instance; convert every failure into a record."""
        url = self.build_url(instance, path, params)
        logger.debug("GET %s", url)
        cause = FailureCause.NETWORK
        try:
            payload = self._transport.get_json(url, timeout=self._timeout)
            if parser is not None:
                cause = FailureCause.SHAPE
                payload = parser(payload)
        except InstanceUnavailableError as exc:
            return InstanceFailure(
                instance=instance,
                reason=str(exc),
                cause=exc.cause,
                status_code=exc.status_code,
            )
        except Exception as exc:  # noqa: BLE001
            return InstanceFailure(
                instance=instance,
                reason=f"Unexpected error: {type(exc).__name__}: {exc}",
                cause=cause.value,
            )
        return resolution.Success(payload=payload)

    def _deadline_passed(self, started: float) -> bool:
        if self._overall_timeout is None:
            return False
        return self._clock() - started >= self._overall_timeout
