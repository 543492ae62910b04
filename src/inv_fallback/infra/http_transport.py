"""requests-backed implementation of :class:`~inv_fallback.core.protocols.Transport`.

This module is the **only** place in the codebase that imports
``requests``.  All ``requests`` exceptions are caught here and re-raised
as :class:`~inv_fallback.exceptions.InstanceUnavailableError` with a
``cause`` — nothing raw escapes the infrastructure boundary.
"""

from __future__ import annotations

from typing import Any

from inv_fallback.core.models import FailureCause
from inv_fallback.exceptions import EnvironmentError, InstanceUnavailableError
from inv_fallback.version import __version__

DEFAULT_USER_AGENT = f"inv-fallback/{__version__}"


def _import_requests() -> Any:
    """Import requests lazily so ``--help``/``--version`` never need it."""
    try:
        import requests
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "requests is not installed. Install with: pip install requests",
        ) from exc
    return requests


class RequestsTransport:
    """Concrete :class:`Transport` backed by a ``requests.Session``.

    Usage::

        with RequestsTransport() as transport:
            payload = transport.get_json(url, timeout=5.0)

    This class satisfies the :class:`~inv_fallback.core.protocols.Transport`
    protocol structurally — no explicit inheritance required.
    """

    def __init__(
        self,
        session: Any | None = None,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._requests: Any = _import_requests()
        self._owns_session: bool = session is None
        self._session: Any = session if session is not None else self._requests.Session()
        self._session.headers.update(
            {"User-Agent": user_agent, "Accept": "application/json"}
        )

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> RequestsTransport:
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying session if this transport created it."""
        if self._owns_session:
            self._session.close()

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def get_json(self, url: str, *, timeout: float) -> Any:
        """GET *url* and decode the JSON body.

        Raises
        ------
        InstanceUnavailableError
            ``timeout`` on connect/read timeout, ``network`` on any other
            transport error, ``http_status`` on a non-2xx response,
            ``parse`` when the body is not valid JSON.
        """
        exceptions = self._requests.exceptions

        try:
            response = self._session.get(url, timeout=timeout)
        except exceptions.Timeout as exc:
            raise InstanceUnavailableError(
                f"Timed out after {timeout:g}s",
                cause=FailureCause.TIMEOUT,
            ) from exc
        except exceptions.RequestException as exc:
            raise InstanceUnavailableError(
                f"Request failed: {exc}",
                cause=FailureCause.NETWORK,
            ) from exc

        if not 200 <= response.status_code < 300:
            raise InstanceUnavailableError(
                f"HTTP {response.status_code}",
                cause=FailureCause.HTTP_STATUS,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            # requests' JSONDecodeError subclasses ValueError.
            raise InstanceUnavailableError(
                f"Response body is not valid JSON: {exc}",
                cause=FailureCause.PARSE,
            ) from exc
