"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so tests can inject a fake transport.
"""

from __future__ import annotations

from typing import Any, Protocol


class Transport(Protocol):
    """Contract for the HTTP GET + JSON decode backend.

    Any object that implements :meth:`get_json` with the correct
    signature satisfies this protocol structurally (no explicit
    inheritance required).
    """

    def get_json(self, url: str, *, timeout: float) -> Any:
        """GET *url* and return the decoded JSON body.

        Implementations must map every backend-specific failure to
        :class:`~inv_fallback.exceptions.InstanceUnavailableError`
        carrying a ``cause`` of ``timeout``, ``network``,
        ``http_status`` or ``parse``.

        Raises
        ------
        InstanceUnavailableError
            When the instance cannot satisfy the request.
        """
        ...  # pragma: no cover
