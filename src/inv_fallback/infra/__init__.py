"""Infrastructure layer — external system integration.

This layer wraps all interaction with the ``requests`` HTTP library.
Every raw ``requests`` exception must be caught here and re-raised as
:class:`~inv_fallback.exceptions.InstanceUnavailableError`.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from inv_fallback.infra.http_transport import RequestsTransport

__all__: list[str] = ["RequestsTransport"]
