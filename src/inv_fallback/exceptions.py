"""Custom exception hierarchy for inv-fallback.

All exceptions that cross layer boundaries must inherit from
:class:`InvFallbackError`.  Raw ``requests`` exceptions must NEVER
propagate beyond the infrastructure layer — they are caught and
re-raised as :class:`InstanceUnavailableError`.

Hierarchy
---------
InvFallbackError
├── MalformedRequestError
├── InstanceUnavailableError
│   └── ResponseShapeError
├── AllInstancesUnavailableError
├── ConfigurationError
└── EnvironmentError
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from inv_fallback.core.models import FailureCause, InstanceFailure


class InvFallbackError(Exception):
    """Base exception for all inv-fallback errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Caller errors ---------------------------------------------------------

class MalformedRequestError(InvFallbackError):
    """Raised when a resource path or required parameter is invalid.

    Raised before any network attempt is made.
    """


# --- Per-instance failures -------------------------------------------------

class InstanceUnavailableError(InvFallbackError):
    """Raised by a transport when one instance cannot satisfy a request.

    The fallback client catches this and advances to the next instance;
    it never reaches the caller of ``resolve`` directly.
    """

    def __init__(
        self,
        message: str,
        *,
        cause: FailureCause | str = "network",
        status_code: int | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.cause: str = str(getattr(cause, "value", cause))
        self.status_code: int | None = status_code


class ResponseShapeError(InstanceUnavailableError):
    """Raised when a payload does not match the expected resource shape."""

    def __init__(self, message: str) -> None:
        super().__init__(message, cause="shape")


# --- Terminal failure ------------------------------------------------------

class AllInstancesUnavailableError(InvFallbackError):
    """Raised when every configured instance failed for one request.

    Attributes
    ----------
    failures : tuple[InstanceFailure, ...]
        One record per configured instance, in trial order.
    """

    def __init__(self, failures: Sequence[InstanceFailure]) -> None:
        self.failures: tuple[InstanceFailure, ...] = tuple(failures)
        lines = [f"All {len(self.failures)} instance(s) failed:"]
        lines.extend(f"  {f.instance}: {f.reason}" for f in self.failures)
        super().__init__(
            "\n".join(lines),
            hint="Try again later or configure other instances with --instance.",
        )

    @property
    def instances(self) -> tuple[str, ...]:
        """Base URLs of the failing instances, in trial order."""
        return tuple(f.instance for f in self.failures)


# --- Configuration / environment -------------------------------------------

class ConfigurationError(InvFallbackError):
    """Raised when the instance list or timeouts are invalid."""


class EnvironmentError(InvFallbackError):
    """Raised when a required runtime dependency is not available."""
