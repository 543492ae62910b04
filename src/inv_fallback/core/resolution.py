"""Fallback resolution as an explicit state machine.

States
------
``Trying(index)``
    Instance *index* is about to be (or is being) attempted.
``Succeeded(payload, index)``
    Instance *index* answered; *payload* is the result.  Terminal.
``Exhausted(failures)``
    Every instance failed.  Terminal.

Transitions
-----------
* ``Trying(i)`` + success          → ``Succeeded``
* ``Trying(i)`` + failure, i+1 < n → ``Trying(i + 1)``
* ``Trying(i)`` + failure, i+1 = n → ``Exhausted``

:func:`advance` is pure — it performs no I/O — so the "try next on any
failure" rule can be unit-tested without a transport.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from inv_fallback.core.models import InstanceFailure


@dataclass(frozen=True, slots=True)
class Trying:
    index: int


@dataclass(frozen=True, slots=True)
class Succeeded:
    payload: Any
    index: int


@dataclass(frozen=True, slots=True)
class Exhausted:
    failures: tuple[InstanceFailure, ...]


@dataclass(frozen=True, slots=True)
class Success:
    """Outcome of an instance attempt that produced a usable payload."""

    payload: Any


ResolutionState = Union[Trying, Succeeded, Exhausted]
Outcome = Union[Success, InstanceFailure]


def start(count: int) -> ResolutionState:
    """Return the initial state for an instance list of length *count*."""
    if count <= 0:
        return Exhausted(failures=())
    return Trying(index=0)


def advance(
    state: ResolutionState,
    outcome: Outcome,
    failures: tuple[InstanceFailure, ...],
    count: int,
) -> tuple[ResolutionState, tuple[InstanceFailure, ...]]:
    """Apply *outcome* of the current attempt to *state*.

    Parameters
    ----------
    state:
        Must be a :class:`Trying` state.
    outcome:
        :class:`Success` or the :class:`InstanceFailure` of this attempt.
    failures:
        Failures accumulated so far, in trial order.
    count:
        Number of configured instances.

    Returns
    -------
    tuple
        The next state and the updated failure record.

    Raises
    ------
    ValueError
        If *state* is already terminal.
    """
    if not isinstance(state, Trying):
        raise ValueError(f"Cannot advance terminal state {type(state).__name__}")

    if isinstance(outcome, Success):
        return Succeeded(payload=outcome.payload, index=state.index), failures

    recorded = (*failures, outcome)
    next_index = state.index + 1
    if next_index < count:
        return Trying(index=next_index), recorded
    return Exhausted(failures=recorded), recorded


def is_terminal(state: ResolutionState) -> bool:
    return not isinstance(state, Trying)
