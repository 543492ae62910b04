"""Shared pytest fixtures and configuration for the inv-fallback test suite.

Guidelines
----------
* No internet access in any test.
* The transport is mocked at the protocol boundary; ``requests`` is
  mocked at the infra boundary.
* Core tests must be pure — no side effects.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any
from unittest.mock import MagicMock

import pytest

X = "https://x.example"
Y = "https://y.example"
Z = "https://z.example"


def scripted_transport(script: Mapping[str, Any]) -> MagicMock:
    """Return a mock Transport keyed by instance base URL.

    Each value is either the payload ``get_json`` returns for that
    instance or an exception it raises.
    """
    transport = MagicMock()

    def _get_json(url: str, *, timeout: float) -> Any:
        for instance, outcome in script.items():
            if url.startswith(instance + "/"):
                if isinstance(outcome, BaseException):
                    raise outcome
                return outcome
        raise LookupError(f"unscripted URL: {url}")

    transport.get_json.side_effect = _get_json
    return transport


def contacted(transport: MagicMock) -> list[str]:
    """URLs passed to ``get_json``, in call order."""
    return [c.args[0] for c in transport.get_json.call_args_list]


@pytest.fixture
def make_transport() -> Callable[[Mapping[str, Any]], MagicMock]:
    return scripted_transport
