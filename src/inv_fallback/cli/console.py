"""CLI console helpers with optional Rich support.

This module avoids module-level imports of Rich so bootstrap paths
(``--help``, ``--version``) remain functional even when Rich is not
installed.
"""

from __future__ import annotations

import contextlib
import sys
from collections.abc import Iterator
from typing import Any

from inv_fallback.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console(*, stderr: bool = True) -> Any:
    """Create a Rich console instance (stderr by default)."""
    console_class = _load_rich_console_class()
    return console_class(stderr=stderr)


def escape_markup(text: str) -> str:
    """Escape Rich markup in untrusted text; plain output needs none."""
    try:
        from rich.markup import escape
    except ModuleNotFoundError:
        return text
    return escape(text)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with plain-text fallback."""

    def __init__(self, *, stderr: bool) -> None:
        self._stderr = stderr

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain print."""
        try:
            rich_console = get_rich_console(stderr=self._stderr)
        except EnvironmentError:
            print(*objects, file=sys.stderr if self._stderr else sys.stdout)
            return
        rich_console.print(*objects)

    @contextlib.contextmanager
    def status(self, message: str) -> Iterator[None]:
        """Show a spinner while the body runs (no-op without Rich)."""
        try:
            rich_console = get_rich_console(stderr=True)
        except EnvironmentError:
            print(message, file=sys.stderr)
            yield
            return
        with rich_console.status(message):
            yield


console = _ConsoleProxy(stderr=True)
"""Diagnostics, loading state and errors — stderr."""

out = _ConsoleProxy(stderr=False)
"""Rendered results — stdout."""
