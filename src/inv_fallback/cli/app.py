"""CLI application entry point and command routing for inv-fallback.

This module is the **sole error boundary** for the entire application.
It catches :class:`~inv_fallback.exceptions.InvFallbackError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages and returning well-defined exit codes.

Architecture notes
------------------
* No resolution logic lives here — all work is delegated to the
  fallback client.
* Exhaustion of every instance is an expected outcome rendered as a
  failure state with its own exit code, not a crash.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from typing import Any

from inv_fallback.cli import exit_codes
from inv_fallback.cli.console import console, escape_markup
from inv_fallback.exceptions import AllInstancesUnavailableError, InvFallbackError
from inv_fallback.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``inv-fallback video ID``
    * ``inv-fallback search QUERY...``
    * ``inv-fallback channel ID``
    * ``inv-fallback playlist ID``
    * ``inv-fallback doctor``
    """
    parser = argparse.ArgumentParser(
        prog="inv-fallback",
        description="Query Invidious instances with ordered fallback.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-i",
        "--instance",
        dest="instances",
        action="append",
        metavar="URL",
        help="Instance base URL; repeat to set trial order.",
    )
    parser.add_argument(
        "-t",
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Per-instance timeout (default: 5).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the raw payload instead of a formatted view.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log instance attempts (-vv for debug detail).",
    )

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.add_parser("video", help="Show video details.").add_argument("id")
    sub.add_parser("search", help="Search videos.").add_argument("query", nargs="+")
    sub.add_parser("channel", help="Show a channel.").add_argument("id")
    sub.add_parser("playlist", help="Show a playlist.").add_argument("id")
    sub.add_parser("doctor", help="Check the environment and probe instances.")
    return parser


def _configure_logging(verbosity: int) -> None:
    if verbosity <= 0:
        return
    logging.basicConfig(
        level=logging.DEBUG if verbosity > 1 else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_resource(args: argparse.Namespace) -> int:
    """Resolve one resource and render it.

    Flow:
    1. Load configuration and wire the client.
    2. Resolve with a loading spinner.
    3. Render the typed result, the raw JSON, or the failure state.
    """
    from inv_fallback.cli import render
    from inv_fallback.config import build_client, load_config
    from inv_fallback.core import parsing, resources
    from inv_fallback.core.models import ResourceKind

    config = load_config(instances=args.instances, timeout=args.timeout)

    value = " ".join(args.query) if args.command == "search" else args.id
    kind = ResourceKind(args.command)
    request = resources.build_request(kind, value)

    parsers: dict[str, Callable[[Any], Any]] = {
        "video": parsing.parse_video,
        "search": parsing.parse_search_results,
        "channel": parsing.parse_channel,
        "playlist": parsing.parse_playlist,
    }
    parser = None if args.json else parsers[args.command]

    try:
        with build_client(config) as client, console.status(f"Loading {args.command}…"):
            result = client.resolve_request(request, parser=parser)
    except AllInstancesUnavailableError as exc:
        render.render_failures(exc.failures)
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")
        return exit_codes.INSTANCES_UNAVAILABLE

    if args.json:
        render.render_json(result)
    elif args.command == "video":
        render.render_video(result)
    elif args.command == "search":
        render.render_search(value, result)
    elif args.command == "channel":
        render.render_channel(result)
    else:
        render.render_playlist(result)
    return exit_codes.SUCCESS


def _handle_doctor(args: argparse.Namespace) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from inv_fallback.cli.doctor import run_doctor
    from inv_fallback.config import load_config

    return run_doctor(load_config(instances=args.instances, timeout=args.timeout))


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the inv-fallback CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    _configure_logging(args.verbose)

    if args.command == "doctor":
        return _handle_doctor(args)
    return _handle_resource(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    Wraps :func:`main` and guarantees the process never exits with a raw
    stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except InvFallbackError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape_markup(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape_markup(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
