"""``inv-fallback doctor`` — environment and instance diagnostics.

Gathers runtime information, probes every configured instance once and
renders a Rich table summarising the results.  Nothing learned here is
persisted; the next resolution still walks the configured order.
"""

from __future__ import annotations

import platform
import sys

from inv_fallback.cli import exit_codes
from inv_fallback.cli.console import console, escape_markup
from inv_fallback.config import ClientConfig, build_client
from inv_fallback.core.models import InstanceProbe
from inv_fallback.exceptions import EnvironmentError
from inv_fallback.version import __version__

Check = tuple[str, str, str]

PROBE_PATH = "/trending"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> Check:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    major, minor = sys.version_info[:2]
    ok = (major, minor) >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _requests_version_check() -> Check:
    try:
        import requests
    except ImportError:
        return "requests", "NOT INSTALLED", "[red]FAIL[/red]"
    return "requests", getattr(requests, "__version__", "unknown"), "[green]OK[/green]"


def _rich_version_check() -> Check:
    try:
        from importlib.metadata import PackageNotFoundError, version

        return "rich", version("rich"), "[green]OK[/green]"
    except PackageNotFoundError:
        return "rich", "NOT INSTALLED", "[yellow]WARN[/yellow]"


def _probe_row(probe: InstanceProbe) -> Check:
    """Return (label, value, status) for one instance probe."""
    label = escape_markup(probe.instance)
    if probe.ok:
        return label, f"{probe.elapsed * 1000:.0f} ms", "[green]OK[/green]"
    reason = probe.failure.reason if probe.failure else "unavailable"
    return label, escape_markup(reason), "[yellow]DOWN[/yellow]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "DOWN", "WARN", "OK"):
        if word in status:
            return word
    return status


def _render(checks: list[Check]) -> None:
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        print("\ninv-fallback doctor", file=sys.stderr)
        print("=" * 72, file=sys.stderr)
        for label, value, status in checks:
            print(f"{label:<36} {value:<24} {_status_plain(status):<6}", file=sys.stderr)
        print(file=sys.stderr)
        return

    table = Table(
        title="inv-fallback doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(config: ClientConfig) -> int:
    """Run all checks, probe each instance and render the summary.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when the environment is sound and at
        least one instance answered, :data:`exit_codes.GENERAL_ERROR`
        otherwise.
    """
    checks: list[Check] = [
        ("inv-fallback", __version__, "[green]OK[/green]"),
        _python_version_check(),
        _requests_version_check(),
        _rich_version_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    probes: tuple[InstanceProbe, ...] = ()
    try:
        client = build_client(config)
    except EnvironmentError:
        has_failure = True
    else:
        with client, console.status(f"Probing {len(config.instances)} instance(s)…"):
            probes = client.probe(PROBE_PATH)
        checks.extend(_probe_row(probe) for probe in probes)
        if not any(probe.ok for probe in probes):
            has_failure = True

    _render(checks)

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR
    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
