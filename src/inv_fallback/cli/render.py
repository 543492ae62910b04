"""Terminal rendering of resolved resources.

This module is responsible for:

* Rendering video, search, channel and playlist models as Rich tables.
* Rendering the failure state when every instance is unavailable.

All display-related logic lives here — no resolution, no parsing.
Media URLs are printed verbatim; nothing is fetched or proxied.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from inv_fallback.cli.console import console, escape_markup, out
from inv_fallback.core.models import (
    Channel,
    InstanceFailure,
    Playlist,
    SearchItem,
    VideoDetail,
)


def _import_rich_table() -> type[Any] | None:
    """Import rich table lazily; ``None`` when Rich is missing."""
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        return None
    return Table


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms — no I/O themselves)
# ---------------------------------------------------------------------------

def format_count(value: int | None) -> str:
    """Render a count with thousands separators or ``"—"``."""
    if value is None:
        return "—"
    return f"{value:,}"


def format_duration(seconds: int | None) -> str:
    """Render seconds as ``m:ss`` / ``h:mm:ss`` or ``"—"``."""
    if seconds is None or seconds < 0:
        return "—"
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def _truncate(text: str, limit: int = 400) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def _render_rows(
    title: str,
    columns: Sequence[str],
    rows: Sequence[Sequence[str]],
) -> None:
    """Print *rows* as a Rich table, or as aligned plain text."""
    table_class = _import_rich_table()
    if table_class is None:
        out.print(title)
        for row in rows:
            out.print("  " + "  |  ".join(row))
        return

    table = table_class(
        title=title,
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*row)
    out.print(table)


# ---------------------------------------------------------------------------
# Resource renderers
# ---------------------------------------------------------------------------

def render_video(video: VideoDetail) -> None:
    out.print(f"[bold cyan]{escape_markup(video.title)}[/bold cyan]")
    out.print(
        f"[bold]Author:[/bold] {escape_markup(video.author)}  "
        f"({escape_markup(video.author_id)})"
    )
    out.print(
        f"[bold]Views:[/bold] {format_count(video.view_count)}   "
        f"[bold]Likes:[/bold] {format_count(video.like_count)}"
    )
    avatar = video.author_thumbnail()
    if avatar:
        out.print(f"[bold]Avatar:[/bold] {escape_markup(avatar)}")
    if video.playable_url:
        out.print(f"[bold]Stream:[/bold] {escape_markup(video.playable_url)}")
    else:
        out.print("[yellow]No playable stream reported by the instance.[/yellow]")
    if video.description:
        out.print()
        out.print(escape_markup(_truncate(video.description)))


def render_search(query: str, items: Sequence[SearchItem]) -> None:
    if not items:
        out.print(f"No videos found for “{escape_markup(query)}”.")
        return
    _render_rows(
        f"Search results for “{escape_markup(query)}”",
        ("Video ID", "Title", "Author", "Length", "Views"),
        [
            (
                escape_markup(item.video_id),
                escape_markup(item.title),
                escape_markup(item.author),
                format_duration(item.length_seconds),
                format_count(item.view_count),
            )
            for item in items
        ],
    )


def render_channel(channel: Channel) -> None:
    out.print(
        f"[bold cyan]{escape_markup(channel.author)}[/bold cyan]  "
        f"({escape_markup(channel.author_id)})"
    )
    out.print(f"[bold]Subscribers:[/bold] {format_count(channel.sub_count)}")
    if channel.description:
        out.print(escape_markup(_truncate(channel.description)))
    if channel.latest_videos:
        out.print()
        _render_rows(
            "Latest videos",
            ("Video ID", "Title", "Length"),
            [
                (
                    escape_markup(v.video_id),
                    escape_markup(v.title),
                    format_duration(v.length_seconds),
                )
                for v in channel.latest_videos
            ],
        )


def render_playlist(playlist: Playlist) -> None:
    out.print(f"[bold cyan]{escape_markup(playlist.title)}[/bold cyan]")
    out.print(
        f"[bold]Author:[/bold] {escape_markup(playlist.author)}   "
        f"[bold]Videos:[/bold] {format_count(playlist.video_count)}"
    )
    if playlist.videos:
        _render_rows(
            "Videos",
            ("#", "Video ID", "Title", "Length"),
            [
                (
                    str(entry.index) if entry.index is not None else "—",
                    escape_markup(entry.video_id),
                    escape_markup(entry.title),
                    format_duration(entry.length_seconds),
                )
                for entry in playlist.videos
            ],
        )


def render_json(payload: Any) -> None:
    """Print the raw payload as indented JSON on stdout."""
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def render_failures(failures: Sequence[InstanceFailure]) -> None:
    """Render the per-instance reasons of an exhausted resolution."""
    console.print("[bold red]Could not load this resource from any instance.[/bold red]")
    for index, failure in enumerate(failures, start=1):
        console.print(
            f"  {index}. {escape_markup(failure.instance)} — "
            f"{escape_markup(failure.reason)}"
        )
