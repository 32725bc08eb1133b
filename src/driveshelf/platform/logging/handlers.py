"""Rich console handler for structured feed events.

Where: platform/logging/handlers.py
What: Render ``feed_event`` log records with icons, colors and compact metrics.
Why: Keep population progress readable on the console while the file log stays plain.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class FeedRichHandler(RichHandler):
    """Custom Rich handler that styles feed population events."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "feed.populate.start": ("🚀", "cyan"),
        "feed.populate.complete": ("✅", "green"),
        "feed.track.loaded": ("🎧", "blue"),
        "feed.track.skipped": ("♻️", "yellow"),
        "feed.track.failed": ("⛔", "red"),
        "feed.albums.rebuilt": ("💿", "magenta"),
    }
    _ID_DISPLAY_LIMIT: ClassVar[int] = 24

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize the handler with custom settings.

        Args:
            *args: Positional arguments to pass to RichHandler.
            **kwargs: Keyword arguments to pass to RichHandler.
        """
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    @classmethod
    def _format_file_id(cls, file_id: str) -> Text:
        """Shorten long identifiers (raw links used as ids) with an ellipsis."""

        display = file_id
        if len(display) > cls._ID_DISPLAY_LIMIT:
            display = "…" + display[-(cls._ID_DISPLAY_LIMIT - 1):]
        return Text(display, style=Style(color="white"))

    def _render_feed_message(self, record: logging.LogRecord) -> Text | None:
        """Render structured feed events with dedicated styling."""

        event = getattr(record, "feed_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))
        body = Text(style=Style(color=color))

        if event == "feed.populate.start":
            _ = body.append("Loading metadata")
            total = getattr(record, "total_links", None)
            if isinstance(total, int):
                _ = body.append(f" [links={total}]")
        elif event == "feed.populate.complete":
            _ = body.append("Metadata ready")
            metrics: list[str] = []
            for name in ("loaded", "cached", "failed"):
                value = getattr(record, name, None)
                if isinstance(value, int):
                    metrics.append(f"{name}={value}")
            duration = getattr(record, "duration_seconds", None)
            if isinstance(duration, (int, float)):
                metrics.append(f"duration={duration:.2f}s")
            if metrics:
                _ = body.append(" [" + ", ".join(metrics) + "]")
        elif event == "feed.albums.rebuilt":
            _ = body.append("Albums rebuilt")
            albums = getattr(record, "albums", None)
            tracks = getattr(record, "tracks", None)
            if isinstance(albums, int) and isinstance(tracks, int):
                _ = body.append(f" [albums={albums}, tracks={tracks}]")
        else:
            sequence = getattr(record, "sequence", None)
            total = getattr(record, "total_links", None)
            if isinstance(sequence, int) and sequence > 0:
                if isinstance(total, int) and total > 0:
                    _ = body.append(f"[{sequence}/{total}] ")
                else:
                    _ = body.append(f"[{sequence}] ")

            prefix = {
                "feed.track.loaded": "Loaded ",
                "feed.track.skipped": "Cached ",
                "feed.track.failed": "Skipped ",
            }.get(event)
            if prefix:
                _ = body.append(prefix)

            file_id = getattr(record, "file_id", None)
            if file_id:
                _ = body.append_text(self._format_file_id(str(file_id)))

            details: list[str] = []
            if event == "feed.track.loaded":
                artist = getattr(record, "artist", None)
                title = getattr(record, "title", None)
                label = " - ".join(part for part in [artist, title] if part)
                if label:
                    details.append(label)
            elif event == "feed.track.failed":
                reason = getattr(record, "reason", None)
                if reason:
                    details.append(str(reason))
            if details:
                _ = body.append(" (" + ", ".join(details) + ")")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for feed events."""

        feed_text = self._render_feed_message(record)
        if feed_text is not None:
            return feed_text

        return super().render_message(record, message)


__all__ = ["FeedRichHandler"]
