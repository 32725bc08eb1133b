"""
Summary: Structured event identifiers attached to feed log records.
Why: Let the Rich console handler style population progress consistently.
"""

from __future__ import annotations

from enum import StrEnum


class FeedEvent(StrEnum):
    """Structured event identifiers for feed population logs."""

    POPULATE_START = "feed.populate.start"
    POPULATE_COMPLETE = "feed.populate.complete"
    TRACK_LOADED = "feed.track.loaded"
    TRACK_SKIPPED = "feed.track.skipped"
    TRACK_FAILED = "feed.track.failed"
    ALBUMS_REBUILT = "feed.albums.rebuilt"


__all__ = ["FeedEvent"]
