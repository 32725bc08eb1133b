# Where: driveshelf.shared.__init__
# What: Provide a concise import surface for shared dataclasses.
# Why: Encourage consistent reuse of shared types across features.

"""Shared cross-cutting types exposed at the package level."""

from .album_data import UNKNOWN_ALBUM, AlbumData
from .feed_events import FeedEvent
from .track_metadata import UNKNOWN_ARTIST, UNKNOWN_TITLE, TrackMetadata

__all__ = [
    "AlbumData",
    "FeedEvent",
    "TrackMetadata",
    "UNKNOWN_ALBUM",
    "UNKNOWN_ARTIST",
    "UNKNOWN_TITLE",
]
