# Where: driveshelf.shared.track_metadata
# What: Canonical TrackMetadata dataclass shared across features.
# Why: Centralize the per-file tag snapshot produced by extraction.

from dataclasses import dataclass

UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_ARTIST = "Unknown Artist"


@dataclass(frozen=True, slots=True)
class TrackMetadata:
    """Metadata for a remotely hosted music track."""

    title: str = UNKNOWN_TITLE
    artist: str = UNKNOWN_ARTIST
    album: str | None = None
    year: str | None = None
    genre: str | None = None
    album_art: str | None = None
    duration_seconds: int | None = None


__all__ = ["TrackMetadata", "UNKNOWN_ARTIST", "UNKNOWN_TITLE"]
