# Where: driveshelf.shared.album_data
# What: AlbumData dataclass describing one grouped album.
# Why: Shared by the aggregator that builds it and the projector that reads it.

from dataclasses import dataclass, field

UNKNOWN_ALBUM = "Unknown Album"


@dataclass(slots=True)
class AlbumData:
    """Album-level attributes plus the ids of the tracks grouped under it."""

    name: str
    artist: str
    year: str | None = None
    genre: str | None = None
    artwork: str | None = None
    track_ids: list[str] = field(default_factory=list)


__all__ = ["AlbumData", "UNKNOWN_ALBUM"]
