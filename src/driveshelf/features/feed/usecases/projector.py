"""
Summary: Project cached albums and tracks into ordered feed entries.
Why: Keep listing order, subtitles and fallbacks out of the session service.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

from driveshelf.features.albums.usecases.aggregator import AlbumStore
from driveshelf.features.metadata.usecases.metadata_store import MetadataStore
from driveshelf.platform.drive.links import direct_download_url
from driveshelf.shared.album_data import AlbumData
from driveshelf.shared.track_metadata import UNKNOWN_ARTIST

from ..domain.models import AlbumRef, AlbumSummary, ArtistRef, TrackSummary

SUBTITLE_SEPARATOR: Final[str] = " • "
UNKNOWN_ARTIST_ID: Final[str] = "unknown"


def build_album_subtitle(album: AlbumData) -> str:
    """Join year, genre and the track count, skipping absent parts."""

    parts: list[str] = []
    if album.year:
        parts.append(album.year)
    if album.genre:
        parts.append(album.genre)
    parts.append(f"{len(album.track_ids)} tracks")
    return SUBTITLE_SEPARATOR.join(parts)


class FeedProjector:
    """Turn album and metadata caches into host-facing listings."""

    def __init__(self, metadata: MetadataStore) -> None:
        self._metadata: MetadataStore = metadata

    def project_albums(self, albums: AlbumStore | Iterable[AlbumData]) -> list[AlbumSummary]:
        """Return album summaries sorted by album name."""

        source = albums.values() if isinstance(albums, AlbumStore) else list(albums)
        return [self.project_album(album) for album in sorted(source, key=lambda a: a.name)]

    @staticmethod
    def project_album(album: AlbumData) -> AlbumSummary:
        return AlbumSummary(
            id=album.name,
            title=album.name,
            cover=album.artwork,
            artist=ArtistRef(id=album.artist, name=album.artist),
            subtitle=build_album_subtitle(album),
        )

    def project_tracks(self, album: AlbumData) -> list[TrackSummary]:
        """Return one summary per track id, in stored order."""

        return [self._project_track(file_id, index) for index, file_id in enumerate(album.track_ids)]

    def _project_track(self, file_id: str, index: int) -> TrackSummary:
        metadata = self._metadata.get(file_id)
        if metadata is None:
            return TrackSummary(
                id=file_id,
                title=f"Track {index + 1}",
                artist=ArtistRef(id=UNKNOWN_ARTIST_ID, name=UNKNOWN_ARTIST),
            )

        album_ref = (
            AlbumRef(id=metadata.album, title=metadata.album, cover=metadata.album_art)
            if metadata.album
            else None
        )
        return TrackSummary(
            id=file_id,
            title=metadata.title,
            artist=ArtistRef(id=metadata.artist, name=metadata.artist),
            album=album_ref,
            duration_seconds=metadata.duration_seconds,
            cover=metadata.album_art,
        )

    @staticmethod
    def resolve_playback_source(file_id: str) -> str:
        """Resolve the direct media URL for a track about to be played."""

        return direct_download_url(file_id)


__all__ = [
    "FeedProjector",
    "SUBTITLE_SEPARATOR",
    "UNKNOWN_ARTIST_ID",
    "build_album_subtitle",
]
