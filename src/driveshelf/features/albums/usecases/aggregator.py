"""Album grouping over the metadata cache.

Where: features/albums/usecases.
What: Build the album-name keyed AlbumStore from a full pass over MetadataStore.
Why: Albums are derived data; rebuilding wholesale keeps them consistent with the cache.
"""

from __future__ import annotations

import logging
import threading
from typing import Final

from driveshelf.features.metadata.usecases.metadata_store import MetadataStore
from driveshelf.platform.logging import logger
from driveshelf.shared.album_data import UNKNOWN_ALBUM, AlbumData
from driveshelf.shared.feed_events import FeedEvent


class AlbumStore:
    """Album name -> AlbumData mapping swapped atomically on rebuild."""

    def __init__(self) -> None:
        self._lock: Final[threading.Lock] = threading.Lock()
        self._albums: dict[str, AlbumData] = {}

    def replace(self, albums: dict[str, AlbumData]) -> None:
        with self._lock:
            self._albums = albums

    def get(self, name: str) -> AlbumData | None:
        with self._lock:
            return self._albums.get(name)

    def values(self) -> list[AlbumData]:
        with self._lock:
            return list(self._albums.values())

    def clear(self) -> None:
        with self._lock:
            self._albums = {}

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._albums

    def __len__(self) -> int:
        with self._lock:
            return len(self._albums)


class AlbumAggregator:
    """Group cached tracks into albums.

    The first track seen for an album name seeds the album's artist, year,
    genre and artwork; later tracks only append their ids. This tie-break is
    intentional and does not depend on which values are "better".
    """

    def __init__(self, albums: AlbumStore | None = None) -> None:
        self._albums: AlbumStore = albums if albums is not None else AlbumStore()

    @property
    def albums(self) -> AlbumStore:
        return self._albums

    def rebuild(self, store: MetadataStore) -> AlbumStore:
        """Regroup every entry of ``store`` and publish the result."""

        grouped: dict[str, AlbumData] = {}
        track_count = 0
        for file_id, metadata in store.items():
            album_name = metadata.album or UNKNOWN_ALBUM
            album = grouped.get(album_name)
            if album is None:
                album = AlbumData(
                    name=album_name,
                    artist=metadata.artist,
                    year=metadata.year,
                    genre=metadata.genre,
                    artwork=metadata.album_art,
                )
                grouped[album_name] = album
            album.track_ids.append(file_id)
            track_count += 1

        self._albums.replace(grouped)
        logger.info(
            "Albums rebuilt [albums=%d, tracks=%d]",
            len(grouped),
            track_count,
            extra={
                "feed_event": FeedEvent.ALBUMS_REBUILT.value,
                "albums": len(grouped),
                "tracks": track_count,
            },
        )
        return self._albums


__all__ = ["AlbumAggregator", "AlbumStore"]
