"""Application service exposing the album feed to a host.

This layer owns the session's caches and wires the Drive client, tag
extractor, aggregator and projector together so hosts only deal with
settings and feed entries.
"""

from __future__ import annotations

import threading
from types import TracebackType
from typing import Final, final

from driveshelf.config.config import Config
from driveshelf.config.settings import SETTING_ITEMS, FeedSettings, SettingItem
from driveshelf.features.albums import AlbumAggregator, AlbumStore
from driveshelf.features.feed import AlbumSummary, FeedProjector, PlayableTrack, Shelf, TrackSummary
from driveshelf.features.metadata import MetadataLoader, MetadataStore, PopulateSummary
from driveshelf.features.metadata.usecases.ports import PrefixFetcherPort, TagExtractorPort
from driveshelf.platform.drive.http_client import DEFAULT_PREFIX_BYTES, DriveHTTPClient
from driveshelf.platform.logging import logger, setup_logger

ALBUMS_SHELF_TITLE: Final[str] = "Albums"


@final
class FeedService:
    """Session object backing one host extension instance.

    Both caches live exactly as long as the service; ``reset`` clears them
    and ``close`` releases the HTTP session when the service created it.
    """

    def __init__(
        self,
        *,
        fetcher: PrefixFetcherPort | None = None,
        extractor: TagExtractorPort | None = None,
        metadata_store: MetadataStore | None = None,
        album_store: AlbumStore | None = None,
        prefix_bytes: int = DEFAULT_PREFIX_BYTES,
    ) -> None:
        """Create a service with overridable collaborators.

        Tests can inject light-weight doubles while production code relies on
        the default Drive client and mutagen-backed extractor.
        """

        self._owns_fetcher: bool = fetcher is None
        self._fetcher: PrefixFetcherPort = fetcher if fetcher is not None else DriveHTTPClient()
        self._metadata: MetadataStore = metadata_store if metadata_store is not None else MetadataStore()
        self._albums: AlbumStore = album_store if album_store is not None else AlbumStore()
        self._loader: MetadataLoader = MetadataLoader(
            self._metadata,
            self._fetcher,
            extractor,
            max_bytes=prefix_bytes,
        )
        self._aggregator: AlbumAggregator = AlbumAggregator(self._albums)
        self._projector: FeedProjector = FeedProjector(self._metadata)
        self._settings: FeedSettings = FeedSettings()
        self._refresh_lock: Final[threading.Lock] = threading.Lock()

    @classmethod
    def from_config(cls, config: Config) -> "FeedService":
        """Build and initialize a service from the TOML-backed configuration.

        A configured ``log_file`` redirects the file log before anything is loaded.
        """

        if config.log_file is not None:
            _ = setup_logger(log_file=config.log_file)
        service = cls(
            fetcher=DriveHTTPClient(timeout=config.timeout),
            prefix_bytes=config.prefix_bytes,
        )
        service._owns_fetcher = True
        service.initialize(FeedSettings.from_config(config))
        return service

    @staticmethod
    def setting_items() -> list[SettingItem]:
        """Return the settings schema the host should render."""

        return list(SETTING_ITEMS)

    @property
    def settings(self) -> FeedSettings:
        return self._settings

    @property
    def metadata(self) -> MetadataStore:
        return self._metadata

    @property
    def albums(self) -> AlbumStore:
        return self._albums

    def initialize(self, settings: FeedSettings) -> None:
        """Adopt the host's current settings; links are re-read only here."""

        self._settings = settings
        logger.info("Loaded %d music links", len(settings.links))

    def refresh(self) -> PopulateSummary | None:
        """Populate and regroup when reading is enabled and the cache is empty."""

        if not self._settings.read_metadata:
            return None
        with self._refresh_lock:
            if not self._metadata.is_empty():
                return None
            summary = self._loader.ensure_populated(self._settings.links)
            _ = self._aggregator.rebuild(self._metadata)
            return summary

    def load_home_feed(self) -> list[Shelf]:
        """Return the album shelf, populating the caches on first access."""

        if not self._settings.read_metadata:
            return []
        _ = self.refresh()
        if not len(self._albums):
            return []
        return [Shelf(title=ALBUMS_SHELF_TITLE, items=self._projector.project_albums(self._albums))]

    def load_album(self, album_id: str) -> AlbumSummary | None:
        album = self._albums.get(album_id)
        return self._projector.project_album(album) if album is not None else None

    def load_album_tracks(self, album_id: str) -> list[TrackSummary] | None:
        """Return the album's tracks in stored order, or None for unknown albums."""

        album = self._albums.get(album_id)
        if album is None:
            return None
        return self._projector.project_tracks(album)

    def load_track(self, track: TrackSummary) -> PlayableTrack:
        """Attach the direct media URL to ``track``."""

        return PlayableTrack(
            track=track,
            audio_url=self._projector.resolve_playback_source(track.id),
        )

    def reset(self) -> None:
        """Drop every cached entry; the next feed load fetches again."""

        with self._refresh_lock:
            self._metadata.clear()
            self._albums.clear()
        logger.info("Feed caches cleared")

    def close(self) -> None:
        if self._owns_fetcher and isinstance(self._fetcher, DriveHTTPClient):
            self._fetcher.close()

    def __enter__(self) -> "FeedService":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["ALBUMS_SHELF_TITLE", "FeedService"]
