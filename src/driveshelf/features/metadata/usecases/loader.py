"""src/driveshelf/features/metadata/usecases/loader.py
Where: Metadata feature usecases layer.
What: Populate the MetadataStore from configured share links.
Why: Isolate per-file failures so one unreadable link never aborts a feed load.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

from driveshelf.platform.drive.http_client import DEFAULT_PREFIX_BYTES
from driveshelf.platform.drive.links import direct_download_url, resolve_file_id
from driveshelf.platform.logging import logger
from driveshelf.shared.feed_events import FeedEvent

from .extraction import Extracted, TagExtractor, Unparseable
from .metadata_store import MetadataStore
from .ports import PrefixFetcherPort, TagExtractorPort


@dataclass(slots=True)
class PopulateSummary:
    """Counters for one ``ensure_populated`` pass."""

    total: int = 0
    loaded: int = 0
    cached: int = 0
    failed: int = 0
    duration_seconds: float = 0.0


class MetadataLoader:
    """Fill a MetadataStore by fetching and parsing each link at most once."""

    def __init__(
        self,
        store: MetadataStore,
        fetcher: PrefixFetcherPort,
        extractor: TagExtractorPort | None = None,
        *,
        max_bytes: int = DEFAULT_PREFIX_BYTES,
    ) -> None:
        self._store: MetadataStore = store
        self._fetcher: PrefixFetcherPort = fetcher
        self._extractor: TagExtractorPort = extractor if extractor is not None else TagExtractor()
        self._max_bytes: int = max_bytes
        # Serializes passes so concurrent callers never fetch the same id twice.
        self._pass_lock: Final[threading.Lock] = threading.Lock()

    @property
    def store(self) -> MetadataStore:
        return self._store

    def ensure_populated(self, links: Iterable[str]) -> PopulateSummary:
        """Fetch and parse every link whose id is not settled yet.

        Links are processed in the given order. Failures are logged and
        recorded on the store; nothing propagates to the caller.
        """

        link_list = list(links)
        summary = PopulateSummary(total=len(link_list))
        start = time.perf_counter()

        with self._pass_lock:
            self._log(
                logging.INFO,
                FeedEvent.POPULATE_START,
                "Loading metadata for %d links",
                len(link_list),
                total_links=len(link_list),
            )
            for sequence, link in enumerate(link_list, start=1):
                file_id = resolve_file_id(link)
                if self._store.is_settled(file_id):
                    summary.cached += 1
                    self._log(
                        logging.DEBUG,
                        FeedEvent.TRACK_SKIPPED,
                        "Metadata already settled for %s",
                        file_id,
                        file_id=file_id,
                        sequence=sequence,
                        total_links=len(link_list),
                    )
                    continue

                if self._load_one(file_id, sequence=sequence, total=len(link_list)):
                    summary.loaded += 1
                else:
                    summary.failed += 1

        summary.duration_seconds = time.perf_counter() - start
        self._log(
            logging.INFO,
            FeedEvent.POPULATE_COMPLETE,
            "Metadata ready [loaded=%d, cached=%d, failed=%d]",
            summary.loaded,
            summary.cached,
            summary.failed,
            loaded=summary.loaded,
            cached=summary.cached,
            failed=summary.failed,
            duration_seconds=summary.duration_seconds,
        )
        return summary

    def _load_one(self, file_id: str, *, sequence: int, total: int) -> bool:
        """Fetch, parse and store one id; return whether an entry was stored."""

        context = {"file_id": file_id, "sequence": sequence, "total_links": total}
        try:
            data = self._fetcher.fetch_prefix(direct_download_url(file_id), self._max_bytes)
            if not data:
                self._fail(file_id, "no data", context)
                return False

            result = self._extractor.extract(data)
            if not isinstance(result, Extracted):
                reason = result.reason if isinstance(result, Unparseable) else "no metadata"
                self._fail(file_id, reason, context)
                return False
        except Exception as exc:
            logger.debug("Unexpected failure while loading %s", file_id, exc_info=True)
            self._fail(file_id, f"{type(exc).__name__}: {exc}", context)
            return False

        metadata = result.metadata
        _ = self._store.put(file_id, metadata)
        self._log(
            logging.INFO,
            FeedEvent.TRACK_LOADED,
            "Loaded metadata for %s (%s - %s)",
            file_id,
            metadata.artist,
            metadata.title,
            artist=metadata.artist,
            title=metadata.title,
            **context,
        )
        return True

    def _fail(self, file_id: str, reason: str, context: dict[str, object]) -> None:
        self._store.mark_failed(file_id)
        self._log(
            logging.WARNING,
            FeedEvent.TRACK_FAILED,
            "Skipping %s: %s",
            file_id,
            reason,
            reason=reason,
            **context,
        )

    @staticmethod
    def _log(
        level: int,
        event: FeedEvent,
        message: str,
        *message_args: object,
        **context: object,
    ) -> None:
        logger.log(level, message, *message_args, extra={"feed_event": event.value, **context})


__all__ = ["MetadataLoader", "PopulateSummary"]
