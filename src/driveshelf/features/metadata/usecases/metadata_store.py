"""
Summary: In-memory, write-once mapping from Drive file id to TrackMetadata.
Why: Memoizes the expensive fetch-and-parse step so repeated feed loads stay cheap.
"""

from __future__ import annotations

import threading
from typing import Final

from driveshelf.platform.logging import logger
from driveshelf.shared.track_metadata import TrackMetadata


class MetadataStore:
    """Thread-safe metadata cache owned by one feed session.

    Entries are written once per id. Ids whose single fetch attempt failed are
    remembered separately so a later pass does not retry them; ``clear`` is the
    only way to forget both.
    """

    def __init__(self) -> None:
        self._lock: Final[threading.Lock] = threading.Lock()
        self._entries: dict[str, TrackMetadata] = {}
        self._failed: set[str] = set()

    def get(self, file_id: str) -> TrackMetadata | None:
        with self._lock:
            return self._entries.get(file_id)

    def put(self, file_id: str, metadata: TrackMetadata) -> bool:
        """Store ``metadata`` unless ``file_id`` already has an entry."""

        with self._lock:
            if file_id in self._entries:
                logger.debug("Metadata for %s already cached; keeping first entry", file_id)
                return False
            self._entries[file_id] = metadata
            self._failed.discard(file_id)
            return True

    def mark_failed(self, file_id: str) -> None:
        with self._lock:
            if file_id not in self._entries:
                self._failed.add(file_id)

    def has_failed(self, file_id: str) -> bool:
        with self._lock:
            return file_id in self._failed

    def is_settled(self, file_id: str) -> bool:
        """Return whether ``file_id`` was already loaded or already failed."""

        with self._lock:
            return file_id in self._entries or file_id in self._failed

    def items(self) -> list[tuple[str, TrackMetadata]]:
        """Snapshot of stored entries in insertion order."""

        with self._lock:
            return list(self._entries.items())

    def is_empty(self) -> bool:
        with self._lock:
            return not self._entries

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._failed.clear()

    def __contains__(self, file_id: object) -> bool:
        with self._lock:
            return file_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["MetadataStore"]
