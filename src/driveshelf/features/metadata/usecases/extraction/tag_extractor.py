"""Audio tag extraction from downloaded byte prefixes.

Where: src/driveshelf/features/metadata/usecases/extraction/tag_extractor.py
What: Provide the TagExtractor facade routing parsed files to format readers.
Why: Callers get a result value instead of exceptions so one bad file never aborts a feed load.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, ClassVar, Final

import mutagen
from mutagen.id3 import ID3

from driveshelf.platform.logging import logger
from driveshelf.shared.track_metadata import TrackMetadata

from ._base_extractors import TagReader, read_duration
from .format_extractors import Id3TagReader, Mp4TagReader, VorbisTagReader
from .staging import id3_tag_size, staged_copy

__all__ = [
    "Extracted",
    "ExtractionResult",
    "TagExtractor",
    "Unparseable",
]


@dataclass(frozen=True, slots=True)
class Extracted:
    """Successful extraction."""

    metadata: TrackMetadata


@dataclass(frozen=True, slots=True)
class Unparseable:
    """The buffer could not be read as a tagged audio container."""

    reason: str


ExtractionResult = Extracted | Unparseable

# Largest gap between a cut-off ID3 tag and its declared size that is padded.
_MAX_ID3_PADDING: Final[int] = 16 * 1024 * 1024


@dataclass(frozen=True, slots=True)
class _TagOnlyAudio:
    """Stand-in for a parsed file when only its tag block could be read."""

    tags: Any
    info: None = None


class TagExtractor:
    """Facade for extracting TrackMetadata from the leading bytes of an audio file.

    The bytes are staged to a temporary file, identified by ``mutagen.File``
    and handed to the reader matching the file's tag container. Files without
    a tag block still yield metadata (placeholders plus stream duration).
    """

    _readers: ClassVar[tuple[TagReader, ...]] = (
        Id3TagReader(),
        VorbisTagReader(),
        Mp4TagReader(),
    )

    def extract(self, data: bytes) -> ExtractionResult:
        """Parse ``data`` and return ``Extracted`` or ``Unparseable``."""

        if not data:
            return Unparseable("empty buffer")

        try:
            with staged_copy(data) as path:
                audio = mutagen.File(str(path))
                if audio is None:
                    return Unparseable("unrecognized container")
                metadata = self._read(audio)
        # mutagen raises assorted error types on truncated or corrupt input
        except Exception as exc:
            logger.debug("Tag parsing failed: %s", exc, exc_info=True)
            recovered = self._read_id3_only(data)
            if recovered is not None:
                return Extracted(recovered)
            return Unparseable(f"{type(exc).__name__}: {exc}")

        return Extracted(metadata)

    @staticmethod
    def _read_id3_only(data: bytes) -> TrackMetadata | None:
        """Read ID3 text frames when the stream behind the tag is missing.

        A large cover can push the tag past the downloaded prefix, or leave no
        audio frame for mutagen to sync on. The tag is zero-padded to its
        declared size and read on its own; artwork is dropped when the tag was
        cut short since the picture bytes are incomplete.
        """

        declared = id3_tag_size(data)
        if declared is None or declared - len(data) > _MAX_ID3_PADDING:
            return None
        truncated = len(data) < declared
        try:
            with staged_copy(data[:declared].ljust(declared, b"\x00")) as path:
                tags = ID3(str(path))
        except Exception as exc:
            logger.debug("ID3 tag unreadable on its own: %s", exc)
            return None

        logger.debug("Recovered ID3 text frames without audio stream (truncated=%s)", truncated)
        metadata = Id3TagReader().read(_TagOnlyAudio(tags))
        return replace(metadata, album_art=None) if truncated else metadata

    @classmethod
    def _read(cls, audio: Any) -> TrackMetadata:
        tags = audio.tags
        for reader in cls._readers:
            if reader.supports(tags):
                logger.debug("Reading %s with %s", type(audio).__name__, type(reader).__name__)
                return reader.read(audio)

        logger.debug("No tag block in %s; using placeholders", type(audio).__name__)
        return TrackMetadata(duration_seconds=read_duration(audio))
