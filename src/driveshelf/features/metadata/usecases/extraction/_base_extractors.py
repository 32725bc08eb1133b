"""Shared base classes for tag readers.

Where: src/driveshelf/features/metadata/usecases/extraction/_base_extractors.py
What: Define the abstract reader that turns a parsed mutagen file into TrackMetadata.
Why: Format readers only declare where fields live; defaults and artwork encoding stay here.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Any, ClassVar

from driveshelf.platform.logging import logger
from driveshelf.shared.track_metadata import UNKNOWN_ARTIST, UNKNOWN_TITLE, TrackMetadata

from ._tag_utils import clean_text, guess_image_mime, normalize_year, to_data_uri

__all__ = [
    "EmbeddedPicture",
    "TagReader",
    "read_duration",
]


@dataclass(frozen=True, slots=True)
class EmbeddedPicture:
    """An image embedded in a tag block."""

    data: bytes
    mime: str | None = None
    is_front_cover: bool = False


def read_duration(audio: Any) -> int | None:
    """Return the stream length in whole seconds from the container header."""

    info = getattr(audio, "info", None)
    length = getattr(info, "length", None)
    if isinstance(length, (int, float)) and length > 0:
        return int(length)
    return None


class TagReader(abc.ABC):
    """Base class for format-specific tag readers."""

    # Field name -> tag keys tried in order.
    TAG_MAPPING: ClassVar[dict[str, tuple[str, ...]]] = {
        "title": (),
        "artist": (),
        "album": (),
        "year": (),
        "genre": (),
    }

    @abc.abstractmethod
    def supports(self, tags: Any) -> bool:
        """Return whether ``tags`` is the tag container this reader understands."""
        raise NotImplementedError

    @abc.abstractmethod
    def _get_tag_value(self, tags: Any, key: str) -> str | None:
        """Get a single text value for ``key``."""
        raise NotImplementedError

    @abc.abstractmethod
    def _get_pictures(self, audio: Any) -> list[EmbeddedPicture]:
        """Collect embedded pictures in tag order."""
        raise NotImplementedError

    def read_field(self, tags: Any, field_name: str) -> str | None:
        for key in self.TAG_MAPPING[field_name]:
            value = clean_text(self._get_tag_value(tags, key))
            if value is not None:
                return value
        return None

    def read_artwork(self, audio: Any) -> str | None:
        """Encode the front cover (or the first picture) as a data URI."""

        pictures = [picture for picture in self._get_pictures(audio) if picture.data]
        if not pictures:
            return None
        chosen = next((p for p in pictures if p.is_front_cover), pictures[0])
        return to_data_uri(chosen.data, guess_image_mime(chosen.data, chosen.mime))

    def read(self, audio: Any) -> TrackMetadata:
        """Build TrackMetadata from a parsed mutagen file."""

        tags = audio.tags
        title = self.read_field(tags, "title")
        artist = self.read_field(tags, "artist")
        album = self.read_field(tags, "album")
        year = normalize_year(self.read_field(tags, "year"))
        genre = self.read_field(tags, "genre")
        logger.debug(
            "%s fields: title=%r artist=%r album=%r year=%r genre=%r",
            self.__class__.__name__,
            title,
            artist,
            album,
            year,
            genre,
        )

        return TrackMetadata(
            title=title or UNKNOWN_TITLE,
            artist=artist or UNKNOWN_ARTIST,
            album=album,
            year=year,
            genre=genre,
            album_art=self.read_artwork(audio),
            duration_seconds=read_duration(audio),
        )
