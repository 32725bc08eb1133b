"""Format-specific tag readers.

Where: src/driveshelf/features/metadata/usecases/extraction/format_extractors.py
What: Define concrete readers for ID3, Vorbis comment and MP4 tag containers.
Why: Separate format logic from the extractor facade to simplify future extensions.
"""

from __future__ import annotations

import base64
import binascii
import struct
from typing import Any, ClassVar, cast

from mutagen import MutagenError
from mutagen._vorbis import VCommentDict
from mutagen.flac import Picture
from mutagen.id3 import ID3, PictureType
from mutagen.mp4 import MP4Cover, MP4Tags

from driveshelf.platform.logging import logger

from ._base_extractors import EmbeddedPicture, TagReader
from ._tag_utils import safe_get_first

__all__ = [
    "Id3TagReader",
    "Mp4TagReader",
    "VorbisTagReader",
]


class Id3TagReader(TagReader):
    """Reader for ID3 tags (MP3, AIFF, WAVE)."""

    TAG_MAPPING: ClassVar[dict[str, tuple[str, ...]]] = {
        "title": ("TIT2",),
        "artist": ("TPE1", "TPE2"),
        "album": ("TALB",),
        "year": ("TDRC", "TYER", "TDOR"),
        "genre": ("TCON",),
    }

    def supports(self, tags: Any) -> bool:
        return isinstance(tags, ID3)

    def _get_tag_value(self, tags: Any, key: str) -> str | None:
        if tags is None:
            return None
        frame = tags.get(key)
        if frame is None:
            return None
        if key == "TCON":
            genres = cast(list[str], getattr(frame, "genres", []))
            return safe_get_first(genres) or None
        text = getattr(frame, "text", None)
        if isinstance(text, (list, tuple)):
            return str(text[0]) if text else None
        return str(text) if text is not None else None

    def _get_pictures(self, audio: Any) -> list[EmbeddedPicture]:
        tags = audio.tags
        if tags is None:
            return []
        return [
            EmbeddedPicture(
                data=bytes(frame.data),
                mime=frame.mime,
                is_front_cover=frame.type == PictureType.COVER_FRONT,
            )
            for frame in tags.getall("APIC")
        ]


class VorbisTagReader(TagReader):
    """Reader for Vorbis comments (FLAC, Ogg Vorbis, Opus)."""

    TAG_MAPPING: ClassVar[dict[str, tuple[str, ...]]] = {
        "title": ("title",),
        "artist": ("artist", "albumartist"),
        "album": ("album",),
        "year": ("date", "year", "originaldate"),
        "genre": ("genre",),
    }

    def supports(self, tags: Any) -> bool:
        return isinstance(tags, VCommentDict)

    def _get_tag_value(self, tags: Any, key: str) -> str | None:
        if tags is None:
            return None
        values = tags.get(key)
        if isinstance(values, list):
            return safe_get_first(cast(list[str], values)) or None
        return values

    def _get_pictures(self, audio: Any) -> list[EmbeddedPicture]:
        pictures: list[Picture] = list(getattr(audio, "pictures", None) or [])
        tags = audio.tags
        if tags is not None:
            for encoded in tags.get("metadata_block_picture", []):
                try:
                    pictures.append(Picture(base64.b64decode(encoded)))
                except (binascii.Error, ValueError, struct.error, MutagenError) as exc:
                    logger.debug("Ignoring undecodable embedded picture: %s", exc)
        return [
            EmbeddedPicture(
                data=bytes(picture.data),
                mime=picture.mime,
                is_front_cover=picture.type == PictureType.COVER_FRONT,
            )
            for picture in pictures
        ]


class Mp4TagReader(TagReader):
    """Reader for MP4/M4A atoms."""

    TAG_MAPPING: ClassVar[dict[str, tuple[str, ...]]] = {
        "title": ("\xa9nam",),
        "artist": ("\xa9ART", "aART"),
        "album": ("\xa9alb",),
        "year": ("\xa9day",),
        "genre": ("\xa9gen",),
    }

    _COVER_MIMES: ClassVar[dict[int, str]] = {
        MP4Cover.FORMAT_JPEG: "image/jpeg",
        MP4Cover.FORMAT_PNG: "image/png",
    }

    def supports(self, tags: Any) -> bool:
        return isinstance(tags, MP4Tags)

    def _get_tag_value(self, tags: Any, key: str) -> str | None:
        if tags is None:
            return None
        values = tags.get(key)
        if isinstance(values, list):
            return safe_get_first(cast(list[str], values)) or None
        return values

    def _get_pictures(self, audio: Any) -> list[EmbeddedPicture]:
        tags = audio.tags
        if tags is None:
            return []
        covers = cast(list[MP4Cover], tags.get("covr", []))
        # MP4 carries no picture type; the first cover is the front cover.
        return [
            EmbeddedPicture(
                data=bytes(cover),
                mime=self._COVER_MIMES.get(cover.imageformat),
                is_front_cover=index == 0,
            )
            for index, cover in enumerate(covers)
        ]
