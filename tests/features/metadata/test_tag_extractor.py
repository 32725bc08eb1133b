"""Tests for tag extraction from downloaded byte prefixes."""

from __future__ import annotations

import base64
from collections.abc import Callable
from pathlib import Path
from types import SimpleNamespace

import pytest
from mutagen._vorbis import VCommentDict
from mutagen.flac import Picture
from mutagen.mp4 import MP4Cover, MP4Tags
from pytest_mock import MockerFixture

from driveshelf.features.metadata import Extracted, TagExtractor, TrackMetadata, Unparseable
from driveshelf.features.metadata.usecases.extraction import (
    Mp4TagReader,
    VorbisTagReader,
    staging,
)


@pytest.fixture
def extractor() -> TagExtractor:
    return TagExtractor()


def _metadata(result: object) -> TrackMetadata:
    assert isinstance(result, Extracted), result
    return result.metadata


class TestFlacExtraction:
    """Vorbis comment extraction through real FLAC streams."""

    def test_reads_all_fields(
        self,
        extractor: TagExtractor,
        flac_bytes: Callable[..., bytes],
        png_stub: bytes,
    ) -> None:
        data = flac_bytes(
            title="Blue",
            artist="Joni",
            album="Blue",
            date="1971-06-22",
            genre="Folk",
            picture=png_stub,
        )

        metadata = _metadata(extractor.extract(data))

        assert metadata.title == "Blue"
        assert metadata.artist == "Joni"
        assert metadata.album == "Blue"
        assert metadata.year == "1971"
        assert metadata.genre == "Folk"
        assert metadata.duration_seconds == 180
        assert metadata.album_art == "data:image/png;base64," + base64.b64encode(png_stub).decode()

    def test_missing_fields_use_defaults(
        self,
        extractor: TagExtractor,
        flac_bytes: Callable[..., bytes],
    ) -> None:
        data = flac_bytes(title=None, artist=None, album=None, date=None, genre=None)

        metadata = _metadata(extractor.extract(data))

        assert metadata.title == "Unknown Title"
        assert metadata.artist == "Unknown Artist"
        assert metadata.album is None
        assert metadata.year is None
        assert metadata.genre is None
        assert metadata.album_art is None

    def test_blank_values_count_as_absent(
        self,
        extractor: TagExtractor,
        flac_bytes: Callable[..., bytes],
    ) -> None:
        data = flac_bytes(title="   ", album="")

        metadata = _metadata(extractor.extract(data))

        assert metadata.title == "Unknown Title"
        assert metadata.album is None


class TestMp3Extraction:
    """ID3 extraction through MP3 streams."""

    def test_reads_id3_frames_and_artwork(
        self,
        extractor: TagExtractor,
        mp3_bytes: Callable[..., bytes],
        jpeg_stub: bytes,
    ) -> None:
        data = mp3_bytes(
            title="Paranoid Android",
            artist="Radiohead",
            album="OK Computer",
            date="1997-05-21",
            genre="Alternative",
            picture=jpeg_stub,
        )

        metadata = _metadata(extractor.extract(data))

        assert metadata.title == "Paranoid Android"
        assert metadata.artist == "Radiohead"
        assert metadata.album == "OK Computer"
        assert metadata.year == "1997"
        assert metadata.genre == "Alternative"
        assert metadata.album_art is not None
        assert metadata.album_art.startswith("data:image/jpeg;base64,")
        assert base64.b64decode(metadata.album_art.split(",", 1)[1]) == jpeg_stub

    def test_numeric_genre_is_resolved(
        self,
        extractor: TagExtractor,
        mp3_bytes: Callable[..., bytes],
    ) -> None:
        metadata = _metadata(extractor.extract(mp3_bytes(genre="(17)")))

        assert metadata.genre == "Rock"

    def test_missing_mime_is_sniffed(
        self,
        extractor: TagExtractor,
        mp3_bytes: Callable[..., bytes],
        png_stub: bytes,
    ) -> None:
        metadata = _metadata(extractor.extract(mp3_bytes(picture=png_stub, picture_mime="")))

        assert metadata.album_art is not None
        assert metadata.album_art.startswith("data:image/png;base64,")


class TestMp4Extraction:
    """MP4 atom extraction through a parsed tag container."""

    @staticmethod
    def _audio(tags: MP4Tags, length: float = 201.9) -> SimpleNamespace:
        return SimpleNamespace(tags=tags, info=SimpleNamespace(length=length))

    def test_reads_atoms_and_first_cover(self, png_stub: bytes, jpeg_stub: bytes) -> None:
        tags = MP4Tags()
        tags["\xa9nam"] = ["Toxic"]
        tags["\xa9ART"] = ["Britney Spears"]
        tags["\xa9alb"] = ["In the Zone"]
        tags["\xa9day"] = ["2004-01-13T08:00:00Z"]
        tags["\xa9gen"] = ["Pop"]
        tags["covr"] = [
            MP4Cover(png_stub, imageformat=MP4Cover.FORMAT_PNG),
            MP4Cover(jpeg_stub, imageformat=MP4Cover.FORMAT_JPEG),
        ]

        metadata = Mp4TagReader().read(self._audio(tags))

        assert metadata == TrackMetadata(
            title="Toxic",
            artist="Britney Spears",
            album="In the Zone",
            year="2004",
            genre="Pop",
            album_art="data:image/png;base64," + base64.b64encode(png_stub).decode(),
            duration_seconds=201,
        )

    def test_album_artist_fills_missing_artist(self) -> None:
        tags = MP4Tags()
        tags["aART"] = ["Various"]

        metadata = Mp4TagReader().read(self._audio(tags))

        assert metadata.artist == "Various"
        assert metadata.title == "Unknown Title"
        assert metadata.album_art is None

    def test_jpeg_cover_mime(self, jpeg_stub: bytes) -> None:
        tags = MP4Tags()
        tags["covr"] = [MP4Cover(jpeg_stub, imageformat=MP4Cover.FORMAT_JPEG)]

        metadata = Mp4TagReader().read(self._audio(tags))

        assert metadata.album_art is not None
        assert metadata.album_art.startswith("data:image/jpeg;base64,")

    def test_extractor_routes_mp4_tags(self) -> None:
        tags = MP4Tags()
        tags["\xa9nam"] = ["Routed"]

        metadata = TagExtractor._read(self._audio(tags))  # pyright: ignore[reportPrivateUsage]

        assert metadata.title == "Routed"


class TestOggExtraction:
    """Vorbis comments without a FLAC picture block, as in Ogg and Opus."""

    @staticmethod
    def _picture_block(data: bytes, mime: str, picture_type: int) -> str:
        picture = Picture()
        picture.type = picture_type
        picture.mime = mime
        picture.data = data
        return base64.b64encode(picture.write()).decode("ascii")

    def test_reads_comments_and_front_cover(self, png_stub: bytes, jpeg_stub: bytes) -> None:
        tags = VCommentDict()
        tags["title"] = ["Nightcall"]
        tags["artist"] = ["Kavinsky"]
        tags["album"] = ["OutRun"]
        tags["date"] = ["2013"]
        tags["genre"] = ["Synthwave"]
        tags["metadata_block_picture"] = [
            self._picture_block(jpeg_stub, "image/jpeg", 4),
            self._picture_block(png_stub, "image/png", 3),
        ]
        audio = SimpleNamespace(tags=tags, info=SimpleNamespace(length=258.4))

        metadata = VorbisTagReader().read(audio)

        assert metadata.title == "Nightcall"
        assert metadata.artist == "Kavinsky"
        assert metadata.album == "OutRun"
        assert metadata.year == "2013"
        assert metadata.genre == "Synthwave"
        assert metadata.duration_seconds == 258
        assert metadata.album_art == "data:image/png;base64," + base64.b64encode(png_stub).decode()

    def test_undecodable_picture_blocks_are_skipped(self, jpeg_stub: bytes) -> None:
        tags = VCommentDict()
        tags["title"] = ["Still Read"]
        tags["metadata_block_picture"] = [
            "%%%not-base64",
            base64.b64encode(b"xx").decode("ascii"),
            self._picture_block(jpeg_stub, "", 0),
        ]
        audio = SimpleNamespace(tags=tags, info=None)

        metadata = VorbisTagReader().read(audio)

        assert metadata.title == "Still Read"
        assert metadata.duration_seconds is None
        assert metadata.album_art == "data:image/jpeg;base64," + base64.b64encode(jpeg_stub).decode()

    def test_only_broken_pictures_means_no_artwork(self) -> None:
        tags = VCommentDict()
        tags["metadata_block_picture"] = ["%%%not-base64"]

        metadata = VorbisTagReader().read(SimpleNamespace(tags=tags, info=None))

        assert metadata.album_art is None


class TestId3WithoutAudioStream:
    """ID3 text frames survive when the prefix holds little or no audio."""

    def test_tag_without_audio_frames(
        self,
        extractor: TagExtractor,
        mp3_bytes: Callable[..., bytes],
        jpeg_stub: bytes,
    ) -> None:
        data = mp3_bytes(title="Tag Only", picture=jpeg_stub)
        tag_size = staging.id3_tag_size(data)
        assert tag_size is not None

        metadata = _metadata(extractor.extract(data[:tag_size]))

        assert metadata.title == "Tag Only"
        assert metadata.album_art is not None
        assert metadata.album_art.startswith("data:image/jpeg;base64,")

    def test_tag_cut_inside_large_cover(
        self,
        extractor: TagExtractor,
        mp3_bytes: Callable[..., bytes],
        jpeg_stub: bytes,
    ) -> None:
        data = mp3_bytes(title="Big Cover", album="Heavy", picture=jpeg_stub + b"\x00" * 200_000)
        tag_size = staging.id3_tag_size(data)
        assert tag_size is not None

        metadata = _metadata(extractor.extract(data[: tag_size // 2]))

        assert metadata.title == "Big Cover"
        assert metadata.album == "Heavy"
        assert metadata.year == "2001"
        assert metadata.album_art is None
        assert metadata.duration_seconds is None

    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            (b"ID3\x04\x00\x00\x00\x00\x02\x01", 267),
            (b"ID3\x04\x00\x10\x00\x00\x02\x01", 277),
            (b"ID3\x03\x00\x00\x00\x00\x00\x00", 10),
            (b"ID3whatever", None),
            (b"ID3\x04\x00\x00\x80\x00\x00\x00", None),
            (b"ID3\x04", None),
            (b"fLaC\x00\x00\x00\x22\x00\x00", None),
        ],
    )
    def test_id3_tag_size(self, header: bytes, expected: int | None) -> None:
        assert staging.id3_tag_size(header) == expected


class TestUnparseableInput:
    """Malformed input is reported, never raised."""

    def test_empty_buffer(self, extractor: TagExtractor) -> None:
        result = extractor.extract(b"")

        assert isinstance(result, Unparseable)
        assert result.reason == "empty buffer"

    def test_unrecognized_bytes(self, extractor: TagExtractor) -> None:
        result = extractor.extract(b"definitely not an audio container" * 4)

        assert isinstance(result, Unparseable)

    def test_truncated_container(
        self,
        extractor: TagExtractor,
        flac_bytes: Callable[..., bytes],
    ) -> None:
        result = extractor.extract(flac_bytes()[:20])

        assert isinstance(result, Unparseable)

    def test_parser_exception_becomes_result(
        self,
        extractor: TagExtractor,
        mocker: MockerFixture,
    ) -> None:
        _ = mocker.patch(
            "driveshelf.features.metadata.usecases.extraction.tag_extractor.mutagen.File",
            side_effect=RuntimeError("boom"),
        )

        result = extractor.extract(b"ID3whatever")

        assert result == Unparseable("RuntimeError: boom")


class TestStaging:
    """The on-disk staging copy never outlives a parse."""

    def test_staging_file_removed_after_success(
        self,
        extractor: TagExtractor,
        flac_bytes: Callable[..., bytes],
        mocker: MockerFixture,
    ) -> None:
        spy = mocker.spy(staging.tempfile, "mkstemp")

        _ = _metadata(extractor.extract(flac_bytes()))

        staged_path = Path(spy.spy_return[1])
        assert staged_path.suffix == ".flac"
        assert not staged_path.exists()

    def test_staging_file_removed_after_failure(
        self,
        extractor: TagExtractor,
        mocker: MockerFixture,
    ) -> None:
        spy = mocker.spy(staging.tempfile, "mkstemp")
        _ = mocker.patch(
            "driveshelf.features.metadata.usecases.extraction.tag_extractor.mutagen.File",
            side_effect=ValueError("corrupt"),
        )

        result = extractor.extract(b"fLaC" + b"\x00" * 64)

        assert isinstance(result, Unparseable)
        assert not Path(spy.spy_return[1]).exists()

    @pytest.mark.parametrize(
        ("data", "suffix"),
        [
            (b"fLaC\x00", ".flac"),
            (b"ID3\x04", ".mp3"),
            (b"\xff\xfb\x90\x64", ".mp3"),
            (b"OggS\x00", ".ogg"),
            (b"\x00\x00\x00\x20ftypM4A ", ".m4a"),
            (b"hello", ".bin"),
        ],
    )
    def test_guess_suffix(self, data: bytes, suffix: str) -> None:
        assert staging.guess_suffix(data) == suffix
