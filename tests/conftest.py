"""Shared pytest fixtures: synthetic audio files and isolated config paths."""

from __future__ import annotations

import struct
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from mutagen.flac import FLAC, Picture
from mutagen.id3 import APIC, ID3, TALB, TCON, TDRC, TIT2, TPE1

# Signature-only image payloads; tags store them verbatim.
PNG_STUB: bytes = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24
JPEG_STUB: bytes = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"

# MPEG-1 Layer III, 128 kbps, 44.1 kHz, joint stereo: 417-byte frames.
_MP3_FRAME_HEADER: bytes = b"\xff\xfb\x90\x64"
_MP3_FRAME_SIZE: int = 417


def minimal_flac(sample_rate: int = 44100, seconds: int = 180) -> bytes:
    """Return a FLAC stream holding only a STREAMINFO block."""

    total_samples = sample_rate * seconds
    packed = (sample_rate << 44) | (1 << 41) | (15 << 36) | total_samples
    streaminfo = (
        struct.pack(">HH", 4096, 4096)
        + b"\x00" * 6
        + struct.pack(">Q", packed)
        + b"\x00" * 16
    )
    header = bytes([0x80]) + len(streaminfo).to_bytes(3, "big")
    return b"fLaC" + header + streaminfo


def mp3_frames(count: int = 60) -> bytes:
    """Return ``count`` silent MPEG audio frames."""

    frame = _MP3_FRAME_HEADER + b"\x00" * (_MP3_FRAME_SIZE - len(_MP3_FRAME_HEADER))
    return frame * count


FlacFactory = Callable[..., bytes]
Mp3Factory = Callable[..., bytes]


@pytest.fixture
def flac_bytes(tmp_path: Path) -> FlacFactory:
    """Build tagged FLAC bytes; ``None`` values leave the tag out."""

    def _build(
        *,
        title: str | None = "Song",
        artist: str | None = "Artist",
        album: str | None = "Album",
        date: str | None = "2001",
        genre: str | None = "Rock",
        picture: bytes | None = None,
        picture_mime: str = "image/png",
        seconds: int = 180,
    ) -> bytes:
        path = tmp_path / f"fixture_{len(list(tmp_path.iterdir()))}.flac"
        _ = path.write_bytes(minimal_flac(seconds=seconds))
        audio = FLAC(str(path))
        for key, value in (
            ("title", title),
            ("artist", artist),
            ("album", album),
            ("date", date),
            ("genre", genre),
        ):
            if value is not None:
                audio[key] = value
        if picture is not None:
            pic = Picture()
            pic.type = 3
            pic.mime = picture_mime
            pic.data = picture
            audio.add_picture(pic)
        audio.save()
        return path.read_bytes()

    return _build


@pytest.fixture
def mp3_bytes(tmp_path: Path) -> Mp3Factory:
    """Build MP3 bytes with an ID3v2.4 tag in front of silent frames."""

    def _build(
        *,
        title: str | None = "Song",
        artist: str | None = "Artist",
        album: str | None = "Album",
        date: str | None = "2001-05-03",
        genre: str | None = "Rock",
        picture: bytes | None = None,
        picture_mime: str = "image/jpeg",
    ) -> bytes:
        path = tmp_path / f"fixture_{len(list(tmp_path.iterdir()))}.mp3"
        _ = path.write_bytes(mp3_frames())
        tags = ID3()
        if title is not None:
            tags.add(TIT2(encoding=3, text=[title]))
        if artist is not None:
            tags.add(TPE1(encoding=3, text=[artist]))
        if album is not None:
            tags.add(TALB(encoding=3, text=[album]))
        if date is not None:
            tags.add(TDRC(encoding=3, text=[date]))
        if genre is not None:
            tags.add(TCON(encoding=3, text=[genre]))
        if picture is not None:
            tags.add(APIC(encoding=3, mime=picture_mime, type=3, desc="Cover", data=picture))
        tags.save(str(path))
        return path.read_bytes()

    return _build


@pytest.fixture
def portable_repo_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide a temporary repository root for portable path detection."""

    _ = (tmp_path / "pyproject.toml").write_text("[project]\nname='tmp'\n")

    import driveshelf.config.paths as paths

    def _fake_detect_repo_root(_start: Path | None = None) -> Path:
        return tmp_path

    monkeypatch.setattr(paths, "_detect_repo_root", _fake_detect_repo_root, raising=True)
    monkeypatch.delenv("DRIVESHELF_CONFIG", raising=False)
    return tmp_path


@pytest.fixture(autouse=True)
def reset_config_singleton() -> Iterator[None]:
    """Reset the configuration singleton around every test."""

    from driveshelf.config.config import Config

    original_instance = Config._instance  # pyright: ignore[reportPrivateUsage]
    original_loaded_from = Config._loaded_from  # pyright: ignore[reportPrivateUsage]
    Config._instance = None  # pyright: ignore[reportPrivateUsage]
    Config._loaded_from = None  # pyright: ignore[reportPrivateUsage]
    try:
        yield None
    finally:
        Config._instance = original_instance  # pyright: ignore[reportPrivateUsage]
        Config._loaded_from = original_loaded_from  # pyright: ignore[reportPrivateUsage]


@pytest.fixture
def png_stub() -> bytes:
    return PNG_STUB


@pytest.fixture
def jpeg_stub() -> bytes:
    return JPEG_STUB
