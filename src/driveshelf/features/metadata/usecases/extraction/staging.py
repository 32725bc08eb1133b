"""
Summary: Stage downloaded bytes in a temporary file for file-backed parsers.
Why: mutagen sniffs containers by name and content; the copy must never outlive a parse.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from driveshelf.platform.logging import logger

_SIGNATURE_SUFFIXES: tuple[tuple[bytes, str], ...] = (
    (b"fLaC", ".flac"),
    (b"OggS", ".ogg"),
    (b"ID3", ".mp3"),
    (b"FORM", ".aiff"),
    (b"RIFF", ".wav"),
)


def guess_suffix(data: bytes) -> str:
    """Guess a file extension from leading container bytes."""

    for signature, suffix in _SIGNATURE_SUFFIXES:
        if data.startswith(signature):
            return suffix
    if data[4:8] == b"ftyp":
        return ".m4a"
    if len(data) >= 2 and data[0] == 0xFF and data[1] & 0xE0 == 0xE0:
        return ".mp3"
    return ".bin"


def id3_tag_size(data: bytes) -> int | None:
    """Return the full length of a leading ID3v2 tag, header and footer included."""

    if len(data) < 10 or not data.startswith(b"ID3") or data[3] not in (2, 3, 4):
        return None
    size_bytes = data[6:10]
    if any(byte & 0x80 for byte in size_bytes):
        return None
    # Syncsafe integer: 7 significant bits per byte.
    size = 0
    for byte in size_bytes:
        size = (size << 7) | byte
    footer = 10 if data[5] & 0x10 else 0
    return 10 + size + footer


@contextmanager
def staged_copy(data: bytes, *, prefix: str = "driveshelf_") -> Iterator[Path]:
    """Write ``data`` to a temporary file and delete it on every exit path."""

    fd, raw_path = tempfile.mkstemp(prefix=prefix, suffix=guess_suffix(data))
    path = Path(raw_path)
    try:
        with os.fdopen(fd, "wb") as handle:
            _ = handle.write(data)
        yield path
    finally:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Failed to remove staging file %s: %s", path, exc)


__all__ = ["guess_suffix", "id3_tag_size", "staged_copy"]
