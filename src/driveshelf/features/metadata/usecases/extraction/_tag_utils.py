"""Tag utility helpers.

Where: src/driveshelf/features/metadata/usecases/extraction/_tag_utils.py
What: Provide pure helper routines for tag text cleanup and artwork encoding.
Why: Keep format readers focused on where values live, not how they are normalized.
"""

from __future__ import annotations

import base64

__all__ = [
    "DEFAULT_IMAGE_MIME",
    "clean_text",
    "guess_image_mime",
    "normalize_year",
    "safe_get_first",
    "to_data_uri",
]

DEFAULT_IMAGE_MIME = "image/jpeg"

_IMAGE_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
)


def safe_get_first(data: list[str] | None, default: str = "") -> str:
    """Safely get the first element from a list or return the default."""
    return data[0] if data else default


def clean_text(value: object) -> str | None:
    """Return stripped text, treating empty values as absent."""
    if value is None:
        return None
    text = str(value).strip().strip("\x00")
    return text or None


def normalize_year(date_str: str | None) -> str | None:
    """Trim a recorded date to its leading year when it starts with four digits."""
    text = clean_text(date_str)
    if text is None:
        return None
    if len(text) >= 4 and text[:4].isdigit():
        return text[:4]
    return text


def guess_image_mime(data: bytes, declared: str | None = None) -> str:
    """Pick an image MIME type from the declared value or the data signature."""
    if declared:
        lowered = declared.strip().lower()
        if lowered.startswith("image/"):
            return "image/jpeg" if lowered == "image/jpg" else lowered
        if lowered in {"jpg", "jpeg", "png", "gif", "bmp"}:
            return f"image/{'jpeg' if lowered == 'jpg' else lowered}"
    for signature, mime in _IMAGE_SIGNATURES:
        if data.startswith(signature):
            return mime
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return DEFAULT_IMAGE_MIME


def to_data_uri(data: bytes, mime: str) -> str:
    """Encode image bytes as a ``data:`` URI."""
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime};base64,{payload}"
