"""Summary: Ports defining metadata use case dependencies.
Why: Decouple the loader from concrete HTTP and parser adapters so tests stay simple."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .extraction import ExtractionResult


@runtime_checkable
class PrefixFetcherPort(Protocol):
    """Port for downloading the leading bytes of a remote file."""

    def fetch_prefix(self, url: str, max_bytes: int) -> bytes:
        """Return the prefix, or ``b""`` when no data is available."""
        ...


@runtime_checkable
class TagExtractorPort(Protocol):
    """Port for turning a byte buffer into an extraction result."""

    def extract(self, data: bytes) -> ExtractionResult:
        """Parse ``data`` without raising for malformed input."""
        ...


__all__ = ["PrefixFetcherPort", "TagExtractorPort"]
