"""Where: src/driveshelf/platform/drive/http_client.py
What: HTTP adapter issuing bounded byte-range downloads against Google Drive.
Why: Decouple network concerns from tag parsing and cache population.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final, cast

import requests

from driveshelf import __version__
from driveshelf.platform.logging import logger

DEFAULT_PREFIX_BYTES: Final[int] = 512 * 1024
DEFAULT_TIMEOUT: Final[tuple[float, float]] = (5.0, 15.0)
_CHUNK_SIZE: Final[int] = 64 * 1024


@dataclass(slots=True)
class PrefixResult:
    """Represent the outcome of a single prefix download."""

    status: int
    headers: dict[str, str]
    data: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300 and bool(self.data)


def range_header(max_bytes: int) -> str:
    """Return the ``Range`` header value asking for bytes ``0..max_bytes``."""

    return f"bytes=0-{max_bytes}"


class DriveHTTPClient:
    """Perform single-attempt ranged GET requests with ``requests``."""

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        timeout: tuple[float, float] = DEFAULT_TIMEOUT,
    ) -> None:
        self._session: requests.Session = session if session is not None else requests.Session()
        self._timeout: tuple[float, float] = timeout
        self._user_agent: str = f"driveshelf/{__version__}"

    @property
    def timeout(self) -> tuple[float, float]:
        return self._timeout

    def fetch_prefix(self, url: str, max_bytes: int = DEFAULT_PREFIX_BYTES) -> bytes:
        """Return up to ``max_bytes + 1`` leading bytes of ``url``.

        Non-success statuses and transport failures yield ``b""`` so callers
        can treat every failure as "no metadata available".
        """

        result = self.get_prefix(url, max_bytes)
        return result.data if result.ok else b""

    def get_prefix(self, url: str, max_bytes: int = DEFAULT_PREFIX_BYTES) -> PrefixResult:
        """Download the prefix and keep status and headers for diagnostics."""

        headers = {
            "Range": range_header(max_bytes),
            "User-Agent": self._user_agent,
        }
        try:
            with self._session.get(
                url,
                headers=headers,
                timeout=self._timeout,
                stream=True,
            ) as response:
                status = int(response.status_code)
                header_items = cast(Iterable[tuple[str, str]], response.headers.items())
                response_headers = {str(key): str(value) for key, value in header_items}

                if not 200 <= status < 300:
                    logger.warning("Drive HTTP error: status=%s url=%s", status, url)
                    return PrefixResult(status=status, headers=response_headers, data=b"")

                data = self._read_limited(response, max_bytes + 1)
        except requests.RequestException as exc:
            logger.warning("Drive request error for %s: %s", url, exc)
            return PrefixResult(status=0, headers={}, data=b"")

        logger.debug("Fetched %d bytes from %s (status=%s)", len(data), url, status)
        return PrefixResult(status=status, headers=response_headers, data=data)

    @staticmethod
    def _read_limited(response: requests.Response, limit: int) -> bytes:
        """Read at most ``limit`` bytes even when the server ignores ``Range``."""

        buffer = bytearray()
        for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
            if not chunk:
                continue
            buffer.extend(chunk[: limit - len(buffer)])
            if len(buffer) >= limit:
                break
        return bytes(buffer)

    def close(self) -> None:
        """Release pooled connections held by the session."""

        self._session.close()


__all__ = [
    "DEFAULT_PREFIX_BYTES",
    "DEFAULT_TIMEOUT",
    "DriveHTTPClient",
    "PrefixResult",
    "range_header",
]
