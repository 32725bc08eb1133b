"""
Summary: Turn Google Drive share links into file ids and direct download URLs.
Why: File ids key the metadata cache and build every download request.
"""

from __future__ import annotations

import re
from typing import Final

DRIVE_DOWNLOAD_URL: Final[str] = "https://drive.google.com/uc?export=download&id={file_id}"

# ``.../file/d/<id>/view`` style share links
_PATH_FORM: Final[re.Pattern[str]] = re.compile(r"/file/d/([^/?&#]+)")
# ``...?id=<id>&...`` style links (open?id=, uc?id=)
_QUERY_FORM: Final[re.Pattern[str]] = re.compile(r"[?&]id=([^&#]+)")


def resolve_file_id(raw_link: str) -> str:
    """Extract the Drive file id from a share link.

    Unrecognized links are returned unchanged and act as opaque ids.
    """

    for pattern in (_PATH_FORM, _QUERY_FORM):
        match = pattern.search(raw_link)
        if match:
            return match.group(1)
    return raw_link


def direct_download_url(file_id: str) -> str:
    """Return the direct download endpoint for ``file_id``."""

    return DRIVE_DOWNLOAD_URL.format(file_id=file_id)


__all__ = ["DRIVE_DOWNLOAD_URL", "direct_download_url", "resolve_file_id"]
