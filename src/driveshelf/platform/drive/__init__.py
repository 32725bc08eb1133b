"""Google Drive infrastructure package.

Provides link parsing and the prefix-download HTTP client used to read
embedded tags without transferring whole audio files.
"""

from .http_client import DEFAULT_PREFIX_BYTES, DriveHTTPClient, PrefixResult
from .links import direct_download_url, resolve_file_id

__all__ = [
    "DEFAULT_PREFIX_BYTES",
    "DriveHTTPClient",
    "PrefixResult",
    "direct_download_url",
    "resolve_file_id",
]
