"""Utility helpers for configuration file persistence."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def write_text_file(path: Path, content: str) -> None:
    """Replace ``path`` with ``content`` in one step.

    The text is staged in a sibling temporary file and renamed over the target,
    so readers see either the old or the new content. Parent directories are
    created.
    """

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, staging = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            _ = handle.write(content)
        os.replace(staging, path)
    except BaseException:
        Path(staging).unlink(missing_ok=True)
        raise


__all__ = ["write_text_file"]
