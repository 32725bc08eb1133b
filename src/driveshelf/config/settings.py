"""Where: src/driveshelf/config/settings.py
What: Host-facing settings schema and the runtime snapshot derived from it.
Why: Expose validated feed switches to the service layer without file I/O.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final, Literal

from driveshelf.config.config import Config, parse_link_text

DRIVE_LINKS_KEY: Final[str] = "drive_links"
READ_METADATA_KEY: Final[str] = "read_metadata"


@dataclass(frozen=True, slots=True)
class SettingItem:
    """One entry of the settings screen a host renders for this feed."""

    kind: Literal["text_input", "switch"]
    key: str
    title: str
    summary: str
    default: str | bool


SETTING_ITEMS: Final[tuple[SettingItem, ...]] = (
    SettingItem(
        kind="text_input",
        key=DRIVE_LINKS_KEY,
        title="Google Drive Links",
        summary="Paste your Google Drive share links (one per line)",
        default="",
    ),
    SettingItem(
        kind="switch",
        key=READ_METADATA_KEY,
        title="Read Metadata",
        summary="Read song info from the audio files",
        default=True,
    ),
)


@dataclass(frozen=True, slots=True)
class FeedSettings:
    """Snapshot of the values the feed reads at initialization."""

    links: tuple[str, ...] = ()
    read_metadata: bool = True

    @classmethod
    def from_mapping(cls, values: Mapping[str, object]) -> "FeedSettings":
        """Build settings from raw host values keyed like ``SETTING_ITEMS``.

        Missing or wrongly typed values fall back to the schema defaults.
        """
        raw_links = values.get(DRIVE_LINKS_KEY)
        links = parse_link_text(raw_links) if isinstance(raw_links, str) else []

        raw_flag = values.get(READ_METADATA_KEY)
        read_metadata = raw_flag if isinstance(raw_flag, bool) else True
        return cls(links=tuple(links), read_metadata=read_metadata)

    @classmethod
    def from_config(cls, config: Config) -> "FeedSettings":
        """Build settings from the TOML-backed application configuration."""

        return cls(links=tuple(config.drive_links), read_metadata=config.read_metadata)


__all__ = [
    "DRIVE_LINKS_KEY",
    "FeedSettings",
    "READ_METADATA_KEY",
    "SETTING_ITEMS",
    "SettingItem",
]
