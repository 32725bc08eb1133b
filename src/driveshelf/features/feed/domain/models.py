"""
Summary: Presentation-ready feed entries handed to the host.
Why: Give the host a stable shape independent of cache internals.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ArtistRef:
    """Artist reference shown on albums and tracks."""

    id: str
    name: str


@dataclass(frozen=True, slots=True)
class AlbumRef:
    """Album reference attached to a track."""

    id: str
    title: str
    cover: str | None = None


@dataclass(frozen=True, slots=True)
class AlbumSummary:
    """One entry of the album listing."""

    id: str
    title: str
    cover: str | None
    artist: ArtistRef
    subtitle: str


@dataclass(frozen=True, slots=True)
class TrackSummary:
    """One entry of an album's track listing."""

    id: str
    title: str
    artist: ArtistRef
    album: AlbumRef | None = None
    duration_seconds: int | None = None
    cover: str | None = None


@dataclass(frozen=True, slots=True)
class PlayableTrack:
    """A track resolved for playback."""

    track: TrackSummary
    audio_url: str


@dataclass(frozen=True, slots=True)
class Shelf:
    """A titled row of albums on the home feed."""

    title: str
    items: list[AlbumSummary] = field(default_factory=list)


__all__ = [
    "AlbumRef",
    "AlbumSummary",
    "ArtistRef",
    "PlayableTrack",
    "Shelf",
    "TrackSummary",
]
