# Where: driveshelf.features.feed.__init__
# What: Expose feed models and the projector.
# Why: Give the application layer one import path for presentation shapes.

from .domain.models import AlbumRef, AlbumSummary, ArtistRef, PlayableTrack, Shelf, TrackSummary
from .usecases import FeedProjector, build_album_subtitle

__all__ = [
    "AlbumRef",
    "AlbumSummary",
    "ArtistRef",
    "FeedProjector",
    "PlayableTrack",
    "Shelf",
    "TrackSummary",
    "build_album_subtitle",
]
