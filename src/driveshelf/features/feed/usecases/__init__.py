"""Feed projection use cases."""

from .projector import FeedProjector, build_album_subtitle

__all__ = ["FeedProjector", "build_album_subtitle"]
