"""Application services."""

from .feed_service import ALBUMS_SHELF_TITLE, FeedService

__all__ = ["ALBUMS_SHELF_TITLE", "FeedService"]
