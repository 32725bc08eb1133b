"""Album use cases."""

from .aggregator import AlbumAggregator, AlbumStore

__all__ = ["AlbumAggregator", "AlbumStore"]
