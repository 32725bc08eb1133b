# Where: driveshelf.features.albums.__init__
# What: Expose album grouping services.
# Why: Keep callers independent of the module layout.

from driveshelf.shared.album_data import UNKNOWN_ALBUM, AlbumData
from .usecases import AlbumAggregator, AlbumStore

__all__ = ["AlbumAggregator", "AlbumData", "AlbumStore", "UNKNOWN_ALBUM"]
