"""driveshelf: an album feed built from the tags of Google Drive hosted audio."""

__version__ = "0.1.0"

__all__ = ["__version__"]
