# Where: driveshelf.features.metadata.__init__
# What: Expose metadata feature services and shared dataclasses.
# Why: Provide a cohesive import surface for the application layer.

from driveshelf.shared.track_metadata import TrackMetadata
from .usecases import (
    Extracted,
    ExtractionResult,
    MetadataLoader,
    MetadataStore,
    PopulateSummary,
    PrefixFetcherPort,
    TagExtractor,
    TagExtractorPort,
    Unparseable,
)

__all__ = [
    "Extracted",
    "ExtractionResult",
    "MetadataLoader",
    "MetadataStore",
    "PopulateSummary",
    "PrefixFetcherPort",
    "TagExtractor",
    "TagExtractorPort",
    "TrackMetadata",
    "Unparseable",
]
