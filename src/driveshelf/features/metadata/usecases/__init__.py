"""Metadata use cases: tag extraction, caching and population."""

from .extraction import Extracted, ExtractionResult, TagExtractor, Unparseable
from .loader import MetadataLoader, PopulateSummary
from .metadata_store import MetadataStore
from .ports import PrefixFetcherPort, TagExtractorPort

__all__ = [
    "Extracted",
    "ExtractionResult",
    "MetadataLoader",
    "MetadataStore",
    "PopulateSummary",
    "PrefixFetcherPort",
    "TagExtractor",
    "TagExtractorPort",
    "Unparseable",
]
