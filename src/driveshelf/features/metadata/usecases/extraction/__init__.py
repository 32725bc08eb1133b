"""
Summary: Public surface for tag extraction modules.
Why: Provide a stable import path for the loader and tests.
"""

from .format_extractors import Id3TagReader, Mp4TagReader, VorbisTagReader
from .staging import guess_suffix, staged_copy
from .tag_extractor import Extracted, ExtractionResult, TagExtractor, Unparseable

__all__ = [
    "Extracted",
    "ExtractionResult",
    "Id3TagReader",
    "Mp4TagReader",
    "TagExtractor",
    "Unparseable",
    "VorbisTagReader",
    "guess_suffix",
    "staged_copy",
]
