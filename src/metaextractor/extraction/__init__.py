"""File metadata extraction built on TrID and ExifTool."""

from .errors import (
    ExtractionError,
    FileAccessError,
    MissingFileError,
    NoFileSpecifiedError,
    TagExtractionError,
    TypeIdentificationError,
    TypeIdentificationTimeout,
)
from .extractor import MetaExtractor
from .models import ExtractionResult, FileTimestamps, TagMap, TypeCandidate

__all__ = [
    "ExtractionError",
    "ExtractionResult",
    "FileAccessError",
    "FileTimestamps",
    "MetaExtractor",
    "MissingFileError",
    "NoFileSpecifiedError",
    "TagExtractionError",
    "TagMap",
    "TypeCandidate",
    "TypeIdentificationError",
    "TypeIdentificationTimeout",
]
