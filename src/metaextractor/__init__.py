"""Top-level package for metaextractor.

Combines filesystem facts, TrID type identification, and ExifTool tag
extraction into a single :class:`~metaextractor.extraction.ExtractionResult`.
"""

from importlib import metadata as _metadata

from metaextractor.extraction import (
    ExtractionError,
    ExtractionResult,
    FileTimestamps,
    MetaExtractor,
    TypeCandidate,
)

__all__ = [
    "__version__",
    "ExtractionError",
    "ExtractionResult",
    "FileTimestamps",
    "MetaExtractor",
    "TypeCandidate",
]


def __getattr__(name: str):
    if name == "__version__":
        return _metadata.version("metaextractor")
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__():
    return sorted(list(globals().keys()) + ["__version__"])
