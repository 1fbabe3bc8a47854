"""Exceptions raised while extracting file metadata."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import ExtractionResult


class ExtractionError(Exception):
    """Base exception for :meth:`MetaExtractor.extract` failures.

    Attributes:
        result: Fields gathered before the failing step. Callers may inspect
            whatever was populated up to that point.
        code: Machine-readable identifier for the failure kind.
    """

    code = "extraction"

    def __init__(self, message: str, *, result: Optional["ExtractionResult"] = None) -> None:
        super().__init__(message)
        if result is None:
            from .models import ExtractionResult

            result = ExtractionResult()
        self.result = result


class NoFileSpecifiedError(ExtractionError):
    """Raised when an empty path is passed to the extractor."""

    code = "no_file_specified"


class MissingFileError(ExtractionError):
    """Raised when the target path does not exist."""

    code = "file_not_found"


class FileAccessError(ExtractionError):
    """Raised for stat failures other than a missing file."""

    code = "file_access"


class TypeIdentificationError(ExtractionError):
    """Raised when TrID fails to identify the file."""

    code = "type_identification"


class TypeIdentificationTimeout(TypeIdentificationError):
    """Raised when TrID does not finish within the configured timeout."""

    code = "type_identification_timeout"


class TagExtractionError(ExtractionError):
    """Raised when ExifTool fails to read the file."""

    code = "tag_extraction"


class ToolError(Exception):
    """Base exception for external tool invocation failures."""


class ToolNotFoundError(ToolError):
    """Raised when a tool executable cannot be launched."""


class ToolTimeoutError(ToolError):
    """Raised when a tool exceeds its time budget."""


class TridError(ToolError):
    """Raised when TrID reports an error or exits abnormally."""


class ExifToolError(ToolError):
    """Raised when ExifTool reports an error or emits unreadable output."""


class NoMetadataExtracted(ExifToolError):
    """Signals that ExifTool ran cleanly but produced no metadata."""


__all__ = [
    "ExtractionError",
    "NoFileSpecifiedError",
    "MissingFileError",
    "FileAccessError",
    "TypeIdentificationError",
    "TypeIdentificationTimeout",
    "TagExtractionError",
    "ToolError",
    "ToolNotFoundError",
    "ToolTimeoutError",
    "TridError",
    "ExifToolError",
    "NoMetadataExtracted",
]
