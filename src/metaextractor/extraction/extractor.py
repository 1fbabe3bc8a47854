"""Metadata extraction orchestration.

:class:`MetaExtractor` runs three steps against a single path, in order:

1. ``os.stat`` for name, extension, size, and timestamps;
2. TrID for ranked candidate types;
3. ExifTool for the tag map.

Every failure is raised immediately as an :class:`ExtractionError` subclass
whose ``result`` attribute holds what was gathered before the failing step.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, NoReturn

from metaextractor.config.models import (
    DEFAULT_TRID_MATCHES,
    ExifToolSettings,
    MetaExtractorConfig,
    TridSettings,
)

from .errors import (
    ExtractionError,
    FileAccessError,
    MissingFileError,
    NoFileSpecifiedError,
    NoMetadataExtracted,
    TagExtractionError,
    ToolError,
    ToolTimeoutError,
    TypeIdentificationError,
    TypeIdentificationTimeout,
)
from .exiftool import ExifTool
from .matching import base_name, file_extension
from .models import ExtractionResult
from .timestamps import timestamps_from_stat
from .trid import TridScanner

LOGGER = logging.getLogger(__name__)


class MetaExtractor:
    """Combine filesystem, TrID, and ExifTool metadata for individual files.

    Instances hold only their settings and may be shared between threads;
    each call to :meth:`extract` launches its own tool processes.
    """

    def __init__(
        self,
        trid: TridSettings | None = None,
        exiftool: ExifToolSettings | None = None,
    ) -> None:
        trid = trid or TridSettings()
        exiftool = exiftool or ExifToolSettings()

        self.trid_matches = trid.matches if trid.matches > 0 else DEFAULT_TRID_MATCHES
        self.scanner = TridScanner(
            command=trid.path,
            definitions=trid.definitions,
            timeout=trid.timeout_seconds,
        )
        self.exiftool = ExifTool(command=exiftool.path)

    @classmethod
    def from_config(cls, config: MetaExtractorConfig) -> "MetaExtractor":
        """Build an extractor from a loaded configuration."""
        return cls(trid=config.trid, exiftool=config.exiftool)

    def extract(self, path: str | os.PathLike[str]) -> ExtractionResult:
        """Gather metadata for ``path``.

        Args:
            path: File to inspect.

        Returns:
            ExtractionResult: Filesystem facts, candidate types, and tags.

        Raises:
            NoFileSpecifiedError: If ``path`` is empty.
            MissingFileError: If ``path`` does not exist.
            FileAccessError: If ``path`` cannot be stat'ed for another reason.
            TypeIdentificationError: If TrID fails or times out.
            TagExtractionError: If ExifTool fails.
        """
        if not os.fspath(path):
            raise NoFileSpecifiedError("no file specified")

        try:
            stat = os.stat(path)
        except FileNotFoundError as exc:
            raise MissingFileError(f"file not found: {os.fspath(path)}") from exc
        except OSError as exc:
            raise FileAccessError(f"cannot stat {os.fspath(path)}: {exc}") from exc

        name = base_name(path)
        fields: Dict[str, Any] = {
            "name": name,
            "extension": file_extension(name),
            "size_bytes": stat.st_size,
            "timestamps": timestamps_from_stat(stat),
        }

        try:
            fields["candidate_types"] = self.scanner.scan(path, self.trid_matches)
        except ToolError as exc:
            kind: type[ExtractionError] = TypeIdentificationError
            if isinstance(exc, ToolTimeoutError):
                kind = TypeIdentificationTimeout
            self._fail(kind, f"type identification failed for {name}: {exc}", fields, exc)

        try:
            fields["tags"] = self.exiftool.extract(path)
        except NoMetadataExtracted:
            LOGGER.debug("No tags extracted from %s", path)
            fields["tags"] = {}
        except ToolError as exc:
            self._fail(TagExtractionError, f"tag extraction failed for {name}: {exc}", fields, exc)

        result = ExtractionResult.model_validate(fields)
        if result.extension_mismatch:
            primary = result.primary_type
            LOGGER.info(
                "Extension %r of %s does not match detected type %r",
                result.extension,
                name,
                primary.matched_extension if primary else "",
            )
        return result

    @staticmethod
    def _fail(
        kind: type[ExtractionError],
        message: str,
        fields: Dict[str, Any],
        cause: BaseException,
    ) -> NoReturn:
        LOGGER.warning(message)
        raise kind(message, result=ExtractionResult.model_validate(fields)) from cause


__all__ = ["MetaExtractor"]
