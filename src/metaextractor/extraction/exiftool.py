"""ExifTool integration: extract embedded metadata as a flat tag map."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, List

from .errors import ExifToolError, NoMetadataExtracted
from .models import TagMap
from .process import path_argument, run_tool

LOGGER = logging.getLogger(__name__)

DEFAULT_EXIFTOOL_COMMAND = "exiftool"

# JSON output, all binary metadata, embedded documents.
_EXTRACT_OPTIONS = (
    "-j",
    "-b",
    "-ee",
    "-api",
    "largefilesupport=1",
    "-charset",
    "filename=utf8",
)


def parse_exiftool_output(stdout: str) -> TagMap:
    """Return the tag map for the first file in ExifTool's JSON output.

    Raises:
        NoMetadataExtracted: If the output holds no file entries.
        ExifToolError: If the output is not valid JSON or the entry carries
            an ``Error`` tag.
    """
    if not stdout.strip():
        raise NoMetadataExtracted("no metadata extracted")

    try:
        payload: Any = json.loads(stdout)
    except json.JSONDecodeError as exc:
        raise ExifToolError(f"unreadable ExifTool output: {exc}") from exc

    if not isinstance(payload, list):
        raise ExifToolError("ExifTool output must be a JSON array")
    if not payload:
        raise NoMetadataExtracted("no metadata extracted")

    entry = payload[0]
    if not isinstance(entry, dict):
        raise ExifToolError("ExifTool output entries must be JSON objects")
    if "Error" in entry:
        raise ExifToolError(f"error extracting metadata: {entry['Error']}")

    return {key: value for key, value in entry.items() if key != "SourceFile"}


class ExifTool:
    """Run ExifTool once per file and collect its tags.

    Each call starts a fresh process which is reaped before the call returns,
    whether it succeeds, fails, or raises.
    """

    def __init__(self, command: str | None = None) -> None:
        self.command = command or DEFAULT_EXIFTOOL_COMMAND

    def build_command(self, path: str | os.PathLike[str]) -> List[str]:
        """Return the argument vector used to read ``path``."""
        return [self.command, *_EXTRACT_OPTIONS, path_argument(path)]

    def extract(self, path: str | os.PathLike[str]) -> TagMap:
        """Return every tag ExifTool can read from ``path``.

        Raises:
            NoMetadataExtracted: If ExifTool finished without output.
            ExifToolError: If ExifTool failed to read the file.
            ToolNotFoundError: If the ExifTool executable is missing.
        """
        output = run_tool(self.build_command(path))
        if output.returncode != 0 and not output.stdout.strip():
            message = output.stderr.strip() or "no output"
            raise ExifToolError(f"ExifTool exited with status {output.returncode}: {message}")

        tags = parse_exiftool_output(output.stdout)
        LOGGER.debug("ExifTool returned %d tag(s) for %s", len(tags), path)
        return tags


__all__ = ["DEFAULT_EXIFTOOL_COMMAND", "ExifTool", "parse_exiftool_output"]
