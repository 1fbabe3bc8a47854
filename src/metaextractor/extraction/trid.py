"""TrID integration: run the identifier and parse its ranked matches."""

from __future__ import annotations

import logging
import os
import re
from typing import Dict, List, Optional

from .errors import TridError
from .models import TypeCandidate
from .process import path_argument, run_tool

LOGGER = logging.getLogger(__name__)

DEFAULT_TRID_COMMAND = "trid"

# " 93.3% (.PDF) Adobe Portable Document Format (5000/1)"
_MATCH_LINE = re.compile(
    r"^\s*(?P<probability>\d+(?:\.\d+)?)%\s+"
    r"\((?P<extension>[^)]*)\)\s+"
    r"(?P<label>.*?)"
    r"(?:\s+\((?P<points>\d+(?:/\d+)*)\))?\s*$"
)
# "        Mime type       : application/pdf"
_DETAIL_LINE = re.compile(r"^\s+(?P<key>[A-Za-z][A-Za-z \-]*?)\s*:\s*(?P<value>.*?)\s*$")

_DETAIL_FIELDS = {
    "mime type": "mime_type",
    "definition": "definition",
    "related url": "related_url",
}


def normalize_extension(raw: str) -> str:
    """Lower-case a TrID extension, mapping the bare ``.`` placeholder to ``""``."""
    value = raw.strip().lower()
    if value in {"", "."}:
        return ""
    return value


def parse_trid_output(output: str, limit: Optional[int] = None) -> List[TypeCandidate]:
    """Parse verbose TrID output into ranked candidates.

    Args:
        output: Text printed by ``trid -v``.
        limit: Optional cap on the number of candidates returned.

    Returns:
        List[TypeCandidate]: Candidates in the order TrID printed them.

    Raises:
        TridError: If TrID printed an ``Error:`` line.
    """
    candidates: List[Dict[str, object]] = []
    for line in output.splitlines():
        if line.strip().startswith("Error:"):
            raise TridError(line.strip()[len("Error:") :].strip() or "TrID reported an error")

        match = _MATCH_LINE.match(line)
        if match:
            candidates.append(
                {
                    "label": match.group("label").strip(),
                    "matched_extension": normalize_extension(match.group("extension")),
                    "probability": float(match.group("probability")),
                }
            )
            continue

        if not candidates:
            continue
        detail = _DETAIL_LINE.match(line)
        if detail:
            field = _DETAIL_FIELDS.get(detail.group("key").strip().lower())
            if field and detail.group("value"):
                candidates[-1].setdefault(field, detail.group("value"))

    if limit is not None and limit > 0:
        candidates = candidates[:limit]
    return [TypeCandidate.model_validate(entry) for entry in candidates]


class TridScanner:
    """Identify file types by invoking the TrID command line tool."""

    def __init__(
        self,
        command: str | None = None,
        definitions: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.command = command or DEFAULT_TRID_COMMAND
        self.definitions = definitions
        self.timeout = timeout

    def build_command(self, path: str | os.PathLike[str], matches: int) -> List[str]:
        """Return the argument vector used to scan ``path``."""
        args = [self.command, path_argument(path), f"-n:{matches}", "-v"]
        if self.definitions:
            args.append(f"-d:{self.definitions}")
        return args

    def scan(self, path: str | os.PathLike[str], matches: int) -> List[TypeCandidate]:
        """Return up to ``matches`` candidate types for ``path``.

        Raises:
            TridError: If TrID exits abnormally or reports an error.
            ToolNotFoundError: If the TrID executable is missing.
            ToolTimeoutError: If TrID exceeds the configured timeout.
        """
        output = run_tool(self.build_command(path, matches), timeout=self.timeout)
        if output.returncode != 0:
            message = output.stderr.strip() or output.stdout.strip() or "no output"
            raise TridError(f"TrID exited with status {output.returncode}: {message}")

        candidates = parse_trid_output(output.stdout, limit=matches)
        LOGGER.debug("TrID reported %d candidate(s) for %s", len(candidates), path)
        return candidates


__all__ = ["DEFAULT_TRID_COMMAND", "TridScanner", "normalize_extension", "parse_trid_output"]
