"""Extension helpers and the extension-mismatch rule."""

from __future__ import annotations

import os
from pathlib import PurePath
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .models import TypeCandidate


def base_name(path: str | os.PathLike[str]) -> str:
    """Return the final path component, ignoring trailing separators."""
    return PurePath(os.fspath(path)).name


def file_extension(name: str) -> str:
    """Return the lower-cased extension of ``name`` including the leading dot.

    Everything from the last ``.`` onwards counts, so ``.bashrc`` yields
    ``.bashrc`` and ``archive.tar.gz`` yields ``.gz``. Names without a dot
    yield an empty string.
    """
    index = name.rfind(".")
    if index < 0:
        return ""
    return name[index:].lower()


def _dotted(alternative: str) -> str:
    stripped = alternative.replace(".", "")
    return f".{stripped}" if stripped else ""


def extension_mismatch(extension: str, candidates: Sequence["TypeCandidate"]) -> bool:
    """Return True when ``extension`` disagrees with the top-ranked candidate.

    Args:
        extension: Lower-cased file extension, dot included, or ``""``.
        candidates: Candidate types ordered most likely first.

    Returns:
        bool: False when there are no candidates or the extension matches one
        of the alternatives of the first candidate, True otherwise.
    """
    if not candidates:
        return False

    matched = candidates[0].matched_extension
    if "/" in matched:
        return not any(
            "." + alternative == extension
            for alternative in matched.replace(".", "").split("/")
        )
    return extension != _dotted(matched.lower())


__all__ = ["base_name", "file_extension", "extension_mismatch"]
