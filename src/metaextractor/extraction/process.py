"""Thin wrapper around :mod:`subprocess` for running external tools."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Sequence

from .errors import ToolError, ToolNotFoundError, ToolTimeoutError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolOutput:
    """Captured output of a finished tool invocation."""

    returncode: int
    stdout: str
    stderr: str


def path_argument(path: str | os.PathLike[str]) -> str:
    """Return ``path`` as an argument no tool can mistake for an option."""
    value = os.fspath(path)
    if value.startswith("-"):
        return os.path.join(os.curdir, value)
    return value


def run_tool(args: Sequence[str], *, timeout: float | None = None) -> ToolOutput:
    """Run ``args`` to completion and capture its output.

    A non-zero exit status is returned rather than raised; callers decide
    what it means for their tool.

    Args:
        args: Executable followed by its arguments.
        timeout: Seconds to wait before killing the process. None or a
            non-positive value waits indefinitely.

    Returns:
        ToolOutput: Exit status plus decoded stdout and stderr.

    Raises:
        ToolNotFoundError: If the executable cannot be found.
        ToolTimeoutError: If the process outlives ``timeout``.
        ToolError: For any other launch failure.
    """
    command = [str(arg) for arg in args]
    limit = timeout if timeout is not None and timeout > 0 else None
    LOGGER.debug("Running %s (timeout=%s)", shlex.join(command), limit)
    try:
        completed = subprocess.run(
            command,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=limit,
            check=False,
        )
    except FileNotFoundError as exc:
        raise ToolNotFoundError(f"{command[0]} not found") from exc
    except subprocess.TimeoutExpired as exc:
        raise ToolTimeoutError(f"{command[0]} timed out after {limit} seconds") from exc
    except OSError as exc:
        raise ToolError(f"failed to launch {command[0]}: {exc}") from exc

    LOGGER.debug("%s exited with status %s", command[0], completed.returncode)
    return ToolOutput(
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )


__all__ = ["ToolOutput", "path_argument", "run_tool"]
