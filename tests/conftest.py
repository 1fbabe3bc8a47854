"""Shared fixtures that stand in for the TrID and ExifTool executables."""

from __future__ import annotations

import stat
import textwrap
from pathlib import Path
from typing import Callable, Optional

import pytest

TRID_PDF_OUTPUT = textwrap.dedent(
    """\
    TrID/32 - File Identifier v2.24 - (C) 2003-16 By M.Pontello
    Definitions found:  14906
    Analyzing...

    Collecting data from file: sample.doc
     93.3% (.PDF) Adobe Portable Document Format (5000/1)
            Mime type       : application/pdf
            Related URL     : http://www.adobe.com/pdf/
            Definition      : adobe-pdf.trid.xml

      6.6% (.) generic PDF with embedded fonts (350/1)
            Definition      : pdf-generic.trid.xml
    """
)

TRID_JPEG_OUTPUT = textwrap.dedent(
    """\
    TrID/32 - File Identifier v2.24 - (C) 2003-16 By M.Pontello
    Definitions found:  14906
    Analyzing...

    Collecting data from file: photo.jpeg
     61.7% (.JPG/JPEG) JFIF JPEG Bitmap (4003/3)
            Mime type       : image/jpeg
     38.2% (.JPG) JPEG Bitmap (2500/1)
    """
)

EXIFTOOL_PDF_OUTPUT = textwrap.dedent(
    """\
    [{
      "SourceFile": "sample.doc",
      "FileType": "PDF",
      "MIMEType": "application/pdf",
      "PageCount": 2,
      "Linearized": false
    }]
    """
)

ToolFactory = Callable[..., str]


def _write_script(path: Path, body: str) -> str:
    path.write_text("#!/bin/sh\n" + body, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(path)


@pytest.fixture
def make_tool(tmp_path: Path) -> ToolFactory:
    """Return a factory that writes a stub executable into ``tmp_path/bin``.

    The stub records its arguments in ``<name>.args`` (one per line), prints
    ``stdout``/``stderr`` verbatim, and exits with ``exit_code``. When
    ``sleep`` is given it sleeps instead of printing.
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir(exist_ok=True)

    def _factory(
        name: str,
        stdout: str = "",
        *,
        stderr: str = "",
        exit_code: int = 0,
        sleep: Optional[float] = None,
    ) -> str:
        args_file = bin_dir / f"{name}.args"
        lines = [f"printf '%s\\n' \"$@\" > '{args_file}'"]
        if sleep is not None:
            lines.append(f"exec sleep {sleep}")
        else:
            lines.append("cat <<'__STDOUT__'")
            lines.append(stdout.rstrip("\n"))
            lines.append("__STDOUT__")
            if stderr:
                lines.append("cat >&2 <<'__STDERR__'")
                lines.append(stderr.rstrip("\n"))
                lines.append("__STDERR__")
            lines.append(f"exit {exit_code}")
        return _write_script(bin_dir / name, "\n".join(lines) + "\n")

    return _factory


def recorded_args(tool_path: str) -> list[str]:
    """Return the arguments a stub created by ``make_tool`` was last called with."""
    return Path(tool_path + ".args").read_text(encoding="utf-8").splitlines()
