"""Tests for the TrID adapter."""

from pathlib import Path

import pytest

from conftest import TRID_JPEG_OUTPUT, TRID_PDF_OUTPUT, ToolFactory, recorded_args
from metaextractor.extraction.errors import TridError
from metaextractor.extraction.trid import TridScanner, normalize_extension, parse_trid_output


def test_parse_verbose_output() -> None:
    candidates = parse_trid_output(TRID_PDF_OUTPUT)

    assert [c.label for c in candidates] == [
        "Adobe Portable Document Format",
        "generic PDF with embedded fonts",
    ]
    top = candidates[0]
    assert top.matched_extension == ".pdf"
    assert top.mime_type == "application/pdf"
    assert top.probability == pytest.approx(93.3)
    assert top.definition == "adobe-pdf.trid.xml"
    assert top.related_url == "http://www.adobe.com/pdf/"
    assert candidates[1].matched_extension == ""
    assert candidates[1].mime_type == ""


def test_parse_alternative_extensions_and_limit() -> None:
    candidates = parse_trid_output(TRID_JPEG_OUTPUT, limit=1)

    assert len(candidates) == 1
    assert candidates[0].matched_extension == ".jpg/jpeg"
    assert candidates[0].label == "JFIF JPEG Bitmap"


def test_parse_unknown_file_yields_no_candidates() -> None:
    output = "TrID/32 - File Identifier v2.24\n\nCollecting data from file: empty\n\nUnknown!\n"

    assert parse_trid_output(output) == []


def test_parse_error_line_raises() -> None:
    with pytest.raises(TridError, match="found no file"):
        parse_trid_output("Error: found no file(s) to analyze!\n")


def test_label_keeps_inner_parentheses() -> None:
    output = " 80.0% (.MP3) MP3 audio (ID3 v2.x tag) (2040/1)\n"

    [candidate] = parse_trid_output(output)

    assert candidate.label == "MP3 audio (ID3 v2.x tag)"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(".PDF", ".pdf"), (".", ""), ("", ""), (" .Doc ", ".doc")],
)
def test_normalize_extension(raw: str, expected: str) -> None:
    assert normalize_extension(raw) == expected


def test_scanner_passes_matches_and_definitions(tmp_path: Path, make_tool: ToolFactory) -> None:
    tool = make_tool("trid", TRID_PDF_OUTPUT)
    target = tmp_path / "sample.doc"
    target.write_bytes(b"%PDF-1.4")

    scanner = TridScanner(command=tool, definitions="/opt/trid/triddefs.trd", timeout=5)
    candidates = scanner.scan(target, 1)

    assert len(candidates) == 1
    assert recorded_args(tool) == [str(target), "-n:1", "-v", "-d:/opt/trid/triddefs.trd"]


def test_scanner_nonzero_exit_raises(tmp_path: Path, make_tool: ToolFactory) -> None:
    tool = make_tool("trid", "", stderr="definitions not found", exit_code=2)

    with pytest.raises(TridError, match="definitions not found"):
        TridScanner(command=tool).scan(tmp_path / "x.bin", 5)


def test_scanner_keeps_dash_prefixed_path_out_of_options(
    tmp_path: Path, make_tool: ToolFactory, monkeypatch: pytest.MonkeyPatch
) -> None:
    tool = make_tool("trid", TRID_JPEG_OUTPUT)
    monkeypatch.chdir(tmp_path)
    Path("-x.jpg").write_bytes(b"\xff\xd8\xff")

    candidates = TridScanner(command=tool).scan(Path("-x.jpg"), 5)

    assert candidates
    assert recorded_args(tool)[0] == "./-x.jpg"
