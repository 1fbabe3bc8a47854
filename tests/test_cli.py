"""CLI tests for the `extract` command."""

from __future__ import annotations

import json
import os
from pathlib import Path

from click.testing import CliRunner

from conftest import EXIFTOOL_PDF_OUTPUT, TRID_PDF_OUTPUT, ToolFactory
from metaextractor.cli import cli


def _env_with_home(tmp_path: Path) -> dict[str, str]:
    env = dict(os.environ)
    env["HOME"] = str(tmp_path / "home")
    return env


def _tool_args(make_tool: ToolFactory, exiftool_output: str = EXIFTOOL_PDF_OUTPUT) -> list[str]:
    return [
        "--trid-path",
        make_tool("trid", TRID_PDF_OUTPUT),
        "--exiftool-path",
        make_tool("exiftool", exiftool_output),
    ]


def test_cli_help_displays_commands() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "extract" in result.output
    assert "config" in result.output


def test_extract_json_output(tmp_path: Path, make_tool: ToolFactory) -> None:
    target = tmp_path / "sample.doc"
    target.write_bytes(b"%PDF-1.4")
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["extract", "--json", *_tool_args(make_tool), str(target)],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["errors"] == []
    [entry] = payload["results"]
    assert entry["path"] == str(target)
    assert entry["name"] == "sample.doc"
    assert entry["extension_mismatch"] is True
    assert entry["candidate_types"][0]["mime_type"] == "application/pdf"
    assert entry["tags"]["FileType"] == "PDF"
    assert entry["timestamps"]["modified"]


def test_extract_json_reports_errors_with_partial_results(
    tmp_path: Path, make_tool: ToolFactory
) -> None:
    good = tmp_path / "sample.doc"
    good.write_bytes(b"%PDF-1.4")
    missing = tmp_path / "missing.doc"
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["extract", "--json", *_tool_args(make_tool), str(good), str(missing), ""],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert [entry["name"] for entry in payload["results"]] == ["sample.doc"]
    codes = {entry["path"]: entry["code"] for entry in payload["errors"]}
    assert codes == {str(missing): "file_not_found", "": "no_file_specified"}
    assert all(entry["result"]["name"] == "" for entry in payload["errors"])


def test_extract_text_output(tmp_path: Path, make_tool: ToolFactory) -> None:
    target = tmp_path / "sample.doc"
    target.write_bytes(b"%PDF-1.4")
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["extract", "--tags", *_tool_args(make_tool), str(target)],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 0
    assert "sample.doc" in result.stdout
    assert "Extension mismatch" in result.stdout
    assert "application/pdf" in result.stdout
    assert "PageCount" in result.stdout


def test_extract_uses_configured_matches(tmp_path: Path, make_tool: ToolFactory) -> None:
    target = tmp_path / "sample.doc"
    target.write_bytes(b"%PDF-1.4")
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["extract", "--json", "--matches", "1", *_tool_args(make_tool), str(target)],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 0
    [entry] = json.loads(result.stdout)["results"]
    assert len(entry["candidate_types"]) == 1
