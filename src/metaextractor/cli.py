"""Command line interface for metaextractor."""

from __future__ import annotations

import difflib
import logging
from typing import Any

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from metaextractor.config import (
    ConfigError,
    ConfigManager,
    MetaExtractorConfig,
    resolve_with_precedence,
)
from metaextractor.extraction import ExtractionError, ExtractionResult, MetaExtractor

console = Console()
err_console = Console(stderr=True)


def _configure_logging(level: str) -> None:
    """Attach a Rich handler to the package logger at ``level``.

    Args:
        level: Logging level name such as ``WARNING`` or ``DEBUG``.
    """
    logger = logging.getLogger("metaextractor")
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=err_console, show_path=False))
    logger.setLevel(level.upper())


def _load_config(cli_overrides: dict[str, Any]) -> MetaExtractorConfig:
    """Load the effective configuration, surfacing errors as Click exceptions.

    Raises:
        click.ClickException: If configuration cannot be loaded.
    """
    try:
        return ConfigManager().load(cli_overrides=cli_overrides)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


def _format_time(value: Any) -> str:
    return value.isoformat() if value is not None else "-"


def _render_result(path: str, result: ExtractionResult, *, show_tags: bool) -> None:
    """Print a human-readable summary of one extraction result.

    Args:
        path: Path as given on the command line.
        result: Extraction result to render.
        show_tags: Whether to list every tag rather than just the count.
    """
    summary = Table(title=escape(path), show_header=False, title_justify="left")
    summary.add_column("Field", style="bold")
    summary.add_column("Value")
    summary.add_row("Name", Text(result.name))
    summary.add_row("Extension", result.extension or "-")
    summary.add_row("Size", f"{result.size_bytes} bytes")
    summary.add_row("Modified", _format_time(result.timestamps.modified))
    summary.add_row("Accessed", _format_time(result.timestamps.accessed))
    summary.add_row("Changed", _format_time(result.timestamps.changed))
    summary.add_row("Created", _format_time(result.timestamps.created))
    mismatch = "[red]yes[/red]" if result.extension_mismatch else "[green]no[/green]"
    summary.add_row("Extension mismatch", mismatch)
    summary.add_row("Tags", str(len(result.tags)))
    console.print(summary)

    if result.candidate_types:
        types = Table(title="Candidate types", title_justify="left")
        types.add_column("#", justify="right")
        types.add_column("Probability", justify="right", no_wrap=True)
        types.add_column("Extension", no_wrap=True)
        types.add_column("MIME type", no_wrap=True)
        types.add_column("Label")
        for index, candidate in enumerate(result.candidate_types, start=1):
            probability = candidate.probability
            types.add_row(
                str(index),
                f"{probability:.1f}%" if probability is not None else "-",
                candidate.matched_extension or "-",
                candidate.mime_type or "-",
                Text(candidate.label),
            )
        console.print(types)
    else:
        console.print("[yellow]No candidate types reported.[/yellow]")

    if show_tags and result.tags:
        tags = Table(title="Tags", title_justify="left")
        tags.add_column("Tag", style="bold")
        tags.add_column("Value")
        for key, value in result.tags.items():
            tags.add_row(Text(key), Text(str(value)))
        console.print(tags)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="metaextractor")
def cli() -> None:
    """metaextractor reports filesystem, TrID, and ExifTool metadata for files."""


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(path_type=str))
@click.option("--json", "json_output", is_flag=True, help="Emit results as JSON.")
@click.option("--tags/--no-tags", "show_tags", default=None, help="List every extracted tag.")
@click.option("--trid-path", type=str, help="TrID executable to run.")
@click.option("--trid-defs", type=str, help="Path to the TrID definitions package.")
@click.option("--trid-timeout", type=float, help="Seconds to allow TrID per file.")
@click.option("--matches", type=int, help="Maximum number of candidate types.")
@click.option("--exiftool-path", type=str, help="ExifTool executable to run.")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def extract(
    paths: tuple[str, ...],
    json_output: bool,
    show_tags: bool | None,
    trid_path: str | None,
    trid_defs: str | None,
    trid_timeout: float | None,
    matches: int | None,
    exiftool_path: str | None,
    verbose: bool,
) -> None:
    """Extract metadata for one or more PATHS.

    Exits with status 1 when any path fails; the remaining paths are still
    processed.
    """
    overrides: dict[str, Any] = {}
    for key, value in (
        ("trid.path", trid_path),
        ("trid.definitions", trid_defs),
        ("trid.timeout_seconds", trid_timeout),
        ("trid.matches", matches),
        ("exiftool.path", exiftool_path),
    ):
        if value is not None:
            overrides[key] = value

    config = _load_config(overrides)
    _configure_logging("DEBUG" if verbose else config.logging.level)
    if show_tags is None:
        show_tags = config.cli.show_tags_default

    extractor = MetaExtractor.from_config(config)
    results: list[dict[str, Any]] = []
    errors: list[dict[str, Any]] = []

    for path in paths:
        try:
            result = extractor.extract(path)
        except ExtractionError as exc:
            errors.append(
                {
                    "path": path,
                    "code": exc.code,
                    "message": str(exc),
                    "result": exc.result.model_dump(mode="json"),
                }
            )
            if not json_output:
                console.print(f"[red]{escape(path)}: {escape(str(exc))}[/red]")
            continue

        if json_output:
            results.append({"path": path, **result.model_dump(mode="json")})
        else:
            _render_result(path, result, show_tags=show_tags)

    if json_output:
        console.print_json(data={"results": results, "errors": errors})
    elif len(paths) > 1:
        console.print(
            f"[green]Extracted {len(paths) - len(errors)} of {len(paths)} file(s).[/green]"
        )

    if errors:
        raise SystemExit(1)


@cli.group()
def config() -> None:
    """Inspect and update the metaextractor configuration file."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
def config_view(no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules.

    Raises:
        click.ClickException: If configuration cannot be loaded.
    """
    try:
        effective = ConfigManager().load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(effective.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="YAML literal to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist VALUE at the dotted KEY, e.g. ``trid.matches``.

    Raises:
        click.ClickException: If parsing or validation fails.
    """
    manager = ConfigManager()
    try:
        manager.ensure_exists()
        file_data = manager.load_file_overrides()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    segments = [segment.strip() for segment in key.split(".") if segment.strip()]
    if not segments:
        raise click.ClickException("KEY must be a dotted path such as 'trid.matches'.")

    try:
        parsed_value = yaml.safe_load(value)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Unable to parse value: {exc}") from exc

    node = file_data
    for segment in segments[:-1]:
        child = node.setdefault(segment, {})
        if not isinstance(child, dict):
            raise click.ClickException(f"Cannot assign into '{segment}'; it is not a mapping.")
        node = child
    node[segments[-1]] = parsed_value

    try:
        resolve_with_precedence(defaults=MetaExtractorConfig(), file_overrides=file_data)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    before = manager.read_text().splitlines()
    manager.save(file_data)
    after = manager.read_text().splitlines()

    # The timestamp line always changes; ignore it when deciding whether anything did.
    changed = [
        line
        for line in difflib.unified_diff(before, after, lineterm="", n=0)
        if line[:1] in "+-" and not line.startswith(("+++", "---", "+# Last", "-# Last"))
    ]
    if not changed:
        console.print("[yellow]No changes applied; value already up to date.[/yellow]")
        return

    diff = difflib.unified_diff(
        before,
        after,
        fromfile="config.yaml (before)",
        tofile="config.yaml (after)",
        lineterm="",
    )
    console.print(Syntax("\n".join(diff), "diff", word_wrap=False))
    console.print(f"[green]Updated {'.'.join(segments)}.[/green]")


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
