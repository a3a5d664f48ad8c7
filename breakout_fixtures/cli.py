"""Command-line interface for generating symlink breakout fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from breakout_fixtures import __version__
from breakout_fixtures.fixtures.catalog import default_catalog, generate_fixtures
from breakout_fixtures.fixtures.config import OUTPUT_ROOT_ENV, resolve_output_root, validate_marker
from breakout_fixtures.fixtures.models import AliasSpec
from breakout_fixtures.fixtures.snapshot import build_manifest, link_report, write_manifest
from breakout_fixtures.logging_utils import configure_logging

app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()


def _version_callback(value: bool) -> None:
    """Print package version and exit when requested."""
    if value:
        console.print(__version__)
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit.",
            is_eager=True,
            callback=_version_callback,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose debug logging."),
    ] = False,
    log_file: Annotated[
        Path,
        typer.Option(
            "--log-file",
            help="Write logs to this file (default: ./breakout-fixtures.log).",
        ),
    ] = Path("breakout-fixtures.log"),
    json_logs: Annotated[
        bool,
        typer.Option(
            "--json-logs/--no-json-logs",
            help="Also write log records to stderr as JSON lines.",
        ),
    ] = False,
) -> None:
    """Generate filesystem fixtures that try to escape a root through symlinks."""
    configure_logging(log_file=log_file, verbose=verbose, json_stream=json_logs)


@app.command()
def generate(
    output_root: Annotated[
        Path | None,
        typer.Option(
            help=f"Directory receiving the scenarios (default: ${OUTPUT_ROOT_ENV} "
            "or ./breakout-fixtures).",
        ),
    ] = None,
    marker: Annotated[
        str | None,
        typer.Option(
            help="Root marker for every scenario: static (.git skeleton) or git (run git init). "
            "Defaults to each scenario's own marker, then static.",
        ),
    ] = None,
    keep_going: Annotated[
        bool,
        typer.Option(
            "--keep-going/--fail-fast",
            help="Continue with remaining scenarios after a filesystem error.",
        ),
    ] = False,
    manifest: Annotated[
        Path | None,
        typer.Option(help="Optional path for a JSON manifest of the generated tree."),
    ] = None,
) -> None:
    """Build the default scenario catalog."""
    if marker is not None:
        try:
            marker = validate_marker(marker)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
    root = resolve_output_root(output_root)
    entries = default_catalog()
    report = generate_fixtures(root, entries, marker=marker, keep_going=keep_going)

    table = Table(title=f"Fixtures under {root}")
    table.add_column("Scenario")
    table.add_column("Status")
    table.add_column("Detail")
    for outcome in report.outcomes:
        table.add_row(
            outcome.name,
            "ok" if outcome.ok else (outcome.error_kind or "failed"),
            outcome.message or str(outcome.path),
        )
    console.print(table)
    if report.aborted:
        console.print("Run aborted after a filesystem error; remaining scenarios were skipped.")
    if manifest is not None:
        written = write_manifest(manifest, build_manifest(root, entries, report))
        console.print(f"Manifest: {written}")
    if not report.ok:
        failed = ", ".join(outcome.name for outcome in report.failed) or "-"
        console.print(f"Failed scenarios: {failed}")
        raise typer.Exit(code=1)


@app.command()
def scenarios() -> None:
    """List the scenarios produced by generate."""
    table = Table(title="Scenario Catalog")
    table.add_column("Name")
    table.add_column("Kind")
    table.add_column("Links")
    table.add_column("Probes")
    table.add_column("Description")
    for entry in default_catalog():
        if isinstance(entry, AliasSpec):
            table.add_row(
                entry.name, "alias", f"-> {entry.target_scenario}", "-", entry.description
            )
            continue
        links = ", ".join(f"{link.relative_path} -> {link.target}" for link in entry.links)
        probes = ", ".join(f"{probe.path} [{probe.symlink_component}]" for probe in entry.probes)
        table.add_row(entry.name, "scenario", links, probes or "-", entry.description)
    console.print(table)


@app.command()
def inspect(
    output_root: Annotated[Path, typer.Argument(help="Output root to inspect.")],
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the link report as JSON."),
    ] = False,
) -> None:
    """Report symlinks under an output root and whether they escape their scenario."""
    if not output_root.is_dir():
        raise typer.BadParameter(f"Output root '{output_root}' is not a directory.")
    rows = link_report(output_root)
    if as_json:
        console.print_json(json.dumps([row.to_dict() for row in rows]))
    else:
        table = Table(title=f"Links under {output_root}")
        table.add_column("Link")
        table.add_column("Target")
        table.add_column("Resolves To")
        table.add_column("Escapes")
        for row in rows:
            escapes = "alias" if row.escapes is None else ("yes" if row.escapes else "NO")
            table.add_row(row.path, row.target, str(row.resolved), escapes)
        console.print(table)
    if any(row.escapes is False for row in rows):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
