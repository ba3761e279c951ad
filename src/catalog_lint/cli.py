from __future__ import annotations

import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from catalog_lint import __version__
from catalog_lint.config import Settings, load_settings
from catalog_lint.discovery.finder import discover_with_diagnostics
from catalog_lint.errors import DiscoveryError
from catalog_lint.models.reports import RunReport
from catalog_lint.output.console import render_console_report
from catalog_lint.output.json_export import export_json_report
from catalog_lint.output.sarif_export import export_sarif_report
from catalog_lint.output.summary import display_path, render_summary_report
from catalog_lint.pipeline import has_failures, run
from catalog_lint.validation.rules import all_rules

CHECK_FORMATS = ("table", "summary", "json", "sarif")
DISCOVER_FORMATS = ("table", "json")

app = typer.Typer(
    help=(
        "Lint the front matter of agent (*.agent.md) and skill (skills/**/SKILL.md) files "
        "in a prompt catalog."
    ),
    no_args_is_help=True,
)
console = Console()
logger = logging.getLogger(__name__)


@app.callback(invoke_without_command=True)
def callback(
    version: bool = typer.Option(False, "--version", help="Show version and exit.", is_eager=True)
) -> None:
    if version:
        console.print(__version__)
        raise typer.Exit()


@app.command()
def check(
    root: str = typer.Argument(".", help="Catalog root directory."),
    format: str = typer.Option("table", help="table|summary|json|sarif"),
    output: str | None = typer.Option(
        None,
        help="Optional output file path. The table format prints the table and writes the JSON report here.",
    ),
    jobs: int | None = typer.Option(None, min=1, help="Maximum files validated concurrently (env: CATALOG_LINT_JOBS)."),
    read_timeout: float | None = typer.Option(
        None,
        min=0.001,
        help="Per-file read timeout in seconds (env: CATALOG_LINT_READ_TIMEOUT).",
    ),
    strict: bool = typer.Option(False, "--strict", help="Treat warnings as failures (env: CATALOG_LINT_STRICT)."),
    no_color: bool = typer.Option(False, help="Disable color output."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logs."),
) -> None:
    _configure_logging(verbose)
    _require_format(format, CHECK_FORMATS)
    settings = _load_settings_or_exit(jobs=jobs, read_timeout_s=read_timeout, strict=True if strict else None)
    logger.info(
        "check config: root=%s jobs=%s read_timeout=%s max_asset_bytes=%s strict=%s",
        root,
        settings.jobs,
        settings.read_timeout_s,
        settings.max_asset_bytes,
        settings.strict,
    )

    try:
        report = run(
            root,
            jobs=settings.jobs,
            read_timeout_s=settings.read_timeout_s,
            max_asset_bytes=settings.max_asset_bytes,
        )
    except DiscoveryError as exc:
        console.print(f"Discovery failed: {exc}", markup=False)
        raise typer.Exit(code=2) from exc

    _emit_report(report, format=format, output=output, no_color=no_color)

    if has_failures(report, strict=settings.strict):
        raise typer.Exit(code=1)


@app.command()
def discover(
    root: str = typer.Argument(".", help="Catalog root directory."),
    format: str = typer.Option("table", help="table|json"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logs."),
) -> None:
    _configure_logging(verbose)
    _require_format(format, DISCOVER_FORMATS)
    try:
        files, notes = discover_with_diagnostics(root)
    except DiscoveryError as exc:
        console.print(f"Discovery failed: {exc}", markup=False)
        raise typer.Exit(code=2) from exc

    if format == "json":
        console.print_json(data=[item.model_dump(mode="json") for item in files])
        return

    resolved_root = str(Path(root).expanduser().resolve())
    console.print(f"Discovered {len(files)} files")
    for index, item in enumerate(files, start=1):
        console.print(f"{index:>3}. {item.kind.value:<6} {display_path(item.path, resolved_root)}", markup=False)
    for note in notes:
        console.print(f"note: {note}", markup=False)


@app.command()
def rules() -> None:
    table = Table(title="catalog-lint rules")
    table.add_column("Rule", no_wrap=True)
    table.add_column("Severity")
    table.add_column("Applies to")
    table.add_column("Checks")
    for rule in all_rules():
        table.add_row(
            rule.rule_id.value,
            rule.severity.value,
            ", ".join(sorted(kind.value for kind in rule.kinds)),
            rule.summary,
        )
    console.print(table)


def _configure_logging(verbose: bool) -> None:
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _require_format(value: str, allowed: tuple[str, ...]) -> None:
    if value in allowed:
        return
    console.print(f"Unsupported format '{value}'. Choose one of: {', '.join(allowed)}.", markup=False)
    raise typer.Exit(code=2)


def _load_settings_or_exit(
    *,
    jobs: int | None,
    read_timeout_s: float | None,
    strict: bool | None,
) -> Settings:
    try:
        return load_settings(jobs=jobs, read_timeout_s=read_timeout_s, strict=strict)
    except ValidationError as exc:
        console.print(f"Invalid configuration: {exc}", markup=False)
        raise typer.Exit(code=2) from exc


def _emit_report(report: RunReport, *, format: str, output: str | None, no_color: bool) -> None:
    if format == "json":
        payload = export_json_report(report, output)
        if not output:
            console.print(payload, markup=False, highlight=False, emoji=False, soft_wrap=True)
    elif format == "sarif":
        payload = export_sarif_report(report, output)
        if not output:
            console.print(payload, markup=False, highlight=False, emoji=False, soft_wrap=True)
    elif format == "summary":
        payload = render_summary_report(report, no_color=no_color)
        if output:
            Path(output).write_text(payload, encoding="utf-8")
    else:
        render_console_report(report, no_color=no_color)
        if output:
            Path(output).write_text(export_json_report(report), encoding="utf-8")
