from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from catalog_lint.models.reports import RunReport
from catalog_lint.output.summary import display_path


def render_console_report(report: RunReport, *, no_color: bool = False) -> None:
    console = Console(no_color=no_color)
    table = Table(title="catalog-lint results")
    table.add_column("File")
    table.add_column("Kind")
    table.add_column("Status")
    table.add_column("Violations", justify="right")
    table.add_column("Warnings", justify="right")

    for item in report.results:
        table.add_row(
            escape(display_path(item.path, report.root)),
            item.kind.value,
            "[green]PASS[/green]" if item.passed else "[red]FAIL[/red]",
            str(len(item.violations)),
            str(len(item.warnings)),
        )

    console.print(table)

    flagged = [item for item in report.results if item.violations or item.warnings]
    for item in flagged:
        console.print(escape(display_path(item.path, report.root)))
        for violation in item.violations:
            console.print(f"  [red]error[/red]   {violation.rule_id.value}: {escape(violation.message)}")
        for warning in item.warnings:
            console.print(f"  [yellow]warning[/yellow] {warning.rule_id.value}: {escape(warning.message)}")

    if report.notes:
        console.print("Discovery notes:")
        for note in report.notes:
            console.print(f"- {escape(note)}")

    console.print(f"Checked files: {report.checked_files}")
    console.print(
        f"Passed: {report.summary.get('passed', 0)}  "
        f"Failed: {report.summary.get('failed', 0)}  "
        f"Violations: {report.summary.get('violations', 0)}  "
        f"Warnings: {report.summary.get('warnings', 0)}"
    )
