from __future__ import annotations

from pathlib import Path

from rich.console import Console

from catalog_lint.models.findings import Violation
from catalog_lint.models.reports import RunReport


def display_path(path: str, root: str) -> str:
    try:
        return Path(path).relative_to(root).as_posix()
    except ValueError:
        return path


def _location(item: Violation, root: str) -> str:
    if not item.file_path:
        return "n/a"
    location = display_path(item.file_path, root)
    if item.line:
        return f"{location}:{item.line}"
    return location


def format_summary_report(report: RunReport) -> str:
    lines: list[str] = []
    lines.append("Catalog Lint Summary")
    lines.append(f"Root: {report.root}")
    lines.append(f"Checked files: {report.checked_files}")
    lines.append(
        "Overall: "
        f"passed={report.summary.get('passed', 0)}, "
        f"failed={report.summary.get('failed', 0)}, "
        f"violations={report.summary.get('violations', 0)}, "
        f"warnings={report.summary.get('warnings', 0)}"
    )

    for item in report.results:
        if item.passed and not item.warnings:
            continue
        lines.append("")
        status = "PASS" if item.passed else "FAIL"
        lines.append(f"[{status}] {item.kind.value} {display_path(item.path, report.root)}")
        for violation in item.violations:
            lines.append(f"  error   {violation.rule_id.value}: {violation.message} ({_location(violation, report.root)})")
        for warning in item.warnings:
            lines.append(f"  warning {warning.rule_id.value}: {warning.message} ({_location(warning, report.root)})")

    if report.notes:
        lines.append("")
        lines.append("Discovery notes:")
        for index, note in enumerate(report.notes, start=1):
            lines.append(f"{index}. {note}")

    return "\n".join(lines)


def render_summary_report(report: RunReport, *, no_color: bool = False) -> str:
    payload = format_summary_report(report)
    Console(no_color=no_color).print(payload, markup=False, highlight=False, emoji=False, soft_wrap=True)
    return payload
