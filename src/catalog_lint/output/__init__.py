"""Output renderers."""

from catalog_lint.output.console import render_console_report
from catalog_lint.output.json_export import export_json_report
from catalog_lint.output.sarif_export import export_sarif_report
from catalog_lint.output.summary import format_summary_report, render_summary_report

__all__ = [
    "export_json_report",
    "export_sarif_report",
    "format_summary_report",
    "render_console_report",
    "render_summary_report",
]
