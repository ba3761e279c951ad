from __future__ import annotations

import json
from pathlib import Path

from catalog_lint.models.findings import Severity
from catalog_lint.models.reports import RunReport
from catalog_lint.validation.rules import all_rules

LEVEL_MAP = {
    Severity.VIOLATION: "error",
    Severity.WARNING: "warning",
}


def _artifact_uri(file_path: str) -> str:
    path = Path(file_path)
    return path.as_uri() if path.is_absolute() else path.as_posix()


def export_sarif_report(report: RunReport, output: str | None = None) -> str:
    summaries = {rule.rule_id: rule.summary for rule in all_rules()}
    results: list[dict[str, object]] = []
    rules: dict[str, dict[str, object]] = {}

    for item in report.results:
        for finding in [*item.violations, *item.warnings]:
            rule_id = f"catalog-lint/{finding.rule_id.value}"
            rules[rule_id] = {
                "id": rule_id,
                "name": finding.rule_id.value,
                "shortDescription": {"text": summaries.get(finding.rule_id, finding.rule_id.value)},
            }
            result: dict[str, object] = {
                "ruleId": rule_id,
                "level": LEVEL_MAP[finding.severity],
                "message": {"text": finding.message},
            }
            if finding.file_path:
                region = {"startLine": finding.line or 1}
                result["locations"] = [
                    {
                        "physicalLocation": {
                            "artifactLocation": {"uri": _artifact_uri(finding.file_path)},
                            "region": region,
                        }
                    }
                ]
            results.append(result)

    sarif = {
        "$schema": "https://json.schemastore.org/sarif-2.1.0.json",
        "version": "2.1.0",
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": "catalog-lint",
                        "rules": sorted(rules.values(), key=lambda item: str(item["id"])),
                    }
                },
                "results": results,
            }
        ],
    }

    payload = json.dumps(sarif, indent=2)
    if output:
        Path(output).write_text(payload, encoding="utf-8")
    return payload
