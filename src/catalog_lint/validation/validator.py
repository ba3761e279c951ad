from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from catalog_lint.errors import ParseError
from catalog_lint.models.documents import AssetFile, DiscoveredFile, DocumentKind, FrontMatter
from catalog_lint.models.findings import RuleId, Severity, Violation
from catalog_lint.models.reports import ParseErrorKind, ValidationResult
from catalog_lint.validation.rules import (
    AGENT_RULES,
    DEFAULT_MAX_ASSET_BYTES,
    SKILL_RULES,
    Rule,
    RuleContext,
)


def _apply_rules(rules: Iterable[Rule], ctx: RuleContext, kind: DocumentKind) -> ValidationResult:
    result = ValidationResult(path=str(ctx.path), kind=kind)
    for rule in rules:
        line = ctx.front_matter.lines.get(rule.key) if rule.key else None
        for message in rule.check(ctx):
            item = Violation(
                rule_id=rule.rule_id,
                severity=rule.severity,
                message=message,
                file_path=str(ctx.path),
                line=line,
            )
            if rule.severity == Severity.WARNING:
                result.warnings.append(item)
            else:
                result.violations.append(item)
    return result


def validate_agent(path: str | Path, metadata: FrontMatter) -> ValidationResult:
    ctx = RuleContext(path=Path(path), front_matter=metadata)
    return _apply_rules(AGENT_RULES, ctx, DocumentKind.AGENT)


def validate_skill(
    path: str | Path,
    metadata: FrontMatter,
    folder_name: str | None = None,
    *,
    assets: Iterable[AssetFile] = (),
    max_asset_bytes: int = DEFAULT_MAX_ASSET_BYTES,
) -> ValidationResult:
    skill_path = Path(path)
    ctx = RuleContext(
        path=skill_path,
        front_matter=metadata,
        folder_name=folder_name if folder_name is not None else skill_path.parent.name,
        assets=tuple(assets),
        max_asset_bytes=max_asset_bytes,
    )
    return _apply_rules(SKILL_RULES, ctx, DocumentKind.SKILL)


def validate_document(
    document: DiscoveredFile,
    metadata: FrontMatter,
    *,
    max_asset_bytes: int = DEFAULT_MAX_ASSET_BYTES,
) -> ValidationResult:
    if document.kind == DocumentKind.SKILL:
        return validate_skill(
            document.path,
            metadata,
            document.folder_name,
            assets=document.assets,
            max_asset_bytes=max_asset_bytes,
        )
    return validate_agent(document.path, metadata)


def parse_failure_result(document: DiscoveredFile, error: ParseError) -> ValidationResult:
    rule_id = RuleId.MISSING_BLOCK if error.kind == ParseErrorKind.MISSING_BLOCK else RuleId.MALFORMED_BLOCK
    return ValidationResult(
        path=document.path,
        kind=document.kind,
        parse_error=error.kind,
        violations=[
            Violation(
                rule_id=rule_id,
                message=error.message,
                file_path=document.path,
                line=error.line,
            )
        ],
    )


def unreadable_result(document: DiscoveredFile, message: str) -> ValidationResult:
    return ValidationResult(
        path=document.path,
        kind=document.kind,
        violations=[
            Violation(
                rule_id=RuleId.DISCOVERY_ERROR,
                message=message,
                file_path=document.path,
            )
        ],
    )
