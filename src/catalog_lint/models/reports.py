from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field, computed_field

from catalog_lint.models.documents import DocumentKind
from catalog_lint.models.findings import Violation


class ParseErrorKind(StrEnum):
    MISSING_BLOCK = "MissingBlock"
    MALFORMED_BLOCK = "MalformedBlock"


class ValidationResult(BaseModel):
    path: str
    kind: DocumentKind
    violations: list[Violation] = Field(default_factory=list)
    warnings: list[Violation] = Field(default_factory=list)
    parse_error: ParseErrorKind | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def passed(self) -> bool:
        return not self.violations

    def rule_ids(self) -> list[str]:
        return [item.rule_id.value for item in self.violations]

    def warning_ids(self) -> list[str]:
        return [item.rule_id.value for item in self.warnings]


class RunReport(BaseModel):
    root: str
    checked_files: int
    results: list[ValidationResult]
    summary: dict[str, int]
    notes: list[str] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(item.passed for item in self.results)
