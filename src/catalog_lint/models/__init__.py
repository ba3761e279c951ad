"""Domain models."""

from catalog_lint.models.documents import AssetFile, DiscoveredFile, DocumentKind, FrontMatter
from catalog_lint.models.findings import RuleId, Severity, Violation
from catalog_lint.models.reports import ParseErrorKind, RunReport, ValidationResult

__all__ = [
    "AssetFile",
    "DiscoveredFile",
    "DocumentKind",
    "FrontMatter",
    "ParseErrorKind",
    "RuleId",
    "RunReport",
    "Severity",
    "ValidationResult",
    "Violation",
]
