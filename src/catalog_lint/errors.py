from __future__ import annotations

from catalog_lint.models.reports import ParseErrorKind


class DiscoveryError(Exception):
    """Raised when the catalog root is missing, not a directory or unreadable.

    Per-file read failures are never raised; they become a failing result
    with the ``DiscoveryError`` rule id.
    """


class ParseError(Exception):
    def __init__(self, kind: ParseErrorKind, message: str, *, line: int | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.line = line
