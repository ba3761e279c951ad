from __future__ import annotations

import re
from pathlib import Path

import yaml

from catalog_lint.errors import ParseError
from catalog_lint.models.documents import FrontMatter
from catalog_lint.models.reports import ParseErrorKind

FRONTMATTER_RE = re.compile(
    r"\A\ufeff?---[ \t]*\r?\n(?P<meta>.*?)^---[ \t]*\r?$\n?(?P<body>.*)\Z",
    re.DOTALL | re.MULTILINE,
)

# The opening delimiter occupies line 1, so YAML line 0 is file line 2.
_BLOCK_LINE_OFFSET = 2


def _node_styles(raw_yaml: str) -> tuple[dict[str, str | None], dict[str, int]]:
    node = yaml.compose(raw_yaml, Loader=yaml.SafeLoader)
    styles: dict[str, str | None] = {}
    lines: dict[str, int] = {}
    if not isinstance(node, yaml.MappingNode):
        return styles, lines
    for key_node, value_node in node.value:
        if not isinstance(key_node, yaml.ScalarNode):
            continue
        key = key_node.value
        styles[key] = value_node.style if isinstance(value_node, yaml.ScalarNode) else None
        lines[key] = key_node.start_mark.line + _BLOCK_LINE_OFFSET
    return styles, lines


def parse_frontmatter(text: str) -> FrontMatter:
    match = FRONTMATTER_RE.match(text)
    if not match:
        raise ParseError(
            ParseErrorKind.MISSING_BLOCK,
            "File must start with a metadata block bounded by `---` lines.",
            line=1,
        )
    raw_yaml, body = match.group("meta"), match.group("body")
    try:
        payload = yaml.safe_load(raw_yaml)
        styles, lines = _node_styles(raw_yaml)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        line = mark.line + _BLOCK_LINE_OFFSET if mark is not None else None
        raise ParseError(
            ParseErrorKind.MALFORMED_BLOCK,
            f"Metadata block is not valid YAML: {exc}",
            line=line,
        ) from exc
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ParseError(
            ParseErrorKind.MALFORMED_BLOCK,
            "Metadata block must be a mapping of `key: value` pairs.",
            line=_BLOCK_LINE_OFFSET,
        )
    if not all(isinstance(key, str) for key in payload):
        raise ParseError(
            ParseErrorKind.MALFORMED_BLOCK,
            "Metadata keys must be plain strings.",
            line=_BLOCK_LINE_OFFSET,
        )
    return FrontMatter(values=payload, styles=styles, lines=lines, body=body)


def read_document(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def parse_metadata(path: Path) -> FrontMatter:
    return parse_frontmatter(read_document(path))
