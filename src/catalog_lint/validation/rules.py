from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from catalog_lint.discovery.patterns import AGENT_SUFFIX
from catalog_lint.models.documents import AssetFile, DocumentKind, FrontMatter
from catalog_lint.models.findings import RuleId, Severity

NAME_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")

DESCRIPTION_MIN_CHARS = 10
DESCRIPTION_MAX_CHARS = 1024
DEFAULT_MAX_ASSET_BYTES = 5 * 1024 * 1024


@dataclass(frozen=True)
class RuleContext:
    path: Path
    front_matter: FrontMatter
    folder_name: str | None = None
    assets: tuple[AssetFile, ...] = ()
    max_asset_bytes: int = DEFAULT_MAX_ASSET_BYTES


@dataclass(frozen=True)
class Rule:
    rule_id: RuleId
    severity: Severity
    kinds: frozenset[DocumentKind]
    summary: str
    check: Callable[[RuleContext], list[str]]
    key: str | None = None


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _description(ctx: RuleContext) -> str | None:
    value = ctx.front_matter.get("description")
    if isinstance(value, str) and value.strip():
        return value
    return None


def _missing_description(ctx: RuleContext) -> list[str]:
    if _description(ctx) is not None:
        return []
    return ["`description` is required and must be a non-empty string."]


def _unquoted_description(ctx: RuleContext) -> list[str]:
    if _description(ctx) is None or ctx.front_matter.is_single_quoted("description"):
        return []
    return ["`description` must be wrapped in single quotes."]


def _description_too_short(ctx: RuleContext) -> list[str]:
    description = _description(ctx)
    if description is None or len(description) >= DESCRIPTION_MIN_CHARS:
        return []
    return [
        f"`description` is {len(description)} characters; "
        f"at least {DESCRIPTION_MIN_CHARS} are required."
    ]


def _description_too_long(ctx: RuleContext) -> list[str]:
    description = _description(ctx)
    if description is None or len(description) <= DESCRIPTION_MAX_CHARS:
        return []
    return [
        f"`description` is {len(description)} characters; "
        f"at most {DESCRIPTION_MAX_CHARS} are allowed."
    ]


def _bad_file_name(ctx: RuleContext) -> list[str]:
    stem = ctx.path.name.removesuffix(AGENT_SUFFIX)
    if NAME_RE.fullmatch(stem):
        return []
    return [f"File name `{ctx.path.name}` must be lowercase words separated by hyphens."]


def _missing_tools(ctx: RuleContext) -> list[str]:
    if ctx.front_matter.get("tools") is not None:
        return []
    return ["`tools` is not declared; listing the tools the agent may invoke is encouraged."]


def _invalid_tools(ctx: RuleContext) -> list[str]:
    tools = ctx.front_matter.get("tools")
    if tools is None:
        return []
    if isinstance(tools, list) and all(isinstance(item, str) for item in tools):
        return []
    return ["`tools` should be a sequence of tool names."]


def _missing_model(ctx: RuleContext) -> list[str]:
    if not _is_blank(ctx.front_matter.get("model")):
        return []
    return ["`model` is not declared; pinning the preferred model is encouraged."]


def _missing_name(ctx: RuleContext) -> list[str]:
    if not _is_blank(ctx.front_matter.get("name")):
        return []
    return ["`name` is required."]


def _bad_name_format(ctx: RuleContext) -> list[str]:
    name = ctx.front_matter.get("name")
    if _is_blank(name):
        return []
    if isinstance(name, str) and NAME_RE.fullmatch(name):
        return []
    return [f"`name` value `{name}` must be lowercase words separated by hyphens."]


def _name_folder_mismatch(ctx: RuleContext) -> list[str]:
    name = ctx.front_matter.get("name")
    if _is_blank(name) or str(name) == ctx.folder_name:
        return []
    return [f"Folder `{ctx.folder_name}` does not match `name` value `{name}`."]


def _bad_folder_name(ctx: RuleContext) -> list[str]:
    if ctx.folder_name and NAME_RE.fullmatch(ctx.folder_name):
        return []
    return [f"Skill folder `{ctx.folder_name}` must be lowercase words separated by hyphens."]


def _unreferenced_assets(ctx: RuleContext) -> list[str]:
    body = ctx.front_matter.body
    messages: list[str] = []
    for asset in ctx.assets:
        if asset.relative_path in body or Path(asset.relative_path).name in body:
            continue
        messages.append(f"Bundled file `{asset.relative_path}` is not referenced in the skill body.")
    return messages


def _oversized_assets(ctx: RuleContext) -> list[str]:
    return [
        f"Bundled file `{asset.relative_path}` is {asset.size} bytes; "
        f"the limit is {ctx.max_asset_bytes} bytes."
        for asset in ctx.assets
        if asset.size > ctx.max_asset_bytes
    ]


_AGENT = frozenset({DocumentKind.AGENT})
_SKILL = frozenset({DocumentKind.SKILL})
_BOTH = frozenset({DocumentKind.AGENT, DocumentKind.SKILL})

_MISSING_DESCRIPTION = Rule(
    RuleId.MISSING_DESCRIPTION,
    Severity.VIOLATION,
    _BOTH,
    "description is present and non-empty",
    _missing_description,
    key="description",
)
_UNQUOTED_DESCRIPTION = Rule(
    RuleId.UNQUOTED_DESCRIPTION,
    Severity.VIOLATION,
    _BOTH,
    "description is wrapped in single quotes",
    _unquoted_description,
    key="description",
)

AGENT_RULES: tuple[Rule, ...] = (
    _MISSING_DESCRIPTION,
    _UNQUOTED_DESCRIPTION,
    Rule(
        RuleId.BAD_FILE_NAME,
        Severity.VIOLATION,
        _AGENT,
        "file name is lowercase and hyphenated",
        _bad_file_name,
    ),
    Rule(
        RuleId.MISSING_TOOLS,
        Severity.WARNING,
        _AGENT,
        "tools are declared",
        _missing_tools,
    ),
    Rule(
        RuleId.INVALID_TOOLS,
        Severity.WARNING,
        _AGENT,
        "tools is a sequence of names",
        _invalid_tools,
        key="tools",
    ),
    Rule(
        RuleId.MISSING_MODEL,
        Severity.WARNING,
        _AGENT,
        "model is declared",
        _missing_model,
    ),
)

SKILL_RULES: tuple[Rule, ...] = (
    Rule(
        RuleId.MISSING_NAME,
        Severity.VIOLATION,
        _SKILL,
        "name is present",
        _missing_name,
    ),
    Rule(
        RuleId.BAD_NAME_FORMAT,
        Severity.VIOLATION,
        _SKILL,
        "name is lowercase and hyphenated",
        _bad_name_format,
        key="name",
    ),
    Rule(
        RuleId.NAME_FOLDER_MISMATCH,
        Severity.VIOLATION,
        _SKILL,
        "name equals the skill folder name",
        _name_folder_mismatch,
        key="name",
    ),
    _MISSING_DESCRIPTION,
    Rule(
        RuleId.DESCRIPTION_TOO_SHORT,
        Severity.VIOLATION,
        _SKILL,
        f"description has at least {DESCRIPTION_MIN_CHARS} characters",
        _description_too_short,
        key="description",
    ),
    Rule(
        RuleId.DESCRIPTION_TOO_LONG,
        Severity.VIOLATION,
        _SKILL,
        f"description has at most {DESCRIPTION_MAX_CHARS} characters",
        _description_too_long,
        key="description",
    ),
    _UNQUOTED_DESCRIPTION,
    Rule(
        RuleId.BAD_FOLDER_NAME,
        Severity.VIOLATION,
        _SKILL,
        "skill folder name is lowercase and hyphenated",
        _bad_folder_name,
    ),
    Rule(
        RuleId.UNREFERENCED_ASSET,
        Severity.WARNING,
        _SKILL,
        "every bundled file is referenced in the body",
        _unreferenced_assets,
    ),
    Rule(
        RuleId.ASSET_TOO_LARGE,
        Severity.VIOLATION,
        _SKILL,
        "bundled files are at most 5 MB",
        _oversized_assets,
    ),
)


def all_rules() -> list[Rule]:
    seen: dict[RuleId, Rule] = {}
    for rule in (*AGENT_RULES, *SKILL_RULES):
        seen.setdefault(rule.rule_id, rule)
    return list(seen.values())
