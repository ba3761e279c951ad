from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from catalog_lint.models.documents import DocumentKind

AGENT_SUFFIX = ".agent.md"
SKILL_FILE_NAME = "SKILL.md"
SKILLS_DIR_NAME = "skills"


@dataclass(frozen=True)
class DiscoveryPattern:
    glob: str
    kind: DocumentKind


CATALOG_PATTERNS: tuple[DiscoveryPattern, ...] = (
    DiscoveryPattern(f"**/*{AGENT_SUFFIX}", DocumentKind.AGENT),
    DiscoveryPattern(f"**/{SKILL_FILE_NAME}", DocumentKind.SKILL),
)


def kind_from_path(path: Path, root: Path | None = None) -> DocumentKind | None:
    """Classify a catalog file.

    With a ``root``, the ``skills`` ancestor must sit below it, unless the
    root itself is named ``skills``.
    """
    name = path.name
    if name.endswith(AGENT_SUFFIX) and len(name) > len(AGENT_SUFFIX):
        return DocumentKind.AGENT
    if name != SKILL_FILE_NAME:
        return None
    if root is None:
        parents = path.parts[:-1]
    elif root.name == SKILLS_DIR_NAME:
        return DocumentKind.SKILL
    else:
        parents = path.relative_to(root).parts[:-1]
    return DocumentKind.SKILL if SKILLS_DIR_NAME in parents else None
