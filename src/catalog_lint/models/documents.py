from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class DocumentKind(StrEnum):
    AGENT = "agent"
    SKILL = "skill"


class AssetFile(BaseModel):
    path: str
    relative_path: str
    size: int = 0


class DiscoveredFile(BaseModel):
    path: str
    kind: DocumentKind
    folder_name: str | None = None
    assets: list[AssetFile] = Field(default_factory=list)

    @property
    def path_obj(self) -> Path:
        return Path(self.path)


class FrontMatter(BaseModel):
    """Parsed metadata block of a catalog document.

    ``styles`` keeps the YAML scalar style of each top-level value (``"'"`` for
    single-quoted, ``'"'`` for double-quoted, ``None`` for plain scalars and
    non-scalar values) since quoting is itself a checked property.
    """

    values: dict[str, Any] = Field(default_factory=dict)
    styles: dict[str, str | None] = Field(default_factory=dict)
    lines: dict[str, int] = Field(default_factory=dict)
    body: str = ""

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def has(self, key: str) -> bool:
        return key in self.values

    def is_single_quoted(self, key: str) -> bool:
        return self.styles.get(key) == "'"
