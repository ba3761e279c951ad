from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

ENV_VARS = (
    "CATALOG_LINT_JOBS",
    "CATALOG_LINT_READ_TIMEOUT",
    "CATALOG_LINT_MAX_ASSET_BYTES",
    "CATALOG_LINT_STRICT",
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))


def write_agent(
    root: Path,
    relative: str,
    *,
    description: str = "'Expert assistant for Drupal cache invalidation.'",
    extra: str = "tools:\n  - read\n  - search\nmodel: 'claude-sonnet'\n",
    body: str = "You are an expert.\n",
) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"---\ndescription: {description}\n{extra}---\n{body}", encoding="utf-8")
    return path


def write_skill(
    root: Path,
    folder: str,
    *,
    name: str | None = None,
    description: str = "'Explains how cache tags invalidate rendered output.'",
    body: str = "Use cache tags.\n",
) -> Path:
    skill_dir = root / folder
    skill_dir.mkdir(parents=True, exist_ok=True)
    path = skill_dir / "SKILL.md"
    skill_name = name if name is not None else skill_dir.name
    path.write_text(f"---\nname: {skill_name}\ndescription: {description}\n---\n{body}", encoding="utf-8")
    return path


@pytest.fixture
def agent_writer() -> Callable[..., Path]:
    return write_agent


@pytest.fixture
def skill_writer() -> Callable[..., Path]:
    return write_skill


@pytest.fixture
def catalog_root(tmp_path: Path) -> Path:
    root = tmp_path / "catalog"
    write_agent(root, "agents/drupal/drupal-cache-expert.agent.md")
    write_agent(root, "agents/review/code-reviewer.agent.md")
    write_skill(root, "skills/drupal/cache/drupal-cache-tags")
    write_skill(root, "skills/testing/fake-driven-testing")
    (root / "README.md").write_text("# Catalog\n", encoding="utf-8")
    return root
