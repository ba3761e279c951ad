from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from catalog_lint.config import load_settings
from catalog_lint.validation.rules import DEFAULT_MAX_ASSET_BYTES


def test_defaults(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    settings = load_settings()

    assert settings.jobs == 8
    assert settings.read_timeout_s == 10.0
    assert settings.max_asset_bytes == DEFAULT_MAX_ASSET_BYTES
    assert settings.strict is False


def test_project_file_then_env_then_overrides(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "catalog-lint.toml").write_text(
        "jobs = 2\nread_timeout = 4.5\nmax_asset_bytes = 1024\nstrict = true\n",
        encoding="utf-8",
    )

    from_file = load_settings()
    assert (from_file.jobs, from_file.read_timeout_s, from_file.max_asset_bytes, from_file.strict) == (
        2,
        4.5,
        1024,
        True,
    )

    monkeypatch.setenv("CATALOG_LINT_JOBS", "6")
    monkeypatch.setenv("CATALOG_LINT_STRICT", "no")
    from_env = load_settings()
    assert from_env.jobs == 6
    assert from_env.strict is False
    assert from_env.read_timeout_s == 4.5

    overridden = load_settings(jobs=1, read_timeout_s=0.5)
    assert overridden.jobs == 1
    assert overridden.read_timeout_s == 0.5


def test_user_config_file(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    config = Path.home() / ".config/catalog-lint/config.toml"
    config.parent.mkdir(parents=True)
    config.write_text("jobs = 3\n", encoding="utf-8")

    assert load_settings().jobs == 3


def test_unparseable_values_fall_back(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "catalog-lint.toml").write_text("jobs = [not toml", encoding="utf-8")
    monkeypatch.setenv("CATALOG_LINT_READ_TIMEOUT", "soon")
    monkeypatch.setenv("CATALOG_LINT_STRICT", "maybe")

    settings = load_settings()

    assert settings.jobs == 8
    assert settings.read_timeout_s == 10.0
    assert settings.strict is False


def test_out_of_range_values_are_rejected(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CATALOG_LINT_JOBS", "0")

    with pytest.raises(ValidationError):
        load_settings()
