from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, Field

from catalog_lint.pipeline import DEFAULT_JOBS, DEFAULT_READ_TIMEOUT_S
from catalog_lint.validation.rules import DEFAULT_MAX_ASSET_BYTES

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}

T = TypeVar("T")


class Settings(BaseModel):
    jobs: int = Field(default=DEFAULT_JOBS, ge=1)
    read_timeout_s: float = Field(default=DEFAULT_READ_TIMEOUT_S, gt=0)
    max_asset_bytes: int = Field(default=DEFAULT_MAX_ASSET_BYTES, ge=0)
    strict: bool = False


def _config_candidates() -> list[Path]:
    return [Path.cwd() / "catalog-lint.toml", Path.home() / ".config/catalog-lint/config.toml"]


def _load_config_file() -> dict[str, object]:
    for candidate in _config_candidates():
        if not candidate.exists():
            continue
        try:
            return tomllib.loads(candidate.read_text(encoding="utf-8"))
        except Exception:
            continue
    return {}


def _read_int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _read_float(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _read_bool(value: object) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
    return None


def _first(*values: T | None, default: T) -> T:
    for value in values:
        if value is not None:
            return value
    return default


def load_settings(
    *,
    jobs: int | None = None,
    read_timeout_s: float | None = None,
    max_asset_bytes: int | None = None,
    strict: bool | None = None,
) -> Settings:
    payload: dict[str, object] = _load_config_file()

    return Settings(
        jobs=_first(
            jobs,
            _read_int(os.getenv("CATALOG_LINT_JOBS")),
            _read_int(payload.get("jobs")),
            default=DEFAULT_JOBS,
        ),
        read_timeout_s=_first(
            read_timeout_s,
            _read_float(os.getenv("CATALOG_LINT_READ_TIMEOUT")),
            _read_float(payload.get("read_timeout")),
            default=DEFAULT_READ_TIMEOUT_S,
        ),
        max_asset_bytes=_first(
            max_asset_bytes,
            _read_int(os.getenv("CATALOG_LINT_MAX_ASSET_BYTES")),
            _read_int(payload.get("max_asset_bytes")),
            default=DEFAULT_MAX_ASSET_BYTES,
        ),
        strict=_first(
            strict,
            _read_bool(os.getenv("CATALOG_LINT_STRICT")),
            _read_bool(payload.get("strict")),
            default=False,
        ),
    )
