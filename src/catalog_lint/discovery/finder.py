from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from catalog_lint.discovery.patterns import CATALOG_PATTERNS, SKILL_FILE_NAME, kind_from_path
from catalog_lint.errors import DiscoveryError
from catalog_lint.models.documents import AssetFile, DiscoveredFile, DocumentKind

logger = logging.getLogger(__name__)

IGNORED_DIR_NAMES = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
    ".mypy_cache",
    ".pytest_cache",
    ".ruff_cache",
    ".cache",
    ".tox",
}

IGNORED_FILE_NAMES = {
    ".DS_Store",
    "Thumbs.db",
}

IGNORED_FILE_SUFFIXES = {
    ".pyc",
    ".pyo",
}


@dataclass
class DiscoveryDiagnostics:
    warnings: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        self.warnings.append(message)
        logger.info("discovery warning: %s", message)


def _warn_oserror(diagnostics: DiscoveryDiagnostics, context: str, error: OSError) -> None:
    diagnostics.warn(f"{context}: {error.__class__.__name__}: {error}")


def _check_root(root: Path) -> Path:
    try:
        resolved = root.expanduser().resolve()
    except OSError as error:
        raise DiscoveryError(f"Cannot resolve catalog root '{root}': {error}") from error
    if not resolved.exists():
        raise DiscoveryError(f"Catalog root '{root}' does not exist.")
    if not resolved.is_dir():
        raise DiscoveryError(f"Catalog root '{root}' is not a directory.")
    try:
        next(iter(resolved.iterdir()), None)
    except OSError as error:
        raise DiscoveryError(f"Catalog root '{root}' is not readable: {error}") from error
    return resolved


def _is_ignored(path: Path, root: Path) -> bool:
    try:
        rel = path.relative_to(root)
    except ValueError:
        return True
    if any(part in IGNORED_DIR_NAMES for part in rel.parts[:-1]):
        return True
    name = rel.name
    if name in IGNORED_FILE_NAMES:
        return True
    return any(name.endswith(suffix) for suffix in IGNORED_FILE_SUFFIXES)


def _iter_matches(root: Path, pattern: str, diagnostics: DiscoveryDiagnostics) -> list[Path]:
    matches: list[Path] = []
    context = f"failed scanning pattern '{pattern}' under '{root}'"
    try:
        iterator = root.glob(pattern)
    except OSError as error:
        _warn_oserror(diagnostics, context, error)
        return matches

    while True:
        try:
            path = next(iterator)
        except StopIteration:
            break
        except OSError as error:
            _warn_oserror(diagnostics, context, error)
            break
        try:
            if path.is_file():
                matches.append(path)
        except OSError as error:
            _warn_oserror(diagnostics, f"failed checking discovered path '{path}'", error)
    return matches


def _iter_files(root: Path, diagnostics: DiscoveryDiagnostics) -> list[Path]:
    files: list[Path] = []
    try:
        iterator = root.rglob("*")
    except OSError as error:
        _warn_oserror(diagnostics, f"failed walking files under '{root}'", error)
        return files

    while True:
        try:
            file_path = next(iterator)
        except StopIteration:
            break
        except OSError as error:
            _warn_oserror(diagnostics, f"failed walking files under '{root}'", error)
            break
        try:
            if not file_path.is_file():
                continue
        except OSError as error:
            _warn_oserror(diagnostics, f"failed reading file metadata '{file_path}'", error)
            continue
        if _is_ignored(file_path, root):
            continue
        files.append(file_path)

    return sorted(files, key=lambda item: str(item))


def _to_asset(path: Path, root: Path, diagnostics: DiscoveryDiagnostics) -> AssetFile | None:
    try:
        size = path.stat().st_size
    except OSError as error:
        _warn_oserror(diagnostics, f"failed reading file size '{path}'", error)
        return None
    return AssetFile(
        path=str(path),
        relative_path=path.relative_to(root).as_posix(),
        size=size,
    )


def collect_skill_assets(skill_md: Path, diagnostics: DiscoveryDiagnostics | None = None) -> list[AssetFile]:
    """Return every file bundled with a skill, excluding nested skill folders."""
    diagnostics = diagnostics or DiscoveryDiagnostics()
    skill_dir = skill_md.parent
    files = _iter_files(skill_dir, diagnostics)
    nested_roots = {
        item.parent for item in files if item.name == SKILL_FILE_NAME and item.parent != skill_dir
    }

    assets: list[AssetFile] = []
    for file_path in files:
        if file_path.parent == skill_dir and file_path.name == SKILL_FILE_NAME:
            continue
        if any(parent in nested_roots for parent in file_path.parents):
            continue
        asset = _to_asset(file_path, skill_dir, diagnostics)
        if asset is not None:
            assets.append(asset)
    return assets


def discover_with_diagnostics(root: str | Path) -> tuple[list[DiscoveredFile], list[str]]:
    diagnostics = DiscoveryDiagnostics()
    resolved_root = _check_root(Path(root))

    discovered: dict[str, DiscoveredFile] = {}
    for pattern in CATALOG_PATTERNS:
        for match in _iter_matches(resolved_root, pattern.glob, diagnostics):
            if _is_ignored(match, resolved_root):
                continue
            kind = kind_from_path(match, resolved_root)
            if kind != pattern.kind:
                continue
            entry = str(match)
            if kind == DocumentKind.SKILL:
                discovered[entry] = DiscoveredFile(
                    path=entry,
                    kind=kind,
                    folder_name=match.parent.name,
                    assets=collect_skill_assets(match, diagnostics),
                )
            else:
                discovered[entry] = DiscoveredFile(path=entry, kind=kind)

    logger.info("Discovered %s catalog files under %s", len(discovered), resolved_root)
    return (sorted(discovered.values(), key=lambda item: item.path), diagnostics.warnings)


def discover(root: str | Path) -> list[DiscoveredFile]:
    files, _warnings = discover_with_diagnostics(root)
    return files
