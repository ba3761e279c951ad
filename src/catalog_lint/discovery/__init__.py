"""Catalog file discovery."""

from catalog_lint.discovery.finder import collect_skill_assets, discover, discover_with_diagnostics
from catalog_lint.discovery.patterns import kind_from_path

__all__ = ["collect_skill_assets", "discover", "discover_with_diagnostics", "kind_from_path"]
