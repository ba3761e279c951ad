"""Front-matter parsing and rule checks."""

from catalog_lint.validation.frontmatter import parse_frontmatter, parse_metadata
from catalog_lint.validation.rules import AGENT_RULES, SKILL_RULES, Rule, all_rules
from catalog_lint.validation.validator import validate_agent, validate_document, validate_skill

__all__ = [
    "AGENT_RULES",
    "SKILL_RULES",
    "Rule",
    "all_rules",
    "parse_frontmatter",
    "parse_metadata",
    "validate_agent",
    "validate_document",
    "validate_skill",
]
