"""Lint rules, their configuration and the runner."""

from .base import Finding, LintContext, LintRule, Severity
from .loader import LintConfig, RuleSettings, discover_rules_config, load_rules_config
from .registry import RuleRegistry, registry
from .rules import register_builtin_rules
from .runner import LintReport, lint_document, lint_path

register_builtin_rules(registry)

__all__ = [
    "Finding",
    "LintConfig",
    "LintContext",
    "LintReport",
    "LintRule",
    "RuleRegistry",
    "RuleSettings",
    "Severity",
    "discover_rules_config",
    "lint_document",
    "lint_path",
    "load_rules_config",
    "register_builtin_rules",
    "registry",
]
