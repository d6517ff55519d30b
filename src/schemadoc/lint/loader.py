"""Configuration-driven rule selection.

Rules are enabled, disabled and re-graded from a YAML file. The path comes
from the CLI or settings.rules_config_path.

Example:

    strict_mode: true
    fail_on: warning
    rules:
      nullability-wording:
        severity: error
      expected-output: false

Strict mode is enabled by default and rejects unknown rule names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from schemadoc.config import settings
from schemadoc.errors import RuleConfigError
from schemadoc.logging import get_logger

from .base import Severity
from .registry import RuleRegistry

logger = get_logger(__name__)


@dataclass
class RuleSettings:
    enabled: bool = True
    severity: Severity | None = None


@dataclass
class LintConfig:
    strict_mode: bool = True
    fail_on: Severity | None = None
    rules: dict[str, RuleSettings] = field(default_factory=dict)

    def settings_for(self, name: str) -> RuleSettings:
        return self.rules.get(name) or RuleSettings()


def _parse_severity(value: Any, where: str) -> Severity:
    try:
        return Severity(str(value).lower())
    except ValueError as e:
        choices = ", ".join(s.value for s in Severity)
        raise RuleConfigError(f"Invalid severity '{value}' for {where} (expected {choices})") from e


def _parse_rule(name: str, node: Any) -> RuleSettings:
    if isinstance(node, bool):
        return RuleSettings(enabled=node)
    if node is None:
        return RuleSettings()
    if not isinstance(node, dict):
        raise RuleConfigError(f"Rule '{name}' must map to true/false or a mapping")

    severity = node.get("severity")
    return RuleSettings(
        enabled=bool(node.get("enabled", True)),
        severity=_parse_severity(severity, f"rule '{name}'") if severity is not None else None,
    )


def parse_rules_config(data: dict[str, Any], registry: RuleRegistry) -> LintConfig:
    """Build a LintConfig from already-loaded YAML data.

    Raises:
        RuleConfigError: On invalid values, or unknown rules in strict mode
    """
    if not isinstance(data, dict):
        raise RuleConfigError("Rules config must be a mapping")

    strict_mode = bool(data.get("strict_mode", True))
    fail_on = data.get("fail_on")
    config = LintConfig(
        strict_mode=strict_mode,
        fail_on=_parse_severity(fail_on, "fail_on") if fail_on is not None else None,
    )

    for name, node in (data.get("rules") or {}).items():
        if name not in registry:
            if strict_mode:
                raise RuleConfigError(f"Unknown rule in config: {name}")
            logger.warning("Ignoring unknown rule in config", rule=name)
            continue
        config.rules[name] = _parse_rule(name, node)

    return config


def load_rules_config(path: str | Path, registry: RuleRegistry) -> LintConfig:
    """Load a YAML rules file.

    Raises:
        RuleConfigError: If the file is missing, unreadable YAML or invalid
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        raise RuleConfigError(f"Rules config not found: {path}") from e
    except yaml.YAMLError as e:
        raise RuleConfigError(f"Rules config is not valid YAML: {e}") from e

    config = parse_rules_config(data, registry)
    logger.info("Loaded rules config", path=str(path), rules=len(config.rules))
    return config


def discover_rules_config(registry: RuleRegistry) -> LintConfig:
    """Load the config named by settings.rules_config_path, or the defaults."""
    if not settings.rules_config_path:
        return LintConfig()

    path = Path(settings.rules_config_path)
    if not path.exists():
        logger.warning("Rules config path set but not found", path=str(path))
        return LintConfig()

    return load_rules_config(path, registry)
