"""
Rule registry for discovering and managing lint rules.
"""

from schemadoc.logging import get_logger

from .base import LintRule

logger = get_logger(__name__)


class RuleRegistry:
    """
    Central registry of lint rules.

    Rules run in registration order.
    """

    def __init__(self):
        self._rules: dict[str, LintRule] = {}

    def register(self, rule: LintRule) -> None:
        """
        Register a rule instance.

        Args:
            rule: Rule instance to register

        Raises:
            ValueError: If a rule with the same name is already registered
        """
        if rule.name in self._rules:
            raise ValueError(f"Rule '{rule.name}' is already registered")

        logger.debug("Registering rule", name=rule.name)
        self._rules[rule.name] = rule

    def get(self, name: str) -> LintRule | None:
        return self._rules.get(name)

    def list_all(self) -> list[LintRule]:
        return list(self._rules.values())

    def list_names(self) -> list[str]:
        return list(self._rules.keys())

    def unregister(self, name: str) -> bool:
        """
        Unregister a rule by name.

        Returns:
            True if the rule was found and removed, False otherwise
        """
        if name in self._rules:
            del self._rules[name]
            return True
        return False

    def clear(self) -> None:
        self._rules.clear()

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, name: str) -> bool:
        return name in self._rules


# Global registry instance, populated by schemadoc.lint.rules
registry = RuleRegistry()
