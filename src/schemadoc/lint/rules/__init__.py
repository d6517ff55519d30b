"""Built-in lint rules."""

from ..base import LintRule
from ..registry import RuleRegistry
from .operations import ExpectedOutputRule, OperationValidRule
from .prose import FieldCoverageRule, NullabilityWordingRule, TypeAnnotationRule, match_snippet
from .schema import SchemaValidRule, TypeReferencesRule
from .syntax import GraphQLSyntaxRule

BUILTIN_RULES: list[type[LintRule]] = [
    GraphQLSyntaxRule,
    TypeReferencesRule,
    SchemaValidRule,
    FieldCoverageRule,
    TypeAnnotationRule,
    NullabilityWordingRule,
    OperationValidRule,
    ExpectedOutputRule,
]


def register_builtin_rules(registry: RuleRegistry) -> None:
    """Register one instance of each built-in rule, skipping names already present."""
    for cls in BUILTIN_RULES:
        if cls.name not in registry:
            registry.register(cls())


__all__ = [
    "BUILTIN_RULES",
    "ExpectedOutputRule",
    "FieldCoverageRule",
    "GraphQLSyntaxRule",
    "NullabilityWordingRule",
    "OperationValidRule",
    "SchemaValidRule",
    "TypeAnnotationRule",
    "TypeReferencesRule",
    "match_snippet",
    "register_builtin_rules",
]
