"""
Base classes and models for lint rules.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel

from ..document.models import TutorialDocument
from ..schema.builder import SchemaBuildResult
from ..schema.registry import Problem, TypeRegistry


class Severity(str, Enum):
    """Finding severity, from most to least serious."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        return {"error": 3, "warning": 2, "info": 1}[self.value]

    def at_least(self, other: Severity) -> bool:
        return self.rank >= other.rank


class Finding(BaseModel):
    """One problem reported against a document."""

    rule: str
    severity: Severity
    message: str
    line: int | None = None
    column: int | None = None
    block: int | None = None


@dataclass
class LintContext:
    """Everything a rule may inspect for one document."""

    document: TutorialDocument
    registry: TypeRegistry
    registry_problems: list[Problem]
    schema: SchemaBuildResult


class LintRule(ABC):
    """
    Abstract base class for lint rules.

    Subclasses set ``name``, ``description`` and ``default_severity`` and
    yield findings from check(). The runner overrides the severity when the
    rules configuration asks for it.
    """

    name: str
    description: str
    default_severity: Severity = Severity.ERROR

    @abstractmethod
    def check(self, context: LintContext) -> Iterable[Finding]:
        """Inspect the document and yield findings."""
        pass

    def finding(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        block: int | None = None,
        severity: Severity | None = None,
    ) -> Finding:
        return Finding(
            rule=self.name,
            severity=severity or self.default_severity,
            message=message,
            line=line,
            column=column,
            block=block,
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name='{self.name}')>"
