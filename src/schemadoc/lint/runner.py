"""
Runs the registered lint rules over tutorial documents.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

from schemadoc.document.models import TutorialDocument
from schemadoc.document.parser import load_document
from schemadoc.errors import DocumentParseError
from schemadoc.logging import get_logger, set_lint_context
from schemadoc.schema.builder import build_document_schema
from schemadoc.schema.registry import build_registry

from .base import Finding, LintContext, Severity
from .loader import LintConfig
from .registry import RuleRegistry
from .registry import registry as default_registry

logger = get_logger(__name__)

STRUCTURE_RULE = "document-structure"


class LintReport(BaseModel):
    """Findings for one document."""

    path: str
    findings: list[Finding] = []

    def count(self, severity: Severity) -> int:
        return sum(1 for finding in self.findings if finding.severity == severity)

    def ok(self, fail_on: Severity = Severity.ERROR) -> bool:
        """True unless a finding is at least as severe as ``fail_on``."""
        return not any(finding.severity.at_least(fail_on) for finding in self.findings)


def lint_document(
    document: TutorialDocument,
    config: LintConfig | None = None,
    rules: RuleRegistry | None = None,
) -> LintReport:
    """Run every enabled rule over a parsed document."""
    config = config or LintConfig()
    rules = rules if rules is not None else default_registry

    type_registry = build_registry(document.snippets)
    context = LintContext(
        document=document,
        registry=type_registry,
        registry_problems=type_registry.check(),
        schema=build_document_schema(document),
    )

    findings: list[Finding] = []
    for rule in rules.list_all():
        rule_settings = config.settings_for(rule.name)
        if not rule_settings.enabled:
            logger.debug("Skipping disabled rule", rule=rule.name)
            continue

        for finding in rule.check(context):
            if rule_settings.severity is not None:
                finding = finding.model_copy(update={"severity": rule_settings.severity})
            findings.append(finding)

    findings.sort(key=lambda f: (f.line or 0, f.column or 0, f.rule))
    report = LintReport(path=document.display_path, findings=findings)

    logger.info(
        "Linted document",
        findings=len(findings),
        errors=report.count(Severity.ERROR),
        warnings=report.count(Severity.WARNING),
    )
    return report


def lint_path(
    path: str | Path,
    config: LintConfig | None = None,
    rules: RuleRegistry | None = None,
) -> LintReport:
    """Load a Markdown file and lint it.

    Broken Markdown structure becomes a single finding instead of an error.
    """
    set_lint_context(document=str(path))
    try:
        document = load_document(path)
    except DocumentParseError as e:
        logger.warning("Document structure is broken", error=str(e))
        return LintReport(
            path=str(path),
            findings=[
                Finding(
                    rule=STRUCTURE_RULE,
                    severity=Severity.ERROR,
                    message=str(e),
                    line=e.line,
                )
            ],
        )

    return lint_document(document, config=config, rules=rules)
