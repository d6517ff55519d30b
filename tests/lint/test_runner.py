"""
Tests for running rules over documents.
"""

from schemadoc.lint import (
    Finding,
    LintConfig,
    LintReport,
    LintRule,
    RuleRegistry,
    RuleSettings,
    Severity,
    lint_document,
    lint_path,
)
from schemadoc.lint.runner import STRUCTURE_RULE

BROKEN = """\
```graphql
type User {
  id: ID!
  email: String
}
```

- `id: ID!`: identifier
- `email: String!`: required address
"""


class TestLintDocument:
    def test_bundled_tutorial_is_clean(self, tutorial_path):
        report = lint_path(tutorial_path)

        assert report.findings == []
        assert report.ok(Severity.INFO)

    def test_findings_sorted_by_line(self, make_document):
        report = lint_document(make_document(BROKEN))

        lines = [finding.line for finding in report.findings]
        assert lines == sorted(lines)
        assert {finding.rule for finding in report.findings} == {
            "type-annotation",
            "nullability-wording",
        }

    def test_disabled_rule_is_skipped(self, make_document):
        config = LintConfig(rules={"type-annotation": RuleSettings(enabled=False)})

        report = lint_document(make_document(BROKEN), config=config)

        assert [finding.rule for finding in report.findings] == ["nullability-wording"]

    def test_severity_override(self, make_document):
        config = LintConfig(rules={"nullability-wording": RuleSettings(severity=Severity.INFO)})

        report = lint_document(make_document(BROKEN), config=config)

        wording = [f for f in report.findings if f.rule == "nullability-wording"]
        assert wording[0].severity == Severity.INFO

    def test_custom_rule_registry(self, make_document):
        class AlwaysRule(LintRule):
            name = "always"
            description = "Reports one finding per document"
            default_severity = Severity.WARNING

            def check(self, context):
                yield self.finding(f"{len(context.document.snippets)} snippet(s)", line=1)

        rules = RuleRegistry()
        rules.register(AlwaysRule())

        report = lint_document(make_document(BROKEN), rules=rules)

        assert report.findings == [
            Finding(rule="always", severity=Severity.WARNING, message="1 snippet(s)", line=1)
        ]


class TestLintPath:
    def test_unterminated_fence_becomes_finding(self, write_markdown):
        path = write_markdown("# Guide\n\n```graphql\ntype A { id: ID }\n")

        report = lint_path(path)

        assert len(report.findings) == 1
        assert report.findings[0].rule == STRUCTURE_RULE
        assert report.findings[0].line == 3
        assert not report.ok()


class TestLintReport:
    def test_ok_thresholds(self):
        report = LintReport(
            path="guide.md",
            findings=[Finding(rule="r", severity=Severity.WARNING, message="m")],
        )

        assert report.ok(Severity.ERROR)
        assert not report.ok(Severity.WARNING)
        assert not report.ok(Severity.INFO)
        assert report.count(Severity.WARNING) == 1
        assert report.count(Severity.ERROR) == 0
