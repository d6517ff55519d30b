"""Rules over the types a document declares across all of its snippets."""

from collections.abc import Iterable

from ..base import Finding, LintContext, LintRule, Severity


class TypeReferencesRule(LintRule):
    name = "type-references"
    description = (
        "Type names are unique, referenced types exist somewhere in the document "
        "and are used in a legal position"
    )

    def check(self, context: LintContext) -> Iterable[Finding]:
        for problem in context.registry_problems:
            yield self.finding(
                f"{problem.message} ({problem.code})",
                line=problem.line,
                block=problem.snippet_index,
            )


class SchemaValidRule(LintRule):
    name = "schema-valid"
    description = "All SDL snippets together form a valid GraphQL schema"

    def check(self, context: LintContext) -> Iterable[Finding]:
        # Registry problems already explain why the schema cannot be built
        if context.registry_problems:
            return

        result = context.schema
        first_line = context.document.snippets[0].line if context.document.snippets else None

        for error in result.errors:
            yield self.finding(error, line=first_line)

        if result.missing_query_root and context.document.operations:
            yield self.finding(
                "Schema declares no Query type; example operations are not validated",
                line=first_line,
                severity=Severity.INFO,
            )
