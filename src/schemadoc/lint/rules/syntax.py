"""Every GraphQL block must parse and hold one kind of definition."""

from collections.abc import Iterable

from ..base import Finding, LintContext, LintRule


class GraphQLSyntaxRule(LintRule):
    name = "graphql-syntax"
    description = "GraphQL code blocks parse, and do not mix SDL with operations"

    def check(self, context: LintContext) -> Iterable[Finding]:
        for block in context.document.blocks:
            if block.syntax_error is not None:
                yield self.finding(
                    f"Syntax error: {block.syntax_error.message}",
                    line=block.syntax_error.line,
                    column=block.syntax_error.column,
                    block=block.index,
                )
            elif block.kind == "mixed":
                yield self.finding(
                    "Block mixes schema definitions with executable operations",
                    line=block.line,
                    block=block.index,
                )
