"""
Data model for a parsed GraphQL tutorial document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from graphql.language import DocumentNode

from .markdown import Heading


@dataclass
class SyntaxIssue:
    """A GraphQL syntax error with an absolute position in the Markdown file."""

    message: str
    line: int
    column: int


@dataclass
class GraphQLBlock:
    """A fenced GraphQL code block as it appears in the document."""

    index: int
    language: str
    text: str
    line: int
    section: str | None = None
    ast: DocumentNode | None = None
    syntax_error: SyntaxIssue | None = None
    kind: str = "invalid"  # 'schema', 'operation', 'mixed', 'invalid'

    def absolute_line(self, relative_line: int) -> int:
        """Translate a 1-based line inside the block to a file line."""
        return self.line + relative_line - 1


@dataclass
class FieldMention:
    """A bullet in an explanation block naming one field or enum value."""

    name: str
    description: str
    line: int
    owner: str | None = None
    type_text: str | None = None


@dataclass
class ExplanationBlock:
    mentions: list[FieldMention]
    prose: list[str]
    line: int


@dataclass
class SchemaSnippet:
    """SDL text demonstrating one concept, with the prose that explains it."""

    block: GraphQLBlock
    concept: str  # 'scalar', 'object', 'interface', 'union', 'enum', 'input', ...
    explanation: ExplanationBlock | None = None

    @property
    def line(self) -> int:
        return self.block.line


@dataclass
class ExpectedOutput:
    """The response shape a tutorial shows next to an example operation."""

    line: int
    data: Any = None
    error: str | None = None


@dataclass
class ExampleOperation:
    block: GraphQLBlock
    operation_type: str  # 'query', 'mutation', 'subscription', 'fragment'
    expected_output: ExpectedOutput | None = None

    @property
    def line(self) -> int:
        return self.block.line


@dataclass
class TutorialDocument:
    path: str | None
    headings: list[Heading] = field(default_factory=list)
    blocks: list[GraphQLBlock] = field(default_factory=list)
    snippets: list[SchemaSnippet] = field(default_factory=list)
    operations: list[ExampleOperation] = field(default_factory=list)
    summary: list[str] = field(default_factory=list)

    @property
    def display_path(self) -> str:
        return self.path or "<string>"
