"""
Builds a TutorialDocument out of Markdown text.

GraphQL blocks are parsed with graphql-core. Syntax errors and malformed
expected output are recorded on the document so that the linter can report
them; only Markdown-level breakage raises.
"""

from __future__ import annotations

import json
import re
from pathlib import Path

from graphql import GraphQLSyntaxError, parse
from graphql.language import (
    DirectiveDefinitionNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    InputObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    ObjectTypeDefinitionNode,
    OperationDefinitionNode,
    ScalarTypeDefinitionNode,
    SchemaDefinitionNode,
    UnionTypeDefinitionNode,
    is_executable_definition_node,
    is_type_system_definition_node,
    is_type_system_extension_node,
)

from ..config import settings
from ..errors import DocumentParseError
from ..logging import get_logger
from .markdown import BulletItem, CodeBlock, Heading, Node, Paragraph, scan_markdown
from .models import (
    ExampleOperation,
    ExpectedOutput,
    ExplanationBlock,
    FieldMention,
    GraphQLBlock,
    SchemaSnippet,
    SyntaxIssue,
    TutorialDocument,
)

logger = get_logger(__name__)

_NAME = r"[_A-Za-z][_0-9A-Za-z]*"

# `name: Type`, `Owner.name(arg: T): Type`, optionally bold, optionally
# followed by a parenthesised `Type` code span
_MENTION_RE = re.compile(
    r"^\*{0,2}`(?P<span>[^`]+)`\*{0,2}"
    r"(?:\s*\(\s*`(?P<paren_type>[^`]+)`\s*\))?"
    r"\s*(?:[:\-–—]+\s*)?(?P<desc>.*)$"
)
_SPAN_RE = re.compile(
    rf"^(?:(?P<owner>{_NAME})\.)?(?P<name>{_NAME})(?:\s*\(.*\))?\s*(?::\s*(?P<type>.+))?$"
)
_SUMMARY_RE = re.compile(r"\b(summary|recap|takeaways?|key points)\b", re.IGNORECASE)

_CONCEPTS: list[tuple[type, str]] = [
    (ScalarTypeDefinitionNode, "scalar"),
    (ObjectTypeDefinitionNode, "object"),
    (InterfaceTypeDefinitionNode, "interface"),
    (UnionTypeDefinitionNode, "union"),
    (EnumTypeDefinitionNode, "enum"),
    (InputObjectTypeDefinitionNode, "input"),
    (SchemaDefinitionNode, "schema"),
    (DirectiveDefinitionNode, "directive"),
]


def parse_mention(text: str, line: int) -> FieldMention | None:
    """Parse one bullet into a FieldMention, or None if it names no field."""
    match = _MENTION_RE.match(text)
    if not match:
        return None

    span = _SPAN_RE.match(match.group("span").strip())
    if not span:
        return None

    type_text = span.group("type") or match.group("paren_type")
    return FieldMention(
        name=span.group("name"),
        owner=span.group("owner"),
        type_text=type_text.strip() if type_text else None,
        description=match.group("desc").strip(),
        line=line,
    )


def _concept_of(node: object) -> str:
    if is_type_system_extension_node(node):
        return "extension"
    for cls, concept in _CONCEPTS:
        if isinstance(node, cls):
            return concept
    return "unknown"


def _parse_block(block: GraphQLBlock) -> None:
    try:
        document: DocumentNode = parse(block.text)
    except GraphQLSyntaxError as e:
        location = e.locations[0] if e.locations else None
        block.kind = "invalid"
        block.syntax_error = SyntaxIssue(
            message=e.message,
            line=block.absolute_line(location.line) if location else block.line,
            column=location.column if location else 1,
        )
        logger.debug("GraphQL block failed to parse", line=block.line, error=e.message)
        return

    block.ast = document
    definitions = document.definitions
    schema_defs = [
        d
        for d in definitions
        if is_type_system_definition_node(d) or is_type_system_extension_node(d)
    ]
    executable_defs = [d for d in definitions if is_executable_definition_node(d)]

    if schema_defs and executable_defs:
        block.kind = "mixed"
    elif schema_defs:
        block.kind = "schema"
    elif executable_defs:
        block.kind = "operation"


def _operation_type(ast: DocumentNode) -> str:
    for definition in ast.definitions:
        if isinstance(definition, OperationDefinitionNode):
            return definition.operation.value
    return "fragment"


def _load_expected(code: CodeBlock) -> ExpectedOutput:
    try:
        return ExpectedOutput(line=code.line, data=json.loads(code.text))
    except json.JSONDecodeError as e:
        return ExpectedOutput(line=code.line + e.lineno - 1, error=e.msg)


class _DocumentBuilder:
    """Walks scanned nodes, attaching prose and output blocks to GraphQL blocks."""

    def __init__(self, path: str | None, languages: list[str]):
        self.document = TutorialDocument(path=path)
        self.languages = {language.lower() for language in languages}
        self.section: Heading | None = None
        # Snippet waiting for its explanation bullets
        self.pending_snippet: SchemaSnippet | None = None
        self.pending_level: int | None = None
        self.pending_bullets: list[BulletItem] = []
        self.pending_prose: list[str] = []
        # Operation waiting for its expected JSON output
        self.pending_operation: ExampleOperation | None = None

    def build(self, nodes: list[Node]) -> TutorialDocument:
        in_summary = False
        for node in nodes:
            if isinstance(node, Heading):
                if self._ends_explanation(node):
                    self._close_explanation()
                self.pending_operation = None
                self.section = node
                self.document.headings.append(node)
                in_summary = bool(_SUMMARY_RE.search(node.title))
            elif isinstance(node, CodeBlock):
                self._on_code(node)
            elif isinstance(node, BulletItem):
                if in_summary:
                    self.document.summary.append(node.text)
                if self.pending_snippet is not None:
                    self.pending_bullets.append(node)
            elif isinstance(node, Paragraph):
                if self.pending_snippet is not None:
                    if self.pending_bullets:
                        self._close_explanation()
                    else:
                        self.pending_prose.append(node.text)

        self._close_explanation()
        return self.document

    def _on_code(self, code: CodeBlock) -> None:
        self._close_explanation()

        if code.language == "json" and self.pending_operation is not None:
            self.pending_operation.expected_output = _load_expected(code)
            self.pending_operation = None
            return

        if code.language not in self.languages:
            return

        self.pending_operation = None
        block = GraphQLBlock(
            index=len(self.document.blocks),
            language=code.language,
            text=code.text,
            line=code.line,
            section=self.section.title if self.section else None,
        )
        _parse_block(block)
        self.document.blocks.append(block)

        if block.kind == "schema" and block.ast is not None:
            snippet = SchemaSnippet(block=block, concept=_concept_of(block.ast.definitions[0]))
            self.document.snippets.append(snippet)
            self.pending_snippet = snippet
            self.pending_level = self.section.level if self.section else None
        elif block.kind == "operation" and block.ast is not None:
            operation = ExampleOperation(block=block, operation_type=_operation_type(block.ast))
            self.document.operations.append(operation)
            self.pending_operation = operation

    def _ends_explanation(self, heading: Heading) -> bool:
        # A deeper subheading may introduce the bullets, but never splits them
        if self.pending_snippet is None or self.pending_bullets:
            return True
        return self.pending_level is None or heading.level <= self.pending_level

    def _close_explanation(self) -> None:
        snippet = self.pending_snippet
        if snippet is not None and self.pending_bullets:
            mentions = []
            for item in self.pending_bullets:
                mention = parse_mention(item.text, item.line)
                if mention is not None:
                    mentions.append(mention)
            snippet.explanation = ExplanationBlock(
                mentions=mentions,
                prose=self.pending_prose,
                line=self.pending_bullets[0].line,
            )

        self.pending_snippet = None
        self.pending_bullets = []
        self.pending_prose = []


def parse_document(
    text: str, path: str | None = None, languages: list[str] | None = None
) -> TutorialDocument:
    """Parse Markdown text into a TutorialDocument.

    Args:
        text: Markdown source
        path: Path reported in findings
        languages: Fence languages treated as GraphQL (defaults to settings)

    Raises:
        DocumentParseError: If the Markdown block structure is broken
    """
    nodes = scan_markdown(text)
    builder = _DocumentBuilder(path, languages or settings.graphql_languages)
    document = builder.build(nodes)

    logger.debug(
        "Parsed tutorial document",
        path=path,
        blocks=len(document.blocks),
        snippets=len(document.snippets),
        operations=len(document.operations),
    )
    return document


def load_document(path: str | Path, languages: list[str] | None = None) -> TutorialDocument:
    """Read and parse a Markdown file.

    Raises:
        DocumentParseError: If the file is not UTF-8 or its block structure is broken
    """
    path = Path(path)
    raw = path.read_bytes()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        line = raw.count(b"\n", 0, e.start) + 1
        raise DocumentParseError(f"File is not valid UTF-8: {e.reason}", line=line) from e
    return parse_document(text, path=str(path), languages=languages)
