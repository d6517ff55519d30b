"""Markdown tutorial documents and the GraphQL blocks inside them."""

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
from .parser import load_document, parse_document, parse_mention

__all__ = [
    "ExampleOperation",
    "ExpectedOutput",
    "ExplanationBlock",
    "FieldMention",
    "GraphQLBlock",
    "SchemaSnippet",
    "SyntaxIssue",
    "TutorialDocument",
    "load_document",
    "parse_document",
    "parse_mention",
]
