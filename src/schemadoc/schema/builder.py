"""
Assemble a document's SDL snippets into an executable-free GraphQLSchema.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from graphql import (
    GraphQLError,
    GraphQLSchema,
    build_ast_schema,
    concat_ast,
    print_schema,
    validate_schema,
)

from ..document.models import TutorialDocument
from ..errors import SchemaBuildError
from ..logging import get_logger

logger = get_logger(__name__)

MISSING_QUERY_ROOT = "Query root type must be provided."


@dataclass
class SchemaBuildResult:
    schema: GraphQLSchema | None = None
    errors: list[str] = field(default_factory=list)
    missing_query_root: bool = False

    @property
    def ok(self) -> bool:
        return self.schema is not None and not self.errors


def build_document_schema(document: TutorialDocument) -> SchemaBuildResult:
    """Build and validate a schema from every parseable SDL snippet.

    Snippets with syntax errors are left out. Tutorials often show types
    without root operation types, so a missing Query root is reported
    through ``missing_query_root`` rather than as an error.
    """
    asts = [snippet.block.ast for snippet in document.snippets if snippet.block.ast is not None]

    try:
        schema = build_ast_schema(concat_ast(asts), assume_valid_sdl=False)
    except (GraphQLError, TypeError) as e:
        logger.info("Schema build failed", error=str(e))
        return SchemaBuildResult(errors=[line for line in str(e).split("\n\n") if line])

    result = SchemaBuildResult(schema=schema)
    for error in validate_schema(schema):
        if error.message == MISSING_QUERY_ROOT:
            result.missing_query_root = True
        else:
            result.errors.append(error.message)

    if result.errors:
        logger.info("Schema validation failed", errors=result.errors)
    return result


def print_document_schema(document: TutorialDocument) -> str:
    """Return the assembled schema as SDL text.

    Raises:
        SchemaBuildError: If the snippets do not form a valid schema
    """
    if not document.snippets:
        raise SchemaBuildError(f"No SDL snippets found in {document.display_path}")

    result = build_document_schema(document)
    if not result.ok:
        raise SchemaBuildError(
            f"Cannot build schema from {document.display_path}", errors=result.errors
        )

    return print_schema(result.schema)
