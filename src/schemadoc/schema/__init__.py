"""Type references, the cross-snippet type registry and schema assembly."""

from .builder import SchemaBuildResult, build_document_schema, print_document_schema
from .registry import (
    Member,
    Problem,
    TypeEntry,
    TypeRegistry,
    UnresolvedReference,
    build_registry,
    snippet_members,
)
from .typeref import TypeRef, describe, parse_type_annotation

__all__ = [
    "Member",
    "Problem",
    "SchemaBuildResult",
    "TypeEntry",
    "TypeRef",
    "TypeRegistry",
    "UnresolvedReference",
    "build_document_schema",
    "build_registry",
    "describe",
    "parse_type_annotation",
    "print_document_schema",
    "snippet_members",
]
