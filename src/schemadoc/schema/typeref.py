"""
Type references with list and non-null wrapping.
"""

from __future__ import annotations

from dataclasses import dataclass

from graphql import GraphQLSyntaxError, parse_type
from graphql.language import ListTypeNode, NamedTypeNode, NonNullTypeNode, TypeNode


@dataclass(frozen=True)
class TypeRef:
    """A possibly wrapped reference to a named type.

    Exactly one of ``name`` (named type) or ``of_type`` (list type) is set.
    ``non_null`` marks the outer ``!`` of this level.
    """

    name: str | None = None
    of_type: TypeRef | None = None
    non_null: bool = False

    @classmethod
    def from_ast(cls, node: TypeNode) -> TypeRef:
        if isinstance(node, NonNullTypeNode):
            inner = cls.from_ast(node.type)
            return cls(name=inner.name, of_type=inner.of_type, non_null=True)
        if isinstance(node, ListTypeNode):
            return cls(of_type=cls.from_ast(node.type))
        if isinstance(node, NamedTypeNode):
            return cls(name=node.name.value)
        raise TypeError(f"Unexpected type node: {node!r}")

    @property
    def is_list(self) -> bool:
        return self.of_type is not None

    @property
    def named_type(self) -> str:
        """Name of the innermost named type."""
        ref = self
        while ref.of_type is not None:
            ref = ref.of_type
        assert ref.name is not None
        return ref.name

    def __str__(self) -> str:
        inner = self.name if self.of_type is None else f"[{self.of_type}]"
        return f"{inner}!" if self.non_null else f"{inner}"


def parse_type_annotation(text: str) -> TypeRef:
    """Parse SDL type text such as ``[String!]!``.

    Raises:
        ValueError: If the text is not a GraphQL type reference
    """
    try:
        node = parse_type(text, no_location=True)
    except GraphQLSyntaxError as e:
        raise ValueError(f"Invalid type annotation '{text}': {e.message}") from e
    return TypeRef.from_ast(node)


def describe(ref: TypeRef) -> str:
    """Render a type reference in plain English, e.g. 'non-nullable ID'."""
    nullability = "non-nullable" if ref.non_null else "nullable"
    if ref.of_type is not None:
        return f"{nullability} list of {describe(ref.of_type)}"
    return f"{nullability} {ref.name}"
