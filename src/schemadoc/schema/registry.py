"""
Type registry assembled from the SDL snippets of one document.

Snippets are registered in document order, but references between named
types are only resolved once every snippet has been read, so a field may
use a type that a later snippet declares.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from graphql.language import (
    DirectiveDefinitionNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    EnumValueNode,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InputValueDefinitionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ListValueNode,
    Node,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
    ScalarTypeExtensionNode,
    SchemaDefinitionNode,
    SchemaExtensionNode,
    StringValueNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
    ValueNode,
)

from ..document.models import GraphQLBlock, SchemaSnippet
from ..logging import get_logger
from .typeref import TypeRef

logger = get_logger(__name__)

BUILTIN_SCALARS: tuple[str, ...] = ("String", "Int", "Float", "Boolean", "ID")

INPUT_KINDS = frozenset({"scalar", "enum", "input"})
OUTPUT_KINDS = frozenset({"scalar", "enum", "object", "interface", "union"})

_DEFINITION_KINDS: list[tuple[type, str]] = [
    (ScalarTypeDefinitionNode, "scalar"),
    (ObjectTypeDefinitionNode, "object"),
    (InterfaceTypeDefinitionNode, "interface"),
    (UnionTypeDefinitionNode, "union"),
    (EnumTypeDefinitionNode, "enum"),
    (InputObjectTypeDefinitionNode, "input"),
]

_EXTENSION_KINDS: list[tuple[type, str]] = [
    (ScalarTypeExtensionNode, "scalar"),
    (ObjectTypeExtensionNode, "object"),
    (InterfaceTypeExtensionNode, "interface"),
    (UnionTypeExtensionNode, "union"),
    (EnumTypeExtensionNode, "enum"),
    (InputObjectTypeExtensionNode, "input"),
]


@dataclass
class TypeEntry:
    name: str
    kind: str
    snippet_index: int | None = None
    line: int | None = None
    builtin: bool = False
    # Field or enum value name -> declared type (None for enum values)
    members: dict[str, TypeRef | None] = field(default_factory=dict)


@dataclass
class Member:
    """A field, input field or enum value declared inside a snippet."""

    owner: str
    name: str
    type_ref: TypeRef | None
    line: int


@dataclass
class Reference:
    owner: str
    member: str
    ref: TypeRef
    position: str  # 'input', 'output', 'union', 'interface', 'root'
    line: int
    snippet_index: int
    argument: str | None = None
    default_value: ValueNode | None = None


@dataclass
class UnresolvedReference:
    """A named type used by a field, argument or root that no snippet declares."""

    type_name: str
    field: str
    name: str
    line: int


@dataclass
class Problem:
    code: str
    message: str
    line: int | None = None
    snippet_index: int | None = None


def _line(block: GraphQLBlock, node: Node) -> int:
    if node.loc is None:
        return block.line
    return block.absolute_line(node.loc.start_token.line)


def _kind_of(node: Node, table: list[tuple[type, str]]) -> str | None:
    for cls, kind in table:
        if isinstance(node, cls):
            return kind
    return None


def snippet_members(snippet: SchemaSnippet) -> list[Member]:
    """List the fields and enum values a snippet declares, in source order."""
    members: list[Member] = []
    block = snippet.block
    if block.ast is None:
        return members

    for definition in block.ast.definitions:
        name_node = getattr(definition, "name", None)
        if name_node is None:
            continue
        owner = name_node.value
        for node in getattr(definition, "fields", None) or ():
            members.append(
                Member(owner, node.name.value, TypeRef.from_ast(node.type), _line(block, node))
            )
        for node in getattr(definition, "values", None) or ():
            members.append(Member(owner, node.name.value, None, _line(block, node)))
    return members


class TypeRegistry:
    """
    Named types declared across a document's snippets.

    Problems found while registering (duplicate names) are kept alongside
    the ones found by check(), which resolves references.
    """

    def __init__(self):
        self._types: dict[str, TypeEntry] = {}
        self._references: list[Reference] = []
        self._extensions: list[tuple[str, str, int, int, Node]] = []
        self._register_problems: list[Problem] = []
        for name in BUILTIN_SCALARS:
            self._types[name] = TypeEntry(name=name, kind="scalar", builtin=True)

    def __contains__(self, name: str) -> bool:
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)

    def get(self, name: str) -> TypeEntry | None:
        return self._types.get(name)

    def names(self, include_builtins: bool = False) -> list[str]:
        return [
            name for name, entry in self._types.items() if include_builtins or not entry.builtin
        ]

    def field_map(self, type_name: str) -> dict[str, TypeRef | None]:
        """Return the ordered members of a type, including extension members.

        Raises:
            KeyError: If the type is not registered
        """
        return dict(self._types[type_name].members)

    def register_snippet(self, snippet: SchemaSnippet) -> None:
        """Record every definition of a snippet."""
        block = snippet.block
        if block.ast is None:
            return

        for definition in block.ast.definitions:
            line = _line(block, definition)

            kind = _kind_of(definition, _DEFINITION_KINDS)
            if kind is not None:
                self._register_type(definition, kind, block, line)
                continue

            kind = _kind_of(definition, _EXTENSION_KINDS)
            if kind is not None:
                name = definition.name.value
                self._extensions.append((name, kind, block.index, line, definition))
                self._collect_references(name, definition, block)
                continue

            if isinstance(definition, SchemaDefinitionNode | SchemaExtensionNode):
                for operation_type in definition.operation_types or ():
                    self._references.append(
                        Reference(
                            owner="schema",
                            member=operation_type.operation.value,
                            ref=TypeRef(name=operation_type.type.name.value),
                            position="root",
                            line=_line(block, operation_type),
                            snippet_index=block.index,
                        )
                    )
            elif isinstance(definition, DirectiveDefinitionNode):
                owner = f"@{definition.name.value}"
                for arg in definition.arguments or ():
                    self._add_input_value(owner, arg.name.value, None, arg, block)

    def _register_type(self, definition: Node, kind: str, block: GraphQLBlock, line: int) -> None:
        name = definition.name.value
        existing = self._types.get(name)
        if existing is not None:
            if existing.builtin:
                origin = "a built-in scalar"
            else:
                origin = f"already declared on line {existing.line}"
            self._register_problems.append(
                Problem(
                    code="duplicate-type",
                    message=f"Type '{name}' is {origin}",
                    line=line,
                    snippet_index=block.index,
                )
            )
            return

        entry = TypeEntry(name=name, kind=kind, snippet_index=block.index, line=line)
        self._types[name] = entry
        self._add_members(entry, definition)
        self._collect_references(name, definition, block)
        logger.debug("Registered type", name=name, kind=kind, line=line)

    @staticmethod
    def _add_members(entry: TypeEntry, definition: Node) -> None:
        for node in getattr(definition, "fields", None) or ():
            entry.members[node.name.value] = TypeRef.from_ast(node.type)
        for node in getattr(definition, "values", None) or ():
            entry.members[node.name.value] = None

    def _collect_references(self, owner: str, definition: Node, block: GraphQLBlock) -> None:
        if isinstance(definition, InputObjectTypeDefinitionNode | InputObjectTypeExtensionNode):
            for node in definition.fields or ():
                self._add_input_value(owner, node.name.value, None, node, block)
            return

        for node in getattr(definition, "fields", None) or ():
            self._references.append(
                Reference(
                    owner=owner,
                    member=node.name.value,
                    ref=TypeRef.from_ast(node.type),
                    position="output",
                    line=_line(block, node),
                    snippet_index=block.index,
                )
            )
            for arg in node.arguments or ():
                self._add_input_value(owner, node.name.value, arg.name.value, arg, block)

        for interface in getattr(definition, "interfaces", None) or ():
            self._references.append(
                Reference(
                    owner=owner,
                    member=interface.name.value,
                    ref=TypeRef(name=interface.name.value),
                    position="interface",
                    line=_line(block, interface),
                    snippet_index=block.index,
                )
            )

        if isinstance(definition, UnionTypeDefinitionNode | UnionTypeExtensionNode):
            for member in definition.types or ():
                self._references.append(
                    Reference(
                        owner=owner,
                        member=member.name.value,
                        ref=TypeRef(name=member.name.value),
                        position="union",
                        line=_line(block, member),
                        snippet_index=block.index,
                    )
                )

    def _add_input_value(
        self,
        owner: str,
        member: str,
        argument: str | None,
        node: InputValueDefinitionNode,
        block: GraphQLBlock,
    ) -> None:
        self._references.append(
            Reference(
                owner=owner,
                member=member,
                argument=argument,
                ref=TypeRef.from_ast(node.type),
                position="input",
                line=_line(block, node),
                snippet_index=block.index,
                default_value=node.default_value,
            )
        )

    def check(self) -> list[Problem]:
        """Resolve references against all registered types.

        Extensions are merged into their base types first.
        """
        problems = list(self._register_problems)

        for name, kind, snippet_index, line, definition in self._extensions:
            entry = self._types.get(name)
            if entry is None or entry.builtin:
                problems.append(
                    Problem(
                        code="unknown-extension",
                        message=f"Cannot extend undeclared type '{name}'",
                        line=line,
                        snippet_index=snippet_index,
                    )
                )
            elif entry.kind != kind:
                problems.append(
                    Problem(
                        code="unknown-extension",
                        message=f"Cannot extend {entry.kind} '{name}' as {kind}",
                        line=line,
                        snippet_index=snippet_index,
                    )
                )
            else:
                self._add_members(entry, definition)

        for reference in self._references:
            problems.extend(self._check_reference(reference))

        return problems

    def unresolved_references(self) -> list[UnresolvedReference]:
        """List references to undeclared types, in document order.

        Only meaningful once every snippet has been registered, since a type
        may be declared after the snippet that uses it.
        """
        return [
            UnresolvedReference(
                type_name=reference.owner,
                field=reference.member,
                name=reference.ref.named_type,
                line=reference.line,
            )
            for reference in self._references
            if reference.ref.named_type not in self._types
        ]

    def _check_reference(self, reference: Reference) -> list[Problem]:
        target_name = reference.ref.named_type
        target = self._types.get(target_name)
        where = f"{reference.owner}.{reference.member}"
        if reference.argument:
            where = f"{where}({reference.argument})"

        if target is None:
            return [
                Problem(
                    code="unresolved-reference",
                    message=f"{where} references unknown type '{target_name}'",
                    line=reference.line,
                    snippet_index=reference.snippet_index,
                )
            ]

        expected: dict[str, frozenset[str]] = {
            "input": INPUT_KINDS,
            "output": OUTPUT_KINDS,
            "union": frozenset({"object"}),
            "interface": frozenset({"interface"}),
            "root": frozenset({"object"}),
        }
        if target.kind not in expected[reference.position]:
            label = {
                "input": "an input position",
                "output": "an output position",
                "union": "a union member",
                "interface": "an implemented interface",
                "root": "a root operation type",
            }[reference.position]
            return [
                Problem(
                    code="wrong-position",
                    message=f"{where} uses {target.kind} '{target_name}' as {label}",
                    line=reference.line,
                    snippet_index=reference.snippet_index,
                )
            ]

        if target.kind == "enum" and reference.default_value is not None:
            return self._check_enum_default(reference, target, where)
        return []

    @staticmethod
    def _check_enum_default(reference: Reference, target: TypeEntry, where: str) -> list[Problem]:
        values: list[ValueNode] = [reference.default_value]
        if isinstance(reference.default_value, ListValueNode):
            values = list(reference.default_value.values)

        problems = []
        for value in values:
            if isinstance(value, StringValueNode):
                message = (
                    f"{where} default \"{value.value}\" is a string; "
                    f"enum defaults are written without quotes"
                )
            elif isinstance(value, EnumValueNode) and value.value not in target.members:
                message = f"{where} default '{value.value}' is not a value of enum '{target.name}'"
            else:
                continue
            problems.append(
                Problem(
                    code="bad-default",
                    message=message,
                    line=reference.line,
                    snippet_index=reference.snippet_index,
                )
            )
        return problems


def build_registry(snippets: list[SchemaSnippet]) -> TypeRegistry:
    """Register every snippet in document order."""
    registry = TypeRegistry()
    for snippet in snippets:
        registry.register_snippet(snippet)
    return registry
