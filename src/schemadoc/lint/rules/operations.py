"""
Rules for example operations and the output a tutorial shows for them.

Operations are validated, never executed.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from graphql import (
    GraphQLEnumType,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLType,
    get_named_type,
    is_enum_type,
    is_interface_type,
    is_leaf_type,
    is_list_type,
    is_non_null_type,
    is_object_type,
    validate,
)
from graphql.language import (
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    OperationDefinitionNode,
    SelectionSetNode,
)

from ...document.models import ExampleOperation
from ..base import Finding, LintContext, LintRule, Severity

_ROOT_NAMES = {"query": "Query", "mutation": "Mutation", "subscription": "Subscription"}


def _root_type(schema: GraphQLSchema, operation_type: str) -> GraphQLObjectType | None:
    return {
        "query": schema.query_type,
        "mutation": schema.mutation_type,
        "subscription": schema.subscription_type,
    }.get(operation_type)


def _checkable(context: LintContext, operation: ExampleOperation) -> bool:
    result = context.schema
    if not result.ok or result.missing_query_root:
        return False
    if operation.operation_type == "fragment":
        return False
    return _root_type(result.schema, operation.operation_type) is not None


class OperationValidRule(LintRule):
    name = "operation-valid"
    description = "Example operations validate against the document's schema"

    def check(self, context: LintContext) -> Iterable[Finding]:
        result = context.schema
        # Build problems are reported by the schema rules
        if not result.ok or result.missing_query_root:
            return

        for operation in context.document.operations:
            block = operation.block
            if operation.operation_type == "fragment":
                continue

            if _root_type(result.schema, operation.operation_type) is None:
                yield self.finding(
                    f"Schema declares no {_ROOT_NAMES[operation.operation_type]} type; "
                    f"example {operation.operation_type} is not validated",
                    line=block.line,
                    block=block.index,
                    severity=Severity.INFO,
                )
                continue

            for error in validate(result.schema, block.ast):
                location = error.locations[0] if error.locations else None
                yield self.finding(
                    error.message,
                    line=block.absolute_line(location.line) if location else block.line,
                    column=location.column if location else None,
                    block=block.index,
                )


def _scalar_matches(type_: GraphQLNamedType, value: Any) -> bool:
    if isinstance(type_, GraphQLEnumType):
        return isinstance(value, str) and value in type_.values
    name = type_.name
    if name == "Boolean":
        return isinstance(value, bool)
    if isinstance(value, bool):
        return False
    if name == "Int":
        return isinstance(value, int)
    if name == "Float":
        return isinstance(value, int | float)
    if name == "String":
        return isinstance(value, str)
    if name == "ID":
        return isinstance(value, str | int)
    # Custom scalars accept any serialized form
    return True


class _ShapeChecker:
    """Walks a selection set alongside the JSON value shown for it."""

    def __init__(self, schema: GraphQLSchema, fragments: dict[str, FragmentDefinitionNode]):
        self.schema = schema
        self.fragments = fragments
        self.problems: list[str] = []

    def check_selection(
        self,
        selection_set: SelectionSetNode,
        parent: GraphQLNamedType,
        value: Any,
        path: str,
    ) -> None:
        if not isinstance(value, dict):
            self.problems.append(f"{path}: expected an object, got {type(value).__name__}")
            return

        required: set[str] = set()
        optional: set[str] = set()
        self._collect(selection_set, parent, value, path, required, optional)

        for key in sorted(required - value.keys()):
            self.problems.append(f"{path}.{key}: selected but missing from the output")
        for key in sorted(value.keys() - required - optional):
            self.problems.append(f"{path}.{key}: present in the output but not selected")

    def _collect(
        self,
        selection_set: SelectionSetNode,
        parent: GraphQLNamedType,
        value: dict[str, Any],
        path: str,
        required: set[str],
        optional: set[str],
        conditional: bool = False,
    ) -> None:
        for selection in selection_set.selections:
            if isinstance(selection, FieldNode):
                key = selection.alias.value if selection.alias else selection.name.value
                (optional if conditional else required).add(key)
                if key in value:
                    self._check_field(selection, parent, value[key], f"{path}.{key}")
            elif isinstance(selection, InlineFragmentNode):
                narrowed = parent
                if selection.type_condition is not None:
                    narrowed = self.schema.get_type(selection.type_condition.name.value) or parent
                self._collect(
                    selection.selection_set,
                    narrowed,
                    value,
                    path,
                    required,
                    optional,
                    conditional=conditional or narrowed is not parent,
                )
            elif isinstance(selection, FragmentSpreadNode):
                fragment = self.fragments.get(selection.name.value)
                if fragment is None:
                    continue
                narrowed = self.schema.get_type(fragment.type_condition.name.value) or parent
                self._collect(
                    fragment.selection_set,
                    narrowed,
                    value,
                    path,
                    required,
                    optional,
                    conditional=conditional or narrowed is not parent,
                )

    def _check_field(self, node: FieldNode, parent: GraphQLNamedType, value: Any, path: str) -> None:
        name = node.name.value
        if name == "__typename":
            if not isinstance(value, str):
                self.problems.append(f"{path}: __typename must be a string")
            return

        if not (is_object_type(parent) or is_interface_type(parent)):
            return
        field_def = parent.fields.get(name)
        if field_def is None:
            return
        self.check_value(field_def.type, node.selection_set, value, path)

    def check_value(
        self,
        type_: GraphQLType,
        selection_set: SelectionSetNode | None,
        value: Any,
        path: str,
    ) -> None:
        if is_non_null_type(type_):
            if value is None:
                self.problems.append(f"{path}: null for non-nullable {type_}")
                return
            type_ = type_.of_type

        if value is None:
            return

        if is_list_type(type_):
            if not isinstance(value, list):
                self.problems.append(f"{path}: expected a list for {type_}")
                return
            for i, item in enumerate(value):
                self.check_value(type_.of_type, selection_set, item, f"{path}[{i}]")
            return

        named = get_named_type(type_)
        if is_leaf_type(named):
            if not _scalar_matches(named, value):
                kind = "enum" if is_enum_type(named) else "scalar"
                self.problems.append(f"{path}: {value!r} is not a valid {named.name} {kind} value")
            return

        if selection_set is not None:
            self.check_selection(selection_set, named, value, path)


class ExpectedOutputRule(LintRule):
    name = "expected-output"
    description = "Output shown for an example operation matches its selection set and types"

    def check(self, context: LintContext) -> Iterable[Finding]:
        for operation in context.document.operations:
            expected = operation.expected_output
            if expected is None:
                continue

            block = operation.block
            if expected.error is not None:
                yield self.finding(
                    f"Expected output is not valid JSON: {expected.error}",
                    line=expected.line,
                    block=block.index,
                )
                continue

            if not _checkable(context, operation):
                continue

            schema = context.schema.schema
            if validate(schema, block.ast):
                # Invalid operations are reported by operation-valid
                continue

            for problem in self._shape_problems(schema, operation, expected.data):
                yield self.finding(problem, line=expected.line, block=block.index)

    @staticmethod
    def _shape_problems(
        schema: GraphQLSchema, operation: ExampleOperation, data: Any
    ) -> list[str]:
        if not isinstance(data, dict) or "data" not in data:
            return ["Expected output must be a JSON object with a 'data' key"]
        if data["data"] is None:
            return [] if "errors" in data else ["'data' is null but no 'errors' are shown"]

        definitions = operation.block.ast.definitions
        fragments = {
            d.name.value: d for d in definitions if isinstance(d, FragmentDefinitionNode)
        }
        definition = next(d for d in definitions if isinstance(d, OperationDefinitionNode))

        checker = _ShapeChecker(schema, fragments)
        root = _root_type(schema, operation.operation_type)
        checker.check_selection(definition.selection_set, root, data["data"], "data")
        return checker.problems
