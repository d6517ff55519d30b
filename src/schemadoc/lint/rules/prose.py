"""
Rules comparing explanation bullets with the snippet they describe.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from ...document.models import FieldMention, SchemaSnippet
from ...schema.registry import Member, snippet_members
from ...schema.typeref import TypeRef, describe, parse_type_annotation
from ..base import Finding, LintContext, LintRule, Severity

_NON_NULL_RE = re.compile(
    r"\b(non-nullable|non-null|not nullable|never null|required|mandatory"
    r"|cannot be null|can't be null|must be provided|always present)\b",
    re.IGNORECASE,
)
_NULLABLE_RE = re.compile(
    r"(?<!non-)(?<!not )\b(nullable|optional|may be null|can be null|could be null"
    r"|might be null|may be omitted)\b",
    re.IGNORECASE,
)
_LIST_RE = re.compile(r"\b(list|lists|array|arrays)\b", re.IGNORECASE)


@dataclass
class SnippetMatch:
    """Mentions of one explanation block paired with the snippet's members."""

    snippet: SchemaSnippet
    pairs: list[tuple[FieldMention, Member]] = field(default_factory=list)
    unknown: list[FieldMention] = field(default_factory=list)
    undescribed: list[Member] = field(default_factory=list)


def match_snippet(snippet: SchemaSnippet) -> SnippetMatch:
    """Pair each mention with the member it names.

    An unqualified mention matches every member of that name, so one bullet
    can describe the same field on several types. Members of a type and a
    mention of the type's own name never pair up.
    """
    result = SnippetMatch(snippet=snippet)
    members = snippet_members(snippet)
    mentions = snippet.explanation.mentions if snippet.explanation else []
    described: set[int] = set()
    type_names = {
        d.name.value for d in snippet.block.ast.definitions if getattr(d, "name", None)
    }

    for mention in mentions:
        # A bullet may describe a declared type itself, e.g. a custom scalar
        if mention.owner is None and mention.type_text is None and mention.name in type_names:
            continue

        matched = [
            (i, member)
            for i, member in enumerate(members)
            if member.name == mention.name
            and (mention.owner is None or member.owner == mention.owner)
        ]
        if not matched:
            result.unknown.append(mention)
            continue
        for i, member in matched:
            described.add(i)
            result.pairs.append((mention, member))

    result.undescribed = [member for i, member in enumerate(members) if i not in described]
    return result


def _explained(context: LintContext) -> list[SnippetMatch]:
    return [
        match_snippet(snippet)
        for snippet in context.document.snippets
        if snippet.explanation is not None
    ]


class FieldCoverageRule(LintRule):
    name = "field-coverage"
    description = (
        "Every field named in an explanation exists in its snippet, "
        "and every declared field is explained"
    )

    def check(self, context: LintContext) -> Iterable[Finding]:
        for match in _explained(context):
            index = match.snippet.block.index
            for mention in match.unknown:
                target = f"{mention.owner}.{mention.name}" if mention.owner else mention.name
                yield self.finding(
                    f"Explanation mentions '{target}' but the snippet declares no such field",
                    line=mention.line,
                    block=index,
                )
            for member in match.undescribed:
                what = "Enum value" if member.type_ref is None else "Field"
                yield self.finding(
                    f"{what} '{member.owner}.{member.name}' is not described in the explanation",
                    line=member.line,
                    block=index,
                )


class TypeAnnotationRule(LintRule):
    name = "type-annotation"
    description = "A type written next to a field in prose equals the declared type"

    def check(self, context: LintContext) -> Iterable[Finding]:
        for match in _explained(context):
            index = match.snippet.block.index
            for mention, member in match.pairs:
                if mention.type_text is None:
                    continue

                if member.type_ref is None:
                    yield self.finding(
                        f"Enum value '{member.owner}.{member.name}' has no type, "
                        f"but the explanation gives '{mention.type_text}'",
                        line=mention.line,
                        block=index,
                    )
                    continue

                try:
                    claimed = parse_type_annotation(mention.type_text)
                except ValueError:
                    yield self.finding(
                        f"'{mention.type_text}' is not a GraphQL type annotation",
                        line=mention.line,
                        block=index,
                    )
                    continue

                if claimed != member.type_ref:
                    yield self.finding(
                        f"Explanation gives '{member.name}: {claimed}' but "
                        f"{member.owner} declares '{member.name}: {member.type_ref}'",
                        line=mention.line,
                        block=index,
                    )


def _levels(ref: TypeRef) -> list[TypeRef]:
    levels = [ref]
    while ref.of_type is not None:
        ref = ref.of_type
        levels.append(ref)
    return levels


class NullabilityWordingRule(LintRule):
    name = "nullability-wording"
    description = "Prose calling a field required, optional or a list agrees with its type"
    default_severity = Severity.WARNING

    def check(self, context: LintContext) -> Iterable[Finding]:
        for match in _explained(context):
            index = match.snippet.block.index
            for mention, member in match.pairs:
                ref = member.type_ref
                if ref is None:
                    continue

                text = mention.description
                non_null_ok = ref.non_null
                nullable_ok = not ref.non_null
                # "entries may be null" describes an inner list level
                if ref.is_list:
                    nullable_ok = any(not level.non_null for level in _levels(ref))

                problem = None
                if _NON_NULL_RE.search(text) and not non_null_ok:
                    problem = "calls it non-nullable"
                elif _NULLABLE_RE.search(text) and not nullable_ok:
                    problem = "calls it nullable"
                elif _LIST_RE.search(text) and not ref.is_list:
                    problem = "calls it a list"

                if problem:
                    yield self.finding(
                        f"Explanation of '{member.owner}.{member.name}' {problem}, "
                        f"but '{ref}' is a {describe(ref)}",
                        line=mention.line,
                        block=index,
                    )
