"""
Tests for the cross-snippet type registry.
"""

from schemadoc.schema import TypeRef, UnresolvedReference, build_registry, snippet_members


def _codes(problems):
    return [problem.code for problem in problems]


class TestTypeRegistry:
    """Tests for TypeRegistry."""

    def test_forward_reference_across_snippets(self, make_document):
        document = make_document(
            """\
            ```graphql
            type User { role: Role! }
            ```

            ```graphql
            enum Role { ADMIN VIEWER }
            ```
            """
        )

        registry = build_registry(document.snippets)

        assert registry.check() == []
        assert "Role" in registry
        assert registry.names() == ["User", "Role"]
        assert registry.field_map("User") == {"role": TypeRef(name="Role", non_null=True)}
        assert registry.field_map("Role") == {"ADMIN": None, "VIEWER": None}

    def test_builtin_scalars_are_registered(self, make_document):
        registry = build_registry([])

        assert len(registry) == 5
        assert registry.get("ID").builtin is True
        assert registry.names() == []

    def test_unresolved_reference(self, make_document):
        document = make_document(
            """\
            ```graphql
            type User {
              id: ID!
              team: Team
            }
            ```
            """
        )

        problems = build_registry(document.snippets).check()

        assert _codes(problems) == ["unresolved-reference"]
        assert problems[0].line == 4
        assert "User.team" in problems[0].message
        assert "'Team'" in problems[0].message

    def test_unresolved_references_are_structured(self, make_document):
        document = make_document(
            """\
            ```graphql
            type User {
              role: Role!
              team: [Team!]
            }
            ```

            ```graphql
            enum Role { ADMIN }
            ```
            """
        )

        registry = build_registry(document.snippets)

        assert registry.unresolved_references() == [
            UnresolvedReference(type_name="User", field="team", name="Team", line=4)
        ]

    def test_duplicate_types(self, make_document):
        document = make_document(
            """\
            ```graphql
            type User { id: ID }
            ```

            ```graphql
            type User { name: String }
            scalar String
            ```
            """
        )

        problems = build_registry(document.snippets).check()

        assert _codes(problems) == ["duplicate-type", "duplicate-type"]
        assert "already declared on line 2" in problems[0].message
        assert "built-in scalar" in problems[1].message
        assert problems[0].snippet_index == 1

    def test_wrong_positions(self, make_document):
        document = make_document(
            """\
            ```graphql
            type User { id: ID }
            input UserFilter { owner: User }
            type Query { users(filter: UserInput): [User] }
            input UserInput { id: ID }
            type Bad { input: UserInput }
            ```
            """
        )

        problems = build_registry(document.snippets).check()

        assert _codes(problems) == ["wrong-position", "wrong-position"]
        assert "UserFilter.owner uses object 'User'" in problems[0].message
        assert "Bad.input uses input 'UserInput'" in problems[1].message

    def test_enum_defaults(self, make_document):
        document = make_document(
            """\
            ```graphql
            enum Role { ADMIN VIEWER }
            input A { role: Role = VIEWER }
            input B { role: Role = OWNER }
            input C { role: Role = "VIEWER" }
            input D { roles: [Role!] = [ADMIN, GHOST] }
            ```
            """
        )

        problems = build_registry(document.snippets).check()

        assert _codes(problems) == ["bad-default", "bad-default", "bad-default"]
        assert "'OWNER'" in problems[0].message
        assert "string" in problems[1].message
        assert "'GHOST'" in problems[2].message

    def test_extensions(self, make_document):
        document = make_document(
            """\
            ```graphql
            type User { id: ID! }
            extend type User { nickname: String }
            extend type Ghost { id: ID }
            extend enum User { X }
            ```
            """
        )

        registry = build_registry(document.snippets)
        problems = registry.check()

        assert _codes(problems) == ["unknown-extension", "unknown-extension"]
        assert "undeclared type 'Ghost'" in problems[0].message
        assert "Cannot extend object 'User' as enum" in problems[1].message
        assert list(registry.field_map("User")) == ["id", "nickname"]

    def test_scalar_extensions(self, make_document):
        document = make_document(
            """\
            ```graphql
            scalar DateTime
            extend scalar DateTime @specifiedBy(url: "https://example.com/datetime")
            extend scalar Date @specifiedBy(url: "https://example.com/date")
            ```
            """
        )

        problems = build_registry(document.snippets).check()

        assert _codes(problems) == ["unknown-extension"]
        assert problems[0].line == 4
        assert "undeclared type 'Date'" in problems[0].message

    def test_union_and_interface_references(self, make_document):
        document = make_document(
            """\
            ```graphql
            interface Node { id: ID! }
            type User implements Node { id: ID! }
            union SearchResult = User | Node
            type Post implements User { id: ID! }
            ```
            """
        )

        problems = build_registry(document.snippets).check()

        assert _codes(problems) == ["wrong-position", "wrong-position"]
        assert "a union member" in problems[0].message
        assert "an implemented interface" in problems[1].message


class TestSnippetMembers:
    def test_lists_fields_and_enum_values_in_order(self, make_document):
        document = make_document(
            """\
            ```graphql
            type User {
              id: ID!
              tags: [String!]!
            }

            enum Role { ADMIN }
            ```
            """
        )

        members = snippet_members(document.snippets[0])

        assert [(m.owner, m.name, str(m.type_ref) if m.type_ref else None, m.line) for m in members] == [
            ("User", "id", "ID!", 3),
            ("User", "tags", "[String!]!", 4),
            ("Role", "ADMIN", None, 7),
        ]
