"""
Tests for the schemadoc command line.
"""

import json

from click.testing import CliRunner

from schemadoc import __version__
from schemadoc.cli import cli

BAD_GUIDE = """\
# Guide

```graphql
type User {
  id: ID!
}
```

- `id: ID`: optional identifier
"""


class TestLintCommand:
    def test_bundled_tutorial_passes(self, tutorial_path):
        result = CliRunner().invoke(cli, ["lint", str(tutorial_path)])

        assert result.exit_code == 0, result.output
        assert "1 document checked: 0 error(s), 0 warning(s), 0 info" in result.output

    def test_default_path_uses_bundled_tutorial(self, tutorial_path, monkeypatch):
        from schemadoc.config import settings

        monkeypatch.setattr(settings, "docs_path", str(tutorial_path.parent))

        result = CliRunner().invoke(cli, ["lint"])

        assert result.exit_code == 0, result.output

    def test_failing_document(self, write_markdown):
        path = write_markdown(BAD_GUIDE)

        result = CliRunner().invoke(cli, ["lint", str(path)])

        assert result.exit_code == 1
        assert f"{path}:9: error [type-annotation]" in result.output
        assert f"{path}:9: warning [nullability-wording]" in result.output

    def test_fail_on_threshold(self, write_markdown, tmp_path):
        path = write_markdown(BAD_GUIDE)
        rules = tmp_path / "rules.yaml"
        rules.write_text("rules:\n  type-annotation: false\n", encoding="utf-8")

        lenient = CliRunner().invoke(cli, ["lint", str(path), "--rules", str(rules)])
        strict = CliRunner().invoke(
            cli, ["lint", str(path), "--rules", str(rules), "--fail-on", "warning"]
        )

        assert lenient.exit_code == 0, lenient.output
        assert strict.exit_code == 1

    def test_json_output_for_directory(self, write_markdown, tmp_path):
        write_markdown(BAD_GUIDE, name="a.md")
        write_markdown("# Nothing here\n", name="b.md")

        result = CliRunner().invoke(cli, ["lint", str(tmp_path), "--format", "json"])

        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert [report["path"].rsplit("/", 1)[-1] for report in data] == ["a.md", "b.md"]
        assert data[1]["findings"] == []

    def test_invalid_rules_config(self, write_markdown, tmp_path):
        path = write_markdown(BAD_GUIDE)
        rules = tmp_path / "rules.yaml"
        rules.write_text("rules:\n  not-a-rule: true\n", encoding="utf-8")

        result = CliRunner().invoke(cli, ["lint", str(path), "--rules", str(rules)])

        assert result.exit_code == 2
        assert "Unknown rule in config: not-a-rule" in result.output

    def test_non_utf8_document_is_reported(self, tmp_path):
        path = tmp_path / "latin1.md"
        path.write_bytes(b"# T\n\xff\xfe\n")

        result = CliRunner().invoke(cli, ["lint", str(path)])

        assert result.exit_code == 1, result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert f"{path}:2: error [document-structure] File is not valid UTF-8" in result.output


class TestExtractCommand:
    def test_extract_to_file(self, tutorial_path, tmp_path):
        output = tmp_path / "schema.graphql"

        result = CliRunner().invoke(cli, ["extract", str(tutorial_path), "-o", str(output)])

        assert result.exit_code == 0, result.output
        sdl = output.read_text(encoding="utf-8")
        assert "input CreateUserInput {" in sdl
        assert "enum Role {" in sdl

    def test_extract_to_stdout(self, tutorial_path):
        result = CliRunner().invoke(cli, ["extract", str(tutorial_path)])

        assert result.exit_code == 0
        assert "type Mutation {" in result.output

    def test_extract_unbuildable_schema(self, write_markdown):
        path = write_markdown("```graphql\ntype Query { user: User }\n```\n")

        result = CliRunner().invoke(cli, ["extract", str(path)])

        assert result.exit_code == 1
        assert "Cannot build schema" in result.output


class TestOutlineCommand:
    def test_outline(self, tutorial_path):
        result = CliRunner().invoke(cli, ["outline", str(tutorial_path)])

        assert result.exit_code == 0, result.output
        assert "# GraphQL Schema Basics" in result.output
        assert "Schema snippets (5):" in result.output
        assert "object User (6 field(s) explained)" in result.output
        assert "query (with expected output)" in result.output
        assert "• `!` marks a field or argument as non-nullable." in result.output

    def test_outline_lists_unusable_blocks(self, write_markdown):
        path = write_markdown("```graphql\ntype {\n```\n")

        result = CliRunner().invoke(cli, ["outline", str(path)])

        assert result.exit_code == 0
        assert "line 2: invalid" in result.output

    def test_non_utf8_document(self, tmp_path):
        path = tmp_path / "latin1.md"
        path.write_bytes(b"# T\n\xff\xfe\n")

        for command in ("extract", "outline"):
            result = CliRunner().invoke(cli, [command, str(path)])

            assert result.exit_code == 1, result.output
            assert isinstance(result.exception, SystemExit)
            assert "✗ File is not valid UTF-8" in result.output


class TestMiscCommands:
    def test_rules(self):
        result = CliRunner().invoke(cli, ["rules"])

        assert result.exit_code == 0
        assert result.output.splitlines()[0].startswith("graphql-syntax")
        assert "nullability-wording" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])

        assert __version__ in result.output
