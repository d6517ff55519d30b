#!/usr/bin/env python3
"""
Main CLI entry point for schemadoc.
"""

import sys
from pathlib import Path

import click

from schemadoc import __version__
from schemadoc.config import settings
from schemadoc.docsloader import collect_markdown, find_tutorial
from schemadoc.errors import DocumentParseError, RuleConfigError, SchemaBuildError
from schemadoc.logging import clear_lint_context, configure_logging, get_logger, set_lint_context

logger = get_logger(__name__)

SEVERITY_CHOICES = ["error", "warning", "info"]


@click.group()
@click.version_option(version=__version__, prog_name="schemadoc")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level for diagnostics on stderr (default: warning)",
)
def cli(log_level: str | None) -> None:
    """schemadoc - lint GraphQL schema tutorials written in Markdown."""
    configure_logging(
        debug=settings.debug or log_level == "debug",
        level=log_level or (settings.log_level if settings.debug else None),
    )


def _default_paths() -> list[Path]:
    tutorial = find_tutorial()
    if tutorial is None:
        click.echo(
            f"✗ No paths given and no bundled tutorial under '{settings.docs_path}'", err=True
        )
        sys.exit(2)
    return [tutorial]


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True, path_type=Path))
@click.option(
    "--format",
    "output_format",
    default=settings.default_format,
    type=click.Choice(["text", "json"]),
    help="Output format (default: text)",
)
@click.option(
    "--rules",
    "rules_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file enabling, disabling or re-grading rules",
)
@click.option(
    "--fail-on",
    default=None,
    type=click.Choice(SEVERITY_CHOICES),
    help="Lowest severity that fails the run (default: error)",
)
def lint(
    paths: tuple[Path, ...],
    output_format: str,
    rules_path: Path | None,
    fail_on: str | None,
) -> None:
    """Check GraphQL blocks and the prose that explains them."""
    from schemadoc.lint import (
        Severity,
        discover_rules_config,
        lint_path,
        load_rules_config,
        registry,
    )
    from schemadoc.lint.report import RENDERERS

    try:
        if rules_path is not None:
            config = load_rules_config(rules_path, registry)
        else:
            config = discover_rules_config(registry)
    except RuleConfigError as e:
        logger.error("Invalid rules config", error=str(e))
        click.echo(f"✗ {e}", err=True)
        sys.exit(2)

    threshold = Severity(fail_on or (config.fail_on.value if config.fail_on else settings.fail_on))
    documents = collect_markdown(list(paths)) if paths else _default_paths()

    set_lint_context()
    reports = [lint_path(path, config=config) for path in documents]
    clear_lint_context()

    click.echo(RENDERERS[output_format](reports))

    if not all(report.ok(threshold) for report in reports):
        sys.exit(1)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    default=None,
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Write the schema to this file instead of stdout",
)
def extract(path: Path, output: Path | None) -> None:
    """Assemble a tutorial's SDL snippets into one schema file."""
    from schemadoc.document import load_document
    from schemadoc.schema import print_document_schema

    try:
        sdl = print_document_schema(load_document(path))
    except (DocumentParseError, SchemaBuildError) as e:
        logger.error("Failed to extract schema", path=str(path), error=str(e))
        click.echo(f"✗ {e}", err=True)
        for error in getattr(e, "errors", []):
            click.echo(f"  {error}", err=True)
        sys.exit(1)

    if output is None:
        click.echo(sdl)
        return

    output.write_text(sdl + "\n", encoding="utf-8")
    logger.info("Schema written", path=str(output))
    click.echo(f"✓ Schema written to {output}")


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def outline(path: Path) -> None:
    """Show the sections, snippets and operations of a tutorial."""
    from schemadoc.document import load_document

    try:
        document = load_document(path)
    except DocumentParseError as e:
        logger.error("Failed to parse document", path=str(path), error=str(e))
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)

    click.echo(f"📄 {document.display_path}")
    for heading in document.headings:
        click.echo(f"{'  ' * (heading.level - 1)}# {heading.title}")

    click.echo(f"\nSchema snippets ({len(document.snippets)}):")
    for snippet in document.snippets:
        names = [
            d.name.value for d in snippet.block.ast.definitions if getattr(d, "name", None)
        ]
        mentions = len(snippet.explanation.mentions) if snippet.explanation else 0
        click.echo(
            f"  line {snippet.line}: {snippet.concept} {', '.join(names)}"
            f" ({mentions} field(s) explained)"
        )

    click.echo(f"\nExample operations ({len(document.operations)}):")
    for operation in document.operations:
        shown = "with expected output" if operation.expected_output else "no expected output"
        click.echo(f"  line {operation.line}: {operation.operation_type} ({shown})")

    invalid = [block for block in document.blocks if block.kind in ("invalid", "mixed")]
    if invalid:
        click.echo(f"\n⚠️  Unusable GraphQL blocks ({len(invalid)}):")
        for block in invalid:
            click.echo(f"  line {block.line}: {block.kind}")

    if document.summary:
        click.echo("\nSummary:")
        for item in document.summary:
            click.echo(f"  • {item}")


@cli.command("rules")
def list_rules() -> None:
    """List the available lint rules."""
    from schemadoc.lint import registry

    for rule in registry.list_all():
        click.echo(f"{rule.name:<22} {rule.default_severity.value:<8} {rule.description}")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
