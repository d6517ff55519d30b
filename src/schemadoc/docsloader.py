"""Helpers to locate the bundled tutorial and Markdown inputs."""

from __future__ import annotations

from pathlib import Path

from .config import settings

TUTORIAL_FILE = "graphql-schema-basics.md"
EXAMPLE_RULES_FILE = "rules.yaml"


def find_tutorial(base: str | Path | None = None) -> Path | None:
    """Return the bundled tutorial under ``base`` (settings.docs_path by default)."""
    base = Path(base if base is not None else settings.docs_path)
    tutorial = base / TUTORIAL_FILE
    return tutorial if tutorial.exists() else None


def find_example_rules(base: str | Path | None = None) -> Path | None:
    base = Path(base if base is not None else settings.docs_path)
    rules = base / "examples" / EXAMPLE_RULES_FILE
    return rules if rules.exists() else None


def collect_markdown(paths: list[Path]) -> list[Path]:
    """Expand directories into the Markdown files they contain, sorted."""
    collected: list[Path] = []
    for path in paths:
        if path.is_dir():
            collected.extend(sorted(p for p in path.rglob("*.md") if p.is_file()))
        else:
            collected.append(path)
    return collected
