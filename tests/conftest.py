"""
Shared pytest fixtures and configuration for all tests.
"""

import os
import sys
from collections.abc import Callable, Generator
from pathlib import Path
from textwrap import dedent
from typing import Any

import pytest

# Add src directory to path so imports work
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from schemadoc.document import TutorialDocument, parse_document  # noqa: E402
from schemadoc.lint import LintReport, lint_document  # noqa: E402

REPO_ROOT = Path(__file__).parent.parent
DOCS_DIR = REPO_ROOT / "docs"


@pytest.fixture
def tutorial_path() -> Path:
    """Path of the bundled tutorial."""
    return DOCS_DIR / "graphql-schema-basics.md"


@pytest.fixture
def make_document() -> Callable[[str], TutorialDocument]:
    """Parse dedented Markdown text into a document."""

    def _make(text: str) -> TutorialDocument:
        return parse_document(dedent(text), path="test.md")

    return _make


@pytest.fixture
def lint_text() -> Callable[[str], LintReport]:
    """Lint dedented Markdown text with the default rules."""

    def _lint(text: str) -> LintReport:
        return lint_document(parse_document(dedent(text), path="test.md"))

    return _lint


@pytest.fixture
def write_markdown(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a dedented Markdown file into the test's temp dir."""

    def _write(text: str, name: str = "guide.md") -> Path:
        path = tmp_path / name
        path.write_text(dedent(text), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")
