"""
Tests for structured logging configuration.
"""

import json
import logging

from schemadoc.logging import (
    LintContextFilter,
    clear_lint_context,
    configure_logging,
    generate_run_id,
    get_document,
    get_logger,
    get_run_id,
    set_lint_context,
)


def test_generate_run_id_is_compact_and_unique():
    ids = {generate_run_id() for _ in range(50)}

    assert len(ids) == 50
    assert all(len(run_id) == 14 for run_id in ids)


def test_lint_context_roundtrip():
    set_lint_context(run_id="run-1", document="guide.md")

    assert get_run_id() == "run-1"
    assert get_document() == "guide.md"

    clear_lint_context()

    assert get_run_id() is None
    assert get_document() is None


def test_set_lint_context_keeps_existing_run_id():
    set_lint_context(run_id="run-1")
    set_lint_context(document="other.md")

    assert get_run_id() == "run-1"
    clear_lint_context()


def test_context_filter_adds_fields():
    set_lint_context(run_id="run-2", document="guide.md")

    event = LintContextFilter()(None, "info", {"event": "hello"})

    assert event == {"event": "hello", "run_id": "run-2", "document": "guide.md"}
    clear_lint_context()


def test_context_filter_keeps_explicit_document():
    set_lint_context(run_id="run-2", document="guide.md")

    event = LintContextFilter()(None, "info", {"event": "hello", "document": "rules.yaml"})

    assert event["document"] == "rules.yaml"
    assert event["run_id"] == "run-2"
    clear_lint_context()


def test_json_logging(capsys):
    configure_logging(debug=False, level="info")
    set_lint_context(run_id="run-3")

    get_logger("schemadoc.test").info("Linted document", findings=2)
    clear_lint_context()

    line = capsys.readouterr().err.strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["event"] == "Linted document"
    assert payload["findings"] == 2
    assert payload["run_id"] == "run-3"
    assert payload["level"] == "info"


def test_default_level_is_warning():
    configure_logging()

    assert logging.getLogger().level == logging.WARNING
