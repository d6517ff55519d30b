import json

from schemadoc.lint import Finding, LintReport, Severity
from schemadoc.lint.report import render_json, render_text


def _report():
    return LintReport(
        path="guide.md",
        findings=[
            Finding(rule="graphql-syntax", severity=Severity.ERROR, message="bad", line=3, column=6),
            Finding(rule="schema-valid", severity=Severity.INFO, message="note", line=10),
            Finding(rule="document-structure", severity=Severity.WARNING, message="whole file"),
        ],
    )


def test_render_text():
    text = render_text([_report()])

    assert text.splitlines() == [
        "guide.md:3:6: error [graphql-syntax] bad",
        "guide.md:10: info [schema-valid] note",
        "guide.md: warning [document-structure] whole file",
        "1 document checked: 1 error(s), 1 warning(s), 1 info",
    ]


def test_render_text_empty():
    assert render_text([]) == "0 documents checked: 0 error(s), 0 warning(s), 0 info"


def test_render_json():
    data = json.loads(render_json([_report()]))

    assert data[0]["path"] == "guide.md"
    assert data[0]["findings"][0] == {
        "rule": "graphql-syntax",
        "severity": "error",
        "message": "bad",
        "line": 3,
        "column": 6,
        "block": None,
    }
