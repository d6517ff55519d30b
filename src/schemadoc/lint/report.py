"""Render lint reports for the terminal or for tools."""

import json

from .base import Severity
from .runner import LintReport


def render_text(reports: list[LintReport]) -> str:
    lines = []
    for report in reports:
        for finding in report.findings:
            location = report.path
            if finding.line is not None:
                location = f"{location}:{finding.line}"
                if finding.column is not None:
                    location = f"{location}:{finding.column}"
            lines.append(
                f"{location}: {finding.severity.value} [{finding.rule}] {finding.message}"
            )

    errors = sum(report.count(Severity.ERROR) for report in reports)
    warnings = sum(report.count(Severity.WARNING) for report in reports)
    infos = sum(report.count(Severity.INFO) for report in reports)
    documents = "document" if len(reports) == 1 else "documents"
    lines.append(
        f"{len(reports)} {documents} checked: "
        f"{errors} error(s), {warnings} warning(s), {infos} info"
    )
    return "\n".join(lines)


def render_json(reports: list[LintReport]) -> str:
    return json.dumps([report.model_dump(mode="json") for report in reports], indent=2)


RENDERERS = {
    "text": render_text,
    "json": render_json,
}
