"""
structlog setup for schemadoc.

Every log line carries the id of the lint run and, while a file is being
checked, the path of that document.
"""

import base64
import logging
import secrets
import sys
import time
from contextvars import ContextVar
from typing import Any

import structlog

# Set by the CLI per run and by the runner per document
run_id_ctx: ContextVar[str | None] = ContextVar("run_id", default=None)
document_ctx: ContextVar[str | None] = ContextVar("document", default=None)


class LintContextFilter:
    """structlog processor adding the current run id and document.

    Values bound explicitly on the logger or passed to the log call win.
    """

    def __call__(self, _logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        for key, var in (("run_id", run_id_ctx), ("document", document_ctx)):
            value = var.get()
            if value:
                event_dict.setdefault(key, value)
        return event_dict


def configure_logging(debug: bool = False, level: str | None = None) -> None:
    """Route structlog and stdlib logging to stderr.

    Logs go to stderr so that lint output on stdout stays machine readable.

    Args:
        debug: If True, use human-readable console output. If False, use JSON.
        level: Explicit level name overriding the debug default.
    """

    if level:
        log_level = getattr(logging, level.upper(), logging.INFO)
    else:
        log_level = logging.DEBUG if debug else logging.WARNING

    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
        format="%(message)s",
        force=True,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        LintContextFilter(),
        structlog.processors.TimeStamper(fmt="ISO", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a structlog logger named after the calling module."""
    return structlog.get_logger(name)


def generate_run_id() -> str:
    """Generate a compact run ID from a microsecond timestamp and 2 random bytes.

    Format: 14-character urlsafe base64 string without padding.
    """
    timestamp_us = int(time.time() * 1_000_000)
    random_bytes = secrets.token_bytes(2)

    combined_bytes = timestamp_us.to_bytes(8, byteorder="big") + random_bytes

    return base64.urlsafe_b64encode(combined_bytes).decode("ascii").rstrip("=")


def set_lint_context(run_id: str | None = None, document: str | None = None) -> None:
    """Set lint context variables.

    Args:
        run_id: Run ID to set (generates one if None and none is set yet)
        document: Path of the document being linted
    """
    if run_id is None:
        run_id = run_id_ctx.get() or generate_run_id()

    run_id_ctx.set(run_id)
    if document is not None:
        document_ctx.set(document)


def clear_lint_context() -> None:
    """Clear lint context variables."""
    run_id_ctx.set(None)
    document_ctx.set(None)


def get_run_id() -> str | None:
    """Get the current run ID."""
    return run_id_ctx.get()


def get_document() -> str | None:
    """Get the path of the document currently being linted."""
    return document_ctx.get()
