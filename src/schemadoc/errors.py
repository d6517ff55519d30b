"""
Exceptions raised by schemadoc.

Problems found inside a document are reported as lint findings. These
exceptions cover the cases where there is nothing sensible to lint.
"""


class SchemaDocError(Exception):
    """Base exception for schemadoc."""

    pass


class DocumentParseError(SchemaDocError):
    """Raised when Markdown structure cannot be scanned."""

    def __init__(self, message: str, line: int | None = None):
        super().__init__(message)
        self.line = line


class RuleConfigError(SchemaDocError):
    """Raised when a rules configuration file is invalid."""

    pass


class SchemaBuildError(SchemaDocError):
    """Raised when a document's SDL cannot be assembled into a schema."""

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []
