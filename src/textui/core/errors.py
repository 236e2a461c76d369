"""
Error types for TextUI document parsing, theme loading, rendering and export.
"""

from dataclasses import dataclass
from typing import Optional


class TextUIError(Exception):
    """Base exception for all TextUI errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class MalformedInputError(TextUIError):
    """
    Raised when input text is not well-formed structured data.

    Examples:
    - Invalid YAML syntax
    - A document whose top level is not a mapping
    - A transport message that is not a JSON object
    """

    pass


class SchemaError(TextUIError):
    """
    Raised when well-formed data violates the component contract.

    Examples:
    - Unknown component kind
    - Missing required field
    - Duplicate node id
    - Leaf component declaring children
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(reason, ErrorContext(path=path))


class ThemeLoadError(TextUIError):
    """
    Raised (or collected as a diagnostic) when a theme source is unusable.

    Non-fatal: callers fall back to the built-in defaults.
    """

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"theme '{source}' not applied: {reason}")


class RenderInconsistencyError(TextUIError):
    """
    Raised when the renderer meets a tree that validation should have rejected.
    """

    pass


class ExportRefusedError(TextUIError):
    """
    Raised when export is requested without a valid current document.
    """

    pass


class ConfigError(TextUIError):
    """Raised when textui.toml cannot be read."""

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside a source document.

    Attributes:
        path: Dotted path to the offending node (e.g. ``page.components[1].Button``)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    path: str | None = None
    line: int | None = None
    column: int | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "line 3, column 5" or "page.components[0]"
        """
        parts: list[str] = []
        if self.line is not None:
            location = f"line {self.line}"
            if self.column is not None:
                location += f", column {self.column}"
            parts.append(location)
        if self.path:
            parts.append(self.path)
        return " at ".join(parts) if parts else "<input>"
