"""Core parsing and error types."""

from textui.core.errors import (
    ConfigError,
    ErrorContext,
    ExportRefusedError,
    MalformedInputError,
    RenderInconsistencyError,
    SchemaError,
    TextUIError,
    ThemeLoadError,
)
from textui.core.parser import parse

__all__ = [
    "ConfigError",
    "ErrorContext",
    "ExportRefusedError",
    "MalformedInputError",
    "RenderInconsistencyError",
    "SchemaError",
    "TextUIError",
    "ThemeLoadError",
    "parse",
]
