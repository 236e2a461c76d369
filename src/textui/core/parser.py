"""
Document parser for TextUI YAML.

Turns raw text into a typed, immutable Document tree. Parsing is total and
side-effect free: it never touches the file system or theme state.

Input shape:

    page:
      id: signup
      title: Sign up
      layout: vertical
      components:
        - Text: {variant: h1, value: "Sign up"}
        - Container:
            layout: horizontal
            components:
              - Button: {kind: primary, label: "Create account"}
"""

from __future__ import annotations

import logging
from typing import Any

import yaml
from pydantic import ValidationError

from textui.core.errors import ErrorContext, MalformedInputError, SchemaError
from textui.specs.document import (
    COMPONENT_KINDS,
    FORM_ACTION_KINDS,
    FORM_FIELD_KINDS,
    Document,
    NodeBase,
    PageNode,
)

logger = logging.getLogger(__name__)

# Keys the parser fills in itself; user-supplied values are dropped
_RESERVED_KEYS = ("component", "items")
_CHILD_KEYS = ("components", "children")


def parse(raw: str | bytes) -> Document:
    """
    Parse TextUI YAML into a Document.

    Args:
        raw: Document source text, or UTF-8 bytes as read from disk

    Returns:
        Validated Document

    Raises:
        MalformedInputError: If the text is not well-formed YAML or not a mapping
        SchemaError: If the data violates the component contract
    """
    if isinstance(raw, bytes):
        raw = decode_source(raw)
    data = load_yaml(raw)
    if not isinstance(data, dict):
        raise MalformedInputError(
            f"expected a mapping at the top level, got {_describe(data)}"
        )
    document = _DocumentBuilder().build(data)
    logger.debug("Parsed document with %d node(s)", sum(1 for _ in document.walk()))
    return document


def decode_source(data: bytes) -> str:
    """Decode document bytes, converting bad encodings to MalformedInputError."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedInputError(f"not valid UTF-8 (byte {e.start})") from e


def load_yaml(raw: str) -> Any:
    """Load YAML text, converting syntax errors to MalformedInputError."""
    try:
        return yaml.safe_load(raw)
    except yaml.MarkedYAMLError as e:
        mark = e.problem_mark
        context = None
        if mark is not None:
            context = ErrorContext(line=mark.line + 1, column=mark.column + 1)
        problem = e.problem or "invalid YAML"
        raise MalformedInputError(problem, context) from e
    except yaml.YAMLError as e:
        raise MalformedInputError(f"invalid YAML: {e}") from e


class _DocumentBuilder:
    """Builds one Document; tracks ids so duplicates are reported by path."""

    def __init__(self) -> None:
        self._ids: dict[str, str] = {}

    def build(self, data: dict[str, Any]) -> Document:
        page = data.get("page")
        if page is None:
            raise SchemaError("page", "missing required section 'page'")
        if not isinstance(page, dict):
            raise SchemaError("page", f"expected a mapping, got {_describe(page)}")

        fields = {k: v for k, v in page.items() if k not in _RESERVED_KEYS}
        if "children" in fields:
            raise SchemaError("page.children", "page children are declared under 'components'")
        self._claim_id(fields.get("id"), "page")
        entries = fields.pop("components", None)
        items = self._build_list(entries, "page.components", None) if entries is not None else ()

        fields["items"] = items
        try:
            root = PageNode.model_validate(fields)
        except ValidationError as e:
            raise _schema_error_from(e, "page") from e
        return Document(page=root)

    def _build_list(
        self,
        entries: Any,
        path: str,
        allowed: frozenset[str] | None,
    ) -> tuple[NodeBase, ...]:
        if not isinstance(entries, list):
            raise SchemaError(path, f"expected a list of components, got {_describe(entries)}")
        return tuple(
            self._build_entry(entry, f"{path}[{index}]", allowed)
            for index, entry in enumerate(entries)
        )

    def _build_entry(
        self,
        entry: Any,
        path: str,
        allowed: frozenset[str] | None,
    ) -> NodeBase:
        if not isinstance(entry, dict) or len(entry) != 1:
            raise SchemaError(path, "component entry must be a single-key mapping {Kind: {...}}")

        kind, body = next(iter(entry.items()))
        if kind not in COMPONENT_KINDS:
            raise SchemaError(path, f"unknown component kind '{kind}'")
        if allowed is not None and kind not in allowed:
            expected = ", ".join(sorted(allowed))
            raise SchemaError(path, f"'{kind}' is not allowed here (expected one of: {expected})")

        node_path = f"{path}.{kind}"
        if body is None:
            body = {}
        if not isinstance(body, dict):
            raise SchemaError(node_path, f"expected a mapping of fields, got {_describe(body)}")

        return self._build_node(kind, body, node_path)

    def _build_node(self, kind: str, body: dict[str, Any], path: str) -> NodeBase:
        fields = {k: v for k, v in body.items() if k not in _RESERVED_KEYS}
        self._claim_id(fields.get("id"), path)

        if kind == "Container":
            if "children" in fields:
                raise SchemaError(
                    f"{path}.children", "container children are declared under 'components'"
                )
            entries = fields.pop("components", None)
            if entries is not None:
                fields["items"] = self._build_list(entries, f"{path}.components", None)
        elif kind == "Form":
            for key in _CHILD_KEYS:
                if key in fields:
                    raise SchemaError(
                        f"{path}.{key}", "form children are declared under 'fields' and 'actions'"
                    )
            for key, allowed in (("fields", FORM_FIELD_KINDS), ("actions", FORM_ACTION_KINDS)):
                entries = fields.pop(key, None)
                if entries is not None:
                    fields[key] = self._build_list(entries, f"{path}.{key}", allowed)
        else:
            for key in _CHILD_KEYS:
                if key in fields:
                    raise SchemaError(f"{path}.{key}", f"{kind} cannot contain child components")

        try:
            return COMPONENT_KINDS[kind].model_validate(fields)
        except ValidationError as e:
            raise _schema_error_from(e, path) from e

    def _claim_id(self, node_id: Any, path: str) -> None:
        if node_id is None:
            return
        key = str(node_id)
        if key in self._ids:
            raise SchemaError(
                f"{path}.id", f"duplicate id '{key}' (first declared at {self._ids[key]})"
            )
        self._ids[key] = path


def _schema_error_from(exc: ValidationError, base_path: str) -> SchemaError:
    """Convert the first pydantic error into a SchemaError with a document path."""
    error = exc.errors()[0]
    loc = [str(part) for part in error.get("loc", ())]
    field = loc[0] if loc else ""
    path = ".".join([base_path, *loc]) if loc else base_path

    if error["type"] == "missing":
        reason = f"missing required field '{field}'"
    elif error["type"] == "enum":
        expected = error.get("ctx", {}).get("expected", "")
        reason = f"invalid value {error.get('input')!r} for '{field}' (expected {expected})"
    else:
        reason = f"invalid '{field}': {error['msg']}"
    return SchemaError(path, reason)


def _describe(value: Any) -> str:
    if value is None:
        return "nothing"
    return type(value).__name__
