"""
Theme specification types.

Defines token sets, component style sets and the resolved, flattened theme
consumed by the variable emitter and the tree renderer.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from textui.core.errors import ThemeLoadError

# =============================================================================
# Token sources
# =============================================================================


class ThemeTokenSet(BaseModel):
    """
    Named, nested design tokens.

    Leaves are either bare scalars or ``{"value": ...}`` mappings.

    Example:
        ThemeTokenSet(
            name="brand",
            tokens={
                "colors": {"primary": {"value": "#FF0000"}},
                "spacing": {"md": "1rem"},
            },
        )
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Token set name (e.g. 'defaults', file name)")
    tokens: dict[str, Any] = Field(default_factory=dict, description="Nested token tree")
    metadata: dict[str, Any] = Field(
        default_factory=dict, description="Theme metadata (version, author, ...)"
    )


class ComponentStyleSet(BaseModel):
    """
    CSS properties per component kind and variant.

    Example:
        ComponentStyleSet(
            styles={
                "button": {
                    "primary": {"backgroundColor": "var(--colors-primary)"},
                },
            }
        )
    """

    model_config = ConfigDict(frozen=True)

    styles: dict[str, dict[str, Any]] = Field(
        default_factory=dict, description="kind -> variant -> property -> value"
    )

    def overlay(self, other: ComponentStyleSet | None) -> ComponentStyleSet:
        """Return a copy with ``other`` applied leaf-by-leaf on top."""
        if other is None:
            return self
        return ComponentStyleSet(styles=_deep_merge(self.styles, other.styles))


class UserTheme(BaseModel):
    """A successfully loaded theme file."""

    model_config = ConfigDict(frozen=True)

    source: str = Field(description="Where the theme came from (path or label)")
    tokens: ThemeTokenSet | None = None
    components: ComponentStyleSet | None = None


# =============================================================================
# Resolved theme
# =============================================================================


class ResolvedTheme(BaseModel):
    """
    Flat, precedence-merged variable namespace.

    ``variables`` maps dotted keys (``colors.primary``,
    ``component.button.primary.backgroundColor``) to string values in
    insertion order: token-derived keys first, component keys after.
    ``components`` indexes the component keys by ``(kind, variant)``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    variables: dict[str, str] = Field(default_factory=dict)
    components: dict[tuple[str, str], dict[str, str]] = Field(
        default_factory=dict, description="(kind, variant) -> property -> variable key"
    )
    diagnostics: tuple[ThemeLoadError, ...] = Field(
        default=(), description="Non-fatal theme loading problems"
    )

    def get(self, key: str) -> str | None:
        return self.variables.get(key)

    def fingerprint(self) -> str:
        """Stable content hash, used as a render cache key."""
        payload = json.dumps(list(self.variables.items()), ensure_ascii=False)
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if _is_null_leaf(value):
            continue
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _is_null_leaf(value: Any) -> bool:
    """Null leaves (bare or ``{value: null}``) keep the lower layer's value."""
    if isinstance(value, dict) and "value" in value:
        return value["value"] is None
    return value is None
