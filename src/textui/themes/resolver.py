"""
Theme resolver for TextUI.

Resolves the final variable namespace by merging:
1. Built-in default tokens
2. User theme tokens (per leaf, highest token precedence)
3. Component styles (always appended last, in their own namespace)

A broken or missing user theme never blocks resolution: the resolver falls
back to the defaults and attaches a single ThemeLoadError diagnostic.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from textui.core.errors import ThemeLoadError
from textui.specs.theme import ComponentStyleSet, ResolvedTheme, ThemeTokenSet, UserTheme

from .defaults import DEFAULT_COMPONENT_STYLES, DEFAULT_TOKENS
from .loader import ReadText, load_theme_file, parse_theme_source

logger = logging.getLogger(__name__)

COMPONENT_PREFIX = "component"


def resolve(
    defaults: ThemeTokenSet,
    user_theme: ThemeTokenSet | None = None,
    component_styles: ComponentStyleSet | None = None,
    diagnostics: tuple[ThemeLoadError, ...] = (),
) -> ResolvedTheme:
    """
    Merge token layers and component styles into a ResolvedTheme.

    Args:
        defaults: Built-in tokens, always present
        user_theme: Optional user tokens, overlaid key by key
        component_styles: Component-level styles, appended after all tokens
        diagnostics: Loading problems to carry along with the result

    Returns:
        Flat ResolvedTheme with token keys first, then component keys
    """
    variables = flatten_tokens(defaults.tokens)

    if user_theme is not None:
        # Overwrite-if-present, keep-if-absent; each leaf resolves on its own
        for key, value in flatten_tokens(user_theme.tokens).items():
            variables[key] = value

    components: dict[tuple[str, str], dict[str, str]] = {}
    if component_styles is not None:
        for key, value in flatten_tokens(component_styles.styles, COMPONENT_PREFIX).items():
            variables[key] = value
            parts = key.split(".")
            # component.<kind>.<variant>.<property>; deeper keys get no class rule
            if len(parts) == 4:
                components.setdefault((parts[1], parts[2]), {})[parts[3]] = key

    return ResolvedTheme(variables=variables, components=components, diagnostics=diagnostics)


def flatten_tokens(tree: dict[str, Any], prefix: str = "") -> dict[str, str]:
    """
    Flatten a nested token tree into dotted keys.

    ``{"value": x}`` mappings and bare scalars are leaves; ``None`` leaves
    are skipped so a lower layer keeps its value.

    Example:
        >>> flatten_tokens({"colors": {"primary": {"value": "#3B82F6"}}})
        {'colors.primary': '#3B82F6'}
    """
    result: dict[str, str] = {}
    for name, value in tree.items():
        key = f"{prefix}.{name}" if prefix else str(name)
        if isinstance(value, dict):
            if "value" in value:
                leaf = value["value"]
                if leaf is not None:
                    result[key] = _stringify(leaf)
            else:
                result.update(flatten_tokens(value, key))
        elif value is not None:
            result[key] = _stringify(value)
    return result


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# =============================================================================
# Fallback-aware entry points
# =============================================================================


def resolve_user_theme(
    load: Callable[[], UserTheme] | None,
    defaults: ThemeTokenSet = DEFAULT_TOKENS,
    component_styles: ComponentStyleSet = DEFAULT_COMPONENT_STYLES,
) -> ResolvedTheme:
    """
    Load the user theme (if any) and resolve it over the defaults.

    Args:
        load: Callable returning the UserTheme, or None when no theme is configured

    Returns:
        ResolvedTheme; when loading fails it equals the defaults-only result
        plus exactly one ThemeLoadError diagnostic
    """
    if load is None:
        return resolve(defaults, None, component_styles)

    try:
        user = load()
    except ThemeLoadError as e:
        logger.warning("%s; using default theme", e)
        return resolve(defaults, None, component_styles, diagnostics=(e,))

    return resolve(defaults, user.tokens, component_styles.overlay(user.components))


def resolve_theme_file(
    path: Path | None,
    read_text: ReadText | None = None,
    defaults: ThemeTokenSet = DEFAULT_TOKENS,
    component_styles: ComponentStyleSet = DEFAULT_COMPONENT_STYLES,
) -> ResolvedTheme:
    """Resolve the theme stored at ``path`` (None means defaults only)."""
    if path is None:
        return resolve_user_theme(None, defaults, component_styles)
    return resolve_user_theme(
        lambda: load_theme_file(path, read_text), defaults, component_styles
    )


def resolve_theme_text(
    content: str | None,
    source: str = "<theme>",
    defaults: ThemeTokenSet = DEFAULT_TOKENS,
    component_styles: ComponentStyleSet = DEFAULT_COMPONENT_STYLES,
) -> ResolvedTheme:
    """Resolve theme YAML text (None means defaults only)."""
    if content is None:
        return resolve_user_theme(None, defaults, component_styles)
    return resolve_user_theme(
        lambda: parse_theme_source(content, source), defaults, component_styles
    )
