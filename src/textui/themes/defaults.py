"""
Built-in theme for TextUI.

The default token set must supply every category the structural styles
reference (colors, spacing, typography, borderRadius, shadows), so resolution
never leaves a known variable undefined.
"""

from __future__ import annotations

from textui.specs.theme import ComponentStyleSet, ThemeTokenSet

# =============================================================================
# Tokens
# =============================================================================

DEFAULT_TOKENS = ThemeTokenSet(
    name="defaults",
    tokens={
        "colors": {
            "primary": {"value": "#3B82F6"},
            "secondary": {"value": "#6B7280"},
            "success": {"value": "#10B981"},
            "warning": {"value": "#F59E0B"},
            "error": {"value": "#EF4444"},
            "surface": {"value": "#1F2937"},
            "background": {"value": "#F9FAFB"},
            "border": {"value": "#4B5563"},
            "text": {
                "primary": {"value": "#F9FAFB"},
                "secondary": {"value": "#D1D5DB"},
                "muted": {"value": "#9CA3AF"},
                "dark": {"value": "#111827"},
            },
        },
        "spacing": {
            "xs": {"value": "0.5rem"},
            "sm": {"value": "0.75rem"},
            "md": {"value": "1rem"},
            "lg": {"value": "1.5rem"},
            "xl": {"value": "2rem"},
        },
        "typography": {
            "fontFamily": {"value": "system-ui, -apple-system, sans-serif"},
            "fontSize": {
                "xs": {"value": "0.75rem"},
                "sm": {"value": "0.875rem"},
                "base": {"value": "1rem"},
                "lg": {"value": "1.125rem"},
                "xl": {"value": "1.25rem"},
                "2xl": {"value": "1.5rem"},
                "3xl": {"value": "1.875rem"},
                "4xl": {"value": "2.25rem"},
            },
            "fontWeight": {
                "normal": {"value": "400"},
                "medium": {"value": "500"},
                "semibold": {"value": "600"},
                "bold": {"value": "700"},
            },
        },
        "borderRadius": {
            "sm": {"value": "0.25rem"},
            "md": {"value": "0.375rem"},
            "lg": {"value": "0.5rem"},
            "xl": {"value": "0.75rem"},
        },
        "shadows": {
            "sm": {"value": "0 1px 2px 0 rgba(0, 0, 0, 0.05)"},
            "md": {
                "value": "0 4px 6px -1px rgba(0, 0, 0, 0.1), 0 2px 4px -1px rgba(0, 0, 0, 0.06)"
            },
            "lg": {
                "value": "0 10px 15px -3px rgba(0, 0, 0, 0.1), 0 4px 6px -2px rgba(0, 0, 0, 0.05)"
            },
        },
    },
)

# Categories the structural stylesheet depends on
REQUIRED_TOKEN_CATEGORIES = ("colors", "spacing", "typography", "borderRadius", "shadows")


# =============================================================================
# Component styles
# =============================================================================


def _button(background: str) -> dict[str, str]:
    return {
        "backgroundColor": background,
        "color": "var(--colors-text-primary)",
        "padding": "var(--spacing-sm) var(--spacing-md)",
        "borderRadius": "var(--borderRadius-md)",
        "border": "none",
        "cursor": "pointer",
        "fontSize": "var(--typography-fontSize-base)",
        "fontWeight": "var(--typography-fontWeight-medium)",
        "transition": "all 0.2s ease-in-out",
    }


def _alert(tint: str, accent: str) -> dict[str, str]:
    return {
        "backgroundColor": tint,
        "borderColor": accent,
        "color": accent,
        "borderWidth": "1px",
        "borderStyle": "solid",
        "borderRadius": "var(--borderRadius-lg)",
        "padding": "var(--spacing-md)",
        "fontSize": "var(--typography-fontSize-base)",
    }


DEFAULT_COMPONENT_STYLES = ComponentStyleSet(
    styles={
        "button": {
            "primary": _button("var(--colors-primary)"),
            "secondary": _button("var(--colors-secondary)"),
            "submit": _button("var(--colors-success)"),
        },
        "alert": {
            "info": _alert("rgba(59, 130, 246, 0.1)", "var(--colors-primary)"),
            "success": _alert("rgba(34, 197, 94, 0.1)", "var(--colors-success)"),
            "warning": _alert("rgba(245, 158, 11, 0.1)", "var(--colors-warning)"),
            "error": _alert("rgba(239, 68, 68, 0.1)", "var(--colors-error)"),
        },
    }
)
