"""
Theme file loading for TextUI.

Reads ``textui-theme.yml`` style sources into a UserTheme. Every failure is
reported as a ThemeLoadError so callers can fall back to the built-in theme.

Default location: {project_root}/textui-theme.yml
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml

from textui.core.errors import ThemeLoadError
from textui.specs.theme import ComponentStyleSet, ThemeTokenSet, UserTheme

logger = logging.getLogger(__name__)

THEME_FILE = "textui-theme.yml"

_METADATA_KEYS = ("name", "version", "description", "author")
# Token categories that would collide with the component variable namespace
_RESERVED_CATEGORIES = frozenset({"component"})

ReadText = Callable[[Path], str]


# =============================================================================
# Path helpers
# =============================================================================


def get_theme_path(project_root: Path, file_name: str = THEME_FILE) -> Path:
    """Get the theme file path for a project."""
    return project_root / file_name


# =============================================================================
# Loading
# =============================================================================


def _read_utf8(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def load_theme_file(path: Path, read_text: ReadText | None = None) -> UserTheme:
    """
    Load a theme file.

    Args:
        path: Theme file location
        read_text: File-read capability; defaults to reading UTF-8 from disk

    Returns:
        Loaded UserTheme

    Raises:
        ThemeLoadError: If the file is missing, unreadable, not UTF-8 or invalid
    """
    reader = read_text or _read_utf8
    source = str(path)
    try:
        content = reader(path)
    except FileNotFoundError as e:
        raise ThemeLoadError(source, "file not found") from e
    except OSError as e:
        raise ThemeLoadError(source, f"cannot read file: {e}") from e
    except UnicodeDecodeError as e:
        raise ThemeLoadError(source, "not valid UTF-8") from e
    return parse_theme_source(content, source=source)


def parse_theme_source(content: str, source: str = "<theme>") -> UserTheme:
    """
    Parse theme YAML text.

    Raises:
        ThemeLoadError: If the text is not a valid theme document
    """
    try:
        data = yaml.safe_load(content)
    except yaml.MarkedYAMLError as e:
        where = f" at line {e.problem_mark.line + 1}" if e.problem_mark else ""
        raise ThemeLoadError(source, f"invalid YAML{where}: {e.problem}") from e
    except yaml.YAMLError as e:
        raise ThemeLoadError(source, f"invalid YAML: {e}") from e

    if not data:
        raise ThemeLoadError(source, "theme file is empty")
    if not isinstance(data, dict) or not isinstance(data.get("theme"), dict):
        raise ThemeLoadError(source, "missing 'theme' mapping at the top level")

    theme = data["theme"]
    metadata = {key: theme[key] for key in _METADATA_KEYS if key in theme}

    tokens = None
    if "tokens" in theme and theme["tokens"] is not None:
        token_tree = theme["tokens"]
        if not isinstance(token_tree, dict):
            raise ThemeLoadError(source, "'theme.tokens' must be a mapping")
        _check_token_tree(token_tree, "theme.tokens", source)
        reserved = _RESERVED_CATEGORIES.intersection(token_tree)
        if reserved:
            raise ThemeLoadError(source, f"token category '{sorted(reserved)[0]}' is reserved")
        tokens = ThemeTokenSet(
            name=str(metadata.get("name", source)), tokens=token_tree, metadata=metadata
        )

    components = None
    if "components" in theme and theme["components"] is not None:
        styles = theme["components"]
        _check_component_styles(styles, source)
        components = ComponentStyleSet(styles=styles)

    logger.debug("Loaded theme %s (%s)", source, metadata.get("name", "unnamed"))
    return UserTheme(source=source, tokens=tokens, components=components)


def _check_token_tree(tree: dict[str, Any], path: str, source: str) -> None:
    for key, value in tree.items():
        if isinstance(value, dict):
            if "value" in value:
                _check_scalar(value["value"], f"{path}.{key}.value", source)
            else:
                _check_token_tree(value, f"{path}.{key}", source)
        else:
            _check_scalar(value, f"{path}.{key}", source)


def _check_component_styles(styles: Any, source: str) -> None:
    if not isinstance(styles, dict):
        raise ThemeLoadError(source, "'theme.components' must be a mapping")
    for kind, variants in styles.items():
        if not isinstance(variants, dict):
            raise ThemeLoadError(source, f"'theme.components.{kind}' must map variants to styles")
        for variant, properties in variants.items():
            path = f"theme.components.{kind}.{variant}"
            if not isinstance(properties, dict):
                raise ThemeLoadError(source, f"'{path}' must map CSS properties to values")
            _check_token_tree(properties, path, source)


def _check_scalar(value: Any, path: str, source: str) -> None:
    if isinstance(value, list | dict):
        raise ThemeLoadError(source, f"'{path}' must be a scalar value")
