"""
Project configuration for TextUI.

Settings live in an optional ``textui.toml`` next to the documents:

    [preview]
    host = "127.0.0.1"
    port = 5173
    poll_interval = 0.5
    debounce = 0.3

    [theme]
    file = "textui-theme.yml"

    [export]
    title = "TextUI Export"
    output_dir = "exports"
    format = "html"          # html, react or pug

A missing file means defaults; a malformed one raises ConfigError.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from textui.core.errors import ConfigError
from textui.surfaces.export import DEFAULT_EXPORT_TITLE, ExportFormat
from textui.themes.loader import THEME_FILE

CONFIG_FILE = "textui.toml"


class PreviewSettings(BaseModel):
    """Live preview server and watcher settings."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    host: str = "127.0.0.1"
    port: int = Field(default=5173, ge=0, le=65535)
    poll_interval: float = Field(default=0.5, gt=0, description="File poll period (seconds)")
    debounce: float = Field(default=0.3, ge=0, description="Quiet time before re-render")


class ThemeSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    file: str = Field(default=THEME_FILE, description="Theme file, relative to the project")


class ExportSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = DEFAULT_EXPORT_TITLE
    output_dir: str = Field(default=".", description="Where surface-initiated exports go")
    format: ExportFormat = Field(default=ExportFormat.HTML, description="Export artifact format")


class TextUISettings(BaseModel):
    """All TextUI settings; every field has a default."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    project_root: Path = Field(default_factory=Path.cwd)
    preview: PreviewSettings = Field(default_factory=PreviewSettings)
    theme: ThemeSettings = Field(default_factory=ThemeSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)

    @property
    def theme_path(self) -> Path:
        return self.project_root / self.theme.file

    def export_path_for(self, document_path: Path, fmt: ExportFormat | None = None) -> Path:
        """Export location for a document: ``<output_dir>/<stem><format extension>``."""
        extension = (fmt or self.export.format).extension
        return self.project_root / self.export.output_dir / f"{document_path.stem}{extension}"


def load_settings(project_root: Path) -> TextUISettings:
    """
    Load settings from ``{project_root}/textui.toml``.

    Raises:
        ConfigError: If the file exists but is not valid TOML or has bad values
    """
    path = project_root / CONFIG_FILE
    if not path.exists():
        return TextUISettings(project_root=project_root)

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: invalid TOML: {e}") from e
    except OSError as e:
        raise ConfigError(f"{path}: cannot read file: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"{path}: not valid UTF-8") from e

    try:
        return TextUISettings(
            project_root=project_root,
            preview=data.get("preview", {}),
            theme=data.get("theme", {}),
            export=data.get("export", {}),
        )
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ConfigError(f"{path}: {location}: {first['msg']}") from e
