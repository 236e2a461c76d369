"""Tests for the textui command line."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from textui._version import __version__
from textui.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    root = logging.getLogger("textui")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)


def _invoke(project: Path, *args: str):
    return runner.invoke(app, ["--project", str(project), *args])


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"textui {__version__}" in result.output


class TestValidate:
    def test_valid_document(self, project_dir: Path):
        result = _invoke(project_dir, "validate", str(project_dir / "app.tui.yml"))
        assert result.exit_code == 0
        assert "OK (2 components)" in result.output

    def test_schema_error(self, tmp_path: Path):
        doc = tmp_path / "bad.yml"
        doc.write_text("page:\n  components:\n    - Carousel: {}\n", encoding="utf-8")
        result = _invoke(tmp_path, "validate", str(doc))
        assert result.exit_code == 1
        assert "page.components[0]: unknown component kind 'Carousel'" in result.output

    def test_missing_file(self, tmp_path: Path):
        result = _invoke(tmp_path, "validate", str(tmp_path / "nope.yml"))
        assert result.exit_code == 1
        assert "cannot read" in result.output


class TestRender:
    def test_prints_fragment(self, project_dir: Path):
        result = _invoke(project_dir, "render", str(project_dir / "app.tui.yml"))
        assert result.exit_code == 0
        assert ">Test UI</h1>" in result.output
        assert "textui-button-primary" in result.output

    def test_malformed_document(self, tmp_path: Path):
        doc = tmp_path / "bad.yml"
        doc.write_text("page: [\n", encoding="utf-8")
        result = _invoke(tmp_path, "render", str(doc))
        assert result.exit_code == 1

    @pytest.mark.parametrize("command", ["validate", "render"])
    def test_non_utf8_document(self, tmp_path: Path, command):
        doc = tmp_path / "latin1.yml"
        doc.write_bytes("page:\n  title: Café\n".encode("latin-1"))
        result = _invoke(tmp_path, command, str(doc))
        assert result.exit_code == 1
        assert "not valid UTF-8" in result.output


class TestCss:
    def test_default_theme(self, tmp_path: Path):
        result = _invoke(tmp_path, "css")
        assert result.exit_code == 0
        assert "--colors-primary: #3B82F6;" in result.output
        assert ".textui-button-primary {" in result.output

    def test_project_theme_is_picked_up(self, project_dir: Path, red_theme_source):
        (project_dir / "textui-theme.yml").write_text(red_theme_source, encoding="utf-8")
        result = _invoke(project_dir, "css")
        assert "--colors-primary: #FF0000;" in result.output

    def test_explicit_broken_theme_falls_back(self, tmp_path: Path):
        theme = tmp_path / "broken.yml"
        theme.write_text("theme: [", encoding="utf-8")
        result = _invoke(tmp_path, "css", "--theme", str(theme))
        assert result.exit_code == 0
        assert "--colors-primary: #3B82F6;" in result.output

    def test_non_utf8_theme_falls_back(self, tmp_path: Path):
        theme = tmp_path / "latin1-theme.yml"
        theme.write_bytes("theme:\n  name: Café\n".encode("latin-1"))
        result = _invoke(tmp_path, "css", "--theme", str(theme))
        assert result.exit_code == 0
        assert "--colors-primary: #3B82F6;" in result.output

    def test_minimal(self, project_dir: Path):
        result = _invoke(project_dir, "css", "--minimal", str(project_dir / "app.tui.yml"))
        assert result.exit_code == 0
        assert "--component-button-primary-backgroundColor" in result.output
        assert "--component-alert-error-color" not in result.output


class TestExport:
    def test_writes_standalone_file(self, project_dir: Path):
        out = project_dir / "out" / "app.html"
        result = _invoke(project_dir, "export", str(project_dir / "app.tui.yml"), "-o", str(out))
        assert result.exit_code == 0
        html = out.read_text(encoding="utf-8")
        assert ">Primary Button</button>" in html
        assert "<script" not in html

    def test_default_location_from_settings(self, project_dir: Path):
        (project_dir / "textui.toml").write_text(
            '[export]\noutput_dir = "dist"\ntitle = "Brand"\n', encoding="utf-8"
        )
        result = _invoke(project_dir, "export", str(project_dir / "app.tui.yml"))
        assert result.exit_code == 0
        html = (project_dir / "dist" / "app.tui.html").read_text(encoding="utf-8")
        assert "<title>Brand</title>" in html

    @pytest.mark.parametrize(
        ("fmt", "extension", "marker"),
        [("react", ".tsx", 'import React from "react";'), ("pug", ".pug", "doctype html")],
    )
    def test_source_formats(self, project_dir: Path, fmt, extension, marker):
        result = _invoke(project_dir, "export", str(project_dir / "app.tui.yml"), "--format", fmt)
        assert result.exit_code == 0
        text = (project_dir / f"app.tui{extension}").read_text(encoding="utf-8")
        assert marker in text
        assert "Primary Button" in text

    def test_format_from_settings(self, project_dir: Path):
        (project_dir / "textui.toml").write_text('[export]\nformat = "pug"\n', encoding="utf-8")
        result = _invoke(project_dir, "export", str(project_dir / "app.tui.yml"))
        assert result.exit_code == 0
        assert (project_dir / "app.tui.pug").exists()

    def test_unknown_format(self, project_dir: Path):
        result = _invoke(project_dir, "export", str(project_dir / "app.tui.yml"), "-f", "vue")
        assert result.exit_code == 2

    def test_refuses_invalid_document(self, tmp_path: Path):
        doc = tmp_path / "bad.yml"
        doc.write_text("page:\n  components:\n    - Button: {kind: primary}\n", encoding="utf-8")
        out = tmp_path / "bad.html"
        result = _invoke(tmp_path, "export", str(doc), "-o", str(out))
        assert result.exit_code == 1
        assert "missing required field 'label'" in result.output
        assert not out.exists()


class TestConfigErrors:
    def test_malformed_config(self, tmp_path: Path):
        (tmp_path / "textui.toml").write_text("[preview\n", encoding="utf-8")
        result = _invoke(tmp_path, "css")
        assert result.exit_code == 1
        assert "invalid TOML" in result.output
