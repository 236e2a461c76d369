"""Shared pytest fixtures for TextUI tests."""

from pathlib import Path

import pytest

from textui.core.parser import parse
from textui.specs.document import Document
from textui.specs.theme import ResolvedTheme
from textui.themes.defaults import DEFAULT_COMPONENT_STYLES, DEFAULT_TOKENS
from textui.themes.resolver import resolve

SAMPLE_DOCUMENT = """\
page:
  components:
    - Text:
        variant: h1
        value: "Test UI"
    - Button:
        kind: primary
        label: "Primary Button"
"""

SIGNUP_DOCUMENT = """\
page:
  id: signup
  title: Sign up
  layout: vertical
  components:
    - Text: {variant: h2, value: "Create your account"}
    - Alert: {variant: info, title: Note, message: "All fields are required"}
    - Form:
        id: signup-form
        fields:
          - Input: {label: Email, name: email, type: email, required: true}
          - Input: {label: About, name: about, type: multiline, placeholder: "Tell us"}
          - Checkbox: {label: "Accept terms", name: terms}
          - Radio:
              label: Plan
              name: plan
              options:
                - {label: Free, value: free}
                - {label: Pro, value: pro}
          - Select:
              label: Country
              name: country
              placeholder: Choose one
              options:
                - {label: Japan, value: jp}
                - {label: France, value: fr}
        actions:
          - Button: {kind: submit, label: Register, submit: true}
          - Button: {kind: secondary, label: Cancel}
    - Divider: {}
    - Container:
        layout: horizontal
        components:
          - Text: {variant: caption, value: "Footer"}
"""

RED_PRIMARY_THEME = """\
theme:
  name: Red
  version: "1.0.0"
  tokens:
    colors:
      primary:
        value: "#FF0000"
"""


@pytest.fixture
def sample_source() -> str:
    return SAMPLE_DOCUMENT


@pytest.fixture
def sample_document() -> Document:
    return parse(SAMPLE_DOCUMENT)


@pytest.fixture
def signup_source() -> str:
    return SIGNUP_DOCUMENT


@pytest.fixture
def signup_document() -> Document:
    return parse(SIGNUP_DOCUMENT)


@pytest.fixture
def red_theme_source() -> str:
    return RED_PRIMARY_THEME


@pytest.fixture
def default_theme() -> ResolvedTheme:
    """Theme resolved from the built-in defaults only."""
    return resolve(DEFAULT_TOKENS, None, DEFAULT_COMPONENT_STYLES)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Temporary project directory with the sample document."""
    (tmp_path / "app.tui.yml").write_text(SAMPLE_DOCUMENT, encoding="utf-8")
    return tmp_path
