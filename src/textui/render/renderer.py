"""
Tree renderer for TextUI documents.

Walks a Document depth-first and renders one element per node through a
fixed Jinja2 template per component kind. The result is a pure function of
(Document, ResolvedTheme): no files are read besides the packaged templates,
and no global state is mutated.
"""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup
from pydantic import BaseModel, ConfigDict, Field

from textui.core.errors import RenderInconsistencyError
from textui.specs.document import Document, FormNode, NodeBase, TextVariant
from textui.specs.theme import ResolvedTheme
from textui.themes.css_generator import component_class, css_variable_name

from .styles import CLASS_TOKEN_REFERENCES, VAR_REFERENCE

logger = logging.getLogger(__name__)

# Template directory
TEMPLATES_DIR = Path(__file__).parent / "templates"

# Component kind -> template
COMPONENT_TEMPLATES: dict[str, str] = {
    "Page": "components/page.html",
    "Text": "components/text.html",
    "Button": "components/button.html",
    "Input": "components/input.html",
    "Checkbox": "components/checkbox.html",
    "Radio": "components/radio.html",
    "Select": "components/select.html",
    "Divider": "components/divider.html",
    "Alert": "components/alert.html",
    "Container": "components/container.html",
    "Form": "components/form.html",
}

TEXT_TAGS: dict[TextVariant, str] = {
    TextVariant.H1: "h1",
    TextVariant.H2: "h2",
    TextVariant.H3: "h3",
    TextVariant.P: "p",
    TextVariant.SMALL: "small",
    TextVariant.CAPTION: "span",
}

# Kinds whose id goes on the form control rather than the wrapper
_FIELD_KINDS = frozenset({"Input", "Checkbox", "Select"})


class RenderedFragment(BaseModel):
    """
    Markup subtree for one (Document, ResolvedTheme) pair.

    ``variables`` lists the CSS custom properties the markup depends on, in
    resolved-theme order, for minimal-CSS emission.
    """

    model_config = ConfigDict(frozen=True)

    markup: str = Field(description="HTML fragment")
    variables: tuple[str, ...] = Field(default=(), description="Referenced CSS variables")


def create_jinja_env() -> Environment:
    """Create the Jinja2 environment for component templates."""
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
    )


# Module-level singleton
_env: Environment | None = None


def get_jinja_env() -> Environment:
    """Get the shared Jinja2 environment (lazy singleton)."""
    global _env
    if _env is None:
        _env = create_jinja_env()
    return _env


def render(doc: Document, resolved: ResolvedTheme) -> RenderedFragment:
    """
    Render a document to an HTML fragment.

    Args:
        doc: Parsed document
        resolved: Resolved theme the fragment will be styled with

    Returns:
        RenderedFragment with markup and referenced variable names

    Raises:
        RenderInconsistencyError: If the tree breaks an invariant the parser
            should have enforced
    """
    renderer = _TreeRenderer(get_jinja_env(), resolved)
    markup = renderer.render_node(doc.page, "page")
    variables = renderer.referenced_variables()
    logger.debug("Rendered fragment (%d chars, %d variables)", len(markup), len(variables))
    return RenderedFragment(markup=str(markup), variables=variables)


class _TreeRenderer:
    """Single-use helper holding the per-render class and variable bookkeeping."""

    def __init__(self, env: Environment, resolved: ResolvedTheme):
        self.env = env
        self.resolved = resolved
        self._classes: dict[str, None] = {}
        self._components: dict[tuple[str, str], None] = {}

    def render_node(self, node: NodeBase, path: str) -> Markup:
        kind = getattr(node, "component", None)
        template_name = COMPONENT_TEMPLATES.get(kind) if isinstance(kind, str) else None
        if template_name is None:
            raise RenderInconsistencyError(f"no template for node {kind!r} at {path}")
        if node.children and not node.is_container:
            raise RenderInconsistencyError(f"leaf node {kind!r} at {path} has children")

        classes = self._classes_for(kind, node.style_variant)
        context = {
            "node": node,
            "attrs": _attributes(classes, None if kind in _FIELD_KINDS else node.id),
            "field_id": node.id or f"textui-{getattr(node, 'name', kind.lower())}",
        }

        if isinstance(node, FormNode):
            context["fields"] = self._render_children(node.fields, path, "fields")
            context["actions"] = self._render_children(node.actions, path, "actions")
        elif node.is_container:
            context["children"] = self._render_children(node.children, path, "components")
        if kind == "Text":
            context["tag"] = TEXT_TAGS[node.variant]

        return Markup(self.env.get_template(template_name).render(**context))

    def _render_children(self, nodes: tuple[NodeBase, ...], path: str, field: str) -> Markup:
        rendered = [
            self.render_node(child, f"{path}.{field}[{index}]")
            for index, child in enumerate(nodes)
        ]
        return Markup("\n").join(rendered)

    def _classes_for(self, kind: str, variant: str | None) -> list[str]:
        classes = [f"textui-{kind.lower()}"]
        if variant is not None:
            classes.append(component_class(kind, variant))
            self._components[(kind.lower(), variant)] = None
        for cls in classes:
            self._classes[cls] = None
        return classes

    def referenced_variables(self) -> tuple[str, ...]:
        """Variables reachable from the classes used, in resolved-theme order."""
        by_name = {css_variable_name(key): key for key in self.resolved.variables}

        pending: list[str] = []
        for cls in self._classes:
            pending.extend(CLASS_TOKEN_REFERENCES.get(cls, ()))
        for component in self._components:
            for key in self.resolved.components.get(component, {}).values():
                pending.append(css_variable_name(key))

        seen: set[str] = set()
        while pending:
            name = pending.pop()
            if name in seen or name not in by_name:
                continue
            seen.add(name)
            # Follow var() chains (component value -> token)
            pending.extend(VAR_REFERENCE.findall(self.resolved.variables[by_name[name]]))

        return tuple(name for name in by_name if name in seen)


def _attributes(classes: list[str], element_id: str | None) -> Markup:
    attrs = Markup(' class="{}"').format(" ".join(classes))
    if element_id:
        attrs += Markup(' id="{}"').format(element_id)
    return attrs
