"""
Element tree over a rendered fragment.

The source-code exports (React, Pug) are projections of the same markup the
live surface and the HTML export receive, so they read the fragment back
into a small tree instead of re-dispatching on component kinds.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html.parser import HTMLParser

from textui.core.errors import RenderInconsistencyError

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)


@dataclass
class FragmentElement:
    """One element of a fragment; children are elements or text runs."""

    tag: str
    attrs: list[tuple[str, str | None]] = field(default_factory=list)
    children: list[FragmentElement | str] = field(default_factory=list)

    @property
    def elements(self) -> list[FragmentElement]:
        return [c for c in self.children if isinstance(c, FragmentElement)]

    def find_all(self, tag: str) -> list[FragmentElement]:
        """Recursively find all descendants with the given tag."""
        result: list[FragmentElement] = []
        for child in self.elements:
            if child.tag == tag:
                result.append(child)
            result.extend(child.find_all(tag))
        return result

    def has_attr(self, name: str) -> bool:
        return any(key == name for key, _ in self.attrs)

    def get_attr(self, name: str, default: str = "") -> str:
        for key, value in self.attrs:
            if key == name:
                return value or default
        return default


class _TreeBuilder(HTMLParser):
    """Build a FragmentElement tree from rendered markup."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.root = FragmentElement(tag="fragment")
        self._stack: list[FragmentElement] = [self.root]

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        elem = FragmentElement(tag=tag, attrs=list(attrs))
        self._stack[-1].children.append(elem)
        if tag not in VOID_ELEMENTS:
            self._stack.append(elem)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._stack[-1].children.append(FragmentElement(tag=tag, attrs=list(attrs)))

    def handle_endtag(self, tag: str) -> None:
        if len(self._stack) > 1 and self._stack[-1].tag == tag:
            self._stack.pop()
        elif tag not in VOID_ELEMENTS:
            raise RenderInconsistencyError(f"unexpected </{tag}> in rendered fragment")

    def handle_data(self, data: str) -> None:
        # Whitespace between block elements is template layout, not content
        if data.strip():
            self._stack[-1].children.append(data)

    @property
    def open_tags(self) -> list[str]:
        return [elem.tag for elem in self._stack[1:]]


def parse_fragment(markup: str) -> FragmentElement:
    """
    Parse fragment markup into a tree rooted at a synthetic ``fragment`` node.

    Raises:
        RenderInconsistencyError: If the markup leaves elements unclosed
    """
    builder = _TreeBuilder()
    builder.feed(markup)
    builder.close()
    if builder.open_tags:
        raise RenderInconsistencyError(
            f"rendered fragment leaves <{builder.open_tags[-1]}> unclosed"
        )
    return builder.root
