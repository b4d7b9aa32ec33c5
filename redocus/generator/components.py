"""Markdown extension that swaps rendered tags for component overrides."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from markdown.extensions import Extension
from markdown.serializers import to_html_string
from markdown.treeprocessors import Treeprocessor
from markdown.util import HTML_PLACEHOLDER_RE
from markupsafe import Markup

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

Renderer = cabc.Callable[[Markup, dict[str, str]], typ.Any]

VOID_TAGS = frozenset({"br", "hr", "img", "input", "link", "meta", "source", "wbr"})


class ComponentOverrideExtension(Extension):
    """Render selected tags through user-supplied renderers.

    ``components`` maps a tag name (``"h1"``, ``"a"``, ``"pre"``) to a
    callable receiving the element's inner HTML as :class:`~markupsafe.Markup`
    and its attributes as a plain dict. Whatever the callable returns is
    emitted verbatim in place of the original element.
    """

    def __init__(self, components: cabc.Mapping[str, Renderer]) -> None:
        super().__init__()
        self.components = dict(components)

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the override treeprocessor after inline processing."""
        processor = ComponentOverrideTreeprocessor(md, self.components)
        md.treeprocessors.register(processor, "redocus_component_overrides", 5)


class ComponentOverrideTreeprocessor(Treeprocessor):
    """Replace overridden elements with stashed renderer output."""

    def __init__(self, md: Markdown, components: dict[str, Renderer]) -> None:
        super().__init__(md)
        self.components = components

    def run(self, root: Element) -> Element:
        """Apply overrides bottom-up so nested overrides compose."""
        if self.components:
            self._apply(root)
        return root

    def _apply(self, parent: Element) -> None:
        # Walk backwards: replacing a child only touches earlier siblings' tails.
        for index in range(len(parent) - 1, -1, -1):
            child = parent[index]
            self._apply(child)
            renderer = self.components.get(child.tag)
            if renderer is not None and not _is_stashed_block(child):
                self._replace(parent, index, child, renderer)

    def _replace(
        self, parent: Element, index: int, child: Element, renderer: Renderer
    ) -> None:
        tail = child.tail or ""
        rendered = renderer(_inner_html(child), dict(child.attrib))
        placeholder = self.md.htmlStash.store(str(rendered or ""))
        parent.remove(child)
        if index == 0:
            parent.text = f"{parent.text or ''}{placeholder}{tail}"
        else:
            sibling = parent[index - 1]
            sibling.tail = f"{sibling.tail or ''}{placeholder}{tail}"


def _is_stashed_block(element: Element) -> bool:
    """Return True for the paragraph wrapping a stashed raw HTML block."""
    if len(element) or element.tag != "p":
        return False
    return bool(HTML_PLACEHOLDER_RE.fullmatch((element.text or "").strip()))


def _inner_html(element: Element) -> Markup:
    """Serialize the children of ``element`` without its own tag."""
    if element.tag in VOID_TAGS:
        return Markup("")
    tail, element.tail = element.tail, None
    try:
        html = to_html_string(element)
    finally:
        element.tail = tail
    start = html.find(">") + 1
    end = html.rfind("</")
    if end < start:
        return Markup("")
    return Markup(html[start:end])


__all__ = [
    "ComponentOverrideExtension",
    "ComponentOverrideTreeprocessor",
    "Renderer",
    "VOID_TAGS",
]
