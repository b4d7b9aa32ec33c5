"""Per-page render composition.

For every page the composer builds two nested :class:`Element` nodes, the
page's own component and the site wrapper around it, and a fresh
:class:`RenderDescriptor` holding the document attributes and head
components. ``on_render`` hooks receive mutators bound to that descriptor;
afterwards the serializer turns it into the final HTML string.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from markupsafe import Markup

from ..hooks import Hook

if typ.TYPE_CHECKING:
    from ..builder import Context
    from ..hooks import HookDispatcher
    from ..pages import Page
    from .document import DocumentSerializer


class Element:
    """A component paired with its props, rendered lazily.

    ``render`` calls ``component(**props)``. A returned ``Element`` is rendered
    in turn, ``None`` yields empty markup and any other value is treated as
    HTML. Implementing ``__html__`` lets Jinja2 templates embed elements
    without escaping them.
    """

    __slots__ = ("component", "props")

    def __init__(self, component: cabc.Callable[..., typ.Any], **props: typ.Any) -> None:
        self.component = component
        self.props = props

    def render(self) -> Markup:
        """Evaluate the component and return its markup."""
        return to_markup(self.component(**self.props))

    def __html__(self) -> str:
        return str(self.render())

    def __str__(self) -> str:
        return self.__html__()

    def __repr__(self) -> str:
        name = getattr(self.component, "__name__", type(self.component).__name__)
        return f"Element({name}, props={sorted(self.props)})"


def to_markup(value: object) -> Markup:
    """Normalize a component result or head component into markup."""
    match value:
        case None | False:
            return Markup("")
        case Element():
            return value.render()
        case Markup():
            return value
        case _ if hasattr(value, "__html__"):
            return Markup(value.__html__())
        case _:
            return Markup(str(value))


def identity_wrapper(*, element: Element, **_props: typ.Any) -> Element:
    """Default page wrapper: return the page element unchanged."""
    return element


@dc.dataclass(slots=True)
class RenderDescriptor:
    """Mutable bag of document-level render data for exactly one page."""

    content: typ.Any
    html_attributes: dict[str, typ.Any] = dc.field(default_factory=dict)
    body_attributes: dict[str, typ.Any] = dc.field(default_factory=dict)
    head_components: list[typ.Any] = dc.field(default_factory=list)

    def set_html_attributes(self, attributes: cabc.Mapping[str, typ.Any]) -> None:
        """Shallow-merge ``attributes`` into the ``<html>`` attributes."""
        self.html_attributes.update(attributes)

    def set_body_attributes(self, attributes: cabc.Mapping[str, typ.Any]) -> None:
        """Shallow-merge ``attributes`` into the ``<body>`` attributes."""
        self.body_attributes.update(attributes)

    def set_head_components(self, components: cabc.Iterable[typ.Any]) -> None:
        """Replace the head components wholesale."""
        self.head_components = list(components)


class RenderComposer:
    """Build descriptors for pages and render them through ``on_render``."""

    def __init__(self, context: Context, serializer: DocumentSerializer) -> None:
        self.context = context
        self.serializer = serializer

    def compose(self, page: Page) -> RenderDescriptor:
        """Return a new descriptor whose content is the wrapped page element."""
        ctx = self.context
        pages = ctx.pages
        inner = Element(
            page.component,
            components=ctx.components,
            site=ctx.site,
            page=page,
            pages=pages,
            theme=ctx.theme,
        )
        outer = Element(
            ctx.page_wrapper or identity_wrapper,
            site=ctx.site,
            page=page,
            element=inner,
            components=ctx.components,
            pages=pages,
            theme=ctx.theme,
        )
        return RenderDescriptor(
            content=outer,
            html_attributes=dict(ctx.html_attributes),
            body_attributes=dict(ctx.body_attributes),
            head_components=list(ctx.head_components),
        )

    def render(self, page: Page, dispatcher: HookDispatcher) -> str:
        """Compose ``page``, let ``on_render`` hooks adjust it, and serialize."""
        descriptor = self.compose(page)
        dispatcher.call(
            Hook.ON_RENDER,
            page=page,
            head_components=tuple(descriptor.head_components),
            set_html_attributes=descriptor.set_html_attributes,
            set_body_attributes=descriptor.set_body_attributes,
            set_head_components=descriptor.set_head_components,
        )
        return self.serializer.serialize(descriptor)


__all__ = [
    "Element",
    "RenderComposer",
    "RenderDescriptor",
    "identity_wrapper",
    "to_markup",
]
