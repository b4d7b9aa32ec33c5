"""Unit tests for render composition and document serialization.

The composer wraps each page component in the site wrapper, builds a fresh
render descriptor per page and hands ``on_render`` hooks mutators bound to
that descriptor only. The serializer turns the descriptor into HTML.
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from markupsafe import Markup

from redocus.builder import Context
from redocus.config import SiteConfig, SiteMetadata
from redocus.generator import (
    DocumentSerializer,
    Element,
    RenderComposer,
    RenderDescriptor,
    identity_wrapper,
)
from redocus.hooks import HookDispatcher, Plugin
from redocus.pages import Actions


def _body(*, page: typ.Any, **_: typ.Any) -> str:
    return f"<p>{page.data['text']}</p>"


def _context(tmp_path: Path, **overrides: typ.Any) -> Context:
    config = SiteConfig(
        input_path=tmp_path / "pages",
        output_path=tmp_path / "www",
        site=SiteMetadata(title="Site"),
        plugins=[],
        **overrides,
    )
    context = Context.from_config(config)
    context.registry.create_page(name="one", component=_body, data={"text": "first"})
    context.registry.create_page(name="two", component=_body, data={"text": "second"})
    return context


def _dispatcher(context: Context, plugins: list[Plugin]) -> HookDispatcher:
    return HookDispatcher(
        plugins,
        context=context,
        actions=Actions(context.registry),
        log=logging.getLogger("redocus.tests"),
    )


def test_compose_nests_page_inside_wrapper(tmp_path: Path) -> None:
    """Inner and outer elements receive the documented props."""
    seen: dict[str, typ.Any] = {}

    def wrapper(**props: typ.Any) -> Markup:
        seen.update(props)
        return Markup("<main>{}</main>").format(props["element"])

    context = _context(tmp_path, page_wrapper=wrapper)
    page = context.pages[0]
    descriptor = RenderComposer(context, DocumentSerializer()).compose(page)

    outer = descriptor.content
    assert isinstance(outer, Element)
    assert outer.component is wrapper
    inner = outer.props["element"]
    assert inner.component is _body
    assert set(inner.props) == {"components", "site", "page", "pages", "theme"}
    assert inner.props["page"] is page
    assert [p.name for p in inner.props["pages"]] == ["one", "two"]
    assert outer.render() == Markup("<main><p>first</p></main>")
    assert set(seen) == {"site", "page", "element", "components", "pages", "theme"}


def test_default_wrapper_returns_element_unchanged() -> None:
    """The identity wrapper hands back the page element itself."""
    element = Element(_body, page=None)
    assert identity_wrapper(element=element, site=None) is element


def test_descriptor_starts_from_site_defaults(tmp_path: Path) -> None:
    """Only configured defaults appear; each descriptor gets its own copies."""
    context = _context(tmp_path, lang="fr")
    composer = RenderComposer(context, DocumentSerializer())
    first = composer.compose(context.pages[0])
    second = composer.compose(context.pages[1])
    assert first.html_attributes == {"lang": "fr"}
    assert first.body_attributes == {}
    assert len(first.head_components) == 1  # title meta tag
    first.head_components.append("<link>")
    first.html_attributes["data-x"] = "1"
    assert len(second.head_components) == 1
    assert "data-x" not in second.html_attributes
    assert context.html_attributes == {"lang": "fr"}


def test_descriptor_starts_empty_without_defaults() -> None:
    """A bare descriptor has empty attributes and head components."""
    descriptor = RenderDescriptor(content=None)
    assert descriptor.html_attributes == {}
    assert descriptor.body_attributes == {}
    assert descriptor.head_components == []


def test_mutators_merge_attributes_and_replace_head() -> None:
    """Attribute setters shallow-merge; the head setter replaces."""
    descriptor = RenderDescriptor(content=None, head_components=["<meta a>"])
    descriptor.set_html_attributes({"lang": "en"})
    descriptor.set_html_attributes({"dir": "ltr"})
    descriptor.set_body_attributes({"class": "a"})
    descriptor.set_body_attributes({"id": "b"})
    descriptor.set_head_components(["<meta b>"])
    descriptor.set_head_components(["<meta c>"])
    assert descriptor.html_attributes == {"lang": "en", "dir": "ltr"}
    assert descriptor.body_attributes == {"class": "a", "id": "b"}
    assert descriptor.head_components == ["<meta c>"]


def test_on_render_mutations_stay_with_their_page(tmp_path: Path) -> None:
    """Changes made while rendering one page never leak into another."""

    def on_render(*, page: typ.Any, set_body_attributes: typ.Any, **_: typ.Any) -> None:
        if page.name == "one":
            set_body_attributes({"class": "only-one"})

    context = _context(tmp_path)
    composer = RenderComposer(context, DocumentSerializer())
    dispatcher = _dispatcher(context, [Plugin(on_render=on_render)])
    first, second = (composer.render(page, dispatcher) for page in context.pages)

    assert BeautifulSoup(first, "html.parser").body.get("class") == ["only-one"]
    assert BeautifulSoup(second, "html.parser").body.get("class") is None


def test_on_render_receives_current_head_components(tmp_path: Path) -> None:
    """Hooks see the head components they would replace."""
    received: list[tuple[typ.Any, ...]] = []

    def on_render(*, head_components: tuple[typ.Any, ...], **_: typ.Any) -> None:
        received.append(head_components)

    context = _context(tmp_path)
    composer = RenderComposer(context, DocumentSerializer())
    composer.render(context.pages[0], _dispatcher(context, [Plugin(on_render=on_render)]))
    assert len(received) == 1
    assert 'name="title"' in str(received[0][0])


def test_serializer_renders_document_shell() -> None:
    """Attributes are escaped, None values dropped and falsy heads skipped."""
    descriptor = RenderDescriptor(
        content=Element(lambda: Markup("<p>Hello</p>")),
        html_attributes={"lang": "en", "data-skip": None},
        body_attributes={"class": 'a"b', "hidden": True},
        head_components=[Markup("<title>T</title>"), None, "", "<meta charset=\"utf-8\">"],
    )
    html = DocumentSerializer().serialize(descriptor)
    assert html.startswith("<!DOCTYPE html>")
    assert html.endswith("\n")
    soup = BeautifulSoup(html, "html.parser")
    assert soup.html.attrs == {"lang": "en"}
    assert soup.body.get("class") == ['a"b']
    assert soup.body.get("hidden") == "hidden"
    assert soup.head.title.get_text() == "T"
    assert soup.head.meta.get("charset") == "utf-8"
    assert soup.body.p.get_text() == "Hello"


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, ""), ("<b>x</b>", "<b>x</b>"), (Markup("<i>y</i>"), "<i>y</i>")],
)
def test_element_render_normalizes_results(value: object, expected: str) -> None:
    """Components may return None, HTML strings or markup."""
    assert Element(lambda: value).render() == Markup(expected)


def test_element_renders_nested_elements() -> None:
    """An element returned by a component is rendered in turn."""
    inner = Element(lambda: "<em>inner</em>")
    assert str(Element(lambda: inner)) == "<em>inner</em>"
