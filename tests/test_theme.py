"""Tests for the bundled documentation theme."""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from markupsafe import Markup

from redocus.builder import build
from redocus.config import SiteConfig, SiteMetadata
from redocus.pages import Page
from redocus.theme import default_theme, tag_renderer

SIDEBAR = [
    {
        "text": "Guide",
        "items": [
            {"text": "Intro", "link": "./intro"},
            {"text": "Setup", "link": "./setup"},
        ],
    }
]


def _page(name: str, **data: object) -> Page:
    return Page(data=dict(data), component=lambda **_: "", name=name)


def test_tag_renderer_prepends_classes() -> None:
    """Existing classes are kept after the theme's own."""
    render = tag_renderer("p", "redocus-p")
    html = render(Markup("<em>x</em>"), {"class": "lead", "id": "a"})
    assert html == '<p class="redocus-p lead" id="a"><em>x</em></p>'


def test_default_theme_document_defaults() -> None:
    """The theme supplies lang, a body class and head tags."""
    theme = default_theme()
    assert theme.html_attributes == {"lang": "en"}
    assert theme.body_attributes == {"class": "redocus-body"}
    assert any("charset" in str(item) for item in theme.head_components)
    assert any(".codehilite" in str(item) for item in theme.head_components)


def test_doc_layout_marks_active_link_and_pager() -> None:
    """Doc pages get a sidebar with the current link flagged."""
    intro = _page("intro", layout="doc", title="Intro", next_page="./setup")
    setup = _page("setup", title="Setup")
    wrapper = default_theme().page_wrapper
    assert wrapper is not None
    html = wrapper(
        site=SiteMetadata(title="Docs"),
        page=intro,
        element=Markup("<p>body</p>"),
        pages=[intro, setup],
        theme={"sidebar": SIDEBAR},
    )
    soup = BeautifulSoup(html, "html.parser")
    active = soup.select("a.redocus-sidebar__link.is-active")
    assert [link.get_text() for link in active] == ["Intro"]
    assert soup.select_one(".redocus-doc__title").get_text() == "Intro"
    assert soup.select_one("a.redocus-pager__next")["href"] == "./setup"
    assert soup.select_one("a.redocus-pager__prev") is None
    assert soup.select_one(".redocus-doc p").get_text() == "body"


def test_page_layout_skips_sidebar() -> None:
    """Plain pages render without the documentation chrome."""
    page = _page("about")
    wrapper = default_theme().page_wrapper
    assert wrapper is not None
    html = wrapper(
        site=SiteMetadata(title="Docs", data={"repository": "https://example.com/r"}),
        page=page,
        element=Markup("<p>about</p>"),
        pages=[page],
        theme={"sidebar": SIDEBAR, "nav": [{"text": "Home", "link": "./"}]},
    )
    soup = BeautifulSoup(html, "html.parser")
    assert soup.select_one(".redocus-sidebar") is None
    assert soup.select_one(".redocus-logo__title").get_text() == "Docs"
    assert soup.select_one(".redocus-nav__link").get_text() == "Home"
    assert soup.select_one(".redocus-footer a")["href"] == "https://example.com/r"


def test_logo_and_footer_components_replace_defaults() -> None:
    """Callable ``logo`` and ``footer`` components render inside the layout."""
    page = _page("about")
    wrapper = default_theme().page_wrapper
    assert wrapper is not None

    def logo(*, site: SiteMetadata, page: Page, **_: object) -> Markup:
        return Markup('<img src="logo.svg" alt="{}" data-page="{}">').format(
            site.title, page.name
        )

    html = wrapper(
        site=SiteMetadata(title="Docs", data={"repository": "https://example.com/r"}),
        page=page,
        element=Markup("<p>about</p>"),
        pages=[page],
        theme={"footer": "ignored"},
        components={"logo": logo, "footer": lambda **_: "<p class='made'>Made here</p>"},
    )
    soup = BeautifulSoup(html, "html.parser")
    image = soup.select_one(".redocus-logo img")
    assert image is not None
    assert (image["alt"], image["data-page"]) == ("Docs", "about")
    assert soup.select_one(".redocus-logo__title") is None
    assert soup.select_one(".redocus-footer p.made").get_text() == "Made here"
    assert "ignored" not in soup.select_one(".redocus-footer").get_text()


def test_site_extending_theme(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """A build extending the theme styles Markdown and keeps config overrides."""
    (tmp_path / "pages").mkdir()
    (tmp_path / "pages" / "intro.md").write_text(
        "---\ntitle: Intro\nlayout: doc\n---\nHello\n", encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)

    build(
        SiteConfig(
            extends=default_theme(),
            lang="de",
            body_attributes={"data-site": "docs"},
            theme_config={"sidebar": SIDEBAR},
        )
    )

    soup = BeautifulSoup(
        (tmp_path / "www" / "intro.html").read_text(encoding="utf-8"), "html.parser"
    )
    assert soup.html["lang"] == "de"
    assert soup.body["class"] == ["redocus-body"]
    assert soup.body["data-site"] == "docs"
    assert soup.select_one("p.redocus-p").get_text() == "Hello"
    assert soup.select_one("a.is-active")["href"] == "./intro"
