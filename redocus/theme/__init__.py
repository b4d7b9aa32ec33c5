"""Default documentation theme.

``default_theme`` returns a :class:`~redocus.config.Theme` that a site can
extend. It contributes document defaults (``lang``, charset and viewport
meta tags, the Pygments stylesheet for highlighted code), class-adding tag
renderers for Markdown output, and a page wrapper laying pages out with a
header navigation, an optional documentation sidebar and previous/next links.

Pages choose their layout through ``data["layout"]``: ``"page"`` (default)
or ``"doc"``. Theme options:

``site_title``
    Overrides the site title shown in the header.
``nav``
    Header links, each ``{"text": ..., "link": ...}``.
``sidebar``
    Sections ``{"text": ..., "items": [{"text": ..., "link": ...}]}``; the
    link matching the page URL is flagged ``is-active``.
``footer``
    Footer text; defaults to a link to ``site.data["repository"]``.
``code_style``
    Pygments style for highlighted code (``"monokai"``).

Callable ``logo`` and ``footer`` entries in the site components replace the
header logo and the footer. They receive the same props as the wrapper.

Example
-------
>>> from redocus.theme import default_theme
>>> theme = default_theme(nav=[{"text": "Docs", "link": "./docs"}])
>>> theme.html_attributes
{'lang': 'en'}
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup
from pygments.formatters.html import HtmlFormatter

from ..config import Theme
from ..generator.composer import Element

if typ.TYPE_CHECKING:
    from ..pages import Page

TAG_CLASSES: dict[str, str] = {
    "blockquote": "redocus-blockquote",
    "h1": "redocus-h1",
    "h2": "redocus-h2",
    "p": "redocus-p",
    "ul": "redocus-list",
    "ol": "redocus-list",
    "li": "redocus-list__item",
    "code": "redocus-code",
    "pre": "redocus-pre",
    "a": "redocus-link",
}

THEME_SLOTS = ("logo", "footer")


def render_attributes(attributes: cabc.Mapping[str, typ.Any]) -> Markup:
    """Return escaped ``key="value"`` pairs, each with a leading space."""
    return Markup("").join(
        Markup(' {}="{}"').format(key, value)
        for key, value in attributes.items()
        if value is not None
    )


def tag_renderer(tag: str, classes: str) -> cabc.Callable[[Markup, dict[str, str]], Markup]:
    """Return a renderer re-emitting ``tag`` with ``classes`` prepended."""

    def render(children: Markup, attributes: dict[str, str]) -> Markup:
        merged = dict(attributes)
        merged["class"] = " ".join(filter(None, [classes, merged.get("class")]))
        return Markup("<{0}{1}>{2}</{0}>").format(
            Markup(tag), render_attributes(merged), children
        )

    render.__name__ = f"render_{tag}"
    return render


class ThemeWrapper:
    """Page wrapper rendering the theme layout around each page."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or Path(__file__).resolve().parents[1] / "templates"
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("theme_page.jinja")

    def __call__(
        self,
        *,
        site: typ.Any,
        page: Page,
        element: typ.Any,
        pages: list[Page],
        theme: cabc.Mapping[str, typ.Any] | None = None,
        components: cabc.Mapping[str, typ.Any] | None = None,
        **_props: typ.Any,
    ) -> Markup:
        """Render the layout; ``logo`` and ``footer`` components replace the defaults."""
        data = page.data or {}
        props = {
            "site": site,
            "page": page,
            "element": element,
            "pages": pages,
            "theme": theme or {},
            "components": components or {},
        }
        slots: dict[str, Element] = {}
        for slot in THEME_SLOTS:
            renderer = (components or {}).get(slot)
            if callable(renderer):
                slots[slot] = Element(renderer, **props)
        context = {
            "site": site,
            "page": page,
            "element": element,
            "theme": theme or {},
            "layout": data.get("layout") or "page",
            "prev_page": _find_page(pages, data.get("prev_page", data.get("prevPage"))),
            "next_page": _find_page(pages, data.get("next_page", data.get("nextPage"))),
            "logo": slots.get("logo"),
            "footer": slots.get("footer"),
        }
        return Markup(self.template.render(**context))


def _find_page(pages: list[Page], url: str | None) -> Page | None:
    if not url:
        return None
    return next((candidate for candidate in pages if candidate.url == url), None)


def default_theme(**theme_config: typ.Any) -> Theme:
    """Build the default theme, passing ``theme_config`` to its wrapper."""
    code_style = theme_config.get("code_style", "monokai")
    stylesheet = HtmlFormatter(style=code_style).get_style_defs(".codehilite")
    return Theme(
        html_attributes={"lang": "en"},
        body_attributes={"class": "redocus-body"},
        head_components=[
            Markup('<meta charset="utf-8">'),
            Markup(
                '<meta name="viewport" content="width=device-width, initial-scale=1">'
            ),
            Markup("<style>{}</style>").format(Markup(stylesheet)),
        ],
        page_components={
            tag: tag_renderer(tag, classes) for tag, classes in TAG_CLASSES.items()
        },
        page_wrapper=ThemeWrapper(),
        theme_config=dict(theme_config),
    )


__all__ = [
    "TAG_CLASSES",
    "THEME_SLOTS",
    "ThemeWrapper",
    "default_theme",
    "render_attributes",
    "tag_renderer",
]
