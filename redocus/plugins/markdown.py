"""Markdown content source: turns ``*.md`` files into page records.

:class:`MarkdownSource` is a plugin. During ``create_pages`` it enumerates the
content directory, parses each file's YAML front matter and registers one page
per file. Page bodies are :class:`MarkdownComponent` instances, so the
Markdown is only converted to HTML at render time, with the site's component
overrides applied.

Example
-------
>>> from redocus.plugins import MarkdownSource
>>> plugins = [MarkdownSource(input="./docs")]  # doctest: +SKIP
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ
from pathlib import Path

from markupsafe import Markup

from .._constants import CONTENT_EXTENSION, PAGE_EXTENSION, PAGE_URL_TEMPLATE
from ..generator.renderer import HtmlContentRenderer
from ..markdown_parser import parse_front_matter

if typ.TYPE_CHECKING:
    from ..builder import Context
    from ..generator.components import Renderer
    from ..pages import Actions


class MarkdownComponent:
    """Page component rendering a Markdown body on demand."""

    def __init__(self, markdown_text: str, renderer: HtmlContentRenderer | None = None) -> None:
        self.markdown_text = markdown_text
        self.renderer = renderer or HtmlContentRenderer()

    def __call__(
        self,
        *,
        components: cabc.Mapping[str, Renderer] | None = None,
        **_props: typ.Any,
    ) -> Markup:
        """Render the Markdown body, routing overridden tags through ``components``."""
        return Markup(self.renderer.markdown(self.markdown_text, components))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self.markdown_text)} chars)"


def create_markdown_page(
    file_path: Path, renderer: HtmlContentRenderer | None = None
) -> dict[str, typ.Any]:
    """Read ``file_path`` and return a page-shaped record.

    Parameters
    ----------
    file_path : Path
        Markdown file with optional YAML front matter.
    renderer : HtmlContentRenderer, optional
        Renderer shared across pages; a default one is created when omitted.

    Returns
    -------
    dict[str, Any]
        ``data``, ``component``, ``name``, ``path`` and ``url`` for the page,
        all derived from the file stem.

    Raises
    ------
    OSError
        If the file cannot be read.
    FrontMatterError
        If the front matter is malformed.
    """
    document = parse_front_matter(file_path.read_text(encoding="utf-8"))
    name = file_path.stem
    return {
        "data": document.data,
        "component": MarkdownComponent(document.body, renderer),
        "name": name,
        "path": f"{name}{PAGE_EXTENSION}",
        "url": PAGE_URL_TEMPLATE.format(name=name),
    }


class MarkdownSource:
    """Plugin registering one page per Markdown file in a directory."""

    def __init__(
        self,
        input: str | Path | None = None,  # noqa: A002 - mirrors the config key
        *,
        components: cabc.Mapping[str, Renderer] | None = None,
        extension: str = CONTENT_EXTENSION,
        pygments_style: str = "monokai",
    ) -> None:
        """Configure the content source.

        Parameters
        ----------
        input : str or Path, optional
            Directory to read, resolved against the working directory. Defaults
            to the site's input path.
        components : Mapping[str, Renderer], optional
            Component overrides merged into the site's mapping on ``on_init``.
        extension : str, optional
            File extension recognized as content. Defaults to ``".md"``.
        pygments_style : str, optional
            Pygments style used for fenced code blocks.
        """
        self.input = Path(input) if input is not None else None
        self.components = dict(components or {})
        self.extension = extension
        self.renderer = HtmlContentRenderer(pygments_style)

    def on_init(self, *, context: Context, **_: typ.Any) -> None:
        """Merge this source's component overrides into the site mapping."""
        context.components.update(self.components)

    def create_pages(
        self, *, context: Context, actions: Actions, log: logging.Logger, **_: typ.Any
    ) -> None:
        """Register a page for every matching file, in file name order."""
        folder = self.input.resolve() if self.input else context.input_path
        if not folder.is_dir():
            log.warning("input folder '%s' not found; no pages read", folder)
            return
        log.info("reading files from '%s'", folder)
        for file_path in self.discover(folder):
            actions.create_page(create_markdown_page(file_path, self.renderer))

    def discover(self, folder: Path) -> list[Path]:
        """Return content files directly inside ``folder``, sorted by name."""
        return sorted(
            entry
            for entry in folder.iterdir()
            if entry.is_file() and entry.suffix == self.extension
        )


__all__ = ["MarkdownComponent", "MarkdownSource", "create_markdown_page"]
