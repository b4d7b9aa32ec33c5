"""In-memory page registry shared by every lifecycle hook.

A :class:`PageRegistry` keeps the ordered collection of :class:`Page`
records that the orchestrator renders. Plugins never touch the collection
directly; they receive an :class:`Actions` bag whose ``create_page`` and
``delete_page`` mutators apply immediately, so the next hook invocation
already observes the change.

Example
-------
>>> registry = PageRegistry()
>>> page = registry.create_page(path="intro.html")
>>> (page.name, page.url)
('intro', './intro')
>>> registry.delete_page(page)
>>> len(registry)
0
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import posixpath
import typing as typ
from pathlib import Path

from ._constants import PAGE_EXTENSION, PAGE_URL_TEMPLATE

logger = logging.getLogger(__name__)

Component = cabc.Callable[..., typ.Any]


class PageError(ValueError):
    """Raised when a page record cannot be rendered to disk."""


class PageCollisionError(PageError):
    """Raised when two pages target the same output path."""


@dc.dataclass(eq=False, slots=True)
class Page:
    """One unit of output.

    Attributes
    ----------
    data : dict[str, Any]
        Arbitrary metadata such as ``title``, ``description`` or ``layout``.
    component : Callable or None
        Renderable body invoked with ``components``, ``site``, ``page``,
        ``pages`` and ``theme`` keyword arguments.
    name : str or None
        Identifier, usually the source file stem.
    path : str or None
        Output file path relative to the output directory.
    url : str or None
        Canonical relative URL, e.g. ``./intro``.

    Notes
    -----
    Pages compare by identity so ``delete_page`` removes exactly the record a
    plugin holds, even when another page carries identical fields.
    """

    data: dict[str, typ.Any] = dc.field(default_factory=dict)
    component: Component | None = None
    name: str | None = None
    path: str | None = None
    url: str | None = None


_PAGE_FIELDS = frozenset(field.name for field in dc.fields(Page))


def _stem(path: str) -> str:
    """Return the base name of ``path`` without the output extension."""
    return posixpath.basename(path).removesuffix(PAGE_EXTENSION)


def _normalize(page: Page) -> Page:
    """Fill in ``data``, ``name``, ``path`` and ``url`` defaults in place."""
    if page.data is None:
        page.data = {}
    if page.name is None and page.path:
        page.name = _stem(page.path)
    if page.path is None and page.name:
        page.path = f"{page.name}{PAGE_EXTENSION}"
    if page.url is None and (page.path or page.name):
        stem = _stem(page.path) if page.path else page.name
        page.url = PAGE_URL_TEMPLATE.format(name=stem)
    return page


def _page_from_mapping(payload: cabc.Mapping[str, typ.Any]) -> Page:
    unknown = sorted(set(payload) - _PAGE_FIELDS)
    if unknown:
        logger.debug("ignoring unknown page fields: %s", ", ".join(unknown))
    return Page(**{key: value for key, value in payload.items() if key in _PAGE_FIELDS})


class PageRegistry:
    """Ordered collection of pages with create and delete operations."""

    def __init__(self) -> None:
        self._pages: list[Page | None] = []

    def create_page(
        self, page: Page | cabc.Mapping[str, typ.Any] | None = None, /, **fields: typ.Any
    ) -> Page | None:
        """Normalize ``page`` and append it to the collection.

        Parameters
        ----------
        page : Page or Mapping, optional
            A ready ``Page`` (stored as-is, keeping its identity) or a
            page-shaped mapping. Omit it to build the page from ``fields``.
        **fields : Any
            Page fields merged over a mapping payload, or applied to a ``Page``.

        Returns
        -------
        Page or None
            The stored record, with defaults filled in, or ``None`` when
            neither ``page`` nor ``fields`` were given.

        Notes
        -----
        No validation happens here: a page without ``name`` or ``path`` is
        accepted and only fails once the build tries to write it. An empty
        call stores a ``None`` placeholder that :meth:`pages` and
        :meth:`prune` drop.
        """
        match page:
            case Page():
                record = page
                for key, value in fields.items():
                    setattr(record, key, value)
            case None if not fields:
                self._pages.append(None)
                return None
            case None:
                record = _page_from_mapping(fields)
            case cabc.Mapping():
                record = _page_from_mapping({**page, **fields})
            case _:
                msg = f"Cannot create a page from {type(page).__name__!r}."
                raise TypeError(msg)
        self._pages.append(_normalize(record))
        return record

    def delete_page(self, page: Page) -> None:
        """Remove ``page`` by identity; a no-op when it is not registered."""
        self._pages = [entry for entry in self._pages if entry is not page]

    def pages(self) -> list[Page]:
        """Return the registered pages, dropping falsy entries."""
        return [entry for entry in self._pages if entry]

    def prune(self) -> None:
        """Drop falsy entries from the collection in place."""
        self._pages = self.pages()

    def __iter__(self) -> cabc.Iterator[Page | None]:
        return iter(list(self._pages))

    def __len__(self) -> int:
        return len(self._pages)

    def __contains__(self, page: object) -> bool:
        return any(entry is page for entry in self._pages)


@dc.dataclass(slots=True)
class Actions:
    """Registry mutators handed to every hook as ``actions``."""

    registry: PageRegistry

    def create_page(
        self, page: Page | cabc.Mapping[str, typ.Any] | None = None, /, **fields: typ.Any
    ) -> Page | None:
        """Register a page; see :meth:`PageRegistry.create_page`."""
        return self.registry.create_page(page, **fields)

    def delete_page(self, page: Page) -> None:
        """Unregister ``page``; see :meth:`PageRegistry.delete_page`."""
        self.registry.delete_page(page)

    def create_page_from_markdown_file(self, file_path: Path | str) -> Page:
        """Parse a Markdown file and register the resulting page."""
        from .plugins.markdown import create_markdown_page

        record = self.registry.create_page(create_markdown_page(Path(file_path)))
        return typ.cast(Page, record)


__all__ = [
    "Actions",
    "Component",
    "Page",
    "PageCollisionError",
    "PageError",
    "PageRegistry",
]
