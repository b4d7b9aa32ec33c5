"""Build orchestration for a redocus site.

:class:`SiteBuilder` sequences one build through fixed stages, each finishing
across every plugin before the next begins::

    on_init -> output directory -> create_pages -> on_page_create (per page)
    -> on_pre_build -> per page: compose, on_render, serialize, write
    -> on_post_build

Pages are rendered strictly one after another. Any exception raised by a
hook, the content transform or the filesystem aborts the build at once;
files written before the failure stay on disk.

Example
-------
>>> from pathlib import Path
>>> from redocus.builder import build
>>> from redocus.config import SiteConfig
>>> build(SiteConfig(input_path=Path("pages"), output_path=Path("www")))  # doctest: +SKIP
[PosixPath('/srv/site/www/intro.html')]
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import logging
import posixpath
import typing as typ
from pathlib import Path

from markupsafe import Markup

from ._constants import LOGGER_NAME, PLUGIN_LOGGER_NAME
from .config import SiteConfig, SiteConfigError, SiteMetadata
from .generator import DocumentSerializer, RenderComposer
from .hooks import Hook, HookDispatcher, Plugin
from .pages import Actions, Page, PageCollisionError, PageError, PageRegistry
from .plugins import MarkdownSource


class BuildState(enum.Enum):
    """Stages a build moves through; ``ABORTED`` is terminal on failure."""

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    OUTPUT_READY = "output-ready"
    PAGES_DISCOVERED = "pages-discovered"
    PRE_BUILD = "pre-build"
    RENDERING = "rendering"
    POST_BUILD = "post-build"
    DONE = "done"
    ABORTED = "aborted"


@dc.dataclass(slots=True)
class Context:
    """Mutable state shared by every hook during one build.

    Attributes
    ----------
    config : SiteConfig
        The resolved configuration, read-only.
    site : SiteMetadata
        Metadata exposed to components as ``site``.
    registry : PageRegistry
        The pages discovered so far.
    input_path, output_path : Path
        Absolute content and output directories.
    components : dict[str, Any]
        Merged component overrides; plugins may extend it during ``on_init``.
    page_wrapper : Callable or None
        Wrapper component applied around each page.
    plugins : list[Plugin]
        Dispatch order; the configuration's own hooks come first.
    theme : dict[str, Any]
        Theme options handed to components as ``theme``.
    html_attributes, body_attributes, head_components
        Defaults copied into every page's render descriptor.
    """

    config: SiteConfig
    site: SiteMetadata
    registry: PageRegistry
    input_path: Path
    output_path: Path
    components: dict[str, typ.Any]
    page_wrapper: cabc.Callable[..., typ.Any] | None
    plugins: list[Plugin]
    theme: dict[str, typ.Any]
    html_attributes: dict[str, typ.Any]
    body_attributes: dict[str, typ.Any]
    head_components: list[typ.Any]

    @property
    def pages(self) -> list[Page]:
        """Return the registered pages, dropping falsy entries."""
        return self.registry.pages()

    @classmethod
    def from_config(cls, config: SiteConfig) -> Context:
        """Create the build context, layering config defaults over the theme."""
        theme = config.extends
        declared = config.plugins if config.plugins is not None else [MarkdownSource()]
        plugins = [config.hooks, *(Plugin.from_object(entry) for entry in declared)]

        html_attributes = dict(theme.html_attributes) if theme else {}
        if config.lang:
            html_attributes["lang"] = config.lang
        html_attributes.update(config.html_attributes)
        body_attributes = dict(theme.body_attributes) if theme else {}
        body_attributes.update(config.body_attributes)

        head_components: list[typ.Any] = []
        if config.site.title:
            head_components.append(
                Markup('<meta name="title" content="{}">').format(config.site.title)
            )
        if config.site.description:
            head_components.append(
                Markup('<meta name="description" content="{}">').format(
                    config.site.description
                )
            )
        if theme:
            head_components.extend(theme.head_components)
        head_components.extend(config.head_components)

        return cls(
            config=config,
            site=config.site,
            registry=PageRegistry(),
            input_path=config.input_path.resolve(),
            output_path=config.output_path.resolve(),
            components={
                **(theme.page_components if theme else {}),
                **config.page_components,
            },
            page_wrapper=config.page_wrapper or (theme.page_wrapper if theme else None),
            plugins=plugins,
            theme={**(theme.theme_config if theme else {}), **config.theme_config},
            html_attributes=html_attributes,
            body_attributes=body_attributes,
            head_components=head_components,
        )


class SiteBuilder:
    """Run one build of a site from its configuration."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        serializer: DocumentSerializer | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Prepare a builder; nothing is read or written until :meth:`run`.

        Parameters
        ----------
        config : SiteConfig
            Resolved site configuration.
        serializer : DocumentSerializer, optional
            Document serializer; defaults to the bundled ``document.jinja``.
        logger : logging.Logger, optional
            Logger for build progress; defaults to the ``redocus`` logger.
        """
        self.config = config
        self.serializer = serializer or DocumentSerializer()
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        self.state = BuildState.UNINITIALIZED
        self.context: Context | None = None

    def run(self) -> list[Path]:
        """Build every page and return the written file paths in page order.

        Raises
        ------
        SiteConfigError
            In strict mode, when the input directory does not exist. Nothing
            is written in that case.
        PageCollisionError
            When two pages share an output path.
        PageError
            When a page has no output path or no renderable component.
        Exception
            Whatever a hook, content transform or file operation raises.
        """
        try:
            return self._run()
        except Exception:
            self._enter(BuildState.ABORTED)
            raise

    def _run(self) -> list[Path]:
        self.logger.info("build started")
        input_path = self.config.input_path.resolve()
        if self.config.strict and not input_path.is_dir():
            msg = f"input folder '{input_path}' not found."
            raise SiteConfigError(msg)

        context = Context.from_config(self.config)
        self.context = context
        dispatcher = HookDispatcher(
            context.plugins,
            context=context,
            actions=Actions(context.registry),
            log=logging.getLogger(PLUGIN_LOGGER_NAME),
        )

        dispatcher.call(Hook.ON_INIT)
        self._enter(BuildState.INITIALIZED)

        context.output_path.mkdir(parents=True, exist_ok=True)
        self._enter(BuildState.OUTPUT_READY)

        dispatcher.call(Hook.CREATE_PAGES)
        for page in context.registry:
            if page is not None and page in context.registry:
                dispatcher.call(Hook.ON_PAGE_CREATE, page=page)
        context.registry.prune()
        self._enter(BuildState.PAGES_DISCOVERED)

        dispatcher.call(Hook.ON_PRE_BUILD)
        self._enter(BuildState.PRE_BUILD)

        pages = context.pages
        _check_collisions(pages)
        self._enter(BuildState.RENDERING)
        composer = RenderComposer(context, self.serializer)
        written: list[Path] = []
        for page in pages:
            target = _target_path(page, context.output_path)
            html = composer.render(page, dispatcher)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(html, encoding="utf-8")
            self.logger.info("saved file '%s'", target)
            written.append(target)

        dispatcher.call(Hook.ON_POST_BUILD)
        self._enter(BuildState.POST_BUILD)
        self.logger.info("build finished.")
        self._enter(BuildState.DONE)
        return written

    def _enter(self, state: BuildState) -> None:
        self.logger.debug("%s -> %s", self.state.value, state.value)
        self.state = state


def _target_path(page: Page, output_path: Path) -> Path:
    """Return the output file for ``page`` or raise when it cannot render."""
    if not page.path:
        msg = f"Page {page.name!r} has no output path."
        raise PageError(msg)
    if not callable(page.component):
        msg = f"Page {page.name or page.path!r} has no renderable component."
        raise PageError(msg)
    relative = _relative_output(page.path)
    if relative == ".." or relative.startswith("../"):
        msg = f"Page {page.name!r} writes outside the output folder: '{page.path}'."
        raise PageError(msg)
    return output_path / relative


def _relative_output(path: str) -> str:
    """Return ``path`` normalized and anchored below the output folder."""
    return posixpath.normpath(path.replace("\\", "/")).lstrip("/")


def _check_collisions(pages: list[Page]) -> None:
    """Raise when two pages would be written to the same file."""
    claimed: dict[str, Page] = {}
    for page in pages:
        if not page.path:
            continue
        key = _relative_output(page.path)
        previous = claimed.setdefault(key, page)
        if previous is not page:
            msg = (
                f"Pages {previous.name!r} and {page.name!r} both write to "
                f"'{page.path}'."
            )
            raise PageCollisionError(msg)


def build(config: SiteConfig, **kwargs: typ.Any) -> list[Path]:
    """Build the site described by ``config``; see :class:`SiteBuilder`."""
    return SiteBuilder(config, **kwargs).run()


__all__ = ["BuildState", "Context", "SiteBuilder", "build"]
