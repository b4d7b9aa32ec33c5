"""Typed dataclasses describing redocus site configuration structures."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ
from pathlib import Path

from .._constants import DEFAULT_INPUT, DEFAULT_OUTPUT
from ..hooks import Plugin


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class ConfigNotFoundError(FileNotFoundError):
    """Raised when the configuration file does not exist."""


@dc.dataclass(slots=True)
class SiteMetadata:
    """Site-wide metadata handed to every component as ``site``."""

    title: str = ""
    description: str = ""
    data: dict[str, typ.Any] = dc.field(default_factory=dict)


@dc.dataclass(slots=True)
class Theme:
    """Reusable render defaults a configuration can extend."""

    html_attributes: dict[str, typ.Any] = dc.field(default_factory=dict)
    body_attributes: dict[str, typ.Any] = dc.field(default_factory=dict)
    head_components: list[typ.Any] = dc.field(default_factory=list)
    page_components: dict[str, typ.Any] = dc.field(default_factory=dict)
    page_wrapper: cabc.Callable[..., typ.Any] | None = None
    theme_config: dict[str, typ.Any] = dc.field(default_factory=dict)


@dc.dataclass(slots=True)
class SiteConfig:
    """A fully resolved site configuration.

    Attributes
    ----------
    input_path : Path
        Content directory; relative paths resolve against the working
        directory at build time.
    output_path : Path
        Directory receiving the rendered HTML files.
    site : SiteMetadata
        Title, description and arbitrary data exposed to components.
    page_components : dict[str, Any]
        Tag name to renderer overrides, layered over the theme's.
    page_wrapper : Callable or None
        Wrapper component around every page; ``None`` keeps the page as-is.
    plugins : list[object] or None
        Ordered plugins. ``None`` means no plugin list was configured and the
        bundled Markdown source is used.
    hooks : Plugin
        Hook functions declared on the configuration itself; always dispatched
        first.
    extends : Theme or None
        Theme providing default components, wrapper and document attributes.
    lang : str or None
        Value for the ``lang`` attribute of ``<html>``.
    head_components, html_attributes, body_attributes
        Site-wide render defaults applied after the theme's.
    theme_config : dict[str, Any]
        Options handed to components and wrappers as ``theme``.
    strict : bool
        Treat a missing input directory as a fatal configuration error.
    path : Path or None
        File the configuration was loaded from.
    """

    input_path: Path = Path(DEFAULT_INPUT)
    output_path: Path = Path(DEFAULT_OUTPUT)
    site: SiteMetadata = dc.field(default_factory=SiteMetadata)
    page_components: dict[str, typ.Any] = dc.field(default_factory=dict)
    page_wrapper: cabc.Callable[..., typ.Any] | None = None
    plugins: list[object] | None = None
    hooks: Plugin = dc.field(default_factory=lambda: Plugin(name="config"))
    extends: Theme | None = None
    lang: str | None = None
    head_components: list[typ.Any] = dc.field(default_factory=list)
    html_attributes: dict[str, typ.Any] = dc.field(default_factory=dict)
    body_attributes: dict[str, typ.Any] = dc.field(default_factory=dict)
    theme_config: dict[str, typ.Any] = dc.field(default_factory=dict)
    strict: bool = False
    path: Path | None = None


__all__ = [
    "ConfigNotFoundError",
    "SiteConfig",
    "SiteConfigError",
    "SiteMetadata",
    "Theme",
]
