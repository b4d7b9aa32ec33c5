"""Build static HTML sites from Markdown content and plugins.

This package exposes the ``redocus`` CLI together with the pieces of the
build pipeline that configuration files and plugins import.

Exports
-------
- ``app``: Cyclopts application behind the ``redocus`` command.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``build``: Run a build for a resolved :class:`SiteConfig`.
- ``Page``, ``Plugin``, ``SiteConfig``, ``Theme``: types used by site configs.

Examples
--------
>>> from redocus import main
>>> main()  # doctest: +SKIP
>>> from redocus import build, load_site_config
>>> from pathlib import Path
>>> build(load_site_config(Path("redocus.config.py")))  # doctest: +SKIP
"""

from __future__ import annotations

from .builder import BuildState, Context, SiteBuilder, build
from .cli import app, main
from .config import SiteConfig, SiteMetadata, Theme, load_site_config
from .hooks import Hook, Plugin
from .pages import Page

__all__ = [
    "BuildState",
    "Context",
    "Hook",
    "Page",
    "Plugin",
    "SiteBuilder",
    "SiteConfig",
    "SiteMetadata",
    "Theme",
    "app",
    "build",
    "load_site_config",
    "main",
]
