"""Load and validate redocus site configuration.

This subpackage resolves the user's configuration file, either a Python
module (``redocus.config.py``) whose module-level names and hook functions
describe the site, or a YAML document referencing plugins and components by
import path, and produces a :class:`SiteConfig` that the build orchestrator
consumes. The primary entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from redocus.config import load_site_config
>>> config = load_site_config(Path("redocus.config.py"))  # doctest: +SKIP
>>> config.input_path  # doctest: +SKIP
PosixPath('pages')
"""

from .loader import build_site_config, load_site_config
from .models import (
    ConfigNotFoundError,
    SiteConfig,
    SiteConfigError,
    SiteMetadata,
    Theme,
)

__all__ = [
    "ConfigNotFoundError",
    "SiteConfig",
    "SiteConfigError",
    "SiteMetadata",
    "Theme",
    "build_site_config",
    "load_site_config",
]
