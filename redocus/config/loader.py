"""Load site configuration from a Python module or a YAML file."""

from __future__ import annotations

import collections.abc as cabc
import importlib.util
import sys
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .._constants import DEFAULT_INPUT, DEFAULT_OUTPUT
from ..hooks import Hook, Plugin
from .helpers import (
    _first,
    _flag,
    _mapping,
    _optional_str,
    _resolve_callable,
    _resolve_components,
    _resolve_plugins,
    _resolve_theme,
    _sequence,
)
from .models import ConfigNotFoundError, SiteConfig, SiteConfigError, SiteMetadata

PYTHON_SUFFIXES = (".py",)
YAML_SUFFIXES = (".yaml", ".yml")
CONFIG_MODULE_NAME = "redocus_site_config"


def load_site_config(path: Path) -> SiteConfig:
    """Load the configuration describing inputs, outputs, theme and plugins.

    Parameters
    ----------
    path : Path
        A Python module (``redocus.config.py``) or a YAML document
        (``redocus.yaml``).

    Returns
    -------
    SiteConfig
        Parsed configuration with plugins, hooks and components resolved.

    Raises
    ------
    ConfigNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If the file type is unsupported or a field has the wrong shape.
    TypeError
        If the configuration does not evaluate to a mapping.
    YAMLError
        If a YAML configuration cannot be parsed.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_site_config(Path("redocus.config.py"))  # doctest: +SKIP
    >>> config.output_path  # doctest: +SKIP
    PosixPath('www')
    """
    if not path.exists():
        msg = f"configuration file '{path.resolve()}' not found."
        raise ConfigNotFoundError(msg)

    suffix = path.suffix.lower()
    if suffix in PYTHON_SUFFIXES:
        declared = _load_python_config(path)
    elif suffix in YAML_SUFFIXES:
        declared = _load_yaml_config(path)
    else:
        msg = f"Unsupported configuration file type '{path.suffix}'."
        raise SiteConfigError(msg)

    if isinstance(declared, SiteConfig):
        declared.path = path
        return declared
    return build_site_config(declared, path=path)


def _load_python_config(path: Path) -> SiteConfig | cabc.Mapping[str, typ.Any]:
    """Execute the config module and return its declared configuration.

    A module-level ``config`` (mapping, ``SiteConfig``, or a zero-argument
    callable returning either) takes precedence; otherwise the module's public
    names are read as configuration fields.
    """
    spec = importlib.util.spec_from_file_location(CONFIG_MODULE_NAME, path)
    if spec is None or spec.loader is None:  # pragma: no cover - import guard
        msg = f"Cannot load configuration module '{path}'."
        raise SiteConfigError(msg)
    module = importlib.util.module_from_spec(spec)
    sys.modules[CONFIG_MODULE_NAME] = module
    try:
        spec.loader.exec_module(module)
    finally:
        sys.modules.pop(CONFIG_MODULE_NAME, None)

    declared = getattr(module, "config", None)
    if declared is None:
        return {
            name: value
            for name, value in vars(module).items()
            if not name.startswith("_")
        }
    if callable(declared) and not isinstance(declared, SiteConfig):
        declared = declared()
    if not isinstance(declared, (SiteConfig, cabc.Mapping)):
        msg = "The 'config' object must be a mapping or a SiteConfig."
        raise TypeError(msg)
    return declared


def _load_yaml_config(path: Path) -> cabc.Mapping[str, typ.Any]:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    return loaded


def build_site_config(
    raw: cabc.Mapping[str, typ.Any], *, path: Path | None = None
) -> SiteConfig:
    """Build a :class:`SiteConfig` from a mapping of configuration fields.

    Both the Python spellings (``page_components``) and the camelCase
    spellings used by JavaScript-era configs (``pageComponents``) are accepted.
    String values in callable slots are imported as ``package.module:name``.
    """
    if not isinstance(raw, cabc.Mapping):
        msg = "Configuration must be a mapping."
        raise TypeError(msg)

    hooks = Plugin(name="config")
    for hook in Hook:
        callback = _resolve_callable(
            _first(raw, hook.value, hook.camel_name), key=hook.value
        )
        if callback is not None:
            setattr(hooks, hook.value, callback)

    return SiteConfig(
        input_path=Path(_first(raw, "input", "source", default=DEFAULT_INPUT)),
        output_path=Path(_first(raw, "output", default=DEFAULT_OUTPUT)),
        site=_build_site_metadata(raw),
        page_components=_resolve_components(
            _first(raw, "page_components", "pageComponents")
        ),
        page_wrapper=_resolve_callable(
            _first(raw, "page_wrapper", "pageWrapper"), key="page_wrapper"
        ),
        plugins=_resolve_plugins(raw.get("plugins")),
        hooks=hooks,
        extends=_resolve_theme(raw.get("extends")),
        lang=_optional_str(raw.get("lang")),
        head_components=_sequence(
            _first(raw, "head_components", "headComponents"), key="head_components"
        ),
        html_attributes=_mapping(
            _first(raw, "html_attributes", "htmlAttributes"), key="html_attributes"
        ),
        body_attributes=_mapping(
            _first(raw, "body_attributes", "bodyAttributes"), key="body_attributes"
        ),
        theme_config=_mapping(
            _first(raw, "theme_config", "themeConfig"), key="theme_config"
        ),
        strict=_flag(raw.get("strict"), key="strict"),
        path=path,
    )


def _build_site_metadata(raw: cabc.Mapping[str, typ.Any]) -> SiteMetadata:
    """Read metadata from ``site_metadata`` or the top-level fields."""
    nested = _first(raw, "site_metadata", "siteMetadata")
    extras: dict[str, typ.Any] = {}
    if nested is None:
        payload: cabc.Mapping[str, typ.Any] = raw
    else:
        payload = _mapping(nested, key="site_metadata")
        extras = {
            key: value
            for key, value in payload.items()
            if key not in {"title", "description", "data"}
        }
    data = {**extras, **_mapping(payload.get("data"), key="data")}
    return SiteMetadata(
        title=str(payload.get("title") or ""),
        description=str(payload.get("description") or ""),
        data=data,
    )


__all__ = ["build_site_config", "load_site_config"]
