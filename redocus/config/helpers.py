"""Utility helpers shared by the redocus configuration loader."""

from __future__ import annotations

import collections.abc as cabc
import importlib
import inspect
import typing as typ

from .models import SiteConfigError, Theme

_MISSING = object()


def _first(raw: cabc.Mapping[str, typ.Any], *keys: str, default: typ.Any = None) -> typ.Any:
    """Return the value of the first key present in ``raw``."""
    for key in keys:
        value = raw.get(key, _MISSING)
        if value is not _MISSING and value is not None:
            return value
    return default


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _import_object(reference: str) -> typ.Any:
    """Import ``package.module:attribute`` (or a bare module path)."""
    module_name, _, attribute = reference.partition(":")
    try:
        target = importlib.import_module(module_name.strip())
    except ImportError as exc:
        msg = f"Cannot import '{module_name}' referenced as '{reference}'."
        raise SiteConfigError(msg) from exc
    for part in filter(None, attribute.strip().split(".")):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            msg = f"'{reference}' does not resolve to an object."
            raise SiteConfigError(msg) from exc
    return target


def _resolve_callable(value: object | None, *, key: str) -> cabc.Callable[..., typ.Any] | None:
    """Return ``value`` as a callable, importing string references."""
    if value is None:
        return None
    if isinstance(value, str):
        value = _import_object(value)
    if not callable(value):
        msg = f"'{key}' must be callable, got {type(value).__name__}."
        raise SiteConfigError(msg)
    return value


def _instantiate(entry: object) -> typ.Any:
    """Resolve a plugin or theme entry.

    ``{"use": "pkg.mod:factory", "options": {...}}`` calls the factory with the
    options; a bare string imports the object and instantiates it when it is a
    class; anything else is returned unchanged.
    """
    match entry:
        case {"use": str() as reference, **rest}:
            options = rest.get("options") or {}
            if not isinstance(options, cabc.Mapping):
                msg = f"Options for '{reference}' must be a mapping."
                raise SiteConfigError(msg)
            return _import_object(reference)(**options)
        case str():
            target = _import_object(entry)
            return target() if inspect.isclass(target) else target
        case _:
            return entry


def _resolve_plugins(value: object | None) -> list[object] | None:
    """Return the ordered plugin list, or None when plugins are not configured."""
    if value is None:
        return None
    if isinstance(value, (str, cabc.Mapping)) or not isinstance(value, cabc.Iterable):
        msg = "'plugins' must be a sequence."
        raise SiteConfigError(msg)
    return [_instantiate(entry) for entry in value]


def _resolve_components(value: object | None) -> dict[str, typ.Any]:
    """Return the tag-to-renderer mapping, importing string references."""
    if value is None:
        return {}
    if not isinstance(value, cabc.Mapping):
        msg = "'page_components' must be a mapping."
        raise SiteConfigError(msg)
    return {
        str(tag): _import_object(renderer) if isinstance(renderer, str) else renderer
        for tag, renderer in value.items()
    }


def _resolve_theme(value: object | None) -> Theme | None:
    """Return the extended theme from an instance, factory or mapping."""
    if value is None:
        return None
    theme = _instantiate(value)
    if callable(theme) and not isinstance(theme, Theme):
        theme = theme()
    if isinstance(theme, cabc.Mapping):
        theme = Theme(
            html_attributes=dict(_first(theme, "html_attributes", default={})),
            body_attributes=dict(_first(theme, "body_attributes", default={})),
            head_components=list(_first(theme, "head_components", default=[])),
            page_components=_resolve_components(
                _first(theme, "page_components", "pageComponents")
            ),
            page_wrapper=_resolve_callable(
                _first(theme, "page_wrapper", "pageWrapper"), key="page_wrapper"
            ),
            theme_config=dict(_first(theme, "theme_config", "themeConfig", default={})),
        )
    if not isinstance(theme, Theme):
        msg = f"'extends' must resolve to a Theme, got {type(theme).__name__}."
        raise SiteConfigError(msg)
    return theme


def _flag(value: object | None, *, key: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        msg = f"'{key}' must be true or false, got {value!r}."
        raise SiteConfigError(msg)
    return value


def _mapping(value: object | None, *, key: str) -> dict[str, typ.Any]:
    if value is None:
        return {}
    if not isinstance(value, cabc.Mapping):
        msg = f"'{key}' must be a mapping."
        raise SiteConfigError(msg)
    return dict(value)


def _sequence(value: object | None, *, key: str) -> list[typ.Any]:
    if value is None:
        return []
    if isinstance(value, (str, cabc.Mapping)) or not isinstance(value, cabc.Iterable):
        msg = f"'{key}' must be a sequence."
        raise SiteConfigError(msg)
    return list(value)


__all__ = [
    "_first",
    "_flag",
    "_import_object",
    "_instantiate",
    "_mapping",
    "_optional_str",
    "_resolve_callable",
    "_resolve_components",
    "_resolve_plugins",
    "_resolve_theme",
    "_sequence",
]
