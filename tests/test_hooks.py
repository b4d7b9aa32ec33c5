"""Unit tests for lifecycle hook dispatch.

The dispatcher must call plugins strictly in list order, pass the common
``context``/``actions``/``log`` arguments plus the stage payload, ignore
plugins lacking a hook, and stop at the first exception.
"""

from __future__ import annotations

import logging
import typing as typ
from types import SimpleNamespace

import pytest

from redocus.hooks import Hook, HookDispatcher, Plugin


class _Recorder:
    def __init__(self, label: str, calls: list[tuple[str, str]]) -> None:
        self.label = label
        self.calls = calls

    def on_init(self, **_: typ.Any) -> None:
        self.calls.append((self.label, "on_init"))

    def on_render(self, *, page: str, **_: typ.Any) -> None:
        self.calls.append((self.label, f"on_render:{page}"))


def _dispatcher(plugins: list[Plugin]) -> HookDispatcher:
    return HookDispatcher(
        plugins,
        context=SimpleNamespace(name="ctx"),  # type: ignore[arg-type]
        actions=SimpleNamespace(name="actions"),  # type: ignore[arg-type]
        log=logging.getLogger("redocus.tests"),
    )


def test_from_object_keeps_only_callable_hooks() -> None:
    """Non-callable members and unknown names are ignored."""
    source = SimpleNamespace(on_init=lambda **_: None, on_render="not callable", other=1)
    plugin = Plugin.from_object(source)
    assert plugin.handler(Hook.ON_INIT) is source.on_init
    assert plugin.handler(Hook.ON_RENDER) is None
    assert plugin.handler(Hook.CREATE_PAGES) is None


def test_from_object_accepts_mappings_and_camel_case() -> None:
    """Mappings work as plugins and camelCase hook names are recognized."""

    def create_pages(**_: typ.Any) -> None:
        return None

    plugin = Plugin.from_object({"createPages": create_pages}, name="legacy")
    assert plugin.name == "legacy"
    assert plugin.handler(Hook.CREATE_PAGES) is create_pages


def test_from_object_returns_existing_plugin() -> None:
    """Adapting a Plugin is a no-op."""
    plugin = Plugin(name="ready")
    assert Plugin.from_object(plugin) is plugin


def test_camel_names() -> None:
    """Every hook exposes its camelCase spelling."""
    assert [hook.camel_name for hook in Hook] == [
        "onInit",
        "createPages",
        "onPageCreate",
        "onPreBuild",
        "onRender",
        "onPostBuild",
    ]


def test_call_runs_plugins_in_list_order() -> None:
    """Plugins A, B, C record their invocation as A, B, C."""
    calls: list[tuple[str, str]] = []
    plugins = [Plugin.from_object(_Recorder(label, calls)) for label in "ABC"]
    _dispatcher(plugins).call(Hook.ON_INIT)
    assert calls == [("A", "on_init"), ("B", "on_init"), ("C", "on_init")]


def test_call_passes_common_arguments_and_payload() -> None:
    """Hooks receive context, actions, log and the stage payload."""
    received: dict[str, typ.Any] = {}

    def on_page_create(**kwargs: typ.Any) -> None:
        received.update(kwargs)

    dispatcher = _dispatcher([Plugin(on_page_create=on_page_create)])
    dispatcher.call(Hook.ON_PAGE_CREATE, page="intro")
    assert set(received) == {"context", "actions", "log", "page"}
    assert received["context"].name == "ctx"
    assert received["actions"].name == "actions"
    assert received["page"] == "intro"


def test_call_skips_plugins_without_the_hook() -> None:
    """A plugin that does not implement a hook is simply passed over."""
    calls: list[tuple[str, str]] = []
    plugins = [Plugin(name="empty"), Plugin.from_object(_Recorder("B", calls))]
    _dispatcher(plugins).call(Hook.ON_RENDER, page="p1")
    assert calls == [("B", "on_render:p1")]


def test_call_ignores_return_values() -> None:
    """Hook return values are discarded."""
    plugin = Plugin(on_init=lambda **_: "ignored")
    assert _dispatcher([plugin]).call(Hook.ON_INIT) is None


def test_exception_stops_remaining_plugins() -> None:
    """A failing hook propagates and later plugins never run."""
    calls: list[tuple[str, str]] = []

    def explode(**_: typ.Any) -> None:
        msg = "boom"
        raise RuntimeError(msg)

    plugins = [
        Plugin.from_object(_Recorder("A", calls)),
        Plugin(on_init=explode),
        Plugin.from_object(_Recorder("C", calls)),
    ]
    with pytest.raises(RuntimeError, match="boom"):
        _dispatcher(plugins).call(Hook.ON_INIT)
    assert calls == [("A", "on_init")]
