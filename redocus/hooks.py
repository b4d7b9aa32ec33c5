"""Lifecycle hooks and the dispatcher that runs them across plugins.

Plugins are capability sets: any object, module or mapping exposing a subset
of the hook names listed in :class:`Hook`. :meth:`Plugin.from_object` reads
those members once, at registration, into typed callback slots; dispatch then
resolves a slot from the enum member without looking names up again.

Every hook is called with keyword arguments ``context``, ``actions`` and
``log`` plus the stage payload, so plugins declare what they need and absorb
the rest with ``**_``:

>>> def on_page_create(*, page, log, **_):
...     log.info("created %s", page.name)
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import logging
import typing as typ

if typ.TYPE_CHECKING:
    from .builder import Context
    from .pages import Actions

HookFunction = cabc.Callable[..., typ.Any]


class Hook(enum.Enum):
    """Lifecycle extension points, in pipeline order."""

    ON_INIT = "on_init"
    CREATE_PAGES = "create_pages"
    ON_PAGE_CREATE = "on_page_create"
    ON_PRE_BUILD = "on_pre_build"
    ON_RENDER = "on_render"
    ON_POST_BUILD = "on_post_build"

    @property
    def camel_name(self) -> str:
        """Return the camelCase spelling used by JavaScript-era configs."""
        head, *rest = self.value.split("_")
        return head + "".join(part.title() for part in rest)


def _member(source: object, key: str) -> object | None:
    if isinstance(source, cabc.Mapping):
        return source.get(key)
    return getattr(source, key, None)


@dc.dataclass(slots=True)
class Plugin:
    """Optional callback slots, one per lifecycle hook."""

    name: str = "plugin"
    on_init: HookFunction | None = None
    create_pages: HookFunction | None = None
    on_page_create: HookFunction | None = None
    on_pre_build: HookFunction | None = None
    on_render: HookFunction | None = None
    on_post_build: HookFunction | None = None

    @classmethod
    def from_object(cls, source: object, *, name: str | None = None) -> Plugin:
        """Adapt ``source`` into a plugin, keeping only callable hook members.

        Parameters
        ----------
        source : object
            Plugin instance, module, mapping or an existing ``Plugin``.
        name : str, optional
            Label used in log messages; defaults to the source's type or
            module name.

        Returns
        -------
        Plugin
            A plugin whose slots hold the hooks ``source`` implements. Both the
            Python spelling (``on_init``) and the camelCase spelling
            (``onInit``) are recognized.
        """
        if isinstance(source, Plugin):
            return source
        slots: dict[str, HookFunction] = {}
        for hook in Hook:
            candidate = _member(source, hook.value)
            if candidate is None:
                candidate = _member(source, hook.camel_name)
            if callable(candidate):
                slots[hook.value] = candidate
        label = name or getattr(source, "__name__", None) or type(source).__name__
        return cls(name=label, **slots)

    def handler(self, hook: Hook) -> HookFunction | None:
        """Return the callback registered for ``hook``, if any."""
        match hook:
            case Hook.ON_INIT:
                return self.on_init
            case Hook.CREATE_PAGES:
                return self.create_pages
            case Hook.ON_PAGE_CREATE:
                return self.on_page_create
            case Hook.ON_PRE_BUILD:
                return self.on_pre_build
            case Hook.ON_RENDER:
                return self.on_render
            case Hook.ON_POST_BUILD:
                return self.on_post_build


class HookDispatcher:
    """Invoke a lifecycle hook on every plugin, strictly in list order."""

    def __init__(
        self,
        plugins: cabc.Sequence[Plugin],
        *,
        context: Context,
        actions: Actions,
        log: logging.Logger,
    ) -> None:
        self.plugins = list(plugins)
        self.context = context
        self.actions = actions
        self.log = log

    def call(self, hook: Hook, **extra: typ.Any) -> None:
        """Run ``hook`` on each plugin that implements it.

        Each callback completes before the next plugin is considered. Return
        values are discarded; hooks communicate by mutating the context, the
        registry, or the mutators passed in ``extra``. Exceptions propagate
        unchanged and stop the dispatch.
        """
        for plugin in self.plugins:
            callback = plugin.handler(hook)
            if callback is None:
                continue
            self.log.debug("calling %s on %s", hook.value, plugin.name)
            callback(context=self.context, actions=self.actions, log=self.log, **extra)


__all__ = ["Hook", "HookDispatcher", "HookFunction", "Plugin"]
