"""Hook registry: registration, deprecation redirects and dispatch."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping
from functools import partial
from typing import TYPE_CHECKING, Any

from hookable.deprecation import DeprecationResolver
from hookable.models import (
    CallerStrategy,
    DeprecatedHook,
    DeprecationEntry,
    HookCallback,
    HookEvent,
    HookObserver,
    NestedHooks,
)
from hookable.utils import call_each_with, flat_hooks, parallel_caller, serial_caller

if TYPE_CHECKING:
    from hookable.config import HookableConfig

logger = logging.getLogger(__name__)


class HookHandle:
    """Single-use removal capability.

    The first call runs the bound removal and drops it, releasing whatever the
    removal closed over; later calls do nothing.
    """

    __slots__ = ("_remove",)

    def __init__(self, remove: Callable[[], None] | None = None) -> None:
        self._remove = remove

    def __call__(self) -> None:
        remove, self._remove = self._remove, None
        if remove is not None:
            remove()

    @property
    def active(self) -> bool:
        return self._remove is not None


def _index_of(items: list[Any], item: Any, identity_only: bool = True) -> int | None:
    for index, candidate in enumerate(items):
        if candidate is item:
            return index
    if identity_only:
        return None
    for index, candidate in enumerate(items):
        if candidate == item:
            return index
    return None


def _discard(items: list[Any], item: Any) -> None:
    index = _index_of(items, item)
    if index is not None:
        del items[index]


class Hookable:
    """In-process hook registry.

    Callbacks run in registration order. Each dispatch works on a snapshot of the
    callbacks registered when it started, so callbacks may register or remove hooks
    (themselves included) while a dispatch is running. Instances are not
    thread-safe; drive one registry from a single event loop.
    """

    def __init__(self) -> None:
        self._hooks: dict[str, list[HookCallback]] = {}
        self._before: list[HookObserver] = []
        self._after: list[HookObserver] = []
        self._deprecations = DeprecationResolver()

    def hook(self, name: str, fn: HookCallback) -> HookHandle:
        if not name or not callable(fn):
            return HookHandle()

        name = self._deprecations.redirect(name)
        self._hooks.setdefault(name, []).append(fn)
        logger.debug("Registered hook %s (%s callbacks)", name, len(self._hooks[name]))
        return HookHandle(partial(self._remove_callback, name, fn, True))

    def hook_once(self, name: str, fn: HookCallback) -> HookHandle:
        if not name or not callable(fn):
            return HookHandle()

        # Overlapping dispatches may each hold the wrapper in their snapshot.
        pending = [fn]

        def once(*args: Any) -> Any:
            if not pending:
                return None
            callback = pending.pop()
            unregister()
            return callback(*args)

        unregister = self.hook(name, once)
        return unregister

    def remove_hook(self, name: str, fn: HookCallback) -> None:
        """Remove the first registration of ``fn`` under ``name``.

        An identical callback is preferred; failing that, the first equal one is
        removed, so ``remove_hook(name, obj.method)`` works for bound methods.
        """
        self._remove_callback(name, fn, False)

    def _remove_callback(self, name: str, fn: HookCallback, identity_only: bool) -> None:
        callbacks = self._hooks.get(name)
        if callbacks is None:
            return
        index = _index_of(callbacks, fn, identity_only)
        if index is None:
            return
        del callbacks[index]
        if not callbacks:
            del self._hooks[name]
        logger.debug("Removed hook %s", name)

    def deprecate_hook(self, name: str, deprecated: DeprecationEntry | Mapping[str, Any]) -> None:
        # Only later registrations are redirected; callbacks already under `name` stay put.
        self._deprecations.deprecate(name, deprecated)

    def deprecate_hooks(self, deprecated_hooks: Mapping[str, DeprecationEntry | Mapping[str, Any]]) -> None:
        for name, deprecated in deprecated_hooks.items():
            self.deprecate_hook(name, deprecated)

    def deprecated_hooks(self) -> dict[str, DeprecatedHook]:
        return self._deprecations.entries()

    def add_hooks(self, config_hooks: NestedHooks) -> HookHandle:
        hooks = flat_hooks(config_hooks)
        handles = [self.hook(name, fn) for name, fn in hooks.items()]

        def remove_all() -> None:
            for handle in handles:
                handle()
            handles.clear()

        return HookHandle(remove_all)

    def remove_hooks(self, config_hooks: NestedHooks) -> None:
        for name, fn in flat_hooks(config_hooks).items():
            self.remove_hook(name, fn)

    def clear_hook(self, name: str) -> None:
        self._hooks.pop(name, None)

    def clear_hooks(self) -> None:
        self._hooks.clear()

    def hook_names(self) -> list[str]:
        return list(self._hooks)

    def has_hook(self, name: str) -> bool:
        return name in self._hooks

    def callbacks(self, name: str) -> list[HookCallback]:
        return list(self._hooks.get(name, ()))

    def call_hook(self, name: str, *args: Any) -> Any:
        """Run the callbacks for ``name`` one after another; returns an awaitable.

        Deprecation aliases are not followed: trigger the final hook name.
        """
        return self.call_hook_with(serial_caller, name, *args)

    def call_hook_parallel(self, name: str, *args: Any) -> Any:
        return self.call_hook_with(parallel_caller, name, *args)

    def call_hook_with(self, caller: CallerStrategy, name: str, *args: Any) -> Any:
        """Dispatch ``name`` through ``caller``, notifying before/after observers.

        When ``caller`` returns an awaitable, after-observers run once it settles,
        whether it succeeds or raises, and the returned awaitable yields the
        caller's result. Otherwise they run immediately and the result is returned
        as is.
        """
        event = HookEvent(name, args) if (self._before or self._after) else None
        if self._before:
            call_each_with(self._before, event)

        result = caller(self.callbacks(name), args)
        if inspect.isawaitable(result):
            return self._settle(result, name, args, event)

        if self._after:
            call_each_with(self._after, event or HookEvent(name, args))
        return result

    async def _settle(self, result: Any, name: str, args: tuple[Any, ...], event: HookEvent | None) -> Any:
        try:
            return await result
        finally:
            if self._after:
                call_each_with(self._after, event or HookEvent(name, args))

    def before_each(self, fn: HookObserver) -> HookHandle:
        self._before.append(fn)
        return HookHandle(partial(_discard, self._before, fn))

    def after_each(self, fn: HookObserver) -> HookHandle:
        self._after.append(fn)
        return HookHandle(partial(_discard, self._after, fn))


def create_hooks(config: HookableConfig | None = None) -> Hookable:
    hooks = Hookable()
    if config is not None:
        config.apply(hooks)
    return hooks
