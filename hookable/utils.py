"""Name flattening and callback invocation strategies."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence
from typing import Any, TypeVar

from hookable.models import HookCallback, NestedHooks

T = TypeVar("T")


def flat_hooks(
    config_hooks: NestedHooks,
    hooks: dict[str, HookCallback] | None = None,
    parent_name: str | None = None,
) -> dict[str, HookCallback]:
    """Flatten nested hook config into ``{"parent:child": callback}``.

    Leaves that are neither mappings nor callables (``None`` included) are dropped.
    """
    if hooks is None:
        hooks = {}
    for key, sub_hook in config_hooks.items():
        name = f"{parent_name}:{key}" if parent_name else key
        if isinstance(sub_hook, Mapping):
            flat_hooks(sub_hook, hooks, name)
        elif callable(sub_hook):
            hooks[name] = sub_hook
    return hooks


def merge_hooks(*configs: NestedHooks) -> dict[str, HookCallback]:
    """Merge several nested configs into one flat mapping.

    Names contributed by more than one config are combined into a single callback
    that runs every contributor serially, in config order.
    """
    grouped: dict[str, list[HookCallback]] = {}
    for config in configs:
        for name, callback in flat_hooks(config).items():
            grouped.setdefault(name, []).append(callback)

    merged: dict[str, HookCallback] = {}
    for name, callbacks in grouped.items():
        merged[name] = callbacks[0] if len(callbacks) == 1 else _serial_callback(callbacks)
    return merged


def _serial_callback(callbacks: list[HookCallback]) -> HookCallback:
    def run(*args: Any) -> Awaitable[Any]:
        return serial(callbacks, lambda callback: callback(*args))

    return run


async def serial(tasks: Iterable[T], fn: Callable[[T], Any]) -> Any:
    """Run ``fn`` over ``tasks`` one at a time, awaiting each result before the next."""
    result = None
    for task in tasks:
        result = fn(task)
        if inspect.isawaitable(result):
            result = await result
    return result


async def serial_caller(callbacks: Sequence[HookCallback], args: Sequence[Any] = ()) -> Any:
    return await serial(callbacks, lambda callback: callback(*args))


async def parallel_caller(callbacks: Sequence[HookCallback], args: Sequence[Any] = ()) -> list[Any]:
    # gather starts every callback in order before any of them is awaited; the first
    # failure propagates immediately and the remaining callbacks keep running.
    if not callbacks:
        return []
    return list(await asyncio.gather(*(_invoke(callback, args) for callback in callbacks)))


async def _invoke(callback: HookCallback, args: Sequence[Any]) -> Any:
    result = callback(*args)
    if inspect.isawaitable(result):
        return await result
    return result


def call_each_with(callbacks: Iterable[Callable[[Any], Any]], arg: Any = None) -> None:
    for callback in list(callbacks):
        callback(arg)
