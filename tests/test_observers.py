import asyncio
import time

import pytest

from hookable.models import HookEvent
from hookable.registry import Hookable


def test_observers_wrap_sync_dispatch() -> None:
    hooks = Hookable()
    events: list[str] = []

    hooks.before_each(lambda event: events.append(f"before:{event.name}"))
    hooks.after_each(lambda event: events.append(f"after:{event.name}"))
    hooks.hook("test:hook", lambda: events.append("hook"))

    hooks.call_hook_with(lambda callbacks, args: [callback(*args) for callback in callbacks], "test:hook")

    assert events == ["before:test:hook", "hook", "after:test:hook"]


def test_observers_share_one_event_per_dispatch() -> None:
    hooks = Hookable()
    seen: list[HookEvent] = []
    durations: list[float] = []

    def before(event: HookEvent) -> None:
        event.context["start"] = time.perf_counter()
        seen.append(event)

    def after(event: HookEvent) -> None:
        durations.append(time.perf_counter() - event.context["start"])
        seen.append(event)

    async def callback(value: int) -> None:
        await asyncio.sleep(0.01)

    hooks.before_each(before)
    hooks.after_each(after)
    hooks.hook("test:hook", callback)

    asyncio.run(hooks.call_hook("test:hook", 42))

    assert len(seen) == 2
    assert seen[0] is seen[1]
    assert seen[0].name == "test:hook"
    assert seen[0].args == (42,)
    assert durations[0] > 0


def test_after_observers_run_after_async_callbacks_settle() -> None:
    hooks = Hookable()
    events: list[str] = []

    async def callback() -> None:
        await asyncio.sleep(0.01)
        events.append("hook")

    hooks.after_each(lambda event: events.append("after"))
    hooks.hook("test:hook", callback)

    asyncio.run(hooks.call_hook_parallel("test:hook"))

    assert events == ["hook", "after"]


def test_after_observers_run_when_dispatch_fails() -> None:
    hooks = Hookable()
    events: list[str] = []

    async def callback() -> None:
        raise RuntimeError("boom")

    hooks.after_each(lambda event: events.append(f"after:{event.name}"))
    hooks.hook("test:hook", callback)

    with pytest.raises(RuntimeError, match="boom"):
        asyncio.run(hooks.call_hook("test:hook"))
    assert events == ["after:test:hook"]


def test_observers_run_for_names_without_callbacks() -> None:
    hooks = Hookable()
    names: list[str] = []
    hooks.before_each(lambda event: names.append(event.name))

    asyncio.run(hooks.call_hook("missing"))

    assert names == ["missing"]


def test_observer_handles_unsubscribe() -> None:
    hooks = Hookable()
    events: list[str] = []

    remove_before = hooks.before_each(lambda event: events.append("before"))
    remove_after = hooks.after_each(lambda event: events.append("after"))

    remove_before()
    remove_after()
    remove_after()
    asyncio.run(hooks.call_hook("test:hook"))

    assert events == []
