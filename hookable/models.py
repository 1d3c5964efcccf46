"""Core types shared by the registry, resolver and caller strategies."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from pydantic import BaseModel, ConfigDict

HookCallback = Callable[..., Any]
CallerStrategy = Callable[[Sequence[HookCallback], Sequence[Any]], Union[Any, Awaitable[Any]]]
NestedHooks = Mapping[str, Union[HookCallback, "NestedHooks", None]]


class DeprecatedHook(BaseModel):
    model_config = ConfigDict(extra="forbid")

    to: str
    message: str | None = None


DeprecationEntry = Union[str, DeprecatedHook]


@dataclass(frozen=True)
class HookEvent:
    """Shared record handed to before- and after-observers of one dispatch.

    ``name`` and ``args`` are fixed for the dispatch; ``context`` is a free-form
    bag observers may write to, e.g. to stash a start time in the before-observer
    and read it back in the after-observer.
    """

    name: str
    args: tuple[Any, ...]
    context: dict[str, Any] = field(default_factory=dict)


HookObserver = Callable[[HookEvent], Any]
