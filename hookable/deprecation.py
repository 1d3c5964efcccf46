"""Deprecation aliases for renamed hooks."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from hookable.errors import DeprecationCycleError
from hookable.models import DeprecatedHook, DeprecationEntry

logger = logging.getLogger(__name__)


def as_deprecated_hook(deprecation: DeprecationEntry | Mapping[str, Any]) -> DeprecatedHook:
    if isinstance(deprecation, DeprecatedHook):
        return deprecation
    if isinstance(deprecation, str):
        return DeprecatedHook(to=deprecation)
    return DeprecatedHook.model_validate(deprecation)


class DeprecationResolver:
    """Maps deprecated hook names to their replacements.

    Chains are followed to the final name. Circular chains raise
    ``DeprecationCycleError`` rather than looping.
    """

    def __init__(self) -> None:
        self._deprecated: dict[str, DeprecatedHook] = {}
        self._warned: set[str] = set()

    def deprecate(self, name: str, deprecation: DeprecationEntry | Mapping[str, Any]) -> DeprecatedHook:
        entry = as_deprecated_hook(deprecation)
        self._deprecated[name] = entry
        self._warned.discard(name)
        logger.debug("Deprecated hook %s -> %s", name, entry.to)
        return entry

    def is_deprecated(self, name: str) -> bool:
        return name in self._deprecated

    def entries(self) -> dict[str, DeprecatedHook]:
        return dict(self._deprecated)

    def resolve(self, name: str) -> tuple[str, DeprecatedHook | None]:
        """Return the final name for ``name`` and the last entry followed, if any."""
        chain = [name]
        current = name
        entry: DeprecatedHook | None = None
        while current in self._deprecated:
            entry = self._deprecated[current]
            current = entry.to
            if current in chain:
                raise DeprecationCycleError(chain + [current])
            chain.append(current)
        return current, entry

    def message_for(self, name: str) -> str | None:
        final, entry = self.resolve(name)
        if entry is None:
            return None
        # The generated message names the end of the chain, not the next hop.
        return entry.message or f"{name} hook has been deprecated, please use {final}"

    def redirect(self, name: str) -> str:
        """Resolve ``name`` for a registration, warning once per deprecated alias."""
        final = self.resolve(name)[0]
        if final != name and name not in self._warned:
            self._warned.add(name)
            logger.warning(self.message_for(name))
        return final
