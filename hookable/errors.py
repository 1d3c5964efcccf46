"""Exception types raised by hookable."""

from __future__ import annotations


class HookableError(Exception):
    """Base class for hookable errors."""


class DeprecationCycleError(HookableError, ValueError):
    def __init__(self, chain: list[str]) -> None:
        self.chain = list(chain)
        super().__init__("Circular hook deprecation: " + " -> ".join(self.chain))
