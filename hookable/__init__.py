"""Named hook registration and dispatch."""

from .config import HookableConfig, load_hookable_config
from .deprecation import DeprecationResolver
from .errors import DeprecationCycleError, HookableError
from .models import DeprecatedHook, HookEvent
from .registry import HookHandle, Hookable, create_hooks
from .utils import call_each_with, flat_hooks, merge_hooks, parallel_caller, serial, serial_caller

__all__ = [
    "DeprecatedHook",
    "DeprecationCycleError",
    "DeprecationResolver",
    "HookEvent",
    "HookHandle",
    "Hookable",
    "HookableConfig",
    "HookableError",
    "call_each_with",
    "create_hooks",
    "flat_hooks",
    "load_hookable_config",
    "merge_hooks",
    "parallel_caller",
    "serial",
    "serial_caller",
]
