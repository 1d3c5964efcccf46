"""Configuration models and loading for hookable."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from hookable.models import DeprecatedHook

if TYPE_CHECKING:
    from hookable.registry import Hookable


class HookableConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    deprecated_hooks: dict[str, str | DeprecatedHook] = Field(default_factory=dict)

    def apply(self, hooks: Hookable) -> None:
        hooks.deprecate_hooks(self.deprecated_hooks)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_yaml_dict(path: str | Path | None) -> dict[str, Any]:
    if not path:
        return {}
    path = Path(path)
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text())
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML at {path} must decode to a mapping")
    return data


def load_hookable_config(
    path: str | Path | None = None,
    runtime_override: dict[str, Any] | None = None,
) -> HookableConfig:
    """Load config with precedence runtime override > YAML file."""
    merged = load_yaml_dict(path)
    if runtime_override:
        merged = _deep_merge(merged, runtime_override)
    return HookableConfig.model_validate(merged)
