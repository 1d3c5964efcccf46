"""CLI for inspecting hook deprecation config."""

from __future__ import annotations

import argparse
import logging

from hookable.config import HookableConfig, load_hookable_config
from hookable.deprecation import DeprecationResolver
from hookable.errors import DeprecationCycleError
from hookable.logging_utils import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect hookable deprecation config")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ERROR)")

    sub = parser.add_subparsers(dest="command", required=True)

    deprecations = sub.add_parser("deprecations", help="List deprecated hooks with their final targets")
    deprecations.add_argument("--config", required=True, help="Path to hookable YAML config")

    resolve = sub.add_parser("resolve", help="Print the hook name a registration would land on")
    resolve.add_argument("name", help="Hook name to resolve")
    resolve.add_argument("--config", help="Optional hookable YAML config")
    return parser


def _build_resolver(config: HookableConfig) -> DeprecationResolver:
    resolver = DeprecationResolver()
    for name, deprecated in config.deprecated_hooks.items():
        resolver.deprecate(name, deprecated)
    return resolver


def _run_deprecations(args: argparse.Namespace) -> int:
    resolver = _build_resolver(load_hookable_config(args.config))
    entries = resolver.entries()
    logger.info("Loaded %s deprecated hooks from %s", len(entries), args.config)
    for name in sorted(entries):
        final = resolver.resolve(name)[0]
        print(f"{name} -> {final}: {resolver.message_for(name)}")
    return 0


def _run_resolve(args: argparse.Namespace) -> int:
    resolver = _build_resolver(load_hookable_config(args.config))
    print(resolver.resolve(args.name)[0])
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        if args.command == "deprecations":
            return _run_deprecations(args)
        if args.command == "resolve":
            return _run_resolve(args)
    except DeprecationCycleError as exc:
        logger.error("%s", exc)
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
