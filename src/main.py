# src/main.py - v2
"""CLI entry point: get, set, list, delete, info and reset commands.

Usage:
    cachestore get <key>
    cachestore set <key> <value> [--ttl SECONDS] [--json]
    cachestore list [--tenant TENANT]
    cachestore delete <key>
    cachestore info
    cachestore reset --yes

Connection and encryption settings come from CACHESTORE_* environment
variables or a .env file.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from cachestore.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        from cachestore.config.settings import load_settings

        settings = load_settings()
        _setup_logging(settings, args.verbose)
        return asyncio.run(_run(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="cachestore",
        description=f"cachestore v{__version__} - encrypted, tenant-aware cache store",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- get ---
    p_get = subparsers.add_parser("get", help="Print the value stored under a key")
    p_get.add_argument("key", help="Entry key")
    p_get.set_defaults(func=_cmd_get)

    # --- set ---
    p_set = subparsers.add_parser("set", help="Store a value under a key")
    p_set.add_argument("key", help="Entry key")
    p_set.add_argument("value", help="Value (a plain string unless --json)")
    p_set.add_argument(
        "--ttl", type=float, default=None,
        help="Expiration in seconds (default: CACHESTORE_DEFAULT_EXPIRATION_S)",
    )
    p_set.add_argument(
        "--json", dest="as_json", action="store_true",
        help="Parse VALUE as JSON (numbers, booleans, objects)",
    )
    p_set.set_defaults(func=_cmd_set)

    # --- list ---
    p_list = subparsers.add_parser("list", help="List entries")
    p_list.add_argument(
        "--tenant", default=None,
        help="Only keys prefixed with '<TENANT>-'",
    )
    p_list.set_defaults(func=_cmd_list)

    # --- delete ---
    p_delete = subparsers.add_parser("delete", help="Delete a key")
    p_delete.add_argument("key", help="Entry key")
    p_delete.set_defaults(func=_cmd_delete)

    # --- info ---
    p_info = subparsers.add_parser("info", help="Show store information")
    p_info.set_defaults(func=_cmd_info)

    # --- reset ---
    p_reset = subparsers.add_parser(
        "reset", help="Delete every entry in the configured namespace",
    )
    p_reset.add_argument(
        "--yes", action="store_true",
        help="Confirm the irreversible flush",
    )
    p_reset.set_defaults(func=_cmd_reset)

    return parser


async def _run(args: argparse.Namespace, settings: Any) -> int:
    """Open the configured store around one command."""
    from cachestore.cache.cache_factory import create_cache_store
    from cachestore.logging.context import set_store_context

    store = create_cache_store(settings)
    set_store_context(str(store))
    async with store:
        return await args.func(args, store, settings)


async def _cmd_get(args: argparse.Namespace, store: Any, settings: Any) -> int:
    from cachestore.cache.options import with_key

    entry = await store.get(with_key(args.key))
    if entry is None:
        logger.info("Key not found: %s", args.key)
        return 1
    print(_render(entry.value))
    return 0


async def _cmd_set(args: argparse.Namespace, store: Any, settings: Any) -> int:
    from cachestore.cache.options import with_expiration, with_key_value

    value: Any = args.value
    if args.as_json:
        try:
            value = json.loads(args.value)
        except json.JSONDecodeError as e:
            logger.error("VALUE is not valid JSON: %s", e)
            return 1

    ttl = settings.default_expiration_s if args.ttl is None else args.ttl
    await store.set(with_key_value(args.key, value), with_expiration(ttl))
    return 0


async def _cmd_list(args: argparse.Namespace, store: Any, settings: Any) -> int:
    from cachestore.cache.options import with_tenant_uuid
    from cachestore.logging.context import set_tenant_context

    opts = []
    if args.tenant:
        set_tenant_context(args.tenant)
        opts.append(with_tenant_uuid(args.tenant))

    entries, total = await store.list(*opts)
    for entry in sorted(entries, key=lambda e: e.key):
        print(f"{entry.key}\t{_render(entry.value)}")
    print(f"\n{total} entries")
    return 0


async def _cmd_delete(args: argparse.Namespace, store: Any, settings: Any) -> int:
    from cachestore.cache.options import with_key

    await store.delete(with_key(args.key))
    return 0


async def _cmd_info(args: argparse.Namespace, store: Any, settings: Any) -> int:
    info = await store.info()
    print(f"Store type:  {info.store_type}")
    print(f"Items:       {info.num_items}")
    print(f"Connection:  {info.connection_info}")
    return 0


async def _cmd_reset(args: argparse.Namespace, store: Any, settings: Any) -> int:
    if not args.yes:
        logger.error("Refusing to flush %s without --yes", store)
        return 1
    await store.reset()
    logger.info("Flushed %s", store)
    return 0


def _render(value: Any) -> str:
    """Strings print as-is, raw bytes escaped, everything else as JSON."""
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="backslashreplace")
    return json.dumps(value, ensure_ascii=False)


def _setup_logging(settings: Any, verbose: bool) -> None:
    """Configure logging from settings; --verbose forces DEBUG."""
    from cachestore.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
