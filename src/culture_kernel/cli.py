"""
Culture Kernel CLI.

Usage:
    culture-kernel seed [--db path] [--source rituals.json]
    culture-kernel list [--db path]
    culture-kernel serve [--port 8080] [--host 0.0.0.0]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from . import __version__
from .config import KernelConfig
from .kernel.codec import decode_all
from .kernel.errors import ConfigError, InitError, StoreError
from .kernel.seeding import ensure_seeded, seed
from .kernel.store import CatalogStore
from .logs import configure_logging
from .render import render_terminal

logger = logging.getLogger(__name__)


def build_config(args: argparse.Namespace) -> KernelConfig:
    return KernelConfig.from_env(
        db=args.db,
        source=args.source,
        host=getattr(args, "host", None),
        port=getattr(args, "port", None),
    )


def open_store(config: KernelConfig) -> CatalogStore:
    return CatalogStore(config.db_path, timeout=config.timeout)


# =============================================================================
# Verbs
# =============================================================================


def cmd_seed(args: argparse.Namespace, config: KernelConfig) -> int:
    """Reseed the catalog from the definition source, overwriting by id."""
    store = open_store(config)

    try:
        written = seed(store, config.source_path, replace=args.reset)
    except (InitError, StoreError) as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1

    print(f"✓ Database seeded successfully: {written} rituals in {config.db_path}")
    return 0


def cmd_list(args: argparse.Namespace, config: KernelConfig) -> int:
    """Print every ritual in the catalog."""
    store = open_store(config)

    try:
        payloads = store.get_all()
    except StoreError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1

    print(render_terminal(decode_all(payloads)), end="")
    return 0


def cmd_serve(args: argparse.Namespace, config: KernelConfig) -> int:
    """Self-heal the catalog, then serve it over HTTP."""
    import uvicorn

    from .api import create_app

    store = open_store(config)

    try:
        if ensure_seeded(store, config.source_path):
            print("✓ Auto-seeding complete.")
    except InitError as e:
        print(f"✗ Refusing to serve: {e}", file=sys.stderr)
        return 1

    print(f"Starting Culture Kernel API on {config.host}:{config.port}")
    uvicorn.run(create_app(store), host=config.host, port=config.port, log_level=config.log_level.lower())
    return 0


# =============================================================================
# Entry point
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="culture-kernel",
        description="The Operating System for Organizational Culture",
    )
    parser.add_argument("--db", help="Catalog database path (default: $CULTURE_DB or ./culture.db)")
    parser.add_argument("--source", help="Ritual definition file (default: $CULTURE_RITUALS or bundled)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    seed_parser = subparsers.add_parser("seed", help="Seed the database")
    seed_parser.add_argument("--reset", action="store_true", help="Remove rituals missing from the source")

    subparsers.add_parser("list", help="List all rituals in the database")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP API server")
    serve_parser.add_argument("-p", "--port", type=int, default=None, help="TCP port (default: 8080)")
    serve_parser.add_argument("--host", default=None, help="Bind address (default: 0.0.0.0)")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1

    configure_logging("DEBUG" if args.verbose else config.log_level)

    if args.command == "seed":
        return cmd_seed(args, config)
    elif args.command == "list":
        return cmd_list(args, config)
    elif args.command == "serve":
        return cmd_serve(args, config)

    print(f"Culture Kernel v{__version__}")
    print("Run 'culture-kernel --help' for commands.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
