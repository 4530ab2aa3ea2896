# src/main.py — v1
"""CLI entry point: serve, similar, compare, resolve commands.

Usage:
    toolcompare serve [--host H] [--port P]
    toolcompare similar <slug> [-k N]
    toolcompare compare <id> [<id> ...]
    toolcompare resolve <token> [<token> ...]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from toolcompare.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="toolcompare",
        description=f"toolcompare v{__version__}: similar tools and AI comparisons",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--catalog", type=Path, default=None,
        help="Catalog JSON file (default: CATALOG_PATH setting)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- serve ---
    p_serve = subparsers.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", default=None, help="Bind address")
    p_serve.add_argument("--port", type=int, default=None, help="Bind port")
    p_serve.set_defaults(func=_cmd_serve)

    # --- similar ---
    p_similar = subparsers.add_parser("similar", help="List tools similar to one tool")
    p_similar.add_argument("slug", help="Tool slug or alias")
    p_similar.add_argument(
        "-k", "--limit", type=int, default=None,
        help="Number of results (default: SIMILAR_LIMIT setting)",
    )
    p_similar.set_defaults(func=_cmd_similar)

    # --- compare ---
    p_compare = subparsers.add_parser("compare", help="Catalog comparison table as JSON")
    p_compare.add_argument("ids", nargs="+", help="Tool slugs or aliases (max 3 kept)")
    p_compare.set_defaults(func=_cmd_compare)

    # --- resolve ---
    p_resolve = subparsers.add_parser("resolve", help="Resolve aliases to canonical slugs")
    p_resolve.add_argument("tokens", nargs="+", help="Identifiers to resolve")
    p_resolve.set_defaults(func=_cmd_resolve)

    return parser


def _load_settings(args: argparse.Namespace):
    from toolcompare.config.settings import load_settings

    overrides: dict[str, object] = {}
    if args.catalog is not None:
        overrides["catalog_path"] = args.catalog
    return load_settings(**overrides)


def _load_snapshot(args: argparse.Namespace):
    from toolcompare.catalog.json_catalog import JsonCatalogProvider
    from toolcompare.catalog.snapshot import CatalogSnapshot

    settings = _load_settings(args)
    return settings, CatalogSnapshot.load(JsonCatalogProvider(settings.catalog_path))


async def _cmd_serve(args: argparse.Namespace) -> int:
    """Run the API under uvicorn."""
    import uvicorn

    from toolcompare.api.app import create_app
    from toolcompare.logging.logger import setup_logging

    settings = _load_settings(args)
    setup_logging(
        level="DEBUG" if args.verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
    config = uvicorn.Config(
        create_app(settings),
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_config=None,
    )
    await uvicorn.Server(config).serve()
    return 0


async def _cmd_similar(args: argparse.Namespace) -> int:
    """Print ranked alternatives for one tool."""
    from toolcompare.core.errors import ResolutionError
    from toolcompare.similarity.engine import SimilarityEngine

    settings, snapshot = _load_snapshot(args)
    engine = SimilarityEngine(snapshot, settings.similar_limit, settings.similar_min_score)
    try:
        ranked = engine.similar_to(args.slug, args.limit)
    except ResolutionError as exc:
        logger.error("%s", exc)
        return 1

    for i, row in enumerate(ranked, 1):
        print(f"{i:2d}. {row.entry.slug:<40s} {row.score:.4f}  {row.entry.name}")
    return 0


async def _cmd_compare(args: argparse.Namespace) -> int:
    """Print the catalog comparison table for up to 3 tools."""
    from toolcompare.compare.normalizer import normalize_selection, parse_identifiers
    from toolcompare.compare.table import build_compare_table
    from toolcompare.core.errors import CompareError

    settings, snapshot = _load_snapshot(args)
    try:
        tokens = parse_identifiers(args.ids, settings.max_raw_identifiers)
        selection = normalize_selection(tokens, snapshot.aliases, settings.compare_limit)
    except CompareError as exc:
        logger.error("%s", exc)
        return 1

    table = build_compare_table(snapshot.get_many(selection.slugs))
    print(json.dumps({"ok": True, **table.model_dump()}, indent=2, ensure_ascii=False))
    return 0


async def _cmd_resolve(args: argparse.Namespace) -> int:
    """Print canonical slug (or '-') for each token."""
    _, snapshot = _load_snapshot(args)
    missing = 0
    for token in args.tokens:
        canonical = snapshot.aliases.resolve(token)
        if canonical is None:
            missing += 1
        print(f"{token}\t{canonical or '-'}")
    return 0 if missing == 0 else 1


def _setup_logging(verbose: bool) -> None:
    """Configure logging for CLI usage."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


if __name__ == "__main__":
    sys.exit(main())
