"""
vault-memory command line.

Usage:
    # Save a memory
    vault-memory save "Thích uống cà phê sữa đá" --type preference

    # Most recent memories from the last week
    vault-memory recall --days 7

    # Ranked recall
    vault-memory recall "cà phê" --limit 3

    # Embed every memory that has no vector yet
    vault-memory backfill
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from vault_memory.config import MemorySettings
from vault_memory.models import MEMORY_KINDS
from vault_memory.retrieval_engine import RetrievalEngine

logger = logging.getLogger("vault-memory")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vault-memory",
        description="Save and recall assistant memories stored in a vault",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--vault",
        default=None,
        help="Vault root directory (default: VAULT_PATH)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    save = subparsers.add_parser("save", help="Save a memory")
    save.add_argument("content", help="Memory text")
    save.add_argument("--type", default=None, help=f"One of: {', '.join(MEMORY_KINDS)}")

    recall = subparsers.add_parser("recall", help="Recall memories")
    recall.add_argument("query", nargs="?", default=None, help="Optional search query")
    recall.add_argument("--days", type=int, default=None, help="Only the last N days")
    recall.add_argument("--limit", type=int, default=None, help="Maximum results")

    subparsers.add_parser("backfill", help="Embed memories that have no vector yet")

    return parser


async def run(args: argparse.Namespace, settings: MemorySettings) -> str:
    engine = RetrievalEngine.from_settings(settings)
    try:
        if args.command == "save":
            return (await engine.save(args.content, args.type)).message
        if args.command == "recall":
            return (await engine.recall(args.query, args.days, args.limit)).message
        return (await engine.backfill_embeddings()).message
    finally:
        await engine.aclose()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {}
    if args.vault:
        overrides["vault_path"] = args.vault
    if args.log_level:
        overrides["log_level"] = args.log_level
    settings = MemorySettings(**overrides)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        output = asyncio.run(run(args, settings))
    except OSError as e:
        logger.error(f"Memory store unavailable: {e}")
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
