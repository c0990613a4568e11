"""
Bulk embedding regeneration.

Rebuilds the chunk set of every approved document in one or both
collections, one document at a time, and prints a summary.

Usage:
    python -m knowledge_base.scripts.generate_all_embeddings
    python -m knowledge_base.scripts.generate_all_embeddings --collection profiles --delay 1.0

Dependencies: knowledge_base.application.services, knowledge_base.boundary
System role: Operator tool for backfilling the embedding index
"""

import argparse
import asyncio
import logging
import sys

from knowledge_base.application.services.embedding_service import EmbeddingService, RegenerateAllResult
from knowledge_base.boundary.db.connection import get_async_engine, get_async_session_factory
from knowledge_base.boundary.llm import EmbeddingClient, build_embedding_client
from knowledge_base.configs import get_settings
from knowledge_base.core.retrieval import CollectionName, get_collection
from knowledge_base.observability import configure_logging

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Regenerate embeddings for all approved documents")
    parser.add_argument(
        "--collection",
        choices=[name.value for name in CollectionName] + ["all"],
        default="all",
        help="Collection to regenerate (default: all)",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Seconds to wait between documents (default: RETRIEVAL_REGENERATE_ALL_DELAY_SECONDS)",
    )
    return parser.parse_args(argv)


async def regenerate_collections(
    collection_names: list[str],
    embedding_client: EmbeddingClient,
    chunk_max_size: int,
    delay_seconds: float,
) -> dict[str, RegenerateAllResult]:
    """Run regenerate_all for each named collection with a fresh session."""
    SessionFactory = get_async_session_factory()
    results: dict[str, RegenerateAllResult] = {}

    async with SessionFactory() as db:
        service = EmbeddingService(db=db, embedding_client=embedding_client, chunk_max_size=chunk_max_size)
        for name in collection_names:
            results[name] = await service.regenerate_all(get_collection(name), delay_seconds=delay_seconds)

    return results


def print_summary(results: dict[str, RegenerateAllResult]) -> None:
    for name, result in results.items():
        print(f"\n{name}: {result.success_count} succeeded, {result.failure_count} failed")
        for slug, count in result.succeeded.items():
            print(f"  ok    {slug} ({count} chunks)")
        for slug, error in result.failed.items():
            print(f"  FAIL  {slug}: {error}")


async def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    names = [name.value for name in CollectionName] if args.collection == "all" else [args.collection]
    delay = args.delay if args.delay is not None else settings.retrieval.regenerate_all_delay_seconds

    try:
        results = await regenerate_collections(
            names,
            build_embedding_client(settings.llm),
            settings.retrieval.chunk_max_size,
            delay,
        )
    finally:
        await get_async_engine().dispose()

    print_summary(results)
    return 1 if any(result.failure_count for result in results.values()) else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
