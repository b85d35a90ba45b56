#!/usr/bin/env python
"""Run a single search against the configured Qdrant collection.

Usage:
    python -m scripts.search "How do you say hello in Wayuunaiki?" --limit 5

Uses the same settings and clients as the API, so it is a quick way to check
credentials and collection contents without starting the server.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from wayuu_search.api.dependencies import build_services
from wayuu_search.config import get_settings
from wayuu_search.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


async def run_search(
    query: str,
    limit: int,
    output_path: Path | None = None,
) -> bool:
    """Run one search and print the response.

    Args:
        query: Natural-language query.
        limit: Requested number of results.
        output_path: Optional path to save the response JSON.

    Returns:
        True if the search completed without an error message.
    """
    settings = get_settings()
    setup_logging(level=settings.log_level, json_output=False)

    services = build_services(settings)
    try:
        logger.info(f"Searching collection {services.collection}")
        response = await services.pipeline.perform_search(query, limit)
    finally:
        await services.close()

    body = response.model_dump_json(by_alias=True, exclude_none=True, indent=2)
    print(body)

    if output_path:
        output_path.write_text(body)
        logger.info(f"Response saved to {output_path}")

    return response.error is None


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Run a semantic search over the Wayuu corpus",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("query", help="Query text")
    parser.add_argument(
        "--limit",
        type=int,
        default=5,
        choices=range(1, 11),
        metavar="{1..10}",
        help="Number of results",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Path to save the response JSON",
    )

    args = parser.parse_args()

    ok = asyncio.run(
        run_search(
            query=args.query,
            limit=args.limit,
            output_path=args.output,
        )
    )

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
