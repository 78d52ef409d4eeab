#!/usr/bin/env python3
"""Delete every book from the configured store."""

import argparse
import asyncio

import redis.asyncio as redis

from bookshelf.config import get_settings
from bookshelf.core.books.store import BookStore


async def clear_books(redis_url: str, prefix: str) -> int:
    """Remove all books stored under ``prefix``."""
    client = redis.from_url(redis_url, encoding="utf-8", decode_responses=True)
    try:
        return await BookStore(client, prefix=prefix).clear()
    finally:
        await client.aclose()


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Delete every book from the store")
    parser.add_argument(
        "--url",
        default=settings.redis_url,
        help="Redis URL of the book store",
    )
    parser.add_argument(
        "--prefix",
        default=settings.store_prefix,
        help="Key prefix of the book store",
    )
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Do not ask for confirmation",
    )
    args = parser.parse_args()

    if not args.yes:
        answer = input(f"Delete all books under '{args.prefix}' at {args.url}? [y/N] ")
        if answer.strip().lower() != "y":
            print("Aborted.")
            return

    deleted = asyncio.run(clear_books(args.url, args.prefix))
    print(f"Deleted {deleted} books.")


if __name__ == "__main__":
    main()
