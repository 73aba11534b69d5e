#!/usr/bin/env python3
"""
Schema tool for creating the blog_posts table in PostgreSQL
"""

import os
import sys
import argparse
import asyncio

from dotenv import load_dotenv

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


async def init_schema(database_url: str, drop: bool = False) -> int:
    """
    Create (or recreate) the blog_posts table

    Returns:
        Number of blog posts present after the schema is in place
    """
    from database.connection import create_pool
    from database.blogpost_store import PostgresBlogPostStore

    pool = await create_pool(database_url)
    try:
        store = PostgresBlogPostStore(pool)
        await store.create_schema(drop=drop)
        return await store.count()
    finally:
        await pool.close()


def main(argv=None):
    load_dotenv()

    parser = argparse.ArgumentParser(description="Create the blog_posts table")
    parser.add_argument(
        "--database-url",
        default=os.getenv("DATABASE_URL"),
        help="PostgreSQL DSN (defaults to $DATABASE_URL)"
    )
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop the existing table first (deletes all blog posts)"
    )
    args = parser.parse_args(argv)

    if not args.database_url:
        parser.error("--database-url or DATABASE_URL is required")

    # Settings validate DATABASE_URL at import time
    os.environ.setdefault("DATABASE_URL", args.database_url)
    total = asyncio.run(init_schema(args.database_url, drop=args.drop))
    print(f"✅ blog_posts table ready ({total} posts)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
