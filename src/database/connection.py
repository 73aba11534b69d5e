"""
Database connection, pool and store management
"""

import asyncpg
import logging
from typing import Optional

from config.settings import (
    STORE_BACKEND, DATABASE_URL,
    DB_POOL_MIN_SIZE, DB_POOL_MAX_SIZE, DB_COMMAND_TIMEOUT
)
from database.blogpost_store import (
    BlogPostStore, MemoryBlogPostStore, PostgresBlogPostStore, init_connection
)

logger = logging.getLogger(__name__)

# Global database pool and blog post store
db_pool = None
blogpost_store: Optional[BlogPostStore] = None


async def create_pool(database_url: str) -> asyncpg.Pool:
    """Create an asyncpg pool with JSONB decoding enabled"""
    pool = await asyncpg.create_pool(
        database_url,
        min_size=DB_POOL_MIN_SIZE,
        max_size=DB_POOL_MAX_SIZE,
        command_timeout=DB_COMMAND_TIMEOUT,
        statement_cache_size=0,  # Fix for pgbouncer compatibility
        init=init_connection
    )

    # Test connection
    async with pool.acquire() as conn:
        await conn.fetchval("SELECT 1")

    return pool


async def init_database(backend: Optional[str] = None, database_url: Optional[str] = None) -> BlogPostStore:
    """
    Initialize the blog post store

    Args:
        backend: "postgres" or "memory" (defaults to STORE_BACKEND)
        database_url: PostgreSQL DSN (defaults to DATABASE_URL)

    Returns:
        The initialized store, also reachable through get_blogpost_store()
    """
    global db_pool, blogpost_store
    backend = backend or STORE_BACKEND

    if backend == "memory":
        blogpost_store = MemoryBlogPostStore()
    elif backend == "postgres":
        database_url = database_url or DATABASE_URL
        if not database_url:
            raise ValueError("DATABASE_URL environment variable is required for the postgres store backend")
        db_pool = await create_pool(database_url)
        blogpost_store = PostgresBlogPostStore(db_pool)
        await blogpost_store.create_schema()
    else:
        raise ValueError(f"Unsupported store backend: {backend}")

    logger.info(f"Database initialized successfully ({backend} store)")
    return blogpost_store


async def close_database():
    """Close database connection pool"""
    global db_pool, blogpost_store
    if db_pool:
        await db_pool.close()
    db_pool = None
    blogpost_store = None
    logger.info("Database connections closed")


def get_db_pool():
    """Get the database pool instance"""
    return db_pool


def get_blogpost_store() -> BlogPostStore:
    """Get the active blog post store"""
    if blogpost_store is None:
        raise RuntimeError("Blog post store is not initialized; call init_database() first")
    return blogpost_store
