"""
Blog post document stores

Each blog post is a document holding title, author and content, keyed by
a store-assigned UUID and stamped with its creation time. Two backends
share the same semantics: PostgreSQL (JSONB documents via asyncpg) for
deployments and an in-memory store for local development and tests.
"""

import asyncio
import json
import logging
import uuid
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

import asyncpg

from models.blogpost import REQUIRED_FIELDS, UPDATABLE_FIELDS
from utils.exceptions import StoreError, ValidationError
from utils.helpers import parse_blog_post_id, pick_fields, utc_now

logger = logging.getLogger(__name__)

BlogPost = Dict[str, Any]

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS blog_posts (
    id UUID PRIMARY KEY,
    document JSONB NOT NULL,
    created_at TIMESTAMPTZ NOT NULL DEFAULT now()
)
"""
DROP_TABLE_SQL = "DROP TABLE IF EXISTS blog_posts"


def validate_blog_post_fields(fields: Dict[str, Any]) -> Dict[str, str]:
    """
    Check that every required field is present and non-empty

    Args:
        fields: Raw field values submitted for a new blog post

    Returns:
        Dictionary holding only the required fields

    Raises:
        ValidationError: if any required field is absent, empty or not text
    """
    if not isinstance(fields, dict):
        raise ValidationError("Blog post must be an object", fields=list(REQUIRED_FIELDS))

    missing = [
        name for name in REQUIRED_FIELDS
        if not isinstance(fields.get(name), str) or not fields[name].strip()
    ]
    if missing:
        raise ValidationError(
            f"Missing required field(s): {', '.join(missing)}",
            fields=missing
        )
    return {name: fields[name] for name in REQUIRED_FIELDS}


def validate_blog_post_updates(fields: Dict[str, Any]) -> Dict[str, str]:
    """
    Pick the updatable fields and check that each given value is non-blank text

    Raises:
        ValidationError: if a given title or content is empty or not text
    """
    changes = pick_fields(fields, UPDATABLE_FIELDS)
    blank = [
        name for name, value in changes.items()
        if not isinstance(value, str) or not value.strip()
    ]
    if blank:
        raise ValidationError(
            f"Blank value for field(s): {', '.join(blank)}",
            fields=blank
        )
    return changes


class BlogPostStore(ABC):
    """Persistence contract for blog posts"""

    backend = "abstract"

    @abstractmethod
    async def create(self, fields: Dict[str, Any]) -> BlogPost:
        """Assign id and created_at, persist, and return the full record"""

    @abstractmethod
    async def get_all(self) -> List[BlogPost]:
        """Every stored record in insertion order"""

    @abstractmethod
    async def get_by_id(self, blog_post_id: str) -> Optional[BlogPost]:
        """The matching record, or None"""

    @abstractmethod
    async def update(self, blog_post_id: str, fields: Dict[str, Any]) -> bool:
        """Apply title/content changes; False when the id does not exist"""

    @abstractmethod
    async def delete(self, blog_post_id: str) -> bool:
        """Remove the record; False when the id does not exist"""

    @abstractmethod
    async def count(self) -> int:
        """Total number of stored records"""

    @abstractmethod
    async def insert_many(self, items: List[Dict[str, Any]]) -> List[BlogPost]:
        """Validate and persist several records at once"""

    @abstractmethod
    async def clear(self) -> None:
        """Remove every record"""

    @abstractmethod
    async def ping(self) -> None:
        """Raise StoreError when the store is unreachable"""

    def _new_record(self, fields: Dict[str, Any]) -> BlogPost:
        record = validate_blog_post_fields(fields)
        record["id"] = str(uuid.uuid4())
        record["created_at"] = utc_now()
        return record


class MemoryBlogPostStore(BlogPostStore):
    """In-process document store"""

    backend = "memory"

    def __init__(self):
        self._documents: Dict[str, BlogPost] = {}

    async def create(self, fields: Dict[str, Any]) -> BlogPost:
        record = self._new_record(fields)
        self._documents[record["id"]] = record
        return dict(record)

    async def get_all(self) -> List[BlogPost]:
        return [dict(record) for record in self._documents.values()]

    async def get_by_id(self, blog_post_id: str) -> Optional[BlogPost]:
        key = parse_blog_post_id(blog_post_id)
        if key is None:
            return None
        record = self._documents.get(str(key))
        return dict(record) if record else None

    async def update(self, blog_post_id: str, fields: Dict[str, Any]) -> bool:
        changes = validate_blog_post_updates(fields)
        key = parse_blog_post_id(blog_post_id)
        if key is None or str(key) not in self._documents:
            return False
        self._documents[str(key)].update(changes)
        return True

    async def delete(self, blog_post_id: str) -> bool:
        key = parse_blog_post_id(blog_post_id)
        if key is None:
            return False
        return self._documents.pop(str(key), None) is not None

    async def count(self) -> int:
        return len(self._documents)

    async def insert_many(self, items: List[Dict[str, Any]]) -> List[BlogPost]:
        # Validate everything first so a bad item leaves the store untouched
        records = [self._new_record(item) for item in items]
        for record in records:
            self._documents[record["id"]] = record
        return [dict(record) for record in records]

    async def clear(self) -> None:
        self._documents.clear()

    async def ping(self) -> None:
        return None


async def init_connection(conn: asyncpg.Connection):
    """Decode JSONB columns to Python objects on every pooled connection"""
    await conn.set_type_codec(
        "jsonb",
        encoder=json.dumps,
        decoder=json.loads,
        schema="pg_catalog"
    )


class PostgresBlogPostStore(BlogPostStore):
    """JSONB document store on top of an asyncpg pool"""

    backend = "postgres"

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    @asynccontextmanager
    async def _connection(self, operation: str):
        try:
            async with self.pool.acquire() as conn:
                yield conn
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError) as e:
            logger.error(f"Blog post store {operation} failed: {e}")
            raise StoreError(f"Database error during {operation}: {e}") from e

    @staticmethod
    def _to_blog_post(row) -> BlogPost:
        document = row["document"]
        return {
            "id": str(row["id"]),
            "title": document.get("title"),
            "author": document.get("author"),
            "content": document.get("content"),
            "created_at": row["created_at"]
        }

    async def create_schema(self, drop: bool = False):
        async with self._connection("create_schema") as conn:
            if drop:
                await conn.execute(DROP_TABLE_SQL)
            await conn.execute(CREATE_TABLE_SQL)

    async def create(self, fields: Dict[str, Any]) -> BlogPost:
        record = self._new_record(fields)
        async with self._connection("create") as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO blog_posts (id, document, created_at)
                VALUES ($1, $2, $3)
                RETURNING id, document, created_at
                """,
                uuid.UUID(record["id"]),
                pick_fields(record, REQUIRED_FIELDS),
                record["created_at"]
            )
        return self._to_blog_post(row)

    async def get_all(self) -> List[BlogPost]:
        async with self._connection("get_all") as conn:
            rows = await conn.fetch(
                "SELECT id, document, created_at FROM blog_posts ORDER BY created_at, id"
            )
        return [self._to_blog_post(row) for row in rows]

    async def get_by_id(self, blog_post_id: str) -> Optional[BlogPost]:
        key = parse_blog_post_id(blog_post_id)
        if key is None:
            return None
        async with self._connection("get_by_id") as conn:
            row = await conn.fetchrow(
                "SELECT id, document, created_at FROM blog_posts WHERE id = $1",
                key
            )
        return self._to_blog_post(row) if row else None

    async def update(self, blog_post_id: str, fields: Dict[str, Any]) -> bool:
        changes = validate_blog_post_updates(fields)
        key = parse_blog_post_id(blog_post_id)
        if key is None:
            return False
        async with self._connection("update") as conn:
            updated_id = await conn.fetchval(
                "UPDATE blog_posts SET document = document || $2::jsonb WHERE id = $1 RETURNING id",
                key,
                changes
            )
        return updated_id is not None

    async def delete(self, blog_post_id: str) -> bool:
        key = parse_blog_post_id(blog_post_id)
        if key is None:
            return False
        async with self._connection("delete") as conn:
            deleted_id = await conn.fetchval(
                "DELETE FROM blog_posts WHERE id = $1 RETURNING id",
                key
            )
        return deleted_id is not None

    async def count(self) -> int:
        async with self._connection("count") as conn:
            return await conn.fetchval("SELECT count(*) FROM blog_posts")

    async def insert_many(self, items: List[Dict[str, Any]]) -> List[BlogPost]:
        records = [self._new_record(item) for item in items]
        async with self._connection("insert_many") as conn:
            async with conn.transaction():
                await conn.executemany(
                    "INSERT INTO blog_posts (id, document, created_at) VALUES ($1, $2, $3)",
                    [
                        (uuid.UUID(r["id"]), pick_fields(r, REQUIRED_FIELDS), r["created_at"])
                        for r in records
                    ]
                )
        return records

    async def clear(self) -> None:
        async with self._connection("clear") as conn:
            await conn.execute("DELETE FROM blog_posts")

    async def ping(self) -> None:
        async with self._connection("ping") as conn:
            await conn.fetchval("SELECT 1")
