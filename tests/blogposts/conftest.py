"""
pytest configuration and fixtures for the blog posts test suite
Each test gets a fresh store seeded with generated blog posts.
"""

import os
import sys
from pathlib import Path

# Tests pick their backend explicitly; settings only need a valid default
os.environ["ENV"] = "TEST"
os.environ["STORE_BACKEND"] = "memory"

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))
sys.path.insert(0, str(Path(__file__).parent))

import httpx
import pytest
import pytest_asyncio

from app import app
from config.settings import TEST_DATABASE_URL
from database import connection
from database.blogpost_store import DROP_TABLE_SQL
from services.blogposts_service import BlogPostsService
from data_factory import BlogPostFactory, SEED_COUNT


@pytest.fixture
def factory() -> BlogPostFactory:
    """Generator for realistic blog post payloads"""
    return BlogPostFactory()


@pytest_asyncio.fixture(params=[
    "memory",
    pytest.param("postgres", marks=pytest.mark.integration),
])
async def store(request, factory):
    """Fresh blog post store seeded with SEED_COUNT posts"""
    backend = request.param
    if backend == "postgres" and not TEST_DATABASE_URL:
        pytest.skip("TEST_DATABASE_URL not set - skipping PostgreSQL store")

    active_store = await connection.init_database(backend=backend, database_url=TEST_DATABASE_URL)
    await active_store.clear()

    print(f"\n📊 Seeding {SEED_COUNT} blog posts into {backend} store")
    await active_store.insert_many(factory.generate_blog_posts(SEED_COUNT))

    yield active_store

    # Tear down the test database
    if backend == "postgres":
        await connection.get_db_pool().execute(DROP_TABLE_SQL)
    await connection.close_database()


@pytest_asyncio.fixture
async def client(store):
    """HTTP client talking to the FastAPI app in-process"""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client


@pytest.fixture
def service(store) -> BlogPostsService:
    """Service bound to the seeded store"""
    return BlogPostsService(store)
