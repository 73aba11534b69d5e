"""
Blog posts API resource tests
Exercises every /blogposts route and checks the store afterwards.
"""

import uuid
from datetime import datetime

import pytest

from data_factory import SEED_COUNT


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@pytest.mark.crud
class TestGetEndpoint:
    """GET /blogposts and GET /blogposts/{id}"""

    async def test_returns_all_blog_posts(self, client, store):
        response = await client.get("/blogposts")

        assert response.status_code == 200
        body = response.json()
        assert len(body["blogposts"]) >= 1

        total = await store.count()
        assert body["count"] == total
        assert len(body["blogposts"]) == total == SEED_COUNT

    async def test_returns_blog_posts_with_proper_fields(self, client, store):
        response = await client.get("/blogposts")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        blogposts = response.json()["blogposts"]
        assert isinstance(blogposts, list)
        assert len(blogposts) >= 1

        for post in blogposts:
            assert isinstance(post, dict)
            assert {"title", "author", "content"} <= set(post)
            assert set(post) == {"id", "title", "author", "content", "createdAt"}

        first = blogposts[0]
        stored = await store.get_by_id(first["id"])
        assert first["id"] == stored["id"]
        assert first["title"] == stored["title"]
        assert first["author"] == stored["author"]
        assert first["content"] == stored["content"]

    async def test_empty_store_lists_nothing(self, client, store):
        await store.clear()

        response = await client.get("/blogposts")

        assert response.status_code == 200
        assert response.json() == {"blogposts": [], "count": 0}

    async def test_fetches_single_blog_post(self, client, store):
        stored = (await store.get_all())[0]

        response = await client.get(f"/blogposts/{stored['id']}")

        assert response.status_code == 200
        post = response.json()
        assert post["id"] == stored["id"]
        assert post["title"] == stored["title"]
        assert post["author"] == stored["author"]
        assert post["content"] == stored["content"]
        assert parse_timestamp(post["createdAt"]) == stored["created_at"]

    async def test_unknown_id_is_404(self, client):
        response = await client.get(f"/blogposts/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["message"] == "Blog post not found"

    async def test_malformed_id_is_404(self, client):
        response = await client.get("/blogposts/not-a-real-id")

        assert response.status_code == 404


@pytest.mark.crud
class TestPostEndpoint:
    """POST /blogposts"""

    async def test_creates_new_blog_post(self, client, store, factory):
        new_post = factory.generate_blog_post()

        response = await client.post("/blogposts", json=new_post)

        assert response.status_code == 201
        assert response.headers["content-type"].startswith("application/json")
        body = response.json()
        assert isinstance(body, dict)
        assert {"title", "author", "content"} <= set(body)
        assert body["id"] is not None
        assert body["title"] == new_post["title"]
        assert body["author"] == new_post["author"]
        assert body["content"] == new_post["content"]
        assert body["createdAt"]

        stored = await store.get_by_id(body["id"])
        assert stored["id"] == body["id"]
        assert stored["title"] == new_post["title"]
        assert stored["author"] == new_post["author"]
        assert stored["content"] == new_post["content"]
        assert await store.count() == SEED_COUNT + 1

    async def test_created_post_can_be_fetched(self, client, factory):
        created = (await client.post("/blogposts", json=factory.generate_blog_post())).json()

        response = await client.get(f"/blogposts/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    async def test_client_supplied_id_is_ignored(self, client, factory):
        response = await client.post("/blogposts", json=factory.generate_blog_post(id="my-own-id"))

        assert response.status_code == 201
        assert response.json()["id"] != "my-own-id"

    @pytest.mark.parametrize("missing_field", ["title", "author", "content"])
    async def test_missing_required_field_is_400(self, client, store, factory, missing_field):
        new_post = factory.generate_blog_post()
        del new_post[missing_field]

        response = await client.post("/blogposts", json=new_post)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation Error"
        assert any(missing_field in detail["field"] for detail in body["detail"])
        assert await store.count() == SEED_COUNT

    async def test_empty_required_field_is_400(self, client, factory):
        response = await client.post("/blogposts", json=factory.generate_blog_post(title=""))

        assert response.status_code == 400

    async def test_missing_body_is_400(self, client):
        response = await client.post("/blogposts")

        assert response.status_code == 400


@pytest.mark.crud
class TestPutEndpoint:
    """PUT /blogposts/{id}"""

    async def test_updates_existing_blog_post(self, client, store):
        post_updates = {
            "title": "Sweet New Title, Yo",
            "content": "I couldn't think of anything better to write here"
        }
        original = (await store.get_all())[0]

        response = await client.put(f"/blogposts/{original['id']}", json=post_updates)

        assert response.status_code == 204
        assert response.content == b""

        updated = await store.get_by_id(original["id"])
        assert updated["title"] == post_updates["title"]
        assert updated["content"] == post_updates["content"]
        assert updated["author"] == original["author"]
        assert updated["id"] == original["id"]
        assert updated["created_at"] == original["created_at"]

    async def test_update_is_visible_over_http(self, client, store):
        original = (await store.get_all())[0]

        await client.put(f"/blogposts/{original['id']}", json={"title": "Tubular Post, Revisited"})
        response = await client.get(f"/blogposts/{original['id']}")

        post = response.json()
        assert post["title"] == "Tubular Post, Revisited"
        assert post["content"] == original["content"]
        assert post["author"] == original["author"]

    async def test_author_and_id_are_not_updatable(self, client, store):
        original = (await store.get_all())[0]

        response = await client.put(
            f"/blogposts/{original['id']}",
            json={"title": "Okay Post", "author": "Someone Else", "id": str(uuid.uuid4())}
        )

        assert response.status_code == 204
        updated = await store.get_by_id(original["id"])
        assert updated["author"] == original["author"]
        assert updated["title"] == "Okay Post"

    async def test_unknown_id_is_404(self, client):
        response = await client.put(f"/blogposts/{uuid.uuid4()}", json={"title": "Great Post"})

        assert response.status_code == 404

    async def test_no_updatable_fields_is_400(self, client, store):
        original = (await store.get_all())[0]

        response = await client.put(f"/blogposts/{original['id']}", json={"author": "Nobody"})

        assert response.status_code == 400
        assert await store.get_by_id(original["id"]) == original

    @pytest.mark.parametrize("post_updates", [
        {"title": "   "},
        {"content": "  "},
        {"title": "Okay Post", "content": "\t"}
    ])
    async def test_blank_title_or_content_is_400(self, client, store, post_updates):
        original = (await store.get_all())[0]

        response = await client.put(f"/blogposts/{original['id']}", json=post_updates)

        assert response.status_code == 400
        assert await store.get_by_id(original["id"]) == original


@pytest.mark.crud
class TestDeleteEndpoint:
    """DELETE /blogposts/{id}"""

    async def test_deletes_blog_post(self, client, store):
        blogpost = (await store.get_all())[0]

        response = await client.delete(f"/blogposts/{blogpost['id']}")

        assert response.status_code == 204
        assert response.content == b""
        assert await store.get_by_id(blogpost["id"]) is None
        assert await store.count() == SEED_COUNT - 1

        follow_up = await client.get(f"/blogposts/{blogpost['id']}")
        assert follow_up.status_code == 404

    async def test_unknown_id_is_404(self, client):
        response = await client.delete(f"/blogposts/{uuid.uuid4()}")

        assert response.status_code == 404

    async def test_second_delete_is_404(self, client, store):
        blogpost = (await store.get_all())[0]

        first = await client.delete(f"/blogposts/{blogpost['id']}")
        second = await client.delete(f"/blogposts/{blogpost['id']}")

        assert first.status_code == 204
        assert second.status_code == 404
