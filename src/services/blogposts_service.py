"""
Blog posts service - store operations wrapped in ServiceResult
"""

import logging
from typing import Any, Dict, Optional

from database.blogpost_store import BlogPostStore
from models.blogpost import UPDATABLE_FIELDS
from services.base_service import BaseService, ServiceResult
from utils.exceptions import BlogPostError, NotFoundError, ValidationError
from utils.helpers import pick_fields

logger = logging.getLogger(__name__)


class BlogPostsService(BaseService):
    """Service for blog post operations"""

    def __init__(self, store: Optional[BlogPostStore] = None):
        super().__init__("blogposts", store)

    async def create_blog_post(self, title: str, author: str, content: str) -> ServiceResult:
        """
        Create a new blog post

        Args:
            title: Post title
            author: Post author
            content: Post body

        Returns:
            ServiceResult with the created post (id and created_at assigned)
        """
        try:
            post = await self.store.create({
                "title": title,
                "author": author,
                "content": content
            })
        except BlogPostError as e:
            return self.failure("create", e)

        logger.info(f"Created blog post {post['id']}")
        return self.success([post])

    async def list_blog_posts(self) -> ServiceResult:
        """List every blog post; an empty store is a successful empty result"""
        try:
            posts = await self.store.get_all()
        except BlogPostError as e:
            return self.failure("list", e)
        return self.success(posts)

    async def get_blog_post_by_id(self, blog_post_id: str) -> ServiceResult:
        """Get a single blog post by id"""
        try:
            post = await self.store.get_by_id(blog_post_id)
            if post is None:
                raise NotFoundError(blog_post_id)
        except BlogPostError as e:
            return self.failure("get", e)
        return self.success([post])

    async def update_blog_post(self, blog_post_id: str, updates: Dict[str, Any]) -> ServiceResult:
        """
        Apply title/content changes to an existing blog post

        Args:
            blog_post_id: Id of the post to update
            updates: Field values; anything besides title and content is ignored

        Returns:
            ServiceResult without data on success
        """
        changes = pick_fields(updates, UPDATABLE_FIELDS)

        try:
            if not changes:
                raise ValidationError(
                    "No fields provided for update",
                    fields=list(UPDATABLE_FIELDS)
                )
            if not await self.store.update(blog_post_id, changes):
                raise NotFoundError(blog_post_id)
        except BlogPostError as e:
            return self.failure("update", e)

        logger.info(f"Updated blog post {blog_post_id}: {', '.join(sorted(changes))}")
        return self.success()

    async def delete_blog_post(self, blog_post_id: str) -> ServiceResult:
        """Delete a blog post"""
        try:
            if not await self.store.delete(blog_post_id):
                raise NotFoundError(blog_post_id)
        except BlogPostError as e:
            return self.failure("delete", e)

        logger.info(f"Deleted blog post {blog_post_id}")
        return self.success()

    async def count_blog_posts(self) -> ServiceResult:
        """Count stored blog posts; the total is returned in ServiceResult.count"""
        try:
            total = await self.store.count()
        except BlogPostError as e:
            return self.failure("count", e)
        return ServiceResult(success=True, data=[], count=total)


# Global service instance
_blogposts_service: Optional[BlogPostsService] = None


def get_blogposts_service() -> BlogPostsService:
    """Get the global blog posts service instance"""
    global _blogposts_service
    if _blogposts_service is None:
        _blogposts_service = BlogPostsService()
    return _blogposts_service
