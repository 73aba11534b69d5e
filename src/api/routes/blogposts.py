"""
Blog post API routes
All store access goes through the blog posts service layer.
"""

import logging
from fastapi import APIRouter, HTTPException, Response

from models.blogpost import (
    BlogPostCreateRequest, BlogPostUpdateRequest, BlogPostResponse, BlogPostListResponse
)
from services.base_service import ServiceResult
from services.blogposts_service import get_blogposts_service
from utils.error_handling import set_endpoint_context

router = APIRouter()
logger = logging.getLogger(__name__)


def raise_for_failure(result: ServiceResult):
    """Translate a failed ServiceResult into the matching HTTPException"""
    if result.success:
        return
    if result.error_type == "RESOURCE_NOT_FOUND":
        raise HTTPException(status_code=404, detail="Blog post not found")
    elif result.error_type == "VALIDATION_ERROR":
        raise HTTPException(status_code=400, detail=result.error)
    else:
        raise HTTPException(status_code=500, detail=f"Service error: {result.error}")


@router.get("", response_model=BlogPostListResponse)
async def list_blog_posts():
    """List all blog posts"""
    set_endpoint_context("blogposts.list")
    result = await get_blogposts_service().list_blog_posts()
    raise_for_failure(result)

    return {
        "blogposts": [BlogPostResponse(**post) for post in result.data],
        "count": result.count
    }


@router.get("/{blog_post_id}", response_model=BlogPostResponse)
async def get_blog_post(blog_post_id: str):
    """Get a single blog post"""
    set_endpoint_context("blogposts.get")
    result = await get_blogposts_service().get_blog_post_by_id(blog_post_id)
    raise_for_failure(result)

    return BlogPostResponse(**result.data[0])


@router.post("", response_model=BlogPostResponse, status_code=201)
async def create_blog_post(request: BlogPostCreateRequest):
    """Create a new blog post"""
    set_endpoint_context("blogposts.create")
    result = await get_blogposts_service().create_blog_post(
        title=request.title,
        author=request.author,
        content=request.content
    )
    raise_for_failure(result)

    return BlogPostResponse(**result.data[0])


@router.put("/{blog_post_id}", status_code=204)
async def update_blog_post(blog_post_id: str, request: BlogPostUpdateRequest):
    """Update title and/or content of a blog post"""
    set_endpoint_context("blogposts.update")
    result = await get_blogposts_service().update_blog_post(
        blog_post_id,
        request.model_dump(exclude_none=True)
    )
    raise_for_failure(result)

    return Response(status_code=204)


@router.delete("/{blog_post_id}", status_code=204)
async def delete_blog_post(blog_post_id: str):
    """Delete a blog post"""
    set_endpoint_context("blogposts.delete")
    result = await get_blogposts_service().delete_blog_post(blog_post_id)
    raise_for_failure(result)

    return Response(status_code=204)
