"""
Blog post Pydantic models
"""

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

# Fields every stored blog post must carry
REQUIRED_FIELDS = ("title", "author", "content")
# Fields the update operation may change
UPDATABLE_FIELDS = ("title", "content")


class BlogPostCreateRequest(BaseModel):
    title: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)


class BlogPostUpdateRequest(BaseModel):
    """Partial update; keys other than title/content are ignored"""
    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = Field(None, min_length=1)


class BlogPostResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    author: str
    content: str
    created_at: datetime = Field(..., alias="createdAt")


class BlogPostListResponse(BaseModel):
    """Response model for listing blog posts"""
    blogposts: List[BlogPostResponse]
    count: int
