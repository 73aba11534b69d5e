"""
Blog post error taxonomy shared by the store, service and HTTP layers
"""

from typing import List, Optional


class BlogPostError(Exception):
    """Base class for blog post failures"""

    status_code = 500
    error_type = "INTERNAL_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BlogPostError):
    """Missing or malformed required field"""

    status_code = 400
    error_type = "VALIDATION_ERROR"

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.fields = fields or []


class NotFoundError(BlogPostError):
    """No blog post exists for the requested id"""

    status_code = 404
    error_type = "RESOURCE_NOT_FOUND"

    def __init__(self, blog_post_id: str):
        super().__init__(f"Blog post not found: {blog_post_id}")
        self.blog_post_id = blog_post_id


class StoreError(BlogPostError):
    """Underlying database failure"""

    status_code = 500
    error_type = "STORE_ERROR"
