"""
Utility functions and helpers
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Timezone-aware current UTC time"""
    return datetime.now(timezone.utc)


def parse_blog_post_id(blog_post_id: Any) -> Optional[uuid.UUID]:
    """Parse a blog post id, returning None when it is not a well-formed UUID"""
    if isinstance(blog_post_id, uuid.UUID):
        return blog_post_id
    try:
        return uuid.UUID(str(blog_post_id))
    except (ValueError, AttributeError, TypeError):
        logger.debug(f"Ignoring malformed blog post id: {blog_post_id!r}")
        return None


def pick_fields(data: Dict[str, Any], fields) -> Dict[str, Any]:
    """Keep only the given keys whose values are not None"""
    return {key: data[key] for key in fields if data.get(key) is not None}
