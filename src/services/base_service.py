"""
Base service layer for unified store access
"""

import logging
from typing import Dict, Any, List, Optional
from dataclasses import dataclass

from database.connection import get_blogpost_store
from database.blogpost_store import BlogPostStore
from utils.exceptions import BlogPostError

logger = logging.getLogger(__name__)


@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None


class BaseService:
    """Base service that wraps the active store for unified data access"""

    def __init__(self, resource_name: str, store: Optional[BlogPostStore] = None):
        self.resource_name = resource_name
        self._store = store
        logger.info(f"BaseService initialized for resource: {resource_name}")

    @property
    def store(self) -> BlogPostStore:
        """Explicit store if one was given, otherwise the application-wide one"""
        return self._store or get_blogpost_store()

    def success(self, data: Optional[List[Dict[str, Any]]] = None) -> ServiceResult:
        data = data or []
        return ServiceResult(success=True, data=data, count=len(data))

    def failure(self, operation: str, error: BlogPostError) -> ServiceResult:
        """Convert a store or service error into a failed ServiceResult"""
        if error.status_code >= 500:
            logger.error(f"{self.resource_name} {operation} failed: {error.message}")
        else:
            logger.info(f"{self.resource_name} {operation} rejected: {error.message}")

        return ServiceResult(
            success=False,
            error=error.message,
            error_type=error.error_type
        )
