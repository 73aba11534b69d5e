"""
Health check API route
"""

from fastapi import APIRouter, HTTPException
from database.connection import get_blogpost_store
from utils.helpers import utc_now

router = APIRouter()


@router.get("/")
async def health_check():
    """
    Health check - healthy only when the blog post store answers a ping
    """
    try:
        store = get_blogpost_store()
        await store.ping()

        return {
            "status": "healthy",
            "timestamp": utc_now().isoformat(),
            "store": store.backend
        }

    except Exception as e:
        raise HTTPException(status_code=503, detail=f"Health check failed: {str(e)}")
