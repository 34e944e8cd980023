"""
Health Check Endpoint
"""
from fastapi import APIRouter
from reelscroll.core.config import settings
from reelscroll.services.pages import get_page_manager

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint for monitoring"""
    return {
        "status": "healthy",
        "version": "1.0.0",
        "base_url": settings.BASE_URL,
        "open_pages": len(get_page_manager().pages),
    }
