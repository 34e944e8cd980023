"""
Home Endpoint
Landing page hero item and rails
"""
from fastapi import APIRouter
from reelscroll.models.media import HomeFeed
from reelscroll.services.home import load_home_feed
from reelscroll.services.search import get_search_client

router = APIRouter()


@router.get("/home", response_model=HomeFeed)
async def get_home():
    """Return the featured item and content rails"""
    return await load_home_feed(get_search_client().search_media)
