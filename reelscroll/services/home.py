"""
Home Feed
Hero item and horizontal rails for the landing page
"""
import logging
import random
from typing import List, Optional, Sequence
from reelscroll.core.config import settings
from reelscroll.discovery.controller import SearchFn
from reelscroll.models.media import HomeFeed, MediaItem

logger = logging.getLogger(__name__)

TOP_N = 10


def pick_featured(
    items: Sequence[MediaItem],
    title_hint: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> Optional[MediaItem]:
    """First item whose title contains the hint, otherwise a random one"""
    if not items:
        return None
    hint = settings.HOME_FEATURED_TITLE if title_hint is None else title_hint
    if hint:
        for item in items:
            if hint in item.title:
                return item
    return (rng or random).choice(list(items))


def build_home_feed(
    items: Sequence[MediaItem],
    title_hint: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> HomeFeed:
    """Arrange a pool of items into the landing page rails"""
    pool: List[MediaItem] = list(items)
    rows = {
        "Top 10": pool[:TOP_N],
        "Trending Today": pool,
        "Series": [item for item in pool if item.type == "tv"],
        "Top Rated": [item for item in pool if item.type == "movie"],
        "Anime": [item for item in pool if item.type == "anime"],
    }
    return HomeFeed(
        featured=pick_featured(pool, title_hint, rng),
        rows={title: row for title, row in rows.items() if row},
    )


async def load_home_feed(search_fn: SearchFn) -> HomeFeed:
    """Fetch the trending pool and build the feed; an empty feed on failure"""
    query = f"trending {settings.ANCHOR_YEAR}"
    try:
        items = await search_fn(query, 1)
    except Exception as e:
        logger.error(f"Failed to load home feed ({query!r}): {e}")
        return HomeFeed()
    return build_home_feed(items)
