"""
Media Search Client
Async client for the remote media search API
"""
import aiohttp
import asyncio
import logging
from typing import Any, Dict, List, Optional
from reelscroll.core.config import settings
from reelscroll.models.media import MediaItem
from reelscroll.services.cache import CacheManager
from reelscroll.utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


class SearchError(Exception):
    """Remote search failed (network error, timeout or bad status)"""


def parse_results(payload: Any) -> List[MediaItem]:
    """
    Convert a search response into MediaItems

    Accepts ``{"results": [...]}`` or a bare list. Entries without any id,
    or that fail validation, are skipped.
    """
    if isinstance(payload, dict):
        raw_items = payload.get("results") or []
    elif isinstance(payload, list):
        raw_items = payload
    else:
        raise SearchError(f"Unexpected search payload type: {type(payload).__name__}")

    items = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            continue
        try:
            items.append(MediaItem.from_remote(raw))
        except ValueError:
            logger.debug(
                "Skipping search result without usable id: %s",
                raw.get("title") or raw.get("name"),
            )
    return items


class SearchClient:
    """Async client for the media search API"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        cache: Optional[CacheManager] = None,
        use_cache: Optional[bool] = None,
    ):
        self.base_url = (base_url or settings.SEARCH_API_URL).rstrip("/")
        self.api_key = api_key or settings.SEARCH_API_KEY
        self.cache = cache or CacheManager()
        self.use_cache = settings.CACHE_ENABLED if use_cache is None else use_cache
        self.session: Optional[aiohttp.ClientSession] = None

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session"""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=settings.SEARCH_TIMEOUT_SECONDS)
            )
        return self.session

    async def close(self):
        """Close aiohttp session"""
        if self.session and not self.session.closed:
            await self.session.close()

    async def _request(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Make API request with timeout and light retry.

        Returns the decoded JSON body, or None on 404.

        Raises:
            SearchError: when every attempt failed
        """
        # a rate of 0 means no limiting
        if not settings.DISABLE_RATE_LIMITING and settings.SEARCH_RATE_LIMIT > 0:
            limiter = RateLimiter.get_limiter("search", settings.SEARCH_RATE_LIMIT)
            await limiter.acquire()

        backoff = 0.1
        attempts = max(1, settings.SEARCH_RETRY_ATTEMPTS)
        url = f"{self.base_url}{endpoint}"
        request_params = dict(params or {})
        if self.api_key:
            request_params["api_key"] = self.api_key

        for attempt in range(attempts):
            try:
                session = await self.get_session()

                async with session.get(url, params=request_params) as response:
                    if response.status == 200:
                        return await response.json()
                    elif response.status == 404:
                        logger.debug("Search 404 for %s params=%s", endpoint, params)
                        return None
                    elif (response.status == 429 or 500 <= response.status < 600) and attempt + 1 < attempts:
                        await asyncio.sleep(backoff * (attempt + 1))
                        continue
                    else:
                        raise SearchError(
                            f"Search API error {response.status} for {endpoint} params={params}"
                        )

            except SearchError:
                raise
            except asyncio.TimeoutError as e:
                if attempt + 1 < attempts:
                    await asyncio.sleep(backoff * (attempt + 1))
                    continue
                raise SearchError(f"Search request timeout: {endpoint}") from e
            except (aiohttp.ClientError, ValueError) as e:
                if attempt + 1 < attempts:
                    await asyncio.sleep(backoff * (attempt + 1))
                    continue
                raise SearchError(f"Search request error: {e}") from e

        raise SearchError(f"Search request failed after {attempts} attempts: {endpoint}")

    async def search_media(self, query: str, page: int = 1) -> List[MediaItem]:
        """
        Search the remote catalog

        Args:
            query: Free-text query (e.g. "action movie 2024")
            page: Page number forwarded to the backend

        Returns:
            List of items; empty when the backend has nothing for the query
        """
        cache_key = f"search:{query}:page{page}"

        if self.use_cache:
            cached = await self.cache.get(cache_key)
            if cached is not None:
                logger.debug("Search cache hit for %s", cache_key)
                return [MediaItem.model_validate(item) for item in cached]

        payload = await self._request("/search", {"q": query, "page": page})
        items = parse_results(payload) if payload is not None else []

        if self.use_cache:
            await self.cache.set(
                cache_key,
                [item.model_dump() for item in items],
                ttl=settings.CACHE_TTL_SEARCH,
            )

        return items


# Global shared client
_search_client = None


def get_search_client() -> SearchClient:
    """Get the shared search client instance"""
    global _search_client
    if _search_client is None:
        _search_client = SearchClient()
    return _search_client
