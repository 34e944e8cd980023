"""
Test configuration and fixtures
"""
import asyncio
import pytest
from fakeredis import aioredis as fakeredis
from reelscroll.models.media import MediaItem


class ScriptedSearch:
    """
    Stand-in for the remote search

    ``responses`` maps a query to a list of items (or an exception to raise).
    ``hold(query)`` parks the next call for that query on a future the test
    resolves later, to simulate slow responses.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.held = {}
        self.calls = []

    def hold(self, query: str) -> asyncio.Future:
        future = asyncio.get_running_loop().create_future()
        self.held[query] = future
        return future

    @property
    def queries(self):
        return [query for query, _ in self.calls]

    async def __call__(self, query: str, page: int):
        self.calls.append((query, page))
        if query in self.held:
            result = await self.held.pop(query)
        else:
            result = self.responses.get(query, [])
        if isinstance(result, Exception):
            raise result
        return list(result)


async def _settle(rounds: int = 50):
    """Let scheduled tasks and done-callbacks run"""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def settle():
    """Coroutine function that drains pending callbacks"""
    return _settle


@pytest.fixture
def make_item():
    """Factory for MediaItems keyed by IMDB id"""
    def _make(imdb_id: str, title: str = None, **fields) -> MediaItem:
        return MediaItem(imdb_id=imdb_id, title=title or f"Title {imdb_id}", **fields)
    return _make


@pytest.fixture
def search():
    """Fresh scripted search stub"""
    return ScriptedSearch()


@pytest.fixture
async def fake_redis():
    """Provide fake Redis client for testing"""
    redis_client = fakeredis.FakeRedis(decode_responses=True)
    yield redis_client
    await redis_client.flushall()
    await redis_client.aclose()


@pytest.fixture
def sample_search_payload():
    """Sample search API response"""
    return {
        "results": [
            {
                "imdb_id": "tt15239678",
                "tmdb_id": 693134,
                "title": "Dune: Part Two",
                "type": "movie",
                "year": 2024,
                "rating": 8.2,
                "image": "https://img.example/dune2.jpg",
                "description": "Paul Atreides unites with the Fremen...",
                "cast": "Timothée Chalamet, Zendaya",
            },
            {
                "id": 1396,
                "name": "Breaking Bad",
                "media_type": "tv",
                "poster_path": "/ggFHVNu6YYI5L9pCfOacjizRGt.jpg",
                "first_air_date": "2008-01-20",
                "vote_average": 8.9,
                "overview": "A high school chemistry teacher...",
            },
            {
                "title": "No identifiers at all",
            },
        ]
    }
