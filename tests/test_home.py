"""
Tests for the home feed
"""
import random
import pytest
from reelscroll.services.home import build_home_feed, load_home_feed, pick_featured
from reelscroll.services.search import SearchError


@pytest.fixture
def pool(make_item):
    return [
        make_item("tt1", title="Oppenheimer", type="movie"),
        make_item("tt2", title="Dune: Part Two", type="movie"),
        make_item("tt3", title="Shogun", type="tv"),
        make_item("tt4", title="Frieren", type="anime"),
    ]


def test_featured_prefers_title_hint(pool):
    assert pick_featured(pool, "Dune").imdb_id == "tt2"


def test_featured_falls_back_to_random(pool):
    featured = pick_featured(pool, "Nonexistent", rng=random.Random(7))

    assert featured in pool


def test_featured_empty_pool():
    assert pick_featured([], "Dune") is None


def test_rows_split_by_kind(pool):
    feed = build_home_feed(pool, title_hint="Dune")

    assert feed.featured.title == "Dune: Part Two"
    assert [i.imdb_id for i in feed.rows["Top 10"]] == ["tt1", "tt2", "tt3", "tt4"]
    assert [i.imdb_id for i in feed.rows["Series"]] == ["tt3"]
    assert [i.imdb_id for i in feed.rows["Top Rated"]] == ["tt1", "tt2"]
    assert [i.imdb_id for i in feed.rows["Anime"]] == ["tt4"]


def test_top_ten_is_capped(make_item):
    items = [make_item(f"tt{i}", type="movie") for i in range(15)]

    feed = build_home_feed(items, title_hint="")

    assert len(feed.rows["Top 10"]) == 10
    assert len(feed.rows["Trending Today"]) == 15


def test_empty_rows_omitted(make_item):
    feed = build_home_feed([make_item("tt1", type="movie")])

    assert "Series" not in feed.rows
    assert "Anime" not in feed.rows


@pytest.mark.asyncio
async def test_load_home_feed(search, pool):
    search.responses["trending 2025"] = pool

    feed = await load_home_feed(search)

    assert search.calls == [("trending 2025", 1)]
    assert feed.featured.imdb_id == "tt2"


@pytest.mark.asyncio
async def test_load_home_feed_failure_is_empty(search):
    search.responses["trending 2025"] = SearchError("down")

    feed = await load_home_feed(search)

    assert feed.featured is None
    assert feed.rows == {}
