"""
Tests for category pages and the page manager
"""
import asyncio
import pytest
from reelscroll.core.config import settings
from reelscroll.services.pages import CategoryPage, PageLimitError, PageManager, get_page_manager


@pytest.fixture
def manager():
    manager = PageManager()
    yield manager
    manager.close_all()


def test_page_manager_singleton():
    assert get_page_manager() is get_page_manager()


def test_page_manager_init():
    manager = PageManager()

    assert manager.pages == {}
    assert manager.task is None
    assert manager.running is False


@pytest.mark.asyncio
async def test_open_page_mounts_default_category(manager, search, make_item):
    search.responses["anime 2025"] = [make_item("tt1")]

    page = await manager.open_page("anime", search)

    assert manager.get_page(page.page_id) is page
    snapshot = page.snapshot()
    assert snapshot.page_id == page.page_id
    assert snapshot.category.id == "popular"
    assert [item.imdb_id for item in snapshot.items] == ["tt1"]
    assert snapshot.items[0].type == "anime"


@pytest.mark.asyncio
async def test_page_ids_are_unique(manager, search):
    first = await manager.open_page("movie", search)
    second = await manager.open_page("movie", search)

    assert first.page_id != second.page_id
    assert len(manager.pages) == 2


@pytest.mark.asyncio
async def test_select_and_scroll(manager, search, make_item, settle):
    search.responses["series 2025"] = []
    search.responses["crime series 2025"] = [make_item("tt1")]
    search.responses["crime series 2024"] = [make_item("tt2")]
    page = await manager.open_page("tv", search)

    await page.select("crime")
    page.report_visibility(1.0)
    await settle()

    assert [item.imdb_id for item in page.controller.items] == ["tt1", "tt2"]
    assert page.controller.has_more is False


@pytest.mark.asyncio
async def test_closed_page_stops_loading(manager, search, make_item, settle):
    search.responses["movie 2025"] = [make_item("tt1")]
    page = await manager.open_page("movie", search)

    assert manager.close_page(page.page_id) is True
    page.report_visibility(1.0)
    await settle()

    assert page.closed is True
    assert manager.get_page(page.page_id) is None
    assert search.queries == ["movie 2025"]
    assert manager.close_page(page.page_id) is False


@pytest.mark.asyncio
async def test_sweep_idle_pages(manager, search):
    stale = await manager.open_page("movie", search)
    fresh = await manager.open_page("tv", search)
    stale.last_active -= 120

    assert manager.sweep_idle(max_idle=60) == 1
    assert list(manager.pages) == [fresh.page_id]
    assert stale.trigger.closed is True


@pytest.mark.asyncio
async def test_page_limit(manager, search, monkeypatch):
    monkeypatch.setattr(settings, "MAX_OPEN_PAGES", 1)
    await manager.open_page("movie", search)

    with pytest.raises(PageLimitError):
        await manager.open_page("movie", search)


@pytest.mark.asyncio
async def test_page_limit_reclaims_idle_pages(manager, search, monkeypatch):
    monkeypatch.setattr(settings, "MAX_OPEN_PAGES", 1)
    old = await manager.open_page("movie", search)
    old.last_active -= settings.PAGE_IDLE_TIMEOUT_SECONDS + 1

    new = await manager.open_page("movie", search)

    assert list(manager.pages) == [new.page_id]


@pytest.mark.asyncio
async def test_task_lifecycle(manager, search):
    await manager.open_page("anime", search)

    manager.start(interval_seconds=0.01)
    assert manager.task is not None
    await asyncio.sleep(0.03)
    assert not manager.task.done()

    await manager.stop()

    assert manager.running is False
    assert manager.task.done()
    assert manager.pages == {}


@pytest.mark.asyncio
async def test_background_loop_sweeps(manager, search, monkeypatch):
    monkeypatch.setattr(settings, "PAGE_IDLE_TIMEOUT_SECONDS", 0)
    await manager.open_page("movie", search)

    manager.start(interval_seconds=0.01)
    await asyncio.sleep(0.05)
    await manager.stop()

    assert manager.pages == {}


@pytest.mark.asyncio
async def test_category_page_touch_on_activity(search):
    page = CategoryPage("p1", "movie", search)
    page.last_active = 0

    await page.load_next()

    assert page.last_active > 0
