"""
Category Pages
Per-client browse pages and the background sweeper that discards idle ones
"""
import asyncio
import logging
import secrets
import time
from typing import Dict, Optional
from reelscroll.catalog.categories import get_table
from reelscroll.core.config import settings
from reelscroll.discovery.controller import PaginationController, SearchFn
from reelscroll.discovery.trigger import ViewportTrigger, VisibilityFeed
from reelscroll.models.media import PageSnapshot

logger = logging.getLogger(__name__)


class PageLimitError(Exception):
    """Too many pages are open"""


class CategoryPage:
    """
    One mounted movies / TV / anime page

    Binds the category selector to ``reset``, feeds reported sentinel
    visibility into a ViewportTrigger and exposes the controller state.
    """

    def __init__(self, page_id: str, kind: str, search_fn: SearchFn):
        self.page_id = page_id
        self.kind = kind
        self.controller = PaginationController(get_table(kind), search_fn)
        self.visibility = VisibilityFeed()
        self.trigger = ViewportTrigger(self.controller)
        self.trigger.observe(self.visibility)
        self.last_active = time.monotonic()
        self.closed = False

    def touch(self):
        self.last_active = time.monotonic()

    async def mount(self):
        """Load the default category"""
        await self.select(self.controller.categories.default.id)

    async def select(self, category_id: str):
        self.touch()
        await self.controller.reset(category_id)

    async def load_next(self) -> bool:
        self.touch()
        return await self.controller.load_next()

    def report_visibility(self, ratio: float):
        self.touch()
        self.visibility.publish(ratio)

    def snapshot(self) -> PageSnapshot:
        return self.controller.snapshot(page_id=self.page_id)

    def close(self):
        self.closed = True
        self.trigger.close()


class PageManager:
    """Holds open pages and discards the ones left idle"""

    def __init__(self):
        self.pages: Dict[str, CategoryPage] = {}
        self.task: Optional[asyncio.Task] = None
        self.running = False

    async def open_page(self, kind: str, search_fn: SearchFn) -> CategoryPage:
        """Create a page for a media kind and load its default category"""
        if len(self.pages) >= settings.MAX_OPEN_PAGES:
            self.sweep_idle()
            if len(self.pages) >= settings.MAX_OPEN_PAGES:
                raise PageLimitError(f"{len(self.pages)} pages already open")

        page_id = secrets.token_urlsafe(12)
        page = CategoryPage(page_id, kind, search_fn)
        self.pages[page_id] = page
        logger.info(f"Opened {kind} page {page_id}")
        await page.mount()
        return page

    def get_page(self, page_id: str) -> Optional[CategoryPage]:
        return self.pages.get(page_id)

    def close_page(self, page_id: str) -> bool:
        page = self.pages.pop(page_id, None)
        if page is None:
            return False
        page.close()
        logger.info(f"Closed {page.kind} page {page_id}")
        return True

    def close_all(self):
        for page_id in list(self.pages):
            self.close_page(page_id)

    def sweep_idle(self, max_idle: Optional[float] = None) -> int:
        """Close pages inactive for longer than max_idle seconds"""
        max_idle = settings.PAGE_IDLE_TIMEOUT_SECONDS if max_idle is None else max_idle
        cutoff = time.monotonic() - max_idle
        stale = [page_id for page_id, page in self.pages.items() if page.last_active < cutoff]
        for page_id in stale:
            self.close_page(page_id)
        if stale:
            logger.info(f"Swept {len(stale)} idle pages ({len(self.pages)} still open)")
        return len(stale)

    async def background_loop(self, interval_seconds: float = 60):
        """Periodically discard idle pages"""
        self.running = True

        logger.info(f"Idle page sweeper started (interval: {interval_seconds}s)")

        while self.running:
            try:
                await asyncio.sleep(interval_seconds)
                self.sweep_idle()
            except asyncio.CancelledError:
                logger.info("Idle page sweeper cancelled")
                break
            except Exception as e:
                logger.error(f"Error in page sweeper: {e}", exc_info=True)

    def start(self, interval_seconds: float = 60):
        """Start the background task"""
        if self.task is None or self.task.done():
            self.task = asyncio.create_task(self.background_loop(interval_seconds))
            logger.info("Page manager started")

    async def stop(self):
        """Stop the background task and close every page"""
        self.running = False
        if self.task and not self.task.done():
            self.task.cancel()
            try:
                await self.task
            except asyncio.CancelledError:
                pass
        self.close_all()
        logger.info("Page manager stopped")


# Global singleton instance
_page_manager = None


def get_page_manager() -> PageManager:
    """Get the global page manager instance"""
    global _page_manager
    if _page_manager is None:
        _page_manager = PageManager()
    return _page_manager
