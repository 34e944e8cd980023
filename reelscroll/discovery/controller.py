"""
Pagination Controller
Incremental, year-by-year content discovery for one category page
"""
import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple
from pydantic import BaseModel, ConfigDict
from reelscroll.catalog.categories import CategoryTable
from reelscroll.core.config import settings
from reelscroll.discovery.query import synthesize
from reelscroll.models.media import Category, MediaItem, MediaKind, PageSnapshot
from reelscroll.utils.helpers import merge_unique

logger = logging.getLogger(__name__)

SearchFn = Callable[[str, int], Awaitable[Sequence[MediaItem]]]
StateListener = Callable[["PageState"], None]


class PageStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    EXHAUSTED = "exhausted"


class PageState(BaseModel):
    """Immutable snapshot of one category session"""
    model_config = ConfigDict(frozen=True)

    epoch: int
    category: Category
    page: int = 1
    items: Tuple[MediaItem, ...] = ()
    status: PageStatus = PageStatus.IDLE

    @property
    def is_loading(self) -> bool:
        return self.status is PageStatus.LOADING

    @property
    def has_more(self) -> bool:
        return self.status is not PageStatus.EXHAUSTED


class PaginationController:
    """
    State machine behind a category page

    Each ``reset`` opens a new session (epoch). Requests remember the epoch
    they were issued under and their results are dropped if a newer session
    started in the meantime. ``load_next`` only runs from the idle state, so
    at most one request per session is outstanding.
    """

    def __init__(
        self,
        categories: CategoryTable,
        search_fn: SearchFn,
        kind: Optional[MediaKind] = None,
        anchor_year: Optional[int] = None,
    ):
        self.categories = categories
        self.search_fn = search_fn
        self.kind: MediaKind = kind or categories.kind
        self.anchor_year = settings.ANCHOR_YEAR if anchor_year is None else anchor_year
        self._epoch = 0
        self._state = PageState(epoch=0, category=categories.default)
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> PageState:
        return self._state

    @property
    def items(self) -> Tuple[MediaItem, ...]:
        return self._state.items

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def has_more(self) -> bool:
        return self._state.has_more

    @property
    def page(self) -> int:
        return self._state.page

    @property
    def category(self) -> Category:
        return self._state.category

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a state-change listener; returns an unsubscribe callable"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: PageState):
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.error(f"State listener failed: {e}", exc_info=True)

    def snapshot(self, page_id: Optional[str] = None) -> PageSnapshot:
        state = self._state
        return PageSnapshot(
            page_id=page_id,
            kind=self.kind,
            category=state.category,
            page=state.page,
            items=list(state.items),
            is_loading=state.is_loading,
            has_more=state.has_more,
        )

    async def reset(self, category_id: str) -> None:
        """Start a new session for a category and load its first page"""
        category = self.categories.resolve(category_id)
        self._epoch += 1
        self._set_state(
            PageState(epoch=self._epoch, category=category, status=PageStatus.LOADING)
        )
        logger.info(f"[{self.kind}] Session {self._epoch} started for category {category.id!r}")
        await self._fetch(self._epoch, 1)

    async def load_next(self) -> bool:
        """
        Fetch the next (one year older) page

        Returns:
            True if a request was issued, False if the call was a no-op
        """
        state = self._state
        # epoch 0 means no category was ever selected
        if state.epoch == 0 or state.status is not PageStatus.IDLE:
            return False

        self._set_state(state.model_copy(update={"status": PageStatus.LOADING}))
        await self._fetch(state.epoch, state.page + 1)
        return True

    async def _fetch(self, epoch: int, page: int):
        category = self._state.category
        query = synthesize(category.query, page, self.anchor_year)
        logger.debug(f"[{self.kind}] Generated query {query!r} for page {page}")

        try:
            batch = await self.search_fn(query, page)
        except asyncio.CancelledError:
            if epoch == self._epoch and self._state.is_loading:
                logger.warning(f"[{self.kind}] Load of page {page} ({query!r}) was cancelled")
                self._set_state(self._state.model_copy(update={"status": PageStatus.IDLE}))
            raise
        except Exception as e:
            if epoch != self._epoch:
                logger.debug(f"[{self.kind}] Ignoring failure from superseded session {epoch}")
                return
            logger.error(f"[{self.kind}] Failed to load page {page} ({query!r}): {e}")
            self._set_state(self._state.model_copy(update={"status": PageStatus.IDLE}))
            return

        if epoch != self._epoch:
            logger.debug(
                f"[{self.kind}] Discarding {len(batch)} results from superseded session {epoch}"
            )
            return

        state = self._state
        if not batch:
            logger.info(f"[{self.kind}] No results for {query!r}, category {category.id!r} exhausted")
            self._set_state(state.model_copy(update={"status": PageStatus.EXHAUSTED}))
            return

        stamped = [item.model_copy(update={"type": self.kind}) for item in batch]
        items = merge_unique(state.items, stamped)
        logger.debug(
            f"[{self.kind}] Page {page} added {len(items) - len(state.items)} of {len(batch)} results"
        )
        self._set_state(
            state.model_copy(update={"items": items, "page": page, "status": PageStatus.IDLE})
        )
