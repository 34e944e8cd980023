"""
Viewport Trigger
Infinite-scroll wiring: sentinel visibility -> controller.load_next()
"""
import asyncio
import logging
from typing import Callable, List, Optional, Protocol
from reelscroll.core.config import settings
from reelscroll.discovery.controller import PageState, PaginationController

logger = logging.getLogger(__name__)

VisibilityCallback = Callable[[float], None]


class VisibilitySource(Protocol):
    """Anything that reports the sentinel's visible fraction"""

    def subscribe(self, callback: VisibilityCallback) -> Callable[[], None]:
        ...


class VisibilityFeed:
    """Push-based source: callers publish ratios as they observe them"""

    def __init__(self):
        self._callbacks: List[VisibilityCallback] = []
        self.last_ratio = 0.0

    def subscribe(self, callback: VisibilityCallback) -> Callable[[], None]:
        self._callbacks.append(callback)

        def unsubscribe():
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def publish(self, ratio: float):
        self.last_ratio = ratio
        for callback in list(self._callbacks):
            callback(ratio)


class PollingVisibility:
    """
    Poll-based source

    Samples ``probe()`` every ``interval`` seconds in a background task and
    forwards the ratio to subscribers. Polling starts with the first
    subscriber and stops when the last one leaves.
    """

    def __init__(self, probe: Callable[[], float], interval: Optional[float] = None):
        self.probe = probe
        self.interval = interval or settings.VISIBILITY_POLL_INTERVAL_SECONDS
        self._feed = VisibilityFeed()
        self.task: Optional[asyncio.Task] = None

    def subscribe(self, callback: VisibilityCallback) -> Callable[[], None]:
        unsubscribe_feed = self._feed.subscribe(callback)
        if self.task is None or self.task.done():
            self.task = asyncio.get_running_loop().create_task(self._poll_loop())

        def unsubscribe():
            unsubscribe_feed()
            if not self._feed._callbacks and self.task and not self.task.done():
                self.task.cancel()

        return unsubscribe

    async def _poll_loop(self):
        while True:
            try:
                self._feed.publish(self.probe())
            except Exception as e:
                logger.warning(f"Visibility probe failed: {e}")
            await asyncio.sleep(self.interval)


class ViewportTrigger:
    """
    Calls ``load_next`` when the sentinel becomes visible enough

    Guards: ratio >= threshold, controller has more pages, controller not
    loading, and no load started by this trigger still running. After each
    load (or any other controller change) the last known ratio is checked
    again, so a sentinel that stays on screen keeps pulling pages.
    """

    def __init__(
        self,
        controller: PaginationController,
        threshold: Optional[float] = None,
    ):
        self.controller = controller
        self.threshold = settings.VIEWPORT_THRESHOLD if threshold is None else threshold
        self.ratio = 0.0
        self.task: Optional[asyncio.Task] = None
        self.closed = False
        self._detach_source: Optional[Callable[[], None]] = None
        self._detach_controller = controller.subscribe(self._on_state_change)

    def observe(self, source: VisibilitySource):
        """Start listening to a visibility source (replaces any previous one)"""
        if self.closed:
            raise RuntimeError("ViewportTrigger is closed")
        if self._detach_source:
            self._detach_source()
        self._detach_source = source.subscribe(self.on_visibility)

    def on_visibility(self, ratio: float) -> Optional[asyncio.Task]:
        if self.closed:
            return None
        self.ratio = ratio
        return self._maybe_load()

    def _on_state_change(self, state: PageState):
        if not self.closed and not state.is_loading:
            self._maybe_load()

    def _maybe_load(self) -> Optional[asyncio.Task]:
        if self.closed or self.ratio < self.threshold:
            return None
        if self.task is not None and not self.task.done():
            return None
        if self.controller.state.epoch == 0:
            return None
        if self.controller.is_loading or not self.controller.has_more:
            return None

        logger.debug(f"[{self.controller.kind}] Sentinel visible ({self.ratio:.2f}), loading next page")
        start = (self.controller.state.epoch, self.controller.page)
        self.task = asyncio.get_running_loop().create_task(self.controller.load_next())
        self.task.add_done_callback(lambda task: self._on_load_done(task, start))
        return self.task

    def _on_load_done(self, task: asyncio.Task, start):
        if task.cancelled():
            return
        if task.exception() is not None:
            logger.error(f"load_next raised: {task.exception()}")
            return
        # a failed or no-op load leaves the page unchanged; wait for the next report
        if task.result() and (self.controller.state.epoch, self.controller.page) != start:
            self._maybe_load()

    def close(self):
        """Stop observing; no load is started after this returns"""
        if self.closed:
            return
        self.closed = True
        if self._detach_source:
            self._detach_source()
            self._detach_source = None
        self._detach_controller()
