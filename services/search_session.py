"""
Discover screen state: the current category, free text, radius and origin,
plus the latest published results.

Every input change starts a new aggregation run tagged with an increasing
sequence number. A run publishes only if no newer run has started since,
so a slow stale run can never overwrite newer results.
"""

import asyncio
from typing import Awaitable, Callable, List, Optional, Set

from core.config import settings
from core.logging import get_logger
from schemas.places import Coordinate, Place
from services.category_queries import CharityCategory, expand_category
from services.search_aggregator import SearchAggregator


logger = get_logger(__name__)

MIN_RADIUS_KM = 1
MAX_RADIUS_KM = 50

PublishCallback = Callable[[List[Place]], Awaitable[None]]


def clamp_radius_km(radius_km: float) -> int:
    return max(MIN_RADIUS_KM, min(MAX_RADIUS_KM, int(round(radius_km))))


class SearchSession:
    def __init__(
        self,
        aggregator: SearchAggregator,
        origin: Optional[Coordinate] = None,
        radius_km: Optional[float] = None,
        max_results: Optional[int] = None,
        on_publish: Optional[PublishCallback] = None,
    ):
        self.aggregator = aggregator
        self.origin = origin
        self.category = CharityCategory.ALL
        self.free_text = ""
        self.radius_km = clamp_radius_km(radius_km if radius_km is not None else settings.SEARCH_DEFAULT_RADIUS_KM)
        self.max_results = max_results or settings.SEARCH_MAX_RESULTS
        self.on_publish = on_publish

        self.results: List[Place] = []
        self.is_loading = False
        self.sequence = 0
        self._tasks: Set[asyncio.Task] = set()

    def set_category(self, category: CharityCategory) -> Optional[asyncio.Task]:
        self.category = CharityCategory(category)
        if self.category is not CharityCategory.OTHER:
            self.free_text = ""
        return self._start_run()

    def set_free_text(self, text: Optional[str]) -> Optional[asyncio.Task]:
        if text is not None and not isinstance(text, str):
            raise TypeError("free_text must be a string")
        self.free_text = text or ""
        return self._start_run()

    def set_radius(self, radius_km: float) -> Optional[asyncio.Task]:
        self.radius_km = clamp_radius_km(radius_km)
        return self._start_run()

    def set_origin(self, origin: Optional[Coordinate]) -> None:
        """Record a new device location. Applies to the next run."""
        self.origin = origin

    def refresh(self) -> Optional[asyncio.Task]:
        return self._start_run()

    @property
    def radius_meters(self) -> float:
        return self.radius_km * 1000.0

    def _start_run(self) -> Optional[asyncio.Task]:
        queries = expand_category(self.category, self.free_text)
        self.sequence += 1
        token = self.sequence
        self.is_loading = True

        if not queries:
            # Nothing to search; publish the empty state right away
            self.results = []
            self.is_loading = False
            if self.on_publish is not None:
                return self._track(asyncio.create_task(self._notify(token, [])))
            return None

        task = asyncio.create_task(
            self._run(token, queries, self.origin, self.radius_meters, self.max_results)
        )
        return self._track(task)

    def _track(self, task: asyncio.Task) -> asyncio.Task:
        self._tasks.add(task)
        task.add_done_callback(self._finished)
        return task

    def _finished(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning("Search run failed", error=str(error), error_type=type(error).__name__)

    async def _run(
        self,
        token: int,
        queries: List[str],
        origin: Optional[Coordinate],
        radius_meters: float,
        max_results: int,
    ) -> None:
        results = await self.aggregator.run_category(queries, origin, radius_meters, max_results)
        if token != self.sequence:
            logger.debug("Discarding stale search results", token=token, current=self.sequence)
            return
        self.results = results
        self.is_loading = False
        await self._notify(token, results)

    async def _notify(self, token: int, results: List[Place]) -> None:
        if self.on_publish is not None and token == self.sequence:
            await self.on_publish(results)

    async def close(self) -> None:
        """Cancel runs still in flight."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
