"""Restaurant query dispatch and result application."""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Callable

from restview.exceptions import FetchError
from restview.interfaces import RestaurantSource
from restview.models.filters import FilterSelection
from restview.render import Renderer
from restview.state import ViewState

_logger = logging.getLogger(__name__)


class QueryCoordinator:
    """Issues one restaurant query per refresh and applies settled results.

    Queries are never cancelled. Each one is tagged with a sequence number at
    dispatch. With ``discard_stale_results`` a result is applied only when its
    number is higher than that of the last applied result, so the display
    converges on the most recent selection whatever the completion order.
    Without it, whichever query completes last wins.
    """

    def __init__(
        self,
        source: RestaurantSource,
        state: ViewState,
        renderer: Renderer,
        read_selection: Callable[[], FilterSelection],
        *,
        discard_stale_results: bool = False,
    ) -> None:
        self._source = source
        self._state = state
        self._renderer = renderer
        self._read_selection = read_selection
        self._discard_stale_results = discard_stale_results
        self._sequence = itertools.count(1)
        self._latest_applied = 0
        self._in_flight: set[asyncio.Task[None]] = set()

    @property
    def latest_applied(self) -> int:
        """Sequence number of the result on display (0 before the first one)."""
        return self._latest_applied

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def refresh(self) -> asyncio.Task[None]:
        """Read the current selection and dispatch a query for it.

        Must be called from within the running event loop.
        """
        selection = self._read_selection()
        seq = next(self._sequence)
        _logger.debug("Dispatching query #%d for %s", seq, selection)
        task = asyncio.get_running_loop().create_task(self._query(seq, selection))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    async def join(self) -> None:
        """Wait until every dispatched query has settled."""
        while self._in_flight:
            await asyncio.gather(*self._in_flight)

    async def _query(self, seq: int, selection: FilterSelection) -> None:
        try:
            restaurants = await self._source.fetch_restaurants(selection.cuisine, selection.neighborhood)
        except FetchError as exc:
            _logger.error("Failed to fetch restaurants for %s: %s", selection, exc)
            return

        if self._discard_stale_results and seq < self._latest_applied:
            _logger.debug("Discarding stale result of query #%d (showing #%d)", seq, self._latest_applied)
            return

        # No await between replace and render: nothing can interleave.
        self._state.replace(restaurants)
        self._renderer.render()
        self._latest_applied = seq
