"""Directory page bootstrap.

:class:`RestaurantDirectoryPage` owns the whole application state (document,
map, view state and the components working on it) and wires the filter
controls to the query coordinator.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from restview.config import (
    CUISINES_SELECT_ID,
    NEIGHBORHOODS_SELECT_ID,
    RESTAURANTS_LIST_ID,
    ViewConfig,
)
from restview.coordinator import QueryCoordinator
from restview.dom import Document, Event, build_index_document
from restview.filters import FilterRegistry
from restview.interfaces import CachingAgentContainer, Navigate, RestaurantSource, ViewportObserverFactory
from restview.lazy import LazyLoadScheduler
from restview.map import MapFactory, MapWidget, init_map
from restview.models.filters import FacetSet
from restview.render import Renderer
from restview.state import ViewSnapshot, ViewState
from restview.worker import register_caching_agent

_logger = logging.getLogger(__name__)


def _ignore_navigation(url: str) -> None:
    _logger.debug("Navigation to %s requested with no navigator attached", url)


class RestaurantDirectoryPage:
    """The restaurant directory page.

    Usage::

        async with RestaurantDirectoryPage(source, map_factory) as page:
            await page.settle()
            print(page.document.to_html())
    """

    def __init__(
        self,
        source: RestaurantSource,
        map_factory: MapFactory,
        *,
        config: ViewConfig | None = None,
        document: Document | None = None,
        observer_factory: ViewportObserverFactory | None = None,
        caching_agent: CachingAgentContainer | None = None,
        navigate: Navigate | None = None,
    ) -> None:
        self._config = config if config is not None else ViewConfig()
        self._source = source
        self._map_factory = map_factory
        self._observer_factory = observer_factory
        self._caching_agent = caching_agent
        self._navigate = navigate if navigate is not None else _ignore_navigation
        self.document = document if document is not None else build_index_document()

        list_container = self.document.require_element(RESTAURANTS_LIST_ID)
        self.state = ViewState(list_container)
        self.registry = FilterRegistry(
            self.document,
            source,
            neighborhoods_select=self.document.require_select(NEIGHBORHOODS_SELECT_ID),
            cuisines_select=self.document.require_select(CUISINES_SELECT_ID),
        )
        self.scheduler = LazyLoadScheduler(list_container, observer_factory)
        self._map: MapWidget | None = None
        self._renderer: Renderer | None = None
        self._coordinator: QueryCoordinator | None = None
        self._registration: asyncio.Task[bool] | None = None

    async def __aenter__(self) -> RestaurantDirectoryPage:
        await self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if self._registration is not None and not self._registration.done():
            self._registration.cancel()
        if self._coordinator is not None:
            await self._coordinator.join()

    @property
    def map(self) -> MapWidget:
        if self._map is None:
            raise RuntimeError("Page not started. Call 'await page.start()' first")
        return self._map

    @property
    def coordinator(self) -> QueryCoordinator:
        if self._coordinator is None:
            raise RuntimeError("Page not started. Call 'await page.start()' first")
        return self._coordinator

    @property
    def registration(self) -> asyncio.Task[bool] | None:
        """The detached caching agent registration, once started."""
        return self._registration

    @property
    def snapshot(self) -> ViewSnapshot:
        return self.state.snapshot

    async def start(self) -> FacetSet:
        """Create the map, wire the filters, dispatch the default query and load facets.

        Caching agent registration runs as a detached task; nothing waits on it.
        """
        if self._coordinator is not None:
            raise RuntimeError("Page already started")

        self._map = init_map(self._map_factory, self._config)
        self._renderer = Renderer(
            self.document,
            self.state,
            self._source,
            self._map,
            self.scheduler,
            self._navigate,
        )
        self._coordinator = QueryCoordinator(
            self._source,
            self.state,
            self._renderer,
            self.registry.current_selection,
            discard_stale_results=self._config.discard_stale_results,
        )
        self.registry.neighborhoods_select.add_event_listener("change", self._on_filter_change)
        self.registry.cuisines_select.add_event_listener("change", self._on_filter_change)
        self._coordinator.refresh()

        self._registration = asyncio.get_running_loop().create_task(
            register_caching_agent(self._caching_agent, self._config.caching_agent_script),
        )
        return await self.registry.load_facets()

    async def settle(self) -> None:
        """Wait for every in-flight restaurant query to settle."""
        await self.coordinator.join()

    def _on_filter_change(self, event: Event) -> None:
        _logger.debug("Filter %r changed", event.target.id)
        self.coordinator.refresh()
