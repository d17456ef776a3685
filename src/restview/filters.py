"""Neighborhood and cuisine filter controls."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from restview.dom import Document, SelectElement, create_option
from restview.exceptions import FetchError
from restview.interfaces import RestaurantSource
from restview.models.filters import ALL, FacetSet, FilterSelection

_logger = logging.getLogger(__name__)


class FilterRegistry:
    """Holds the facet universe and the two select controls it populates."""

    def __init__(
        self,
        document: Document,
        source: RestaurantSource,
        *,
        neighborhoods_select: SelectElement,
        cuisines_select: SelectElement,
    ) -> None:
        self._document = document
        self._source = source
        self._neighborhoods_select = neighborhoods_select
        self._cuisines_select = cuisines_select
        self._facets: FacetSet | None = None

    @property
    def facets(self) -> FacetSet | None:
        return self._facets

    @property
    def neighborhoods_select(self) -> SelectElement:
        return self._neighborhoods_select

    @property
    def cuisines_select(self) -> SelectElement:
        return self._cuisines_select

    async def load_facets(self) -> FacetSet:
        """Fetch both facets and append one option per value.

        A failed facet is logged and its control keeps only its default
        option; the other facet still loads.
        """
        if self._facets is not None:
            _logger.debug("Facets already loaded")
            return self._facets

        neighborhoods, cuisines = await asyncio.gather(
            self._load("neighborhoods", self._source.fetch_neighborhoods, self._neighborhoods_select),
            self._load("cuisines", self._source.fetch_cuisines, self._cuisines_select),
        )
        self._facets = FacetSet(neighborhoods=neighborhoods, cuisines=cuisines)
        return self._facets

    async def _load(
        self,
        facet: str,
        fetch: Callable[[], Awaitable[Sequence[str]]],
        select: SelectElement,
    ) -> tuple[str, ...]:
        try:
            values = tuple(await fetch())
        except FetchError as exc:
            _logger.error("Failed to load %s: %s", facet, exc)
            return ()

        for value in values:
            select.append(create_option(self._document, value))
        _logger.debug("Loaded %d %s", len(values), facet)
        return values

    def current_selection(self) -> FilterSelection:
        """Read both controls as they are; a control with nothing selected reads as ``"all"``."""
        cuisine = self._cuisines_select.value
        neighborhood = self._neighborhoods_select.value
        return FilterSelection(
            cuisine=ALL if cuisine is None else cuisine,
            neighborhood=ALL if neighborhood is None else neighborhood,
        )
