"""Structural interfaces of the collaborators the view layer consumes.

Having protocols here makes it easy to pass test doubles while keeping the
production collaborators (`HttpRestaurantSource`, a real map widget) concrete.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from restview.dom import Element
from restview.map import MapWidget, MarkerHandle
from restview.models.restaurant import Restaurant

#: Assigns the browser location.
Navigate = Callable[[str], None]


class RestaurantSource(Protocol):
    """Asynchronous data-access interface.

    Fetch methods raise :class:`restview.exceptions.FetchError` on failure.
    ``"all"`` passed to ``fetch_restaurants`` means no filter on that facet.
    """

    async def fetch_neighborhoods(self) -> Sequence[str]: ...

    async def fetch_cuisines(self) -> Sequence[str]: ...

    async def fetch_restaurants(self, cuisine: str, neighborhood: str) -> Sequence[Restaurant]: ...

    def image_webp(self, restaurant: Restaurant) -> str: ...

    def image_jpg(self, restaurant: Restaurant) -> str: ...

    def url_for_restaurant(self, restaurant: Restaurant) -> str: ...

    def map_marker_for_restaurant(self, restaurant: Restaurant, map_widget: MapWidget) -> MarkerHandle: ...


@dataclass(frozen=True, slots=True)
class IntersectionEntry:
    """One viewport-intersection change reported by a `ViewportObserver`."""

    target: Element
    is_intersecting: bool


IntersectionCallback = Callable[[list[IntersectionEntry]], None]


class ViewportObserver(Protocol):
    def observe(self, target: Element) -> None: ...

    def unobserve(self, target: Element) -> None: ...

    def disconnect(self) -> None: ...


#: Present when the runtime can watch viewport intersections, ``None`` otherwise.
ViewportObserverFactory = Callable[[IntersectionCallback], ViewportObserver]


class CachingAgentContainer(Protocol):
    """Registers the background caching agent.

    ``register`` raises :class:`restview.exceptions.RegistrationError` on failure.
    """

    async def register(self, script_path: str) -> Any: ...
