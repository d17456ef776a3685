from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from typing import Any

import pytest

from restview.dom import Element
from restview.exceptions import FetchError, RegistrationError
from restview.interfaces import IntersectionCallback, IntersectionEntry
from restview.map import MapOptions, MarkerOptions, TileLayerOptions
from restview.models.filters import ALL
from restview.models.restaurant import Restaurant


def make_restaurant(restaurant_id: int, name: str, neighborhood: str = "Manhattan", cuisine: str = "Italian") -> Restaurant:
    return Restaurant.model_validate(
        {
            "id": restaurant_id,
            "name": name,
            "neighborhood": neighborhood,
            "cuisine_type": cuisine,
            "address": f"{restaurant_id} Main St",
            "photograph": str(restaurant_id),
            "latlng": {"lat": 40.7 + restaurant_id / 100, "lng": -73.9 - restaurant_id / 100},
        }
    )


class FakeMarker:
    def __init__(self, map_widget: FakeMap, lat: float, lng: float, options: MarkerOptions) -> None:
        self._map = map_widget
        self.lat = lat
        self.lng = lng
        self.options = options
        self.handlers: dict[str, list[Callable[..., Any]]] = {}
        self.removed = False

    def on(self, event_type: str, handler: Callable[..., Any]) -> FakeMarker:
        self.handlers.setdefault(event_type, []).append(handler)
        return self

    def fire(self, event_type: str) -> None:
        for handler in self.handlers.get(event_type, ()):
            handler({"type": event_type})

    def remove(self) -> FakeMarker:
        if not self.removed:
            self.removed = True
            self._map.markers.remove(self)
        return self


class FakeMap:
    def __init__(self, options: MapOptions) -> None:
        self.options = options
        self.tile_layers: list[TileLayerOptions] = []
        self.markers: list[FakeMarker] = []

    def add_tile_layer(self, options: TileLayerOptions) -> None:
        self.tile_layers.append(options)

    def place_marker(self, lat: float, lng: float, options: MarkerOptions) -> FakeMarker:
        marker = FakeMarker(self, lat, lng, options)
        self.markers.append(marker)
        return marker


class FakeObserver:
    def __init__(self, callback: IntersectionCallback) -> None:
        self.callback = callback
        self.observed: list[Element] = []
        self.disconnects = 0

    def observe(self, target: Element) -> None:
        self.observed.append(target)

    def unobserve(self, target: Element) -> None:
        self.observed.remove(target)

    def disconnect(self) -> None:
        self.observed.clear()
        self.disconnects += 1

    def signal(self, target: Element, *, intersecting: bool = True) -> None:
        self.callback([IntersectionEntry(target=target, is_intersecting=intersecting)])


class FakeObserverFactory:
    def __init__(self) -> None:
        self.instances: list[FakeObserver] = []

    def __call__(self, callback: IntersectionCallback) -> FakeObserver:
        observer = FakeObserver(callback)
        self.instances.append(observer)
        return observer

    @property
    def observer(self) -> FakeObserver:
        assert len(self.instances) == 1
        return self.instances[0]


class FakeCachingAgent:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.registered: list[str] = []

    async def register(self, script_path: str) -> None:
        if self.fail:
            raise RegistrationError("scope not allowed", script_path=script_path)
        self.registered.append(script_path)


class FakeSource:
    """In-memory data-access collaborator.

    ``gate(cuisine, neighborhood)`` makes the next matching query wait until
    the returned event is set, to control completion order.
    """

    def __init__(
        self,
        restaurants: Sequence[Restaurant] = (),
        *,
        neighborhoods: Sequence[str] = (),
        cuisines: Sequence[str] = (),
    ) -> None:
        self.restaurants = list(restaurants)
        self.neighborhoods = list(neighborhoods)
        self.cuisines = list(cuisines)
        self.queries: list[tuple[str, str]] = []
        self.fail_neighborhoods = False
        self.fail_cuisines = False
        self.fail_restaurants = False
        self._gates: dict[tuple[str, str], asyncio.Event] = {}

    def gate(self, cuisine: str, neighborhood: str) -> asyncio.Event:
        event = asyncio.Event()
        self._gates[(cuisine, neighborhood)] = event
        return event

    async def fetch_neighborhoods(self) -> list[str]:
        await asyncio.sleep(0)
        if self.fail_neighborhoods:
            raise FetchError("neighborhoods unavailable", resource="/restaurants")
        return list(self.neighborhoods)

    async def fetch_cuisines(self) -> list[str]:
        await asyncio.sleep(0)
        if self.fail_cuisines:
            raise FetchError("cuisines unavailable", resource="/restaurants")
        return list(self.cuisines)

    async def fetch_restaurants(self, cuisine: str, neighborhood: str) -> list[Restaurant]:
        self.queries.append((cuisine, neighborhood))
        gate = self._gates.pop((cuisine, neighborhood), None)
        if gate is not None:
            await gate.wait()
        else:
            await asyncio.sleep(0)
        if self.fail_restaurants:
            raise FetchError("restaurants unavailable", resource="/restaurants", status_code=500)
        return [
            r
            for r in self.restaurants
            if (cuisine == ALL or r.cuisine_type == cuisine) and (neighborhood == ALL or r.neighborhood == neighborhood)
        ]

    def image_webp(self, restaurant: Restaurant) -> str:
        return f"/img/{restaurant.image_base_name}.webp"

    def image_jpg(self, restaurant: Restaurant) -> str:
        return f"/img/{restaurant.image_base_name}.jpg"

    def url_for_restaurant(self, restaurant: Restaurant) -> str:
        return f"./restaurant.html?id={restaurant.id}"

    def map_marker_for_restaurant(self, restaurant: Restaurant, map_widget: Any) -> FakeMarker:
        options = MarkerOptions(title=restaurant.name, alt=restaurant.name, url=self.url_for_restaurant(restaurant))
        marker: FakeMarker = map_widget.place_marker(restaurant.lat, restaurant.lng, options)
        return marker


@pytest.fixture
def restaurants() -> list[Restaurant]:
    return [
        make_restaurant(1, "Mission Chinese Food", "Manhattan", "Asian"),
        make_restaurant(2, "Emily", "Brooklyn", "Pizza"),
        make_restaurant(3, "Kang Ho Dong Baekjeong", "Manhattan", "Asian"),
        make_restaurant(4, "Katz's Delicatessen", "Manhattan", "American"),
    ]


@pytest.fixture
def source(restaurants: list[Restaurant]) -> FakeSource:
    return FakeSource(
        restaurants,
        neighborhoods=["Manhattan", "Brooklyn"],
        cuisines=["Asian", "Pizza", "American"],
    )


@pytest.fixture
def fake_map() -> FakeMap:
    return FakeMap(MapOptions(center=(40.722216, -73.987501), zoom=12))


@pytest.fixture
def observer_factory() -> FakeObserverFactory:
    return FakeObserverFactory()


@pytest.fixture
def navigations() -> list[str]:
    return []
