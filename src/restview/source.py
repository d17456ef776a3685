"""HTTP data-access collaborator backed by the restaurant REST server."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from typing import Any

import aiohttp
from pydantic import ValidationError

from restview.config import ViewConfig
from restview.exceptions import FetchError
from restview.map import MapWidget, MarkerHandle, MarkerOptions
from restview.models.filters import ALL
from restview.models.restaurant import Restaurant

_logger = logging.getLogger(__name__)

_RESTAURANTS_ENDPOINT = "/restaurants"


def _distinct(values: Iterable[str]) -> list[str]:
    """Unique values in first-seen order."""
    return list(dict.fromkeys(values))


def _matches(restaurant: Restaurant, cuisine: str, neighborhood: str) -> bool:
    if cuisine != ALL and restaurant.cuisine_type != cuisine:
        return False
    return neighborhood == ALL or restaurant.neighborhood == neighborhood


class HttpRestaurantSource:
    """Fetches restaurants from ``{data_base_url}/restaurants``.

    Usage::

        async with HttpRestaurantSource(config) as source:
            restaurants = await source.fetch_restaurants("Italian", "all")
    """

    def __init__(
        self,
        config: ViewConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session

    async def __aenter__(self) -> HttpRestaurantSource:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._config.request_timeout),
            )
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    def _require_session(self) -> aiohttp.ClientSession:
        if self._http_session is None:
            raise FetchError(
                "Source not initialized. Use 'async with HttpRestaurantSource(...) as source:'",
                resource=_RESTAURANTS_ENDPOINT,
            )
        return self._http_session

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def _get_json(self, endpoint: str) -> Any:
        session = self._require_session()
        url = f"{self._config.data_base_url.rstrip('/')}{endpoint}"
        _logger.debug("GET %s", url)
        try:
            async with session.get(url) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise FetchError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        resource=endpoint,
                        status_code=resp.status,
                    )
        except FetchError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise FetchError(f"Request to {endpoint} failed: {exc}", resource=endpoint) from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise FetchError(f"Invalid JSON from {endpoint}: {text[:200]}", resource=endpoint) from exc

    async def fetch_all(self) -> list[Restaurant]:
        payload = await self._get_json(_RESTAURANTS_ENDPOINT)
        if not isinstance(payload, list):
            raise FetchError(
                f"Expected a list from {_RESTAURANTS_ENDPOINT}, got {type(payload).__name__}",
                resource=_RESTAURANTS_ENDPOINT,
            )
        try:
            return [Restaurant.model_validate(item) for item in payload]
        except ValidationError as exc:
            raise FetchError(f"Malformed restaurant in {_RESTAURANTS_ENDPOINT}: {exc}", resource=_RESTAURANTS_ENDPOINT) from exc

    async def _distinct_field(self, key: Callable[[Restaurant], str]) -> list[str]:
        restaurants = await self.fetch_all()
        return _distinct(key(restaurant) for restaurant in restaurants)

    async def fetch_neighborhoods(self) -> list[str]:
        return await self._distinct_field(lambda restaurant: restaurant.neighborhood)

    async def fetch_cuisines(self) -> list[str]:
        return await self._distinct_field(lambda restaurant: restaurant.cuisine_type)

    async def fetch_restaurants(self, cuisine: str, neighborhood: str) -> list[Restaurant]:
        restaurants = await self.fetch_all()
        return [restaurant for restaurant in restaurants if _matches(restaurant, cuisine, neighborhood)]

    # ------------------------------------------------------------------
    # Pure helpers
    # ------------------------------------------------------------------

    def _image_base(self, restaurant: Restaurant) -> str:
        name = restaurant.image_base_name or str(restaurant.id)
        return f"{self._config.image_base_url.rstrip('/')}/{name}"

    def image_webp(self, restaurant: Restaurant) -> str:
        return f"{self._image_base(restaurant)}.webp"

    def image_jpg(self, restaurant: Restaurant) -> str:
        return f"{self._image_base(restaurant)}.jpg"

    def url_for_restaurant(self, restaurant: Restaurant) -> str:
        return f"{self._config.detail_page}?id={restaurant.id}"

    def map_marker_for_restaurant(self, restaurant: Restaurant, map_widget: MapWidget) -> MarkerHandle:
        options = MarkerOptions(
            title=restaurant.name,
            alt=restaurant.name,
            url=self.url_for_restaurant(restaurant),
        )
        return map_widget.place_marker(restaurant.lat, restaurant.lng, options)
