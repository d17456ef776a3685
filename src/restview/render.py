"""Restaurant rendering.

Rendering is split in two steps:

* :func:`build_card` is a pure ``Restaurant -> RestaurantCard`` transform,
  testable without any document or map.
* :class:`Renderer` materializes cards into the list container, places one
  marker per restaurant and hands the markers to the view state.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

from restview.dom import Document, Element
from restview.interfaces import Navigate, RestaurantSource
from restview.lazy import LAZY_CLASS, LazyLoadScheduler
from restview.map import MapWidget, MarkerHandle
from restview.models.restaurant import Restaurant
from restview.state import ViewState

_logger = logging.getLogger(__name__)


class PictureSource(BaseModel):
    model_config = ConfigDict(frozen=True)

    mime_type: str
    srcset: str


class RestaurantCard(BaseModel):
    """Render model of one list item."""

    model_config = ConfigDict(frozen=True)

    restaurant_id: int
    name: str
    neighborhood: str
    address: str
    sources: tuple[PictureSource, ...]
    image_src: str
    image_alt: str
    details_url: str
    details_label: str
    details_text: str = "View Details"


def build_card(restaurant: Restaurant, source: RestaurantSource) -> RestaurantCard:
    jpg = source.image_jpg(restaurant)
    return RestaurantCard(
        restaurant_id=restaurant.id,
        name=restaurant.name,
        neighborhood=restaurant.neighborhood,
        address=restaurant.address,
        sources=(
            PictureSource(mime_type="image/webp", srcset=source.image_webp(restaurant)),
            PictureSource(mime_type="image/jpeg", srcset=jpg),
        ),
        image_src=jpg,
        image_alt=f"Name of the restaurant: {restaurant.name}",
        details_url=source.url_for_restaurant(restaurant),
        details_label=f"view details of {restaurant.name} restaurant",
    )


def materialize_card(card: RestaurantCard, document: Document) -> Element:
    """Build the ``li`` for *card*; image URLs stay deferred in ``data-*``."""
    item = document.create_element("li")

    picture = document.create_element("picture", class_name=LAZY_CLASS)
    for picture_source in card.sources:
        node = document.create_element("source")
        node.set_attribute("data-srcset", picture_source.srcset)
        node.set_attribute("type", picture_source.mime_type)
        picture.append(node)
    image = document.create_element("img", class_name="restaurant-img")
    image.set_attribute("data-src", card.image_src)
    image.set_attribute("alt", card.image_alt)
    picture.append(image)
    item.append(picture)

    name = document.create_element("h3")
    name.text = card.name
    neighborhood = document.create_element("p")
    neighborhood.text = card.neighborhood
    address = document.create_element("p")
    address.text = card.address
    item.append(name, neighborhood, address)

    more = document.create_element("a")
    more.text = card.details_text
    more.set_attribute("href", card.details_url)
    more.set_attribute("role", "button")
    more.set_attribute("aria-label", card.details_label)
    item.append(more)

    return item


class Renderer:
    """Turns the view state's restaurants into list items and map markers."""

    def __init__(
        self,
        document: Document,
        state: ViewState,
        source: RestaurantSource,
        map_widget: MapWidget,
        scheduler: LazyLoadScheduler,
        navigate: Navigate,
    ) -> None:
        self._document = document
        self._state = state
        self._source = source
        self._map = map_widget
        self._scheduler = scheduler
        self._navigate = navigate

    def render(self) -> None:
        """Render the view state's restaurants in sequence order.

        If placing a card or marker fails, the markers placed so far are
        removed and the view state is reset to an empty snapshot before the
        error propagates.
        """
        container = self._state.list_container

        markers: list[MarkerHandle] = []
        try:
            for restaurant in self._state.restaurants:
                container.append(materialize_card(build_card(restaurant, self._source), self._document))
                marker = self._source.map_marker_for_restaurant(restaurant, self._map)
                markers.append(marker)
                self._bind_click(marker)
        except Exception:
            for marker in markers:
                marker.remove()
            self._state.replace(())
            raise
        self._state.attach_markers(markers)

        _logger.debug("Rendered %d restaurants", len(markers))
        self._scheduler.observe_all()

    def _bind_click(self, marker: MarkerHandle) -> None:
        def on_click(*_: object) -> None:
            self._navigate(marker.options.url)

        marker.on("click", on_click)
