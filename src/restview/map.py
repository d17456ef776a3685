"""Mapping widget interface and initial map setup.

The tile-rendering widget itself is an external collaborator. The view layer
only creates the map, attaches one tile layer, places markers and removes
them again.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from restview._redact import redact_for_log
from restview.config import ViewConfig

_logger = logging.getLogger(__name__)


class _WidgetOptions(BaseModel):
    # Dumped with by_alias=True to get the widget's camelCase option names.
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class MapOptions(_WidgetOptions):
    """Constructor options of the map widget."""

    center: tuple[float, float]
    zoom: int = Field(ge=0)
    scroll_wheel_zoom: bool = False


class TileLayerOptions(_WidgetOptions):
    """Tile layer attached to the map at startup."""

    url_template: str
    id: str
    max_zoom: int = 18
    attribution: str = ""
    mapbox_token: str | None = None


class MarkerOptions(_WidgetOptions):
    """Options carried by a marker; ``url`` is the navigation target on click."""

    title: str
    alt: str
    url: str


class MarkerHandle(Protocol):
    """A point rendered on the map."""

    @property
    def options(self) -> MarkerOptions: ...

    def on(self, event_type: str, handler: Callable[..., Any]) -> Any: ...

    def remove(self) -> Any:
        """Take the marker off the map. Removing twice is a no-op."""
        ...


class MapWidget(Protocol):
    def add_tile_layer(self, options: TileLayerOptions) -> Any: ...

    def place_marker(self, lat: float, lng: float, options: MarkerOptions) -> MarkerHandle: ...


MapFactory = Callable[[MapOptions], MapWidget]


def map_options_from_config(config: ViewConfig) -> MapOptions:
    return MapOptions(
        center=config.map_center,
        zoom=config.map_zoom,
        scroll_wheel_zoom=config.scroll_wheel_zoom,
    )


def tile_layer_from_config(config: ViewConfig) -> TileLayerOptions:
    return TileLayerOptions(
        url_template=config.tile_url_template,
        id=config.tile_id,
        max_zoom=config.tile_max_zoom,
        attribution=config.tile_attribution,
        mapbox_token=config.tile_access_token,
    )


def init_map(factory: MapFactory, config: ViewConfig) -> MapWidget:
    """Create the map widget and attach the configured tile layer."""
    options = map_options_from_config(config)
    widget = factory(options)
    tiles = tile_layer_from_config(config)
    widget.add_tile_layer(tiles)
    _logger.debug(
        "Map created with %s, tile layer %s",
        options.model_dump(by_alias=True),
        redact_for_log(tiles.model_dump(by_alias=True)),
    )
    return widget
