"""Page configuration for restview."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from restview.exceptions import RestViewConfigError

#: Element ids of the page skeleton.
NEIGHBORHOODS_SELECT_ID = "neighborhoods-select"
CUISINES_SELECT_ID = "cuisines-select"
RESTAURANTS_LIST_ID = "restaurants-list"
MAP_CONTAINER_ID = "map"

DEFAULT_TILE_ATTRIBUTION = (
    'Map data &copy; <a href="https://www.openstreetmap.org/">OpenStreetMap</a> contributors, '
    '<a href="https://creativecommons.org/licenses/by-sa/2.0/">CC-BY-SA</a>, '
    'Imagery © <a href="https://www.mapbox.com/">Mapbox</a>'
)


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _parse_center(value: str) -> tuple[float, float]:
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 2:
        raise RestViewConfigError(f"map center must be 'lat,lng', got {value!r}")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError as exc:
        raise RestViewConfigError(f"map center must be numeric, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class ViewConfig:
    """Page configuration.

    Parameters
    ----------
    data_base_url : str
        Base URL of the restaurant REST server.
    image_base_url : str
        Prefix for restaurant photographs.
    detail_page : str
        Page the "view details" links and marker clicks navigate to.
    map_center : tuple of float
        Initial ``(lat, lng)`` of the map.
    map_zoom : int
        Initial zoom level.
    scroll_wheel_zoom : bool
        Whether the map zooms on mouse wheel.
    tile_url_template : str
        Tile layer URL template handed to the mapping widget.
    tile_access_token : str or None
        Access token substituted into the tile URL. Never logged.
    tile_id : str
        Tile style identifier.
    tile_max_zoom : int
        Maximum tile zoom.
    tile_attribution : str
        Attribution markup shown by the map.
    caching_agent_script : str
        Script path registered with the background caching agent.
    discard_stale_results : bool
        Drop query results that arrive after a newer result was applied.
        ``False`` reproduces last-completion-wins.
    request_timeout : float
        Total HTTP timeout in seconds for the data server.
    """

    data_base_url: str = "http://localhost:1337"
    image_base_url: str = "/img"
    detail_page: str = "./restaurant.html"
    map_center: tuple[float, float] = (40.722216, -73.987501)
    map_zoom: int = 12
    scroll_wheel_zoom: bool = False
    tile_url_template: str = "https://api.tiles.mapbox.com/v4/{id}/{z}/{x}/{y}.jpg70?access_token={mapboxToken}"
    tile_access_token: str | None = None
    tile_id: str = "mapbox.streets"
    tile_max_zoom: int = 18
    tile_attribution: str = DEFAULT_TILE_ATTRIBUTION
    caching_agent_script: str = "../sw.js"
    discard_stale_results: bool = False
    request_timeout: float = 10.0

    def __post_init__(self) -> None:
        if self.request_timeout <= 0:
            raise RestViewConfigError("request_timeout must be positive")
        if not 0 <= self.map_zoom <= self.tile_max_zoom:
            raise RestViewConfigError(f"map_zoom must be between 0 and {self.tile_max_zoom}")

    @classmethod
    def from_env(cls, **overrides: Any) -> ViewConfig:
        """Create configuration from ``RESTVIEW_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "RESTVIEW_DATA_BASE_URL": "data_base_url",
            "RESTVIEW_IMAGE_BASE_URL": "image_base_url",
            "RESTVIEW_DETAIL_PAGE": "detail_page",
            "RESTVIEW_TILE_URL_TEMPLATE": "tile_url_template",
            "RESTVIEW_TILE_ACCESS_TOKEN": "tile_access_token",
            "RESTVIEW_TILE_ID": "tile_id",
            "RESTVIEW_CACHING_AGENT_SCRIPT": "caching_agent_script",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        center_env = env.get("RESTVIEW_MAP_CENTER")
        if center_env is not None and "map_center" not in overrides:
            config_kwargs["map_center"] = _parse_center(center_env)

        zoom_env = env.get("RESTVIEW_MAP_ZOOM")
        if zoom_env is not None and "map_zoom" not in overrides:
            try:
                config_kwargs["map_zoom"] = int(zoom_env)
            except ValueError as exc:
                raise RestViewConfigError(f"RESTVIEW_MAP_ZOOM must be an integer, got {zoom_env!r}") from exc

        timeout_env = env.get("RESTVIEW_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise RestViewConfigError(f"RESTVIEW_REQUEST_TIMEOUT must be a number, got {timeout_env!r}") from exc

        if "scroll_wheel_zoom" not in overrides:
            config_kwargs["scroll_wheel_zoom"] = _env_bool(env.get("RESTVIEW_SCROLL_WHEEL_ZOOM"), False)

        if "discard_stale_results" not in overrides:
            config_kwargs["discard_stale_results"] = _env_bool(env.get("RESTVIEW_DISCARD_STALE_RESULTS"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
