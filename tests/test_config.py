from __future__ import annotations

import pytest

from restview.config import ViewConfig
from restview.exceptions import RestViewConfigError


def test_defaults() -> None:
    config = ViewConfig()
    assert config.map_center == (40.722216, -73.987501)
    assert config.map_zoom == 12
    assert config.scroll_wheel_zoom is False
    assert config.caching_agent_script == "../sw.js"
    assert config.discard_stale_results is False


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESTVIEW_DATA_BASE_URL", "http://data.test")
    monkeypatch.setenv("RESTVIEW_MAP_CENTER", "51.5, -0.12")
    monkeypatch.setenv("RESTVIEW_MAP_ZOOM", "9")
    monkeypatch.setenv("RESTVIEW_SCROLL_WHEEL_ZOOM", "yes")
    monkeypatch.setenv("RESTVIEW_DISCARD_STALE_RESULTS", "on")
    monkeypatch.setenv("RESTVIEW_TILE_ACCESS_TOKEN", "pk.secret")

    config = ViewConfig.from_env(map_zoom=14)

    assert config.data_base_url == "http://data.test"
    assert config.map_center == (51.5, -0.12)
    assert config.map_zoom == 14
    assert config.scroll_wheel_zoom is True
    assert config.discard_stale_results is True
    assert config.tile_access_token == "pk.secret"


def test_from_env_rejects_bad_center(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESTVIEW_MAP_CENTER", "north")
    with pytest.raises(RestViewConfigError):
        ViewConfig.from_env()


def test_invalid_values_rejected() -> None:
    with pytest.raises(RestViewConfigError):
        ViewConfig(request_timeout=0)
    with pytest.raises(RestViewConfigError):
        ViewConfig(map_zoom=30)


@pytest.mark.parametrize(
    ("name", "value"),
    [("RESTVIEW_MAP_ZOOM", "twelve"), ("RESTVIEW_REQUEST_TIMEOUT", "soon")],
)
def test_from_env_rejects_non_numeric_values(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(RestViewConfigError, match=name):
        ViewConfig.from_env()
