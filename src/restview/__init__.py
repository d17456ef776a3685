"""restview - async view layer for a restaurant directory page."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("restview")
except PackageNotFoundError:
    __version__ = "0+local"
from restview.app import RestaurantDirectoryPage
from restview.config import ViewConfig
from restview.coordinator import QueryCoordinator
from restview.dom import Document, Element, SelectElement, build_index_document
from restview.exceptions import (
    FetchError,
    RegistrationError,
    RestViewConfigError,
    RestViewError,
    SnapshotMismatchError,
)
from restview.filters import FilterRegistry
from restview.interfaces import IntersectionEntry
from restview.lazy import LazyLoadScheduler, LazyPlaceholder
from restview.map import MapOptions, MarkerOptions, TileLayerOptions
from restview.models import ALL, FacetSet, FilterSelection, Restaurant
from restview.render import Renderer, RestaurantCard, build_card
from restview.source import HttpRestaurantSource
from restview.state import ViewSnapshot, ViewState
from restview.worker import register_caching_agent

__all__ = [
    "__version__",
    "ALL",
    "Document",
    "Element",
    "FacetSet",
    "FetchError",
    "FilterRegistry",
    "FilterSelection",
    "HttpRestaurantSource",
    "IntersectionEntry",
    "LazyLoadScheduler",
    "LazyPlaceholder",
    "MapOptions",
    "MarkerOptions",
    "QueryCoordinator",
    "RegistrationError",
    "Renderer",
    "RestViewConfigError",
    "RestViewError",
    "Restaurant",
    "RestaurantCard",
    "RestaurantDirectoryPage",
    "SelectElement",
    "SnapshotMismatchError",
    "TileLayerOptions",
    "ViewConfig",
    "ViewSnapshot",
    "ViewState",
    "build_card",
    "build_index_document",
    "register_caching_agent",
]
