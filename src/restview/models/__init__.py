"""Models for restaurant payloads, facets and filter selections."""

from restview.models.filters import ALL, FacetSet, FilterSelection
from restview.models.restaurant import Restaurant

__all__ = [
    "ALL",
    "FacetSet",
    "FilterSelection",
    "Restaurant",
]
