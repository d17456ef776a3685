"""Restaurant payload model."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, model_validator

from restview.models._base import RestViewBaseModel


class Restaurant(RestViewBaseModel):
    """A restaurant as returned by the data-access layer.

    The view layer only reads these fields; it never mutates a restaurant.

    Parameters
    ----------
    id : int
        Server-side identifier, used for the detail URL.
    name : str
        Display name.
    neighborhood : str
        Neighborhood facet value.
    cuisine_type : str
        Cuisine facet value.
    address : str
        Street address.
    image_base_name : str or None
        Photograph file name without extension. Some records omit it.
    lat, lng : float
        Marker coordinates. A nested ``latlng`` object is also accepted.
    """

    id: int
    name: str
    neighborhood: str = ""
    cuisine_type: str = ""
    address: str = ""
    image_base_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("image_base_name", "imageBaseName", "photograph"),
    )
    lat: float
    lng: float

    @model_validator(mode="before")
    @classmethod
    def _unwrap_latlng(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        latlng = values.get("latlng")
        if not isinstance(latlng, dict):
            return values
        unwrapped = dict(values)
        unwrapped.setdefault("lat", latlng.get("lat"))
        unwrapped.setdefault("lng", latlng.get("lng"))
        return unwrapped
