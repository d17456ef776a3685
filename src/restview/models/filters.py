"""Facet and filter selection models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

#: Selection value meaning "no filter on this facet".
ALL = "all"


class FacetSet(BaseModel):
    """Known neighborhood and cuisine values, in collaborator order."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    neighborhoods: tuple[str, ...] = ()
    cuisines: tuple[str, ...] = ()


class FilterSelection(BaseModel):
    """Current values of the two filter controls, taken verbatim.

    Only the data-access collaborator interprets the values.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    cuisine: str = ALL
    neighborhood: str = ALL

    @property
    def is_unfiltered(self) -> bool:
        return self.cuisine == ALL and self.neighborhood == ALL
