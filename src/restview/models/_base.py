"""Base model for payloads returned by the data-access layer.

Every payload model inherits from :class:`RestViewBaseModel` which
provides:

* ``alias_generator=to_camel`` so camelCase keys map to snake_case
  fields, while ``populate_by_name`` keeps snake_case keys working.
* A ``model_validator(mode="before")`` that drops ``None`` and blank
  strings so the field default is used.
* A ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class RestViewBaseModel(BaseModel):
    """Base for data-access payload models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original payload dict."""

    @model_validator(mode="before")
    @classmethod
    def _clean_values(cls, values: Any) -> Any:
        """Drop empty values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        original = dict(values)

        cleaned: dict[str, Any] = {}
        for key, value in original.items():
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            cleaned[key] = value

        # Keep an explicit raw= from kwargs construction.
        if "raw" not in values:
            cleaned["raw"] = original
        return cleaned
