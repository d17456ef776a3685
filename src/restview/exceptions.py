"""Custom exception hierarchy for restview."""

from __future__ import annotations


class RestViewError(Exception):
    """Base exception for all restview errors."""


class RestViewConfigError(RestViewError):
    """Invalid or missing configuration."""


class FetchError(RestViewError):
    """A facet or restaurant query failed (network, non-200, invalid payload)."""

    def __init__(
        self,
        message: str,
        *,
        resource: str = "",
        status_code: int | None = None,
    ) -> None:
        self.resource = resource
        self.status_code = status_code
        super().__init__(message)


class RegistrationError(RestViewError):
    """The background caching agent could not be registered."""

    def __init__(self, message: str, *, script_path: str = "") -> None:
        self.script_path = script_path
        super().__init__(message)


class SnapshotMismatchError(RestViewError):
    """Markers handed to the view state do not line up with its restaurants.

    Every marker at index ``i`` must belong to the restaurant at index ``i``;
    a sequence of a different length can never satisfy that.
    """
