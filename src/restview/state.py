"""Authoritative view state.

This is the only component allowed to replace the displayed restaurants and
their markers. The list DOM and the markers are always derived from the same
snapshot; both collections are replaced as a whole, never patched element by
element.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from restview.dom import Element
from restview.exceptions import SnapshotMismatchError
from restview.map import MarkerHandle
from restview.models.restaurant import Restaurant

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ViewSnapshot:
    """Restaurants on display and their markers, index-aligned."""

    restaurants: tuple[Restaurant, ...] = ()
    markers: tuple[MarkerHandle, ...] = ()


class ViewState:
    """Owner of the list container, restaurant collection and marker collection."""

    def __init__(self, list_container: Element) -> None:
        self._list_container = list_container
        self._restaurants: tuple[Restaurant, ...] = ()
        self._markers: tuple[MarkerHandle, ...] = ()

    @property
    def list_container(self) -> Element:
        return self._list_container

    @property
    def restaurants(self) -> tuple[Restaurant, ...]:
        return self._restaurants

    @property
    def markers(self) -> tuple[MarkerHandle, ...]:
        return self._markers

    @property
    def snapshot(self) -> ViewSnapshot:
        return ViewSnapshot(restaurants=self._restaurants, markers=self._markers)

    def replace(self, restaurants: Sequence[Restaurant]) -> None:
        """Tear down the current snapshot and store *restaurants* verbatim.

        Runs without awaiting, so no other task can observe the torn-down
        intermediate state.
        """
        for marker in self._markers:
            marker.remove()
        self._list_container.clear()
        released = len(self._markers)
        self._markers = ()
        self._restaurants = tuple(restaurants)
        _logger.debug("View state replaced: released %d markers, holding %d restaurants", released, len(self._restaurants))

    def attach_markers(self, markers: Sequence[MarkerHandle]) -> None:
        """Store the markers built for the current restaurants, in the same order."""
        if self._markers:
            raise SnapshotMismatchError("markers already attached for this snapshot; call replace() first")
        if len(markers) != len(self._restaurants):
            raise SnapshotMismatchError(
                f"{len(markers)} markers for {len(self._restaurants)} restaurants",
            )
        self._markers = tuple(markers)
