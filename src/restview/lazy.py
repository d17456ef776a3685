"""Viewport-driven lazy image loading.

Rendered pictures carry their real URLs in ``data-srcset`` / ``data-src``
and a ``lazy`` class. The scheduler watches them with a viewport observer
and promotes the deferred URLs to the live attributes the first time a
picture intersects the viewport.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from restview.dom import Element
from restview.interfaces import IntersectionEntry, ViewportObserver, ViewportObserverFactory

_logger = logging.getLogger(__name__)

LAZY_CLASS = "lazy"

# Live attribute -> dataset key holding its deferred value.
_DEFERRED_ATTRIBUTES: dict[str, str] = {
    "source": "srcset",
    "img": "src",
}


@dataclass(frozen=True, slots=True)
class PendingSource:
    """A deferred URL waiting to be copied into *attribute* of *target*."""

    target: Element
    attribute: str
    url: str


@dataclass(frozen=True, slots=True)
class LazyPlaceholder:
    """A rendered picture whose image payload has not been requested yet."""

    node: Element
    pending_sources: tuple[PendingSource, ...]

    @classmethod
    def from_element(cls, node: Element) -> LazyPlaceholder:
        sources: list[PendingSource] = []
        for child in node.children:
            attribute = _DEFERRED_ATTRIBUTES.get(child.tag)
            if attribute is None:
                continue
            url = child.dataset.get(attribute)
            if url is not None:
                sources.append(PendingSource(target=child, attribute=attribute, url=url))
        return cls(node=node, pending_sources=tuple(sources))

    def resolve(self) -> None:
        for source in self.pending_sources:
            source.target.set_attribute(source.attribute, source.url)
        self.node.class_list.remove(LAZY_CLASS)


class LazyLoadScheduler:
    """Registers lazy pictures with a viewport observer and resolves them on entry.

    Without an observer factory the runtime has no intersection capability;
    pictures then stay unloaded and the rest of the render is unaffected.
    """

    def __init__(self, container: Element, observer_factory: ViewportObserverFactory | None = None) -> None:
        self._container = container
        self._observer_factory = observer_factory
        self._observer: ViewportObserver | None = None
        self._pending: dict[int, LazyPlaceholder] = {}

    @property
    def supported(self) -> bool:
        return self._observer_factory is not None

    @property
    def pending(self) -> tuple[LazyPlaceholder, ...]:
        return tuple(self._pending.values())

    def observe_all(self) -> None:
        """(Re-)observe every lazy picture currently in the container."""
        if self._observer_factory is None:
            _logger.debug("Viewport observer unavailable; lazy images will not load")
            return

        if self._observer is None:
            self._observer = self._observer_factory(self._on_intersection)
        else:
            # Placeholders of the previous pass went away with the old list.
            self._observer.disconnect()
            self._pending.clear()

        for node in self._container.query_selector_all("picture", LAZY_CLASS):
            self._pending[id(node)] = LazyPlaceholder.from_element(node)
            self._observer.observe(node)
        _logger.debug("Observing %d lazy pictures", len(self._pending))

    def _on_intersection(self, entries: list[IntersectionEntry]) -> None:
        for entry in entries:
            if not entry.is_intersecting:
                continue
            placeholder = self._pending.pop(id(entry.target), None)
            if placeholder is None:
                continue
            placeholder.resolve()
            if self._observer is not None:
                self._observer.unobserve(placeholder.node)
