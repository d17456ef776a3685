"""In-memory document tree for the page surface.

The view layer writes to this tree exactly the way a browser page would be
mutated: option elements appended to the filter selects, one list item per
restaurant appended to the list container, deferred image attributes kept in
``data-*`` until promoted. ``to_html`` renders the current tree.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Callable, Iterator
from typing import Any

from restview.config import (
    CUISINES_SELECT_ID,
    MAP_CONTAINER_ID,
    NEIGHBORHOODS_SELECT_ID,
    RESTAURANTS_LIST_ID,
)
from restview.models.filters import ALL

_logger = logging.getLogger(__name__)

EventListener = Callable[["Event"], Any]

_VOID_TAGS = frozenset({"img", "source", "br", "hr", "input", "meta", "link"})


class Event:
    """A DOM event dispatched to listeners of a single element."""

    def __init__(self, event_type: str, target: Element) -> None:
        self.type = event_type
        self.target = target

    def __repr__(self) -> str:
        return f"Event({self.type!r}, target={self.target!r})"


class ClassList:
    """Ordered set of CSS class names."""

    def __init__(self, names: str = "") -> None:
        self._names: list[str] = []
        for name in names.split():
            self.add(name)

    def add(self, name: str) -> None:
        if name not in self._names:
            self._names.append(name)

    def remove(self, name: str) -> None:
        if name in self._names:
            self._names.remove(name)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __str__(self) -> str:
        return " ".join(self._names)


class Element:
    """A node of the document tree."""

    def __init__(self, tag: str, *, element_id: str | None = None, class_name: str = "") -> None:
        self.tag = tag.lower()
        self.id = element_id
        self.attributes: dict[str, str] = {}
        self.dataset: dict[str, str] = {}
        self.class_list = ClassList(class_name)
        self.text = ""
        self.children: list[Element] = []
        self.parent: Element | None = None
        self._listeners: dict[str, list[EventListener]] = {}

    def __repr__(self) -> str:
        label = f"#{self.id}" if self.id else ""
        classes = "".join(f".{name}" for name in self.class_list)
        return f"<{self.tag}{label}{classes}>"

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def set_attribute(self, name: str, value: str) -> None:
        if name == "class":
            self.class_list = ClassList(value)
        elif name == "id":
            self.id = value
        elif name.startswith("data-"):
            self.dataset[name[len("data-") :]] = value
        else:
            self.attributes[name] = value

    def get_attribute(self, name: str) -> str | None:
        if name == "class":
            return str(self.class_list) or None
        if name == "id":
            return self.id
        if name.startswith("data-"):
            return self.dataset.get(name[len("data-") :])
        return self.attributes.get(name)

    # ------------------------------------------------------------------
    # Tree mutation
    # ------------------------------------------------------------------

    def append(self, *children: Element) -> None:
        for child in children:
            if child.parent is not None:
                child.parent.remove_child(child)
            child.parent = self
            self.children.append(child)

    def remove_child(self, child: Element) -> None:
        self.children.remove(child)
        child.parent = None

    def clear(self) -> None:
        """Drop every child, like assigning an empty ``innerHTML``."""
        for child in self.children:
            child.parent = None
        self.children = []

    def contains(self, other: Element) -> bool:
        node: Element | None = other
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def iter_descendants(self) -> Iterator[Element]:
        """Yield descendants in document order."""
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def query_selector_all(self, tag: str | None = None, class_name: str | None = None) -> list[Element]:
        return [
            node
            for node in self.iter_descendants()
            if (tag is None or node.tag == tag) and (class_name is None or class_name in node.class_list)
        ]

    def find_by_id(self, element_id: str) -> Element | None:
        if self.id == element_id:
            return self
        for node in self.iter_descendants():
            if node.id == element_id:
                return node
        return None

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def add_event_listener(self, event_type: str, listener: EventListener) -> None:
        self._listeners.setdefault(event_type, []).append(listener)

    def dispatch_event(self, event_type: str) -> None:
        event = Event(event_type, self)
        for listener in list(self._listeners.get(event_type, ())):
            listener(event)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def _attribute_items(self) -> list[tuple[str, str]]:
        items: list[tuple[str, str]] = []
        if self.id:
            items.append(("id", self.id))
        if len(self.class_list):
            items.append(("class", str(self.class_list)))
        items.extend(self.attributes.items())
        items.extend((f"data-{key}", value) for key, value in self.dataset.items())
        return items

    def to_html(self) -> str:
        attrs = "".join(f' {name}="{html.escape(value, quote=True)}"' for name, value in self._attribute_items())
        if self.tag in _VOID_TAGS:
            return f"<{self.tag}{attrs}>"
        inner = html.escape(self.text, quote=False) + "".join(child.to_html() for child in self.children)
        return f"<{self.tag}{attrs}>{inner}</{self.tag}>"


class SelectElement(Element):
    """A ``<select>`` control with its ``<option>`` children."""

    def __init__(self, *, element_id: str | None = None, class_name: str = "") -> None:
        super().__init__("select", element_id=element_id, class_name=class_name)
        self.selected_index = -1

    @property
    def options(self) -> list[Element]:
        return [child for child in self.children if child.tag == "option"]

    def append(self, *children: Element) -> None:
        super().append(*children)
        if self.selected_index < 0 and self.options:
            self.selected_index = 0

    def clear(self) -> None:
        super().clear()
        self.selected_index = -1

    @property
    def value(self) -> str | None:
        options = self.options
        if not 0 <= self.selected_index < len(options):
            return None
        option = options[self.selected_index]
        value = option.get_attribute("value")
        return value if value is not None else option.text

    def choose(self, value: str) -> None:
        """Select the option carrying *value* and fire ``change``, as a user pick does."""
        for index, option in enumerate(self.options):
            if option.get_attribute("value") == value:
                self.selected_index = index
                self.dispatch_event("change")
                return
        raise ValueError(f"{self!r} has no option {value!r}")


class Document:
    """Root of the page tree."""

    def __init__(self) -> None:
        self.body = Element("body")

    def create_element(self, tag: str, *, class_name: str = "") -> Element:
        if tag.lower() == "select":
            return SelectElement(class_name=class_name)
        return Element(tag, class_name=class_name)

    def get_element_by_id(self, element_id: str) -> Element | None:
        return self.body.find_by_id(element_id)

    def require_element(self, element_id: str) -> Element:
        element = self.get_element_by_id(element_id)
        if element is None:
            raise LookupError(f"document has no element #{element_id}")
        return element

    def require_select(self, element_id: str) -> SelectElement:
        element = self.require_element(element_id)
        if not isinstance(element, SelectElement):
            raise TypeError(f"#{element_id} is a <{element.tag}>, not a <select>")
        return element

    def to_html(self) -> str:
        return "<!DOCTYPE html>" + self.body.to_html()


def create_option(document: Document, value: str, label: str | None = None) -> Element:
    option = document.create_element("option")
    option.text = label if label is not None else value
    option.set_attribute("value", value)
    return option


def build_index_document() -> Document:
    """Build the directory page skeleton the view layer fills in."""
    document = Document()

    filters = document.create_element("div", class_name="filter-options")
    neighborhoods = document.create_element("select")
    neighborhoods.id = NEIGHBORHOODS_SELECT_ID
    neighborhoods.set_attribute("name", "neighborhoods")
    neighborhoods.set_attribute("aria-label", "neighborhoods")
    neighborhoods.append(create_option(document, ALL, "All Neighborhoods"))

    cuisines = document.create_element("select")
    cuisines.id = CUISINES_SELECT_ID
    cuisines.set_attribute("name", "cuisines")
    cuisines.set_attribute("aria-label", "cuisines")
    cuisines.append(create_option(document, ALL, "All Cuisines"))
    filters.append(neighborhoods, cuisines)

    map_host = document.create_element("div")
    map_host.id = MAP_CONTAINER_ID
    map_host.set_attribute("role", "application")

    restaurants = document.create_element("ul")
    restaurants.id = RESTAURANTS_LIST_ID

    document.body.append(map_host, filters, restaurants)
    _logger.debug("Built index document skeleton")
    return document
