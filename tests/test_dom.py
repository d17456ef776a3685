from __future__ import annotations

import pytest

from restview.config import CUISINES_SELECT_ID, NEIGHBORHOODS_SELECT_ID, RESTAURANTS_LIST_ID
from restview.dom import Document, Element, SelectElement, build_index_document, create_option


def test_append_reparents_and_clear_detaches() -> None:
    parent = Element("ul")
    other = Element("ul")
    child = Element("li")
    parent.append(child)
    other.append(child)
    assert parent.children == []
    assert child.parent is other

    other.clear()
    assert other.children == []
    assert child.parent is None


def test_data_attributes_live_in_dataset() -> None:
    node = Element("img")
    node.set_attribute("data-src", "/img/1.jpg")
    node.set_attribute("alt", "x")
    assert node.dataset == {"src": "/img/1.jpg"}
    assert node.get_attribute("data-src") == "/img/1.jpg"
    assert node.get_attribute("src") is None


def test_query_selector_all_matches_tag_and_class_in_document_order() -> None:
    root = Element("ul")
    first = Element("picture", class_name="lazy")
    second = Element("picture")
    third = Element("picture", class_name="lazy other")
    item = Element("li")
    item.append(first, second)
    root.append(item, third)
    assert root.query_selector_all("picture", "lazy") == [first, third]


def test_to_html_escapes_text_and_attributes() -> None:
    node = Element("a")
    node.text = "Katz's <Deli>"
    node.set_attribute("aria-label", 'say "hi"')
    assert node.to_html() == '<a aria-label="say &quot;hi&quot;">Katz\'s &lt;Deli&gt;</a>'
    assert Element("img").to_html() == "<img>"


def test_select_value_and_choose_fire_change() -> None:
    document = Document()
    select = SelectElement()
    assert select.value is None
    select.append(create_option(document, "all", "All Cuisines"), create_option(document, "Thai"))
    assert select.value == "all"

    seen: list[str | None] = []
    select.add_event_listener("change", lambda event: seen.append(event.target.id))
    select.id = "cuisines-select"
    select.choose("Thai")
    assert select.value == "Thai"
    assert seen == ["cuisines-select"]

    with pytest.raises(ValueError):
        select.choose("Basque")


def test_index_document_skeleton() -> None:
    document = build_index_document()
    neighborhoods = document.require_select(NEIGHBORHOODS_SELECT_ID)
    cuisines = document.require_select(CUISINES_SELECT_ID)
    assert [o.text for o in neighborhoods.options] == ["All Neighborhoods"]
    assert cuisines.value == "all"
    assert document.require_element(RESTAURANTS_LIST_ID).children == []
    with pytest.raises(TypeError):
        document.require_select(RESTAURANTS_LIST_ID)
    with pytest.raises(LookupError):
        document.require_element("missing")
