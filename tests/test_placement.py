"""
Placement Tests
===============

Drops, drag-moves and resizes against a document store.
"""

import asyncio

import pytest

from easyfront.canvas.placement import (
    Cursor,
    DropPayload,
    move_element,
    parse_drop_size,
    place_builtin,
    place_drop,
    resize_element,
)
from easyfront.exceptions import WidgetNotFoundError
from easyfront.models.element_models import Widget

CARD = Widget(
    id="w1",
    name="Card",
    category="custom",
    html="<div class='card'>Hello</div>",
    css=".card { padding: 8px; }",
    defaultSize={"width": 240, "height": 160},
    createdAt="2024-01-01T00:00:00",
)


async def _lookup(widget_id):
    return CARD if widget_id == CARD.id else None


def test_drop_scenario_snaps_and_clamps(store):
    payload = DropPayload(is_built_in=True, component_type="div",
                          default_size='{"width": 200, "height": 100}')
    element_id = place_builtin(store, payload, Cursor(x=105, y=187))

    element = store.get(element_id)
    assert element.position.model_dump() == {"x": 0, "y": 140}
    assert element.position.x % 20 == 0 and element.position.y % 20 == 0
    assert element.size.model_dump() == {"width": 200, "height": 100}


def test_drop_uses_type_defaults(store):
    payload = DropPayload(component_type="input", default_size={"width": 200, "height": 40})
    element = store.get(place_builtin(store, payload, Cursor(x=300, y=300)))

    assert element.type == "input"
    assert element.content == ""
    assert element.attributes == {"type": "text", "placeholder": "Entrez du texte..."}
    assert element.kind == "builtin"


def test_button_drop_gets_label(store):
    payload = DropPayload(component_type="button", default_size={"width": 120, "height": 40})
    element = store.get(place_builtin(store, payload, Cursor(x=200, y=200)))
    assert element.content == "Bouton"


def test_malformed_size_falls_back_to_default(store):
    payload = DropPayload(component_type="div", default_size="{not json")
    element = store.get(place_builtin(store, payload, Cursor(x=400, y=300)))

    assert element.size.model_dump() == {"width": 300, "height": 200}
    assert element.position.model_dump() == {"x": 260, "y": 200}


def test_unknown_component_type_becomes_div(store):
    payload = DropPayload(component_type="marquee", default_size={"width": 100, "height": 40})
    element = store.get(place_builtin(store, payload, Cursor()))
    assert element.type == "div"
    assert element.position.model_dump() == {"x": 0, "y": 0}


def test_size_is_snapped_to_current_grid(store):
    store.set_grid_size(50)
    payload = DropPayload(component_type="p", default_size={"width": 120, "height": 40})
    element = store.get(place_builtin(store, payload, Cursor(x=500, y=500)))
    assert element.size.model_dump() == {"width": 100, "height": 50}
    assert element.position.x % 50 == 0 and element.position.y % 50 == 0


@pytest.mark.parametrize("raw,expected", [
    (None, None),
    ("", None),
    ('{"width": 10, "height": 20}', {"width": 10, "height": 20}),
    ('{"width": 10}', None),
    ('[1, 2]', None),
    ({"width": "30", "height": 40}, {"width": 30, "height": 40}),
    ({"width": 0, "height": 40}, None),
])
def test_parse_drop_size(raw, expected):
    assert parse_drop_size(raw) == expected


def test_widget_drop_copies_html_and_css(store):
    payload = DropPayload(is_built_in=False, widget_id="w1")
    element_id = asyncio.run(place_drop(store, payload, Cursor(x=300, y=300), _lookup))

    element = store.get(element_id)
    assert element.type == "div"
    assert element.content == CARD.html
    assert element.kind == "widget"
    assert element.widget.css == CARD.css
    assert element.widget.widget_name == "Card"
    assert element.size.model_dump() == {"width": 240, "height": 160}


def test_widget_drop_prefers_payload_size(store):
    payload = DropPayload(is_built_in=False, widget_id="w1", default_size='{"width": 100, "height": 60}')
    element_id = asyncio.run(place_drop(store, payload, Cursor(x=300, y=300), _lookup))
    assert store.get(element_id).size.model_dump() == {"width": 100, "height": 60}


def test_unknown_widget_leaves_store_untouched(store):
    payload = DropPayload(is_built_in=False, widget_id="missing")
    with pytest.raises(WidgetNotFoundError):
        asyncio.run(place_drop(store, payload, Cursor(x=10, y=10), _lookup))
    assert len(store) == 0


def test_widget_drop_without_id_is_rejected(store):
    with pytest.raises(WidgetNotFoundError):
        asyncio.run(place_drop(store, DropPayload(is_built_in=False), Cursor(), _lookup))


def test_move_snaps_and_clamps(store):
    element_id = place_builtin(store, DropPayload(component_type="div"), Cursor(x=400, y=400))
    assert move_element(store, element_id, -13, 47)
    assert store.get(element_id).position.model_dump() == {"x": 0, "y": 40}


def test_resize_snaps_to_at_least_one_unit(store):
    element_id = place_builtin(store, DropPayload(component_type="div"), Cursor(x=400, y=400))
    assert resize_element(store, element_id, 5, 133)
    assert store.get(element_id).size.model_dump() == {"width": 20, "height": 140}


def test_move_unknown_element_is_noop(store):
    assert move_element(store, "missing", 10, 10) is False
