"""
Canvas Placement
================

Drop, drag-move and resize-stop handling on top of the document store.

The browser reports raw cursor coordinates and a drag payload; everything
that lands in the store here is snapped to the store's grid.
"""

import json
import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

from pydantic import BaseModel, Field

from ..exceptions import WidgetNotFoundError
from ..models.element_models import ElementCreate, ElementType, Position, Size, Widget
from .document_store import DocumentStore
from .grid import snap_position, snap_size

logger = logging.getLogger(__name__)

# Used when a drag payload carries no usable size
FALLBACK_SIZE = {"width": 300, "height": 200}

DEFAULT_CONTENT: Dict[str, str] = {
    "button": "Bouton",
    "input": "",
    "textarea": "",
    "label": "Label",
    "h1": "Titre H1",
    "h2": "Titre H2",
    "h3": "Titre H3",
    "p": "Paragraphe de texte",
    "img": "Image",
    "div": "Container",
    "form": "Formulaire",
}

DEFAULT_ATTRIBUTES: Dict[str, Dict[str, str]] = {
    "input": {"type": "text", "placeholder": "Entrez du texte..."},
    "textarea": {"placeholder": "Entrez du texte..."},
    "img": {"src": "https://via.placeholder.com/200", "alt": "Image"},
    "button": {"type": "button"},
    "form": {"method": "post"},
}

WidgetLookup = Callable[[str], Awaitable[Optional[Widget]]]


class DropPayload(BaseModel):
    """What the drag-and-drop layer hands over on drop."""
    is_built_in: bool = True
    component_type: Optional[str] = None
    # JSON text as set on the drag event, or an already decoded mapping
    default_size: Optional[Union[str, Dict[str, Any]]] = None
    widget_id: Optional[str] = None


class Cursor(BaseModel):
    """Drop point relative to the canvas origin."""
    x: float = 0
    y: float = 0


def parse_drop_size(raw: Optional[Union[str, Mapping[str, Any]]]) -> Optional[Dict[str, int]]:
    """Decode a payload size; None when it is missing or unusable."""
    if raw is None or raw == "":
        return None
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            logger.warning(f"[PLACEMENT] Unparseable defaultSize payload: {raw!r}")
            return None
    if not isinstance(raw, Mapping):
        return None
    try:
        width = int(raw["width"])
        height = int(raw["height"])
    except (KeyError, TypeError, ValueError):
        logger.warning(f"[PLACEMENT] defaultSize missing width/height: {raw!r}")
        return None
    if width <= 0 or height <= 0:
        return None
    return {"width": width, "height": height}


def drop_position(cursor: Cursor, size: Mapping[str, int], grid_size: int) -> Dict[str, int]:
    """Center the element on the cursor, snap to the grid, keep it on canvas."""
    snapped = snap_position(
        {"x": cursor.x - size["width"] / 2, "y": cursor.y - size["height"] / 2},
        grid_size,
    )
    return {"x": max(0, snapped["x"]), "y": max(0, snapped["y"])}


def place_builtin(store: DocumentStore, payload: DropPayload, cursor: Cursor) -> str:
    """Add a built-in element at the drop point and return its id."""
    try:
        element_type = ElementType(payload.component_type)
    except ValueError:
        logger.warning(f"[PLACEMENT] Unknown component type {payload.component_type!r}, using div")
        element_type = ElementType.DIV

    size = parse_drop_size(payload.default_size) or dict(FALLBACK_SIZE)
    size = snap_size(size, store.grid_size)
    position = drop_position(cursor, size, store.grid_size)

    return store.add(ElementCreate(
        type=element_type,
        position=Position(**position),
        size=Size(**size),
        content=DEFAULT_CONTENT.get(element_type.value, "Element"),
        styles={},
        attributes=dict(DEFAULT_ATTRIBUTES.get(element_type.value, {})),
    ))


async def place_widget(
    store: DocumentStore,
    payload: DropPayload,
    cursor: Cursor,
    lookup: WidgetLookup
) -> str:
    """
    Resolve the dropped widget and add a copy of it to the store.

    The lookup is awaited before the store is touched, so a failed
    lookup leaves the store unchanged.

    Raises:
        WidgetNotFoundError: the widget id is missing or unknown
    """
    if not payload.widget_id:
        raise WidgetNotFoundError("Drop payload carries no widget id")

    widget = await lookup(payload.widget_id)
    if widget is None:
        raise WidgetNotFoundError(
            f"Widget {payload.widget_id} not found",
            context={"widget_id": payload.widget_id}
        )

    size = parse_drop_size(payload.default_size) or widget.default_size.model_dump()
    size = snap_size(size, store.grid_size)
    position = drop_position(cursor, size, store.grid_size)

    element_id = store.add(ElementCreate.from_widget(widget, Position(**position), Size(**size)))
    logger.info(f"[PLACEMENT] Placed widget '{widget.name}' as element {element_id}")
    return element_id


async def place_drop(
    store: DocumentStore,
    payload: DropPayload,
    cursor: Cursor,
    lookup: WidgetLookup
) -> str:
    """Dispatch a drop to the built-in or widget path."""
    if payload.is_built_in:
        return place_builtin(store, payload, cursor)
    return await place_widget(store, payload, cursor, lookup)


def move_element(store: DocumentStore, element_id: str, x: float, y: float) -> bool:
    """Drag stop: snap the new position and clamp it to the canvas."""
    snapped = snap_position({"x": x, "y": y}, store.grid_size)
    return store.move(element_id, {"x": max(0, snapped["x"]), "y": max(0, snapped["y"])})


def resize_element(store: DocumentStore, element_id: str, width: float, height: float) -> bool:
    """Resize stop: snap both dimensions, at least one grid unit each."""
    return store.resize(element_id, snap_size({"width": width, "height": height}, store.grid_size))
