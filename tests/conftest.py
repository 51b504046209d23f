"""Shared fixtures for the EasyFront test suite."""

from typing import Dict, Optional

import pytest

from easyfront.canvas.document_store import DocumentStore
from easyfront.models.element_models import Element


def make_element(
    element_id: str,
    element_type: str = "div",
    x: int = 0,
    y: int = 0,
    width: int = 100,
    height: int = 40,
    content: str = "",
    styles: Optional[Dict[str, str]] = None,
    attributes: Optional[Dict[str, str]] = None,
) -> Element:
    return Element(
        id=element_id,
        type=element_type,
        position={"x": x, "y": y},
        size={"width": width, "height": height},
        content=content,
        styles=styles or {},
        attributes=attributes or {},
    )


@pytest.fixture
def store() -> DocumentStore:
    return DocumentStore(grid_size=20)


@pytest.fixture
def button_store() -> DocumentStore:
    """One button 'a' at (20, 20), 120x40, on a 20px grid."""
    store = DocumentStore(grid_size=20)
    store.load([
        make_element("a", "button", x=20, y=20, width=120, height=40, content="Bouton")
    ])
    return store
