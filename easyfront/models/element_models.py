"""
Element Models for EasyFront
============================

Models for placed canvas elements and the widgets they can be built from.
"""

import logging
from enum import Enum
from typing import Dict, Optional, Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

# Class-safe identifier alphabet, shared with the CSS reverse parser
ELEMENT_ID_PATTERN = r"[A-Za-z0-9_-]+"

# Reserved attribute keys carrying widget provenance
WIDGET_ATTR_PREFIX = "data-widget-"
WIDGET_ID_ATTR = "data-widget-id"
WIDGET_NAME_ATTR = "data-widget-name"
WIDGET_CSS_ATTR = "data-widget-css"

# Generator-owned CSS properties; they never live in the styles map
GEOMETRY_STYLE_KEYS = frozenset({"left", "top", "width", "height", "position"})


class ElementType(str, Enum):
    """Tags an element can render as."""
    DIV = "div"
    BUTTON = "button"
    INPUT = "input"
    TEXTAREA = "textarea"
    LABEL = "label"
    H1 = "h1"
    H2 = "h2"
    H3 = "h3"
    P = "p"
    IMG = "img"
    FORM = "form"


class Position(BaseModel):
    """Pixel offset inside the canvas container."""
    x: int = Field(ge=0)
    y: int = Field(ge=0)


class Size(BaseModel):
    """Pixel dimensions of an element."""
    width: int = Field(ge=1)
    height: int = Field(ge=1)


class WidgetInstance(BaseModel):
    """Widget copy carried by a placed element."""
    widget_id: str
    widget_name: str = ""
    html: str = ""
    css: str = ""


class ElementBase(BaseModel):
    """Fields shared by new and stored elements."""
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    type: ElementType = ElementType.DIV
    position: Position
    size: Size
    content: str = ""
    styles: Dict[str, str] = Field(default_factory=dict)
    attributes: Dict[str, str] = Field(default_factory=dict)

    @field_validator("styles")
    @classmethod
    def _strip_geometry(cls, styles: Dict[str, str]) -> Dict[str, str]:
        leaked = [key for key in styles if key in GEOMETRY_STYLE_KEYS]
        if leaked:
            logger.debug(f"[ELEMENT] Dropping geometry keys from styles: {leaked}")
            return {k: v for k, v in styles.items() if k not in GEOMETRY_STYLE_KEYS}
        return styles

    @property
    def widget(self) -> Optional[WidgetInstance]:
        """Widget this element was instantiated from, or None for built-ins."""
        widget_id = self.attributes.get(WIDGET_ID_ATTR)
        if not widget_id:
            return None
        return WidgetInstance(
            widget_id=widget_id,
            widget_name=self.attributes.get(WIDGET_NAME_ATTR, ""),
            html=self.content,
            css=self.attributes.get(WIDGET_CSS_ATTR, ""),
        )

    @property
    def kind(self) -> Literal["widget", "builtin"]:
        return "widget" if self.widget else "builtin"

    def html_attributes(self) -> Dict[str, str]:
        """Attributes that may appear in generated markup, in insertion order."""
        return {
            key: value
            for key, value in self.attributes.items()
            if not key.startswith(WIDGET_ATTR_PREFIX)
        }


class ElementCreate(ElementBase):
    """An element that has not been added to a store yet."""

    @classmethod
    def from_widget(cls, widget: "Widget", position: Position, size: Size) -> "ElementCreate":
        """Copy a widget's html/css into a new div element."""
        return cls(
            type=ElementType.DIV,
            position=position,
            size=size,
            content=widget.html,
            styles={},
            attributes={
                WIDGET_ID_ATTR: widget.id,
                WIDGET_NAME_ATTR: widget.name,
                WIDGET_CSS_ATTR: widget.css,
            },
        )


class Element(ElementBase):
    """An element placed in a document store."""
    id: str = Field(pattern=f"^{ELEMENT_ID_PATTERN}$")

    @property
    def css_class(self) -> str:
        return f"element-{self.id}"


class ElementPatch(BaseModel):
    """Partial update; every field given replaces the stored one wholesale."""
    model_config = ConfigDict(use_enum_values=True)

    type: Optional[ElementType] = None
    position: Optional[Position] = None
    size: Optional[Size] = None
    content: Optional[str] = None
    styles: Optional[Dict[str, str]] = None
    attributes: Optional[Dict[str, str]] = None


class WidgetSize(BaseModel):
    """Default drop size of a widget."""
    width: int = Field(default=300, ge=1)
    height: int = Field(default=200, ge=1)


class Widget(BaseModel):
    """Reusable HTML/CSS template stored in the widgets collection."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    category: str = "custom"
    html: str
    css: str = ""
    default_size: WidgetSize = Field(default_factory=WidgetSize, alias="defaultSize")
    created_at: str = Field(alias="createdAt")
