"""
CSS Generator
=============

Projects the element list into a stylesheet.

Every element gets a ``.element-<id>`` rule whose geometry (left, top,
width, height) always mirrors its position and size. The CSS merger
reads these rules back, so the rule shape here is the contract it parses.
"""

import logging
import re
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

from ..models.element_models import Element, GEOMETRY_STYLE_KEYS

logger = logging.getLogger(__name__)

COMMENT_EXCERPT_CHARS = 30


class LayoutMode(str, Enum):
    """CSS positioning scheme used for element rules."""
    RELATIVE = "relative"
    ABSOLUTE = "absolute"


PREAMBLE = """* {
  box-sizing: border-box;
  margin: 0;
  padding: 0;
}

body {
  font-family: system-ui, -apple-system, sans-serif;
}

.canvas-container {
  position: relative;
  width: 100%;
  min-height: 100vh;
}

"""


def camel_to_kebab(key: str) -> str:
    """backgroundColor -> background-color"""
    if key.startswith("--"):
        return key
    return re.sub(r"([A-Z])", r"-\1", key).lower()


def kebab_to_camel(key: str) -> str:
    """background-color -> backgroundColor"""
    if key.startswith("--"):
        return key
    return re.sub(r"-([a-z])", lambda m: m.group(1).upper(), key)


def _comment_text(text: str) -> str:
    # Keep comments on one line and unable to close early
    return " ".join(text.split()).replace("*/", "* /")


def _describe(element: Element) -> str:
    content = element.content
    excerpt = content[:COMMENT_EXCERPT_CHARS]
    if len(content) > COMMENT_EXCERPT_CHARS:
        excerpt += "..."
    return _comment_text(f"{element.type} - {excerpt}")


def render_rule(element: Element, layout_mode: LayoutMode = LayoutMode.RELATIVE) -> str:
    """The ``.element-<id>`` rule: geometry first, then the element's styles."""
    mode = LayoutMode(layout_mode).value
    lines = [
        f".{element.css_class} {{",
        f"  position: {mode};",
        f"  left: {element.position.x}px;",
        f"  top: {element.position.y}px;",
        f"  width: {element.size.width}px;",
        f"  height: {element.size.height}px;",
    ]
    for key, value in element.styles.items():
        if key in GEOMETRY_STYLE_KEYS:
            continue
        lines.append(f"  {camel_to_kebab(key)}: {value};")
    lines.append("}")
    return "\n".join(lines)


def generate_css(
    elements: Iterable[Element],
    layout_mode: LayoutMode = LayoutMode.RELATIVE,
    generated_at: Optional[datetime] = None
) -> str:
    """
    Generate the stylesheet for the given elements.

    Args:
        elements: Elements in store order
        layout_mode: relative or absolute element positioning
        generated_at: Timestamp for the informational header comment

    Returns:
        Stylesheet text
    """
    stamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    parts = [f"/* Généré par EasyFront le {stamp} */\n\n", PREAMBLE]

    count = 0
    for element in elements:
        widget = element.widget
        if widget is not None and widget.css:
            parts.append(f"/* Widget: {_comment_text(widget.widget_name)} */\n")
            parts.append(widget.css + "\n\n")

        parts.append(f"/* {_describe(element)} */\n")
        parts.append(render_rule(element, layout_mode) + "\n\n")
        count += 1

    logger.debug(f"[CSS-GEN] Generated stylesheet for {count} elements")
    return "".join(parts)
