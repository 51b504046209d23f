"""
HTML Generator
==============

Projects the element list into HTML markup.

Each element becomes one tag carrying the class ``element-<id>``; the
stylesheet produced by the CSS generator targets the same class. All
tags sit inside a single ``canvas-container`` div, the positioning
reference frame for every element.
"""

import html
import logging
from datetime import datetime
from typing import Dict, Iterable, Optional

from ..models.element_models import Element
from .css_generator import generate_css

logger = logging.getLogger(__name__)

CONTAINER_CLASS = "canvas-container"
IMAGE_PLACEHOLDER_SRC = "placeholder.jpg"
DEFAULT_TITLE = "EasyFront - Page générée"
EMPTY_PLACEHOLDER = "<!-- Canvas vide : glissez des composants pour commencer -->"


def _format_attributes(attributes: Dict[str, str]) -> str:
    return "".join(
        f' {key}="{html.escape(value, quote=True)}"'
        for key, value in attributes.items()
    )


def render_element(element: Element, indent: int = 0) -> str:
    """Render one element as a single tag (widgets as a wrapping div)."""
    spaces = " " * indent
    class_attr = f' class="{element.css_class}"'

    widget = element.widget
    if widget is not None:
        # Saved widget markup goes in verbatim; the element type is ignored
        return f"{spaces}<div{class_attr}>\n{spaces}  {widget.html}\n{spaces}</div>"

    attrs = _format_attributes(element.html_attributes())
    text = html.escape(element.content, quote=False)
    tag = element.type

    if tag == "input":
        return f"{spaces}<input{class_attr}{attrs} />"
    if tag == "img":
        src = element.attributes.get("src") or IMAGE_PLACEHOLDER_SRC
        alt = element.attributes.get("alt") or element.content
        return (
            f'{spaces}<img{class_attr} src="{html.escape(src, quote=True)}"'
            f' alt="{html.escape(alt, quote=True)}" />'
        )
    # textarea, button, headings, p, label, div, form
    return f"{spaces}<{tag}{class_attr}{attrs}>{text}</{tag}>"


def render_container(elements: Iterable[Element], indent: int = 2) -> str:
    """Wrap the rendered elements in the canvas container div."""
    spaces = " " * indent
    children = [render_element(element, indent + 2) for element in elements]
    if not children:
        children = [f"{spaces}  {EMPTY_PLACEHOLDER}"]
    body = "\n".join(children)
    return f'{spaces}<div class="{CONTAINER_CLASS}">\n{body}\n{spaces}</div>'


def _timestamp_comment(generated_at: Optional[datetime]) -> str:
    stamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    return f"<!-- Généré par EasyFront le {stamp} -->"


def generate_html(
    elements: Iterable[Element],
    title: str = DEFAULT_TITLE,
    stylesheet_href: str = "styles.css",
    generated_at: Optional[datetime] = None
) -> str:
    """
    Generate an HTML5 document linking an external stylesheet.

    Args:
        elements: Elements in store order
        title: Document title
        stylesheet_href: Where the generated CSS will live
        generated_at: Timestamp for the informational header comment

    Returns:
        Complete HTML document text
    """
    elements = list(elements)
    logger.debug(f"[HTML-GEN] Generating document for {len(elements)} elements")
    return f"""<!DOCTYPE html>
<html lang="fr">
<head>
  {_timestamp_comment(generated_at)}
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{html.escape(title, quote=False)}</title>
  <link rel="stylesheet" href="{html.escape(stylesheet_href, quote=True)}">
</head>
<body>
{render_container(elements)}
</body>
</html>
"""


def generate_complete_html(
    elements: Iterable[Element],
    title: str = DEFAULT_TITLE,
    layout_mode: str = "relative",
    generated_at: Optional[datetime] = None
) -> str:
    """Generate a self-contained document with the stylesheet inlined."""
    elements = list(elements)
    css = generate_css(elements, layout_mode=layout_mode, generated_at=generated_at)
    return f"""<!DOCTYPE html>
<html lang="fr">
<head>
  {_timestamp_comment(generated_at)}
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{html.escape(title, quote=False)}</title>
  <style>
{css}
  </style>
</head>
<body>
{render_container(elements)}
</body>
</html>
"""
