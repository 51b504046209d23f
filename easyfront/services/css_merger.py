"""
CSS Merger
==========

Reads hand-edited stylesheet text back into the document store.

Only rules shaped like the CSS generator's output are understood:
``.element-<id> { key: value; ... }``. Anything else is ignored rather
than reported. For a matched element:

- ``left``/``top``/``width``/``height`` update position and size, each
  key independently; keys not mentioned keep their current value.
- ``position`` is owned by the generator and discarded.
- every other declaration goes into a fresh ``styles`` map, which
  replaces the element's styles (styles missing from the text are
  dropped).

Patches for all matched elements are collected first and applied as one
batch after the whole text is scanned.
"""

import logging
import re
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..canvas.document_store import DocumentStore
from ..models.element_models import ELEMENT_ID_PATTERN, Element, ElementPatch, Position, Size
from .css_generator import kebab_to_camel

logger = logging.getLogger(__name__)

RULE_PATTERN = re.compile(
    r"(?<![\w-])\.element-(" + ELEMENT_ID_PATTERN + r")\s*\{([^{}]*)\}"
)
COMMENT_PATTERN = re.compile(r"/\*.*?\*/", re.DOTALL)
INTEGER_PREFIX = re.compile(r"^\s*([+-]?\d+)")

GEOMETRY_KEYS = ("left", "top", "width", "height")


class ParsedRule(BaseModel):
    """Declarations recovered from one ``.element-<id>`` rule."""
    element_id: str
    left: Optional[int] = None
    top: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    styles: Dict[str, str] = Field(default_factory=dict)

    @property
    def has_position(self) -> bool:
        return self.left is not None or self.top is not None

    @property
    def has_size(self) -> bool:
        return self.width is not None or self.height is not None


class MergeResult(BaseModel):
    """Outcome of one merge call."""
    updated: List[str] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


def parse_int(value: str) -> Optional[int]:
    """Leading integer of a CSS length ("40px" -> 40), None if there is none."""
    match = INTEGER_PREFIX.match(value)
    return int(match.group(1)) if match else None


def split_declarations(body: str) -> List[str]:
    """Split a rule body on semicolons outside quotes and parentheses."""
    parts: List[str] = []
    current: List[str] = []
    depth = 0
    quote = None
    for char in body:
        if quote:
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")" and depth:
            depth -= 1
        elif char == ";" and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts


def _normalize_key(key: str) -> str:
    # Custom properties are case-sensitive
    return key if key.startswith("--") else key.lower()


def parse_rule_body(element_id: str, body: str) -> ParsedRule:
    """Classify the declarations of one rule body."""
    rule = ParsedRule(element_id=element_id)

    for declaration in split_declarations(body):
        if not declaration.strip():
            continue
        key, sep, value = declaration.partition(":")
        key = _normalize_key(key.strip())
        value = value.strip()
        if not sep or not key or not value:
            continue

        if key in GEOMETRY_KEYS:
            number = parse_int(value)
            if number is None:
                logger.debug(f"[CSS-MERGE] Dropping malformed {key}: {value!r} on {element_id}")
                continue
            setattr(rule, key, number)
        elif key == "position":
            continue
        else:
            rule.styles[kebab_to_camel(key)] = value

    return rule


def parse_element_rules(css: str) -> List[ParsedRule]:
    """Find every ``.element-<id>`` rule in the text, in order of appearance."""
    text = COMMENT_PATTERN.sub("", css)
    return [
        parse_rule_body(match.group(1), match.group(2))
        for match in RULE_PATTERN.finditer(text)
    ]


def build_patch(element: Element, rule: ParsedRule, grid_size: int = 1) -> ElementPatch:
    """
    Turn a parsed rule into a patch for the element.

    Geometry values that would break the element's invariants (negative
    offsets, sizes below one grid unit) are treated like malformed values
    and the current value is kept.
    """
    fields = {"styles": dict(rule.styles)}

    if rule.has_position:
        x = rule.left if rule.left is not None and rule.left >= 0 else element.position.x
        y = rule.top if rule.top is not None and rule.top >= 0 else element.position.y
        fields["position"] = Position(x=x, y=y)

    if rule.has_size:
        width = rule.width if rule.width is not None and rule.width >= grid_size else element.size.width
        height = rule.height if rule.height is not None and rule.height >= grid_size else element.size.height
        fields["size"] = Size(width=width, height=height)

    return ElementPatch(**fields)


def merge_css(store: DocumentStore, css: str) -> MergeResult:
    """
    Apply edited stylesheet text to the store.

    Rules for ids that are not in the store are skipped. If scanning the
    text fails, the error is logged and the store is left untouched.
    """
    result = MergeResult()
    updates: Dict[str, ElementPatch] = {}

    try:
        for rule in parse_element_rules(css):
            element = store.get(rule.element_id)
            if element is None:
                if rule.element_id not in result.skipped:
                    result.skipped.append(rule.element_id)
                continue
            updates[rule.element_id] = build_patch(element, rule, store.grid_size)
    except Exception as e:
        logger.exception(f"[CSS-MERGE] Error while parsing edited CSS: {e}")
        result.error = f"{type(e).__name__}: {e}"
        return result

    result.updated = store.apply_updates(updates)
    logger.info(
        f"[CSS-MERGE] Applied {len(result.updated)} element updates, "
        f"skipped {len(result.skipped)} unknown ids"
    )
    return result
