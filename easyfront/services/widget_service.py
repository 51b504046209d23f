"""
Widget Service
==============

Import and manage reusable HTML/CSS widgets in the widgets collection.

An uploaded ``.html`` file is split into its ``<body>`` markup and the
contents of its first ``<style>`` block; scripts are stripped. A ``.css``
file only provides the stylesheet.
"""

import logging
import re
import uuid
from datetime import datetime
from pathlib import PurePath
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError

from ..exceptions import PersistenceError, WidgetValidationError
from ..models.element_models import Widget, WidgetSize
from .persistence import Repository

logger = logging.getLogger(__name__)

STYLE_BLOCK = re.compile(r"<style[^>]*>([\s\S]*?)</style>", re.IGNORECASE)
BODY_BLOCK = re.compile(r"<body[^>]*>([\s\S]*?)</body>", re.IGNORECASE)
SCRIPT_BLOCK = re.compile(r"<script[^>]*>[\s\S]*?</script>", re.IGNORECASE)


class WidgetDraft(BaseModel):
    """Widget fields as entered in the import dialog."""
    name: str = ""
    category: str = "custom"
    html: str = ""
    css: str = ""
    default_size: WidgetSize = Field(default_factory=WidgetSize)


def split_html_document(text: str) -> Tuple[str, str]:
    """Return (body_html, css) extracted from a full HTML document."""
    style_match = STYLE_BLOCK.search(text)
    css = style_match.group(1).strip() if style_match else ""

    body_match = BODY_BLOCK.search(text)
    body = body_match.group(1).strip() if body_match else text

    body = STYLE_BLOCK.sub("", body)
    body = SCRIPT_BLOCK.sub("", body)
    return body.strip(), css


def name_from_filename(filename: str) -> str:
    """'pricing-card_v2.html' -> 'Pricing Card V2'"""
    stem = PurePath(filename).stem
    words = re.sub(r"[-_]", " ", stem)
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), words)


def draft_from_file(filename: str, text: str, draft: Optional[WidgetDraft] = None) -> WidgetDraft:
    """
    Fill a draft from an uploaded file.

    HTML files provide markup and CSS (and a name if none was typed);
    CSS files provide the stylesheet only.
    """
    draft = draft.model_copy() if draft else WidgetDraft()
    lowered = filename.lower()

    if lowered.endswith((".html", ".htm")):
        body, css = split_html_document(text)
        draft.html = body
        if css:
            draft.css = css
        if not draft.name.strip():
            draft.name = name_from_filename(filename)
    elif lowered.endswith(".css"):
        draft.css = text
    else:
        raise WidgetValidationError(
            "Only .html and .css files can be imported",
            context={"filename": filename}
        )
    return draft


class WidgetService:
    """Widget library backed by the widgets collection."""

    def __init__(self, repository: Repository):
        self.repository = repository

    def _to_widget(self, record: Dict) -> Widget:
        try:
            return Widget.model_validate(record)
        except ValidationError as e:
            raise PersistenceError(f"Stored widget {record.get('id')} is not readable", cause=e)

    async def create(self, draft: WidgetDraft) -> Widget:
        """Validate a draft and store it as a new widget."""
        if not draft.name.strip():
            raise WidgetValidationError("Widget name is required")
        if not draft.html.strip():
            raise WidgetValidationError("Widget HTML is required")

        widget = Widget(
            id=str(uuid.uuid4()),
            name=draft.name.strip(),
            category=draft.category or "custom",
            html=draft.html.strip(),
            css=draft.css.strip(),
            default_size=draft.default_size,
            created_at=datetime.now().isoformat(),
        )
        await self.repository.widgets.add(widget.model_dump(by_alias=True))
        logger.info(f"[WIDGETS] Imported widget '{widget.name}' ({widget.id})")
        return widget

    async def get(self, widget_id: str) -> Optional[Widget]:
        record = await self.repository.widgets.get(widget_id)
        return self._to_widget(record) if record is not None else None

    async def list_widgets(self, category: Optional[str] = None) -> List[Widget]:
        records = await self.repository.widgets.list_all()
        widgets = [self._to_widget(record) for record in records]
        if category:
            widgets = [w for w in widgets if w.category == category]
        widgets.sort(key=lambda w: w.created_at, reverse=True)
        return widgets

    async def delete(self, widget_id: str) -> bool:
        return await self.repository.widgets.delete(widget_id)
