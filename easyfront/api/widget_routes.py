"""
Widget Routes
==============

Import, list and delete reusable widgets.
"""

import logging
from fastapi import APIRouter, HTTPException
from typing import List, Optional
from pydantic import BaseModel

from ..exceptions import PersistenceError, WidgetValidationError
from ..models.element_models import Widget
from ..services.widget_service import WidgetDraft, draft_from_file

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/widgets", tags=["widgets"])

# Injected by server
widget_service = None


class WidgetFileRequest(BaseModel):
    """Contents of an uploaded .html or .css file."""
    filename: str
    text: str
    draft: Optional[WidgetDraft] = None


def _require_service():
    if not widget_service:
        raise HTTPException(status_code=500, detail="Widget service not initialized")


async def _create(draft: WidgetDraft) -> Widget:
    try:
        return await widget_service.create(draft)
    except WidgetValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except PersistenceError as e:
        logger.error(f"[WIDGETS] Import failed: {e}")
        raise HTTPException(status_code=503, detail="Erreur lors de l'importation du widget")


@router.get("")
async def list_widgets(category: Optional[str] = None) -> List[Widget]:
    """Widgets in the library, newest first."""
    _require_service()
    try:
        return await widget_service.list_widgets(category)
    except PersistenceError as e:
        logger.error(f"[WIDGETS] Listing failed: {e}")
        raise HTTPException(status_code=503, detail="Widget storage unavailable")


@router.post("")
async def create_widget(draft: WidgetDraft) -> Widget:
    """Import a widget from pasted HTML/CSS."""
    _require_service()
    return await _create(draft)


@router.post("/file")
async def import_widget_file(request: WidgetFileRequest) -> Widget:
    """Import a widget from an uploaded file's text."""
    _require_service()
    try:
        draft = draft_from_file(request.filename, request.text, request.draft)
    except WidgetValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return await _create(draft)


@router.delete("/{widget_id}")
async def delete_widget(widget_id: str):
    """Remove a widget; already placed copies are unaffected."""
    _require_service()
    try:
        deleted = await widget_service.delete(widget_id)
    except PersistenceError as e:
        logger.error(f"[WIDGETS] Delete failed: {e}")
        raise HTTPException(status_code=503, detail="Widget storage unavailable")

    if not deleted:
        raise HTTPException(status_code=404, detail="Widget not found")
    return {"message": "Widget deleted", "widget_id": widget_id}
