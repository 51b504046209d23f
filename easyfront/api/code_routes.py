"""
Code Routes
============

Generated HTML/CSS for a session, and the edited-CSS sync back into it.
"""

import logging
from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel

from ..canvas.state_manager import EditingSession
from ..services.css_generator import LayoutMode, generate_css
from ..services.css_merger import MergeResult, merge_css
from ..services.html_generator import generate_complete_html, generate_html

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/code", tags=["code"])

# Injected by server
state_manager = None
layout_mode: LayoutMode = LayoutMode.RELATIVE


class CssEditRequest(BaseModel):
    """Full stylesheet text as edited by the user."""
    css: str


def _get_session(session_id: str) -> EditingSession:
    if not state_manager:
        raise HTTPException(status_code=500, detail="State manager not initialized")

    session = state_manager.get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.get("/{session_id}/html")
async def get_html(session_id: str):
    """index.html for the session (links styles.css)."""
    session = _get_session(session_id)
    return Response(content=generate_html(session.store.elements), media_type="text/html")


@router.get("/{session_id}/css")
async def get_css(session_id: str):
    """styles.css for the session."""
    session = _get_session(session_id)
    css = generate_css(session.store.elements, layout_mode=layout_mode)
    return Response(content=css, media_type="text/css")


@router.get("/{session_id}/complete")
async def get_complete_html(session_id: str):
    """Single-file document with the stylesheet inlined."""
    session = _get_session(session_id)
    document = generate_complete_html(session.store.elements, layout_mode=layout_mode)
    return Response(content=document, media_type="text/html")


@router.put("/{session_id}/css")
async def apply_css(session_id: str, request: CssEditRequest) -> MergeResult:
    """Merge hand-edited CSS back into the session's elements."""
    session = _get_session(session_id)
    result = merge_css(session.store, request.css)
    if not result.success:
        raise HTTPException(status_code=422, detail=f"CSS could not be applied: {result.error}")

    if result.updated:
        session.touch()
    return result
