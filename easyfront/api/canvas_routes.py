"""
Canvas Routes
==============

API routes for canvas state: sessions, grid, selection and drops.
"""

import logging
from fastapi import APIRouter, HTTPException
from typing import Optional, Dict, Any, List
from pydantic import BaseModel, Field

from ..canvas.placement import Cursor, DropPayload, place_drop
from ..canvas.state_manager import EditingSession
from ..exceptions import PersistenceError, WidgetNotFoundError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/canvas", tags=["canvas"])

# Injected by server
state_manager = None
widget_service = None


class CanvasStateResponse(BaseModel):
    """Response for canvas state."""
    session_id: str
    elements: List[Dict[str, Any]]
    selected_id: Optional[str] = None
    grid_size: int
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class GridRequest(BaseModel):
    """Request to change the grid size."""
    grid_size: int


class SelectionRequest(BaseModel):
    """Request to change the selection (null clears it)."""
    element_id: Optional[str] = None


class DropRequest(BaseModel):
    """A drop from the sidebar onto the canvas."""
    payload: DropPayload
    cursor: Cursor = Field(default_factory=Cursor)


def _get_session(session_id: str) -> EditingSession:
    if not state_manager:
        raise HTTPException(status_code=500, detail="State manager not initialized")

    session = state_manager.get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.post("/session")
async def create_session():
    """Create a new canvas session."""
    if not state_manager:
        raise HTTPException(status_code=500, detail="State manager not initialized")

    session_id = state_manager.create_session()
    return {"session_id": session_id, "message": "Session created"}


@router.get("/state/{session_id}")
async def get_state(session_id: str) -> CanvasStateResponse:
    """Get canvas state for session."""
    session = _get_session(session_id)
    state = session.store.to_dict()

    return CanvasStateResponse(
        session_id=session_id,
        elements=state["elements"],
        selected_id=state["selected_id"],
        grid_size=state["grid_size"],
        created_at=session.created_at,
        updated_at=session.updated_at
    )


@router.delete("/state/{session_id}")
async def clear_canvas(session_id: str):
    """Clear all elements from canvas."""
    _get_session(session_id)
    state_manager.clear_session(session_id)
    return {"message": "Canvas cleared", "session_id": session_id}


@router.put("/grid/{session_id}")
async def set_grid_size(session_id: str, request: GridRequest):
    """Change the grid used for future placements."""
    session = _get_session(session_id)
    try:
        session.store.set_grid_size(request.grid_size)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    session.touch()
    return {"message": "Grid size updated", "grid_size": session.store.grid_size}


@router.put("/selection/{session_id}")
async def select_element(session_id: str, request: SelectionRequest):
    """Point the selection at an element, or clear it."""
    session = _get_session(session_id)
    session.store.select(request.element_id)
    return {"selected_id": session.store.selected_id}


@router.post("/drop/{session_id}")
async def drop_element(session_id: str, request: DropRequest):
    """Place a built-in component or a saved widget at the drop point."""
    session = _get_session(session_id)
    if not request.payload.is_built_in and not widget_service:
        raise HTTPException(status_code=500, detail="Widget service not initialized")

    try:
        element_id = await place_drop(
            session.store,
            request.payload,
            request.cursor,
            widget_service.get if widget_service else None
        )
    except WidgetNotFoundError as e:
        raise HTTPException(status_code=404, detail=f"Widget introuvable: {e}")
    except PersistenceError as e:
        logger.error(f"[CANVAS] Widget lookup failed: {e}")
        raise HTTPException(status_code=503, detail="Widget storage unavailable")

    session.touch()
    element = session.store.get(element_id)
    return {
        "message": "Element added",
        "element_id": element_id,
        "element": element.model_dump()
    }
