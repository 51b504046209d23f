"""
Element Routes
===============

API routes for element management.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ..canvas.placement import move_element, resize_element
from ..canvas.state_manager import EditingSession
from ..models.element_models import ElementCreate, ElementPatch

router = APIRouter(prefix="/api/element", tags=["elements"])

# Injected by server
state_manager = None


class ElementResponse(BaseModel):
    """Response for element operations."""
    element_id: str
    message: str


class MoveRequest(BaseModel):
    """Drag stop coordinates, snapped server-side."""
    x: float
    y: float


class ResizeRequest(BaseModel):
    """Resize stop dimensions, snapped server-side."""
    width: float
    height: float


def _get_session(session_id: str) -> EditingSession:
    if not state_manager:
        raise HTTPException(status_code=500, detail="State manager not initialized")

    session = state_manager.get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.post("/{session_id}")
async def add_element(session_id: str, request: ElementCreate) -> ElementResponse:
    """Add element to canvas."""
    session = _get_session(session_id)
    element_id = session.store.add(request)
    session.touch()

    return ElementResponse(element_id=element_id, message="Element added")


@router.get("/{session_id}/{element_id}")
async def get_element(session_id: str, element_id: str):
    """Get one element."""
    session = _get_session(session_id)
    element = session.store.get(element_id)
    if not element:
        raise HTTPException(status_code=404, detail="Element not found")
    return element.model_dump()


@router.put("/{session_id}/{element_id}")
async def update_element(session_id: str, element_id: str, request: ElementPatch):
    """Update element on canvas."""
    session = _get_session(session_id)
    if not session.store.update(element_id, request):
        raise HTTPException(status_code=404, detail="Element not found")

    session.touch()
    return {"message": "Element updated", "element_id": element_id}


@router.delete("/{session_id}/{element_id}")
async def remove_element(session_id: str, element_id: str):
    """Remove element from canvas."""
    session = _get_session(session_id)
    if not session.store.delete(element_id):
        raise HTTPException(status_code=404, detail="Element not found")

    session.touch()
    return {"message": "Element removed", "element_id": element_id}


@router.post("/{session_id}/{element_id}/move")
async def move(session_id: str, element_id: str, request: MoveRequest):
    """Drag stop: store the snapped position."""
    session = _get_session(session_id)
    if not move_element(session.store, element_id, request.x, request.y):
        raise HTTPException(status_code=404, detail="Element not found")

    session.touch()
    return {"element_id": element_id, "position": session.store.get(element_id).position.model_dump()}


@router.post("/{session_id}/{element_id}/resize")
async def resize(session_id: str, element_id: str, request: ResizeRequest):
    """Resize stop: store the snapped size."""
    session = _get_session(session_id)
    if not resize_element(session.store, element_id, request.width, request.height):
        raise HTTPException(status_code=404, detail="Element not found")

    session.touch()
    return {"element_id": element_id, "size": session.store.get(element_id).size.model_dump()}
