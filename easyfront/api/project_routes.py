"""
Project Routes
===============

Save canvas sessions as projects and load them back.
"""

import logging
from fastapi import APIRouter, HTTPException
from typing import List
from pydantic import BaseModel

from ..exceptions import LoadInProgressError, PersistenceError, RecordNotFoundError
from ..models.project_models import ProjectSummary

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/projects", tags=["projects"])

# Injected by server
state_manager = None
project_service = None


class SaveProjectRequest(BaseModel):
    """Snapshot a session under a name."""
    session_id: str
    name: str


def _require_services():
    if not state_manager or not project_service:
        raise HTTPException(status_code=500, detail="Project service not initialized")


def _storage_error(action: str, e: PersistenceError) -> HTTPException:
    logger.error(f"[PROJECTS] {action} failed: {e}")
    return HTTPException(status_code=503, detail=f"Erreur lors de {action}")


@router.get("")
async def list_projects() -> List[ProjectSummary]:
    """Saved projects, newest first."""
    _require_services()
    try:
        return await project_service.list_projects()
    except PersistenceError as e:
        raise _storage_error("la lecture des projets", e)


@router.post("")
async def save_project(request: SaveProjectRequest):
    """Save the session's current elements as a new project."""
    _require_services()
    store = state_manager.get_store(request.session_id)
    if store is None:
        raise HTTPException(status_code=404, detail="Session not found")
    if not request.name.strip():
        raise HTTPException(status_code=422, detail="Project name is required")

    try:
        project = await project_service.save(store, request.name)
    except PersistenceError as e:
        raise _storage_error("la sauvegarde", e)

    return {
        "message": "Project saved",
        "project": ProjectSummary.from_project(project)
    }


@router.put("/{project_id}/{session_id}")
async def overwrite_project(project_id: str, session_id: str):
    """Replace a saved project's elements with the session's."""
    _require_services()
    store = state_manager.get_store(session_id)
    if store is None:
        raise HTTPException(status_code=404, detail="Session not found")

    try:
        updated = await project_service.overwrite(project_id, store)
    except PersistenceError as e:
        raise _storage_error("la sauvegarde", e)

    if not updated:
        raise HTTPException(status_code=404, detail="Project not found")
    return {"message": "Project updated", "project_id": project_id}


@router.post("/{project_id}/load/{session_id}")
async def load_project(project_id: str, session_id: str):
    """Replace the session's canvas with a saved project."""
    _require_services()
    session = state_manager.get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")

    try:
        project = await project_service.load(session, project_id)
    except LoadInProgressError:
        raise HTTPException(status_code=409, detail="A project is already loading")
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    except PersistenceError as e:
        raise _storage_error("le chargement", e)

    return {
        "message": "Project loaded",
        "project_id": project.id,
        "element_count": len(project.elements)
    }


@router.delete("/{project_id}")
async def delete_project(project_id: str):
    """Delete a saved project."""
    _require_services()
    try:
        deleted = await project_service.delete(project_id)
    except PersistenceError as e:
        raise _storage_error("la suppression", e)

    if not deleted:
        raise HTTPException(status_code=404, detail="Project not found")
    return {"message": "Project deleted", "project_id": project_id}
