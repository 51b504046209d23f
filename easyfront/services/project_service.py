"""
Project Service
===============

Explicit snapshot/restore of editing sessions against the projects
collection.
"""

import logging
import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import ValidationError

from ..canvas.document_store import DocumentStore
from ..canvas.state_manager import EditingSession
from ..exceptions import LoadInProgressError, PersistenceError, RecordNotFoundError
from ..models.element_models import ElementCreate
from ..models.project_models import Project, ProjectSummary
from .persistence import Repository

logger = logging.getLogger(__name__)


class ProjectService:
    """Save, load, list and delete projects."""

    def __init__(self, repository: Repository):
        self.repository = repository

    def _to_project(self, record: dict) -> Project:
        try:
            return Project.model_validate(record)
        except ValidationError as e:
            raise PersistenceError(
                f"Stored project {record.get('id')} is not readable",
                cause=e
            )

    async def save(self, store: DocumentStore, name: str) -> Project:
        """Snapshot the store's elements into a new project."""
        now = datetime.now().isoformat()
        project = Project(
            id=str(uuid.uuid4()),
            name=name.strip() or "Sans titre",
            elements=store.elements,
            created_at=now,
            updated_at=now,
        )
        await self.repository.projects.add(project.model_dump(by_alias=True))
        logger.info(f"[PROJECTS] Saved project '{project.name}' ({len(project.elements)} elements)")
        return project

    async def overwrite(self, project_id: str, store: DocumentStore) -> bool:
        """Replace a saved project's elements with the store's current ones."""
        changes = {
            "elements": [e.model_dump() for e in store.elements],
            "updatedAt": datetime.now().isoformat(),
        }
        return await self.repository.projects.update(project_id, changes)

    async def get(self, project_id: str) -> Optional[Project]:
        record = await self.repository.projects.get(project_id)
        return self._to_project(record) if record is not None else None

    async def load(self, session: EditingSession, project_id: str) -> Project:
        """
        Replace the session's elements with a saved project's.

        The record is fully read before the store is touched; clearing
        and re-adding then happen without yielding to the event loop.
        Re-added elements get fresh ids, in the saved order.

        Raises:
            LoadInProgressError: another load is running for this session
            RecordNotFoundError: no project with that id
            PersistenceError: the record could not be read
        """
        if session.load_lock.locked():
            raise LoadInProgressError(
                "A project is already being loaded",
                context={"session_id": session.id}
            )

        async with session.load_lock:
            project = await self.get(project_id)
            if project is None:
                raise RecordNotFoundError(
                    f"Project {project_id} not found",
                    context={"project_id": project_id}
                )

            session.store.clear()
            for element in project.elements:
                session.store.add(ElementCreate.model_validate(element.model_dump(exclude={"id"})))
            session.touch()

        logger.info(f"[PROJECTS] Loaded project '{project.name}' into session {session.id}")
        return project

    async def list_projects(self) -> List[ProjectSummary]:
        """Saved projects, newest first."""
        records = await self.repository.projects.list_all()
        projects = [self._to_project(record) for record in records]
        projects.sort(key=lambda p: p.created_at, reverse=True)
        return [ProjectSummary.from_project(p) for p in projects]

    async def delete(self, project_id: str) -> bool:
        deleted = await self.repository.projects.delete(project_id)
        if deleted:
            logger.info(f"[PROJECTS] Deleted project {project_id}")
        return deleted
