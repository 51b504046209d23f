"""
Project Models for EasyFront
============================

Records kept in the persistence collaborator's ``projects`` collection.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .element_models import Element


class Project(BaseModel):
    """A saved snapshot of a canvas."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    elements: List[Element] = Field(default_factory=list)
    created_at: str = Field(alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")


class ProjectSummary(BaseModel):
    """Listing entry for the project manager."""
    id: str
    name: str
    element_count: int
    created_at: str
    updated_at: Optional[str] = None

    @classmethod
    def from_project(cls, project: Project) -> "ProjectSummary":
        return cls(
            id=project.id,
            name=project.name,
            element_count=len(project.elements),
            created_at=project.created_at,
            updated_at=project.updated_at,
        )
