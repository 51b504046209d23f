"""
Document Store
==============

In-memory collection of canvas elements for one editing session.

The store is the single source of truth that the generators read and the
placement and CSS merge paths mutate. Lookups of unknown ids are silent
no-ops; nothing here persists implicitly.
"""

import logging
import uuid
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from ..models.element_models import Element, ElementCreate, ElementPatch, Position, Size
from .grid import DEFAULT_GRID_SIZE, GRID_SIZES

logger = logging.getLogger(__name__)

PatchLike = Union[ElementPatch, Mapping[str, Any]]


class DocumentStore:
    """Ordered elements, current selection and active grid size."""

    def __init__(self, grid_size: int = DEFAULT_GRID_SIZE):
        self._elements: List[Element] = []
        self.selected_id: Optional[str] = None
        self.grid_size = DEFAULT_GRID_SIZE
        self.set_grid_size(grid_size)

    @property
    def elements(self) -> List[Element]:
        """Elements in insertion order (a copy of the list)."""
        return list(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, element_id: object) -> bool:
        return self.get(element_id) is not None

    def get(self, element_id: object) -> Optional[Element]:
        for element in self._elements:
            if element.id == element_id:
                return element
        return None

    def add(self, element: Union[ElementCreate, Mapping[str, Any]]) -> str:
        """Append an element under a fresh id and return the id."""
        if not isinstance(element, ElementCreate):
            element = ElementCreate.model_validate(dict(element))
        data = element.model_dump()
        data["id"] = self._new_id()
        stored = Element.model_validate(data)
        self._elements.append(stored)
        logger.debug(f"[STORE] Added {stored.type} element {stored.id}")
        return stored.id

    def load(self, elements: Iterable[Element]) -> None:
        """
        Append already identified elements, keeping their ids.

        Only for snapshots taken from a store in this process; projects
        are reloaded through add() so every element gets a fresh id.
        """
        for element in elements:
            if element.id in self:
                logger.warning(f"[STORE] Skipping duplicate element id {element.id}")
                continue
            self._elements.append(element.model_copy(deep=True))

    def update(self, element_id: str, patch: PatchLike) -> bool:
        """
        Shallow-merge patch onto the element with the given id.

        Each field present in the patch replaces the stored field
        wholesale. Returns False if the id is unknown.
        """
        if not isinstance(patch, ElementPatch):
            patch = ElementPatch.model_validate(dict(patch))
        changes = patch.model_dump(exclude_unset=True)
        # None means "not given" for every patchable field
        changes = {key: value for key, value in changes.items() if value is not None}

        for index, element in enumerate(self._elements):
            if element.id == element_id:
                merged = element.model_dump()
                merged.update(changes)
                self._elements[index] = Element.model_validate(merged)
                return True

        logger.debug(f"[STORE] Update ignored, no element {element_id}")
        return False

    def apply_updates(self, updates: Mapping[str, PatchLike]) -> List[str]:
        """Apply a batch of patches; returns the ids that were updated."""
        # Validate everything first so a bad patch leaves the store untouched
        validated = {
            element_id: patch if isinstance(patch, ElementPatch) else ElementPatch.model_validate(dict(patch))
            for element_id, patch in updates.items()
        }
        return [element_id for element_id, patch in validated.items() if self.update(element_id, patch)]

    def move(self, element_id: str, position: Union[Position, Mapping[str, int]]) -> bool:
        return self.update(element_id, {"position": position})

    def resize(self, element_id: str, size: Union[Size, Mapping[str, int]]) -> bool:
        return self.update(element_id, {"size": size})

    def delete(self, element_id: str) -> bool:
        """Remove an element, clearing the selection if it pointed at it."""
        initial_len = len(self._elements)
        self._elements = [e for e in self._elements if e.id != element_id]
        if self.selected_id == element_id:
            self.selected_id = None
        return len(self._elements) < initial_len

    def select(self, element_id: Optional[str]) -> None:
        self.selected_id = element_id

    def clear(self) -> None:
        self._elements = []
        self.selected_id = None

    def set_grid_size(self, grid_size: int) -> None:
        """Change the grid used by future placements; existing elements stay put."""
        if grid_size not in GRID_SIZES:
            raise ValueError(f"Grid size must be one of {GRID_SIZES}, got {grid_size}")
        self.grid_size = grid_size

    def to_dict(self) -> Dict[str, Any]:
        return {
            "elements": [e.model_dump() for e in self._elements],
            "selected_id": self.selected_id,
            "grid_size": self.grid_size,
        }

    def _new_id(self) -> str:
        element_id = str(uuid.uuid4())
        while element_id in self:
            element_id = str(uuid.uuid4())
        return element_id
