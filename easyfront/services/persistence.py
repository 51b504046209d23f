"""
Persistence
===========

JSON-file key-value store backing the ``projects`` and ``widgets``
collections.

Each record is one ``<id>.json`` file under ``<data_dir>/<collection>/``.
File access runs in a worker thread so callers can simply await it.
"""

import asyncio
import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..exceptions import DuplicateRecordError, PersistenceError

logger = logging.getLogger(__name__)

RECORD_ID_PATTERN = re.compile(r"[A-Za-z0-9_.-]+")


class JsonCollection:
    """One collection of JSON records keyed by ``id``."""

    def __init__(self, root: Path, name: str):
        self.name = name
        self.path = Path(root) / name
        self.path.mkdir(parents=True, exist_ok=True)
        logger.info(f"[PERSISTENCE] Collection '{name}' at {self.path}")

    @staticmethod
    def _is_valid_id(record_id: str) -> bool:
        return bool(RECORD_ID_PATTERN.fullmatch(record_id)) and not record_id.startswith(".")

    def _record_path(self, record_id: str) -> Path:
        if not self._is_valid_id(record_id):
            raise PersistenceError(
                f"Invalid record id for collection '{self.name}'",
                context={"id": record_id}
            )
        return self.path / f"{record_id}.json"

    def _read(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Could not read {path.name} from '{self.name}'", cause=e)

    def _write(self, path: Path, record: Dict[str, Any]) -> None:
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(record, f, indent=2, ensure_ascii=False)
        except (OSError, TypeError) as e:
            raise PersistenceError(f"Could not write {path.name} to '{self.name}'", cause=e)

    def _get_sync(self, record_id: str) -> Optional[Dict[str, Any]]:
        if not self._is_valid_id(record_id):
            return None
        path = self._record_path(record_id)
        if not path.exists():
            return None
        return self._read(path)

    def _add_sync(self, record: Dict[str, Any]) -> str:
        record_id = str(record.get("id", ""))
        path = self._record_path(record_id)
        if path.exists():
            raise DuplicateRecordError(
                f"Record {record_id} already exists in '{self.name}'",
                context={"id": record_id}
            )
        self._write(path, record)
        return record_id

    def _update_sync(self, record_id: str, changes: Dict[str, Any]) -> bool:
        if not self._is_valid_id(record_id):
            return False
        path = self._record_path(record_id)
        if not path.exists():
            return False
        record = self._read(path)
        record.update(changes)
        record["id"] = record_id
        self._write(path, record)
        return True

    def _delete_sync(self, record_id: str) -> bool:
        if not self._is_valid_id(record_id):
            return False
        path = self._record_path(record_id)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise PersistenceError(f"Could not delete {path.name} from '{self.name}'", cause=e)
        return True

    def _list_sync(self) -> List[Dict[str, Any]]:
        try:
            paths = sorted(self.path.glob("*.json"))
        except OSError as e:
            raise PersistenceError(f"Could not list '{self.name}'", cause=e)
        return [self._read(path) for path in paths]

    async def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        """Record with the given id, or None."""
        return await asyncio.to_thread(self._get_sync, record_id)

    async def add(self, record: Dict[str, Any]) -> str:
        """Store a new record; raises DuplicateRecordError if the id exists."""
        return await asyncio.to_thread(self._add_sync, record)

    async def update(self, record_id: str, changes: Dict[str, Any]) -> bool:
        """Shallow-merge changes into a record; False if it does not exist."""
        return await asyncio.to_thread(self._update_sync, record_id, changes)

    async def delete(self, record_id: str) -> bool:
        return await asyncio.to_thread(self._delete_sync, record_id)

    async def list_all(self) -> List[Dict[str, Any]]:
        return await asyncio.to_thread(self._list_sync)


class Repository:
    """The two collections EasyFront persists."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        try:
            self.projects = JsonCollection(self.data_dir, "projects")
            self.widgets = JsonCollection(self.data_dir, "widgets")
        except OSError as e:
            raise PersistenceError(f"Data directory {self.data_dir} is not usable", cause=e)
