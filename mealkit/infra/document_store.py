"""Async document store used by the repositories.

Documents are JSON-compatible dicts addressed by (collection, key). Two
implementations ship: an in-memory one for tests and a JSON-file one that
keeps each collection in <data_dir>/<collection>.json.
"""
from __future__ import annotations
import asyncio
import copy
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from mealkit.utilities.config import DATA_DIR

logger = logging.getLogger(__name__)

__all__ = [
    "DocumentStore", "InMemoryDocumentStore", "JsonFileDocumentStore",
    "PersistenceError", "StalePantryError",
]


class PersistenceError(Exception):
    """A document could not be read or written."""


class StalePantryError(PersistenceError):
    """The pantry changed since the snapshot the caller planned against."""

    def __init__(self, expected_version: int, actual_version: int):
        super().__init__(f"Pantry version conflict: expected {expected_version}, found {actual_version}")
        self.expected_version = expected_version
        self.actual_version = actual_version


class DocumentStore(Protocol):
    async def get(self, collection: str, key: str) -> Optional[Dict[str, Any]]: ...

    async def set(self, collection: str, key: str, value: Dict[str, Any]) -> None: ...

    async def delete(self, collection: str, key: str) -> None: ...

    async def list_all(self, collection: str) -> Dict[str, Dict[str, Any]]: ...


class InMemoryDocumentStore:
    def __init__(self, initial: Optional[Dict[str, Dict[str, Dict[str, Any]]]] = None):
        self._data: Dict[str, Dict[str, Dict[str, Any]]] = copy.deepcopy(initial or {})

    async def get(self, collection, key):
        doc = self._data.get(collection, {}).get(key)
        return copy.deepcopy(doc) if doc is not None else None

    async def set(self, collection, key, value):
        self._data.setdefault(collection, {})[key] = copy.deepcopy(value)

    async def delete(self, collection, key):
        self._data.get(collection, {}).pop(key, None)

    async def list_all(self, collection):
        return copy.deepcopy(self._data.get(collection, {}))


class JsonFileDocumentStore:
    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = Path(data_dir or DATA_DIR)
        self._lock = asyncio.Lock()

    def _path(self, collection: str) -> Path:
        return self.data_dir / f"{collection}.json"

    def _load(self, collection: str) -> Dict[str, Any]:
        path = self._path(collection)
        if not path.exists():
            return {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {path}: {e}")
            raise PersistenceError(f"Invalid JSON in {path}") from e
        except OSError as e:
            raise PersistenceError(f"Cannot read {path}: {e}") from e
        return data if isinstance(data, dict) else {}

    def _atomic_write(self, collection: str, docs: Dict[str, Any]):
        path = self._path(collection)
        try:
            os.makedirs(self.data_dir, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.data_dir, prefix=f".{collection}_", suffix=".json")
        except OSError as e:
            raise PersistenceError(f"Cannot write {path}: {e}") from e
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(docs, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, path)
        except OSError as e:
            raise PersistenceError(f"Cannot write {path}: {e}") from e
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    async def get(self, collection, key):
        async with self._lock:
            docs = await asyncio.to_thread(self._load, collection)
        return docs.get(key)

    async def set(self, collection, key, value):
        async with self._lock:
            docs = await asyncio.to_thread(self._load, collection)
            docs[key] = value
            await asyncio.to_thread(self._atomic_write, collection, docs)

    async def delete(self, collection, key):
        async with self._lock:
            docs = await asyncio.to_thread(self._load, collection)
            if docs.pop(key, None) is not None:
                await asyncio.to_thread(self._atomic_write, collection, docs)

    async def list_all(self, collection):
        async with self._lock:
            return await asyncio.to_thread(self._load, collection)
