"""Pantry repository: one versioned snapshot document in the pantry collection."""
import asyncio
import logging
from typing import Optional

from mealkit.domain.Pantry import Pantry
from mealkit.infra.document_store import DocumentStore, StalePantryError
from mealkit.utilities.constants import PANTRY_COLLECTION, CURRENT_DOC

logger = logging.getLogger(__name__)


class PantryRepository:
    def __init__(self, store: DocumentStore, key: str = CURRENT_DOC):
        self.store = store
        self.key = key
        self._write_lock = asyncio.Lock()

    async def load(self) -> Pantry:
        """Current pantry snapshot; an empty pantry at version 0 when nothing is stored yet."""
        doc = await self.store.get(PANTRY_COLLECTION, self.key)
        if not doc:
            return Pantry()
        return Pantry.from_dict(doc)

    async def save(self, pantry: Pantry, expected_version: Optional[int] = None) -> int:
        """Persist the pantry and return its new version.

        With expected_version set, the write is refused (StalePantryError) when
        the stored snapshot moved on since the caller loaded it.
        """
        async with self._write_lock:
            doc = await self.store.get(PANTRY_COLLECTION, self.key) or {}
            current = int(doc.get("version", 0) or 0)
            if expected_version is not None and expected_version != current:
                logger.warning(f"Stale pantry snapshot: expected version {expected_version}, stored {current}")
                raise StalePantryError(expected_version, current)
            new_version = current + 1
            await self.store.set(PANTRY_COLLECTION, self.key, {"items": pantry.to_dict(), "version": new_version})
        pantry.version = new_version
        logger.info(f"Pantry saved ({len(pantry)} items, version {new_version})")
        return new_version
