"""Cooking history: one document per recipe in the cookingHistory collection.

Record layout:
    {recipe_id, recipe_name, cooked_count, first_cooked, last_cooked,
     ratings: [{rating, notes, date}], average_rating}

Unrated cooks count toward cooked_count but add nothing to ratings.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from mealkit.infra.document_store import DocumentStore
from mealkit.utilities.constants import HISTORY_COLLECTION

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def _average(ratings: List[Dict[str, Any]]) -> Optional[float]:
    if not ratings:
        return None
    return round(sum(r["rating"] for r in ratings) / len(ratings), 2)


class CookingHistoryRecorder:
    def __init__(self, store: DocumentStore):
        self.store = store

    async def record(self, recipe_id: str, recipe_name: str, rating: Optional[int] = None,
                     notes: str = "") -> Dict[str, Any]:
        if rating is not None and (isinstance(rating, bool) or not MIN_RATING <= rating <= MAX_RATING):
            raise ValueError(f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}")

        now = datetime.now(timezone.utc).isoformat()
        record = await self.store.get(HISTORY_COLLECTION, recipe_id) or {
            "recipe_id": recipe_id,
            "recipe_name": recipe_name,
            "cooked_count": 0,
            "first_cooked": now,
            "ratings": [],
        }
        record["recipe_name"] = recipe_name or record.get("recipe_name", "")
        record["cooked_count"] = int(record.get("cooked_count", 0)) + 1
        record["last_cooked"] = now
        ratings = list(record.get("ratings") or [])
        if rating is not None:
            ratings.append({"rating": rating, "notes": notes or "", "date": now})
        record["ratings"] = ratings
        record["average_rating"] = _average(ratings)

        await self.store.set(HISTORY_COLLECTION, recipe_id, record)
        logger.info(f"Cooking history recorded for {recipe_name} ({record['cooked_count']} times)")
        return record

    async def read(self, recipe_id: str) -> Optional[Dict[str, Any]]:
        return await self.store.get(HISTORY_COLLECTION, recipe_id)

    async def read_all(self) -> List[Dict[str, Any]]:
        docs = await self.store.list_all(HISTORY_COLLECTION)
        return list(docs.values())
