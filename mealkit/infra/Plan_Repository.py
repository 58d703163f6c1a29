"""Weekly plan repository (mealPlans) plus named saved plans (savedMealPlans)."""
import logging
from datetime import date
from typing import Dict, List, Optional

from mealkit.domain.Plan import Plan
from mealkit.infra.document_store import DocumentStore
from mealkit.utilities.constants import PLANS_COLLECTION, SAVED_PLANS_COLLECTION

logger = logging.getLogger(__name__)


def _week_key(year: int, week_number: int) -> str:
    return f"{year}-W{week_number:02d}"


class PlanRepository:
    def __init__(self, store: DocumentStore):
        self.store = store

    async def get_week_plan(self, week_number: Optional[int] = None, year: Optional[int] = None) -> Plan:
        """Stored plan for the ISO week (current week by default); an empty grid when none exists."""
        iso = date.today().isocalendar()
        week_number = week_number or iso.week
        year = year or iso.year
        doc = await self.store.get(PLANS_COLLECTION, _week_key(year, week_number))
        if not doc:
            return Plan(week_number, year)
        return Plan.from_dict(doc)

    async def save_week_plan(self, plan: Plan) -> None:
        await self.store.set(PLANS_COLLECTION, _week_key(plan.year, plan.week), plan.to_dict())

    async def save_named_plan(self, name: str, plan: Plan) -> None:
        if not name or not name.strip():
            raise ValueError("Saved plan name cannot be empty")
        doc = plan.to_dict()
        doc["name"] = name.strip()
        await self.store.set(SAVED_PLANS_COLLECTION, name.strip(), doc)
        logger.info(f"Saved meal plan '{name.strip()}'")

    async def load_named_plan(self, name: str) -> Optional[Plan]:
        doc = await self.store.get(SAVED_PLANS_COLLECTION, name)
        return Plan.from_dict(doc) if doc else None

    async def list_saved_plans(self) -> List[str]:
        docs: Dict[str, dict] = await self.store.list_all(SAVED_PLANS_COLLECTION)
        return sorted(docs)

    async def delete_named_plan(self, name: str) -> None:
        await self.store.delete(SAVED_PLANS_COLLECTION, name)
