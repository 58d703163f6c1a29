"""Cook a planned meal: deduct the pantry, mark the slot, record history.

The pantry write and the plan write happen first. Cooking history is a
separate, later write: if it fails the deduction stays in place and the
result reports history_recorded=False.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from mealkit.events.Event_Bus import EventBus, GLOBAL_EVENT_BUS
from mealkit.events.event_helpers import publish_recipe_cooked
from mealkit.infra.History_Repository import CookingHistoryRecorder, MIN_RATING, MAX_RATING
from mealkit.infra.Pantry_Repository import PantryRepository
from mealkit.infra.Plan_Repository import PlanRepository
from mealkit.logic.cooking.deduction import plan_and_maybe_commit

logger = logging.getLogger(__name__)


class CookService:
    def __init__(self, pantry_repo: PantryRepository, plan_repo: PlanRepository,
                 history: CookingHistoryRecorder, bus: Optional[EventBus] = None):
        self.pantry_repo = pantry_repo
        self.plan_repo = plan_repo
        self.history = history
        self.bus = bus if bus is not None else GLOBAL_EVENT_BUS

    async def mark_recipe_as_cooked(self, day: str, meal: str, force_deduct: bool = False,
                                    rating: Optional[int] = None, notes: str = "",
                                    check_only: bool = False, week: Optional[int] = None,
                                    year: Optional[int] = None) -> Dict[str, Any]:
        """Cook the recipe planned for (day, meal).

        Raises StalePantryError when the pantry changed between load and save;
        nothing else has been written at that point, so the caller can retry.
        """
        if rating is not None and not MIN_RATING <= rating <= MAX_RATING:
            raise ValueError(f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}")

        plan = await self.plan_repo.get_week_plan(week, year)
        recipe = plan.get_slot(day, meal)
        if recipe is None:
            return {"success": False, "can_proceed": False, "error": "No recipe found for this meal slot."}

        pantry = await self.pantry_repo.load()
        expected_version = pantry.version
        result = plan_and_maybe_commit(
            recipe, pantry, force_deduct=force_deduct, check_only=check_only,
            already_cooked=plan.is_cooked(day, meal),
        )
        response = result.to_dict()
        response.update({"day": day, "meal": meal})
        if not result.committed:
            return response

        if result.deductions:
            response["pantry_version"] = await self.pantry_repo.save(pantry, expected_version=expected_version)

        plan.mark_cooked(day, meal)
        await self.plan_repo.save_week_plan(plan)

        try:
            await self.history.record(recipe.identity, recipe.name, rating, notes)
            response["history_recorded"] = True
        except Exception as e:
            logger.error(f"Cooking history not recorded for {recipe.name}: {e}")
            response["history_recorded"] = False

        pantry.set_event_bus(self.bus)
        for item in result.removed_items:
            pantry.notify_depleted(item)
        for item in result.updated_items:
            pantry.notify_stock(item)
        publish_recipe_cooked(recipe, day, meal, forced=force_deduct, bus=self.bus)
        logger.info(f"{recipe.name} cooked ({day} {meal})")
        return response
