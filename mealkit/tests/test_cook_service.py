import unittest

from mealkit.domain.Ingredient import Ingredient
from mealkit.domain.Pantry import Pantry, PantryItem
from mealkit.domain.Recipe import Recipe
from mealkit.events.Event_Bus import EventBus, PANTRY_ITEM_DEPLETED, PANTRY_LOW_STOCK, RECIPE_COOKED
from mealkit.infra.document_store import InMemoryDocumentStore, PersistenceError, StalePantryError
from mealkit.infra.History_Repository import CookingHistoryRecorder
from mealkit.infra.Pantry_Repository import PantryRepository
from mealkit.infra.Plan_Repository import PlanRepository
from mealkit.logic.cooking.service import CookService

WEEK, YEAR = 20, 2025


class RacingPantryRepository(PantryRepository):
    """Another writer saves the pantry right after every load."""

    async def load(self):
        pantry = await super().load()
        await self.save(await super().load())
        return pantry


class FailingHistory(CookingHistoryRecorder):
    async def record(self, *args, **kwargs):
        raise PersistenceError("history store offline")


class TestCookService(unittest.IsolatedAsyncioTestCase):

    async def asyncSetUp(self):
        self.store = InMemoryDocumentStore()
        self.pantry_repo = PantryRepository(self.store)
        self.plans = PlanRepository(self.store)
        self.history = CookingHistoryRecorder(self.store)
        self.bus = EventBus()
        self.events = []
        for name in (PANTRY_LOW_STOCK, PANTRY_ITEM_DEPLETED, RECIPE_COOKED):
            self.bus.subscribe(name, lambda event, payload: self.events.append((event, payload)))

        await self.pantry_repo.save(Pantry([
            PantryItem("flour", 2, "cup", id="flour"),
            PantryItem("eggs", 2, "piece", id="eggs"),
        ]))
        self.recipe = Recipe(name="Pancakes", id="pancakes", ingredients=[
            Ingredient("flour", 1, "cup"), Ingredient("eggs", 2, "pieces"),
        ])
        plan = await self.plans.get_week_plan(WEEK, YEAR)
        plan.set_slot("monday", "breakfast", self.recipe)
        await self.plans.save_week_plan(plan)

    def _service(self, pantry_repo=None, history=None):
        return CookService(pantry_repo or self.pantry_repo, self.plans, history or self.history, bus=self.bus)

    async def _cook(self, service=None, **kwargs):
        service = service or self._service()
        return await service.mark_recipe_as_cooked("monday", "breakfast", week=WEEK, year=YEAR, **kwargs)

    async def test_cook_deducts_marks_and_records(self):
        result = await self._cook(rating=5, notes="great")
        self.assertTrue(result["success"])
        self.assertTrue(result["committed"])
        self.assertTrue(result["history_recorded"])
        self.assertEqual(result["pantry_version"], 2)
        self.assertEqual((result["day"], result["meal"]), ("monday", "breakfast"))

        pantry = await self.pantry_repo.load()
        self.assertEqual([(i.id, i.quantity) for i in pantry.get_items()], [("flour", 1)])
        self.assertTrue((await self.plans.get_week_plan(WEEK, YEAR)).is_cooked("monday", "breakfast"))
        record = await self.history.read("pancakes")
        self.assertEqual((record["cooked_count"], record["average_rating"]), (1, 5))

        kinds = [event for event, _ in self.events]
        self.assertEqual(kinds, [PANTRY_ITEM_DEPLETED, RECIPE_COOKED])
        self.assertEqual(self.events[0][1]["item"].name, "eggs")

    async def test_second_cook_is_refused(self):
        await self._cook()
        result = await self._cook()
        self.assertTrue(result["already_cooked"])
        self.assertFalse(result["can_proceed"])
        self.assertEqual((await self.history.read("pancakes"))["cooked_count"], 1)

    async def test_check_only_changes_nothing(self):
        result = await self._cook(check_only=True)
        self.assertTrue(result["can_proceed"])
        self.assertFalse(result["committed"])
        self.assertEqual(len(result["deductions"]), 2)
        self.assertEqual((await self.pantry_repo.load()).version, 1)
        self.assertFalse((await self.plans.get_week_plan(WEEK, YEAR)).is_cooked("monday", "breakfast"))
        self.assertIsNone(await self.history.read("pancakes"))
        self.assertEqual(self.events, [])

    async def test_insufficient_without_force(self):
        self.recipe.ingredients.append(Ingredient("milk", 1, "cup"))
        plan = await self.plans.get_week_plan(WEEK, YEAR)
        plan.set_slot("monday", "breakfast", self.recipe)
        await self.plans.save_week_plan(plan)

        result = await self._cook()
        self.assertFalse(result["can_proceed"])
        self.assertEqual([i["name"] for i in result["insufficient_items"]], ["milk"])
        self.assertEqual(len(await self.pantry_repo.load()), 2)

        forced = await self._cook(force_deduct=True)
        self.assertTrue(forced["committed"])
        self.assertEqual(len(await self.pantry_repo.load()), 1)
        self.assertTrue(self.events[-1][1]["forced"])

    async def test_empty_slot(self):
        result = await self._service().mark_recipe_as_cooked("sunday", "dinner", week=WEEK, year=YEAR)
        self.assertFalse(result["success"])
        self.assertEqual(result["error"], "No recipe found for this meal slot.")

    async def test_invalid_rating(self):
        with self.assertRaises(ValueError):
            await self._cook(rating=0)

    async def test_stale_pantry_aborts_before_any_write(self):
        with self.assertRaises(StalePantryError):
            await self._cook(service=self._service(pantry_repo=RacingPantryRepository(self.store)))
        self.assertFalse((await self.plans.get_week_plan(WEEK, YEAR)).is_cooked("monday", "breakfast"))
        self.assertEqual(len(await self.pantry_repo.load()), 2)
        self.assertIsNone(await self.history.read("pancakes"))

    async def test_history_failure_keeps_deduction(self):
        service = self._service(history=FailingHistory(self.store))
        with self.assertLogs('mealkit.logic.cooking.service', level='ERROR'):
            result = await self._cook(service=service, rating=4)
        self.assertTrue(result["committed"])
        self.assertFalse(result["history_recorded"])
        self.assertEqual(len(await self.pantry_repo.load()), 1)
        self.assertTrue((await self.plans.get_week_plan(WEEK, YEAR)).is_cooked("monday", "breakfast"))

    async def test_low_stock_event(self):
        self.recipe.ingredients = [Ingredient("flour", 1.75, "cup")]
        plan = await self.plans.get_week_plan(WEEK, YEAR)
        plan.set_slot("monday", "breakfast", self.recipe)
        await self.plans.save_week_plan(plan)

        await self._cook()
        event, payload = self.events[0]
        self.assertEqual(event, PANTRY_LOW_STOCK)
        self.assertEqual(payload["remaining"], 0.25)
        self.assertEqual(payload["threshold"], 0.5)


if __name__ == '__main__':
    unittest.main()
