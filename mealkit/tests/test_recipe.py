import unittest
from mealkit.domain.Ingredient import Ingredient
from mealkit.domain.Plan import Plan
from mealkit.domain.Recipe import Recipe


class TestRecipe(unittest.TestCase):

    def setUp(self):
        self.recipe_pancakes = Recipe(
            name="Pancakes",
            servings=4,
            ingredients=[
                Ingredient("Flour", 200, "g"),
                Ingredient("Milk", 300, "ml"),
                Ingredient("Eggs", 2, "piece")
            ],
            steps=["Mix ingredients", "Cook on skillet"],
            tags=["breakfast", "vegetarian"],
            id="pancakes",
        )

    def test_round_trip(self):
        restored = Recipe.from_dict(self.recipe_pancakes.to_dict())
        self.assertEqual(restored.name, "Pancakes")
        self.assertEqual(restored.id, "pancakes")
        self.assertEqual(restored.ingredients, self.recipe_pancakes.ingredients)

    def test_identity_falls_back_to_name(self):
        self.assertEqual(self.recipe_pancakes.identity, "pancakes")
        self.assertEqual(Recipe(name="Omelette").identity, "Omelette")


class TestPlan(unittest.TestCase):

    def setUp(self):
        self.plan = Plan(40, 2025)
        self.recipe = Recipe(name="Pancakes", ingredients=[Ingredient("Flour", 1, "cup")], id="pancakes")

    def test_grid_has_every_day_and_meal(self):
        self.assertEqual(len(self.plan.meals), 7)
        self.assertTrue(all(set(m) == {"breakfast", "lunch", "dinner"} for m in self.plan.meals.values()))
        self.assertEqual(list(self.plan.filled_slots()), [])

    def test_set_slot_accepts_any_case(self):
        self.plan.set_slot("Monday", "Breakfast", self.recipe)
        self.assertIs(self.plan.get_slot("monday", "breakfast"), self.recipe)

    def test_unknown_slot_rejected(self):
        with self.assertRaises(ValueError):
            self.plan.set_slot("funday", "dinner", self.recipe)
        with self.assertRaises(ValueError):
            self.plan.get_slot("monday", "brunch")

    def test_cooked_marking(self):
        self.plan.set_slot("monday", "dinner", self.recipe)
        self.plan.mark_cooked("monday", "dinner")
        self.plan.mark_cooked("monday", "dinner")
        self.assertTrue(self.plan.is_cooked("monday", "dinner"))
        self.assertEqual(self.plan.cooked, {"monday-dinner"})
        self.plan.unmark_cooked("monday", "dinner")
        self.assertFalse(self.plan.is_cooked("monday", "dinner"))

    def test_replacing_recipe_clears_cooked(self):
        self.plan.set_slot("monday", "dinner", self.recipe)
        self.plan.mark_cooked("monday", "dinner")
        self.plan.set_slot("monday", "dinner", Recipe(name="Soup"))
        self.assertFalse(self.plan.is_cooked("monday", "dinner"))

    def test_round_trip_keeps_cooked_slots(self):
        self.plan.set_slot("friday", "lunch", self.recipe)
        self.plan.mark_cooked("friday", "lunch")
        restored = Plan.from_dict(self.plan.to_dict())
        self.assertEqual((restored.week, restored.year), (40, 2025))
        self.assertEqual(restored.get_slot("friday", "lunch").name, "Pancakes")
        self.assertTrue(restored.is_cooked("friday", "lunch"))


if __name__ == '__main__':
    unittest.main()
