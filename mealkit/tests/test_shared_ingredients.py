import unittest
from mealkit.domain.Ingredient import Ingredient
from mealkit.domain.Plan import Plan
from mealkit.domain.Recipe import Recipe
from mealkit.logic.reporting.shared_ingredients import analyze, total_unique_ingredients


def _recipe(rid, name, *ingredients):
    return Recipe(name=name, ingredients=[Ingredient(n, q, u) for n, q, u in ingredients], id=rid)


class TestSharedIngredients(unittest.TestCase):

    def setUp(self):
        self.curry = _recipe("r1", "Chicken Curry", ("chicken", 1, "lb"), ("onion", 1, "piece"))
        self.tacos = _recipe("r2", "Chicken Tacos", ("Chicken", 2, "lbs"), ("onions", 2, "piece"))
        self.soup = _recipe("r3", "Chicken Soup", ("chicken", 0.5, "lb"), ("carrots", 2, "piece"))
        self.plan = Plan(40, 2025)
        self.plan.set_slot("monday", "dinner", self.curry)
        self.plan.set_slot("tuesday", "dinner", self.tacos)
        self.plan.set_slot("wednesday", "lunch", self.soup)
        self.plan.set_slot("thursday", "dinner", self.curry)

    def test_chicken_in_three_recipes(self):
        report = analyze(self.plan)
        self.assertEqual(report.total_recipes, 3)
        self.assertEqual(report.total_shared_ingredients, 2)
        chicken = report.top_shared_ingredients[0]
        self.assertEqual(chicken.normalized_name, "chicken")
        self.assertEqual(chicken.recipe_count, 3)
        self.assertFalse(chicken.has_multiple_units)
        self.assertEqual(chicken.total_quantity, 3.5)
        self.assertEqual(chicken.unit, "lb")
        self.assertEqual(chicken.quantity_display, "3½ lb")

    def test_repeated_recipe_counts_once(self):
        onion = analyze(self.plan).top_shared_ingredients[1]
        self.assertEqual(onion.recipes, ["Chicken Curry", "Chicken Tacos"])
        self.assertEqual(onion.total_quantity, 3)

    def test_mixed_units_have_no_numeric_total(self):
        self.soup.ingredients[0] = Ingredient("chicken", 200, "g")
        chicken = analyze(self.plan).top_shared_ingredients[0]
        self.assertEqual(chicken.recipe_count, 3)
        self.assertTrue(chicken.has_multiple_units)
        self.assertIsNone(chicken.total_quantity)
        self.assertEqual(chicken.unit, "Multiple units")
        self.assertEqual(chicken.total_quantity_by_unit, {"lb": 3.0, "g": 200.0})
        self.assertEqual(chicken.quantity_display, "3 lb, 200 g")

    def test_top_n_and_dict(self):
        report = analyze(self.plan, top_n=1)
        self.assertEqual(len(report.top_shared_ingredients), 1)
        data = report.to_dict()
        self.assertEqual(data["total_shared_ingredients"], 2)
        self.assertEqual(data["top_shared_ingredients"][0]["recipe_count"], 3)

    def test_unique_ingredients(self):
        self.assertEqual(total_unique_ingredients(self.plan), 3)

    def test_empty_plan(self):
        self.assertEqual(analyze(None).total_recipes, 0)
        self.assertEqual(analyze(Plan(40, 2025)).total_shared_ingredients, 0)


if __name__ == '__main__':
    unittest.main()
