import unittest
from mealkit.domain.Ingredient import Ingredient
from mealkit.domain.Pantry import Pantry, PantryItem
from mealkit.domain.Recipe import Recipe
from mealkit.logic.pantry.matcher import score_recipe, match_recipes, compare_shopping_list_with_pantry


def _pantry(*items):
    return Pantry([PantryItem(name, qty, unit) for name, qty, unit in items])


def _recipe(name, *ingredients):
    return Recipe(name=name, ingredients=[Ingredient(n, q, u) for n, q, u in ingredients], id=name.lower())


class TestScoreRecipe(unittest.TestCase):

    def setUp(self):
        self.pantry = _pantry(("flour", 2, "cup"), ("Milk", 0.5, "cups"), ("sugar", 3, "piece"))

    def test_matched_partial_missing(self):
        recipe = _recipe("Pancakes", ("Flour", 1.5, "cup"), ("Eggs", 2, "piece"), ("milk", 1, "cup"))
        result = score_recipe(self.pantry, recipe)
        self.assertEqual(result.matched_ingredients, ["flour"])
        self.assertEqual(result.missing_ingredients, ["egg"])
        self.assertEqual(len(result.partial_matches), 1)
        partial = result.partial_matches[0]
        self.assertEqual((partial.name, partial.display_name, partial.match_percent), ("milk", "milk", 50))
        self.assertEqual(result.matched_count, 1)
        self.assertEqual(result.total_ingredients, 3)
        self.assertEqual(result.match_percentage, 33)
        self.assertFalse(result.can_make)

    def test_partial_percent_is_floored(self):
        pantry = _pantry(("rice", 2, "cup"))
        result = score_recipe(pantry, _recipe("Rice", ("rice", 3, "cup")))
        self.assertEqual(result.partial_matches[0].match_percent, 66)
        self.assertEqual(result.match_percentage, 0)

    def test_converted_units_count_as_match(self):
        pantry = _pantry(("milk", 16, "oz"))
        result = score_recipe(pantry, _recipe("Latte", ("milk", 1, "cup")))
        self.assertEqual(result.matched_ingredients, ["milk"])
        self.assertTrue(result.can_make)
        self.assertTrue(result.to_dict()["can_make"])

    def test_incompatible_units_are_mixed_partial(self):
        result = score_recipe(self.pantry, _recipe("Cake", ("sugar", 1, "cup")))
        partial = result.partial_matches[0]
        self.assertEqual(partial.unit, "mixed")
        self.assertIsNone(partial.match_percent)
        self.assertEqual(partial.have, "3 piece")

    def test_zero_stock_is_missing(self):
        pantry = _pantry(("flour", 0, "cup"))
        result = score_recipe(pantry, _recipe("Bread", ("flour", 1, "cup")))
        self.assertEqual(result.missing_ingredients, ["flour"])

    def test_recipe_without_ingredients_scores_zero(self):
        result = score_recipe(self.pantry, _recipe("Water"))
        self.assertEqual(result.match_percentage, 0)
        self.assertFalse(result.can_make)

    def test_match_recipes_sorts_stably(self):
        recipes = [
            _recipe("Omelette", ("eggs", 3, "piece")),
            _recipe("Flatbread", ("flour", 1, "cup")),
            _recipe("Roux", ("flour", 0.5, "cup")),
        ]
        ordered = [m.recipe.name for m in match_recipes(self.pantry, recipes)]
        self.assertEqual(ordered, ["Flatbread", "Roux", "Omelette"])


class TestCompareShoppingList(unittest.TestCase):

    def test_buckets(self):
        pantry = _pantry(("flour", 2, "cup"), ("milk", 1, "cup"), ("eggs", 6, "piece"))
        items = [
            {"name": "flour", "quantity": 1, "unit": "cup"},
            {"name": "milk", "quantity": 2, "unit": "cup"},
            {"name": "basil", "quantity": 1, "unit": "tbsp"},
            {"name": "eggs", "quantity": 1, "unit": "cup"},
        ]
        report = compare_shopping_list_with_pantry(items, pantry)
        self.assertEqual([i["name"] for i in report["already_have"]], ["flour"])
        self.assertEqual([i["name"] for i in report["need_to_buy"]], ["basil"])
        need_more = {i["name"]: i for i in report["need_more"]}
        self.assertEqual(need_more["milk"]["need_qty"], 1.0)
        self.assertIn("cannot convert", need_more["eggs"]["message"])

    def test_empty_pantry_buys_everything(self):
        report = compare_shopping_list_with_pantry([{"name": "flour", "quantity": 1, "unit": "cup"}], Pantry())
        self.assertEqual(len(report["need_to_buy"]), 1)


class TestStoredQuantityText(unittest.TestCase):

    def _stored(self, quantity):
        return Recipe.from_dict({"name": "Bake", "ingredients": [{"name": "flour", "quantity": quantity, "unit": "cup"}]})

    def test_mixed_number_is_compared_with_stock(self):
        result = score_recipe(_pantry(("flour", 0.1, "cup")), self._stored("1 1/2"))
        self.assertEqual(result.match_percentage, 0)
        self.assertEqual(result.partial_matches[0].needs, 1.5)
        self.assertEqual(result.partial_matches[0].match_percent, 6)

    def test_fraction_glyph_and_slash(self):
        pantry = _pantry(("flour", 2, "cup"))
        self.assertEqual(score_recipe(pantry, self._stored("½")).match_percentage, 100)
        self.assertEqual(score_recipe(pantry, self._stored("1/2")).match_percentage, 100)
        self.assertEqual(score_recipe(pantry, self._stored("3")).match_percentage, 0)

    def test_unreadable_amount_is_never_a_match(self):
        result = score_recipe(_pantry(("flour", 2, "cup")), self._stored("a lot"))
        self.assertEqual(result.match_percentage, 0)
        partial = result.partial_matches[0]
        self.assertEqual((partial.unit, partial.match_percent, partial.needs), ("mixed", None, "a lot cup"))

    def test_unreadable_shopping_line(self):
        report = compare_shopping_list_with_pantry(
            [{"name": "flour", "quantity": "some", "unit": "cup"}], _pantry(("flour", 2, "cup")))
        self.assertEqual(report["already_have"], [])
        self.assertIn("unknown amount", report["need_more"][0]["message"])


if __name__ == '__main__':
    unittest.main()
