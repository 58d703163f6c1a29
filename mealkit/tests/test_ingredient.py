import unittest
from mealkit.domain.Ingredient import Ingredient, parse_quantity


class TestIngredient(unittest.TestCase):

    def test_from_dict_accepts_legacy_quantity_key(self):
        ingredient = Ingredient.from_dict({"name": "Sugar", "default_quantity": "100", "unit": "g"})
        self.assertEqual(ingredient.quantity, 100.0)
        self.assertEqual(ingredient.to_dict(), {"name": "Sugar", "quantity": 100.0, "unit": "g"})

    def test_str_uses_kitchen_fractions(self):
        self.assertEqual(str(Ingredient("Flour", 1.5, "cup")), "Flour - 1½ cup")

    def test_parse_quantity(self):
        self.assertEqual(parse_quantity("2.5"), 2.5)
        self.assertEqual(parse_quantity(3), 3.0)
        self.assertIsNone(parse_quantity(None))
        self.assertIsNone(parse_quantity(True))
        self.assertEqual(parse_quantity(None, default=0.0), 0.0)

    def test_parse_fractions(self):
        self.assertEqual(parse_quantity("1/2"), 0.5)
        self.assertEqual(parse_quantity("1 1/2"), 1.5)
        self.assertEqual(parse_quantity(" 3 / 4 "), 0.75)
        self.assertEqual(parse_quantity("11/2"), 5.5)
        self.assertEqual(parse_quantity("½"), 0.5)
        self.assertEqual(parse_quantity("1½"), 1.5)
        self.assertAlmostEqual(parse_quantity("2 ⅓"), 7 / 3)

    def test_unreadable_quantity(self):
        for text in ("a lot", "1/0", "", "to taste", "nan"):
            self.assertIsNone(parse_quantity(text), text)
        self.assertEqual(parse_quantity("a lot", default=0.0), 0.0)

    def test_from_dict_keeps_unreadable_text(self):
        self.assertEqual(Ingredient.from_dict({"name": "Flour", "quantity": "1 1/2", "unit": "cup"}).quantity, 1.5)
        self.assertEqual(Ingredient.from_dict({"name": "Salt", "quantity": "a pinch"}).quantity, "a pinch")


if __name__ == '__main__':
    unittest.main()
