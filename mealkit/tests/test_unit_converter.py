import unittest
from mealkit.logic.units.converter import (
    convert, normalize_unit, unit_category, are_units_compatible, conversion_message,
    ingredient_density, VOLUME_TO_ML, MASS_TO_GRAMS, VOLUME, MASS, COUNT, UNSPECIFIED, UNKNOWN, PORTION_UNITS,
)


class TestUnitConverter(unittest.TestCase):

    def test_normalize_unit(self):
        self.assertEqual(normalize_unit(" Cups "), "cup")
        self.assertEqual(normalize_unit("Tablespoons"), "tbsp")
        self.assertEqual(normalize_unit("lbs"), "lb")
        self.assertEqual(normalize_unit("each"), "piece")
        self.assertEqual(normalize_unit("tsp."), "tsp")
        self.assertEqual(normalize_unit(None), "")

    def test_categories(self):
        self.assertEqual(unit_category("cups"), VOLUME)
        self.assertEqual(unit_category("oz"), MASS)
        self.assertEqual(unit_category("whole"), COUNT)
        self.assertEqual(unit_category(""), UNSPECIFIED)
        self.assertEqual(unit_category("furlong"), UNKNOWN)

    def test_portion_units_are_their_own_category(self):
        self.assertEqual(unit_category("bunches"), "bunch")
        self.assertEqual(unit_category("head"), "head")
        self.assertNotIn(COUNT, {unit_category(u) for u in PORTION_UNITS})
        self.assertEqual(convert(2, "bunches", "bunch"), 2.0)
        self.assertIsNone(convert(1, "bunch", "head"))
        self.assertFalse(are_units_compatible("slice", "piece"))
        self.assertIn("only compares with another bunch", conversion_message("bunch", "head"))

    def test_cup_is_eight_fluid_ounces(self):
        self.assertAlmostEqual(convert(1, "cup", "fl oz"), 8.0)
        self.assertAlmostEqual(convert(16, "fluid ounces", "cups"), 2.0)

    def test_same_category(self):
        self.assertAlmostEqual(convert(2, "cups", "ml"), 473.176)
        self.assertAlmostEqual(convert(1, "lb", "oz"), 16.0, places=3)
        self.assertAlmostEqual(convert(3, "tsp", "tbsp"), 1.0, places=2)
        self.assertEqual(convert(3, "whole", "each"), 3.0)

    def test_density_conversion(self):
        self.assertAlmostEqual(convert(1, "cup", "g", "flour"), 120.0)
        self.assertAlmostEqual(convert(240, "g", "cup", "all-purpose flour"), 2.0)
        self.assertAlmostEqual(convert(1, "cup", "oz", "milk"), 244 / 28.3495)

    def test_can_is_fifteen_ounces(self):
        self.assertAlmostEqual(convert(1, "can", "oz"), 15.0, places=3)

    def test_incompatible_units(self):
        self.assertIsNone(convert(1, "cup", "piece", "flour"))
        self.assertIsNone(convert(1, "cup", "g", "unobtainium"))
        self.assertIsNone(convert(1, "cup", "g"))
        self.assertIsNone(convert(1, "", "cup"))
        self.assertIsNone(convert(1, "bunch", "piece"))
        self.assertIsNone(convert(1, "furlong", "cup"))

    def test_invalid_quantity(self):
        self.assertIsNone(convert(-1, "cup", "ml"))
        self.assertIsNone(convert("two", "cup", "ml"))
        self.assertIsNone(convert(True, "cup", "ml"))
        self.assertIsNone(convert(float("nan"), "cup", "ml"))

    def test_round_trip(self):
        for table in (VOLUME_TO_ML, MASS_TO_GRAMS):
            for a in table:
                for b in table:
                    there = convert(3.7, a, b)
                    self.assertAlmostEqual(convert(there, b, a), 3.7, delta=1e-6, msg=f"{a} <-> {b}")
        there = convert(2.5, "cup", "oz", "milk")
        self.assertAlmostEqual(convert(there, "oz", "cup", "milk"), 2.5, delta=1e-6)

    def test_density_lookup_prefers_longest_key(self):
        self.assertEqual(ingredient_density("brown sugar"), 220)
        self.assertEqual(ingredient_density("light brown sugar"), 220)
        self.assertIsNone(ingredient_density(""))

    def test_helpers(self):
        self.assertTrue(are_units_compatible("tbsp", "tsp"))
        self.assertFalse(are_units_compatible("cup", "piece", "flour"))
        self.assertEqual(conversion_message("cup", "cups"), "Units are the same")
        self.assertIn("count", conversion_message("cup", "piece", "flour"))
        self.assertIn("density", conversion_message("cup", "g", "unobtainium"))


if __name__ == '__main__':
    unittest.main()
