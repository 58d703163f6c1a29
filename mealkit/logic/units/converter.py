"""Unit conversion for cooking quantities.

Conversions are defined within a category (volume, mass, count). Volume and
mass convert into each other only for ingredients with a known density
(grams per US cup). Anything else is incompatible and yields None; callers
treat None as "cannot compare", never as zero.
"""
from __future__ import annotations
import logging
import math
from typing import Dict, Optional

logger = logging.getLogger(__name__)

__all__ = [
    "convert", "normalize_unit", "unit_category", "are_units_compatible",
    "conversion_message", "ingredient_density",
    "VOLUME", "MASS", "COUNT", "UNSPECIFIED", "UNKNOWN", "PORTION_UNITS",
    "VOLUME_TO_ML", "MASS_TO_GRAMS", "INGREDIENT_DENSITIES",
]

VOLUME = "volume"
MASS = "mass"
COUNT = "count"
UNSPECIFIED = "unspecified"
UNKNOWN = "unknown"

# Volume: base = ml
VOLUME_TO_ML: Dict[str, float] = {
    'ml': 1,
    'l': 1000,
    'cup': 236.588,
    'tbsp': 14.787,
    'tsp': 4.929,
    'fl oz': 29.5735,  # cup = 8 fl oz
    'pint': 473.176,
    'quart': 946.353,
    'gallon': 3785.41,
}

# Mass: base = g. A can is the standard 15 oz can, a stick is a 4 oz butter stick.
MASS_TO_GRAMS: Dict[str, float] = {
    'g': 1,
    'kg': 1000,
    'mg': 0.001,
    'lb': 453.592,
    'oz': 28.3495,
    'can': 425.243,
    'stick': 113.398,
}

# COUNT holds piece-equivalents only ("whole", "each", "clove" fold into piece).
# A portion unit is a category of its own: a bunch only compares with a bunch.
COUNT_UNITS = {'piece'}
PORTION_UNITS = {'bunch', 'head', 'bulb', 'stalk', 'sprig', 'slice', 'package', 'pinch', 'dash'}

_UNIT_ALIASES: Dict[str, str] = {
    'milliliter': 'ml', 'milliliters': 'ml', 'millilitre': 'ml', 'millilitres': 'ml',
    'liter': 'l', 'liters': 'l', 'litre': 'l', 'litres': 'l',
    'c': 'cup', 'cups': 'cup',
    'tablespoon': 'tbsp', 'tablespoons': 'tbsp', 'tbs': 'tbsp', 'tb': 'tbsp',
    'teaspoon': 'tsp', 'teaspoons': 'tsp', 'ts': 'tsp',
    'fluid ounce': 'fl oz', 'fluid ounces': 'fl oz', 'fl. oz': 'fl oz', 'floz': 'fl oz',
    'pints': 'pint', 'quarts': 'quart', 'qt': 'quart', 'gallons': 'gallon', 'gal': 'gallon',
    'gram': 'g', 'grams': 'g', 'gr': 'g',
    'kilogram': 'kg', 'kilograms': 'kg', 'kgs': 'kg',
    'milligram': 'mg', 'milligrams': 'mg',
    'pound': 'lb', 'pounds': 'lb', 'lbs': 'lb',
    'ounce': 'oz', 'ounces': 'oz',
    'cans': 'can', 'sticks': 'stick',
    'pieces': 'piece', 'pcs': 'piece', 'pc': 'piece', 'whole': 'piece', 'unit': 'piece',
    'units': 'piece', 'item': 'piece', 'items': 'piece', 'each': 'piece', 'ea': 'piece',
    'count': 'piece', 'serving': 'piece', 'servings': 'piece', 'portion': 'piece',
    'clove': 'piece', 'cloves': 'piece', 'egg': 'piece', 'eggs': 'piece',
    'bunches': 'bunch', 'heads': 'head', 'bulbs': 'bulb', 'stalks': 'stalk',
    'sprigs': 'sprig', 'slices': 'slice', 'packages': 'package', 'pkg': 'package',
    'pinches': 'pinch', 'dashes': 'dash',
}

# Grams per US cup
INGREDIENT_DENSITIES: Dict[str, float] = {
    # Flours & grains
    'flour': 120,
    'all-purpose flour': 120,
    'bread flour': 127,
    'whole wheat flour': 120,
    'rice': 185,
    'brown rice': 195,
    'pasta': 100,
    'quinoa': 170,
    'oats': 90,
    # Sugars & sweeteners
    'sugar': 200,
    'brown sugar': 220,
    'powdered sugar': 120,
    'honey': 340,
    'maple syrup': 322,
    # Fats & dairy
    'butter': 227,
    'oil': 218,
    'vegetable oil': 218,
    'olive oil': 216,
    'milk': 244,
    'cream': 240,
    'heavy cream': 240,
    'sour cream': 230,
    'yogurt': 245,
    'cheese': 113,
    'parmesan': 100,
    # Vegetables
    'onion': 160,
    'garlic': 136,
    'tomato': 180,
    'carrot': 128,
    'bell pepper': 149,
    'potato': 150,
    # Proteins
    'chicken': 140,
    'ground beef': 225,
    'beef': 225,
    # Nuts
    'almond': 143,
    'walnut': 117,
    'peanut': 146,
    # Liquids
    'water': 237,
    'broth': 240,
    'stock': 240,
    # Canned goods
    'crushed tomato': 243,
    'tomato sauce': 245,
    'bean': 256,
    'black bean': 256,
    'chickpea': 240,
    'kidney bean': 256,
}


def normalize_unit(unit) -> str:
    """Lower-case, trim and fold plural/alternate spellings ('Cups' -> 'cup')."""
    if not isinstance(unit, str):
        return ''
    u = ' '.join(unit.strip().lower().split())
    if u in _UNIT_ALIASES:
        return _UNIT_ALIASES[u]
    if u.endswith('.'):
        u = u.rstrip('.')
        return _UNIT_ALIASES.get(u, u)
    return u


def unit_category(unit: str) -> str:
    u = normalize_unit(unit)
    if u == '':
        return UNSPECIFIED
    if u in VOLUME_TO_ML:
        return VOLUME
    if u in MASS_TO_GRAMS:
        return MASS
    if u in COUNT_UNITS:
        return COUNT
    if u in PORTION_UNITS:
        return u
    return UNKNOWN


def ingredient_density(ingredient_name: Optional[str]) -> Optional[float]:
    """Grams per cup for an ingredient, matched exactly, else by the longest contained key."""
    if not isinstance(ingredient_name, str) or not ingredient_name.strip():
        return None
    name = ' '.join(ingredient_name.strip().lower().split())
    if name in INGREDIENT_DENSITIES:
        return INGREDIENT_DENSITIES[name]
    best_key = None
    for key in INGREDIENT_DENSITIES:
        if key in name or name in key:
            if best_key is None or len(key) > len(best_key):
                best_key = key
    return INGREDIENT_DENSITIES[best_key] if best_key else None


def _valid_quantity(quantity) -> bool:
    if isinstance(quantity, bool) or not isinstance(quantity, (int, float)):
        return False
    return math.isfinite(quantity) and quantity >= 0


def convert(quantity, from_unit, to_unit, ingredient_name: Optional[str] = None) -> Optional[float]:
    """Convert quantity between units; None when the units cannot be compared.

    convert(2, 'cups', 'ml')              -> 473.176
    convert(1, 'cup', 'g', 'flour')       -> 120.0
    convert(1, 'cup', 'piece', 'flour')   -> None
    """
    if not _valid_quantity(quantity):
        return None
    src = normalize_unit(from_unit)
    dst = normalize_unit(to_unit)
    if src == dst:
        return float(quantity)
    if src == '' or dst == '':
        return None

    src_cat = unit_category(src)
    dst_cat = unit_category(dst)

    if src_cat == dst_cat == VOLUME:
        return quantity * VOLUME_TO_ML[src] / VOLUME_TO_ML[dst]
    if src_cat == dst_cat == MASS:
        return quantity * MASS_TO_GRAMS[src] / MASS_TO_GRAMS[dst]

    if {src_cat, dst_cat} == {VOLUME, MASS}:
        density = ingredient_density(ingredient_name)
        if density is None:
            logger.debug(f"Cannot convert {src} to {dst} for '{ingredient_name}': density unknown")
            return None
        cup_ml = VOLUME_TO_ML['cup']
        if src_cat == VOLUME:
            cups = quantity * VOLUME_TO_ML[src] / cup_ml
            return cups * density / MASS_TO_GRAMS[dst]
        cups = quantity * MASS_TO_GRAMS[src] / density
        return cups * cup_ml / VOLUME_TO_ML[dst]

    return None


def are_units_compatible(unit_a: str, unit_b: str, ingredient_name: Optional[str] = None) -> bool:
    return convert(1, unit_a, unit_b, ingredient_name) is not None


def conversion_message(from_unit: str, to_unit: str, ingredient_name: Optional[str] = None) -> str:
    """Human-readable explanation of whether and why two units convert."""
    src = normalize_unit(from_unit)
    dst = normalize_unit(to_unit)
    if src == dst:
        return 'Units are the same'
    src_cat, dst_cat = unit_category(src), unit_category(dst)
    if UNKNOWN in (src_cat, dst_cat):
        return f"Unknown unit: {from_unit if src_cat == UNKNOWN else to_unit}"
    if UNSPECIFIED in (src_cat, dst_cat):
        return f"Cannot compare a quantity without a unit to {to_unit if src_cat == UNSPECIFIED else from_unit}"
    if {src_cat, dst_cat} == {VOLUME, MASS}:
        if ingredient_density(ingredient_name) is None:
            return f"Cannot convert {from_unit} to {to_unit}: ingredient density unknown for \"{ingredient_name}\""
        return f"{from_unit} converts to {to_unit} using the density of {ingredient_name}"
    if src in PORTION_UNITS or dst in PORTION_UNITS:
        portion = src if src in PORTION_UNITS else dst
        return f"Cannot convert {from_unit} to {to_unit}: a {portion} only compares with another {portion}"
    if COUNT in (src_cat, dst_cat):
        other = dst_cat if src_cat == COUNT else src_cat
        return f"Cannot convert between count-based units and {other} units"
    return f"{from_unit} converts to {to_unit}"
