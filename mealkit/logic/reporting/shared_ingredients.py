"""Shared-ingredient analysis for a weekly plan.

An ingredient is shared when at least two distinct recipes in the plan use
it. The same recipe planned on several days counts once.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from mealkit.domain.Ingredient import parse_quantity
from mealkit.domain.Plan import Plan
from mealkit.logic.ingredients.normalizer import normalize
from mealkit.logic.units.converter import normalize_unit
from mealkit.logic.units.formatter import format_quantity
from mealkit.utilities.config import TOP_SHARED_INGREDIENTS

__all__ = ["SharedIngredient", "SharedIngredientsReport", "analyze", "total_unique_ingredients"]

MULTIPLE_UNITS = "Multiple units"


@dataclass
class SharedIngredient:
    name: str
    normalized_name: str
    recipes: List[str] = field(default_factory=list)
    total_quantity_by_unit: Dict[str, float] = field(default_factory=dict)

    @property
    def recipe_count(self) -> int:
        return len(self.recipes)

    @property
    def has_multiple_units(self) -> bool:
        return len(self.total_quantity_by_unit) > 1

    @property
    def total_quantity(self) -> Optional[float]:
        if self.has_multiple_units or not self.total_quantity_by_unit:
            return None
        return next(iter(self.total_quantity_by_unit.values()))

    @property
    def unit(self) -> str:
        if self.has_multiple_units:
            return MULTIPLE_UNITS
        return next(iter(self.total_quantity_by_unit), "")

    @property
    def quantity_display(self) -> str:
        return ", ".join(format_quantity(qty, unit) for unit, qty in self.total_quantity_by_unit.items())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "normalized_name": self.normalized_name,
            "recipe_count": self.recipe_count,
            "recipes": list(self.recipes),
            "total_quantity_by_unit": dict(self.total_quantity_by_unit),
            "total_quantity": self.total_quantity,
            "unit": self.unit,
            "quantity_display": self.quantity_display,
            "has_multiple_units": self.has_multiple_units,
        }


@dataclass
class SharedIngredientsReport:
    total_recipes: int = 0
    top_shared_ingredients: List[SharedIngredient] = field(default_factory=list)
    all_shared_ingredients: List[SharedIngredient] = field(default_factory=list)

    @property
    def total_shared_ingredients(self) -> int:
        return len(self.all_shared_ingredients)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_recipes": self.total_recipes,
            "total_shared_ingredients": self.total_shared_ingredients,
            "top_shared_ingredients": [s.to_dict() for s in self.top_shared_ingredients],
            "all_shared_ingredients": [s.to_dict() for s in self.all_shared_ingredients],
        }


def analyze(week_plan: Optional[Plan], top_n: int = TOP_SHARED_INGREDIENTS) -> SharedIngredientsReport:
    if week_plan is None:
        return SharedIngredientsReport()

    usage: Dict[str, SharedIngredient] = {}
    seen: Dict[str, set] = {}
    recipe_ids = set()
    for _, _, recipe in week_plan.filled_slots():
        rid = recipe.identity
        recipe_ids.add(rid)
        for ing in recipe.ingredients:
            key = normalize(ing.name)
            if not key:
                continue
            entry = usage.setdefault(key, SharedIngredient(name=ing.name, normalized_name=key))
            if rid in seen.setdefault(key, set()):
                continue
            seen[key].add(rid)
            entry.recipes.append(recipe.name)
            unit = normalize_unit(ing.unit)
            qty = parse_quantity(ing.quantity, default=0.0)
            entry.total_quantity_by_unit[unit] = entry.total_quantity_by_unit.get(unit, 0) + qty

    shared = [s for s in usage.values() if s.recipe_count >= 2]
    shared.sort(key=lambda s: (s.recipe_count, s.total_quantity or 0), reverse=True)
    return SharedIngredientsReport(
        total_recipes=len(recipe_ids),
        top_shared_ingredients=shared[:top_n],
        all_shared_ingredients=shared,
    )


def total_unique_ingredients(week_plan: Optional[Plan]) -> int:
    if week_plan is None:
        return 0
    keys = {normalize(ing.name) for r in week_plan.recipes() for ing in r.ingredients}
    keys.discard("")
    return len(keys)
