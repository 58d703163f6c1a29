"""Recipe-to-pantry matching.

Scores how much of a recipe the pantry covers. Only fully covered
ingredients count toward a recipe's match percentage; partially covered
ones are reported with their own percentage.
"""
from __future__ import annotations
import math
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from mealkit.domain.Ingredient import parse_quantity
from mealkit.domain.Pantry import Pantry
from mealkit.domain.Recipe import Recipe
from mealkit.logic.ingredients.normalizer import normalize, find_best_match
from mealkit.logic.units.converter import convert, normalize_unit

__all__ = [
    "PartialMatch", "MatchResult", "RecipeMatch",
    "score_recipe", "match_recipes", "compare_shopping_list_with_pantry",
]

MIXED_UNITS = "mixed"


@dataclass
class PartialMatch:
    name: str
    display_name: str
    have: Any
    needs: Any
    unit: str
    match_percent: Optional[int]


@dataclass
class MatchResult:
    matched_ingredients: List[str] = field(default_factory=list)
    partial_matches: List[PartialMatch] = field(default_factory=list)
    missing_ingredients: List[str] = field(default_factory=list)
    match_percentage: int = 0
    matched_count: int = 0
    total_ingredients: int = 0

    @property
    def can_make(self) -> bool:
        return self.match_percentage == 100

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["can_make"] = self.can_make
        return data


@dataclass
class RecipeMatch:
    recipe: Recipe
    result: MatchResult

    def to_dict(self) -> Dict[str, Any]:
        data = self.result.to_dict()
        data["recipe_id"] = self.recipe.id
        data["recipe_name"] = self.recipe.name
        return data


def _partial_percent(have: float, need: float) -> int:
    if need <= 0:
        return 100
    return min(100, math.floor(have / need * 100))


def score_recipe(pantry: Pantry, recipe: Recipe) -> MatchResult:
    """Classify every recipe ingredient as matched, partial or missing against the pantry."""
    result = MatchResult(total_ingredients=len(recipe.ingredients))
    items = pantry.get_items()
    names = pantry.names()

    for ing in recipe.ingredients:
        key = normalize(ing.name)
        idx = find_best_match(ing.name, names)
        if idx is None:
            result.missing_ingredients.append(key)
            continue

        item = items[idx]
        need = parse_quantity(ing.quantity)
        recipe_unit = normalize_unit(ing.unit)
        pantry_unit = normalize_unit(item.unit)

        if need is None:
            # amount text such as "a handful" cannot be compared with stock
            result.partial_matches.append(PartialMatch(
                name=key,
                display_name=ing.name,
                have=f"{item.quantity} {pantry_unit}".strip(),
                needs=f"{ing.quantity} {recipe_unit}".strip(),
                unit=MIXED_UNITS,
                match_percent=None,
            ))
            continue

        if recipe_unit == pantry_unit:
            have = item.quantity
            shown_have = have
        else:
            have = convert(item.quantity, pantry_unit, recipe_unit, ing.name)
            if have is None:
                result.partial_matches.append(PartialMatch(
                    name=key,
                    display_name=ing.name,
                    have=f"{item.quantity} {pantry_unit}".strip(),
                    needs=f"{need} {recipe_unit}".strip(),
                    unit=MIXED_UNITS,
                    match_percent=None,
                ))
                continue
            shown_have = f"{item.quantity} {pantry_unit} (≈{have:.2f} {recipe_unit})"

        if have >= need:
            result.matched_count += 1
            result.matched_ingredients.append(key)
        elif have > 0:
            result.partial_matches.append(PartialMatch(
                name=key,
                display_name=ing.name,
                have=shown_have,
                needs=need,
                unit=recipe_unit,
                match_percent=_partial_percent(have, need),
            ))
        else:
            result.missing_ingredients.append(key)

    if result.total_ingredients:
        result.match_percentage = round(result.matched_count / result.total_ingredients * 100)
    return result


def match_recipes(pantry: Pantry, recipes: List[Recipe]) -> List[RecipeMatch]:
    """Score every recipe; best coverage first, ties keep their input order."""
    matches = [RecipeMatch(recipe, score_recipe(pantry, recipe)) for recipe in recipes]
    matches.sort(key=lambda m: m.result.match_percentage, reverse=True)
    return matches


def compare_shopping_list_with_pantry(items: List[Dict[str, Any]], pantry: Pantry) -> Dict[str, List[Dict[str, Any]]]:
    """Split shopping lines into already_have / need_more / need_to_buy against pantry stock."""
    report: Dict[str, List[Dict[str, Any]]] = {"already_have": [], "need_more": [], "need_to_buy": []}
    stock = pantry.get_items()
    names = pantry.names()

    for line in items or []:
        qty = parse_quantity(line.get("quantity"))
        unit = normalize_unit(line.get("unit", ""))
        idx = find_best_match(line.get("name", ""), names)
        if idx is None or stock[idx].quantity <= 0:
            report["need_to_buy"].append({**line, "status": "buy", "message": None})
            continue

        item = stock[idx]
        pantry_unit = normalize_unit(item.unit)
        base = {**line, "pantry_qty": item.quantity, "pantry_unit": pantry_unit}

        if qty is None:
            report["need_more"].append({
                **base, "status": "partial", "need_qty": None,
                "message": f"Have {item.quantity} {pantry_unit}, need {line.get('quantity')} {unit} (unknown amount)",
            })
            continue

        if unit == pantry_unit:
            have = item.quantity
            have_text = f"{item.quantity} {pantry_unit}".strip()
        else:
            have = convert(item.quantity, pantry_unit, unit, line.get("name"))
            if have is None:
                report["need_more"].append({
                    **base, "status": "partial", "need_qty": qty,
                    "message": f"Have {item.quantity} {pantry_unit}, need {qty} {unit} (cannot convert units)",
                })
                continue
            have_text = f"{item.quantity} {pantry_unit} ≈ {have:.2f} {unit}"

        if have >= qty:
            report["already_have"].append({
                **base, "status": "have",
                "message": f"Already have {have_text} (need {qty} {unit})",
            })
        else:
            need_qty = round(qty - have, 2)
            report["need_more"].append({
                **base, "status": "partial", "need_qty": need_qty,
                "message": f"Need {need_qty} more {unit} (you have {have_text})",
            })
    return report
