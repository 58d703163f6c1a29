"""Shopping list builder.

Provides generate_shopping_list(plan): every ingredient of every planned
meal, consolidated by canonical ingredient and unit, grouped by grocery
category. Lines of the same ingredient in different units stay separate.
"""
from typing import Any, Dict, List, Optional

from mealkit.domain.Ingredient import parse_quantity
from mealkit.domain.Plan import Plan
from mealkit.logic.ingredients.normalizer import canonical_name
from mealkit.logic.units.converter import normalize_unit
from mealkit.logic.units.formatter import format_quantity, round_quantity
from mealkit.logic.shopping.categories import CATEGORIES, CATEGORY_LABELS, OTHER, categorize


def _combine(plan: Plan) -> List[Dict[str, Any]]:
    combined: Dict[str, Dict[str, Any]] = {}
    for _, _, recipe in plan.filled_slots():
        for ing in recipe.ingredients:
            if not ing.name:
                continue
            unit = normalize_unit(ing.unit)
            key = f"{canonical_name(ing.name)}|{unit}"
            qty = parse_quantity(ing.quantity, default=0.0)
            if key in combined:
                combined[key]["quantity"] += qty
            else:
                combined[key] = {
                    "name": ing.name,
                    "quantity": qty,
                    "unit": unit,
                    "category": categorize(ing.name),
                }
    for line in combined.values():
        line["quantity"] = round_quantity(line["quantity"], line["unit"])
    return list(combined.values())


def generate_shopping_list(plan: Optional[Plan]) -> Dict[str, Any]:
    """Consolidated shopping list for a plan.

    Returns:
        {'items': {category: [line]}, 'total_items': n, 'all_ingredients': [line]}
        where a line is {name, quantity, unit, category}.
    """
    if plan is None:
        return {"items": {}, "total_items": 0, "all_ingredients": []}

    lines = _combine(plan)
    grouped: Dict[str, List[Dict[str, Any]]] = {category: [] for category in CATEGORIES}
    grouped[OTHER] = []
    for line in lines:
        grouped.get(line["category"], grouped[OTHER]).append(line)
    for items in grouped.values():
        items.sort(key=lambda x: x["name"].lower())

    return {"items": grouped, "total_items": len(lines), "all_ingredients": lines}


def export_shopping_list_text(shopping_list: Optional[Dict[str, Any]]) -> str:
    if not shopping_list or not shopping_list.get("items"):
        return "No items in shopping list"

    out = ["=== SHOPPING LIST ===", ""]
    for category, items in shopping_list["items"].items():
        if not items:
            continue
        out.append(CATEGORY_LABELS.get(category, category.upper()))
        out.append("-" * 40)
        for item in items:
            out.append(f"☐ {format_quantity(item['quantity'], item['unit'])} {item['name']}")
        out.append("")
    out.append(f"TOTAL ITEMS: {shopping_list.get('total_items', 0)}")
    return "\n".join(out) + "\n"


__all__ = ["generate_shopping_list", "export_shopping_list_text"]
