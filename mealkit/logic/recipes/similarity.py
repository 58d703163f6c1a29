"""Recipe-to-recipe similarity: shared ingredients and "cook next" suggestions."""
from __future__ import annotations
from typing import Any, Dict, List, Optional, Set

from mealkit.domain.Recipe import Recipe
from mealkit.logic.ingredients.normalizer import normalize, find_best_match
from mealkit.utilities.config import SUGGESTION_LIMIT

__all__ = ["find_shared_ingredients", "calculate_match_score", "suggest_recipes"]


def find_shared_ingredients(recipe1: Optional[Recipe], recipe2: Optional[Recipe]) -> List[str]:
    """Normalized names from recipe1 that also appear (by the matching rules) in recipe2.

    Each recipe2 ingredient pairs with at most one recipe1 line, so "onion",
    "green onion" and "red onion" against a single "onion" share one ingredient.
    """
    if recipe1 is None or recipe2 is None:
        return []
    other = [ing.name for ing in recipe2.ingredients]
    taken: Set[int] = set()
    shared: List[str] = []
    for ing in recipe1.ingredients:
        key = normalize(ing.name)
        if not key or key in shared:
            continue
        free = [i for i in range(len(other)) if i not in taken]
        pos = find_best_match(key, [other[i] for i in free])
        if pos is None:
            continue
        taken.add(free[pos])
        shared.append(key)
    return shared


def calculate_match_score(recipe1: Optional[Recipe], recipe2: Optional[Recipe]) -> int:
    """Overlap as a percentage of the smaller recipe's ingredient count."""
    if recipe1 is None or recipe2 is None:
        return 0
    smaller = min(len(recipe1.ingredients), len(recipe2.ingredients))
    if smaller == 0:
        return 0
    return round(len(find_shared_ingredients(recipe1, recipe2)) / smaller * 100)


def suggest_recipes(selected: Optional[Recipe], all_recipes: List[Recipe],
                    limit: int = SUGGESTION_LIMIT) -> List[Dict[str, Any]]:
    if selected is None or not all_recipes:
        return []
    scored = []
    for recipe in all_recipes:
        if recipe.identity == selected.identity:
            continue
        score = calculate_match_score(selected, recipe)
        if score <= 0:
            continue
        scored.append({
            "recipe": recipe,
            "match_score": score,
            "shared_ingredients": find_shared_ingredients(selected, recipe),
        })
    scored.sort(key=lambda s: (s["match_score"], len(s["shared_ingredients"])), reverse=True)
    return scored[:limit]
