"""Cook-time pantry deduction.

plan_and_maybe_commit() works in two phases. Planning builds the full list
of deductions against the pantry without touching it. Only when every
ingredient is covered (or the caller forces it) and the call is not a
check-only preview, the whole plan is applied to the pantry in one batch.

Entries point at pantry items by their stable id, so removing an emptied
item never shifts the target of a later entry.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from mealkit.domain.Ingredient import parse_quantity
from mealkit.domain.Pantry import Pantry, PantryItem
from mealkit.domain.Recipe import Recipe
from mealkit.logic.ingredients.normalizer import find_best_match
from mealkit.logic.units.converter import convert, normalize_unit

logger = logging.getLogger(__name__)

__all__ = ["DeductionEntry", "InsufficientItem", "DeductionResult", "plan_deductions", "plan_and_maybe_commit"]

EPSILON = 1e-9


@dataclass
class DeductionEntry:
    pantry_id: str
    pantry_index: int
    name: str
    deduct_qty: float
    unit: str
    remaining_qty: float
    converted: bool = False
    original_need: Optional[str] = None


@dataclass
class InsufficientItem:
    name: str
    needed: str
    have: str
    missing: bool = False
    short_by: Optional[float] = None
    incompatible_units: bool = False
    unreadable_quantity: bool = False


@dataclass
class DeductionResult:
    success: bool
    can_proceed: bool
    message: str
    recipe_name: str = ""
    check_only: bool = False
    already_cooked: bool = False
    committed: bool = False
    insufficient_items: List[InsufficientItem] = field(default_factory=list)
    deductions: List[DeductionEntry] = field(default_factory=list)
    removed_items: List[PantryItem] = field(default_factory=list)
    updated_items: List[PantryItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "can_proceed": self.can_proceed,
            "message": self.message,
            "recipe_name": self.recipe_name,
            "check_only": self.check_only,
            "already_cooked": self.already_cooked,
            "committed": self.committed,
            "insufficient_items": [asdict(i) for i in self.insufficient_items],
            "deductions": [asdict(d) for d in self.deductions],
            "removed_items": [i.to_dict() for i in self.removed_items],
        }


def _amount(qty: float, unit: str) -> str:
    return f"{qty:g} {unit}".strip()


def _needed(ing, need: Optional[float], unit: str) -> str:
    return _amount(need, unit) if need is not None else f"{ing.quantity} {unit}".strip()


def plan_deductions(recipe: Recipe, pantry: Pantry, force_deduct: bool = False):
    """Build (entries, insufficient) for a recipe against the pantry. Never mutates the pantry.

    Stock is tracked per item while planning, so two recipe lines that resolve
    to the same pantry item draw from the same running quantity.
    """
    items = pantry.get_items()
    names = pantry.names()
    available: Dict[str, float] = {item.id: item.quantity for item in items}
    entries: List[DeductionEntry] = []
    insufficient: List[InsufficientItem] = []

    for ing in recipe.ingredients:
        need = parse_quantity(ing.quantity)
        recipe_unit = normalize_unit(ing.unit)
        idx = find_best_match(ing.name, names)
        if idx is None:
            insufficient.append(InsufficientItem(
                name=ing.name, needed=_needed(ing, need, recipe_unit), have="0 (not in pantry)", missing=True,
            ))
            continue

        item = items[idx]
        pantry_unit = normalize_unit(item.unit)
        on_hand = available[item.id]

        if need is None:
            logger.warning(f"Cannot deduct '{ing.name}': unreadable quantity {ing.quantity!r}")
            insufficient.append(InsufficientItem(
                name=ing.name, needed=_needed(ing, need, recipe_unit), have=_amount(on_hand, pantry_unit),
                unreadable_quantity=True,
            ))
            continue

        if recipe_unit == pantry_unit:
            have, need_in_pantry_units, converted = on_hand, need, False
            have_text = _amount(on_hand, pantry_unit)
        else:
            have = convert(on_hand, pantry_unit, recipe_unit, ing.name)
            need_in_pantry_units = convert(need, recipe_unit, pantry_unit, ing.name)
            if have is None or need_in_pantry_units is None:
                logger.warning(f"Cannot deduct '{ing.name}': {pantry_unit or 'no unit'} does not convert to {recipe_unit or 'no unit'}")
                insufficient.append(InsufficientItem(
                    name=ing.name, needed=_amount(need, recipe_unit), have=_amount(on_hand, pantry_unit),
                    incompatible_units=True,
                ))
                continue
            converted = True
            have_text = f"{_amount(on_hand, pantry_unit)} (≈{have:.2f} {recipe_unit})"

        if have >= need:
            deduct = min(need_in_pantry_units, on_hand)
            remaining = on_hand - deduct
        else:
            insufficient.append(InsufficientItem(
                name=ing.name, needed=_amount(need, recipe_unit), have=have_text, short_by=need - have,
            ))
            if not force_deduct or on_hand <= 0:
                continue
            deduct, remaining = on_hand, 0.0

        available[item.id] = remaining
        entries.append(DeductionEntry(
            pantry_id=item.id,
            pantry_index=idx,
            name=ing.name,
            deduct_qty=deduct,
            unit=pantry_unit,
            remaining_qty=remaining,
            converted=converted,
            original_need=_amount(need, recipe_unit) if converted else None,
        ))
    return entries, insufficient


def _commit(pantry: Pantry, entries: List[DeductionEntry]):
    removed: List[PantryItem] = []
    updated: List[PantryItem] = []
    for entry in entries:
        if pantry.index_of(entry.pantry_id) is None:
            continue  # emptied by an earlier entry of this batch
        gone = pantry.set_remaining(entry.pantry_id, entry.remaining_qty)
        if gone is not None:
            removed.append(gone)
    for entry in entries:
        item = pantry.find(entry.pantry_id)
        if item is not None and item not in updated:
            updated.append(item)
    return removed, updated


def plan_and_maybe_commit(recipe: Recipe, pantry: Pantry, force_deduct: bool = False,
                          check_only: bool = False, already_cooked: bool = False) -> DeductionResult:
    """Plan the pantry deduction for cooking a recipe and apply it unless blocked or previewing.

    - already_cooked: nothing is planned, the result says so.
    - insufficient stock without force_deduct: can_proceed is False, nothing changes.
    - check_only: the plan comes back as a preview, nothing changes.
    - otherwise every entry is applied; items reaching zero are removed.
    """
    if already_cooked:
        return DeductionResult(
            success=False, can_proceed=False, already_cooked=True, recipe_name=recipe.name,
            message="This recipe has already been marked as cooked.",
        )

    if not recipe.ingredients:
        return DeductionResult(
            success=True, can_proceed=True, committed=not check_only, check_only=check_only,
            recipe_name=recipe.name, message=f"{recipe.name} marked as cooked (no ingredients to deduct).",
        )

    entries, insufficient = plan_deductions(recipe, pantry, force_deduct)

    if insufficient and not force_deduct:
        logger.info(f"Cannot cook {recipe.name}: {len(insufficient)} ingredient(s) missing or short")
        return DeductionResult(
            success=False, can_proceed=False, recipe_name=recipe.name, check_only=check_only,
            message=f"Cannot cook {recipe.name}. Missing or insufficient ingredients.",
            insufficient_items=insufficient, deductions=entries,
        )

    if check_only:
        return DeductionResult(
            success=True, can_proceed=True, check_only=True, recipe_name=recipe.name,
            message="Pantry check successful (check-only mode)",
            insufficient_items=insufficient, deductions=entries,
        )

    removed, updated = _commit(pantry, entries)
    logger.info(f"Deducted {len(entries)} ingredient(s) for {recipe.name}; {len(removed)} item(s) used up")
    message = f"{recipe.name} marked as cooked. Pantry updated."
    if insufficient:
        message = f"{recipe.name} marked as cooked. Deducted what was available ({len(insufficient)} ingredient(s) short)."
    return DeductionResult(
        success=True, can_proceed=True, committed=True, recipe_name=recipe.name, message=message,
        insufficient_items=insufficient, deductions=entries, removed_items=removed, updated_items=updated,
    )
