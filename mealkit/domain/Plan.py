"""Plan domain entity: weekly meal grid (7 days x breakfast/lunch/dinner) with cooked slots."""
from datetime import date
from typing import Dict, Iterator, List, Optional, Set, Tuple

from mealkit.domain.Recipe import Recipe
from mealkit.utilities.constants import DAYS, MEALS


def slot_key(day: str, meal: str) -> str:
    return f"{day}-{meal}"


def _check_slot(day: str, meal: str) -> Tuple[str, str]:
    d, m = str(day).strip().lower(), str(meal).strip().lower()
    if d not in DAYS:
        raise ValueError(f"Unknown day: {day}")
    if m not in MEALS:
        raise ValueError(f"Unknown meal: {meal}")
    return d, m


class Plan:
    def __init__(self, week_number: Optional[int] = None, year: Optional[int] = None,
                 meals: Optional[Dict[str, Dict[str, Optional[Recipe]]]] = None,
                 cooked: Optional[Set[str]] = None):
        if week_number is None or year is None:
            iso = date.today().isocalendar()
            week_number = week_number or iso.week
            year = year or iso.year
        self.week = week_number
        self.year = year
        self.cooked: Set[str] = set()
        self.meals: Dict[str, Dict[str, Optional[Recipe]]] = {d: {m: None for m in MEALS} for d in DAYS}
        for day, slots in (meals or {}).items():
            for meal, recipe in (slots or {}).items():
                self.set_slot(day, meal, recipe)
        self.cooked = set(cooked or ())

    def get_slot(self, day: str, meal: str) -> Optional[Recipe]:
        d, m = _check_slot(day, meal)
        return self.meals[d][m]

    def set_slot(self, day: str, meal: str, recipe: Optional[Recipe]):
        d, m = _check_slot(day, meal)
        self.meals[d][m] = recipe
        # A new recipe in the slot has not been cooked yet
        self.cooked.discard(slot_key(d, m))

    def clear_slot(self, day: str, meal: str):
        self.set_slot(day, meal, None)

    def filled_slots(self) -> Iterator[Tuple[str, str, Recipe]]:
        """Yield (day, meal, recipe) for every slot holding a recipe, in week order."""
        for day in DAYS:
            for meal in MEALS:
                recipe = self.meals[day][meal]
                if recipe is not None:
                    yield day, meal, recipe

    def recipes(self) -> List[Recipe]:
        return [recipe for _, _, recipe in self.filled_slots()]

    def is_cooked(self, day: str, meal: str) -> bool:
        d, m = _check_slot(day, meal)
        return slot_key(d, m) in self.cooked

    def mark_cooked(self, day: str, meal: str):
        d, m = _check_slot(day, meal)
        self.cooked.add(slot_key(d, m))

    def unmark_cooked(self, day: str, meal: str):
        d, m = _check_slot(day, meal)
        self.cooked.discard(slot_key(d, m))

    def __str__(self) -> str:
        filled = sum(1 for _ in self.filled_slots())
        return f"Plan {self.year}-W{self.week:02d} - {filled} meals planned - {len(self.cooked)} cooked"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data or {})
        meals = {}
        for day, slots in (d.get("meals") or {}).items():
            meals[day] = {meal: Recipe.from_dict(r) if isinstance(r, dict) else None
                          for meal, r in (slots or {}).items()}
        return Plan(d.get("week"), d.get("year"), meals=meals, cooked=set(d.get("cooked") or []))

    def to_dict(self):
        return {
            "week": self.week,
            "year": self.year,
            "meals": {day: {meal: r.to_dict() if r is not None else None for meal, r in slots.items()}
                      for day, slots in self.meals.items()},
            "cooked": sorted(self.cooked),
        }
