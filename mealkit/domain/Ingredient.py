"""Ingredient reference: name, quantity, unit. Used by recipes, pantry stock and shopping lines."""
import math
import re
from typing import Optional

from mealkit.logic.units.formatter import format_quantity
from mealkit.utilities.constants import FRACTION_GLYPHS

_GLYPH_VALUES = {glyph: value for value, glyph in FRACTION_GLYPHS.items()}
_GLYPHS = "".join(_GLYPH_VALUES)
# "1/2", "1 1/2"; a whole part needs a space so "11/2" stays eleven halves
_SLASH_FRACTION = re.compile(r"^(?:(\d+)\s+)?(\d+)\s*/\s*(\d+)$")
# "½", "1½", "1 ½"
_GLYPH_FRACTION = re.compile(rf"^(?:(\d+)\s*)?([{_GLYPHS}])$")


class Ingredient:
    def __init__(self, name: str = "", quantity: float = 0, unit: str = ""):
        self.name = name
        self.quantity = quantity
        self.unit = unit

    def __str__(self) -> str:
        return f"{self.name} - {format_quantity(self.quantity, self.unit)}"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ingredient):
            return NotImplemented
        return (self.name, self.quantity, self.unit) == (other.name, other.quantity, other.unit)

    @staticmethod
    def from_dict(data):
        '''Creates an Ingredient from a dictionary. Accepts the legacy "default_quantity" key.'''
        d = dict(data) if isinstance(data, dict) else {}
        qty = d.get("quantity", d.get("default_quantity", 0))
        parsed = parse_quantity(qty)
        return Ingredient(
            name=str(d.get("name") or ""),
            # unreadable text is kept as stored so callers can report it
            quantity=parsed if parsed is not None else qty,
            unit=str(d.get("unit") or ""),
        )

    def to_dict(self):
        return {
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
        }


def _parse_fraction_text(text: str) -> Optional[float]:
    match = _SLASH_FRACTION.match(text)
    if match:
        whole, num, den = match.groups()
        if int(den) == 0:
            return None
        return int(whole or 0) + int(num) / int(den)
    match = _GLYPH_FRACTION.match(text)
    if match:
        whole, glyph = match.groups()
        return int(whole or 0) + _GLYPH_VALUES[glyph]
    return None


def parse_quantity(value, default: Optional[float] = None) -> Optional[float]:
    """Numeric value of a stored quantity.

    Accepts numbers, decimal text, plain and mixed fractions ("1/2", "1 1/2")
    and fraction glyphs ("½", "1½"). Anything else returns `default`, which is
    None unless the caller has a safe fallback.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else default
    text = str(value).strip()
    try:
        number = float(text)
    except ValueError:
        number = _parse_fraction_text(text)
    if number is None or not math.isfinite(number):
        return default
    return number
