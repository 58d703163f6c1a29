"""Display formatting for ingredient quantities."""
import math

from mealkit.logic.units.converter import normalize_unit
from mealkit.utilities.constants import FRACTION_GLYPHS, FRACTION_TOLERANCE

__all__ = ["format_quantity", "round_quantity"]


def _fraction_text(value: float) -> str:
    rounded = round(value, 2)
    if rounded == int(rounded):
        return str(int(rounded))
    whole = int(value)
    remainder = value - whole
    for fraction, glyph in FRACTION_GLYPHS.items():
        if abs(remainder - fraction) < FRACTION_TOLERANCE:
            return f"{whole}{glyph}" if whole else glyph
    return f"{value:.2f}".rstrip('0').rstrip('.')


def format_quantity(quantity, unit: str = "") -> str:
    """Render a quantity the way a cook writes it: 0.5 -> '½', 1.5 -> '1½', 0.4 -> '0.4'.

    Never raises; anything that is not a finite number comes back as str(quantity).
    """
    try:
        value = float(quantity)
    except (TypeError, ValueError):
        return str(quantity)
    if not math.isfinite(value):
        return str(quantity)
    text = _fraction_text(abs(value))
    if value < 0 and text != '0':
        text = '-' + text
    return f"{text} {unit}".strip() if unit else text


def round_quantity(value, unit: str = "") -> float:
    """Round for display; cans snap to usable amounts (0.1 minimum, quarters above one)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        return 0
    if normalize_unit(unit) == 'can':
        if value < 0.1:
            return 0.1
        if value < 1:
            return round(value * 10) / 10
        return round(value * 4) / 4
    return round(value * 100) / 100
