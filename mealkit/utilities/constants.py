from typing import Final

DAYS: Final[tuple[str, ...]] = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"
)
MEALS: Final[tuple[str, ...]] = ("breakfast", "lunch", "dinner")

# Display glyphs for the fractions cooks actually write down
FRACTION_GLYPHS: Final[dict[float, str]] = {
    0.125: "⅛",
    0.25: "¼",
    1 / 3: "⅓",
    0.375: "⅜",
    0.5: "½",
    0.625: "⅝",
    2 / 3: "⅔",
    0.75: "¾",
    0.875: "⅞",
}
FRACTION_TOLERANCE: Final[float] = 0.02

# Collections addressed on the document store
RECIPES_COLLECTION: Final[str] = "recipes"
PANTRY_COLLECTION: Final[str] = "pantry"
HISTORY_COLLECTION: Final[str] = "cookingHistory"
SAVED_PLANS_COLLECTION: Final[str] = "savedMealPlans"
PLANS_COLLECTION: Final[str] = "mealPlans"
CURRENT_DOC: Final[str] = "current"
