"""Grocery categories for shopping-list lines."""
from typing import Dict, Tuple

from mealkit.logic.ingredients.normalizer import normalize

__all__ = ["CATEGORIES", "CATEGORY_LABELS", "categorize"]

OTHER = "other"

# Keys are already in normalized (singular, lower-case) form
CATEGORIES: Dict[str, Tuple[str, ...]] = {
    "proteins": (
        "chicken breast", "chicken", "ground beef", "beef", "pork chop", "pork",
        "pork shoulder", "salmon", "salmon fillet", "shrimp", "egg", "tofu",
    ),
    "vegetables": (
        "onion", "garlic", "tomato", "cherry tomato", "bell pepper", "broccoli",
        "carrot", "potato", "mushroom", "lettuce", "romaine lettuce", "cucumber",
        "asparagus", "cauliflower", "celery", "spinach", "green onion", "red onion",
        "bean sprout", "zucchini", "eggplant",
    ),
    "grains": (
        "rice", "pasta", "spaghetti", "linguine", "arborio rice", "quinoa", "bread",
        "hamburger bun", "flour tortilla", "taco shell", "flour", "all-purpose flour",
        "breadcrumb", "rice noodle", "noodle", "oat",
    ),
    "dairy": (
        "milk", "butter", "cheese", "parmesan", "mozzarella", "feta", "sour cream",
        "heavy cream", "cream cheese", "yogurt",
    ),
    "pantry": (
        "crushed tomato", "black bean", "kidney bean", "chickpea", "coconut milk",
        "chicken broth", "beef broth", "vegetable broth", "bbq sauce", "salsa",
        "olive", "crouton", "peanut", "lentil",
    ),
    "condiments": (
        "olive oil", "vegetable oil", "sesame oil", "soy sauce", "fish sauce",
        "balsamic vinegar", "apple cider vinegar", "honey", "brown sugar", "sugar",
        "maple syrup", "mayo", "mustard", "ketchup",
    ),
    "spices": (
        "salt", "black pepper", "basil", "parsley", "oregano", "cumin", "paprika",
        "chili powder", "red pepper flake", "italian seasoning", "curry powder",
        "ginger", "dill", "taco seasoning", "cinnamon", "baking powder",
        "vanilla extract", "garlic powder", "cilantro",
    ),
}

CATEGORY_LABELS: Dict[str, str] = {
    "proteins": "Proteins",
    "vegetables": "Vegetables",
    "grains": "Grains & Pasta",
    "dairy": "Dairy",
    "pantry": "Pantry Items",
    "condiments": "Oils & Condiments",
    "spices": "Herbs & Spices",
    OTHER: "Other Items",
}


def categorize(name: str) -> str:
    """Category of an ingredient: an exact table entry wins, then the first containment match."""
    key = normalize(name)
    if not key:
        return OTHER
    for category, names in CATEGORIES.items():
        if key in names:
            return category
    for category, names in CATEGORIES.items():
        if any(n in key or key in n for n in names):
            return category
    return OTHER
