"""Recipe domain entity: id, name, servings, ingredients, steps, tags."""
from typing import List, Optional

from mealkit.domain.Ingredient import Ingredient


class Recipe:
    def __init__(self, name: str = "", servings: int = 0, ingredients: Optional[List[Ingredient]] = None,
                 steps: Optional[List[str]] = None, tags: Optional[List[str]] = None,
                 id: Optional[str] = None, image: str = ""):
        self.id = id
        self.name = name
        self.servings = servings
        self.ingredients = ingredients[:] if ingredients else []
        self.steps = steps[:] if steps else []
        self.tags = tags[:] if tags else []
        self.image = image

    def __str__(self) -> str:
        return f"{self.name} - {self.servings} servings - {len(self.ingredients)} ingredients - Tags: {', '.join(self.tags)}"

    __repr__ = __str__

    @property
    def identity(self) -> str:
        """Id when the recipe has one, otherwise its name."""
        return self.id or self.name

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return Recipe(
            name=d.get("name", ""),
            servings=d.get("servings", 0) or 0,
            ingredients=[Ingredient.from_dict(ing) for ing in d.get("ingredients") or []],
            steps=d.get("steps") or [],
            tags=d.get("tags") or [],
            id=d.get("id"),
            image=d.get("image") or "",
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "servings": self.servings,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
            "steps": self.steps,
            "tags": self.tags,
            "image": self.image,
        }
