import logging
import uuid
from typing import List, Optional

from mealkit.domain.Recipe import Recipe
from mealkit.infra.document_store import DocumentStore
from mealkit.utilities.constants import RECIPES_COLLECTION

logger = logging.getLogger(__name__)


class RecipeRepository:
    def __init__(self, store: DocumentStore):
        self.store = store

    async def list_recipes(self) -> List[Recipe]:
        docs = await self.store.list_all(RECIPES_COLLECTION)
        recipes = []
        for key, doc in docs.items():
            recipe = Recipe.from_dict(doc)
            recipe.id = recipe.id or key
            recipes.append(recipe)
        return recipes

    async def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        doc = await self.store.get(RECIPES_COLLECTION, recipe_id)
        if not doc:
            return None
        recipe = Recipe.from_dict(doc)
        recipe.id = recipe.id or recipe_id
        return recipe

    async def save_recipe(self, recipe: Recipe) -> Recipe:
        """Store a recipe, assigning an id on first save."""
        if not recipe.id:
            recipe.id = uuid.uuid4().hex
        await self.store.set(RECIPES_COLLECTION, recipe.id, recipe.to_dict())
        logger.info(f"Recipe saved: {recipe.name} ({recipe.id})")
        return recipe

    async def delete_recipe(self, recipe_id: str) -> None:
        await self.store.delete(RECIPES_COLLECTION, recipe_id)
