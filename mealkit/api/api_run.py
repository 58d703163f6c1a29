from fastapi import FastAPI, APIRouter, HTTPException, Query, Request, Body
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
from typing import Optional
import logging

from mealkit.domain.Pantry import PantryItem
from mealkit.events.web_observers import start as start_event_observers, get_events as get_web_events
from mealkit.infra.document_store import DocumentStore, JsonFileDocumentStore, PersistenceError, StalePantryError
from mealkit.infra.History_Repository import CookingHistoryRecorder
from mealkit.infra.Pantry_Repository import PantryRepository
from mealkit.infra.Plan_Repository import PlanRepository
from mealkit.infra.Recipe_Repository import RecipeRepository
from mealkit.logic.cooking.service import CookService
from mealkit.logic.ingredients.normalizer import normalize
from mealkit.logic.pantry.matcher import match_recipes, compare_shopping_list_with_pantry
from mealkit.logic.recipes.similarity import suggest_recipes
from mealkit.logic.reporting.shared_ingredients import analyze, total_unique_ingredients
from mealkit.logic.shopping.list_builder import generate_shopping_list, export_shopping_list_text
from mealkit.logic.units.converter import convert, conversion_message
from mealkit.logic.units.formatter import format_quantity
from mealkit.utilities.config import TOP_SHARED_INGREDIENTS, SUGGESTION_LIMIT
from mealkit.utilities.validators import CookRequest, ConversionRequest, validate_ingredient, validate_slot

# Logging
logger = logging.getLogger("mealkit_app")

router = APIRouter()


class SlotUpdate(BaseModel):
    recipe_id: Optional[str] = None


def _repos(request: Request):
    return request.app.state.repos


def _slot_or_400(day: str, meal: str):
    try:
        return validate_slot(day, meal)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# -------------------- API: Pantry --------------------
@router.get('/api/pantry')
async def api_pantry(request: Request):
    pantry = await _repos(request)['pantry'].load()
    return {"items": pantry.to_dict(), "version": pantry.version, "count": len(pantry)}


@router.post('/api/pantry/ingredient')
async def add_ingredient(request: Request, data: dict = Body(...)):
    checked = validate_ingredient(data)
    if not checked['success']:
        raise HTTPException(status_code=400, detail=checked['error'])
    ing = checked['ingredient']

    repo = _repos(request)['pantry']
    pantry = await repo.load()
    key = normalize(ing.name)
    if any(normalize(item.name) == key for item in pantry.get_items()):
        raise HTTPException(status_code=400, detail='Ingredient already exists')
    item = pantry.add_item(PantryItem(ing.name, ing.quantity, ing.unit))
    try:
        version = await repo.save(pantry, expected_version=pantry.version)
    except StalePantryError as e:
        raise HTTPException(status_code=409, detail=str(e))
    logger.info(f"Pantry ingredient added: {item}")
    return {"item": item.to_dict(), "version": version}


# -------------------- API: Recipes --------------------
@router.get('/api/recipes/matches')
async def api_recipe_matches(request: Request, only_makeable: bool = Query(default=False)):
    repos = _repos(request)
    pantry = await repos['pantry'].load()
    recipes = await repos['recipes'].list_recipes()
    matches = [m.to_dict() for m in match_recipes(pantry, recipes)]
    if only_makeable:
        matches = [m for m in matches if m['can_make']]
    return {"matches": matches, "count": len(matches)}


@router.get('/api/recipes/{recipe_id}/suggestions')
async def api_recipe_suggestions(request: Request, recipe_id: str,
                                 limit: int = Query(default=SUGGESTION_LIMIT, ge=1, le=50)):
    repo = _repos(request)['recipes']
    selected = await repo.get_recipe(recipe_id)
    if selected is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    suggestions = suggest_recipes(selected, await repo.list_recipes(), limit=limit)
    return {
        "recipe_id": recipe_id,
        "suggestions": [
            {"recipe_id": s["recipe"].id, "name": s["recipe"].name,
             "match_score": s["match_score"], "shared_ingredients": s["shared_ingredients"]}
            for s in suggestions
        ],
    }


# -------------------- API: Plan & Cooking --------------------
@router.put('/api/plan/{day}/{meal}')
async def api_set_slot(request: Request, day: str, meal: str, payload: SlotUpdate,
                       week: Optional[int] = Query(default=None), year: Optional[int] = Query(default=None)):
    day, meal = _slot_or_400(day, meal)
    repos = _repos(request)
    recipe = None
    if payload.recipe_id:
        recipe = await repos['recipes'].get_recipe(payload.recipe_id)
        if recipe is None:
            raise HTTPException(status_code=404, detail="Recipe not found")
    plan = await repos['plans'].get_week_plan(week, year)
    if recipe is None:
        plan.clear_slot(day, meal)
    else:
        plan.set_slot(day, meal, recipe)
    await repos['plans'].save_week_plan(plan)
    return {"day": day, "meal": meal, "recipe": recipe.to_dict() if recipe else None}


@router.post('/api/cook/{day}/{meal}')
async def api_cook(request: Request, day: str, meal: str, payload: Optional[CookRequest] = None,
                   week: Optional[int] = Query(default=None), year: Optional[int] = Query(default=None)):
    day, meal = _slot_or_400(day, meal)
    payload = payload or CookRequest()
    service: CookService = request.app.state.cook_service
    try:
        return await service.mark_recipe_as_cooked(
            day, meal, force_deduct=payload.force_deduct, rating=payload.rating,
            notes=payload.notes, check_only=payload.check_only, week=week, year=year,
        )
    except StalePantryError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except PersistenceError as e:
        logger.error(f"Cook {day} {meal} failed to persist: {e}")
        raise HTTPException(status_code=503, detail="Storage unavailable, please retry")


@router.get('/api/plan/shared-ingredients')
async def api_shared_ingredients(request: Request, week: Optional[int] = Query(default=None),
                                 year: Optional[int] = Query(default=None),
                                 top: int = Query(default=TOP_SHARED_INGREDIENTS, ge=1, le=50)):
    plan = await _repos(request)['plans'].get_week_plan(week, year)
    report = analyze(plan, top_n=top).to_dict()
    report["total_unique_ingredients"] = total_unique_ingredients(plan)
    report["week"], report["year"] = plan.week, plan.year
    return report


# -------------------- API: Shopping List --------------------
@router.get('/api/shopping-list')
@router.get('/api/shopping-list/')
async def api_shopping_list(request: Request, week: Optional[int] = Query(default=None),
                            year: Optional[int] = Query(default=None),
                            fmt: str = Query(default="json", alias="format", pattern="^(json|text)$")):
    repos = _repos(request)
    plan = await repos['plans'].get_week_plan(week, year)
    shopping = generate_shopping_list(plan)
    if fmt == "text":
        return PlainTextResponse(export_shopping_list_text(shopping))
    pantry = await repos['pantry'].load()
    return {
        "week": plan.week,
        "year": plan.year,
        "items": shopping["items"],
        "count": shopping["total_items"],
        "pantry": compare_shopping_list_with_pantry(shopping["all_ingredients"], pantry),
    }


# -------------------- API: History, Events, Units --------------------
@router.get('/api/history/{recipe_id}')
async def api_history(request: Request, recipe_id: str):
    record = await _repos(request)['history'].read(recipe_id)
    if record is None:
        raise HTTPException(status_code=404, detail="No cooking history for this recipe")
    return record


@router.get('/api/events')
def api_events(since: Optional[int] = Query(default=None, description="Return events with id greater than this value")):
    """
    Return recent pantry and cooking events (low stock, depleted, cooked).

    Client polling strategy:
        1. First call without 'since' to load the current backlog.
        2. Store 'next_cursor' from the response.
        3. Subsequent polls: /api/events?since=<next_cursor>
    """
    return get_web_events(since)


@router.post('/api/convert')
def api_convert(payload: ConversionRequest):
    result = convert(payload.quantity, payload.from_unit, payload.to_unit, payload.ingredient_name)
    return {
        "result": result,
        "compatible": result is not None,
        "display": format_quantity(result, payload.to_unit) if result is not None else None,
        "message": conversion_message(payload.from_unit, payload.to_unit, payload.ingredient_name),
    }


def create_app(store: Optional[DocumentStore] = None) -> FastAPI:
    """Build the API around a document store (JSON files under DATA_DIR by default)."""
    store = store if store is not None else JsonFileDocumentStore()
    app = FastAPI(title="mealkit Ingredient API")
    repos = {
        'pantry': PantryRepository(store),
        'plans': PlanRepository(store),
        'recipes': RecipeRepository(store),
        'history': CookingHistoryRecorder(store),
    }
    app.state.repos = repos
    app.state.cook_service = CookService(repos['pantry'], repos['plans'], repos['history'])
    app.include_router(router)
    start_event_observers()
    return app


app = create_app()
