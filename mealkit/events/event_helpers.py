"""Event helper utilities.

Helpers for publishing pantry and cooking events. Each helper publishes on
the bus it is given, falling back to the global event bus.

Quick import:
    from mealkit.events.event_helpers import (
        publish_low_stock, publish_item_depleted, publish_recipe_cooked,
    )
"""
from __future__ import annotations
from typing import Any, Optional
from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS,
    PANTRY_LOW_STOCK, PANTRY_ITEM_DEPLETED, RECIPE_COOKED,
)

__all__ = [
    'publish_low_stock', 'publish_item_depleted', 'publish_recipe_cooked',
    'PANTRY_LOW_STOCK', 'PANTRY_ITEM_DEPLETED', 'RECIPE_COOKED',
]


def _bus(bus: Optional[EventBus]) -> EventBus:
    return bus if bus is not None else GLOBAL_EVENT_BUS


def publish_low_stock(item: Any, remaining: float, threshold: float, bus: Optional[EventBus] = None):
    """Publish a pantry.low_stock event."""
    _bus(bus).publish(PANTRY_LOW_STOCK, {
        'item': item,
        'remaining': remaining,
        'threshold': threshold
    })


def publish_item_depleted(item: Any, bus: Optional[EventBus] = None):
    """Publish a pantry.item_depleted event (item was removed at quantity 0)."""
    _bus(bus).publish(PANTRY_ITEM_DEPLETED, {'item': item})


def publish_recipe_cooked(recipe: Any, day: str, meal: str, forced: bool = False,
                          bus: Optional[EventBus] = None):
    """Publish a recipe.cooked event.

    Payload structure:
        {'recipe': <Recipe>, 'day': 'monday', 'meal': 'dinner', 'forced': False}
    """
    _bus(bus).publish(RECIPE_COOKED, {
        'recipe': recipe,
        'day': day,
        'meal': meal,
        'forced': forced
    })
