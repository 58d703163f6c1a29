"""In-process publish/subscribe for pantry and cooking events.

Event names and payloads:
    pantry.low_stock      {"item": PantryItem, "remaining": float, "threshold": float}
    pantry.item_depleted  {"item": PantryItem}
    recipe.cooked         {"recipe": Recipe, "day": str, "meal": str, "forced": bool}

A subscriber is any callable taking (event_name, payload). Delivery is
synchronous, in subscription order. A subscriber that raises is logged and
skipped; the others still receive the event.
"""
from __future__ import annotations
import logging
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

PANTRY_LOW_STOCK = "pantry.low_stock"
PANTRY_ITEM_DEPLETED = "pantry.item_depleted"
RECIPE_COOKED = "recipe.cooked"
EVENT_NAMES = (PANTRY_LOW_STOCK, PANTRY_ITEM_DEPLETED, RECIPE_COOKED)

Subscriber = Callable[[str, Any], None]


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Subscriber]] = {}

    def subscribe(self, event_name: str, callback: Subscriber) -> Callable[[], bool]:
        """Register callback (once per event). Returns a function that removes it again."""
        callbacks = self._subscribers.setdefault(event_name, [])
        if callback not in callbacks:
            callbacks.append(callback)
        return lambda: self.unsubscribe(event_name, callback)

    def unsubscribe(self, event_name: str, callback: Subscriber) -> bool:
        callbacks = self._subscribers.get(event_name, [])
        if callback not in callbacks:
            return False
        callbacks.remove(callback)
        return True

    def subscribers(self, event_name: str) -> List[Subscriber]:
        return list(self._subscribers.get(event_name, ()))

    def publish(self, event_name: str, payload: Any) -> int:
        """Deliver payload to every subscriber of event_name; returns how many handled it."""
        delivered = 0
        for callback in self.subscribers(event_name):
            try:
                callback(event_name, payload)
            except Exception:
                logger.exception(f"Subscriber {callback!r} failed on {event_name}")
                continue
            delivered += 1
        return delivered


GLOBAL_EVENT_BUS = EventBus()

__all__ = [
    "EventBus", "GLOBAL_EVENT_BUS", "EVENT_NAMES", "Subscriber",
    "PANTRY_LOW_STOCK", "PANTRY_ITEM_DEPLETED", "RECIPE_COOKED",
]
