"""Pantry aggregate: stock records with stable ids and a persisted version."""
import uuid
from typing import List, Optional

from mealkit.domain.Ingredient import Ingredient, parse_quantity
from mealkit.events.Event_Bus import GLOBAL_EVENT_BUS
from mealkit.events.event_helpers import publish_low_stock, publish_item_depleted
from mealkit.logic.units.converter import normalize_unit
from mealkit.utilities.config import LOW_STOCK_THRESHOLD


def new_item_id() -> str:
    return uuid.uuid4().hex


class PantryItem(Ingredient):
    """Mutable stock record. Quantity never goes below zero."""

    def __init__(self, name: str = "", quantity: float = 0, unit: str = "", id: Optional[str] = None):
        if quantity < 0:
            raise ValueError(f"Quantity cannot be negative: {quantity}")
        super().__init__(name, quantity, unit)
        self.id = id or new_item_id()

    def set_quantity(self, quantity: float):
        if quantity < 0:
            raise ValueError(f"Quantity cannot be negative: {quantity}")
        self.quantity = quantity

    def copy(self) -> "PantryItem":
        return PantryItem(self.name, self.quantity, self.unit, id=self.id)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PantryItem):
            return NotImplemented
        return (self.id, self.name, self.quantity, self.unit) == (other.id, other.name, other.quantity, other.unit)

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        qty = parse_quantity(d.get("quantity", d.get("default_quantity", 0)), default=0.0)
        return PantryItem(
            name=str(d.get("name") or ""),
            quantity=max(qty, 0.0),
            unit=str(d.get("unit") or ""),
            id=d.get("id") or None,
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
        }


class Pantry:
    def __init__(self, items: Optional[List[PantryItem]] = None, version: int = 0):
        self.items: List[PantryItem] = list(items) if items else []
        self.version = version
        self._event_bus = GLOBAL_EVENT_BUS

    # --- Observer helpers -------------------------------------------------
    def set_event_bus(self, bus):
        self._event_bus = bus
        return self

    def notify_stock(self, item: PantryItem):
        """Publish low-stock for an item at or below its unit's threshold."""
        threshold = LOW_STOCK_THRESHOLD.get(normalize_unit(item.unit))
        if threshold is not None and item.quantity <= threshold:
            publish_low_stock(item, item.quantity, threshold, bus=self._event_bus)

    def notify_depleted(self, item: PantryItem):
        publish_item_depleted(item, bus=self._event_bus)

    # --- Item management ---------------------------------------------------
    def add_item(self, item: Ingredient) -> PantryItem:
        '''
        Adds an item to the pantry. Plain ingredients are wrapped into a PantryItem with a fresh id.
        '''
        if not isinstance(item, PantryItem):
            item = PantryItem(item.name, item.quantity, item.unit)
        self.items.append(item)
        self.notify_stock(item)
        return item

    def remove_item(self, item_id: str) -> PantryItem:
        idx = self.index_of(item_id)
        if idx is None:
            raise ValueError(f"Pantry item '{item_id}' not found.")
        return self.items.pop(idx)

    def index_of(self, item_id: str) -> Optional[int]:
        for idx, item in enumerate(self.items):
            if item.id == item_id:
                return idx
        return None

    def find(self, item_id: str) -> Optional[PantryItem]:
        idx = self.index_of(item_id)
        return self.items[idx] if idx is not None else None

    def set_remaining(self, item_id: str, remaining: float) -> Optional[PantryItem]:
        '''
        Sets an item's quantity after a deduction; at zero the item is removed.
        Returns the removed item, or None when the item stays in the pantry.
        '''
        item = self.find(item_id)
        if item is None:
            raise ValueError(f"Pantry item '{item_id}' not found.")
        if remaining <= 1e-9:
            return self.remove_item(item_id)
        item.set_quantity(remaining)
        return None

    def update_quantity(self, item_id: str, new_quantity: float):
        '''
        Updates the quantity of a specific pantry item (absolute value).
        '''
        if new_quantity < 0:
            raise ValueError(f"Quantity cannot be negative: {new_quantity}")
        item = self.find(item_id)
        if item is None:
            raise ValueError(f"Pantry item '{item_id}' not found.")
        item.set_quantity(new_quantity)
        self.notify_stock(item)
        return item

    def get_items(self):
        return self.items

    def names(self) -> List[str]:
        return [item.name for item in self.items]

    def copy(self) -> "Pantry":
        clone = Pantry([item.copy() for item in self.items], version=self.version)
        clone._event_bus = self._event_bus
        return clone

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self.items)
        return f"Items:\n\t{items_str}"

    def __repr__(self) -> str:
        return self.__str__()

    @staticmethod
    def from_dict(data, version: int = 0):
        '''
        Builds a Pantry from a list of item dictionaries, or from a snapshot {"items": [...], "version": n}.
        '''
        if isinstance(data, dict):
            version = int(data.get("version", version) or 0)
            data = data.get("items", [])
        return Pantry([PantryItem.from_dict(d) for d in data or []], version=version)

    def to_dict(self):
        return [item.to_dict() for item in self.items]
