"""Web-facing observers for pantry and cooking events.

Subscribes to the GLOBAL_EVENT_BUS for pantry.low_stock, pantry.item_depleted
and recipe.cooked, and keeps a small in-memory ring buffer of recent events
that the API serves from GET /api/events.

Each event gets an auto-increment integer id (cursor) so clients can request
only newer events (since=<last_id_seen>). The buffer is per process and
capped at MAX_EVENTS.
"""
from __future__ import annotations
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone
import logging

from .Event_Bus import GLOBAL_EVENT_BUS, EVENT_NAMES

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started = False


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat()
        }
        if isinstance(payload, dict):
            item = payload.get('item')
            if item is not None and hasattr(item, 'name'):
                evt['name'] = item.name
                evt['unit'] = getattr(item, 'unit', '')
                evt['quantity'] = getattr(item, 'quantity', '')
            recipe = payload.get('recipe')
            if recipe is not None and hasattr(recipe, 'name'):
                evt['name'] = recipe.name
            for k in ('remaining', 'threshold', 'day', 'meal', 'forced'):
                if k in payload:
                    evt[k] = payload[k]
        _events.append(evt)
        _next_id += 1
        # Trim buffer
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in EVENT_NAMES:
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True
    logger.info("Web observers subscribed to pantry and cooking events")


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive), plus next_cursor for polling."""
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events', 'MAX_EVENTS']
