"""Tour lifecycle notifications.

``TourController`` publishes here; widgets that only care about whether a tour
is running (the main window's "Take the tour" button) subscribe instead of
wiring themselves to every controller signal. Dispatch is synchronous on the
GUI thread. A handler that raises is logged and recorded in ``failures``; the
remaining handlers still run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Tuple

__all__ = ["TourEvent", "Event", "EventBus"]

_logger = logging.getLogger(__name__)


class TourEvent(str, Enum):
    TOUR_STARTED = "tour_started"
    TOUR_STEP_CHANGED = "tour_step_changed"
    TOUR_ENDED = "tour_ended"
    TOUR_ROLE_CHANGED = "tour_role_changed"


@dataclass(frozen=True)
class Event:
    name: TourEvent
    payload: Dict[str, Any] = field(default_factory=dict)


EventHandler = Callable[[Event], None]


class EventBus:
    def __init__(self) -> None:
        self._handlers: Dict[TourEvent, List[EventHandler]] = {}
        self.failures: List[Tuple[Event, Exception]] = []

    def subscribe(self, name: TourEvent | str, handler: EventHandler) -> Callable[[], None]:
        """Register ``handler``; returns a callable that removes it again."""
        kind = TourEvent(name)
        self._handlers.setdefault(kind, []).append(handler)

        def unsubscribe() -> None:
            handlers = self._handlers.get(kind, [])
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def publish(self, name: TourEvent | str, payload: Dict[str, Any] | None = None) -> Event:
        event = Event(TourEvent(name), dict(payload or {}))
        for handler in list(self._handlers.get(event.name, ())):
            try:
                handler(event)
            except Exception as exc:  # noqa: BLE001 - one listener must not break the tour
                _logger.exception("Tour event handler for %s failed", event.name.value)
                self.failures.append((event, exc))
        return event

    def subscriber_count(self, name: TourEvent | str) -> int:
        return len(self._handlers.get(TourEvent(name), ()))
