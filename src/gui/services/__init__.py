"""Service layer exports.

Responsibilities:
 - Service locator (`services`) and EventBus
 - Tour state machine, narration engine, preference store, highlight locator

Qt-dependent modules (controller, narration, locator) are imported on demand
by their callers rather than re-exported here.
"""

from .service_locator import services, ServiceLocator  # noqa: F401
from .event_bus import EventBus, TourEvent  # noqa: F401

__all__ = [
    "services",
    "ServiceLocator",
    "EventBus",
    "TourEvent",
]
