"""CardioRegistry GUI public API.

Small curated surface for the launcher, CLI and tests:

- ``services``: application service locator (bootstrap registers the tour here)
- ``EventBus`` / ``TourEvent``: tour lifecycle notifications
- ``design``: tour content registry (``from gui import design``)

Importing this package does not create a QApplication.
"""

from __future__ import annotations

from .services.service_locator import (  # noqa: F401
    services,
    ServiceLocator,
    ServiceAlreadyRegisteredError,
    ServiceNotFoundError,
)
from .services.event_bus import EventBus, TourEvent, Event  # noqa: F401
from . import design  # noqa: F401

__all__ = [
    "services",
    "ServiceLocator",
    "ServiceAlreadyRegisteredError",
    "ServiceNotFoundError",
    "EventBus",
    "TourEvent",
    "Event",
    "design",
]
