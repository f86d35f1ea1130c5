"""Application bootstrap for the CardioRegistry tour shell.

Builds the per-session objects once and registers them with the service
locator:

 - ``narration_engine``: system voice (or silent when unavailable / headless)
 - ``tour_preferences``: JSON preference store under the data directory
 - ``event_bus``: fresh bus per bootstrap
 - ``tour_controller``: the tour state machine for the viewer's role

The narration engine is disposed when the QApplication quits.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Any, Optional

from PyQt6.QtWidgets import QApplication

from config import settings
from gui.services.event_bus import EventBus
from gui.services.narration_service import NarrationEngine, SpeechBackend
from gui.services.service_locator import ServiceLocator, services
from gui.services.tour_controller import TourController
from gui.services.tour_preferences import TourPreferencesStore

__all__ = ["TourAppContext", "create_application"]

_logger = logging.getLogger(__name__)


@dataclass
class TourAppContext:
    """References created during bootstrap.

    Attributes
    ----------
    qt_app: The QApplication (None when headless).
    headless: Whether the session runs without a QApplication / voice.
    data_dir: Directory holding the preference file.
    narration, preferences, controller, event_bus: The registered services.
    services: The locator the services were registered with.
    """

    qt_app: Optional[Any]
    headless: bool
    data_dir: str
    narration: NarrationEngine
    preferences: TourPreferencesStore
    controller: TourController
    event_bus: EventBus
    services: ServiceLocator


def create_application(
    *,
    role: str | None = None,
    data_dir: str | None = None,
    headless: bool = False,
    speech_backend: SpeechBackend | None = None,
    locator: ServiceLocator | None = None,
) -> TourAppContext:
    locator = locator or services
    data_dir = data_dir or settings.DATA_DIR
    qt_app = None
    if not headless:
        qt_app = QApplication.instance() or QApplication(sys.argv[:1])

    if speech_backend is not None:
        narration = NarrationEngine(speech_backend)
    elif headless:
        narration = NarrationEngine(None)
    else:
        narration = NarrationEngine.with_system_voice()
    if not narration.available:
        _logger.info("Narration unavailable; tour runs without voice")

    preferences = TourPreferencesStore(data_dir)
    event_bus = EventBus()
    controller = TourController(narration, preferences, role=role, event_bus=event_bus)

    for name, value in [
        ("narration_engine", narration),
        ("tour_preferences", preferences),
        ("event_bus", event_bus),
        ("tour_controller", controller),
    ]:
        # each bootstrap owns a fresh session
        locator.register(name, value, allow_override=True)

    if qt_app is not None:
        qt_app.aboutToQuit.connect(narration.dispose)  # type: ignore

    return TourAppContext(
        qt_app=qt_app,
        headless=headless,
        data_dir=data_dir,
        narration=narration,
        preferences=preferences,
        controller=controller,
        event_bus=event_bus,
        services=locator,
    )
