"""Guided tour state machine.

States::

    Inactive --start_tour--> Overview --next--> OnStep(0) --next--> ... OnStep(N-1)
                                ^                  |                        |
                                +------prev--------+                  next: end_tour
    any state --end_tour--> Inactive

``TourController`` is the only owner of tour state. Every transition commits
the new state and emits its signals before narration is requested, so the
overlay shows the new step while the voice catches up. Requests that do not
apply to the current state (``next_step`` while inactive, ``skip_to_step``
out of range, ...) are ignored rather than raised.

The role's config is resolved through the tour registry. Changing role while
a tour is running aborts that tour without recording it as completed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from PyQt6.QtCore import QObject, pyqtSignal

from gui.design.onboarding_tour import RoleTourConfig, TourStep, get_config
from .event_bus import EventBus, TourEvent
from .narration_service import NarrationEngine
from .tour_preferences import PreferencesStore

__all__ = ["Inactive", "Overview", "OnStep", "TourState", "TourController"]

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Inactive:
    pass


@dataclass(frozen=True)
class Overview:
    pass


@dataclass(frozen=True)
class OnStep:
    index: int


TourState = Union[Inactive, Overview, OnStep]

INACTIVE = Inactive()
OVERVIEW = Overview()


class TourController(QObject):
    """Per-application tour session.

    Signals:
        stateChanged(object): new ``TourState`` after every transition.
        activeChanged(bool): tour became active / inactive.
        stepChanged(int): current step index (-1 for overview or inactive).
        speakingChanged(bool): forwarded from the narration engine.
        configChanged(object): the ``RoleTourConfig`` now in use.
    """

    stateChanged = pyqtSignal(object)
    activeChanged = pyqtSignal(bool)
    stepChanged = pyqtSignal(int)
    speakingChanged = pyqtSignal(bool)
    configChanged = pyqtSignal(object)

    def __init__(
        self,
        narration: NarrationEngine,
        preferences: PreferencesStore,
        *,
        role: str | None = None,
        event_bus: EventBus | None = None,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self._narration = narration
        self._preferences = preferences
        self._event_bus = event_bus
        self._state: TourState = INACTIVE
        self._role: Optional[str] = None
        self._config: Optional[RoleTourConfig] = None
        narration.speakingChanged.connect(self.speakingChanged.emit)  # type: ignore
        if role:
            self.set_role(role)

    # Observables ------------------------------------------------------
    @property
    def state(self) -> TourState:
        return self._state

    @property
    def role(self) -> Optional[str]:
        return self._role

    @property
    def tour_config(self) -> Optional[RoleTourConfig]:
        return self._config

    @property
    def is_active(self) -> bool:
        return not isinstance(self._state, Inactive)

    @property
    def is_overview(self) -> bool:
        return isinstance(self._state, Overview)

    @property
    def is_speaking(self) -> bool:
        return self._narration.speaking

    @property
    def current_step_index(self) -> int:
        return self._state.index if isinstance(self._state, OnStep) else -1

    @property
    def current_step(self) -> Optional[TourStep]:
        if isinstance(self._state, OnStep) and self._config is not None:
            return self._config.steps[self._state.index]
        return None

    @property
    def step_count(self) -> int:
        return len(self._config) if self._config is not None else 0

    def has_completed_tour(self) -> bool:
        return self._preferences.is_tour_completed()

    # Role -------------------------------------------------------------
    def set_role(self, role: str | None) -> None:
        """Load the tour for ``role``; aborts a running tour."""
        if not role:
            return
        config = get_config(role)
        if role == self._role and config is self._config:
            return
        if self.is_active:
            _logger.info("Role changed to %s during tour; aborting tour", role)
            self._narration.stop()
            self._transition(INACTIVE)
            self._publish(TourEvent.TOUR_ENDED, {"role": self._role, "completed": False})
        self._role = role
        self._config = config
        self.configChanged.emit(config)
        self._publish(TourEvent.TOUR_ROLE_CHANGED, {"role": role})

    # Transitions ------------------------------------------------------
    def start_tour(self) -> None:
        if self._config is None:
            _logger.debug("start_tour ignored: no tour config loaded")
            return
        was_active = self.is_active
        # restarting a running tour rewinds it to the overview
        self._transition(OVERVIEW)
        if not was_active:
            self._publish(TourEvent.TOUR_STARTED, {"role": self._role})

    def start_if_first_run(self) -> bool:
        """Start the tour unless it was completed before. Returns True if started."""
        if self.has_completed_tour() or self._config is None:
            return False
        self.start_tour()
        return self.is_active

    def play_overview(self) -> None:
        if isinstance(self._state, Overview) and self._config is not None:
            self._narration.speak(self._config.overview_narration)

    def next_step(self) -> None:
        if self._config is None or not self.is_active:
            return
        if isinstance(self._state, Overview):
            self._go_to(0)
        elif self._state.index < len(self._config) - 1:
            self._go_to(self._state.index + 1)
        else:
            self.end_tour()

    def prev_step(self) -> None:
        if not isinstance(self._state, OnStep):
            return
        if self._state.index > 0:
            self._go_to(self._state.index - 1)
        else:
            self._transition(OVERVIEW)

    def skip_to_step(self, index: int) -> None:
        if self._config is None or not self.is_active:
            return
        if not 0 <= index < len(self._config):
            _logger.debug("skip_to_step(%s) ignored: %s steps", index, len(self._config))
            return
        self._go_to(index)

    def replay_step(self) -> None:
        if isinstance(self._state, Overview):
            self.play_overview()
        elif isinstance(self._state, OnStep) and self._config is not None:
            self._narration.speak(self._config.steps[self._state.index].narration_text)

    def end_tour(self) -> None:
        was_active = self.is_active
        self._narration.stop()
        self._transition(INACTIVE)
        if not self._preferences.mark_tour_completed():
            _logger.warning("Tour completion flag could not be saved")
        if was_active:
            self._publish(TourEvent.TOUR_ENDED, {"role": self._role, "completed": True})

    def stop_speaking(self) -> None:
        self._narration.stop()

    # Internal ---------------------------------------------------------
    def _go_to(self, index: int) -> None:
        assert self._config is not None
        self._transition(OnStep(index))
        step = self._config.steps[index]
        self._publish(TourEvent.TOUR_STEP_CHANGED, {"role": self._role, "index": index, "id": step.id})
        self._narration.speak(step.narration_text)

    def _transition(self, new_state: TourState) -> None:
        old = self._state
        if new_state == old:
            return
        self._state = new_state
        _logger.debug("Tour state %s -> %s", old, new_state)
        self.stateChanged.emit(new_state)
        if isinstance(old, Inactive) != isinstance(new_state, Inactive):
            self.activeChanged.emit(not isinstance(new_state, Inactive))
        old_index = old.index if isinstance(old, OnStep) else -1
        if old_index != self.current_step_index:
            self.stepChanged.emit(self.current_step_index)

    def _publish(self, event: TourEvent, payload: dict) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event, payload)
