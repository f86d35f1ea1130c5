# Shared fixtures for the tour test-suite.
# Qt runs on the offscreen platform; widget tests use pytest-qt's ``qtbot``.
# Narration is driven by ``FakeSpeechBackend`` so tests decide when an
# utterance starts, finishes or fails.

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from gui.design.onboarding_tour import RoleTourConfig, TourStep, register_role_tour, reset_registry
from gui.services.event_bus import EventBus
from gui.services.narration_service import NarrationEngine
from gui.services.tour_controller import TourController
from gui.services.tour_preferences import InMemoryPreferencesStore


class FakeSpeechBackend:
    """Records utterances; callbacks fire only when a test asks for them."""

    def __init__(self, fail_on_say: bool = False):
        self.spoken = []
        self.stop_calls = 0
        self.listener = None
        self.listeners = []
        self.fail_on_say = fail_on_say

    def say(self, text, listener):
        if self.fail_on_say:
            raise RuntimeError("audio device busy")
        self.spoken.append(text)
        self.listener = listener
        self.listeners.append(listener)

    def stop(self):
        self.stop_calls += 1
        self.listener = None

    # test helpers -------------------------------------------------------
    def start(self, listener=None):
        (listener or self.listener).on_started()

    def finish(self, listener=None):
        (listener or self.listener).on_finished()

    def fail(self, message="synthesis error", listener=None):
        (listener or self.listener).on_error(message)


@pytest.fixture(autouse=True)
def _fresh_registry():
    reset_registry()
    yield
    reset_registry()


@pytest.fixture
def backend():
    return FakeSpeechBackend()


@pytest.fixture
def narration(backend):
    return NarrationEngine(backend)


@pytest.fixture
def preferences():
    return InMemoryPreferencesStore()


@pytest.fixture
def abc_config():
    return RoleTourConfig(
        overview_narration="Overview of the ABC tour.",
        steps=[
            TourStep(id="a", title="A", description="Step A", narration_text="Narrate A",
                     target_selector='[data-tour="a"]'),
            TourStep(id="b", title="B", description="Step B", narration_text="Narrate B",
                     target_selector='[data-tour="b"]'),
            TourStep(id="c", title="C", description="Step C", narration_text="Narrate C"),
        ],
    )


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def abc_controller(narration, preferences, abc_config, bus):
    register_role_tour("abc_role", abc_config)
    return TourController(narration, preferences, role="abc_role", event_bus=bus)


@pytest.fixture
def backend_factory():
    return FakeSpeechBackend
