import pytest
from PyQt6.QtCore import QObject, pyqtSignal

tts_mod = pytest.importorskip("PyQt6.QtTextToSpeech")
State = tts_mod.QTextToSpeech.State

from gui.services.narration_service import NarrationEngine, QtSpeechBackend  # noqa: E402


class FakeTTS(QObject):
    stateChanged = pyqtSignal(object)

    def __init__(self):
        super().__init__()
        self._state = State.Ready
        self.said = []
        self.stops = 0

    def state(self):
        return self._state

    def say(self, text):
        self.said.append(text)

    def stop(self):
        self.stops += 1

    def errorString(self):
        return "no audio device"

    def emit_state(self, state):
        self._state = state
        self.stateChanged.emit(state)


def _engine():
    tts = FakeTTS()
    engine = NarrationEngine(QtSpeechBackend(tts))
    events = []
    engine.speakingChanged.connect(events.append)
    return tts, engine, events


def test_state_changes_drive_speaking_flag():
    tts, engine, events = _engine()
    engine.speak("hello")
    assert tts.said == ["hello"]
    tts.emit_state(State.Speaking)
    assert engine.speaking
    tts.emit_state(State.Ready)
    assert not engine.speaking
    assert events == [True, False]


def test_ready_before_start_is_ignored():
    tts, engine, events = _engine()
    engine.speak("hello")
    tts.emit_state(State.Ready)
    assert events == []
    assert engine.current_task is not None


def test_interrupting_narration_waits_for_fresh_speaking():
    tts, engine, events = _engine()
    engine.speak("one")
    tts.emit_state(State.Speaking)
    engine.speak("two")
    # "one" is cut off; the engine reports Ready before "two" begins
    tts.emit_state(State.Ready)
    assert engine.speaking
    assert engine.current_task.status == "pending"
    tts.emit_state(State.Speaking)
    assert engine.speaking
    assert engine.current_task.status == "speaking"
    tts.emit_state(State.Ready)
    assert not engine.speaking
    assert engine.current_task is None
    assert events == [True, False]


def test_synchronous_start_on_idle_engine():
    tts, engine, events = _engine()

    def say_and_start(text):
        tts.said.append(text)
        tts._state = State.Speaking

    tts.say = say_and_start
    engine.speak("hello")
    assert engine.speaking
    assert events == [True]


def test_error_state_resets_flag():
    tts, engine, events = _engine()
    task = engine.speak("hello")
    tts.emit_state(State.Speaking)
    tts.emit_state(State.Error)
    assert task.status == "failed"
    assert events == [True, False]


def test_stop_detaches_listener():
    tts, engine, events = _engine()
    engine.speak("hello")
    tts.emit_state(State.Speaking)
    engine.stop()
    assert tts.stops == 1
    tts.emit_state(State.Ready)
    assert events == [True, False]
