"""Narration engine for the guided tour.

Wraps a text-to-speech backend behind a single ``speaking`` flag:

 - ``speak(text)`` cancels whatever is playing and starts a new utterance.
   Utterances are never queued.
 - ``stop()`` cancels the current utterance and forces ``speaking`` to False.
 - Playback runs in the background; ``speak`` and ``stop`` return at once and
   the flag changes later when the backend reports start/end/error.

Each utterance is a ``NarrationTask`` holding its own cancel token. Backend
callbacks are routed through the task, so a late "finished" from an utterance
that was already replaced cannot flip the flag of the one now playing.

When no speech engine is available (``PyQt6.QtTextToSpeech`` missing, or no
engine plugins installed) the engine has no backend and every call is a
silent no-op; the tour stays fully usable without a voice.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from PyQt6.QtCore import QObject, pyqtSignal

from config import settings

try:  # QtTextToSpeech ships as an optional PyQt6 module
    from PyQt6.QtTextToSpeech import QTextToSpeech
except ImportError:  # pragma: no cover - depends on the PyQt6 build
    QTextToSpeech = None  # type: ignore

__all__ = [
    "CancelToken",
    "NarrationListener",
    "SpeechBackend",
    "QtSpeechBackend",
    "NarrationTask",
    "NarrationEngine",
]

_logger = logging.getLogger(__name__)


class CancelToken:
    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def is_cancelled(self) -> bool:
        return self._cancelled


class NarrationListener(Protocol):
    def on_started(self) -> None: ...  # pragma: no cover - structural

    def on_finished(self) -> None: ...  # pragma: no cover - structural

    def on_error(self, message: str) -> None: ...  # pragma: no cover - structural


class SpeechBackend(Protocol):
    """Minimal surface a speech engine must offer.

    ``say`` must not block; the listener is called back later from the event
    loop. Starting a new utterance implicitly interrupts the previous one.
    """

    def say(self, text: str, listener: NarrationListener) -> None: ...  # pragma: no cover

    def stop(self) -> None: ...  # pragma: no cover


class QtSpeechBackend:
    """``SpeechBackend`` over ``QTextToSpeech``.

    QTextToSpeech reports a single engine-wide state rather than per-utterance
    events, so the backend tracks which listener the current state belongs to.
    When ``say`` interrupts a running utterance the engine still reports
    ``Speaking`` for the old text and then ``Ready`` once it is cut off; the new
    listener only counts as started on a ``Speaking`` change seen after the call.
    """

    def __init__(self, tts: "QTextToSpeech") -> None:
        self._tts = tts
        self._listener: Optional[NarrationListener] = None
        self._started = False
        tts.stateChanged.connect(self._on_state_changed)  # type: ignore

    @classmethod
    def create(cls, parent: QObject | None = None) -> Optional["QtSpeechBackend"]:
        """Build a backend on the default engine, or None when speech is unavailable."""
        if QTextToSpeech is None:
            _logger.info("QtTextToSpeech not available; narration disabled")
            return None
        try:
            engines = QTextToSpeech.availableEngines()
            if not engines:
                _logger.info("No text-to-speech engines installed; narration disabled")
                return None
            tts = QTextToSpeech(parent)
            if tts.state() == QTextToSpeech.State.Error:
                _logger.warning("Text-to-speech engine failed to initialise")
                return None
            tts.setRate(settings.NARRATION_RATE)
            tts.setPitch(settings.NARRATION_PITCH)
            tts.setVolume(settings.NARRATION_VOLUME)
        except Exception as exc:  # noqa: BLE001 - engine plugins can fail in many ways
            _logger.warning("Text-to-speech unavailable: %s", exc)
            return None
        return cls(tts)

    def say(self, text: str, listener: NarrationListener) -> None:
        was_speaking = self._tts.state() == QTextToSpeech.State.Speaking
        self._listener = listener
        self._started = False
        self._tts.say(text)
        if not was_speaking and self._tts.state() == QTextToSpeech.State.Speaking:
            self._mark_started()

    def stop(self) -> None:
        self._listener = None
        self._started = False
        self._tts.stop()

    def _mark_started(self) -> None:
        if self._listener is not None and not self._started:
            self._started = True
            self._listener.on_started()

    def _on_state_changed(self, state) -> None:  # noqa: ANN001 - Qt enum
        listener = self._listener
        if listener is None:
            return
        if state == QTextToSpeech.State.Speaking:
            self._mark_started()
        elif state == QTextToSpeech.State.Ready and self._started:
            self._listener = None
            listener.on_finished()
        elif state == QTextToSpeech.State.Error:
            self._listener = None
            message = self._tts.errorString() if hasattr(self._tts, "errorString") else ""
            listener.on_error(message or "speech engine error")


class NarrationTask:
    """Handle for one utterance.

    Attributes
    ----------
    text: str
        The narrated text.
    status: str
        One of ``pending``, ``speaking``, ``finished``, ``failed``, ``cancelled``.
    """

    def __init__(self, engine: "NarrationEngine", text: str) -> None:
        self._engine = engine
        self._token = CancelToken()
        self.text = text
        self.status = "pending"

    @property
    def cancelled(self) -> bool:
        return self._token.is_cancelled()

    @property
    def done(self) -> bool:
        return self.status in ("finished", "failed", "cancelled")

    def cancel(self) -> None:
        if self.done:
            return
        self._token.cancel()
        self.status = "cancelled"

    # Backend callbacks ------------------------------------------------
    def on_started(self) -> None:
        if self.cancelled or self.done:
            return
        self.status = "speaking"
        self._engine._set_speaking(True)

    def on_finished(self) -> None:
        if self.cancelled or self.done:
            return
        self.status = "finished"
        self._engine._task_done(self)

    def on_error(self, message: str) -> None:
        if self.cancelled or self.done:
            return
        _logger.warning("Narration failed: %s", message)
        self.status = "failed"
        self._engine._task_done(self)


class NarrationEngine(QObject):
    """Single-utterance narration with an observable ``speaking`` flag.

    Construct once per application session and call ``dispose()`` on
    teardown.

    Signals:
        speakingChanged(bool): emitted whenever ``speaking`` changes value.
    """

    speakingChanged = pyqtSignal(bool)

    def __init__(self, backend: SpeechBackend | None = None, parent: QObject | None = None):
        super().__init__(parent)
        self._backend = backend
        self._current: Optional[NarrationTask] = None
        self._speaking = False

    @classmethod
    def with_system_voice(cls, parent: QObject | None = None) -> "NarrationEngine":
        return cls(QtSpeechBackend.create(parent), parent)

    # State ------------------------------------------------------------
    @property
    def available(self) -> bool:
        return self._backend is not None

    @property
    def speaking(self) -> bool:
        return self._speaking

    @property
    def current_task(self) -> Optional[NarrationTask]:
        return self._current

    # Operations -------------------------------------------------------
    def speak(self, text: str) -> Optional[NarrationTask]:
        if self._backend is None:
            return None
        if self._current is not None:
            self._current.cancel()
        task = NarrationTask(self, text)
        self._current = task
        try:
            self._backend.say(text, task)
        except Exception as exc:  # noqa: BLE001 - narration must never break the tour
            task.on_error(str(exc))
        return task

    def stop(self) -> None:
        task, self._current = self._current, None
        if task is not None:
            task.cancel()
            if self._backend is not None:
                try:
                    self._backend.stop()
                except Exception as exc:  # noqa: BLE001
                    _logger.warning("Stopping narration failed: %s", exc)
        self._set_speaking(False)

    def dispose(self) -> None:
        self.stop()
        self._backend = None

    # Internal ---------------------------------------------------------
    def _task_done(self, task: NarrationTask) -> None:
        if task is self._current:
            self._current = None
        self._set_speaking(False)

    def _set_speaking(self, value: bool) -> None:
        if value == self._speaking:
            return
        self._speaking = value
        self.speakingChanged.emit(value)
