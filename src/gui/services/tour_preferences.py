"""Client-local preference store for the guided tour.

Persists string key/value pairs in a small JSON file inside the application
data directory. The only key the tour writes is ``tourCompleted`` which is
shared by every role: finishing (or skipping) any role's tour marks it.

Persistence is best-effort. A corrupt file is moved aside and treated as
empty; a failed write is logged and reported through the return value.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from typing import Dict, Optional

from config import settings

__all__ = ["PreferencesStore", "TourPreferencesStore", "InMemoryPreferencesStore"]

_logger = logging.getLogger(__name__)


class PreferencesStore:
    """Shared tour-flag helpers over an abstract ``get``/``set``."""

    def get(self, key: str) -> Optional[str]:  # pragma: no cover - abstract
        raise NotImplementedError

    def set(self, key: str, value: str) -> bool:  # pragma: no cover - abstract
        raise NotImplementedError

    def mark_tour_completed(self) -> bool:
        return self.set(settings.TOUR_COMPLETED_KEY, settings.TOUR_COMPLETED_VALUE)

    def is_tour_completed(self) -> bool:
        return self.get(settings.TOUR_COMPLETED_KEY) == settings.TOUR_COMPLETED_VALUE


class InMemoryPreferencesStore(PreferencesStore):
    def __init__(self, initial: Dict[str, str] | None = None) -> None:
        self.values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> bool:
        self.values[key] = value
        return True


class TourPreferencesStore(PreferencesStore):
    def __init__(self, base_dir: str, filename: str = settings.PREFERENCES_FILENAME):
        self.base_dir = base_dir
        self.filename = filename
        os.makedirs(self.base_dir, exist_ok=True)

    def path(self) -> str:
        return os.path.join(self.base_dir, self.filename)

    def _load(self) -> Optional[Dict[str, str]]:
        """Stored values, or None when the file exists but cannot be read."""
        path = self.path()
        if not os.path.exists(path):
            return {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                obj = json.load(f)
        except OSError as exc:
            # unreadable is not corrupt; leave the file for the next attempt
            _logger.warning("Could not read preferences %s: %s", path, exc)
            return None
        except ValueError as exc:
            self._move_aside(path, exc)
            return {}
        if not isinstance(obj, dict):
            self._move_aside(path, ValueError("preferences root must be an object"))
            return {}
        return {str(k): str(v) for k, v in obj.items()}

    def _move_aside(self, path: str, reason: Exception) -> None:
        _logger.warning("Discarding corrupt preferences %s: %s", path, reason)
        backup = path + f".corrupt.{datetime.now().strftime('%Y%m%d%H%M%S')}"
        try:
            os.replace(path, backup)
        except OSError as exc:
            _logger.warning("Could not move corrupt preferences aside: %s", exc)

    def get(self, key: str) -> Optional[str]:
        return (self._load() or {}).get(key)

    def set(self, key: str, value: str) -> bool:
        data = self._load()
        if data is None:
            return False
        data[key] = value
        path = self.path()
        tmp = path + ".tmp"
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp, path)
            return True
        except OSError as exc:
            _logger.warning("Could not persist preference %s: %s", key, exc)
            return False

    def reset(self) -> None:
        try:
            os.remove(self.path())
        except FileNotFoundError:
            pass
