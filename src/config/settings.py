"""Global configuration and constants for the CardioRegistry tour."""

from __future__ import annotations

import os
from typing import Final

DATA_DIR: Final = os.environ.get("CARDIOREGISTRY_DATA_DIR", "data")
LOG_LEVEL: Final = os.environ.get("CARDIOREGISTRY_LOG_LEVEL", "WARNING")

# Role whose tour is used when the viewer's role has no configuration
DEFAULT_ROLE: Final = "admin"

# Client-local completion flag (shared by every role)
PREFERENCES_FILENAME: Final = "tour_preferences.json"
TOUR_COMPLETED_KEY: Final = "tourCompleted"
TOUR_COMPLETED_VALUE: Final = "true"

# QTextToSpeech scales: rate/pitch in [-1.0, 1.0] (0 = engine default), volume in [0.0, 1.0]
NARRATION_RATE: Final = -0.1
NARRATION_PITCH: Final = 0.0
NARRATION_VOLUME: Final = 1.0

HIGHLIGHT_PADDING: Final = 8  # px around the spotlighted widget
