"""Application layer: bootstrap and session context."""

from .bootstrap import create_application, TourAppContext  # noqa: F401
