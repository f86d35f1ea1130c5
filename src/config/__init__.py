"""Application-wide configuration constants."""
