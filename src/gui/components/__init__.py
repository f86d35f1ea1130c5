"""Reusable widgets: tour overlay and role navigation sidebar."""
