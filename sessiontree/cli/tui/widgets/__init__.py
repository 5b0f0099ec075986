"""Widgets for the session tree app."""
