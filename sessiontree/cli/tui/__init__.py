"""Textual navigator for the session lineage tree."""
