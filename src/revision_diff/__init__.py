"""Revision overview and comparison selection for content entities."""
