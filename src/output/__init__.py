"""Presentation: highlighting, console rendering and JSON export."""
