"""Shared helpers: HTTP, logging and error types."""
