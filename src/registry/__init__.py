"""Provider registry clients."""
