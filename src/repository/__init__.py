"""Source repository clients and URL normalization."""
