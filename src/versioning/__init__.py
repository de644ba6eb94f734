"""Version parsing, data models and release diffing."""
