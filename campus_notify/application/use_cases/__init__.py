"""Application use cases grouped by concern."""
