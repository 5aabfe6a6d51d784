"""Repository implementations for the JSON and SQL backends."""
