"""Domain entities and API models."""
