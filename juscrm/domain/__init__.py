"""Domain layer: entities and typed failures."""
