"""Domain layer: entities, services, repository contracts and errors."""
