"""Domain layer: interfaces, entities and exceptions."""
