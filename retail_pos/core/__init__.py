"""Core domain layer: entities, interfaces and domain services."""
