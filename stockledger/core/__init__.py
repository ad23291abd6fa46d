"""Core domain layer: entities, ports, exceptions and pure services."""
