"""Infrastructure layer: store implementations."""
