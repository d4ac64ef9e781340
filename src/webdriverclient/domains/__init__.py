"""Domain layer: shared kernel value objects and the error taxonomy."""
