"""Infrastructure layer - Price source, event bus and clocks."""
