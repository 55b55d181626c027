"""Infrastructure adapters for external tools, storage and logging."""
