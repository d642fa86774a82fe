"""Application layer: use cases and request context."""
