"""Infrastructure layer for identity concerns."""
