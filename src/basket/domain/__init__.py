"""Domain layer for the basket service."""
