"""Application layer for identity: request context and services."""
