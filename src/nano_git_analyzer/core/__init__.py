"""Core shared definitions."""
