"""Core types, configuration and infrastructure."""
