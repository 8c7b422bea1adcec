"""Core services: configuration, logging and caching."""
