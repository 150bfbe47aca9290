"""Hubs API - HTTP CRUD service over a single hubs collection."""

__version__ = "0.1.0"
