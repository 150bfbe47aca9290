"""Repository adapters - In-memory and PostgreSQL hub stores."""

from .memory import InMemoryHubRepository
from .postgres import PostgresHubRepository, run_migrations

__all__ = ["InMemoryHubRepository", "PostgresHubRepository", "run_migrations"]
