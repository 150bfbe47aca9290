"""
Domain exceptions - Semantic error types for hub storage.

Repository adapters translate their infrastructure failures into these
types so the API layer can report them without knowing the storage engine.
"""


class HubStoreError(Exception):
    """Base class for hub storage failures."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        # Storage-specific error code (SQLSTATE for PostgreSQL), if any
        self.code = code


class InvalidHubData(HubStoreError):
    """Hub data rejected by the store (missing name, duplicate, unknown field)."""

    pass
