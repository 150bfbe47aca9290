"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the hub repository contract the API layer depends on.
Adapters implement it structurally; the API never imports an adapter.
"""

from typing import Any, Protocol

# A hub is an opaque record. Only ``id`` is meaningful to the API layer.
Hub = dict[str, Any]


class HubRepository(Protocol):
    """Port interface for hub persistence."""

    async def find(self) -> list[Hub]:
        """
        Return every hub, ordered by id.

        Raises:
            HubStoreError: If the store cannot be read
        """
        ...

    async def find_by_id(self, hub_id: str) -> Hub | None:
        """
        Look up a single hub.

        Args:
            hub_id: Identifier as received in the URL (opaque string)

        Returns:
            The stored hub, or None if no hub has this id
        """
        ...

    async def add(self, data: Any) -> Hub:
        """
        Insert a new hub.

        The store assigns ``id`` and timestamps. ``data`` is forwarded
        from the request body unchanged, so it may not even be a mapping.

        Returns:
            The stored hub including generated fields

        Raises:
            InvalidHubData: If the store rejects the data
        """
        ...

    async def update(self, hub_id: str, data: Any) -> Hub | None:
        """
        Apply ``data`` to an existing hub.

        Returns:
            The updated hub, or None if no hub has this id

        Raises:
            InvalidHubData: If the store rejects the data
        """
        ...

    async def remove(self, hub_id: str) -> int:
        """
        Delete a hub.

        Returns:
            Number of hubs removed (0 when the id is unknown)
        """
        ...
