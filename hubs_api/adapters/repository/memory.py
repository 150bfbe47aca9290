"""
In-memory repository adapter - Implements HubRepository protocol.

Default store for local runs and tests. Records live in a dict keyed by
integer id; every read returns copies so callers cannot mutate stored state.
"""

import asyncio
import copy
import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from hubs_api.adapters.repository.fields import parse_hub_id, writable_fields
from hubs_api.domain.exceptions import InvalidHubData
from hubs_api.domain.ports import Hub

logger = logging.getLogger(__name__)


class InMemoryHubRepository:
    """
    Implements HubRepository protocol with a process-local dict.

    Uses structural subtyping - no explicit inheritance from Protocol.
    An asyncio.Lock serializes writes so id assignment and the name
    uniqueness check stay atomic under concurrent requests.
    """

    def __init__(self, hubs: Iterable[Mapping[str, Any]] = ()) -> None:
        """
        Initialize the store, optionally seeded with hubs.

        Args:
            hubs: Initial records; each must satisfy the insert rules
        """
        self._hubs: dict[int, Hub] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()
        for hub in hubs:
            self._insert(hub)

    async def find(self) -> list[Hub]:
        return [copy.deepcopy(self._hubs[key]) for key in sorted(self._hubs)]

    async def find_by_id(self, hub_id: str) -> Hub | None:
        key = parse_hub_id(hub_id)
        if key is None or key not in self._hubs:
            return None
        return copy.deepcopy(self._hubs[key])

    async def add(self, data: Any) -> Hub:
        async with self._lock:
            return copy.deepcopy(self._insert(data))

    async def update(self, hub_id: str, data: Any) -> Hub | None:
        fields = writable_fields(data, creating=False)

        async with self._lock:
            key = parse_hub_id(hub_id)
            if key is None or key not in self._hubs:
                return None

            if "name" in fields:
                self._check_unique_name(fields["name"], exclude=key)

            hub = self._hubs[key]
            hub.update(copy.deepcopy(fields))
            hub["updated_at"] = datetime.now(timezone.utc)
            return copy.deepcopy(hub)

    async def remove(self, hub_id: str) -> int:
        async with self._lock:
            key = parse_hub_id(hub_id)
            if key is None or key not in self._hubs:
                return 0
            del self._hubs[key]
            logger.debug("Removed hub %s", key)
            return 1

    def _insert(self, data: Any) -> Hub:
        fields = writable_fields(data, creating=True)
        self._check_unique_name(fields["name"])

        now = datetime.now(timezone.utc)
        hub = {"id": self._next_id, **copy.deepcopy(fields), "created_at": now, "updated_at": now}
        self._hubs[self._next_id] = hub
        self._next_id += 1
        return hub

    def _check_unique_name(self, name: Any, exclude: int | None = None) -> None:
        for key, hub in self._hubs.items():
            if key != exclude and hub.get("name") == name:
                raise InvalidHubData(f"Hub name already exists: {name}")
