"""
Unit tests for InMemoryHubRepository.

Tests verify the store honours the hub repository contract and the
hubs table rules (required unique name, generated columns).
"""

import asyncio

import pytest

from hubs_api.adapters.repository.memory import InMemoryHubRepository
from hubs_api.domain.exceptions import HubStoreError, InvalidHubData

pytestmark = pytest.mark.anyio


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class TestFind:
    """Tests for find and find_by_id."""

    async def test_find_returns_hubs_in_id_order(self, repository: InMemoryHubRepository) -> None:
        hubs = await repository.find()
        assert [hub["id"] for hub in hubs] == [1, 2, 3]

    async def test_find_on_empty_store(self) -> None:
        assert await InMemoryHubRepository().find() == []

    async def test_find_by_id_returns_hub(self, repository: InMemoryHubRepository) -> None:
        hub = await repository.find_by_id("2")
        assert hub is not None
        assert hub["name"] == "api-2"

    @pytest.mark.parametrize("hub_id", ["99", "abc", "", "01", "1.0", " 1", "-1", "99999999999"])
    async def test_find_by_id_unknown_returns_none(
        self, repository: InMemoryHubRepository, hub_id: str
    ) -> None:
        assert await repository.find_by_id(hub_id) is None

    async def test_returned_hubs_are_copies(self, repository: InMemoryHubRepository) -> None:
        hub = await repository.find_by_id("1")
        hub["name"] = "mutated"

        assert (await repository.find_by_id("1"))["name"] == "api-1"


class TestAdd:
    """Tests for add."""

    async def test_add_assigns_id_and_timestamps(self, repository: InMemoryHubRepository) -> None:
        hub = await repository.add({"name": "web-1", "region": "eu"})

        assert hub["id"] == 4
        assert hub["name"] == "web-1"
        assert hub["region"] == "eu"
        assert hub["created_at"] == hub["updated_at"]

    async def test_ids_are_not_reused(self, repository: InMemoryHubRepository) -> None:
        await repository.remove("3")
        hub = await repository.add({"name": "web-1"})
        assert hub["id"] == 4

    async def test_add_requires_name(self, repository: InMemoryHubRepository) -> None:
        with pytest.raises(InvalidHubData, match="name is required"):
            await repository.add({"region": "eu"})

    async def test_add_rejects_null_name(self, repository: InMemoryHubRepository) -> None:
        with pytest.raises(InvalidHubData):
            await repository.add({"name": None})

    async def test_add_rejects_duplicate_name(self, repository: InMemoryHubRepository) -> None:
        with pytest.raises(InvalidHubData, match="already exists"):
            await repository.add({"name": "api-1"})

    async def test_add_rejects_generated_fields(self, repository: InMemoryHubRepository) -> None:
        with pytest.raises(InvalidHubData, match="id"):
            await repository.add({"id": 10, "name": "web-1"})

    async def test_add_rejects_non_mapping(self, repository: InMemoryHubRepository) -> None:
        with pytest.raises(InvalidHubData, match="JSON object"):
            await repository.add([{"name": "web-1"}])

    async def test_invalid_data_is_store_error(self, repository: InMemoryHubRepository) -> None:
        with pytest.raises(HubStoreError):
            await repository.add({})

    async def test_concurrent_adds_get_distinct_ids(self) -> None:
        repository = InMemoryHubRepository()

        hubs = await asyncio.gather(*(repository.add({"name": f"hub-{i}"}) for i in range(20)))

        assert sorted(hub["id"] for hub in hubs) == list(range(1, 21))


class TestUpdate:
    """Tests for update."""

    async def test_update_merges_fields(self, repository: InMemoryHubRepository) -> None:
        await repository.update("1", {"region": "us"})
        updated = await repository.update("1", {"name": "api-1b"})

        assert updated["name"] == "api-1b"
        assert updated["region"] == "us"
        assert updated["updated_at"] >= updated["created_at"]

    async def test_update_unknown_returns_none(self, repository: InMemoryHubRepository) -> None:
        assert await repository.update("99", {"name": "ghost"}) is None

    async def test_update_keeps_own_name(self, repository: InMemoryHubRepository) -> None:
        updated = await repository.update("1", {"name": "api-1"})
        assert updated["name"] == "api-1"

    async def test_update_rejects_taken_name(self, repository: InMemoryHubRepository) -> None:
        with pytest.raises(InvalidHubData):
            await repository.update("1", {"name": "api-2"})

    async def test_update_rejects_empty_data(self, repository: InMemoryHubRepository) -> None:
        with pytest.raises(InvalidHubData, match="Empty update"):
            await repository.update("1", {})

    async def test_update_rejects_null_name(self, repository: InMemoryHubRepository) -> None:
        with pytest.raises(InvalidHubData):
            await repository.update("1", {"name": None})


class TestRemove:
    """Tests for remove."""

    async def test_remove_returns_count(self, repository: InMemoryHubRepository) -> None:
        assert await repository.remove("2") == 1
        assert await repository.find_by_id("2") is None

    async def test_remove_unknown_returns_zero(self, repository: InMemoryHubRepository) -> None:
        assert await repository.remove("99") == 0

    async def test_remove_twice(self, repository: InMemoryHubRepository) -> None:
        assert await repository.remove("2") == 1
        assert await repository.remove("2") == 0
