"""
Hub field rules shared by the repository adapters.

These mirror the hubs table so both stores behave the same: ``name`` is
required and non-null, generated columns are read-only, an update must
change at least one field, and only canonical in-range ids can match.
"""

from collections.abc import Mapping
from typing import Any

from hubs_api.domain.exceptions import InvalidHubData

# Columns the store fills in itself
GENERATED_FIELDS = frozenset({"id", "created_at", "updated_at"})


def writable_fields(data: Any, *, creating: bool) -> dict[str, Any]:
    """
    Check a request payload against the table rules.

    Args:
        data: Parsed request body, forwarded unchanged by the API
        creating: True for inserts (name required), False for updates

    Returns:
        A plain dict copy of the fields to write

    Raises:
        InvalidHubData: If the payload breaks a table rule
    """
    if not isinstance(data, Mapping):
        raise InvalidHubData("Hub data must be a JSON object")

    fields = dict(data)

    generated = GENERATED_FIELDS & fields.keys()
    if generated:
        raise InvalidHubData(f"Fields are assigned by the store: {', '.join(sorted(generated))}")

    if creating:
        if fields.get("name") is None:
            raise InvalidHubData("Hub name is required")
    else:
        if not fields:
            raise InvalidHubData("Empty update: no fields to change")
        if "name" in fields and fields["name"] is None:
            raise InvalidHubData("Hub name cannot be null")

    return fields


# Upper bound of the SERIAL (int4) id column
MAX_HUB_ID = 2**31 - 1


def parse_hub_id(hub_id: str) -> int | None:
    """
    Map a URL id onto a stored integer id.

    Only the canonical decimal form matches (``"7"``, not ``"07"``,
    ``" 7"`` or ``"7.0"``), and ids beyond the column range match nothing.

    Returns:
        The integer id, or None when no stored hub can have this id
    """
    text = str(hub_id)
    if not text.isdecimal() or str(int(text)) != text:
        return None
    value = int(text)
    if value > MAX_HUB_ID:
        return None
    return value
