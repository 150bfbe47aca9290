"""
Domain layer - Hub repository contract and error types.

Zero framework imports: the API layer and the storage adapters both
depend on this package, never on each other.
"""

from .exceptions import HubStoreError, InvalidHubData
from .ports import Hub, HubRepository

__all__ = [
    "Hub",
    "HubRepository",
    "HubStoreError",
    "InvalidHubData",
]
