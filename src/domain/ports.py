"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from typing import Protocol


class KeyValueStore(Protocol):
    """
    Port interface for the user registry.

    Keys are normalized email addresses, values are bcrypt password hashes.
    Each adapter instance is bound to a single namespace.
    """

    def get(self, key: str) -> str | None:
        """
        Read the value stored under a key.

        Args:
            key: Key to look up

        Returns:
            Stored value, or None if the key does not exist
        """
        ...

    def put(self, key: str, value: str) -> None:
        """
        Write a value, replacing any existing value.

        Args:
            key: Key to write
            value: Value to store
        """
        ...

    def put_if_absent(self, key: str, value: str) -> bool:
        """
        Atomically write a value only if the key does not exist yet.

        Args:
            key: Key to write
            value: Value to store

        Returns:
            True if the value was written, False if the key already existed
        """
        ...

    def check_connection(self) -> None:
        """Raise if the underlying store is unreachable."""
        ...
