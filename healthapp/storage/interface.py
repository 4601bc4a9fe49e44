"""
Storage Interface - Abstract base class for the on-device key/value store.
Every piece of persisted state is a JSON string stored under a single key.
"""

from abc import ABC, abstractmethod
from typing import Optional, List


class KeyValueStore(ABC):
    """
    Asynchronous string-keyed key/value store.

    Implementations never raise for I/O problems: reads report a missing or
    unreadable value as None and writes report failure as False.
    """

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Storage key (e.g., "healthapp:metrics:v1")

        Returns:
            Optional[str]: Stored value, or None if absent or unreadable
        """
        pass

    @abstractmethod
    async def set_item(self, key: str, value: str) -> bool:
        """
        Store a value under a key, replacing any previous value.

        Args:
            key: Storage key
            value: Serialized value (usually JSON)

        Returns:
            bool: True if the write succeeded
        """
        pass

    @abstractmethod
    async def remove_item(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            bool: True if a value was removed
        """
        pass

    @abstractmethod
    async def get_all_keys(self) -> List[str]:
        """List every stored key, sorted."""
        pass
