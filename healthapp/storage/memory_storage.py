"""
In-memory key/value store for ephemeral sessions (storage_type=memory) and tests.
"""

from typing import Dict, List, Optional

from .interface import KeyValueStore


class InMemoryStorage(KeyValueStore):
    """Dictionary-backed store. Nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set_item(self, key: str, value: str) -> bool:
        self._data[key] = value
        return True

    async def remove_item(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    async def get_all_keys(self) -> List[str]:
        return sorted(self._data)
