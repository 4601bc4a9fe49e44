"""Storage module - key/value persistence and the write-behind persister."""

from .interface import KeyValueStore
from .local_storage import LocalStorage
from .memory_storage import InMemoryStorage
from .write_behind import WriteBehind

__all__ = ['KeyValueStore', 'LocalStorage', 'InMemoryStorage', 'WriteBehind', 'create_storage']


def create_storage(storage_type: str = "local", base_dir: str = "./data") -> KeyValueStore:
    """
    Create the configured key/value store.

    Args:
        storage_type: "local" for JSON files on disk, "memory" for an ephemeral store
        base_dir: Base directory used by local storage

    Raises:
        ValueError: If storage_type is unknown
    """
    if storage_type == "local":
        return LocalStorage(base_dir)
    elif storage_type == "memory":
        return InMemoryStorage()
    else:
        raise ValueError(f"Unsupported storage type: {storage_type}")
