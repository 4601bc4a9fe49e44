"""
Local Filesystem Storage Implementation.
Each key is stored as its own JSON file inside a base directory.
"""

import logging
import re
import aiofiles
from pathlib import Path
from typing import Optional, List
from urllib.parse import quote, unquote

from .interface import KeyValueStore

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9:._-]+$")


class LocalStorage(KeyValueStore):
    """
    Local filesystem key/value store.
    Keys map to "<quoted key>.json" files under base_dir.
    """

    def __init__(self, base_dir: str = "./data"):
        """
        Initialize local storage with a base directory.

        Args:
            base_dir: Base directory for all stored files
        """
        self.base_dir = Path(base_dir).resolve()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, key: str) -> Path:
        """Convert a storage key to a file path within the base directory."""
        if not key or not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")

        full_path = (self.base_dir / f"{quote(key, safe='')}.json").resolve()

        # Security check: ensure path is within base_dir
        if full_path.parent != self.base_dir:
            raise ValueError(f"Invalid storage key: {key!r} - path traversal detected")

        return full_path

    async def get_item(self, key: str) -> Optional[str]:
        try:
            full_path = self._get_full_path(key)
            if not full_path.exists():
                return None

            async with aiofiles.open(full_path, 'r', encoding='utf-8') as f:
                return await f.read()
        except Exception as e:
            logger.warning(f"Error loading key {key}: {e}")
            return None

    async def set_item(self, key: str, value: str) -> bool:
        try:
            full_path = self._get_full_path(key)
            tmp_path = full_path.parent / (full_path.name + '.tmp')

            async with aiofiles.open(tmp_path, 'w', encoding='utf-8') as f:
                await f.write(value)
            tmp_path.replace(full_path)

            return True
        except Exception as e:
            logger.warning(f"Error saving key {key}: {e}")
            return False

    async def remove_item(self, key: str) -> bool:
        try:
            full_path = self._get_full_path(key)
            if full_path.exists():
                full_path.unlink()
                return True
            return False
        except Exception as e:
            logger.warning(f"Error removing key {key}: {e}")
            return False

    async def get_all_keys(self) -> List[str]:
        try:
            return sorted(unquote(p.stem) for p in self.base_dir.glob("*.json"))
        except Exception as e:
            logger.warning(f"Error listing keys in {self.base_dir}: {e}")
            return []
