"""
Write-behind persistence.

Mutations update in-memory state synchronously and hand the serialized value
to WriteBehind.schedule(), which writes it on the running event loop without
the caller awaiting it. Writes for one key are coalesced (only the newest
value is written) and all writes are serialized, so an older value can never
land after a newer one. flush() awaits everything outstanding.
"""

import asyncio
import logging
from typing import Dict, Optional, Set

from .interface import KeyValueStore

logger = logging.getLogger(__name__)


class WriteBehind:
    """Best-effort, non-blocking writer in front of a KeyValueStore."""

    def __init__(self, store: KeyValueStore):
        self.store = store
        self._pending: Dict[str, str] = {}
        self._tasks: Set[asyncio.Task] = set()
        self._lock: Optional[asyncio.Lock] = None
        self._last_result: Dict[str, bool] = {}

    @property
    def pending_keys(self) -> Set[str]:
        return set(self._pending)

    def schedule(self, key: str, value: str) -> None:
        """
        Queue a write and start draining it if an event loop is running.

        Outside an event loop the value stays queued until flush().
        """
        self._pending[key] = value
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        task = loop.create_task(self._drain())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def write_now(self, key: str, value: str) -> bool:
        """Queue a write and wait until it (and anything queued before it) is done."""
        self._pending[key] = value
        await self._drain()
        return self._last_result.get(key, False)

    async def remove_now(self, key: str) -> bool:
        """Drop any queued value for a key and delete it from the store."""
        self._pending.pop(key, None)
        async with self._get_lock():
            try:
                return await self.store.remove_item(key)
            except Exception as e:
                logger.warning(
                    f"Removing {key} failed: {e}",
                    exc_info=True,
                    extra={"extra_fields": {"key": key, "error": str(e)}}
                )
                return False

    async def flush(self) -> None:
        """Wait for every scheduled write, then drain anything still queued."""
        while self._tasks:
            tasks = list(self._tasks)
            await asyncio.gather(*tasks)
            self._tasks.difference_update(tasks)
        await self._drain()

    def _get_lock(self) -> asyncio.Lock:
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock

    async def _drain(self) -> None:
        async with self._get_lock():
            while self._pending:
                key = next(iter(self._pending))
                value = self._pending.pop(key)
                await self._write(key, value)

    async def _write(self, key: str, value: str) -> None:
        try:
            ok = await self.store.set_item(key, value)
        except Exception as e:
            self._last_result[key] = False
            logger.warning(
                f"Persisting {key} failed: {e}",
                exc_info=True,
                extra={"extra_fields": {"key": key, "error": str(e)}}
            )
            return
        self._last_result[key] = ok
        if not ok:
            logger.warning(
                f"Persisting {key} failed",
                extra={"extra_fields": {"key": key}}
            )
