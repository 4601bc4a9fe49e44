"""
Journal Stores - Append-only meal, exercise and tracking logs.

Each journal is a JSON array under its own key, kept newest first. Entries
are never folded back into the day's calorie or activity metrics.
"""

import json
import logging
import random
import string
import time
from datetime import datetime, timezone
from typing import Any, Generic, List, Mapping, Type, TypeVar

from pydantic import BaseModel, TypeAdapter

from ..models.logs import MealLogEntry, ExerciseLogEntry, TrackingReading
from ..storage import WriteBehind
from ..storage.keys import MEAL_LOGS_KEY, EXERCISE_LOGS_KEY, TRACKING_READINGS_KEY

logger = logging.getLogger(__name__)

EntryT = TypeVar("EntryT", bound=BaseModel)

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_entry_id(now_ms: int) -> str:
    """Millisecond timestamp followed by nine random base-36 characters."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"{now_ms}{suffix}"


def _now_ms() -> int:
    return int(time.time() * 1000)


class JournalStore(Generic[EntryT]):
    """Generic append-only journal persisted under one key."""

    entry_model: Type[EntryT]
    storage_key: str

    def __init__(self, persister: WriteBehind):
        self.persister = persister
        self.entries: List[EntryT] = []
        self._adapter = TypeAdapter(List[self.entry_model])

    async def load(self) -> List[EntryT]:
        try:
            raw = await self.persister.store.get_item(self.storage_key)
            if raw:
                entries = self._adapter.validate_python(json.loads(raw))
                self.entries = sorted(entries, key=lambda e: e.timestamp, reverse=True)
        except Exception as e:
            logger.error(f"Error loading {self.storage_key}: {e}")
        return self.entries

    async def add(self, entry: Mapping[str, Any]) -> EntryT:
        """Append a new entry, stamping it with an id and the current time."""
        now = _now_ms()
        fields = {**self.entry_model.normalize_keys(entry), "id": generate_entry_id(now), "timestamp": now}
        new_entry = self.entry_model.model_validate(fields)
        await self._save([new_entry, *self.entries])
        return new_entry

    async def delete(self, entry_id: str) -> bool:
        remaining = [e for e in self.entries if e.id != entry_id]
        if len(remaining) == len(self.entries):
            return False
        await self._save(remaining)
        return True

    def by_date(self, day: str) -> List[EntryT]:
        return [e for e in self.entries if e.date == day]

    async def _save(self, entries: List[EntryT]) -> None:
        payload = json.dumps(
            [e.model_dump(mode="json", by_alias=True) for e in entries],
            ensure_ascii=False,
        )
        self.entries = entries
        if not await self.persister.write_now(self.storage_key, payload):
            logger.error(f"Error saving {self.storage_key}")


class MealJournal(JournalStore[MealLogEntry]):
    entry_model = MealLogEntry
    storage_key = MEAL_LOGS_KEY

    def total_calories_for_date(self, day: str) -> float:
        return sum(e.calories for e in self.by_date(day))


class ExerciseJournal(JournalStore[ExerciseLogEntry]):
    entry_model = ExerciseLogEntry
    storage_key = EXERCISE_LOGS_KEY

    def total_calories_burned_for_date(self, day: str) -> float:
        return sum(e.calories_burned for e in self.by_date(day))

    def total_duration_for_date(self, day: str) -> float:
        return sum(e.duration for e in self.by_date(day))


def _now_iso() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TrackingJournal(JournalStore[TrackingReading]):
    """Heart-rate and step readings, stamped with ISO timestamps."""

    entry_model = TrackingReading
    storage_key = TRACKING_READINGS_KEY

    async def add(self, entry: Mapping[str, Any]) -> TrackingReading:
        fields = {
            **self.entry_model.normalize_keys(entry),
            "id": generate_entry_id(_now_ms()),
            "timestamp": _now_iso(),
        }
        reading = self.entry_model.model_validate(fields)
        await self._save([reading, *self.entries])
        return reading

    async def add_sample_reading(self) -> TrackingReading:
        """Record a simulated reading: 55-114 bpm and 0-14999 steps."""
        return await self.add({
            "heart_rate": random.randint(55, 114),
            "steps": random.randrange(15000),
        })

    async def clear(self) -> None:
        """Forget every reading and delete the key."""
        self.entries = []
        await self.persister.remove_now(self.storage_key)
        logger.info(f"Cleared {self.storage_key}")
