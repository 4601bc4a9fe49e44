"""
Export Service - Writes history projections to JSON files for sharing.

Exports read the persisted metrics record rather than in-memory state, so
pending writes should be flushed first.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, List

import aiofiles

from ..models.health import MetricsState, today_key
from ..storage import KeyValueStore
from ..storage.keys import METRICS_KEY

logger = logging.getLogger(__name__)

MEAL_LOG_FIELDS = ("date", "calories", "water", "weight", "bmi")
EXERCISE_LOG_FIELDS = ("date", "steps", "activity", "sleep", "weight", "bmi")


class ExportError(Exception):
    """Nothing is available to export."""


class ExportService:
    """
    Args:
        store: Key/value store holding the metrics record
        export_dir: Directory the JSON files are written to
        clock: Returns the date used in the file names
    """

    def __init__(self, store: KeyValueStore, export_dir: str = "./exports",
                 clock: Callable[[], date] = date.today):
        self.store = store
        self.export_dir = Path(export_dir)
        self.clock = clock

    async def _load_days(self) -> List[Dict[str, Any]]:
        raw = await self.store.get_item(METRICS_KEY)
        if not raw:
            raise ExportError("No health data available to export yet.")
        try:
            state = MetricsState.model_validate(json.loads(raw))
        except Exception as e:
            raise ExportError(f"Stored health data could not be read: {e}") from e
        return [day.model_dump(by_alias=True) for day in [state.today, *state.history]]

    async def _write(self, prefix: str, fields: tuple) -> Path:
        days = await self._load_days()
        rows = [{name: day[name] for name in fields} for day in days]

        self.export_dir.mkdir(parents=True, exist_ok=True)
        path = self.export_dir / f"{prefix}-{today_key(self.clock())}.json"
        async with aiofiles.open(path, 'w', encoding='utf-8') as f:
            await f.write(json.dumps(rows, indent=2))

        logger.info(
            f"Exported {len(rows)} days to {path.name}",
            extra={"extra_fields": {"export_file": str(path), "days": len(rows)}}
        )
        return path

    async def export_meal_log(self) -> Path:
        """
        Write date, calories, water, weight and BMI for today and history.

        Raises:
            ExportError: If no metrics have been stored yet
        """
        return await self._write("meal-log", MEAL_LOG_FIELDS)

    async def export_exercise_log(self) -> Path:
        """
        Write date, steps, activity, sleep, weight and BMI for today and history.

        Raises:
            ExportError: If no metrics have been stored yet
        """
        return await self._write("exercise-log", EXERCISE_LOG_FIELDS)
