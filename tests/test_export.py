"""
Tests for the JSON export service.
"""

import json
import pytest
from datetime import date

from healthapp.models import MetricsState
from healthapp.services import ExportService, ExportError
from healthapp.storage import InMemoryStorage
from healthapp.storage.keys import METRICS_KEY

from conftest import make_day


@pytest.fixture
def stored_state():
    state = MetricsState(
        today=make_day("2024-03-10", steps=6000, calories=1500, water=40, weight=165, bmi=23.7,
                       sleep=7, activity=70, blood_sugar=99),
        history=[make_day("2024-03-09", steps=9000, calories=2100, water=82, weight=166, bmi=23.8,
                          sleep=8, activity=85)],
    )
    return InMemoryStorage({METRICS_KEY: state.model_dump_json(by_alias=True)})


class TestExportService:

    @pytest.mark.asyncio
    async def test_meal_log(self, stored_state, tmp_path):
        service = ExportService(stored_state, str(tmp_path), clock=lambda: date(2024, 3, 10))
        path = await service.export_meal_log()

        assert path.name == "meal-log-2024-03-10.json"
        rows = json.loads(path.read_text())
        assert rows == [
            {"date": "2024-03-10", "calories": 1500, "water": 40, "weight": 165, "bmi": 23.7},
            {"date": "2024-03-09", "calories": 2100, "water": 82, "weight": 166, "bmi": 23.8},
        ]

    @pytest.mark.asyncio
    async def test_exercise_log(self, stored_state, tmp_path):
        service = ExportService(stored_state, str(tmp_path), clock=lambda: date(2024, 3, 10))
        path = await service.export_exercise_log()

        assert path.name == "exercise-log-2024-03-10.json"
        rows = json.loads(path.read_text())
        assert set(rows[0]) == {"date", "steps", "activity", "sleep", "weight", "bmi"}
        assert rows[1]["steps"] == 9000

    @pytest.mark.asyncio
    async def test_nothing_stored(self, tmp_path):
        service = ExportService(InMemoryStorage(), str(tmp_path))
        with pytest.raises(ExportError):
            await service.export_meal_log()
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.asyncio
    async def test_unreadable_record(self, tmp_path):
        service = ExportService(InMemoryStorage({METRICS_KEY: "garbage"}), str(tmp_path))
        with pytest.raises(ExportError):
            await service.export_exercise_log()
