"""
Health Data Models - Daily metric snapshots, goals and derived statistics.

Persisted JSON uses the camelCase names the mobile client writes
("bloodPressure", "bloodSugar", ...); Python code uses snake_case.
"""

from datetime import date
from typing import Any, Dict, List, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases, populated by either name."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def normalize_keys(cls, data: Mapping[str, Any], strict: bool = True) -> Dict[str, Any]:
        """
        Map camelCase or snake_case keys onto field names.

        Unknown keys raise when strict, and are dropped otherwise.

        Raises:
            ValueError: If a key matches no field
        """
        lookup = {}
        for name, field in cls.model_fields.items():
            lookup[name] = name
            if field.alias:
                lookup[field.alias] = name

        normalized = {}
        for key, value in data.items():
            if key not in lookup:
                if not strict:
                    continue
                raise ValueError(f"Unknown {cls.__name__} field: {key}")
            normalized[lookup[key]] = value
        return normalized


class DaySummary(CamelModel):
    """One calendar day's health snapshot."""
    date: str  # YYYY-MM-DD, unique within history
    bmi: float = 0.0
    blood_pressure: str = "120/80"  # systolic/diastolic
    blood_sugar: float = 0  # mg/dL
    steps: int = 0
    sleep: float = 0  # hours
    weight: float = 0  # lbs
    water: float = 0  # oz
    calories: float = 0  # kcal
    activity: float = 0  # percent


class DailyGoals(CamelModel):
    """The four daily targets."""
    steps: float = 8000
    water: float = 80  # oz
    sleep: float = 7.5  # hours
    calories: float = 2200  # kcal


class GoalsUpdate(CamelModel):
    """Partial goal update; omitted fields keep their current value."""
    steps: Optional[float] = Field(None, ge=0)
    water: Optional[float] = Field(None, ge=0)
    sleep: Optional[float] = Field(None, ge=0)
    calories: Optional[float] = Field(None, ge=0)


class MetricsState(CamelModel):
    """The persisted metrics record: today plus archived days, newest first."""
    today: DaySummary
    history: List[DaySummary] = Field(default_factory=list)


class WeeklyStats(CamelModel):
    """Averages over the most recent seven day-records."""
    avg_steps: int
    avg_sleep: float
    avg_water: int


class LongTermStats(CamelModel):
    """Summary over the most recent thirty day-records."""
    hydration_score: int  # percent of days meeting the water goal
    active_days: int
    best_steps_day: DaySummary
    avg_weight: float


def today_key(today: Optional[date] = None) -> str:
    """Calendar key (YYYY-MM-DD) for a date, defaulting to the local today."""
    return (today or date.today()).isoformat()
