"""
Journal Models - Meal, exercise and tracking log entries.

Journals are independent of DaySummary: logging a meal never changes the
day's calorie metric.
"""

from enum import Enum
from typing import Optional
from pydantic import Field

from .health import CamelModel


class MealType(str, Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"


class MealLogCreate(CamelModel):
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    meal_type: MealType
    food_name: str = Field(..., min_length=1)
    calories: float = Field(0, ge=0)
    protein: float = Field(0, ge=0)  # grams
    carbs: float = Field(0, ge=0)  # grams
    fat: float = Field(0, ge=0)  # grams
    notes: Optional[str] = None


class MealLogEntry(MealLogCreate):
    id: str
    timestamp: int  # ms since epoch, used for ordering


class ExerciseLogCreate(CamelModel):
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    exercise_type: str = Field(..., min_length=1)
    duration: float = Field(0, ge=0)  # minutes
    calories_burned: float = Field(0, ge=0)
    notes: Optional[str] = None


class ExerciseLogEntry(ExerciseLogCreate):
    id: str
    timestamp: int


class TrackingReading(CamelModel):
    """One heart-rate/step reading. The timestamp is an ISO-8601 UTC string."""

    id: str
    heart_rate: int = Field(..., ge=0)  # bpm
    steps: int = Field(0, ge=0)
    timestamp: str

    @property
    def date(self) -> str:
        return self.timestamp[:10]
