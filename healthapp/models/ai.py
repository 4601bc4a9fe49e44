"""
AI Models - Schemas for structured chat-model output.

Model output is untrusted: every structured answer is validated against
these schemas before use.
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

from .health import CamelModel
from .logs import MealType


class AIMealRecommendation(CamelModel):
    name: str
    category: MealType
    calories: float = Field(ge=0)
    protein: float = Field(0, ge=0)
    carbs: float = Field(0, ge=0)
    fat: float = Field(0, ge=0)
    reason: str = ""
    ingredients: List[str] = Field(default_factory=list)
    prep_time: float = Field(0, ge=0)  # minutes


class WorkoutExercise(CamelModel):
    name: str
    sets: Optional[int] = None
    reps: Optional[int] = None
    duration: Optional[float] = None  # minutes
    rest: Optional[float] = None  # seconds


Difficulty = Literal["beginner", "intermediate", "advanced"]


class AIWorkoutPlan(CamelModel):
    name: str
    duration: float  # minutes
    exercises: List[WorkoutExercise] = Field(default_factory=list)
    calories_burned: float = 0
    difficulty: Difficulty = "intermediate"
    focus: str = "full body"


class WorkoutPreferences(CamelModel):
    duration: Optional[float] = Field(None, gt=0)
    difficulty: Optional[Difficulty] = None
    focus: Optional[str] = None
    available_equipment: Optional[List[str]] = None


class AIHealthInsight(CamelModel):
    title: str
    insight: str
    recommendation: str
    priority: Literal["high", "medium", "low"] = "medium"

    @field_validator("priority", mode="before")
    @classmethod
    def _lower_priority(cls, value: object) -> object:
        # Models sometimes answer "High" or "MEDIUM"
        return value.strip().lower() if isinstance(value, str) else value


class AddressSuggestion(CamelModel):
    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    full_address: str = ""


class PartialAddress(CamelModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=4000)
    include_health_context: bool = True


class MealRecommendationRequest(CamelModel):
    dietary_restrictions: Optional[List[str]] = None
    favorite_foods: Optional[List[str]] = None
