"""
Journal API endpoints - Meal, exercise and tracking logs.

Journal entries are kept apart from today's metrics: logging a meal does
not change the day's calorie count.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Depends, Query, status

from ..core.app_state import AppState
from ..models import MealLogCreate, MealLogEntry, ExerciseLogCreate, ExerciseLogEntry, TrackingReading
from .deps import get_state

router = APIRouter(tags=["journals"])

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


@router.get("/meals", response_model=List[MealLogEntry])
async def list_meals(
    date: Optional[str] = Query(None, pattern=DATE_PATTERN),
    state: AppState = Depends(get_state)
):
    """List meal entries, newest first, optionally for one date."""
    if date:
        return state.meals.by_date(date)
    return state.meals.entries


@router.post("/meals", response_model=MealLogEntry, status_code=status.HTTP_201_CREATED)
async def add_meal(entry: MealLogCreate, state: AppState = Depends(get_state)):
    return await state.meals.add(entry.model_dump())


@router.delete("/meals/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal(entry_id: str, state: AppState = Depends(get_state)):
    if not await state.meals.delete(entry_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Meal log entry not found")


@router.get("/meals/totals")
async def meal_totals(
    date: str = Query(..., pattern=DATE_PATTERN),
    state: AppState = Depends(get_state)
):
    return {"date": date, "calories": state.meals.total_calories_for_date(date)}


@router.get("/exercises", response_model=List[ExerciseLogEntry])
async def list_exercises(
    date: Optional[str] = Query(None, pattern=DATE_PATTERN),
    state: AppState = Depends(get_state)
):
    """List exercise entries, newest first, optionally for one date."""
    if date:
        return state.exercises.by_date(date)
    return state.exercises.entries


@router.post("/exercises", response_model=ExerciseLogEntry, status_code=status.HTTP_201_CREATED)
async def add_exercise(entry: ExerciseLogCreate, state: AppState = Depends(get_state)):
    return await state.exercises.add(entry.model_dump())


@router.delete("/exercises/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exercise(entry_id: str, state: AppState = Depends(get_state)):
    if not await state.exercises.delete(entry_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise log entry not found")


@router.get("/exercises/totals")
async def exercise_totals(
    date: str = Query(..., pattern=DATE_PATTERN),
    state: AppState = Depends(get_state)
):
    return {
        "date": date,
        "caloriesBurned": state.exercises.total_calories_burned_for_date(date),
        "duration": state.exercises.total_duration_for_date(date),
    }


@router.get("/tracking/readings", response_model=List[TrackingReading])
async def list_readings(state: AppState = Depends(get_state)):
    """List tracking readings, newest first."""
    return state.tracking.entries


@router.post("/tracking/readings/sample", response_model=TrackingReading, status_code=status.HTTP_201_CREATED)
async def add_sample_reading(state: AppState = Depends(get_state)):
    return await state.tracking.add_sample_reading()


@router.delete("/tracking/readings", status_code=status.HTTP_204_NO_CONTENT)
async def clear_readings(state: AppState = Depends(get_state)):
    await state.tracking.clear()
