"""
Metrics API endpoints - Today's snapshot, day close and derived statistics.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException, Depends, status
from pydantic import BaseModel

from ..core.app_state import AppState
from ..models import DaySummary, MetricsState, WeeklyStats, LongTermStats
from .deps import get_state

router = APIRouter(prefix="/metrics", tags=["metrics"])


class MetricValue(BaseModel):
    value: Any


class Increment(BaseModel):
    amount: float


class LogDayResult(BaseModel):
    outcome: str
    state: MetricsState


def _bad_request(e: ValueError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/today", response_model=DaySummary)
async def get_today(state: AppState = Depends(get_state)):
    return state.metrics.today


@router.patch("/today", response_model=DaySummary)
async def update_today(patch: Dict[str, Any], state: AppState = Depends(get_state)):
    """
    Replace one or more fields of today. Keys may be camelCase or snake_case.
    """
    try:
        return state.metrics.update_today(patch)
    except ValueError as e:
        raise _bad_request(e)


@router.put("/today/{field}", response_model=DaySummary)
async def set_metric(field: str, body: MetricValue, state: AppState = Depends(get_state)):
    try:
        return state.metrics.set_metric(field, body.value)
    except ValueError as e:
        raise _bad_request(e)


@router.post("/today/steps", response_model=DaySummary)
async def add_steps(body: Increment, state: AppState = Depends(get_state)):
    return state.metrics.add_steps(body.amount)


@router.post("/today/water", response_model=DaySummary)
async def add_water(body: Increment, state: AppState = Depends(get_state)):
    return state.metrics.add_water(body.amount)


@router.post("/today/calories", response_model=DaySummary)
async def add_calories(body: Increment, state: AppState = Depends(get_state)):
    return state.metrics.add_calories(body.amount)


@router.post("/log-day", response_model=LogDayResult)
async def log_day(state: AppState = Depends(get_state)):
    """
    Archive today, start a fresh day and send the goal notification.
    """
    outcome = await state.metrics.log_day()
    return LogDayResult(outcome=outcome.value, state=state.metrics.state)


@router.get("/history", response_model=List[DaySummary])
async def get_history(state: AppState = Depends(get_state)):
    return state.metrics.history


@router.get("/recommendations", response_model=List[str])
async def get_recommendations(state: AppState = Depends(get_state)):
    return state.metrics.recommendations


@router.get("/weekly", response_model=WeeklyStats)
async def get_weekly_stats(state: AppState = Depends(get_state)):
    return state.metrics.weekly_stats


@router.get("/long-term", response_model=LongTermStats)
async def get_long_term_stats(state: AppState = Depends(get_state)):
    return state.metrics.long_term_stats
