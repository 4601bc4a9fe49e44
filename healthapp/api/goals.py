"""
Goals API endpoints.
"""

from fastapi import APIRouter, Depends

from ..core.app_state import AppState
from ..models import DailyGoals, GoalsUpdate
from .deps import get_state

router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("", response_model=DailyGoals)
async def get_goals(state: AppState = Depends(get_state)):
    return state.goals.goals


@router.patch("", response_model=DailyGoals)
async def update_goals(patch: GoalsUpdate, state: AppState = Depends(get_state)):
    """Merge a partial update; sending all four goals replaces them."""
    return state.goals.update_goals(patch.model_dump(exclude_none=True))
