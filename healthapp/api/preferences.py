"""
Preferences API endpoints - Light/dark theme.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..core.app_state import AppState
from ..core.preferences import ThemePreference
from .deps import get_state

router = APIRouter(prefix="/preferences", tags=["preferences"])


class ThemeBody(BaseModel):
    preference: ThemePreference


@router.get("/theme", response_model=ThemeBody)
async def get_theme(state: AppState = Depends(get_state)):
    return ThemeBody(preference=state.theme.preference)


@router.put("/theme", response_model=ThemeBody)
async def set_theme(body: ThemeBody, state: AppState = Depends(get_state)):
    return ThemeBody(preference=state.theme.set_preference(body.preference))
