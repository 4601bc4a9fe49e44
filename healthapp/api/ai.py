"""
AI API endpoints - Coaching content with local fallbacks.

These endpoints always answer: when no chat model is configured or a call
fails, the deterministic fallback is returned instead.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends

from ..core.app_state import AppState
from ..models import (
    AIHealthInsight, AIMealRecommendation, AIWorkoutPlan, AddressSuggestion,
    ChatRequest, MealRecommendationRequest, PartialAddress, WorkoutPreferences,
)
from .deps import get_state

router = APIRouter(prefix="/ai", tags=["ai"])


@router.get("/status")
async def ai_status(state: AppState = Depends(get_state)):
    return {"configured": state.ai.is_configured}


@router.post("/chat")
async def chat(request: ChatRequest, state: AppState = Depends(get_state)):
    context = None
    if request.include_health_context:
        context = {
            "today": state.metrics.today.model_dump(by_alias=True),
            "goals": state.goals.goals.model_dump(by_alias=True),
        }
    reply = await state.ai.chat(request.message, context)
    return {"reply": reply}


@router.post("/meal-recommendations", response_model=List[AIMealRecommendation])
async def meal_recommendations(
    request: Optional[MealRecommendationRequest] = None,
    state: AppState = Depends(get_state)
):
    request = request or MealRecommendationRequest()
    goals = state.goals.goals
    remaining = goals.calories - state.metrics.today.calories
    return await state.ai.meal_recommendations(
        remaining, goals, request.dietary_restrictions, request.favorite_foods
    )


@router.get("/insights", response_model=List[AIHealthInsight])
async def health_insights(state: AppState = Depends(get_state)):
    history = state.metrics.history[:6]
    return await state.ai.health_insights(state.metrics.today, state.goals.goals, history)


@router.post("/workout-plan", response_model=AIWorkoutPlan)
async def workout_plan(
    preferences: Optional[WorkoutPreferences] = None,
    state: AppState = Depends(get_state)
):
    return await state.ai.workout_plan(preferences)


@router.get("/greeting")
async def greeting(state: AppState = Depends(get_state)):
    message = await state.ai.greeting(state.metrics.today, state.goals.goals)
    return {"message": message}


@router.get("/recommendations", response_model=List[str])
async def home_recommendations(state: AppState = Depends(get_state)):
    return await state.ai.home_recommendations(state.metrics.today, state.goals.goals)


@router.post("/address-suggestions", response_model=List[AddressSuggestion])
async def address_suggestions(partial: PartialAddress, state: AppState = Depends(get_state)):
    return await state.ai.address_suggestions(partial)
