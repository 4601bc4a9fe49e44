"""
Profile API endpoints - Profile record with derived BMI.
"""

from fastapi import APIRouter, Depends

from ..core.app_state import AppState
from ..models import UserProfile, ProfileUpdate, ProfileIn, ProfileView
from .deps import get_state

router = APIRouter(prefix="/profile", tags=["profile"])


def _view(state: AppState) -> ProfileView:
    return ProfileView(
        **state.profile.profile.model_dump(),
        bmi=state.profile.bmi,
        bmi_category=state.profile.bmi_category,
    )


@router.get("", response_model=ProfileView)
async def get_profile(state: AppState = Depends(get_state)):
    return _view(state)


@router.patch("", response_model=ProfileView)
async def update_profile(patch: ProfileUpdate, state: AppState = Depends(get_state)):
    """
    Merge a partial update into the profile.

    Weight and height changes are copied into today's snapshot.
    """
    await state.update_profile(patch.model_dump(exclude_none=True))
    return _view(state)


@router.put("", response_model=ProfileView)
async def replace_profile(profile: ProfileIn, state: AppState = Depends(get_state)):
    await state.save_profile(UserProfile.model_validate(profile.model_dump()))
    return _view(state)
