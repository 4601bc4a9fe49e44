"""
Profile Store - Holds the user profile and derives BMI from it.
"""

import json
import logging
from typing import Any, Mapping, Optional

from ..models.profile import UserProfile
from ..storage import WriteBehind
from ..storage.keys import PROFILE_KEY
from .bmi import calculate_bmi, bmi_category
from .metrics import ProfileSeed

logger = logging.getLogger(__name__)


class ProfileStore:
    """
    Profile state with merge/replace persistence.

    BMI and its category are computed on every access from the current
    weight and height.
    """

    def __init__(self, persister: WriteBehind):
        self.persister = persister
        self.profile = UserProfile()
        self.exists = False  # whether a profile has ever been persisted

    async def load(self) -> UserProfile:
        """Merge the persisted (possibly partial) profile over the defaults."""
        try:
            raw = await self.persister.store.get_item(PROFILE_KEY)
            if raw:
                stored = UserProfile.normalize_keys(json.loads(raw), strict=False)
                self.profile = UserProfile.model_validate({**UserProfile().model_dump(), **stored})
                self.exists = True
        except Exception as e:
            logger.warning(f"Ignoring unreadable profile: {e}")
        return self.profile

    async def update_profile(self, patch: Mapping[str, Any]) -> UserProfile:
        """Merge a partial update into the profile and persist the full record."""
        merged = {**self.profile.model_dump(), **UserProfile.normalize_keys(patch)}
        return await self.save_profile(UserProfile.model_validate(merged))

    async def save_profile(self, profile: UserProfile) -> UserProfile:
        """Replace the profile wholesale and persist it."""
        self.profile = profile
        self.exists = True
        await self.persister.write_now(PROFILE_KEY, profile.model_dump_json(by_alias=True))
        return self.profile

    @property
    def bmi(self) -> float:
        return calculate_bmi(self.profile.weight, self.profile.height)

    @property
    def bmi_category(self) -> str:
        return bmi_category(self.bmi)

    def seed(self) -> Optional[ProfileSeed]:
        """Weight/BMI to copy into the current day, if a usable profile exists."""
        if not self.exists or not self.profile.weight or not self.profile.height:
            return None
        return ProfileSeed(weight=self.profile.weight, bmi=self.bmi)
