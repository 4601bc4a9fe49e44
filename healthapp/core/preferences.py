"""
Theme preference (light/dark), stored as a bare string.
"""

import logging
from typing import Literal

from ..storage import WriteBehind
from ..storage.keys import THEME_PREFERENCE_KEY

logger = logging.getLogger(__name__)

ThemePreference = Literal["light", "dark"]
_VALID = ("light", "dark")


class ThemePreferenceStore:
    def __init__(self, persister: WriteBehind):
        self.persister = persister
        self.preference: ThemePreference = "light"
        self.is_loaded = False

    async def load(self) -> ThemePreference:
        try:
            stored = await self.persister.store.get_item(THEME_PREFERENCE_KEY)
            if stored in _VALID:
                self.preference = stored
        except Exception as e:
            logger.warning(f"Loading theme preference failed: {e}")
        finally:
            self.is_loaded = True
        return self.preference

    def set_preference(self, preference: ThemePreference) -> ThemePreference:
        """Switch immediately; the write happens in the background."""
        if preference not in _VALID:
            raise ValueError(f"Unknown theme preference: {preference}")
        self.preference = preference
        self.persister.schedule(THEME_PREFERENCE_KEY, preference)
        return self.preference
