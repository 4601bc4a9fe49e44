"""
Application State - Wires the stores together around one key/value store.

One AppState exists per running app. It owns the write-behind persister, so
flush() must be awaited on shutdown for pending writes to land.
"""

import logging
from datetime import date
from typing import Any, Callable, Mapping, Optional

from ..ai.service import AIService
from ..llm.factory import create_llm_provider
from ..models.profile import UserProfile
from ..storage import KeyValueStore, WriteBehind, create_storage
from .goal_store import GoalStore
from .journal_store import MealJournal, ExerciseJournal, TrackingJournal
from .metrics_store import MetricsStore
from .notifications import Notifier, LoggingNotifier, DisabledNotifier
from .preferences import ThemePreferenceStore
from .profile_store import ProfileStore

logger = logging.getLogger(__name__)


class AppState:
    """
    All mutable application state.

    Args:
        store: Key/value store backing every record
        notifier: Receives end-of-day goal notifications
        ai: Coaching service (fallback-only when it has no provider)
        clock: Returns the local calendar date
    """

    def __init__(
        self,
        store: KeyValueStore,
        notifier: Optional[Notifier] = None,
        ai: Optional[AIService] = None,
        clock: Callable[[], date] = date.today,
    ):
        self.store = store
        self.persister = WriteBehind(store)
        self.profile = ProfileStore(self.persister)
        self.goals = GoalStore(self.persister)
        self.metrics = MetricsStore(
            self.persister,
            self.goals,
            seed_provider=self.profile.seed,
            notifier=notifier,
            clock=clock,
        )
        self.meals = MealJournal(self.persister)
        self.exercises = ExerciseJournal(self.persister)
        self.tracking = TrackingJournal(self.persister)
        self.theme = ThemePreferenceStore(self.persister)
        self.ai = ai or AIService()

    @classmethod
    def from_settings(cls, settings: Any, clock: Callable[[], date] = date.today) -> "AppState":
        """Build the state for the configured storage, notifier and chat model."""
        store = create_storage(settings.storage_type, settings.local_storage_path)
        notifier = LoggingNotifier() if settings.notifications_enabled else DisabledNotifier()

        provider = create_llm_provider(
            provider=settings.llm_provider,
            api_key=settings.resolved_llm_api_key,
            model=settings.llm_model,
            base_url=settings.llm_base_url,
            timeout=settings.llm_timeout,
        )
        if provider is None:
            logger.info("No LLM API key configured, AI features will use local fallbacks")
        else:
            logger.info(f"LLM provider: {provider.name} ({provider.model})")

        ai = AIService(provider, temperature=settings.llm_temperature, max_tokens=settings.llm_max_tokens)
        return cls(store, notifier=notifier, ai=ai, clock=clock)

    async def load(self) -> None:
        """
        Load every record. The profile loads first so a day created during
        metrics rollover is seeded with the current weight and BMI.
        """
        await self.profile.load()
        await self.goals.load()
        await self.metrics.load()
        await self.meals.load()
        await self.exercises.load()
        await self.tracking.load()
        await self.theme.load()
        logger.info(
            f"State loaded for {self.metrics.today.date}",
            extra={"extra_fields": {
                "today": self.metrics.today.date,
                "history_size": len(self.metrics.history),
                "meal_logs": len(self.meals.entries),
                "exercise_logs": len(self.exercises.entries),
                "tracking_readings": len(self.tracking.entries),
            }}
        )

    async def update_profile(self, patch: Mapping[str, Any]) -> UserProfile:
        profile = await self.profile.update_profile(patch)
        self.metrics.sync_profile(self.profile.seed())
        return profile

    async def save_profile(self, profile: UserProfile) -> UserProfile:
        saved = await self.profile.save_profile(profile)
        self.metrics.sync_profile(self.profile.seed())
        return saved

    async def flush(self) -> None:
        await self.persister.flush()
