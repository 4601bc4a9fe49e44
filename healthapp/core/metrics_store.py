"""
Metrics Store - The authoritative "today" record and its rolling history.

Mutations update memory synchronously and persist the whole
{today, history} record through the write-behind persister, so callers are
never blocked on durability. Derived views are recomputed on every access.
"""

import json
import logging
from datetime import date
from typing import Any, Callable, List, Mapping, Optional

from ..models.health import DaySummary, MetricsState, WeeklyStats, LongTermStats, today_key
from ..storage import WriteBehind
from ..storage.keys import METRICS_KEY
from . import metrics
from .goal_store import GoalStore
from .metrics import GoalOutcome, ProfileSeed
from .notifications import Notifier, LoggingNotifier, send_goal_notification

logger = logging.getLogger(__name__)


class MetricsStore:
    """
    Holds the current day plus up to 30 archived days.

    Args:
        persister: Write-behind persister for the metrics key
        goals: Goal store consulted by recommendations, statistics and day close
        seed_provider: Returns the profile weight/BMI to copy into today, if any
        notifier: Receives the end-of-day goal nudge
        clock: Returns the local calendar date
    """

    def __init__(
        self,
        persister: WriteBehind,
        goals: GoalStore,
        seed_provider: Callable[[], Optional[ProfileSeed]] = lambda: None,
        notifier: Optional[Notifier] = None,
        clock: Callable[[], date] = date.today,
    ):
        self.persister = persister
        self.goal_store = goals
        self.seed_provider = seed_provider
        self.notifier = notifier or LoggingNotifier()
        self.clock = clock
        self.state = MetricsState(today=metrics.default_day(self._today_key()))

    @property
    def today(self) -> DaySummary:
        return self.state.today

    @property
    def history(self) -> List[DaySummary]:
        return self.state.history

    def _today_key(self) -> str:
        return today_key(self.clock())

    async def load(self) -> MetricsState:
        """
        Load the stored record and roll it over if the calendar day changed.

        Unreadable data is ignored and the in-memory defaults are kept.
        """
        stored: Optional[MetricsState] = None
        try:
            raw = await self.persister.store.get_item(METRICS_KEY)
            if raw:
                stored = MetricsState.model_validate(json.loads(raw))
        except Exception as e:
            logger.warning(f"Ignoring unreadable metrics: {e}")
            return self.state

        state, changed = metrics.rollover_if_needed(stored, self._today_key(), self.seed_provider())
        if stored is not None and stored.today.date != state.today.date:
            logger.info(
                f"Rolled over {stored.today.date} into history",
                extra={"extra_fields": {"archived_date": stored.today.date, "history_size": len(state.history)}}
            )

        self.state = state
        if changed:
            self._save()
        return self.state

    def rollover(self) -> bool:
        """Archive today if the calendar day has moved on since it was created."""
        state, _ = metrics.rollover_if_needed(self.state, self._today_key(), self.seed_provider())
        if state.today.date == self.state.today.date:
            return False
        self.state = state
        self._save()
        return True

    def update_today(self, patch: Mapping[str, Any]) -> DaySummary:
        """
        Replace one or more fields of today.

        Raises:
            ValueError: Unknown field name or a value of the wrong type
        """
        values = DaySummary.normalize_keys(patch)
        if "date" in values:
            raise ValueError("The date of the current day cannot be changed")
        today = DaySummary.model_validate({**self.state.today.model_dump(), **values})
        self.state = MetricsState(today=today, history=self.state.history)
        self._save()
        return today

    def set_metric(self, field: str, value: Any) -> DaySummary:
        return self.update_today({field: value})

    def add_steps(self, amount: float) -> DaySummary:
        return self.update_today({"steps": max(0, self.today.steps + int(amount))})

    def add_water(self, amount: float) -> DaySummary:
        return self.update_today({"water": max(0, self.today.water + amount)})

    def add_calories(self, amount: float) -> DaySummary:
        return self.update_today({"calories": max(0, self.today.calories + amount)})

    def sync_profile(self, seed: Optional[ProfileSeed]) -> DaySummary:
        """Copy a changed profile weight/BMI into today."""
        if seed is None:
            return self.today
        return self.update_today({"weight": seed.weight, "bmi": seed.bmi})

    async def log_day(self) -> GoalOutcome:
        """
        Close the current day: archive it, start a fresh default day, persist,
        then nudge the user depending on how the closed day did against goals.
        """
        completed = self.state.today
        self.state = metrics.close_day(self.state, self._today_key())
        self._save()

        outcome = metrics.evaluate_goals(completed, self.goal_store.goals)
        logger.info(
            f"Closed day {completed.date}: {outcome.value}",
            extra={"extra_fields": {"date": completed.date, "outcome": outcome.value}}
        )
        await send_goal_notification(self.notifier, outcome)
        return outcome

    @property
    def recommendations(self) -> List[str]:
        return metrics.build_recommendations(self.today, self.goal_store.goals)

    @property
    def weekly_stats(self) -> WeeklyStats:
        return metrics.weekly_stats(self.state)

    @property
    def long_term_stats(self) -> LongTermStats:
        return metrics.long_term_stats(self.state, self.goal_store.goals, self._today_key())

    def _save(self) -> None:
        self.persister.schedule(METRICS_KEY, self.state.model_dump_json(by_alias=True))
