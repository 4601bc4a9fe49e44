"""
Goal Store - The four daily targets, persisted independently of metrics.
"""

import json
import logging
from typing import Any, Mapping, Union

from pydantic import ValidationError

from ..models.health import DailyGoals
from ..storage import WriteBehind
from ..storage.keys import GOALS_KEY
from .metrics import GOAL_METRICS

logger = logging.getLogger(__name__)


class GoalStore:
    """Daily goals with fire-and-forget persistence."""

    def __init__(self, persister: WriteBehind):
        self.persister = persister
        self.goals = DailyGoals()

    async def load(self) -> DailyGoals:
        try:
            raw = await self.persister.store.get_item(GOALS_KEY)
        except Exception as e:
            logger.warning(f"Loading goals failed: {e}")
            return self.goals
        if not raw:
            return self.goals

        try:
            stored = DailyGoals.normalize_keys(json.loads(raw), strict=False)
            self.goals = DailyGoals.model_validate({**DailyGoals().model_dump(), **stored})
        except (ValueError, TypeError, AttributeError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable goals, using defaults: {e}")
            self.goals = DailyGoals()
        return self.goals

    def update_goals(self, patch: Union[DailyGoals, Mapping[str, Any]]) -> DailyGoals:
        """
        Update goals. A complete four-field update replaces the record;
        anything less is merged into the current goals.
        """
        if isinstance(patch, DailyGoals):
            self.goals = patch
        else:
            values = {k: v for k, v in DailyGoals.normalize_keys(patch).items() if v is not None}
            if all(name in values for name in GOAL_METRICS):
                self.goals = DailyGoals.model_validate(values)
            else:
                self.goals = DailyGoals.model_validate({**self.goals.model_dump(), **values})

        self.persister.schedule(GOALS_KEY, self.goals.model_dump_json(by_alias=True))
        return self.goals
