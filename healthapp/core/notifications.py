"""
Local notifications for the end-of-day goal evaluation.

Delivery is a best-effort nudge: dispatch errors are logged and dropped.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from .metrics import GoalOutcome

logger = logging.getLogger(__name__)

GOAL_MESSAGES = {
    GoalOutcome.MET: (
        "Goals completed 🎉",
        "You hit most of your health goals today. Great work keeping on track!",
    ),
    GoalOutcome.REFOCUS: (
        "Let's refocus",
        "You were quite far from your goals today. Small changes tomorrow can make a big difference.",
    ),
}


class Notifier(ABC):
    """Schedules an immediate local notification."""

    @abstractmethod
    async def notify(self, title: str, body: str) -> None:
        pass


class LoggingNotifier(Notifier):
    """Default notifier: the nudge goes to the application log."""

    async def notify(self, title: str, body: str) -> None:
        logger.info(
            f"Notification: {title} - {body}",
            extra={"extra_fields": {"notification_title": title}}
        )


class RecordingNotifier(Notifier):
    """Keeps every notification in memory; used by tests and previews."""

    def __init__(self):
        self.sent: List[Tuple[str, str]] = []

    async def notify(self, title: str, body: str) -> None:
        self.sent.append((title, body))


class DisabledNotifier(Notifier):
    async def notify(self, title: str, body: str) -> None:
        logger.debug(f"Notifications disabled, dropping: {title}")


async def send_goal_notification(notifier: Notifier, outcome: GoalOutcome) -> Optional[str]:
    """
    Dispatch the message for a goal outcome.

    Returns:
        The notification title that was sent, or None if nothing was sent
    """
    message = GOAL_MESSAGES.get(outcome)
    if message is None:
        return None

    title, body = message
    try:
        await notifier.notify(title, body)
    except Exception as e:
        logger.warning(f"Goal notification failed: {e}", exc_info=True)
        return None
    return title
