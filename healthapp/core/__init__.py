"""Core module - metrics rules and the stores built on them."""

from .bmi import calculate_bmi, bmi_category
from .metrics import GoalOutcome, ProfileSeed
from .goal_store import GoalStore
from .metrics_store import MetricsStore
from .profile_store import ProfileStore
from .journal_store import MealJournal, ExerciseJournal, TrackingJournal
from .preferences import ThemePreferenceStore
from .notifications import Notifier, LoggingNotifier, RecordingNotifier, DisabledNotifier

__all__ = [
    'calculate_bmi', 'bmi_category', 'GoalOutcome', 'ProfileSeed',
    'GoalStore', 'MetricsStore', 'ProfileStore', 'MealJournal', 'ExerciseJournal', 'TrackingJournal',
    'ThemePreferenceStore', 'Notifier', 'LoggingNotifier', 'RecordingNotifier', 'DisabledNotifier',
]
