"""Models module."""

from .health import DaySummary, DailyGoals, GoalsUpdate, MetricsState, WeeklyStats, LongTermStats, today_key
from .profile import UserProfile, ProfileUpdate, ProfileIn, ProfileView
from .logs import MealType, MealLogCreate, MealLogEntry, ExerciseLogCreate, ExerciseLogEntry, TrackingReading
from .ai import (
    AIMealRecommendation, AIWorkoutPlan, WorkoutExercise, WorkoutPreferences,
    AIHealthInsight, AddressSuggestion, PartialAddress, ChatRequest, MealRecommendationRequest,
)

__all__ = [
    'DaySummary', 'DailyGoals', 'GoalsUpdate', 'MetricsState', 'WeeklyStats', 'LongTermStats', 'today_key',
    'UserProfile', 'ProfileUpdate', 'ProfileIn', 'ProfileView',
    'MealType', 'MealLogCreate', 'MealLogEntry', 'ExerciseLogCreate', 'ExerciseLogEntry', 'TrackingReading',
    'AIMealRecommendation', 'AIWorkoutPlan', 'WorkoutExercise', 'WorkoutPreferences',
    'AIHealthInsight', 'AddressSuggestion', 'PartialAddress', 'ChatRequest', 'MealRecommendationRequest',
]
