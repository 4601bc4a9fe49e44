"""
Deterministic content used whenever the chat model is unavailable or its
answer cannot be used.
"""

from typing import List

from ..core.metrics import build_recommendations
from ..models.ai import AIHealthInsight, AIMealRecommendation, AIWorkoutPlan, WorkoutExercise, WorkoutPreferences
from ..models.health import DaySummary, DailyGoals

CHAT_FALLBACK = (
    "I'm having trouble connecting right now. Please try again later or consult "
    "with a healthcare professional for immediate concerns."
)


def meal_recommendations(remaining_calories: float) -> List[AIMealRecommendation]:
    remaining = max(0, remaining_calories)
    return [
        AIMealRecommendation(
            name="Grilled Chicken Salad",
            category="lunch",
            calories=min(400, remaining),
            protein=35,
            carbs=25,
            fat=15,
            reason="High protein, low calorie option",
            ingredients=["Grilled chicken", "Mixed greens", "Cherry tomatoes", "Olive oil dressing"],
            prep_time=15,
        ),
        AIMealRecommendation(
            name="Greek Yogurt with Berries",
            category="snack",
            calories=min(200, remaining),
            protein=15,
            carbs=25,
            fat=5,
            reason="Protein-rich snack to keep you full",
            ingredients=["Greek yogurt", "Mixed berries", "Honey"],
            prep_time=5,
        ),
    ]


def health_insights(today: DaySummary, goals: DailyGoals) -> List[AIHealthInsight]:
    insights: List[AIHealthInsight] = []

    if today.steps < goals.steps * 0.8:
        insights.append(AIHealthInsight(
            title="Step Count Below Target",
            insight=f"You're at {today.steps} steps, below your {goals.steps:g} goal.",
            recommendation="Try a 10-minute walk to boost your daily steps.",
            priority="medium",
        ))

    if today.sleep < goals.sleep:
        insights.append(AIHealthInsight(
            title="Sleep Duration",
            insight=f"You got {today.sleep:g} hours of sleep, below your {goals.sleep:g} hour goal.",
            recommendation="Aim for consistent sleep schedule to improve rest quality.",
            priority="high",
        ))

    if today.water < goals.water * 0.8:
        insights.append(AIHealthInsight(
            title="Hydration Level",
            insight=f"You've consumed {today.water:g} oz of water, below your {goals.water:g} oz goal.",
            recommendation="Drink water regularly throughout the day to stay hydrated.",
            priority="medium",
        ))

    if insights:
        return insights
    return [AIHealthInsight(
        title="Great Progress!",
        insight="You're doing well with your health goals.",
        recommendation="Keep up the good work and maintain consistency.",
        priority="low",
    )]


def workout_plan(preferences: WorkoutPreferences) -> AIWorkoutPlan:
    return AIWorkoutPlan(
        name="Full Body Workout",
        duration=preferences.duration or 30,
        exercises=[
            WorkoutExercise(name="Jumping Jacks", duration=2, rest=30),
            WorkoutExercise(name="Push-ups", sets=3, reps=10, rest=45),
            WorkoutExercise(name="Squats", sets=3, reps=15, rest=45),
            WorkoutExercise(name="Plank", duration=1, rest=30),
            WorkoutExercise(name="Lunges", sets=2, reps=12, rest=45),
        ],
        calories_burned=200,
        difficulty=preferences.difficulty or "intermediate",
        focus=preferences.focus or "full body",
    )


def greeting(today: DaySummary, goals: DailyGoals) -> str:
    progress = sum([
        today.steps >= goals.steps * 0.8,
        today.water >= goals.water * 0.8,
        today.sleep >= goals.sleep * 0.8,
        goals.calories * 0.8 <= today.calories <= goals.calories * 1.2,
    ])

    if progress >= 3:
        return "Your health metrics look great today!"
    elif progress >= 2:
        return "You are making good progress on your goals!"
    return "Keep working towards your health goals today!"


def home_recommendations(today: DaySummary, goals: DailyGoals) -> List[str]:
    return build_recommendations(today, goals)
