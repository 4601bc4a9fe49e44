"""
Prompt templates for the coaching features.
"""

import json
from typing import Any, Dict, List, Optional

from ..models.ai import PartialAddress, WorkoutPreferences
from ..models.health import DaySummary, DailyGoals

CHAT_SYSTEM_PROMPT = """You are a helpful health and wellness AI assistant. Provide accurate, helpful, and encouraging health advice.
Always remind users to consult healthcare professionals for medical concerns."""

MEAL_SYSTEM_PROMPT = "You are a helpful nutritionist. Always return valid JSON only."
INSIGHTS_SYSTEM_PROMPT = "You are a health analytics expert. Return only valid JSON."
WORKOUT_SYSTEM_PROMPT = "You are a fitness trainer. Return only valid JSON."
GREETING_SYSTEM_PROMPT = (
    "You are a positive health coach. Return only a short greeting message (max 10 words), no other text."
)
HOME_RECS_SYSTEM_PROMPT = "You are a helpful health coach. Return only valid JSON array of recommendation strings."
ADDRESS_SYSTEM_PROMPT = "You are an address completion assistant. Return only valid JSON array of address objects."


def _percent(value: float, goal: float) -> int:
    return round(value / goal * 100) if goal else 0


def chat_prompt(message: str, context: Optional[Dict[str, Any]] = None) -> str:
    if not context:
        return message
    return f"{message}\n\nUser's current health context:\n{json.dumps(context, indent=2, default=str)}"


def meal_recommendations_prompt(
    remaining_calories: float,
    goals: DailyGoals,
    dietary_restrictions: Optional[List[str]] = None,
    favorite_foods: Optional[List[str]] = None,
) -> str:
    restrictions = f"Dietary restrictions: {', '.join(dietary_restrictions)}" if dietary_restrictions else ""
    favorites = f"Favorite foods: {', '.join(favorite_foods)}" if favorite_foods else ""
    remaining = round(remaining_calories)
    return f"""You are a nutritionist AI assistant. Recommend 3 healthy meal options that fit within {remaining} remaining calories for today.

User's daily calorie goal: {round(goals.calories)} calories
Remaining calories: {remaining} calories
{restrictions}
{favorites}

For each meal, provide:
- name: The meal name
- category: breakfast, lunch, dinner, or snack
- calories: Estimated calories
- protein: Protein in grams
- carbs: Carbs in grams
- fat: Fat in grams
- reason: Why this meal is good for them
- ingredients: Array of 3-5 main ingredients
- prepTime: Preparation time in minutes

Return ONLY a valid JSON array with this structure, no other text:
[
  {{
    "name": "Meal Name",
    "category": "breakfast",
    "calories": 350,
    "protein": 20,
    "carbs": 45,
    "fat": 10,
    "reason": "High protein and fiber",
    "ingredients": ["ingredient1", "ingredient2"],
    "prepTime": 10
  }}
]"""


def health_insights_prompt(
    today: DaySummary,
    goals: DailyGoals,
    avg_steps: float,
    avg_sleep: float,
    avg_water: float,
) -> str:
    return f"""You are a health analytics AI. Analyze this user's health data and provide 3 key insights.

Today's Data:
- Steps: {today.steps} (goal: {goals.steps:g})
- Sleep: {today.sleep:g} hours (goal: {goals.sleep:g} hours)
- Water: {today.water:g} oz (goal: {goals.water:g} oz)
- Calories: {today.calories:g} (goal: {goals.calories:g})
- BMI: {today.bmi:.1f}
- Blood Pressure: {today.blood_pressure}

7-Day Averages:
- Average Steps: {round(avg_steps)}
- Average Sleep: {avg_sleep:.1f} hours
- Average Water: {round(avg_water)} oz

Provide 3 insights in JSON format:
[
  {{
    "title": "Insight Title",
    "insight": "What the data shows",
    "recommendation": "Actionable recommendation",
    "priority": "high" or "medium" or "low"
  }}
]

Return ONLY valid JSON array, no other text."""


def workout_plan_prompt(preferences: WorkoutPreferences) -> str:
    equipment = ", ".join(preferences.available_equipment or []) or "bodyweight only"
    return f"""You are a fitness trainer AI. Create a personalized workout plan.

Preferences:
- Duration: {preferences.duration or 30:g} minutes
- Difficulty: {preferences.difficulty or 'intermediate'}
- Focus: {preferences.focus or 'full body'}
- Equipment: {equipment}

Return a JSON object with this structure:
{{
  "name": "Workout Plan Name",
  "duration": 30,
  "exercises": [
    {{
      "name": "Exercise Name",
      "sets": 3,
      "reps": 12,
      "duration": null,
      "rest": 60
    }}
  ],
  "caloriesBurned": 250,
  "difficulty": "intermediate",
  "focus": "full body"
}}

For cardio exercises, use "duration" instead of "sets/reps".
Return ONLY valid JSON, no other text."""


def _metrics_block(today: DaySummary, goals: DailyGoals, with_percent: bool) -> str:
    def line(label: str, value: float, goal: float, unit: str = "") -> str:
        text = f"- {label}: {value:g}{unit} / {goal:g}{unit} goal"
        if with_percent:
            text += f" ({_percent(value, goal)}%)"
        return text

    return "\n".join([
        line("Steps", today.steps, goals.steps),
        line("Sleep", today.sleep, goals.sleep, " hours"),
        line("Water", today.water, goals.water, " oz"),
        line("Calories", today.calories, goals.calories),
        f"- Activity Level: {today.activity:g}%",
        f"- Blood Sugar: {today.blood_sugar:g} mg/dL",
        f"- BMI: {today.bmi:.1f}",
    ])


def greeting_prompt(today: DaySummary, goals: DailyGoals) -> str:
    return f"""You are a health coach AI. Generate a short, encouraging greeting message (MAXIMUM 10 WORDS) based on the user's current health metrics.

Current Metrics:
{_metrics_block(today, goals, with_percent=True)}

Generate ONE short, positive, encouraging message (exactly 10 words or less) that reflects their current health status. Examples:
- "You're making great progress on your health goals today!"
- "Keep up the excellent work with your daily activities!"
- "Your hydration and activity levels are looking strong!"

Return ONLY the message text, nothing else. Maximum 10 words."""


def home_recommendations_prompt(today: DaySummary, goals: DailyGoals) -> str:
    return f"""You are a health coach AI. Based on the user's current health metrics and goals, provide 3-4 personalized, actionable recommendations.

Current Metrics:
{_metrics_block(today, goals, with_percent=False)}

Provide 3-4 short, actionable recommendations (one sentence each) that are:
1. Specific and actionable
2. Encouraging and positive
3. Based on what they need most right now
4. Practical and easy to implement

Return ONLY a JSON array of strings, no other text:
["Recommendation 1", "Recommendation 2", "Recommendation 3"]"""


def address_prompt(partial: PartialAddress) -> str:
    missing = "(not provided)"
    return f"""You are an address completion AI. Based on the partial address information provided, suggest 3-5 complete, valid US addresses that match the input.

Partial Address:
- Street: {partial.street or missing}
- City: {partial.city or missing}
- State: {partial.state or missing}
- Zip Code: {partial.zip or missing}

Generate 3-5 complete, realistic US addresses that match the provided information. If only street is provided, suggest addresses with that street name in common cities. If city is provided, prioritize that city. If state is provided, use that state.

Return ONLY a JSON array with this structure:
[
  {{
    "street": "123 Main Street",
    "city": "New York",
    "state": "New York",
    "zip": "10001",
    "fullAddress": "123 Main Street, New York, NY 10001"
  }}
]

Return ONLY valid JSON array, no other text."""
