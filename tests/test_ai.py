"""
Tests for the AI layer: JSON extraction, the service operations and
their fallbacks.
"""

import json
import pytest
from typing import List
from unittest.mock import AsyncMock, MagicMock

from healthapp.ai import AIService, parse_structured, extract_json, AIResponseFormatError
from healthapp.ai import fallbacks
from healthapp.core.metrics import GREAT_JOB_MESSAGE, default_day
from healthapp.llm.base import LLMResponse
from healthapp.models import (
    AIHealthInsight, AIWorkoutPlan, DailyGoals, PartialAddress, WorkoutPreferences,
)

from conftest import make_day


def _provider(content=None, error=None):
    provider = MagicMock()
    if error is not None:
        provider.chat_completion = AsyncMock(side_effect=error)
    else:
        provider.chat_completion = AsyncMock(return_value=LLMResponse(content=content, model="test"))
    return provider


class TestParsing:
    """Tests for structured output parsing."""

    def test_extracts_array_from_prose(self):
        text = 'Sure! Here you go:\n[{"a": 1}, {"a": 2}]\nEnjoy.'
        assert extract_json(text) == [{"a": 1}, {"a": 2}]

    def test_extracts_object(self):
        assert extract_json('```json\n{"name": "x"}\n```', expect="object") == {"name": "x"}

    def test_no_json_raises(self):
        with pytest.raises(AIResponseFormatError):
            extract_json("no structured content here")

    def test_invalid_json_raises(self):
        with pytest.raises(AIResponseFormatError):
            extract_json("[1, 2,, 3]")

    def test_validation_error_is_reported(self):
        result = parse_structured('[{"title": "only a title"}]', List[AIHealthInsight])
        assert not result.ok
        assert "validation" in result.error

    def test_priority_normalized(self):
        reply = json.dumps([{"title": "t", "insight": "i", "recommendation": "r", "priority": "HIGH"}])
        result = parse_structured(reply, List[AIHealthInsight])
        assert result.ok
        assert result.value[0].priority == "high"

    def test_unwrap_or(self):
        result = parse_structured("nothing", List[str])
        assert result.unwrap_or(["fallback"]) == ["fallback"]


class TestAIServiceFallbacks:
    """With no provider every operation returns local content."""

    @pytest.fixture
    def service(self):
        return AIService()

    @pytest.mark.asyncio
    async def test_not_configured(self, service):
        assert service.is_configured is False

    @pytest.mark.asyncio
    async def test_chat(self, service):
        assert await service.chat("How much water should I drink?") == fallbacks.CHAT_FALLBACK

    @pytest.mark.asyncio
    async def test_meal_recommendations_capped_by_remaining(self, service):
        meals = await service.meal_recommendations(150, DailyGoals())
        assert [m.calories for m in meals] == [150, 150]

    @pytest.mark.asyncio
    async def test_meal_recommendations_no_negative_calories(self, service):
        meals = await service.meal_recommendations(-300, DailyGoals())
        assert all(m.calories == 0 for m in meals)

    @pytest.mark.asyncio
    async def test_health_insights_rules(self, service):
        today = make_day("2024-03-10", steps=1000, sleep=5, water=10)
        insights = await service.health_insights(today, DailyGoals(), [])
        assert [i.title for i in insights] == ["Step Count Below Target", "Sleep Duration", "Hydration Level"]

    @pytest.mark.asyncio
    async def test_health_insights_all_good(self, service):
        today = make_day("2024-03-10", steps=9000, sleep=8, water=90)
        insights = await service.health_insights(today, DailyGoals(), [])
        assert insights[0].title == "Great Progress!"
        assert insights[0].priority == "low"

    @pytest.mark.asyncio
    async def test_workout_plan_honours_preferences(self, service):
        plan = await service.workout_plan(WorkoutPreferences(duration=45, difficulty="beginner", focus="legs"))
        assert plan.duration == 45
        assert plan.difficulty == "beginner"
        assert plan.focus == "legs"
        assert len(plan.exercises) == 5

    @pytest.mark.asyncio
    async def test_greeting_buckets(self, service):
        goals = DailyGoals()
        great = make_day("2024-03-10", steps=8000, water=80, sleep=7.5, calories=2200)
        good = make_day("2024-03-10", steps=8000, water=80, sleep=1, calories=0)
        low = make_day("2024-03-10")
        assert await service.greeting(great, goals) == "Your health metrics look great today!"
        assert await service.greeting(good, goals) == "You are making good progress on your goals!"
        assert await service.greeting(low, goals) == "Keep working towards your health goals today!"

    @pytest.mark.asyncio
    async def test_greeting_calorie_window(self, service):
        over = make_day("2024-03-10", steps=8000, water=80, sleep=1, calories=2700)
        assert await service.greeting(over, DailyGoals()) == "You are making good progress on your goals!"

    @pytest.mark.asyncio
    async def test_home_recommendations_use_rules(self, service):
        today = make_day("2024-03-10", steps=9000, water=90, sleep=8, activity=70, blood_sugar=95, calories=2000)
        assert await service.home_recommendations(today, DailyGoals()) == [GREAT_JOB_MESSAGE]

    @pytest.mark.asyncio
    async def test_address_suggestions_empty(self, service):
        assert await service.address_suggestions(PartialAddress(street="123 Main")) == []


class TestAIServiceWithProvider:
    """Tests for AIService against a mocked chat model."""

    @pytest.mark.asyncio
    async def test_chat_includes_context(self):
        provider = _provider("Drink about 80 oz a day.")
        service = AIService(provider)

        reply = await service.chat("Water?", {"today": {"water": 48}})

        assert reply == "Drink about 80 oz a day."
        messages = provider.chat_completion.call_args.args[0]
        assert messages[0].role == "system"
        assert '"water": 48' in messages[1].content
        assert provider.chat_completion.call_args.kwargs["temperature"] == 0.7
        assert provider.chat_completion.call_args.kwargs["max_tokens"] == 1000

    @pytest.mark.asyncio
    async def test_provider_error_falls_back(self):
        service = AIService(_provider(error=RuntimeError("timeout")))
        assert await service.chat("hi") == fallbacks.CHAT_FALLBACK

    @pytest.mark.asyncio
    async def test_meal_recommendations_capped_at_three(self):
        meal = {"name": "Bowl", "category": "lunch", "calories": 400, "prepTime": 10}
        service = AIService(_provider("Here:\n" + json.dumps([meal] * 5)))
        meals = await service.meal_recommendations(800, DailyGoals())
        assert len(meals) == 3
        assert meals[0].prep_time == 10

    @pytest.mark.asyncio
    async def test_malformed_meals_fall_back(self):
        service = AIService(_provider("I recommend a salad."))
        meals = await service.meal_recommendations(800, DailyGoals())
        assert meals[0].name == "Grilled Chicken Salad"

    @pytest.mark.asyncio
    async def test_health_insights_capped_at_three(self):
        insight = {"title": "t", "insight": "i", "recommendation": "r", "priority": "low"}
        service = AIService(_provider(json.dumps([insight] * 4)))
        today = default_day("2024-03-10")
        insights = await service.health_insights(today, DailyGoals(), [make_day("2024-03-09", steps=9000)])
        assert len(insights) == 3

    @pytest.mark.asyncio
    async def test_workout_plan_parsed(self):
        plan = {
            "name": "Leg Day", "duration": 40,
            "exercises": [{"name": "Squats", "sets": 4, "reps": 10, "rest": 60}],
            "caloriesBurned": 300, "difficulty": "advanced", "focus": "legs",
        }
        service = AIService(_provider(json.dumps(plan)))
        result = await service.workout_plan()
        assert isinstance(result, AIWorkoutPlan)
        assert result.name == "Leg Day"
        assert result.calories_burned == 300

    @pytest.mark.asyncio
    async def test_workout_plan_invalid_falls_back(self):
        service = AIService(_provider('{"name": "No duration"}'))
        result = await service.workout_plan()
        assert result.name == "Full Body Workout"

    @pytest.mark.asyncio
    async def test_greeting_strips_quotes(self):
        service = AIService(_provider('"Great hydration today, keep it up!"'))
        assert await service.greeting(default_day("2024-03-10"), DailyGoals()) == "Great hydration today, keep it up!"

    @pytest.mark.asyncio
    async def test_greeting_truncated_to_ten_words(self):
        service = AIService(_provider("one two three four five six seven eight nine ten eleven twelve"))
        greeting = await service.greeting(default_day("2024-03-10"), DailyGoals())
        assert greeting == "one two three four five six seven eight nine ten..."

    @pytest.mark.asyncio
    async def test_home_recommendations_capped_at_four(self):
        service = AIService(_provider(json.dumps(["a", "b", "c", "d", "e"])))
        assert await service.home_recommendations(default_day("2024-03-10"), DailyGoals()) == ["a", "b", "c", "d"]

    @pytest.mark.asyncio
    async def test_address_suggestions_compose_full_address(self):
        reply = json.dumps([
            {"street": "123 Main Street", "city": "Springfield", "state": "IL", "zip": "62701"},
            {"street": "9 Elm St", "city": "Austin", "state": "TX", "zip": "73301", "fullAddress": "9 Elm St, Austin, TX"},
        ])
        service = AIService(_provider(reply))
        suggestions = await service.address_suggestions(PartialAddress(street="123 Main"))
        assert suggestions[0].full_address == "123 Main Street, Springfield, IL 62701"
        assert suggestions[1].full_address == "9 Elm St, Austin, TX"

    @pytest.mark.asyncio
    async def test_address_suggestions_need_enough_input(self):
        provider = _provider("[]")
        service = AIService(provider)
        assert await service.address_suggestions(PartialAddress(street="12", city="LA")) == []
        provider.chat_completion.assert_not_called()

    @pytest.mark.asyncio
    async def test_address_suggestions_failure_is_empty(self):
        service = AIService(_provider(error=RuntimeError("boom")))
        assert await service.address_suggestions(PartialAddress(city="Boston")) == []
