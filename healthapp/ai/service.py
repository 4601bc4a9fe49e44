"""
AI Service - Coaching features backed by an optional chat model.

Every operation degrades to deterministic local content when no provider is
configured, the call fails, or the reply cannot be validated. Nothing here
raises to the caller.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from ..llm.base import LLMProvider, LLMMessage
from ..models.ai import (
    AIHealthInsight, AIMealRecommendation, AIWorkoutPlan, AddressSuggestion,
    PartialAddress, WorkoutPreferences,
)
from ..models.health import DaySummary, DailyGoals
from . import fallbacks, prompts
from .parsing import parse_structured

logger = logging.getLogger(__name__)

MAX_MEAL_RECOMMENDATIONS = 3
MAX_INSIGHTS = 3
MAX_HOME_RECOMMENDATIONS = 4
MAX_ADDRESS_SUGGESTIONS = 5
MAX_GREETING_WORDS = 10


class AIUnavailableError(RuntimeError):
    """No chat model is configured."""


class AIService:
    """
    Coaching content generator.

    Args:
        provider: Chat-completion provider, or None to always use fallbacks
        temperature: Sampling temperature sent with each request
        max_tokens: Token cap sent with each request
    """

    def __init__(
        self,
        provider: Optional[LLMProvider] = None,
        temperature: float = 0.7,
        max_tokens: int = 1000,
    ):
        self._llm_provider = provider
        self.temperature = temperature
        self.max_tokens = max_tokens

    @property
    def is_configured(self) -> bool:
        return self._llm_provider is not None

    def set_llm_provider(self, provider: Optional[LLMProvider]) -> None:
        self._llm_provider = provider

    async def call_ai(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        """
        Send one prompt to the chat model.

        Raises:
            AIUnavailableError: If no provider is configured
            Exception: Whatever the provider raised
        """
        if self._llm_provider is None:
            raise AIUnavailableError("AI API key not configured. Set LLM_API_KEY to enable AI features.")

        messages: List[LLMMessage] = []
        if system_prompt:
            messages.append(LLMMessage.text("system", system_prompt))
        messages.append(LLMMessage.text("user", prompt))

        response = await self._llm_provider.chat_completion(
            messages, temperature=self.temperature, max_tokens=self.max_tokens
        )
        return response.content

    def _log_fallback(self, feature: str, error: Any) -> None:
        if isinstance(error, AIUnavailableError):
            logger.debug(f"AI not configured, using fallback for {feature}")
            return
        logger.warning(
            f"AI {feature} failed, using fallback: {error}",
            extra={"extra_fields": {"feature": feature, "error": str(error)}}
        )

    async def chat(self, message: str, context: Optional[Dict[str, Any]] = None) -> str:
        try:
            return await self.call_ai(prompts.chat_prompt(message, context), prompts.CHAT_SYSTEM_PROMPT)
        except Exception as e:
            self._log_fallback("chat", e)
            return fallbacks.CHAT_FALLBACK

    async def meal_recommendations(
        self,
        remaining_calories: float,
        goals: DailyGoals,
        dietary_restrictions: Optional[List[str]] = None,
        favorite_foods: Optional[List[str]] = None,
    ) -> List[AIMealRecommendation]:
        try:
            reply = await self.call_ai(
                prompts.meal_recommendations_prompt(remaining_calories, goals, dietary_restrictions, favorite_foods),
                prompts.MEAL_SYSTEM_PROMPT,
            )
        except Exception as e:
            self._log_fallback("meal recommendations", e)
            return fallbacks.meal_recommendations(remaining_calories)

        result = parse_structured(reply, List[AIMealRecommendation], expect="array")
        if not result.ok:
            self._log_fallback("meal recommendations", result.error)
            return fallbacks.meal_recommendations(remaining_calories)
        return result.value[:MAX_MEAL_RECOMMENDATIONS]

    async def health_insights(
        self,
        today: DaySummary,
        goals: DailyGoals,
        history: List[DaySummary],
    ) -> List[AIHealthInsight]:
        def avg(attr: str) -> float:
            if not history:
                return getattr(today, attr)
            return sum(getattr(d, attr) for d in history) / len(history)

        try:
            reply = await self.call_ai(
                prompts.health_insights_prompt(today, goals, avg("steps"), avg("sleep"), avg("water")),
                prompts.INSIGHTS_SYSTEM_PROMPT,
            )
        except Exception as e:
            self._log_fallback("health insights", e)
            return fallbacks.health_insights(today, goals)

        result = parse_structured(reply, List[AIHealthInsight], expect="array")
        if not result.ok:
            self._log_fallback("health insights", result.error)
            return fallbacks.health_insights(today, goals)
        return result.value[:MAX_INSIGHTS]

    async def workout_plan(self, preferences: Optional[WorkoutPreferences] = None) -> AIWorkoutPlan:
        preferences = preferences or WorkoutPreferences()
        try:
            reply = await self.call_ai(prompts.workout_plan_prompt(preferences), prompts.WORKOUT_SYSTEM_PROMPT)
        except Exception as e:
            self._log_fallback("workout plan", e)
            return fallbacks.workout_plan(preferences)

        return parse_structured(reply, AIWorkoutPlan, expect="object").unwrap_or(
            fallbacks.workout_plan(preferences)
        )

    async def greeting(self, today: DaySummary, goals: DailyGoals) -> str:
        try:
            reply = await self.call_ai(prompts.greeting_prompt(today, goals), prompts.GREETING_SYSTEM_PROMPT)
        except Exception as e:
            self._log_fallback("greeting", e)
            return fallbacks.greeting(today, goals)

        message = re.sub(r"^[\"']|[\"']$", "", reply.strip())
        if not message:
            return fallbacks.greeting(today, goals)
        words = message.split()
        if len(words) > MAX_GREETING_WORDS:
            return " ".join(words[:MAX_GREETING_WORDS]) + "..."
        return message

    async def home_recommendations(self, today: DaySummary, goals: DailyGoals) -> List[str]:
        try:
            reply = await self.call_ai(
                prompts.home_recommendations_prompt(today, goals), prompts.HOME_RECS_SYSTEM_PROMPT
            )
        except Exception as e:
            self._log_fallback("home recommendations", e)
            return fallbacks.home_recommendations(today, goals)

        result = parse_structured(reply, List[str], expect="array")
        if not result.ok or not result.value:
            self._log_fallback("home recommendations", result.error or "empty list")
            return fallbacks.home_recommendations(today, goals)
        return result.value[:MAX_HOME_RECOMMENDATIONS]

    async def address_suggestions(self, partial: PartialAddress) -> List[AddressSuggestion]:
        has_street = len((partial.street or "").strip()) > 3
        has_city = len((partial.city or "").strip()) > 2
        # Only suggest once there is at least a street or a city to go on
        if not has_street and not has_city:
            return []

        try:
            reply = await self.call_ai(prompts.address_prompt(partial), prompts.ADDRESS_SYSTEM_PROMPT)
        except Exception as e:
            self._log_fallback("address suggestions", e)
            return []

        result = parse_structured(reply, List[AddressSuggestion], expect="array")
        if not result.ok:
            self._log_fallback("address suggestions", result.error)
            return []

        suggestions = []
        for addr in result.value[:MAX_ADDRESS_SUGGESTIONS]:
            if not addr.full_address:
                addr = addr.model_copy(update={
                    "full_address": f"{addr.street}, {addr.city}, {addr.state} {addr.zip}"
                })
            suggestions.append(addr)
        return suggestions
