"""Workout suggestion orchestration.

Idle -> Building -> Requesting -> Parsing -> Done. Every path ends in a
SuggestionOutcome; upstream failures short-circuit before parsing and leave
the weekly plan empty.
"""

from __future__ import annotations

import asyncio

from loguru import logger

from gymapi.workout_suggestions.errors import GENERIC_FAILURE_MESSAGE
from gymapi.workout_suggestions.gemini_client import GeminiClient, GeminiFailure, GeminiSuccess
from gymapi.workout_suggestions.parser import extract_additional_tips, parse_weekly_plan
from gymapi.workout_suggestions.prompt_builder import build_prompt
from gymapi.workout_suggestions.schemas import SuggestionOutcome, WorkoutSuggestionRequest


class WorkoutSuggestionService:
    """Builds the prompt, calls the model and parses its answer.

    Holds no per-request state; a single instance serves concurrent requests.
    """

    def __init__(self, client: GeminiClient) -> None:
        self.client = client

    async def get_workout_suggestion(
        self,
        request: WorkoutSuggestionRequest,
        cancel_event: asyncio.Event | None = None,
    ) -> SuggestionOutcome:
        """Suggest a weekly workout plan for a user profile.

        Args:
            request: Validated user profile
            cancel_event: Optional signal that abandons the upstream call

        Returns:
            SuggestionOutcome; is_success is False when the upstream call
            failed, with a short error_message
        """
        logger.info(
            "Workout suggestion requested",
            goal=request.goal.value,
            workout_days=request.workout_days_per_week,
        )
        try:
            prompt = build_prompt(request)
            result = await self.client.generate(prompt, cancel_event=cancel_event)

            match result:
                case GeminiFailure(reason=reason, message=message):
                    logger.warning(f"Workout suggestion failed: {message}", reason=reason.value)
                    return SuggestionOutcome.failure(message)
                case GeminiSuccess(text=text):
                    parsed = parse_weekly_plan(text)
                    outcome = SuggestionOutcome(
                        weekly_plan=parsed.weekly_plan,
                        additional_tips=extract_additional_tips(text),
                        is_success=True,
                        is_fallback=parsed.is_fallback,
                    )
                    logger.info(
                        "Workout suggestion completed",
                        is_fallback=parsed.is_fallback,
                        has_tips=outcome.additional_tips is not None,
                    )
                    return outcome
                case _:
                    raise TypeError(f"Unexpected client result: {type(result).__name__}")
        except Exception:
            logger.exception("Error occurred while getting workout suggestion")
            return SuggestionOutcome.failure(GENERIC_FAILURE_MESSAGE)
