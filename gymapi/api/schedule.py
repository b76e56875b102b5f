"""Schedule API endpoints.

POST /schedule/suggest returns an AI-suggested weekly workout plan for a
user profile.
"""

from __future__ import annotations

import asyncio
from contextlib import suppress

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from gymapi.api.dependencies import get_suggestion_service
from gymapi.core.problems import problem_response
from gymapi.workout_suggestions.errors import GENERIC_FAILURE_MESSAGE
from gymapi.workout_suggestions.schemas import SuggestionOutcome, WorkoutSuggestionRequest
from gymapi.workout_suggestions.service import WorkoutSuggestionService

router = APIRouter(prefix="/schedule", tags=["schedule"])

DISCONNECT_POLL_SECONDS = 0.5

_PROBLEM_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"description": "Invalid profile or upstream failure"},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Unexpected server error"},
}


async def _watch_disconnect(request: Request, cancel_event: asyncio.Event) -> None:
    """Set cancel_event once the HTTP client goes away."""
    while not await request.is_disconnected():
        await asyncio.sleep(DISCONNECT_POLL_SECONDS)
    logger.info("Client disconnected; cancelling workout suggestion")
    cancel_event.set()


@router.post("/suggest", response_model=SuggestionOutcome, responses=_PROBLEM_RESPONSES)
async def suggest_workout(
    payload: WorkoutSuggestionRequest,
    request: Request,
    service: WorkoutSuggestionService = Depends(get_suggestion_service),
) -> SuggestionOutcome | JSONResponse:
    """Get AI-powered workout schedule suggestions for a user profile.

    Returns:
        200 with the SuggestionOutcome, 400 problem details when the
        suggestion failed, 500 problem details on unexpected errors
    """
    logger.info("POST /schedule/suggest endpoint called", goal=payload.goal.value)
    cancel_event = asyncio.Event()
    watcher = asyncio.create_task(_watch_disconnect(request, cancel_event))
    try:
        outcome = await service.get_workout_suggestion(payload, cancel_event=cancel_event)
    except Exception:
        logger.exception("Unhandled error in workout suggestion endpoint")
        return problem_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal Server Error",
            "An unexpected error occurred while processing your request",
        )
    finally:
        watcher.cancel()
        with suppress(asyncio.CancelledError):
            await watcher

    if not outcome.is_success:
        return problem_response(
            status.HTTP_400_BAD_REQUEST,
            "Workout Suggestion Failed",
            outcome.error_message or GENERIC_FAILURE_MESSAGE,
        )
    return outcome
