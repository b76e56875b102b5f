"""AI workout suggestions.

Pipeline: prompt builder -> Gemini client -> response parser, coordinated by
WorkoutSuggestionService.
"""

from gymapi.workout_suggestions.schemas import (
    SuggestionOutcome,
    WeeklyPlan,
    WorkoutSuggestionRequest,
)
from gymapi.workout_suggestions.service import WorkoutSuggestionService

__all__ = [
    "SuggestionOutcome",
    "WeeklyPlan",
    "WorkoutSuggestionRequest",
    "WorkoutSuggestionService",
]
