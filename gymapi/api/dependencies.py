"""FastAPI dependency providers.

Tests replace these through app.dependency_overrides.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from gymapi.config.settings import GeminiConfig, settings
from gymapi.workout_suggestions.gemini_client import GeminiClient
from gymapi.workout_suggestions.service import WorkoutSuggestionService


@lru_cache
def get_gemini_config() -> GeminiConfig:
    return GeminiConfig.from_settings(settings)


def get_suggestion_service(config: GeminiConfig = Depends(get_gemini_config)) -> WorkoutSuggestionService:
    return WorkoutSuggestionService(GeminiClient(config))
