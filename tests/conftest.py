"""Root conftest for all tests.

Shared fixtures: Gemini config and response bodies, sample profiles, an
in-memory SQLite database and a FastAPI TestClient wired to it.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from gymapi.config.settings import GeminiConfig
from gymapi.db.models import Base
from gymapi.db.session import get_db
from gymapi.main import create_app
from gymapi.workout_suggestions.schemas import WorkoutSuggestionRequest

SEVEN_DAY_PLAN: dict[str, list[str]] = {
    "Monday": ["Dumbbell Bench Press 4x8", "Dumbbell Rows 4x10", "Goblet Squats 3x12"],
    "Tuesday": ["Rest"],
    "Wednesday": ["Dumbbell Shoulder Press 3x10", "Lunges 3x12", "Bicep Curls 3x12"],
    "Thursday": ["Rest"],
    "Friday": ["Romanian Deadlifts 4x8", "Push-ups 3x15", "Plank 3x45sec"],
    "Saturday": ["Rest"],
    "Sunday": ["Rest"],
}


def gemini_body(text: str, *, usage: bool = False) -> dict[str, Any]:
    """Build a generateContent response body with one candidate."""
    body: dict[str, Any] = {
        "candidates": [
            {
                "content": {"parts": [{"text": text}], "role": "model"},
                "finishReason": "STOP",
                "index": 0,
            }
        ]
    }
    if usage:
        body["usageMetadata"] = {"promptTokenCount": 120, "candidatesTokenCount": 240, "totalTokenCount": 360}
    return body


@pytest.fixture
def gemini_config() -> GeminiConfig:
    return GeminiConfig(
        api_url="https://gemini.test/v1beta/models/{model}:generateContent",
        api_key="test-key",
        model="gemini-test",
    )


@pytest.fixture
def sample_request() -> WorkoutSuggestionRequest:
    return WorkoutSuggestionRequest.model_validate(
        {
            "gender": "Male",
            "age": 25,
            "weightKg": 70,
            "heightCm": 175,
            "goal": "Gain Muscle",
            "workoutDaysPerWeek": 3,
            "equipment": "Dumbbells",
        }
    )


@pytest.fixture
def db_engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session_factory(db_engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db_session(db_session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    session = db_session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def api_app(db_session_factory: sessionmaker[Session]):
    app = create_app(create_tables=False)

    def _get_test_db() -> Generator[Session, None, None]:
        session = db_session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def api_client(api_app) -> TestClient:
    return TestClient(api_app, raise_server_exceptions=False)


@pytest.fixture
def make_gemini_body():
    return gemini_body


@pytest.fixture
def seven_day_plan() -> dict[str, list[str]]:
    return {day: list(exercises) for day, exercises in SEVEN_DAY_PLAN.items()}
