from __future__ import annotations

from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

WEEKDAYS: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

REST_DAY = "Rest"

# Day name -> ordered exercise descriptions ("Push-ups 3x10", "Rest", ...)
WeeklyPlan = dict[str, list[str]]


class Gender(StrEnum):
    MALE = "Male"
    FEMALE = "Female"


class Goal(StrEnum):
    GAIN_MUSCLE = "Gain Muscle"
    LOSE_FAT = "Lose Fat"
    MAINTAIN = "Maintain"


class WorkoutSuggestionRequest(BaseModel):
    """User fitness profile submitted for a weekly plan suggestion."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    gender: Gender
    age: int = Field(..., ge=10, le=100, description="Age in years")
    weight_kg: Decimal = Field(..., alias="weightKg", ge=30, le=300, description="Body weight in kg")
    height_cm: Decimal = Field(..., alias="heightCm", ge=100, le=250, description="Height in cm")
    goal: Goal
    workout_days_per_week: int = Field(..., alias="workoutDaysPerWeek", ge=1, le=7)
    equipment: str = Field(..., min_length=1, description="Available equipment, e.g. Dumbbells")
    additional_notes: str | None = Field(default=None, alias="additionalNotes")

    @field_validator("equipment")
    @classmethod
    def validate_equipment(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Equipment is required")
        return value

    @field_validator("gender", mode="before")
    @classmethod
    def normalize_gender(cls, value: object) -> object:
        if isinstance(value, str):
            for member in Gender:
                if member.value.lower() == value.strip().lower():
                    return member
        return value

    @field_validator("goal", mode="before")
    @classmethod
    def normalize_goal(cls, value: object) -> object:
        # Accept "Gain Muscle", "GainMuscle" and "gain_muscle"
        if isinstance(value, str):
            compact = value.replace(" ", "").replace("_", "").lower()
            for member in Goal:
                if member.value.replace(" ", "").lower() == compact:
                    return member
        return value


class SuggestionOutcome(BaseModel):
    """Terminal result of a suggestion request, never an exception."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    weekly_plan: WeeklyPlan = Field(default_factory=dict, alias="weeklyPlan")
    additional_tips: str | None = Field(default=None, alias="additionalTips")
    is_success: bool = Field(default=False, alias="isSuccess")
    error_message: str | None = Field(default=None, alias="errorMessage")
    is_fallback: bool = Field(
        default=False,
        alias="isFallback",
        description="True when the plan is the built-in default rather than the model's answer",
    )

    @classmethod
    def failure(cls, message: str) -> SuggestionOutcome:
        return cls(is_success=False, error_message=message)
