"""Best-effort parsing of model output into a weekly plan.

The model is asked for bare JSON but often wraps it in prose or code fences.
Parsing never fails: when no usable JSON object is found the fixed default
plan is returned instead and the result is flagged as a fallback.

Tips are extracted independently from the same text.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from gymapi.workout_suggestions.schemas import REST_DAY, WEEKDAYS, WeeklyPlan

# Greedy: first "{" to last "}" anywhere in the text
_JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}", re.MULTILINE)

# "Tips:", "Tip", "TIPS -" ... up to a blank line or end of text
_TIPS_PATTERN = re.compile(r"\bTips?\b:?\s*(.+?)(?:\n\n|\Z)", re.IGNORECASE | re.DOTALL)

_RAW_PLAN_ADAPTER: TypeAdapter[dict[str, list[str]]] = TypeAdapter(dict[str, list[str]])

_WEEKDAY_LOOKUP = {day.lower(): day for day in WEEKDAYS}

_DEFAULT_PLAN: dict[str, tuple[str, ...]] = {
    "Monday": ("Push-ups 3x10", "Plank 3x30sec", "Squats 3x15"),
    "Tuesday": (REST_DAY,),
    "Wednesday": ("Lunges 3x12", "Mountain Climbers 3x15", "Burpees 3x8"),
    "Thursday": (REST_DAY,),
    "Friday": ("Pull-ups 3x8", "Jumping Jacks 3x20", "Calf Raises 3x15"),
    "Saturday": (REST_DAY,),
    "Sunday": (REST_DAY,),
}


@dataclass(frozen=True)
class ParsedPlan:
    weekly_plan: WeeklyPlan
    is_fallback: bool


def default_weekly_plan() -> WeeklyPlan:
    """Return a fresh copy of the built-in 3-day bodyweight split."""
    return {day: list(exercises) for day, exercises in _DEFAULT_PLAN.items()}


def _normalize_plan(raw: dict[str, list[str]]) -> WeeklyPlan:
    plan: WeeklyPlan = {}
    for key, exercises in raw.items():
        day = _WEEKDAY_LOOKUP.get(key.strip().lower())
        if day is None:
            logger.debug(f"Ignoring unknown day key in AI response: {key!r}")
            continue
        plan[day] = list(exercises) or [REST_DAY]
    if not plan:
        return {}
    return {day: plan.get(day, [REST_DAY]) for day in WEEKDAYS}


def _decode_candidates(text: str) -> list[str]:
    """JSON substrings to try, most permissive first."""
    candidates: list[str] = []
    match = _JSON_OBJECT_PATTERN.search(text)
    if match:
        candidates.append(match.group(0))
    start = text.find("{")
    if start != -1:
        try:
            _, end = json.JSONDecoder().raw_decode(text, start)
        except json.JSONDecodeError:
            pass
        else:
            first_object = text[start:end]
            if first_object not in candidates:
                candidates.append(first_object)
    return candidates


def parse_weekly_plan(ai_text: str) -> ParsedPlan:
    """Extract a weekly plan from raw model text.

    Tries the greedy brace match first, then the first complete JSON object
    in the text. Day keys are matched case-insensitively; missing days become
    rest days and unknown keys are dropped.

    Args:
        ai_text: Raw text returned by the model

    Returns:
        ParsedPlan with the extracted plan, or the default plan with
        is_fallback=True when nothing usable was found
    """
    candidates = _decode_candidates(ai_text)
    if not candidates:
        logger.warning("Could not find JSON in AI response; using default plan")
        return ParsedPlan(weekly_plan=default_weekly_plan(), is_fallback=True)

    for candidate in candidates:
        try:
            raw = _RAW_PLAN_ADAPTER.validate_json(candidate)
        except ValidationError as e:
            logger.warning("Error parsing JSON response from Gemini", error_count=e.error_count())
            continue
        plan = _normalize_plan(raw)
        if plan:
            return ParsedPlan(weekly_plan=plan, is_fallback=False)
        logger.warning("JSON in AI response contained no weekday entries")

    return ParsedPlan(weekly_plan=default_weekly_plan(), is_fallback=True)


def extract_additional_tips(ai_text: str) -> str | None:
    """Return the text following a "Tips" marker, or None when absent."""
    match = _TIPS_PATTERN.search(ai_text)
    if not match:
        return None
    tips = match.group(1).strip()
    return tips or None
