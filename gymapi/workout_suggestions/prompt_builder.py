"""Prompt construction for weekly workout suggestions.

The prompt restates the user profile verbatim, shows the exact 7-day JSON
shape expected back, lists the formatting rules and asks for a trailing
"Tips" section. It is a pure function of the request.
"""

from __future__ import annotations

import json

from gymapi.workout_suggestions.schemas import REST_DAY, WEEKDAYS, WorkoutSuggestionRequest

# Example shape shown to the model; rest days are a single-element array
_EXAMPLE_REST_DAYS = frozenset({"Wednesday", "Saturday", "Sunday"})


def _example_schema() -> str:
    example = {
        day: [REST_DAY] if day in _EXAMPLE_REST_DAYS else ["Exercise 1", "Exercise 2", "Exercise 3"]
        for day in WEEKDAYS
    }
    return json.dumps(example, indent=2)


def build_prompt(request: WorkoutSuggestionRequest) -> str:
    """Build the instruction string sent to the generative-text API.

    Args:
        request: Validated user profile

    Returns:
        Prompt text containing the profile, the JSON schema example,
        formatting requirements and the tips request
    """
    profile_lines = [
        f"- Gender: {request.gender.value}",
        f"- Age: {request.age}",
        f"- Weight: {request.weight_kg}kg",
        f"- Height: {request.height_cm}cm",
        f"- Goal: {request.goal.value}",
        f"- Workout Days: {request.workout_days_per_week} days per week",
        f"- Equipment: {request.equipment}",
    ]
    if request.additional_notes and request.additional_notes.strip():
        profile_lines.append(f"- Additional Notes: {request.additional_notes}")

    requirements = [
        "- Return ONLY valid JSON format",
        f"- Use exactly these keys: {', '.join(WEEKDAYS)}",
        "- Each day is an array of strings, one exercise per string",
        '- Each exercise should include sets/reps information (e.g., "Push-ups 3x10", "Plank 3x30sec")',
        f'- Rest days must be a single-element array: ["{REST_DAY}"]',
        f"- Schedule exactly {request.workout_days_per_week} workout days and make the rest of the week rest days",
        "- Consider the available equipment",
        "- Match exercises to the user's goal",
        "- Provide 3-5 exercises per workout day",
        "- Distribute workout days evenly throughout the week",
    ]

    sections = [
        "Based on the following user profile:",
        "\n".join(profile_lines),
        "Please suggest a detailed 7-day workout plan in the following JSON format:",
        _example_schema(),
        "Requirements:",
        "\n".join(requirements),
        'Also include a brief "Tips" section after the JSON with general advice for this user.',
    ]
    return "\n\n".join(sections)
