"""Tests for parsing model output into a weekly plan.

Covers:
- JSON embedded in prose and code fences
- case-insensitive day keys, missing and unknown days
- fallback to the default plan on missing/malformed JSON
- tips extraction
"""

import json

from gymapi.workout_suggestions.parser import (
    default_weekly_plan,
    extract_additional_tips,
    parse_weekly_plan,
)
from gymapi.workout_suggestions.schemas import WEEKDAYS

DEFAULT_TRAINING_DAYS = {"Monday", "Wednesday", "Friday"}


def _assert_is_default_plan(plan: dict[str, list[str]]) -> None:
    assert list(plan) == list(WEEKDAYS)
    for day in WEEKDAYS:
        if day in DEFAULT_TRAINING_DAYS:
            assert plan[day]
            assert plan[day] != ["Rest"]
        else:
            assert plan[day] == ["Rest"]


def test_parses_json_embedded_in_prose(seven_day_plan):
    text = f"Here is your plan:\n```json\n{json.dumps(seven_day_plan, indent=2)}\n```\n\nTips: Eat enough protein."

    parsed = parse_weekly_plan(text)

    assert parsed.is_fallback is False
    assert parsed.weekly_plan == seven_day_plan
    assert list(parsed.weekly_plan) == list(WEEKDAYS)


def test_preserves_exercise_order(seven_day_plan):
    parsed = parse_weekly_plan(json.dumps(seven_day_plan))

    assert parsed.weekly_plan["Monday"] == [
        "Dumbbell Bench Press 4x8",
        "Dumbbell Rows 4x10",
        "Goblet Squats 3x12",
    ]


def test_day_keys_are_case_insensitive():
    text = json.dumps({"MONDAY": ["Squats 3x10"], "tuesday": ["Rest"], "Wednesday": ["Rows 3x10"]})

    parsed = parse_weekly_plan(text)

    assert parsed.is_fallback is False
    assert parsed.weekly_plan["Monday"] == ["Squats 3x10"]
    assert parsed.weekly_plan["Tuesday"] == ["Rest"]
    assert parsed.weekly_plan["Wednesday"] == ["Rows 3x10"]


def test_missing_days_become_rest_and_unknown_keys_are_dropped():
    text = json.dumps({"Monday": ["Push-ups 3x10"], "Notes": ["ignore me"], "Friday": []})

    parsed = parse_weekly_plan(text)

    assert list(parsed.weekly_plan) == list(WEEKDAYS)
    assert parsed.weekly_plan["Monday"] == ["Push-ups 3x10"]
    assert parsed.weekly_plan["Friday"] == ["Rest"]
    assert parsed.weekly_plan["Sunday"] == ["Rest"]
    assert "Notes" not in parsed.weekly_plan


def test_exercise_strings_are_kept_as_received():
    text = json.dumps({"Monday": ["  Squats 3x10 ", "", "Lunges 3x12"]})

    parsed = parse_weekly_plan(text)

    assert parsed.weekly_plan["Monday"] == ["  Squats 3x10 ", "", "Lunges 3x12"]


def test_no_json_returns_default_plan():
    parsed = parse_weekly_plan("Sorry, I cannot help with that request.")

    assert parsed.is_fallback is True
    _assert_is_default_plan(parsed.weekly_plan)


def test_malformed_json_returns_default_plan():
    parsed = parse_weekly_plan('Plan: {"Monday": ["Squats 3x10", }')

    assert parsed.is_fallback is True
    _assert_is_default_plan(parsed.weekly_plan)


def test_wrong_value_types_return_default_plan():
    parsed = parse_weekly_plan('{"Monday": "Squats", "Tuesday": 3}')

    assert parsed.is_fallback is True
    _assert_is_default_plan(parsed.weekly_plan)


def test_empty_object_returns_default_plan():
    parsed = parse_weekly_plan("{}")

    assert parsed.is_fallback is True
    _assert_is_default_plan(parsed.weekly_plan)


def test_fallback_is_idempotent():
    text = "no braces here"

    first = parse_weekly_plan(text)
    second = parse_weekly_plan(text)

    assert first == second


def test_default_plan_is_a_fresh_copy():
    plan = default_weekly_plan()
    plan["Monday"].append("Extra")

    assert "Extra" not in default_weekly_plan()["Monday"]


def test_first_object_used_when_greedy_match_spans_trailing_braces(seven_day_plan):
    text = json.dumps(seven_day_plan) + "\n\nTips: use {tempo} work on squats."

    parsed = parse_weekly_plan(text)

    assert parsed.is_fallback is False
    assert parsed.weekly_plan == seven_day_plan


def test_extract_tips_stops_at_blank_line():
    text = '{"Monday": ["Rest"]}\n\nTips: Stay hydrated and stretch.\n\nGood luck!'

    assert extract_additional_tips(text) == "Stay hydrated and stretch."


def test_extract_tips_reads_to_end_of_text():
    text = "Some plan\n\ntips - Sleep 8 hours\nand warm up."

    assert extract_additional_tips(text) == "- Sleep 8 hours\nand warm up."


def test_extract_tips_example_from_trailing_section():
    assert extract_additional_tips("...Tips: Stay hydrated and stretch.\n\n") == "Stay hydrated and stretch."


def test_extract_tips_returns_none_without_marker():
    assert extract_additional_tips('{"Monday": ["Multiple sets of squats 3x10"]}') is None


def test_tips_and_plan_are_independent():
    text = "Tips: Focus on form.\n\nNo plan today."

    assert extract_additional_tips(text) == "Focus on form."
    assert parse_weekly_plan(text).is_fallback is True
