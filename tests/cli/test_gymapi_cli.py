"""Tests for the gymapi CLI."""

import pytest
from typer.testing import CliRunner

from gymapi import cli
from gymapi.workout_suggestions.schemas import SuggestionOutcome

runner = CliRunner()

PROFILE_ARGS = [
    "suggest",
    "--gender", "Female",
    "--age", "30",
    "--weight", "62.5",
    "--height", "168",
    "--goal", "Lose Fat",
    "--days", "4",
]


class FakeService:
    def __init__(self, outcome: SuggestionOutcome):
        self.outcome = outcome
        self.requests = []

    async def get_workout_suggestion(self, request, cancel_event=None):
        self.requests.append(request)
        return self.outcome


@pytest.fixture
def fake_service(monkeypatch, seven_day_plan):
    service = FakeService(
        SuggestionOutcome(weekly_plan=seven_day_plan, additional_tips="Sleep well.", is_success=True)
    )
    monkeypatch.setattr(cli, "build_service", lambda: service)
    return service


def test_suggest_prints_plan(fake_service):
    result = runner.invoke(cli.app, PROFILE_ARGS)

    assert result.exit_code == 0, result.output
    assert "Monday" in result.output
    assert "Sleep well." in result.output
    request = fake_service.requests[0]
    assert request.goal.value == "Lose Fat"
    assert request.equipment == "No Equipment"


def test_suggest_json_output(fake_service):
    result = runner.invoke(cli.app, [*PROFILE_ARGS, "--json"])

    assert result.exit_code == 0, result.output
    assert '"isSuccess": true' in result.output


def test_suggest_failure_exits_with_one(monkeypatch):
    service = FakeService(SuggestionOutcome.failure("API request failed: 429 Too Many Requests"))
    monkeypatch.setattr(cli, "build_service", lambda: service)

    result = runner.invoke(cli.app, PROFILE_ARGS)

    assert result.exit_code == 1
    assert "429" in result.output


def test_suggest_invalid_profile_exits_with_two(fake_service):
    args = list(PROFILE_ARGS)
    args[args.index("--age") + 1] = "7"

    result = runner.invoke(cli.app, args)

    assert result.exit_code == 2
    assert "age" in result.output
    assert fake_service.requests == []
