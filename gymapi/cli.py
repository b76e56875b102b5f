"""Developer CLI for GymAPI.

Runs the API server, creates tables, and requests a workout suggestion
straight from the terminal using the same service code as the endpoint.
"""

from __future__ import annotations

import asyncio
import json

import typer
import uvicorn
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table

from gymapi.config.settings import GeminiConfig, settings
from gymapi.core.logger import setup_logger
from gymapi.db.session import init_db
from gymapi.workout_suggestions.gemini_client import GeminiClient
from gymapi.workout_suggestions.schemas import SuggestionOutcome, WorkoutSuggestionRequest
from gymapi.workout_suggestions.service import WorkoutSuggestionService

console = Console()

app = typer.Typer(
    name="gymapi",
    help="GymAPI CLI - server and workout suggestion tools",
    add_completion=False,
)

DEFAULT_HOST = "127.0.0.1"


def build_service() -> WorkoutSuggestionService:
    return WorkoutSuggestionService(GeminiClient(GeminiConfig.from_settings(settings)))


def _render_outcome(outcome: SuggestionOutcome) -> None:
    table = Table(title="Weekly plan" + (" (default)" if outcome.is_fallback else ""))
    table.add_column("Day", style="cyan", no_wrap=True)
    table.add_column("Exercises")
    for day, exercises in outcome.weekly_plan.items():
        table.add_row(day, "\n".join(exercises))
    console.print(table)
    if outcome.additional_tips:
        console.print(Panel(outcome.additional_tips, title="Tips"))


@app.command()
def server(
    host: str = typer.Option(DEFAULT_HOST, "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
) -> None:
    """Run the FastAPI server."""
    logger.info(f"Starting FastAPI server on {host}:{port} (reload={reload})")
    uvicorn.run("gymapi.main:app", host=host, port=port, reload=reload)


@app.command("init-db")
def init_db_command() -> None:
    """Create database tables."""
    init_db()
    console.print(f"[green]Database ready:[/green] {settings.database_url}")


@app.command()
def suggest(
    gender: str = typer.Option(..., help="Male or Female"),
    age: int = typer.Option(..., help="Age in years (10-100)"),
    weight: float = typer.Option(..., "--weight", help="Weight in kg (30-300)"),
    height: float = typer.Option(..., "--height", help="Height in cm (100-250)"),
    goal: str = typer.Option(..., help="Gain Muscle, Lose Fat or Maintain"),
    days: int = typer.Option(..., "--days", help="Workout days per week (1-7)"),
    equipment: str = typer.Option("No Equipment", help="Available equipment"),
    notes: str | None = typer.Option(None, help="Additional notes for the coach"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw outcome as JSON"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Request a weekly workout suggestion for a profile."""
    setup_logger(level="DEBUG" if debug else "WARNING")
    try:
        request = WorkoutSuggestionRequest.model_validate(
            {
                "gender": gender,
                "age": age,
                "weightKg": weight,
                "heightCm": height,
                "goal": goal,
                "workoutDaysPerWeek": days,
                "equipment": equipment,
                "additionalNotes": notes,
            }
        )
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            console.print(f"[red]{field}[/red]: {error['msg']}")
        raise typer.Exit(code=2) from e

    outcome = asyncio.run(build_service().get_workout_suggestion(request))

    if as_json:
        console.print(JSON(json.dumps(outcome.model_dump(mode="json", by_alias=True))))
    elif outcome.is_success:
        _render_outcome(outcome)
    else:
        console.print(Panel(outcome.error_message or "Unknown error", title="Workout Suggestion Failed", style="red"))

    if not outcome.is_success:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
