"""CLI interface for the demogen synthetic demo-data generator."""

from __future__ import annotations

import json
import random
import sys
from datetime import date, datetime
from pathlib import Path

import click

from demogen.config import Config, DemoModeError, require_demo_mode
from demogen.duration import example_durations, format_duration
from demogen.duration import estimate_duration as estimate
from demogen.engine import GenerationEngine
from demogen.logging import setup_logging
from demogen.models import EXPERIENCE_LEVELS, GENDERS
from demogen.output import inject_to_api, write_json
from demogen.presets import PRESETS


def _guarded_config() -> Config:
    config = Config.from_env()
    setup_logging(config)
    try:
        return require_demo_mode(config)
    except DemoModeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
def main():
    """Synthetic fitness demo-data generator."""


@main.command()
@click.option("--preset", type=click.Choice(list(PRESETS.keys())), help="Use preset questionnaire answers.")
@click.option(
    "--answers-file",
    type=click.Path(exists=True, path_type=Path),
    help="Load questionnaire answers from a JSON file.",
)
@click.option("--seed", type=int, help="Random seed (defaults to DEMOGEN_SEED).")
@click.option("--weeks", type=click.IntRange(1, 52), default=12, show_default=True, help="Weeks of history.")
@click.option(
    "--reference-date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Last day of the history (defaults to today).",
)
@click.option("--output", "-o", type=click.Path(path_type=Path), help="Write the result to a JSON file.")
@click.option("--api", type=str, help="API base URL for injection (e.g. http://localhost:3000).")
@click.option("--api-key", type=str, help="API key for authentication.")
def generate(
    preset: str | None,
    answers_file: Path | None,
    seed: int | None,
    weeks: int,
    reference_date: datetime | None,
    output: Path | None,
    api: str | None,
    api_key: str | None,
):
    """Generate a demo user with a workout history."""
    if preset and answers_file:
        click.echo("Error: Specify either --preset or --answers-file, not both.", err=True)
        sys.exit(1)

    if api and not api_key:
        click.echo("Error: --api-key is required when using --api.", err=True)
        sys.exit(1)

    config = _guarded_config()

    if answers_file:
        with answers_file.open(encoding="utf-8") as f:
            answers = json.load(f)
        if not isinstance(answers, dict):
            click.echo("Error: answers file must contain a JSON object.", err=True)
            sys.exit(1)
    elif preset:
        answers = PRESETS[preset]
    else:
        answers = {}

    ref: date | None = reference_date.date() if reference_date else None
    engine = GenerationEngine(seed, config=config)
    result = engine.run(answers, weeks=weeks, reference_date=ref)

    profile, stats = result.profile, result.stats
    click.echo(
        f"Generated {profile.display_name} ({profile.gender}, {profile.experience_level}, "
        f"{profile.available_days_per_week}x/week) over {weeks} weeks."
    )
    click.echo(f"  Workouts: {stats.total_workouts}")
    click.echo(f"  Total volume: {stats.total_volume:.0f} kg")
    if stats.average_rating is not None:
        click.echo(f"  Average rating: {stats.average_rating:.2f}")
    click.echo(f"  Current streak: {stats.current_streak_days} days")
    click.echo(f"  Longest streak: {stats.longest_streak_days} days")
    click.echo(f"  Level: {stats.level} ({stats.points} points)")
    click.echo(f"  Achievements: {len(result.timeline.achievements)}")
    click.echo(result.congratulation)

    if output:
        n = write_json(result, output)
        click.echo(f"Wrote {n} sessions to {output}")

    if api:
        click.echo(f"Injecting into {api}...")
        summary = inject_to_api(result, api, api_key)
        click.echo(f"Sent {summary['sessions']} sessions in {summary['batches']} batches.")
        if summary["errors"]:
            click.echo(f"Errors ({len(summary['errors'])}):", err=True)
            for err in summary["errors"]:
                click.echo(f"  {err}", err=True)
            sys.exit(1)


@main.command("list-presets")
def list_presets():
    """List available questionnaire presets."""
    for name, answers in PRESETS.items():
        click.echo(f"{name}:")
        for key, value in answers.items():
            click.echo(f"  {key}: {value}")
        click.echo()


@main.command()
@click.option("--planned-minutes", type=click.IntRange(min=0), default=60, show_default=True)
@click.option("--sets-planned", type=click.IntRange(min=0), default=12, show_default=True)
@click.option("--sets-completed", type=click.IntRange(min=0), default=12, show_default=True)
@click.option("--experience", type=click.Choice(EXPERIENCE_LEVELS), default="intermediate", show_default=True)
@click.option("--gender", type=click.Choice(GENDERS), default="other", show_default=True)
@click.option("--seed", type=int, help="Random seed (defaults to DEMOGEN_SEED).")
@click.option("--examples", is_flag=True, help="Also print the typical scenarios for this profile.")
def duration(
    planned_minutes: int,
    sets_planned: int,
    sets_completed: int,
    experience: str,
    gender: str,
    seed: int | None,
    examples: bool,
):
    """Estimate a realistic session duration."""
    config = _guarded_config()
    rng = random.Random(seed if seed is not None else config.seed)

    seconds = estimate(planned_minutes * 60, sets_planned, sets_completed, experience, gender, rng)
    click.echo(f"{seconds} seconds ({format_duration(seconds)})")

    if examples:
        for example in example_durations(experience, gender, rng, planned_minutes * 60):
            click.echo(f"  {example['scenario']}: {example['formatted']} - {example['description']}")
