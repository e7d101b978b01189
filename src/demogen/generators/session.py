"""Workout session generator.

Generates one realistic session for a profile:
- Experience-sized exercise selection from the tiered catalog
- Experience-conditioned base weights and reps, scaled by body weight
  and the timeline's progressive overload factor
- Fatigue drift across sets (weights and reps never climb after set 1)
- Occasional personal record on the first set, occasional aborted sets
- Gender-adapted notes and feedback
"""

from __future__ import annotations

import logging
import random
from datetime import date, datetime, time, timedelta, timezone

from demogen.duration import estimate_duration
from demogen.exercises import CATALOG, Exercise, exercise_pool
from demogen.gender import exercise_notes, feedback_notes
from demogen.models import Feedback, Profile, SessionExercise, SetRecord, WorkoutSession

logger = logging.getLogger(__name__)

EXERCISE_COUNT: dict[str, int] = {"beginner": 4, "intermediate": 6, "advanced": 8}
SET_RANGE: dict[str, tuple[int, int]] = {
    "beginner": (2, 4),
    "intermediate": (3, 4),
    "advanced": (3, 5),
}
# Working weight range (kg) for a 75 kg lifter at load_factor 1.0
BASE_WEIGHT_KG: dict[str, tuple[float, float]] = {
    "beginner": (20.0, 40.0),
    "intermediate": (40.0, 70.0),
    "advanced": (60.0, 100.0),
}
REP_RANGE: dict[str, tuple[int, int]] = {
    "beginner": (8, 12),
    "intermediate": (6, 12),
    "advanced": (4, 10),
}
BODYWEIGHT_REP_RANGE: dict[str, tuple[int, int]] = {
    "beginner": (6, 12),
    "intermediate": (8, 15),
    "advanced": (10, 20),
}
REST_SECONDS: dict[str, tuple[int, int]] = {
    "beginner": (90, 150),
    "intermediate": (75, 120),
    "advanced": (60, 180),
}
RATING_BIAS: dict[str, float] = {"beginner": -0.3, "intermediate": 0.0, "advanced": 0.3}

MAX_WEIGHT_DROP_KG = 3
MAX_REP_DROP = 2
PR_PROBABILITY = 0.10
PR_WEIGHT_BUMP_KG = 2.5
SET_COMPLETION_PROBABILITY = 0.95
NOTE_PROBABILITY = 0.4
NO_FEEDBACK_PROBABILITY = 0.08
CALORIES_PER_MINUTE = 7.0

# Preferred window → (first hour, last hour) a session may be planned for
TIME_WINDOWS: dict[str, tuple[int, int]] = {
    "morning": (6, 9),
    "afternoon": (12, 16),
    "evening": (17, 21),
}
START_JITTER_MINUTES = 30
EARLIEST_START = 6 * 60
LATEST_START = 22 * 60


def session_start_time(profile: Profile, day: date, rng: random.Random) -> datetime:
    """Start time inside the preferred window, ±30 min jitter, clamped to 06:00-22:00."""
    first_hour, last_hour = TIME_WINDOWS.get(profile.preferred_time_of_day, TIME_WINDOWS["evening"])
    minutes = rng.randint(first_hour, last_hour) * 60
    minutes += rng.randint(-START_JITTER_MINUTES, START_JITTER_MINUTES)
    minutes = max(EARLIEST_START, min(LATEST_START, minutes))
    hour, minute = divmod(minutes, 60)
    return datetime.combine(day, time(hour, minute), tzinfo=timezone.utc)


def select_exercises(
    profile: Profile,
    rng: random.Random,
    catalog: tuple[Exercise, ...] = CATALOG,
) -> list[Exercise]:
    """Pick the session's exercises without replacement where the pool allows it."""
    count = EXERCISE_COUNT[profile.experience_level]
    pool = exercise_pool(profile.experience_level, profile.equipment, catalog)
    if not pool:
        raise ValueError("exercise catalog is empty")

    if len(pool) >= count:
        return rng.sample(pool, count)

    logger.warning(
        "Exercise pool smaller than requested count, sampling with replacement",
        extra={"demogen_pool_size": len(pool), "demogen_requested": count},
    )
    picked = rng.sample(pool, len(pool))
    picked.extend(rng.choices(pool, k=count - len(pool)))
    return picked


def _round_weight(weight: float) -> float:
    """Round to 0.5 kg so volumes stay exact sums."""
    return round(weight * 2) / 2


def _rpe(set_index: int, rng: random.Random) -> float:
    raw = 7.0 + set_index * 0.5 + rng.uniform(0.0, 1.0)
    return max(7.0, min(10.0, round(raw * 2) / 2))


def generate_sets(
    profile: Profile,
    exercise: Exercise,
    rng: random.Random,
    progression: float = 1.0,
) -> tuple[SetRecord, ...]:
    """Sets for one exercise, with fatigue drift and a possible set-1 record."""
    level = profile.experience_level
    n_sets = rng.randint(*SET_RANGE[level])
    weighted = exercise.load_factor > 0

    if weighted:
        low, high = BASE_WEIGHT_KG[level]
        raw = rng.uniform(low, high) * exercise.load_factor * (profile.weight_kg / 75.0) * progression
        weight = max(2.5, _round_weight(raw))
        reps = rng.randint(*REP_RANGE[level])
    else:
        weight = 0.0
        reps = rng.randint(*BODYWEIGHT_REP_RANGE[level])

    sets: list[SetRecord] = []
    aborted = False
    for set_idx in range(n_sets):
        if set_idx > 0:
            if weighted:
                weight = max(min(weight, 2.5), weight - rng.randint(0, MAX_WEIGHT_DROP_KG))
            reps = max(1, reps - rng.randint(0, MAX_REP_DROP))

        # A dropped set ends the exercise; the remaining sets are not performed
        completed = not aborted and rng.random() < SET_COMPLETION_PROBABILITY
        aborted = not completed

        is_pr = set_idx == 0 and completed and rng.random() < PR_PROBABILITY
        rpe = _rpe(set_idx, rng)

        if not completed:
            actual_weight, actual_reps = 0.0, 0
        elif is_pr:
            actual_weight = weight + PR_WEIGHT_BUMP_KG if weighted else 0.0
            actual_reps = reps if weighted else reps + 1
            rpe = max(rpe, 9.0)
        else:
            actual_weight, actual_reps = weight, reps

        sets.append(
            SetRecord(
                target_reps=reps,
                target_weight=weight,
                actual_reps=actual_reps,
                actual_weight=actual_weight,
                completed=completed,
                is_personal_record=is_pr,
                rpe=rpe,
            )
        )

    return tuple(sets)


def _feedback(
    profile: Profile,
    exercises: list[SessionExercise],
    ratio: float,
    rng: random.Random,
) -> tuple[int | None, Feedback | None]:
    if rng.random() < NO_FEEDBACK_PROBABILITY:
        return None, None

    score = 3.0 + (ratio - 0.8) * 5 + RATING_BIAS[profile.experience_level]
    score += rng.uniform(-0.8, 0.8)
    rating = max(1, min(5, round(score)))

    rpes = [s.rpe for ex in exercises for s in ex.sets if s.completed]
    avg_rpe = sum(rpes) / len(rpes) if rpes else 7.0
    difficulty = max(1, min(5, round(avg_rpe - 5.5 + rng.uniform(-0.5, 0.5))))

    if rating >= 4:
        feeling = "high"
    elif rating <= 2:
        feeling = "low"
    else:
        feeling = "medium"

    note = rng.choice(feedback_notes(profile.gender, difficulty))
    return rating, Feedback(difficulty=difficulty, feeling=feeling, note=note)


def synthesize_session(
    profile: Profile,
    day: date,
    rng: random.Random,
    *,
    start_time: datetime | None = None,
    progression: float = 1.0,
    catalog: tuple[Exercise, ...] = CATALOG,
) -> WorkoutSession:
    """Generate one workout session for ``profile`` on ``day``."""
    if start_time is None:
        start_time = session_start_time(profile, day, rng)

    rest_low, rest_high = REST_SECONDS[profile.experience_level]
    notes = exercise_notes(profile.gender)

    exercises: list[SessionExercise] = []
    for exercise in select_exercises(profile, rng, catalog):
        sets = generate_sets(profile, exercise, rng, progression)
        note = rng.choice(notes) if rng.random() < NOTE_PROBABILITY else None
        exercises.append(
            SessionExercise(
                exercise=exercise,
                sets=sets,
                rest_seconds=rng.randint(rest_low, rest_high),
                note=note,
            )
        )

    total_sets = sum(len(ex.sets) for ex in exercises)
    sets_completed = sum(1 for ex in exercises for s in ex.sets if s.completed)
    total_volume = sum(s.actual_weight * s.actual_reps for ex in exercises for s in ex.sets)

    duration = estimate_duration(
        profile.session_duration_minutes * 60,
        total_sets,
        sets_completed,
        profile.experience_level,
        profile.gender,
        rng,
    )
    ratio = sets_completed / total_sets if total_sets else 0.0
    rating, feedback = _feedback(profile, exercises, ratio, rng)

    return WorkoutSession(
        id=f"{profile.id}-{day.isoformat()}",
        start_time=start_time,
        end_time=start_time + timedelta(seconds=duration),
        duration_seconds=duration,
        exercises=tuple(exercises),
        total_volume=total_volume,
        total_sets=total_sets,
        sets_completed=sets_completed,
        calories_burned=round(duration / 60 * CALORIES_PER_MINUTE),
        rating=rating,
        feedback=feedback,
    )
