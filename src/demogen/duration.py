"""Realistic session durations.

Real sessions rarely end exactly on plan. The estimate runs a fixed
pipeline, each stage multiplying the running duration:

    completion ratio → base → experience → gender → reality variance → clamp
"""

from __future__ import annotations

import random

MIN_DURATION_SECONDS = 10 * 60
MAX_DURATION_SECONDS = 120 * 60

DEFAULT_COMPLETION_RATIO = 0.8

# (threshold, modifier when ratio > threshold, modifier otherwise)
EXPERIENCE_MODIFIERS: dict[str, tuple[float, float, float]] = {
    "beginner": (0.9, 1.3, 1.5),  # more rest, less efficiency
    "intermediate": (0.8, 1.1, 1.2),
    "advanced": (0.9, 0.95, 1.0),  # efficient execution on complete sessions
}

# gender → (beginner, intermediate, advanced) pacing modifier
GENDER_MODIFIERS: dict[str, tuple[float, float, float]] = {
    "female": (1.10, 1.05, 1.05),
    "male": (1.0, 1.0, 0.95),
}

# (minimum completion ratio, low factor, high factor), checked in order
REALITY_VARIANCE_BANDS: tuple[tuple[float, float, float], ...] = (
    (1.0, 0.95, 1.05),
    (0.8, 0.85, 1.15),
    (0.6, 0.70, 1.00),
    (0.0, 0.50, 0.85),
)

_LEVEL_INDEX = {"beginner": 0, "intermediate": 1, "advanced": 2}


def completion_ratio(sets_planned: int, sets_completed: int) -> float:
    if sets_planned <= 0:
        return DEFAULT_COMPLETION_RATIO
    return max(0, sets_completed) / sets_planned


def experience_modifier(experience: str, ratio: float) -> float:
    rule = EXPERIENCE_MODIFIERS.get(experience)
    if rule is None:
        return 1.0
    threshold, efficient, otherwise = rule
    return efficient if ratio > threshold else otherwise


def gender_modifier(gender: str, experience: str) -> float:
    by_level = GENDER_MODIFIERS.get(gender)
    if by_level is None:  # other / unspecified
        return 1.0
    return by_level[_LEVEL_INDEX.get(experience, 1)]


def reality_variance(ratio: float, rng: random.Random) -> float:
    """Random factor; tight for complete sessions, wide for interrupted ones."""
    for floor, low, high in REALITY_VARIANCE_BANDS:
        if ratio >= floor:
            return rng.uniform(low, high)
    _, low, high = REALITY_VARIANCE_BANDS[-1]
    return rng.uniform(low, high)


def estimate_duration(
    planned_seconds: float,
    sets_planned: int,
    sets_completed: int,
    experience: str,
    gender: str,
    rng: random.Random,
) -> int:
    """Realistic elapsed seconds for a session, clamped to 10-120 minutes."""
    ratio = completion_ratio(sets_planned, sets_completed)

    duration = max(0.0, planned_seconds) * ratio
    duration *= experience_modifier(experience, ratio)
    duration *= gender_modifier(gender, experience)
    duration *= reality_variance(ratio, rng)

    return max(MIN_DURATION_SECONDS, min(MAX_DURATION_SECONDS, round(duration)))


def format_duration(duration_seconds: int) -> str:
    """Hebrew display form: "45 דקות", "1:30 שעות", "2 שעות"."""
    minutes = round(duration_seconds / 60)
    if minutes < 60:
        return f"{minutes} דקות"

    hours, remaining = divmod(minutes, 60)
    if remaining == 0:
        return f"{hours} שעות"
    return f"{hours}:{remaining:02d} שעות"


# (scenario, sets planned, sets completed, description)
EXAMPLE_SCENARIOS: tuple[tuple[str, int, int, str], ...] = (
    ("אימון מושלם", 12, 12, "השלמתי את כל הסטים בקצב טוב"),
    ("אימון חלקי", 12, 8, "לא היה לי זמן לסיים הכל"),
    ("אימון קצר", 12, 6, "אימון מהיר בהפסקת צהריים"),
    ("אימון מורחב", 12, 15, "הוספתי תרגילים נוספים"),
)


def example_durations(
    experience: str,
    gender: str,
    rng: random.Random,
    planned_seconds: int = 60 * 60,
) -> list[dict]:
    """Durations for a few typical scenarios, for display and sanity checks."""
    examples = []
    for scenario, planned_sets, completed_sets, description in EXAMPLE_SCENARIOS:
        seconds = estimate_duration(
            planned_seconds, planned_sets, completed_sets, experience, gender, rng,
        )
        examples.append({
            "scenario": scenario,
            "duration_seconds": seconds,
            "formatted": format_duration(seconds),
            "description": description,
        })
    return examples
