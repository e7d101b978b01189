"""Timeline builder — day-by-day walk producing a multi-week history.

The walk runs oldest → newest so streaks and progressive overload
accumulate in training order; the finished timeline stores sessions
newest-first for history screens.
"""

from __future__ import annotations

import logging
import random
from datetime import date, timedelta

from demogen.exercises import CATALOG, Exercise
from demogen.generators.session import session_start_time, synthesize_session
from demogen.models import Achievement, HistoryTimeline, Measurement, Profile, WorkoutSession

logger = logging.getLogger(__name__)

SKIP_PROBABILITY: dict[str, float] = {
    "beginner": 0.27,
    "intermediate": 0.12,
    "advanced": 0.04,
}

# Weekly progressive overload applied to working weights
WEEKLY_PROGRESSION: dict[str, float] = {
    "beginner": 0.015,
    "intermediate": 0.005,
    "advanced": 0.002,
}

MEASUREMENT_INTERVAL_DAYS = 14
# goal → (weight kg/week, body fat %/week)
MEASUREMENT_TRENDS: dict[str, tuple[float, float]] = {
    "lose_weight": (-0.25, -0.15),
    "build_muscle": (0.15, -0.05),
    "feel_stronger": (0.05, -0.05),
    "sport_performance": (0.0, -0.08),
}

MILESTONE_WORKOUTS: dict[int, tuple[str, str]] = {
    10: ("10 אימונים", "השלמת את 10 האימונים הראשונים"),
    20: ("חודש של התמדה", "20 אימונים, חודש מלא של עקביות"),
}
STREAK_SESSIONS = 7
STREAK_MAX_GAP_DAYS = 2


def weekly_schedule(profile: Profile, rng: random.Random) -> frozenset[int]:
    """Fixed training weekdays (Monday=0) for the whole timeline."""
    days = max(1, min(7, profile.available_days_per_week))
    return frozenset(rng.sample(range(7), days))


def progression_factor(experience: str, week_index: int) -> float:
    return (1.0 + WEEKLY_PROGRESSION.get(experience, 0.0)) ** week_index


def generate_measurement(
    profile: Profile,
    day: date,
    week_index: int,
    rng: random.Random,
) -> Measurement:
    weight_trend, fat_trend = MEASUREMENT_TRENDS.get(profile.primary_goal, (0.0, 0.0))
    weight = profile.weight_kg + weight_trend * week_index + rng.uniform(-0.4, 0.4)
    body_fat = profile.estimated_body_fat_pct + fat_trend * week_index + rng.uniform(-0.3, 0.3)
    return Measurement(
        day=day,
        weight_kg=round(weight, 1),
        body_fat_pct=round(max(3.0, body_fat), 1),
    )


def _record_achievement(session: WorkoutSession) -> Achievement:
    names = [
        ex.exercise.name
        for ex in session.exercises
        if any(s.is_personal_record for s in ex.sets)
    ]
    return Achievement(
        day=session.day,
        kind="personal_record",
        title="שיא אישי חדש",
        description=", ".join(names),
    )


def build_timeline(
    profile: Profile,
    rng: random.Random,
    weeks: int = 12,
    reference_date: date | None = None,
    *,
    catalog: tuple[Exercise, ...] = CATALOG,
) -> HistoryTimeline:
    """Generate ``weeks`` of history ending at ``reference_date`` (inclusive)."""
    if reference_date is None:
        reference_date = date.today()
    total_days = max(0, weeks) * 7
    start_date = reference_date - timedelta(days=total_days - 1) if total_days else reference_date

    schedule = weekly_schedule(profile, rng)
    skip_probability = SKIP_PROBABILITY[profile.experience_level]

    sessions: list[WorkoutSession] = []
    measurements: list[Measurement] = []
    achievements: list[Achievement] = []

    streak = 0
    last_session_day: date | None = None
    skipped = 0

    for day_offset in range(total_days):
        day = start_date + timedelta(days=day_offset)
        week_index = day_offset // 7

        if day_offset % MEASUREMENT_INTERVAL_DAYS == 0:
            measurements.append(generate_measurement(profile, day, week_index, rng))

        if day.weekday() not in schedule:
            continue

        if rng.random() < skip_probability:
            # A skipped scheduled day breaks the in-progress streak
            skipped += 1
            streak = 0
            continue

        session = synthesize_session(
            profile,
            day,
            rng,
            start_time=session_start_time(profile, day, rng),
            progression=progression_factor(profile.experience_level, week_index),
            catalog=catalog,
        )
        sessions.append(session)

        if last_session_day is not None and (day - last_session_day).days <= STREAK_MAX_GAP_DAYS:
            streak += 1
        else:
            streak = 1
        last_session_day = day

        milestone = MILESTONE_WORKOUTS.get(len(sessions))
        if milestone is not None:
            title, description = milestone
            achievements.append(Achievement(day, "milestone", title, description))

        if streak == STREAK_SESSIONS:
            achievements.append(
                Achievement(day, "streak", "רצף של 7 אימונים", "7 אימונים ברצף בלי לדלג")
            )
            streak = 0

        if session.has_personal_record:
            achievements.append(_record_achievement(session))

    logger.info(
        "Built timeline",
        extra={
            "demogen_profile_id": profile.id,
            "demogen_session_count": len(sessions),
            "demogen_skipped": skipped,
            "demogen_weeks": weeks,
        },
    )

    return HistoryTimeline(
        profile_id=profile.id,
        start_date=start_date,
        reference_date=reference_date,
        sessions=tuple(reversed(sessions)),
        measurements=tuple(measurements),
        achievements=tuple(achievements),
    )
