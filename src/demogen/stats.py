"""Aggregate statistics derived from a history timeline.

Everything here is a pure function of the timeline, so stats can be
recomputed at any time and never drift from their source.
"""

from __future__ import annotations

import statistics
from collections import Counter
from datetime import date, timedelta

from demogen.models import AggregateStats, HistoryTimeline, WorkoutSession

CURRENT_STREAK_WINDOW_DAYS = 14
STREAK_MAX_GAP_DAYS = 2
FAVORITE_COUNT = 5

POINTS_PER_WORKOUT = 50
POINTS_PER_RATING_STAR = 10
POINTS_PER_TEN_MINUTES = 5
POINTS_PER_LEVEL = 1000


def _session_days(sessions: tuple[WorkoutSession, ...] | list[WorkoutSession]) -> list[date]:
    return sorted({s.day for s in sessions})


def current_streak(sessions, today: date) -> int:
    """Session days chained back from ``today`` within the 14-day window.

    The chain starts at today and breaks at the first gap wider than
    two days; days after ``today`` are ignored.
    """
    window_start = today - timedelta(days=CURRENT_STREAK_WINDOW_DAYS - 1)
    days = [d for d in _session_days(sessions) if window_start <= d <= today]

    streak = 0
    anchor = today
    for day in reversed(days):
        if (anchor - day).days > STREAK_MAX_GAP_DAYS:
            break
        streak += 1
        anchor = day
    return streak


def longest_streak(sessions) -> int:
    """Longest chain of session days with gaps of at most two days."""
    longest = 0
    run = 0
    previous: date | None = None
    for day in _session_days(sessions):
        if previous is not None and (day - previous).days <= STREAK_MAX_GAP_DAYS:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = day
    return longest


def favorite_exercises(sessions, limit: int = FAVORITE_COUNT) -> tuple[str, ...]:
    """Exercise names by occurrence count; ties keep first-encountered order."""
    counts: Counter[str] = Counter()
    for session in sessions:
        for entry in session.exercises:
            counts[entry.exercise.name] += 1
    # Counter preserves insertion order and most_common sorts stably
    return tuple(name for name, _ in counts.most_common(limit))


def consistency_score(sessions) -> float:
    """1 - stddev/mean of the day gaps between sessions, floored at 0.

    Fewer than two sessions count as perfectly consistent.
    """
    days = _session_days(sessions)
    gaps = [(cur - prev).days for prev, cur in zip(days, days[1:])]
    if not gaps:
        return 1.0
    return round(max(0.0, 1 - statistics.pstdev(gaps) / statistics.fmean(gaps)), 3)


def session_points(session: WorkoutSession) -> int:
    points = POINTS_PER_WORKOUT
    points += POINTS_PER_RATING_STAR * (session.rating or 0)
    points += POINTS_PER_TEN_MINUTES * (session.duration_seconds // 600)
    return points


def aggregate(timeline: HistoryTimeline, today: date | None = None) -> AggregateStats:
    """Derive aggregate stats; ``today`` defaults to the timeline's reference date."""
    sessions = timeline.sessions
    if not sessions:
        return AggregateStats(
            total_workouts=0,
            total_volume=0,
            average_rating=None,
            average_difficulty=None,
            current_streak_days=0,
            longest_streak_days=0,
            favorite_exercises=(),
        )

    if today is None:
        today = timeline.reference_date

    ratings = [s.rating for s in sessions if s.rating is not None]
    difficulties = [s.feedback.difficulty for s in sessions if s.feedback is not None]
    points = sum(session_points(s) for s in sessions)
    total_volume = sum(s.total_volume for s in sessions)
    total_sets = sum(s.total_sets for s in sessions)
    sets_completed = sum(s.sets_completed for s in sessions)
    total_duration = sum(s.duration_seconds for s in sessions)

    return AggregateStats(
        total_workouts=len(sessions),
        total_volume=total_volume,
        average_rating=round(sum(ratings) / len(ratings), 2) if ratings else None,
        average_difficulty=round(sum(difficulties) / len(difficulties), 2) if difficulties else None,
        current_streak_days=current_streak(sessions, today),
        longest_streak_days=longest_streak(sessions),
        favorite_exercises=favorite_exercises(sessions),
        total_duration_seconds=total_duration,
        total_calories=sum(s.calories_burned for s in sessions),
        personal_records=sum(
            1 for s in sessions for ex in s.exercises for st in ex.sets if st.is_personal_record
        ),
        points=points,
        level=points // POINTS_PER_LEVEL + 1,
        completion_rate=round(sets_completed / total_sets, 3) if total_sets else 0.0,
        average_volume_per_set=round(total_volume / sets_completed, 2) if sets_completed else 0.0,
        average_duration_seconds=round(total_duration / len(sessions)),
        consistency_score=consistency_score(sessions),
    )
