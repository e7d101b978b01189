"""Tests for aggregate statistics."""

import random
from dataclasses import replace
from datetime import date, datetime, time, timedelta, timezone

from hypothesis import given
from hypothesis import strategies as st

from demogen.exercises import EXERCISES
from demogen.generators.timeline import build_timeline
from demogen.models import Feedback, HistoryTimeline, Profile, SessionExercise, SetRecord, WorkoutSession
from demogen.stats import (
    aggregate,
    consistency_score,
    current_streak,
    favorite_exercises,
    longest_streak,
    session_points,
)

TODAY = date(2026, 3, 1)


def _session(day: date, rating: int | None = 4, exercises=("push_up",), volume: float = 100.0,
             duration: int = 3600, record: bool = False) -> WorkoutSession:
    start = datetime.combine(day, time(18, 0), tzinfo=timezone.utc)
    entries = tuple(
        SessionExercise(
            exercise=EXERCISES[exercise_id],
            sets=(SetRecord(10, 0.0, 10, 0.0, True, record, 8.0),),
            rest_seconds=90,
        )
        for exercise_id in exercises
    )
    feedback = Feedback(difficulty=3, feeling="medium", note="") if rating is not None else None
    return WorkoutSession(
        id=f"s-{day.isoformat()}",
        start_time=start,
        end_time=start + timedelta(seconds=duration),
        duration_seconds=duration,
        exercises=entries,
        total_volume=volume,
        total_sets=len(entries),
        sets_completed=len(entries),
        calories_burned=round(duration / 60 * 7.0),
        rating=rating,
        feedback=feedback,
    )


def _timeline(sessions) -> HistoryTimeline:
    ordered = tuple(sorted(sessions, key=lambda s: s.start_time, reverse=True))
    return HistoryTimeline(
        profile_id="demo_stats",
        start_date=TODAY - timedelta(days=83),
        reference_date=TODAY,
        sessions=ordered,
    )


def _days_ago(*offsets: int) -> list[date]:
    return [TODAY - timedelta(days=n) for n in offsets]


class TestEmptyTimeline:
    def test_zeroed(self):
        stats = aggregate(_timeline([]))
        assert stats.total_workouts == 0
        assert stats.total_volume == 0
        assert stats.average_rating is None
        assert stats.average_difficulty is None
        assert stats.current_streak_days == 0
        assert stats.longest_streak_days == 0
        assert stats.favorite_exercises == ()
        assert stats.completion_rate == 0.0
        assert stats.average_volume_per_set == 0.0
        assert stats.average_duration_seconds == 0
        assert stats.consistency_score == 1.0
        assert stats.points == 0
        assert stats.level == 1


class TestTotals:
    def test_sums(self):
        stats = aggregate(_timeline([_session(d, volume=250.5) for d in _days_ago(0, 2, 4)]))
        assert stats.total_workouts == 3
        assert stats.total_volume == 751.5
        assert stats.total_duration_seconds == 3 * 3600
        assert stats.total_calories == 3 * 420

    def test_average_over_rated_sessions_only(self):
        sessions = [
            _session(TODAY, rating=5),
            _session(TODAY - timedelta(days=1), rating=None),
            _session(TODAY - timedelta(days=2), rating=2),
        ]
        stats = aggregate(_timeline(sessions))
        assert stats.average_rating == 3.5
        assert stats.average_difficulty == 3.0

    def test_all_unrated(self):
        stats = aggregate(_timeline([_session(TODAY, rating=None)]))
        assert stats.average_rating is None

    def test_personal_records(self):
        sessions = [_session(TODAY, record=True), _session(TODAY - timedelta(days=1))]
        assert aggregate(_timeline(sessions)).personal_records == 1


class TestStreaks:
    def test_current_streak_tolerates_two_day_gaps(self):
        sessions = [_session(d) for d in _days_ago(0, 2, 4, 5, 9)]
        # 5 → 9 is a four-day gap
        assert current_streak(sessions, TODAY) == 4

    def test_current_streak_zero_after_long_break(self):
        sessions = [_session(d) for d in _days_ago(3, 4, 5)]
        assert current_streak(sessions, TODAY) == 0

    def test_current_streak_within_window(self):
        sessions = [_session(d) for d in _days_ago(*range(0, 30))]
        assert current_streak(sessions, TODAY) == 14

    def test_future_sessions_ignored(self):
        sessions = [_session(d) for d in _days_ago(-1, 0)]
        assert current_streak(sessions, TODAY) == 1

    def test_longest_streak(self):
        sessions = [_session(d) for d in _days_ago(0, 10, 12, 13, 15, 30)]
        assert longest_streak(sessions) == 4

    def test_today_defaults_to_reference_date(self):
        stats = aggregate(_timeline([_session(d) for d in _days_ago(0, 1)]))
        assert stats.current_streak_days == 2

    def test_explicit_today(self):
        timeline = _timeline([_session(d) for d in _days_ago(0, 1)])
        assert aggregate(timeline, today=TODAY + timedelta(days=10)).current_streak_days == 0

    @given(st.sets(st.integers(min_value=0, max_value=83), max_size=40))
    def test_longest_at_least_current(self, offsets):
        sessions = [_session(d) for d in _days_ago(*offsets)]
        stats = aggregate(_timeline(sessions))
        assert stats.longest_streak_days >= stats.current_streak_days
        assert stats.current_streak_days <= 14


class TestFavorites:
    def test_ranked_by_count(self):
        sessions = [
            _session(TODAY, exercises=("plank", "push_up")),
            _session(TODAY - timedelta(days=1), exercises=("push_up",)),
        ]
        assert favorite_exercises(sessions) == (EXERCISES["push_up"].name, EXERCISES["plank"].name)

    def test_ties_keep_first_encountered_order(self):
        sessions = [_session(TODAY, exercises=("lunge", "plank", "push_up"))]
        names = tuple(EXERCISES[i].name for i in ("lunge", "plank", "push_up"))
        assert favorite_exercises(sessions) == names

    def test_top_five(self):
        ids = ("push_up", "plank", "lunge", "glute_bridge", "bicep_curl", "dumbbell_row", "goblet_squat")
        assert len(favorite_exercises([_session(TODAY, exercises=ids)])) == 5


class TestSessionMetrics:
    def test_completion_rate(self):
        sessions = [
            replace(_session(TODAY), total_sets=10, sets_completed=8),
            replace(_session(TODAY - timedelta(days=2)), total_sets=10, sets_completed=10),
        ]
        assert aggregate(_timeline(sessions)).completion_rate == 0.9

    def test_average_volume_per_completed_set(self):
        sessions = [
            replace(_session(TODAY, volume=600.0), total_sets=12, sets_completed=6),
            replace(_session(TODAY - timedelta(days=2), volume=400.0), total_sets=4, sets_completed=4),
        ]
        assert aggregate(_timeline(sessions)).average_volume_per_set == 100.0

    def test_no_completed_sets(self):
        session = replace(_session(TODAY, volume=0.0), total_sets=5, sets_completed=0)
        stats = aggregate(_timeline([session]))
        assert stats.completion_rate == 0.0
        assert stats.average_volume_per_set == 0.0

    def test_average_duration(self):
        sessions = [_session(TODAY, duration=3000), _session(TODAY - timedelta(days=2), duration=4000)]
        assert aggregate(_timeline(sessions)).average_duration_seconds == 3500

    def test_even_spacing_is_fully_consistent(self):
        sessions = [_session(d) for d in _days_ago(0, 3, 6, 9)]
        assert consistency_score(sessions) == 1.0

    def test_uneven_spacing_lowers_consistency(self):
        sessions = [_session(d) for d in _days_ago(0, 1, 2, 12)]
        # gaps 1, 1, 10: mean 4, population stddev ~4.243
        assert consistency_score(sessions) == 0.0
        sessions = [_session(d) for d in _days_ago(0, 2, 6)]
        # gaps 2, 4: mean 3, stddev 1
        assert consistency_score(sessions) == 0.667

    def test_single_session_is_consistent(self):
        assert consistency_score([_session(TODAY)]) == 1.0
        assert aggregate(_timeline([_session(TODAY)])).consistency_score == 1.0

    @given(st.sets(st.integers(min_value=0, max_value=83), max_size=40))
    def test_consistency_bounded(self, offsets):
        score = consistency_score([_session(d) for d in _days_ago(*offsets)])
        assert 0.0 <= score <= 1.0

    def test_stats_hashable(self):
        stats = aggregate(_timeline([_session(d) for d in _days_ago(0, 2)]))
        assert hash(stats) == hash(aggregate(_timeline([_session(d) for d in _days_ago(0, 2)])))
        assert isinstance(stats.favorite_exercises, tuple)

class TestPoints:
    def test_session_points(self):
        # 50 per workout + 10 per rating star + 5 per 10 minutes
        assert session_points(_session(TODAY, rating=4, duration=3600)) == 50 + 40 + 30
        assert session_points(_session(TODAY, rating=None, duration=900)) == 50 + 5

    def test_level(self):
        sessions = [_session(d, rating=5, duration=3600) for d in _days_ago(*range(0, 60, 2))]
        stats = aggregate(_timeline(sessions))
        assert stats.points == 30 * 130
        assert stats.level == 4


class TestGeneratedTimelines:
    def test_aggregate_is_pure(self):
        profile = Profile(
            id="demo_pure", display_name="טל", gender="other", age=35, height_cm=170.0,
            weight_kg=70.0, experience_level="intermediate", fitness_goals=("improve_health",),
            available_days_per_week=4, session_duration_minutes=60,
            equipment=frozenset({"full_gym"}), preferred_time_of_day="afternoon",
        )
        timeline = build_timeline(profile, random.Random(21), weeks=8, reference_date=TODAY)
        assert aggregate(timeline) == aggregate(timeline)
        stats = aggregate(timeline)
        assert stats.total_workouts == len(timeline.sessions)
        assert stats.total_volume == sum(s.total_volume for s in timeline.sessions)
        assert stats.longest_streak_days >= stats.current_streak_days
