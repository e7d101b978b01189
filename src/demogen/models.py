"""Core data models for generated demo data."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal

from demogen.exercises import Exercise

Gender = Literal["male", "female", "other"]
ExperienceLevel = Literal["beginner", "intermediate", "advanced"]
TimeOfDay = Literal["morning", "afternoon", "evening"]
AchievementKind = Literal["milestone", "streak", "personal_record"]

GENDERS: tuple[str, ...] = ("male", "female", "other")
EXPERIENCE_LEVELS: tuple[str, ...] = ("beginner", "intermediate", "advanced")
TIMES_OF_DAY: tuple[str, ...] = ("morning", "afternoon", "evening")


@dataclass(frozen=True)
class Profile:
    """Immutable synthetic user. Every generated history is keyed to one."""

    id: str
    display_name: str
    gender: Gender
    age: int
    height_cm: float
    weight_kg: float
    experience_level: ExperienceLevel
    fitness_goals: tuple[str, ...]  # always exactly one goal
    available_days_per_week: int  # 2-6
    session_duration_minutes: int
    equipment: frozenset[str]
    preferred_time_of_day: TimeOfDay
    email: str = ""
    age_range: str = ""
    workout_location: str = "gym"
    motivation_type: str = "health"

    @property
    def primary_goal(self) -> str:
        return self.fitness_goals[0]

    @property
    def bmi(self) -> float:
        height_m = self.height_cm / 100.0
        return round(self.weight_kg / (height_m * height_m), 1)

    @property
    def estimated_body_fat_pct(self) -> float:
        """Deurenberg estimate from BMI, age and sex (illustrative only)."""
        sex_term = {"male": 1.0, "female": 0.0}.get(self.gender, 0.5)
        body_fat = 1.2 * self.bmi + 0.23 * self.age - 10.8 * sex_term - 5.4
        return round(max(5.0, min(45.0, body_fat)), 1)

    @property
    def estimated_vo2max(self) -> float:
        """Rough VO2max (ml/kg/min) from age, sex and training background."""
        base = {"male": 50.0, "female": 42.0}.get(self.gender, 46.0)
        trained = {"beginner": 0.0, "intermediate": 4.0, "advanced": 8.0}[self.experience_level]
        decline = max(0, self.age - 25) * 0.35
        return round(max(20.0, base + trained - decline), 1)


@dataclass(frozen=True)
class SetRecord:
    target_reps: int
    target_weight: float
    actual_reps: int
    actual_weight: float
    completed: bool
    is_personal_record: bool
    rpe: float  # 7-10

    @property
    def volume(self) -> float:
        return self.actual_weight * self.actual_reps


@dataclass(frozen=True)
class SessionExercise:
    exercise: Exercise
    sets: tuple[SetRecord, ...]
    rest_seconds: int
    note: str | None = None

    @property
    def volume(self) -> float:
        return sum(s.volume for s in self.sets)


@dataclass(frozen=True)
class Feedback:
    difficulty: int  # 1-5
    feeling: str  # low, medium, high
    note: str


@dataclass(frozen=True)
class WorkoutSession:
    id: str
    start_time: datetime
    end_time: datetime
    duration_seconds: int
    exercises: tuple[SessionExercise, ...]
    total_volume: float
    total_sets: int
    sets_completed: int
    calories_burned: int
    rating: int | None  # None when no feedback was reported
    feedback: Feedback | None

    @property
    def day(self) -> date:
        return self.start_time.date()

    @property
    def has_personal_record(self) -> bool:
        return any(s.is_personal_record for ex in self.exercises for s in ex.sets)


@dataclass(frozen=True)
class Measurement:
    day: date
    weight_kg: float
    body_fat_pct: float


@dataclass(frozen=True)
class Achievement:
    day: date
    kind: AchievementKind
    title: str
    description: str


@dataclass(frozen=True)
class HistoryTimeline:
    """Generated history for one profile.

    Sessions are newest-first (history screens read them that way);
    measurements and achievements are chronological.
    """

    profile_id: str
    start_date: date
    reference_date: date
    sessions: tuple[WorkoutSession, ...] = ()
    measurements: tuple[Measurement, ...] = ()
    achievements: tuple[Achievement, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.sessions


@dataclass(frozen=True)
class AggregateStats:
    total_workouts: int
    total_volume: float
    average_rating: float | None
    average_difficulty: float | None
    current_streak_days: int
    longest_streak_days: int
    favorite_exercises: tuple[str, ...]
    total_duration_seconds: int = 0
    total_calories: int = 0
    personal_records: int = 0
    points: int = 0
    level: int = 1
    completion_rate: float = 0.0  # completed / planned sets, 0-1
    average_volume_per_set: float = 0.0  # over completed sets
    average_duration_seconds: int = 0
    consistency_score: float = 1.0  # 1 - stddev/mean of days between sessions
