"""Exercise catalog, tiered by the experience level that unlocks each movement."""

from __future__ import annotations

from dataclasses import dataclass

TIER_RANK: dict[str, int] = {"beginner": 0, "intermediate": 1, "advanced": 2}

BODYWEIGHT = "none"

# Equipment tokens a "full_gym" profile implicitly has
GYM_EQUIPMENT: frozenset[str] = frozenset({
    "dumbbells", "barbell", "kettlebell", "cable_machine",
    "pull_up_bar", "resistance_bands", "bench",
})

KNOWN_EQUIPMENT: frozenset[str] = GYM_EQUIPMENT | {BODYWEIGHT, "full_gym"}


@dataclass(frozen=True)
class Exercise:
    exercise_id: str
    name: str  # Hebrew display name
    category: str
    primary_muscles: tuple[str, ...]
    equipment: str
    tier: str  # minimum experience level
    load_factor: float  # working weight relative to a 75 kg beginner baseline; 0.0 = bodyweight


def _ex(exercise_id, name, category, muscles, equipment, tier, load_factor) -> Exercise:
    return Exercise(exercise_id, name, category, tuple(muscles), equipment, tier, load_factor)


CATALOG: tuple[Exercise, ...] = (
    # beginner tier
    _ex("push_up", "שכיבות סמיכה", "push", ["chest", "triceps"], BODYWEIGHT, "beginner", 0.0),
    _ex("bodyweight_squat", "סקוואט", "legs", ["quads", "glutes"], BODYWEIGHT, "beginner", 0.0),
    _ex("plank", "פלאנק", "core", ["core"], BODYWEIGHT, "beginner", 0.0),
    _ex("lunge", "לאנג'ים", "legs", ["quads", "glutes"], BODYWEIGHT, "beginner", 0.0),
    _ex("glute_bridge", "גשר ירכיים", "legs", ["glutes", "hamstrings"], BODYWEIGHT, "beginner", 0.0),
    _ex("dumbbell_row", "חתירה במשקולת", "pull", ["back", "biceps"], "dumbbells", "beginner", 0.45),
    _ex("dumbbell_shoulder_press", "לחיצת כתפיים במשקולות", "push", ["shoulders", "triceps"], "dumbbells", "beginner", 0.35),
    _ex("goblet_squat", "סקוואט גביע", "legs", ["quads", "glutes"], "dumbbells", "beginner", 0.5),
    _ex("bicep_curl", "כפיפת מרפקים", "pull", ["biceps"], "dumbbells", "beginner", 0.25),
    _ex("band_pull_apart", "פתיחת גומייה", "pull", ["rear_delts", "upper_back"], "resistance_bands", "beginner", 0.0),
    # intermediate tier
    _ex("barbell_back_squat", "סקוואט עם מוט", "legs", ["quads", "glutes"], "barbell", "intermediate", 1.0),
    _ex("barbell_bench_press", "לחיצת חזה", "push", ["chest", "triceps", "shoulders"], "barbell", "intermediate", 0.8),
    _ex("romanian_deadlift", "דדליפט רומני", "legs", ["hamstrings", "glutes", "back"], "barbell", "intermediate", 0.9),
    _ex("pull_up", "מתח", "pull", ["back", "biceps"], "pull_up_bar", "intermediate", 0.0),
    _ex("kettlebell_swing", "סווינג קטלבל", "legs", ["glutes", "hamstrings"], "kettlebell", "intermediate", 0.4),
    _ex("cable_row", "חתירה בכבל", "pull", ["back", "biceps"], "cable_machine", "intermediate", 0.6),
    _ex("dip", "מקבילים", "push", ["chest", "triceps"], BODYWEIGHT, "intermediate", 0.0),
    _ex("burpee", "ברפי", "conditioning", ["full_body"], BODYWEIGHT, "intermediate", 0.0),
    # advanced tier
    _ex("conventional_deadlift", "דדליפט", "pull", ["back", "hamstrings", "glutes"], "barbell", "advanced", 1.2),
    _ex("overhead_press", "לחיצה עליונה עם מוט", "push", ["shoulders", "triceps"], "barbell", "advanced", 0.55),
    _ex("barbell_row", "חתירה עם מוט", "pull", ["back", "biceps"], "barbell", "advanced", 0.7),
    _ex("front_squat", "סקוואט קדמי", "legs", ["quads", "core"], "barbell", "advanced", 0.85),
    _ex("weighted_pull_up", "מתח עם משקל", "pull", ["back", "biceps"], "pull_up_bar", "advanced", 0.2),
    _ex("pistol_squat", "סקוואט על רגל אחת", "legs", ["quads", "glutes"], BODYWEIGHT, "advanced", 0.0),
)

EXERCISES: dict[str, Exercise] = {ex.exercise_id: ex for ex in CATALOG}


def get_exercise(exercise_id: str) -> Exercise:
    """Get exercise by ID, raises KeyError if not found."""
    return EXERCISES[exercise_id]


def expand_equipment(equipment: frozenset[str] | set[str]) -> frozenset[str]:
    """Resolve "full_gym" and make bodyweight always available."""
    resolved = set(equipment) | {BODYWEIGHT}
    if "full_gym" in resolved:
        resolved |= GYM_EQUIPMENT
    return frozenset(resolved)


def tier_pool(
    experience_level: str,
    catalog: tuple[Exercise, ...] = CATALOG,
) -> list[Exercise]:
    """All exercises unlocked at the given experience level."""
    rank = TIER_RANK[experience_level]
    return [ex for ex in catalog if TIER_RANK[ex.tier] <= rank]


def exercise_pool(
    experience_level: str,
    equipment: frozenset[str] | set[str],
    catalog: tuple[Exercise, ...] = CATALOG,
) -> list[Exercise]:
    """Tier pool restricted to the available equipment.

    Falls back to the whole tier when nothing matches the equipment.
    """
    unlocked = tier_pool(experience_level, catalog)
    available = expand_equipment(equipment)
    usable = [ex for ex in unlocked if ex.equipment in available]
    return usable or unlocked
