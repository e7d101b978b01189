"""Pre-filled questionnaire answers for quick demo generation.

Each preset is a partial answer set; anything it leaves out is sampled
by the profile synthesizer like any other missing answer.
"""

from __future__ import annotations

BEGINNER: dict = {
    "name": "נועה לוי",
    "gender": "female",
    "age": 27,
    "experience_level": "complete_beginner",
    "goal": "lose_weight",
    "available_days": 3,
    "session_duration": "30-45",
    "workout_location": "home",
    "available_equipment": ["dumbbells", "resistance_bands"],
    "preferred_time": "morning",
}

INTERMEDIATE: dict = {
    "name": "דניאל כהן",
    "gender": "male",
    "age": 34,
    "experience_level": "intermediate",
    "goal": "build_muscle",
    "available_days": 4,
    "session_duration": 60,
    "workout_location": "gym",
    "available_equipment": ["full_gym"],
    "preferred_time": "evening",
}

ADVANCED: dict = {
    "name": "אלון מזרחי",
    "gender": "male",
    "age": 38,
    "experience_level": "advanced",
    "goal": "feel_stronger",
    "available_days": 5,
    "session_duration": "60+",
    "workout_location": "gym",
    "available_equipment": ["full_gym"],
    "preferred_time": "afternoon",
}

# Only the gender is fixed; every other answer is sampled
NEUTRAL: dict = {
    "gender": "other",
}

PRESETS: dict[str, dict] = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "advanced": ADVANCED,
    "neutral": NEUTRAL,
}
