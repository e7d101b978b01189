"""Profile synthesis: random identities, or ones completed from questionnaire answers.

Both paths draw every missing field from the same weighted distributions,
so a profile built from two answers looks like a fully random one.
"""

from __future__ import annotations

import logging
import math
import random
import re
from typing import Any

from demogen.exercises import BODYWEIGHT, KNOWN_EQUIPMENT
from demogen.models import GENDERS, TIMES_OF_DAY, Profile

logger = logging.getLogger(__name__)

AGE_BRACKETS: dict[str, tuple[int, int]] = {
    "16-25": (16, 25),
    "26-35": (26, 35),
    "36-45": (36, 45),
    "46-55": (46, 55),
    "56-65": (56, 65),
    "65+": (65, 75),
}
AGE_BRACKET_WEIGHTS = (0.22, 0.28, 0.22, 0.14, 0.09, 0.05)

# Older brackets sample from a wider, flatter experience pool
EXPERIENCE_BY_BRACKET: dict[str, tuple[tuple[str, ...], tuple[float, ...]]] = {
    "16-25": (("beginner", "intermediate"), (0.6, 0.4)),
    "26-35": (("beginner", "intermediate", "advanced"), (0.45, 0.4, 0.15)),
    "36-45": (("beginner", "intermediate", "advanced"), (0.45, 0.4, 0.15)),
    "46-55": (("beginner", "intermediate", "advanced"), (0.34, 0.33, 0.33)),
    "56-65": (("beginner", "intermediate", "advanced"), (0.34, 0.33, 0.33)),
    "65+": (("beginner", "intermediate", "advanced"), (0.34, 0.33, 0.33)),
}

GOALS_BY_BRACKET: dict[str, tuple[str, ...]] = {
    "16-25": ("build_muscle", "sport_performance", "increase_energy"),
    "26-35": ("build_muscle", "lose_weight", "feel_stronger", "reduce_stress"),
    "36-45": ("lose_weight", "improve_health", "reduce_stress", "increase_energy"),
    "46-55": ("improve_health", "feel_stronger", "reduce_stress", "improve_posture"),
    "56-65": ("improve_health", "feel_stronger", "improve_posture", "increase_energy"),
    "65+": ("improve_health", "feel_stronger", "improve_posture"),
}
ALL_GOALS: frozenset[str] = frozenset(g for goals in GOALS_BY_BRACKET.values() for g in goals)

DAYS_BY_EXPERIENCE: dict[str, tuple[int, ...]] = {
    "beginner": (2, 3),
    "intermediate": (3, 4, 5),
    "advanced": (4, 5, 6),
}
MIN_DAYS_PER_WEEK = 2
MAX_DAYS_PER_WEEK = 6

SESSION_MINUTES: tuple[int, ...] = (30, 45, 60, 75, 90)
SESSION_MINUTES_WEIGHTS: dict[str, tuple[float, ...]] = {
    "beginner": (0.35, 0.4, 0.2, 0.05, 0.0),
    "intermediate": (0.1, 0.3, 0.4, 0.15, 0.05),
    "advanced": (0.0, 0.15, 0.4, 0.3, 0.15),
}

LOCATIONS: tuple[str, ...] = ("home", "gym", "both", "outdoor")
LOCATION_WEIGHTS = (0.3, 0.4, 0.2, 0.1)
HOME_EQUIPMENT: tuple[str, ...] = ("dumbbells", "resistance_bands", "kettlebell", "pull_up_bar")

TIME_OF_DAY_WEIGHTS = (0.3, 0.2, 0.5)
GENDER_WEIGHTS = (0.48, 0.48, 0.04)

MOTIVATIONS: tuple[str, ...] = ("health", "appearance", "strength", "energy", "stress_relief", "social", "routine")

# gender → (mean, std, min, max) height in cm
HEIGHT_CM: dict[str, tuple[float, float, float, float]] = {
    "male": (176.0, 7.0, 160.0, 200.0),
    "female": (163.0, 6.0, 148.0, 185.0),
    "other": (170.0, 8.0, 150.0, 200.0),
}
BMI_BY_EXPERIENCE: dict[str, tuple[float, float]] = {
    "beginner": (26.0, 3.5),
    "intermediate": (24.5, 2.5),
    "advanced": (24.0, 2.0),
}

FIRST_NAMES: dict[str, tuple[tuple[str, str], ...]] = {
    "male": (("יוסי", "yossi"), ("דני", "danny"), ("עומר", "omer"), ("איתי", "itai"), ("גיא", "guy"), ("יוני", "yoni")),
    "female": (("מיכל", "michal"), ("שירה", "shira"), ("נועה", "noa"), ("רונית", "ronit"), ("ליאת", "liat"), ("מאיה", "maya")),
    "other": (("טל", "tal"), ("שחר", "shahar"), ("עדי", "adi"), ("נוי", "noy")),
}
LAST_NAMES: tuple[tuple[str, str], ...] = (
    ("כהן", "cohen"), ("לוי", "levi"), ("מזרחי", "mizrahi"), ("פרידמן", "friedman"),
    ("שפירא", "shapira"), ("אברהם", "abraham"), ("דוד", "david"), ("יוסף", "yosef"),
)

# Questionnaire vocabularies → canonical values; unmatched values return None
GENDER_ALIASES: dict[str, str] = {
    "male": "male", "m": "male", "man": "male", "זכר": "male", "גבר": "male",
    "female": "female", "f": "female", "woman": "female", "נקבה": "female", "אישה": "female",
    "other": "other", "nonbinary": "other", "non_binary": "other", "אחר": "other",
}
EXPERIENCE_ALIASES: dict[str, str] = {
    "beginner": "beginner", "complete_beginner": "beginner", "some_experience": "beginner",
    "novice": "beginner", "מתחיל": "beginner", "מתחילה": "beginner",
    "intermediate": "intermediate", "בינוני": "intermediate", "בינונית": "intermediate",
    "advanced": "advanced", "athlete": "advanced", "expert": "advanced",
    "מתקדם": "advanced", "מתקדמת": "advanced",
}
TIME_ALIASES: dict[str, str] = {
    "morning": "morning", "בוקר": "morning", "early_morning": "morning",
    "afternoon": "afternoon", "noon": "afternoon", "צהריים": "afternoon",
    "evening": "evening", "night": "evening", "ערב": "evening",
}
LOCATION_ALIASES: dict[str, str] = {
    "home": "home", "home_only": "home", "gym": "gym", "gym_only": "gym",
    "both": "both", "flexible": "both", "outdoor": "outdoor",
}

_INT_RE = re.compile(r"\d+")
# Longer digit runs are never a real answer
MAX_NUMBER_DIGITS = 6


def _first_present(answers: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = answers.get(key)
        if value is not None and value != "" and value != []:
            return value
    return None


def _lookup(aliases: dict[str, str], value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    key = value.strip().lower().replace(" ", "_").replace("-", "_")
    match = aliases.get(key)
    if match is None:
        match = aliases.get(value.strip())
    return match


def _as_int(value: Any) -> int | None:
    """int() that returns None for NaN, infinities and overlong digit runs."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, str) and len(value) > MAX_NUMBER_DIGITS:
        return None
    try:
        return int(value)
    except (ValueError, OverflowError):
        return None


def _answer_ints(text: str) -> list[int]:
    return [n for n in (_as_int(token) for token in _INT_RE.findall(text)) if n is not None]


def parse_number(value: Any) -> float | None:
    """Parse a number from an int, float or string ("75", "75.5", "75,5 kg").

    Returns None for anything unparseable or non-finite.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
        return number if math.isfinite(number) else None
    if not isinstance(value, str):
        return None
    match = re.search(r"\d+(?:[.,]\d+)?", value)
    if match is None or len(match.group(0)) > 2 * MAX_NUMBER_DIGITS:
        return None
    return float(match.group(0).replace(",", "."))


def parse_frequency(value: Any) -> int | None:
    """Free-text frequency ("4 times per week", "3-4", 5) → days per week in 2..6."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        days = _as_int(value)
        if days is None:
            return None
    elif isinstance(value, str):
        numbers = _answer_ints(value)
        if not numbers:
            return None
        days = round(sum(numbers[:2]) / len(numbers[:2]))
    else:
        return None
    return max(MIN_DAYS_PER_WEEK, min(MAX_DAYS_PER_WEEK, days))


def parse_session_minutes(value: Any) -> int | None:
    """Session length answer ("45-60", "60+", 45) → minutes."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        minutes = _as_int(value)
        if minutes is None:
            return None
    elif isinstance(value, str):
        numbers = _answer_ints(value)
        if not numbers:
            return None
        if value.strip().endswith("+"):
            minutes = numbers[0] + 10
        else:
            minutes = round(sum(numbers[:2]) / len(numbers[:2]))
    else:
        return None
    return max(15, min(120, minutes))


def normalize_equipment(value: Any) -> frozenset[str] | None:
    """Equipment answer → known tokens; unknown identifiers collapse to "none"."""
    if isinstance(value, str):
        items = [value]
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = list(value)
    else:
        return None
    tokens = set()
    for item in items:
        token = str(item).strip().lower().replace(" ", "_").replace("-", "_")
        tokens.add(token if token in KNOWN_EQUIPMENT else BODYWEIGHT)
    return frozenset(tokens) if tokens else None


def bracket_for_age(age: int) -> str:
    for bracket, (low, high) in AGE_BRACKETS.items():
        if low <= age <= high:
            return bracket
    return "16-25" if age < 16 else "65+"


def equipment_for_location(location: str, rng: random.Random) -> frozenset[str]:
    if location in ("gym", "both"):
        return frozenset({"full_gym", "dumbbells", "barbell", "pull_up_bar"})
    if location == "home":
        return frozenset(rng.sample(HOME_EQUIPMENT, rng.randint(1, 3)))
    return frozenset({BODYWEIGHT, "resistance_bands"})


def _sample_height(gender: str, rng: random.Random) -> float:
    mean, std, low, high = HEIGHT_CM[gender]
    return round(max(low, min(high, rng.gauss(mean, std))), 1)


def _sample_weight(height_cm: float, experience: str, rng: random.Random) -> float:
    mean, std = BMI_BY_EXPERIENCE[experience]
    bmi = max(18.5, min(35.0, rng.gauss(mean, std)))
    height_m = height_cm / 100.0
    return round(bmi * height_m * height_m, 1)


def _make_identity(gender: str, rng: random.Random) -> tuple[str, str, str]:
    first_he, first_en = rng.choice(FIRST_NAMES[gender])
    last_he, last_en = rng.choice(LAST_NAMES)
    email = f"{first_en}.{last_en}{rng.randint(1, 99)}@demo.example"
    profile_id = f"demo_{rng.getrandbits(48):012x}"
    return profile_id, f"{first_he} {last_he}", email


def synthesize_random(rng: random.Random) -> Profile:
    """Build a fully random, self-consistent profile."""
    return synthesize_from_answers({}, rng)


def synthesize_from_answers(answers: dict[str, Any], rng: random.Random) -> Profile:
    """Build a profile from partial questionnaire answers.

    Present answers are used after normalization; absent or malformed ones
    are sampled from the random distributions. Never raises on bad input.
    """
    answers = answers or {}

    gender = _lookup(GENDER_ALIASES, _first_present(answers, "gender", "sex"))
    if gender is None:
        gender = rng.choices(GENDERS, weights=GENDER_WEIGHTS)[0]

    age_value = parse_number(_first_present(answers, "age"))
    age_range = _first_present(answers, "age_range")
    if age_value is not None and 10 <= age_value <= 100:
        age = int(age_value)
        bracket = bracket_for_age(age)
    elif isinstance(age_range, str) and age_range in AGE_BRACKETS:
        bracket = age_range
        age = rng.randint(*AGE_BRACKETS[bracket])
    else:
        if _first_present(answers, "age", "age_range") is not None:
            logger.debug("Unparseable age answer, sampling a default")
        bracket = rng.choices(list(AGE_BRACKETS), weights=AGE_BRACKET_WEIGHTS)[0]
        age = rng.randint(*AGE_BRACKETS[bracket])

    experience = _lookup(
        EXPERIENCE_ALIASES,
        _first_present(answers, "experience_level", "experience", "fitness_experience"),
    )
    if experience is None:
        levels, weights = EXPERIENCE_BY_BRACKET[bracket]
        experience = rng.choices(levels, weights=weights)[0]

    goal = _first_present(answers, "goal", "primary_goal", "fitness_goals", "goals")
    if isinstance(goal, (list, tuple)):
        # The onboarding questionnaire is single-select; keep the first choice
        goal = goal[0] if goal else None
    if not isinstance(goal, str) or not goal.strip():
        goal = rng.choice(GOALS_BY_BRACKET[bracket])
    goal = goal.strip()

    days = parse_frequency(_first_present(answers, "available_days", "frequency", "days_per_week"))
    if days is None:
        days = rng.choice(DAYS_BY_EXPERIENCE[experience])

    minutes = parse_session_minutes(_first_present(answers, "session_duration", "duration"))
    if minutes is None:
        minutes = rng.choices(SESSION_MINUTES, weights=SESSION_MINUTES_WEIGHTS[experience])[0]

    location = _lookup(LOCATION_ALIASES, _first_present(answers, "workout_location", "location"))
    if location is None:
        location = rng.choices(LOCATIONS, weights=LOCATION_WEIGHTS)[0]

    equipment = normalize_equipment(_first_present(answers, "available_equipment", "equipment"))
    if equipment is None:
        equipment = equipment_for_location(location, rng)

    time_of_day = _lookup(TIME_ALIASES, _first_present(answers, "preferred_time", "preferred_time_of_day"))
    if time_of_day is None:
        time_of_day = rng.choices(TIMES_OF_DAY, weights=TIME_OF_DAY_WEIGHTS)[0]

    height = parse_number(_first_present(answers, "height_cm", "height"))
    if height is None or not 120 <= height <= 230:
        height = _sample_height(gender, rng)

    weight = parse_number(_first_present(answers, "weight_kg", "weight"))
    if weight is None or not 35 <= weight <= 250:
        weight = _sample_weight(height, experience, rng)

    motivation = _first_present(answers, "motivation_type", "motivation")
    if not isinstance(motivation, str):
        motivation = rng.choice(MOTIVATIONS)

    profile_id, display_name, email = _make_identity(gender, rng)
    name = _first_present(answers, "name", "display_name")
    if isinstance(name, str) and name.strip():
        display_name = name.strip()

    profile = Profile(
        id=profile_id,
        display_name=display_name,
        gender=gender,
        age=age,
        height_cm=round(height, 1),
        weight_kg=round(weight, 1),
        experience_level=experience,
        fitness_goals=(goal,),
        available_days_per_week=days,
        session_duration_minutes=minutes,
        equipment=equipment,
        preferred_time_of_day=time_of_day,
        email=email,
        age_range=bracket,
        workout_location=location,
        motivation_type=motivation,
    )
    logger.debug(
        "Synthesized profile",
        extra={"demogen_profile_id": profile.id, "demogen_experience": experience},
    )
    return profile
