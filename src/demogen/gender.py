"""Grammatical-gender adaptation for generated Hebrew text.

Notes and labels are written once and adapted to the profile's gender:
male and female targets swap the opposite word form, "other" gets a
neutral paraphrase from a separate table. Matching is whole-word and
single-pass, so an already adapted form is never adapted twice.
"""

from __future__ import annotations

import re

# (male form, female form, neutral paraphrase)
GENDERED_FORMS: tuple[tuple[str, str, str], ...] = (
    ("צעיר ומלא אנרגיה", "צעירה ומלאה אנרגיה", "עם אנרגיה צעירה"),
    ("מנוסה ופעיל", "מנוסה ופעילה", "עם ניסיון ופעילות"),
    ("הרגשתי חזק", "הרגשתי חזקה", "הרגשתי עוצמה"),
    ("הייתי עייף", "הייתי עייפה", "הרגשתי עייפות"),
    ("המשך כך", "המשיכי כך", "ממשיכים כך"),
    ("אתה מדהים", "את מדהימה", "אתם מדהימים"),
    ("מתחיל", "מתחילה", "בתחילת הדרך"),
    ("מתקדם", "מתקדמת", "ברמה גבוהה"),
    ("שמור", "שמרי", "חשוב לשמור"),
    ("נשום", "נשמי", "חשוב לנשום"),
)

_TO_MALE: dict[str, str] = {female: male for male, female, _ in GENDERED_FORMS}
_TO_FEMALE: dict[str, str] = {male: female for male, female, _ in GENDERED_FORMS}
_TO_NEUTRAL: dict[str, str] = {
    form: neutral for male, female, neutral in GENDERED_FORMS for form in (male, female)
}

_HEBREW_LETTER = "א-ת"


def _compile(table: dict[str, str]) -> re.Pattern[str]:
    # Longest phrase first so multi-word forms win over their single words
    alternatives = sorted(table, key=len, reverse=True)
    body = "|".join(re.escape(a) for a in alternatives)
    return re.compile(rf"(?<![{_HEBREW_LETTER}])(?:{body})(?![{_HEBREW_LETTER}])")


_TABLES: dict[str, tuple[re.Pattern[str], dict[str, str]]] = {
    "male": (_compile(_TO_MALE), _TO_MALE),
    "female": (_compile(_TO_FEMALE), _TO_FEMALE),
    "other": (_compile(_TO_NEUTRAL), _TO_NEUTRAL),
}


def adapt_text(text: str, gender: str) -> str:
    """Adapt gendered word forms in ``text`` to ``gender``.

    Unknown genders are treated as "other". Text without any known form is
    returned unchanged.
    """
    pattern, table = _TABLES.get(gender, _TABLES["other"])
    return pattern.sub(lambda m: table[m.group(0)], text)


# Pools are written in the male form and adapted on the way out.
EXERCISE_NOTES: tuple[str, ...] = (
    "שמור על גב ישר לאורך כל הסט",
    "נשום עמוק בין החזרות",
    "הרגשתי חזק בסט הראשון",
    "הייתי עייף בסט האחרון",
    "אני עדיין מתחיל בתרגיל הזה",
    "הטכניקה השתפרה, המשך כך",
    "ירידה איטית, שמור על שליטה",
)

FEEDBACK_NOTES: dict[str, tuple[str, ...]] = {
    "hard": (
        "אימון חזק! המשך כך!",
        "המשקלים היו כבדים אבל התמדתי",
        "דחפתי את הגבולות היום, הרגשתי חזק",
        "גאה בעצמי על ההישג",
        "הייתי עייף אבל סיימתי הכל",
    ),
    "easy": (
        "אימון נעים, הרגשתי חזק ובשליטה",
        "זרימה טובה היום, הכל הלך חלק",
        "אימון בסיסי אבל יעיל",
        "כבר לא מתחיל, רואים התקדמות",
    ),
}


def exercise_notes(gender: str) -> list[str]:
    return [adapt_text(note, gender) for note in EXERCISE_NOTES]


def feedback_notes(gender: str, difficulty: int = 3) -> list[str]:
    """Session feedback notes for the given gender; difficulty >= 4 uses the hard pool."""
    pool = FEEDBACK_NOTES["hard"] if difficulty >= 4 else FEEDBACK_NOTES["easy"]
    return [adapt_text(note, gender) for note in pool]


def congratulation_message(gender: str, total_workouts: int, personal_records: int = 0) -> str:
    if personal_records == 0:
        return adapt_text(f"כל הכבוד! השלמת {total_workouts} אימונים. אתה מדהים, המשך כך!", gender)

    record_text = "שיא אישי" if personal_records == 1 else f"{personal_records} שיאים אישיים"
    return adapt_text(
        f"מזל טוב! שברת {record_text} ב-{total_workouts} אימונים. אתה מדהים, המשך כך!",
        gender,
    )
