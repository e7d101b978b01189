"""Public entry points.

Every function checks the demo-mode guard before doing any work and
raises DemoModeError outside a demo mode. Pass ``rng`` to thread one
generator through several calls; without it each call seeds a fresh
``random.Random`` from DEMOGEN_SEED (or system entropy when unset).
"""

from __future__ import annotations

import random
from datetime import date
from typing import Any

from demogen.config import Config, require_demo_mode
from demogen.duration import estimate_duration as _estimate_duration
from demogen.gender import adapt_text as _adapt_text
from demogen.generators.profile import synthesize_from_answers
from demogen.generators.timeline import build_timeline
from demogen.models import AggregateStats, HistoryTimeline, Profile
from demogen.stats import aggregate


def _rng(rng: random.Random | None, config: Config) -> random.Random:
    return rng if rng is not None else random.Random(config.seed)


def synthesize_profile(
    answers: dict[str, Any] | None = None,
    *,
    rng: random.Random | None = None,
    config: Config | None = None,
) -> Profile:
    """Random profile, or one completed from partial questionnaire answers."""
    cfg = require_demo_mode(config)
    return synthesize_from_answers(answers or {}, _rng(rng, cfg))


def synthesize_history(
    profile: Profile,
    weeks_back: int = 12,
    *,
    reference_date: date | None = None,
    rng: random.Random | None = None,
    config: Config | None = None,
) -> HistoryTimeline:
    cfg = require_demo_mode(config)
    return build_timeline(profile, _rng(rng, cfg), weeks=weeks_back, reference_date=reference_date)


def estimate_duration(
    planned_seconds: float,
    sets_planned: int,
    sets_completed: int,
    experience: str,
    gender: str,
    *,
    rng: random.Random | None = None,
    config: Config | None = None,
) -> int:
    cfg = require_demo_mode(config)
    return _estimate_duration(
        planned_seconds, sets_planned, sets_completed, experience, gender, _rng(rng, cfg),
    )


def aggregate_statistics(
    timeline: HistoryTimeline,
    *,
    today: date | None = None,
    config: Config | None = None,
) -> AggregateStats:
    require_demo_mode(config)
    return aggregate(timeline, today=today)


def adapt_text(text: str, gender: str, *, config: Config | None = None) -> str:
    require_demo_mode(config)
    return _adapt_text(text, gender)
