"""Generation engine — one seed in, a full profile + history + stats out."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import date
from typing import Any

from demogen.config import Config, require_demo_mode
from demogen.gender import congratulation_message
from demogen.generators.profile import synthesize_from_answers
from demogen.generators.timeline import build_timeline
from demogen.models import AggregateStats, HistoryTimeline, Profile
from demogen.stats import aggregate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    profile: Profile
    timeline: HistoryTimeline
    stats: AggregateStats
    congratulation: str


class GenerationEngine:
    """Seeded end-to-end generator.

    The whole run shares one ``random.Random`` seeded at construction, so
    the same seed, answers and reference date reproduce identical output.
    """

    def __init__(self, seed: int | None = None, config: Config | None = None):
        self.config = require_demo_mode(config)
        self.seed = seed if seed is not None else self.config.seed
        self.rng = random.Random(self.seed)

    def run(
        self,
        answers: dict[str, Any] | None = None,
        weeks: int = 12,
        reference_date: date | None = None,
    ) -> GenerationResult:
        profile = synthesize_from_answers(answers or {}, self.rng)
        timeline = build_timeline(profile, self.rng, weeks=weeks, reference_date=reference_date)
        stats = aggregate(timeline)

        logger.info(
            "Generated demo user",
            extra={
                "demogen_seed": self.seed,
                "demogen_profile_id": profile.id,
                "demogen_experience": profile.experience_level,
                "demogen_session_count": stats.total_workouts,
            },
        )

        return GenerationResult(
            profile=profile,
            timeline=timeline,
            stats=stats,
            congratulation=congratulation_message(
                profile.gender, stats.total_workouts, stats.personal_records,
            ),
        )
