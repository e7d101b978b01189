"""Runtime configuration and the demo-mode guard.

The generator fabricates data that must never reach production stores, so
every entry point refuses to run unless DEMOGEN_MODE names a demo mode.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEMO_MODES = frozenset({"development", "demo", "test"})


class DemoModeError(RuntimeError):
    """Raised when the generator is invoked outside a demo mode."""


@dataclass(frozen=True)
class Config:
    mode: str | None = None
    seed: int | None = None
    log_format: str = "json"
    log_level: str = "INFO"

    @property
    def demo_enabled(self) -> bool:
        return self.mode in DEMO_MODES

    @classmethod
    def from_env(cls) -> "Config":
        raw_seed = os.environ.get("DEMOGEN_SEED", "").strip()
        seed: int | None = None
        if raw_seed:
            try:
                seed = int(raw_seed)
            except ValueError:
                logger.warning("Ignoring non-integer DEMOGEN_SEED=%r", raw_seed)

        log_level = os.environ.get("DEMOGEN_LOG_LEVEL", "INFO").strip().upper()
        if log_level not in logging.getLevelNamesMapping():
            logger.warning("Ignoring unknown DEMOGEN_LOG_LEVEL=%r, using INFO", log_level)
            log_level = "INFO"

        mode = os.environ.get("DEMOGEN_MODE", "").strip().lower() or None
        return cls(
            mode=mode,
            seed=seed,
            log_format=os.environ.get("DEMOGEN_LOG_FORMAT", "json"),
            log_level=log_level,
        )


def require_demo_mode(config: Config | None = None) -> Config:
    """Return the active config, or raise DemoModeError outside demo modes."""
    cfg = config if config is not None else Config.from_env()
    if not cfg.demo_enabled:
        raise DemoModeError(
            "demogen only runs in a demo mode; set DEMOGEN_MODE to one of "
            f"{', '.join(sorted(DEMO_MODES))} (got {cfg.mode!r})"
        )
    return cfg
