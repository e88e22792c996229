from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from affect_core.models.affect import clamp_gauge

from .gauges import HOUR_S

logger = logging.getLogger(__name__)

WAKE_RESTED = "rested"
WAKE_MAX_DURATION = "max_duration"
WAKE_COMMAND = "command"


class SleepState(str, Enum):
    AWAKE = "Awake"
    ASLEEP = "Asleep"


@dataclass
class SleepSettings:
    enabled: bool = True
    max_duration_s: float = 4.0 * HOUR_S
    regen_rate_per_s: float = 100.0 / (4.0 * HOUR_S)
    wake_events: Tuple[str, ...] = field(default_factory=lambda: ("LoudNoise",))

    def is_wake_event(self, keyword: str) -> bool:
        key = str(keyword or "").strip().casefold()
        return any(key == name.casefold() for name in self.wake_events)


class SleepCycle:
    """Awake/Asleep state machine driven by the rest gauge.

    Elapsed sleep is counted in tick time, so an accelerated clock shortens
    the real-world nap as well as speeding up regeneration.
    """

    def __init__(self, settings: SleepSettings | None = None) -> None:
        self.settings = settings or SleepSettings()
        self.state = SleepState.AWAKE
        self.elapsed_s = 0.0
        self.sleep_count = 0
        self.last_wake_reason: Optional[str] = None

    @property
    def is_asleep(self) -> bool:
        return self.state is SleepState.ASLEEP

    def should_sleep(self, rest: float) -> bool:
        return self.settings.enabled and not self.is_asleep and rest <= 0.0

    def fall_asleep(self) -> bool:
        if self.is_asleep:
            return False
        self.state = SleepState.ASLEEP
        self.elapsed_s = 0.0
        self.sleep_count += 1
        logger.info("falling asleep (sleep #%d)", self.sleep_count)
        return True

    def wake(self, reason: str) -> bool:
        if not self.is_asleep:
            return False
        self.state = SleepState.AWAKE
        self.last_wake_reason = reason
        logger.info("woke up after %.0fs (%s)", self.elapsed_s, reason)
        return True

    def regenerate(self, rest: float, dt: float) -> Tuple[float, Optional[str]]:
        """Regenerate rest for ``dt`` seconds; return the new level and a wake reason."""

        if not self.is_asleep:
            return rest, None
        dt = max(0.0, dt)
        self.elapsed_s += dt
        rest = clamp_gauge(rest + self.settings.regen_rate_per_s * dt)
        if rest >= 100.0:
            return rest, WAKE_RESTED
        if self.elapsed_s >= self.settings.max_duration_s:
            return rest, WAKE_MAX_DURATION
        return rest, None


__all__ = [
    "SleepState",
    "SleepSettings",
    "SleepCycle",
    "WAKE_RESTED",
    "WAKE_MAX_DURATION",
    "WAKE_COMMAND",
]
