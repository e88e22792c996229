"""Need gauges with batched decay and edge-triggered threshold events.

Each gauge decays continuously, but sub-unit decay is collected in an
accumulator and only subtracted once it reaches a whole unit. After every
decay step the value is compared with the value seen at the previous check:

- ``<= 0`` from ``> 0``                   -> ``{Need}Unfulfilled`` (wins the tick)
- ``<= needed`` from ``> needed``         -> ``{Need}Needed``
- ``>= fulfilled`` from ``< fulfilled``   -> ``{Need}Fulfilled``

Comparing against the last *checked* value (rather than the value at the
start of the tick) means crossings caused by event deltas or direct
adjustments between ticks are still reported, once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional

from affect_core.models.affect import clamp_gauge
from affect_core.models.profiles import EventProfile

from .errors import ConfigurationInvalid

logger = logging.getLogger(__name__)

HOUR_S = 60.0 * 60.0


class NeedKind(str, Enum):
    TOUCH = "Touch"
    REST = "Rest"
    SOCIAL = "Social"
    HUNGER = "Hunger"

    @classmethod
    def parse(cls, raw: "str | NeedKind") -> "NeedKind":
        if isinstance(raw, NeedKind):
            return raw
        normalized = str(raw).strip().casefold()
        for kind in cls:
            if kind.value.casefold() == normalized:
                return kind
        raise ConfigurationInvalid(f"unknown need gauge '{raw}'")


def rate_per_second(hours_to_empty: float) -> float:
    """Decay rate that drains a full gauge in ``hours_to_empty`` hours."""

    if hours_to_empty <= 0:
        return 0.0
    return 100.0 / (hours_to_empty * HOUR_S)


DEFAULT_DECAY_HOURS: Mapping[NeedKind, float] = {
    NeedKind.TOUCH: 3.0,
    NeedKind.REST: 12.0,
    NeedKind.SOCIAL: 6.0,
    NeedKind.HUNGER: 6.0,
}


@dataclass
class NeedGauge:
    kind: NeedKind
    value: float = 50.0
    decay_rate_per_s: float = 0.0
    needed: float = 30.0
    fulfilled: float = 70.0
    accumulator: float = 0.0
    last_seen: Optional[float] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        validate_thresholds(self.kind, self.needed, self.fulfilled)
        self.value = clamp_gauge(self.value)
        self.decay_rate_per_s = max(0.0, float(self.decay_rate_per_s))
        if self.last_seen is None:
            self.last_seen = self.value

    def adjust(self, amount: float) -> float:
        self.value = clamp_gauge(self.value + amount)
        return self.value

    def decay(self, dt: float) -> None:
        self.accumulator += self.decay_rate_per_s * max(0.0, dt)
        if self.accumulator >= 1.0:
            self.value = max(0.0, self.value - self.accumulator)
            self.accumulator = 0.0

    def sync(self) -> None:
        """Accept the current value as checked without reporting a crossing."""

        self.last_seen = self.value

    def check(self) -> Optional[str]:
        """Compare against the last checked value and return a crossing event name."""

        previous = self.last_seen if self.last_seen is not None else self.value
        current = self.value
        self.last_seen = current
        if current <= 0.0 < previous:
            return f"{self.kind.value}Unfulfilled"
        if current <= self.needed < previous:
            return f"{self.kind.value}Needed"
        if previous < self.fulfilled <= current:
            return f"{self.kind.value}Fulfilled"
        return None


def validate_thresholds(kind: NeedKind, needed: float, fulfilled: float) -> None:
    if not (0.0 <= needed <= 100.0 and 0.0 <= fulfilled <= 100.0):
        raise ConfigurationInvalid(f"{kind.value} thresholds must lie in [0, 100]")
    if needed >= fulfilled:
        raise ConfigurationInvalid(
            f"{kind.value} needed threshold ({needed}) must be below fulfilled ({fulfilled})"
        )


class GaugeBank:
    """The four need gauges, advanced together."""

    def __init__(self, gauges: Iterable[NeedGauge] | None = None) -> None:
        provided = {g.kind: g for g in (gauges or [])}
        self._gauges: Dict[NeedKind, NeedGauge] = {}
        for kind in NeedKind:
            self._gauges[kind] = provided.get(kind) or NeedGauge(
                kind=kind,
                decay_rate_per_s=rate_per_second(DEFAULT_DECAY_HOURS[kind]),
            )

    def __getitem__(self, kind: "str | NeedKind") -> NeedGauge:
        return self._gauges[NeedKind.parse(kind)]

    def value(self, kind: "str | NeedKind") -> float:
        return self[kind].value

    def decay(self, dt: float) -> List[str]:
        """Advance every gauge by ``dt`` seconds; return crossing event names."""

        events: List[str] = []
        for kind in NeedKind:
            gauge = self._gauges[kind]
            gauge.decay(dt)
            name = gauge.check()
            if name:
                logger.debug("gauge %s crossed threshold at %.2f -> %s", kind.value, gauge.value, name)
                events.append(name)
        return events

    def adjust(self, kind: "str | NeedKind", amount: float) -> float:
        return self[kind].adjust(amount)

    def apply_deltas(self, profile: EventProfile) -> None:
        self._gauges[NeedKind.TOUCH].adjust(profile.touch_delta)
        self._gauges[NeedKind.REST].adjust(profile.rest_delta)
        self._gauges[NeedKind.SOCIAL].adjust(profile.social_delta)

    def snapshot(self) -> Dict[str, float]:
        return {kind.value.lower(): float(gauge.value) for kind, gauge in self._gauges.items()}


__all__ = [
    "HOUR_S",
    "NeedKind",
    "NeedGauge",
    "GaugeBank",
    "DEFAULT_DECAY_HOURS",
    "rate_per_second",
    "validate_thresholds",
]
