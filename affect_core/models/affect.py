from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from .mood import MoodCategory, classify_mood

VALENCE_RANGE: Tuple[float, float] = (-10.0, 10.0)
AROUSAL_RANGE: Tuple[float, float] = (-10.0, 10.0)
GAUGE_RANGE: Tuple[float, float] = (0.0, 100.0)


def clamp(value: float, lo: float, hi: float) -> float:
    return float(max(lo, min(hi, value)))


def clamp_affect(value: float) -> float:
    """Clamp a valence or arousal component into [-10, 10]."""

    return clamp(value, VALENCE_RANGE[0], VALENCE_RANGE[1])


def clamp_gauge(value: float) -> float:
    """Clamp a need-gauge level into [0, 100]."""

    return clamp(value, GAUGE_RANGE[0], GAUGE_RANGE[1])


def _coerce_float(payload: Mapping[str, Any] | None, key: str, default: float = 0.0) -> float:
    if not payload:
        return default
    try:
        return float(payload.get(key, default))
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class AffectiveVector:
    """Valence/arousal pair that is clamped into range on construction.

    Used for mood, temperament, event profiles and mood-category base values.
    Instances are immutable; every "mutation" returns a new clamped vector.
    """

    valence: float = 0.0
    arousal: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "valence", clamp_affect(float(self.valence)))
        object.__setattr__(self, "arousal", clamp_affect(float(self.arousal)))

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> "AffectiveVector":
        return cls(
            valence=_coerce_float(payload, "valence"),
            arousal=_coerce_float(payload, "arousal"),
        )

    @property
    def category(self) -> MoodCategory:
        return classify_mood(self.valence, self.arousal)

    def shifted(self, d_valence: float, d_arousal: float) -> "AffectiveVector":
        """Return ``self + (d_valence, d_arousal)``, clamped."""

        return AffectiveVector(self.valence + d_valence, self.arousal + d_arousal)

    def to_dict(self) -> dict[str, float]:
        return {"valence": float(self.valence), "arousal": float(self.arousal)}


@dataclass(frozen=True)
class AffectReading:
    """Read-only view of mood or temperament handed to callers."""

    category: MoodCategory
    valence: float
    arousal: float

    @classmethod
    def of(cls, vector: AffectiveVector) -> "AffectReading":
        return cls(category=vector.category, valence=vector.valence, arousal=vector.arousal)

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category.value,
            "valence": float(self.valence),
            "arousal": float(self.arousal),
        }


__all__ = [
    "VALENCE_RANGE",
    "AROUSAL_RANGE",
    "GAUGE_RANGE",
    "clamp",
    "clamp_affect",
    "clamp_gauge",
    "AffectiveVector",
    "AffectReading",
]
