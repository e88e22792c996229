"""Static mood base vectors and built-in event profiles.

Everything here is built once at import time and exposed through read-only
``MappingProxyType`` views. User-registered events live in
:class:`affect.runtime.registry.EventRegistry`, never in these tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping

from .affect import AffectiveVector, clamp_affect
from .mood import MoodCategory


@dataclass(frozen=True)
class EventProfile:
    """How a named stimulus perturbs valence/arousal and the need gauges."""

    keyword: str
    valence: float
    arousal: float
    touch_delta: float = 0.0
    rest_delta: float = 0.0
    social_delta: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "keyword", str(self.keyword).strip())
        object.__setattr__(self, "valence", clamp_affect(float(self.valence)))
        object.__setattr__(self, "arousal", clamp_affect(float(self.arousal)))
        for name in ("touch_delta", "rest_delta", "social_delta"):
            object.__setattr__(self, name, float(getattr(self, name)))

    @property
    def vector(self) -> AffectiveVector:
        return AffectiveVector(self.valence, self.arousal)

    @property
    def key(self) -> str:
        return self.keyword.casefold()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "valence": self.valence,
            "arousal": self.arousal,
            "touch_delta": self.touch_delta,
            "rest_delta": self.rest_delta,
            "social_delta": self.social_delta,
        }


def _keyed(profiles: Iterable[EventProfile]) -> Mapping[str, EventProfile]:
    return MappingProxyType({profile.key: profile for profile in profiles})


# Happy and Energetic sit on the band edge so each base vector classifies
# back to its own category.
MOOD_BASE_VECTORS: Mapping[MoodCategory, AffectiveVector] = MappingProxyType(
    {
        MoodCategory.EXCITED: AffectiveVector(8.0, 8.0),
        MoodCategory.HAPPY: AffectiveVector(8.0, 3.0),
        MoodCategory.RELAXED: AffectiveVector(4.0, -4.0),
        MoodCategory.ENERGETIC: AffectiveVector(3.0, 8.0),
        MoodCategory.NEUTRAL: AffectiveVector(0.0, 0.0),
        MoodCategory.TIRED: AffectiveVector(-2.0, -6.0),
        MoodCategory.ANNOYED: AffectiveVector(-4.0, 4.0),
        MoodCategory.SAD: AffectiveVector(-6.0, -2.0),
        MoodCategory.GLOOMY: AffectiveVector(-8.0, -8.0),
    }
)

NEED_EVENT_PROFILES: Mapping[str, EventProfile] = _keyed(
    [
        EventProfile("HungerNeeded", -5.0, 5.0),
        EventProfile("HungerUnfulfilled", -10.0, 5.0, social_delta=-3.0),
        EventProfile("HungerFulfilled", 5.0, 0.0, social_delta=3.0),
        EventProfile("TouchNeeded", -2.0, 2.0, touch_delta=-5.0, social_delta=-2.0),
        EventProfile("TouchUnfulfilled", -5.0, 0.0, touch_delta=-10.0, rest_delta=-2.0, social_delta=-5.0),
        EventProfile("TouchFulfilled", 8.0, 5.0, touch_delta=10.0, rest_delta=2.0, social_delta=5.0),
        EventProfile("RestNeeded", -2.0, -5.0, rest_delta=-5.0, social_delta=-2.0),
        EventProfile("RestUnfulfilled", -5.0, -8.0, touch_delta=-2.0, rest_delta=-10.0, social_delta=-5.0),
        EventProfile("RestFulfilled", 5.0, 2.0, touch_delta=2.0, rest_delta=10.0, social_delta=2.0),
        EventProfile("SocialNeeded", -2.0, 2.0, social_delta=-5.0),
        EventProfile("SocialUnfulfilled", -5.0, -2.0, touch_delta=-2.0, rest_delta=-2.0, social_delta=-10.0),
        EventProfile("SocialFulfilled", 5.0, 5.0, touch_delta=2.0, rest_delta=2.0, social_delta=10.0),
    ]
)

STIMULUS_EVENT_PROFILES: Mapping[str, EventProfile] = _keyed(
    [
        EventProfile("StrokeFrontToBack", 8.0, 5.0, touch_delta=10.0, rest_delta=2.0, social_delta=5.0),
        EventProfile("StrokeBackToFront", -10.0, 3.0, touch_delta=5.0, rest_delta=-2.0, social_delta=2.0),
        EventProfile("NameHeard", 5.0, 5.0, social_delta=5.0),
        EventProfile("GreetingHeard", 5.0, 2.0, social_delta=5.0),
        EventProfile("FoodHeard", 5.0, 2.0, social_delta=2.0),
        EventProfile("TooFarAway", -10.0, 2.0, social_delta=-5.0),
        EventProfile("HappyHeard", 8.0, 5.0, social_delta=3.0),
        EventProfile("SadHeard", -8.0, -3.0, social_delta=3.0),
        EventProfile("AngryHeard", -8.0, 3.0, social_delta=2.0),
        EventProfile("FarewellHeard", -2.0, -2.0, social_delta=3.0),
        EventProfile("PraiseHeard", 10.0, 5.0, social_delta=5.0),
        EventProfile("TouchHeard", 3.0, 2.0, touch_delta=3.0, social_delta=2.0),
        EventProfile("LookingAway", -6.0, -2.0, social_delta=-4.0),
        EventProfile("LookingTowards", 4.0, 3.0, social_delta=4.0),
        EventProfile("BeingHeld", 8.0, -3.0, touch_delta=10.0, rest_delta=2.0, social_delta=8.0),
        EventProfile("Feeding", 6.0, 3.0, rest_delta=2.0, social_delta=4.0),
    ]
)

BUILTIN_EVENT_PROFILES: Mapping[str, EventProfile] = MappingProxyType(
    {**STIMULUS_EVENT_PROFILES, **NEED_EVENT_PROFILES}
)


__all__ = [
    "EventProfile",
    "MOOD_BASE_VECTORS",
    "NEED_EVENT_PROFILES",
    "STIMULUS_EVENT_PROFILES",
    "BUILTIN_EVENT_PROFILES",
]
