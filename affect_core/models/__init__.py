"""Value types, classification grids and static profile tables."""

from .affect import (
    AROUSAL_RANGE,
    GAUGE_RANGE,
    VALENCE_RANGE,
    AffectReading,
    AffectiveVector,
    clamp,
    clamp_affect,
    clamp_gauge,
)
from .mood import DisplayEmotion, MoodCategory, classify_mood, resolve_display
from .profiles import (
    BUILTIN_EVENT_PROFILES,
    MOOD_BASE_VECTORS,
    NEED_EVENT_PROFILES,
    STIMULUS_EVENT_PROFILES,
    EventProfile,
)

__all__ = [
    "AROUSAL_RANGE",
    "GAUGE_RANGE",
    "VALENCE_RANGE",
    "AffectReading",
    "AffectiveVector",
    "clamp",
    "clamp_affect",
    "clamp_gauge",
    "DisplayEmotion",
    "MoodCategory",
    "classify_mood",
    "resolve_display",
    "BUILTIN_EVENT_PROFILES",
    "MOOD_BASE_VECTORS",
    "NEED_EVENT_PROFILES",
    "STIMULUS_EVENT_PROFILES",
    "EventProfile",
]
