"""Coarse mood classification and fine-grained display emotion grids.

Two partitions of the valence/arousal plane live here:

- :func:`classify_mood` is the 3x3 grid used for mood/temperament
  bookkeeping. Band edges sit at +3 / -3 on both axes.
- :func:`resolve_display` is the 5x5 grid used only for presentation of a
  single (noise-injected) response. Band edges sit at 6, 3, -3, -6.

Upper bands are strict (``> 3``), the middle band is inclusive
(``-3 <= x <= 3``). Both functions are pure and total.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class MoodCategory(str, Enum):
    EXCITED = "Excited"
    HAPPY = "Happy"
    RELAXED = "Relaxed"
    ENERGETIC = "Energetic"
    NEUTRAL = "Neutral"
    TIRED = "Tired"
    ANNOYED = "Annoyed"
    SAD = "Sad"
    GLOOMY = "Gloomy"


class DisplayEmotion(str, Enum):
    EXCITED = "Excited"
    HAPPY = "Happy"
    RELAXED = "Relaxed"
    ENERGETIC = "Energetic"
    NEUTRAL = "Neutral"
    TIRED = "Tired"
    ANNOYED = "Annoyed"
    SAD = "Sad"
    GLOOMY = "Gloomy"
    SURPRISED = "Surprised"
    TENSE = "Tense"
    SCARED = "Scared"
    ANGRY = "Angry"
    MISERABLE = "Miserable"
    SLEEP = "Sleep"


_MOOD_GRID: Tuple[Tuple[MoodCategory, ...], ...] = (
    # rows: arousal high / mid / low, columns: valence high / mid / low
    (MoodCategory.EXCITED, MoodCategory.ENERGETIC, MoodCategory.ANNOYED),
    (MoodCategory.HAPPY, MoodCategory.NEUTRAL, MoodCategory.SAD),
    (MoodCategory.RELAXED, MoodCategory.TIRED, MoodCategory.GLOOMY),
)

_D = DisplayEmotion
_DISPLAY_GRID: Tuple[Tuple[DisplayEmotion, ...], ...] = (
    # rows: arousal > 6, (3, 6], [-3, 3], [-6, -3), < -6
    # columns: valence > 6, (3, 6], [-3, 3], [-6, -3), < -6
    (_D.EXCITED, _D.EXCITED, _D.SURPRISED, _D.TENSE, _D.SCARED),
    (_D.HAPPY, _D.HAPPY, _D.ENERGETIC, _D.ANNOYED, _D.ANGRY),
    (_D.HAPPY, _D.HAPPY, _D.NEUTRAL, _D.SAD, _D.MISERABLE),
    (_D.RELAXED, _D.RELAXED, _D.TIRED, _D.SAD, _D.SAD),
    (_D.RELAXED, _D.RELAXED, _D.TIRED, _D.GLOOMY, _D.GLOOMY),
)


def _three_band(value: float) -> int:
    if value > 3.0:
        return 0
    if value >= -3.0:
        return 1
    return 2


def _five_band(value: float) -> int:
    if value > 6.0:
        return 0
    if value > 3.0:
        return 1
    if value >= -3.0:
        return 2
    if value >= -6.0:
        return 3
    return 4


def classify_mood(valence: float, arousal: float) -> MoodCategory:
    return _MOOD_GRID[_three_band(arousal)][_three_band(valence)]


def resolve_display(valence: float, arousal: float) -> DisplayEmotion:
    return _DISPLAY_GRID[_five_band(arousal)][_five_band(valence)]


__all__ = ["MoodCategory", "DisplayEmotion", "classify_mood", "resolve_display"]
