"""Weighted mood/event combination with bounded stochastic noise."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

import numpy as np

from affect_core.models.affect import AffectiveVector, clamp
from affect_core.models.mood import DisplayEmotion, MoodCategory, resolve_display
from affect_core.models.profiles import MOOD_BASE_VECTORS

from .errors import ConfigurationInvalid

logger = logging.getLogger(__name__)

MAX_NOISE_AMPLITUDE = 10.0
_WEIGHT_TOLERANCE = 1e-6


@dataclass(frozen=True)
class ResponseWeights:
    """Mood vs event weighting; the two always sum to 1."""

    mood: float = 0.3
    event: float = 0.7

    def __post_init__(self) -> None:
        mood = float(self.mood)
        event = float(self.event)
        if not (0.0 <= mood <= 1.0 and 0.0 <= event <= 1.0):
            raise ConfigurationInvalid(f"weights must lie in [0, 1] (mood={mood}, event={event})")
        if abs(mood + event - 1.0) > _WEIGHT_TOLERANCE:
            raise ConfigurationInvalid(f"weights must sum to 1 (mood={mood}, event={event})")
        object.__setattr__(self, "mood", mood)
        object.__setattr__(self, "event", event)

    def with_mood_weight(self, weight: float) -> "ResponseWeights":
        mood = clamp(weight, 0.0, 1.0)
        return ResponseWeights(mood=mood, event=1.0 - mood)

    def with_event_weight(self, weight: float) -> "ResponseWeights":
        event = clamp(weight, 0.0, 1.0)
        return ResponseWeights(mood=1.0 - event, event=event)


@dataclass(frozen=True)
class ResolvedResponse:
    """Intermediate result of one resolution; ``valence``/``arousal`` are fuzzed."""

    mood_category: MoodCategory
    combined_valence: float
    combined_arousal: float
    valence: float
    arousal: float
    display: DisplayEmotion


class ResponseResolver:
    """Combine the current mood's base vector with an event vector.

    ``combined = w_mood * base(mood) + w_event * event``; each axis then
    receives independent uniform noise in ``[-noise, noise]`` and the fuzzed
    pair is mapped to a display emotion. This class never mutates mood.
    """

    def __init__(
        self,
        weights: ResponseWeights | None = None,
        noise_amplitude: float = 1.0,
        rng: Optional[np.random.Generator] = None,
        *,
        mood_bases: Mapping[MoodCategory, AffectiveVector] | None = None,
    ) -> None:
        self.weights = weights or ResponseWeights()
        self.noise_amplitude = clamp(noise_amplitude, 0.0, MAX_NOISE_AMPLITUDE)
        self.rng = rng or np.random.default_rng()
        self.mood_bases = mood_bases if mood_bases is not None else MOOD_BASE_VECTORS

    def set_noise_amplitude(self, amplitude: float) -> float:
        self.noise_amplitude = clamp(amplitude, 0.0, MAX_NOISE_AMPLITUDE)
        return self.noise_amplitude

    def mood_base(self, category: MoodCategory) -> AffectiveVector:
        base = self.mood_bases.get(category)
        if base is None:
            logger.warning("no base values for mood %s; using Neutral", category.value)
            base = self.mood_bases.get(MoodCategory.NEUTRAL, AffectiveVector())
        return base

    def resolve(self, event: AffectiveVector, mood: AffectiveVector) -> ResolvedResponse:
        category = mood.category
        base = self.mood_base(category)
        w = self.weights
        combined_v = w.mood * base.valence + w.event * event.valence
        combined_a = w.mood * base.arousal + w.event * event.arousal
        fuzzed_v = combined_v + self._noise()
        fuzzed_a = combined_a + self._noise()
        display = resolve_display(fuzzed_v, fuzzed_a)
        logger.debug(
            "combined V=%.2f A=%.2f from mood %s (%.1f, %.1f) and event (%.1f, %.1f); fuzzed V=%.2f A=%.2f -> %s",
            combined_v,
            combined_a,
            category.value,
            base.valence,
            base.arousal,
            event.valence,
            event.arousal,
            fuzzed_v,
            fuzzed_a,
            display.value,
        )
        return ResolvedResponse(
            mood_category=category,
            combined_valence=float(combined_v),
            combined_arousal=float(combined_a),
            valence=float(fuzzed_v),
            arousal=float(fuzzed_a),
            display=display,
        )

    def _noise(self) -> float:
        amp = self.noise_amplitude
        if amp <= 0.0:
            return 0.0
        return float(self.rng.uniform(-amp, amp))


class ResponseChanceGate:
    """Optional percentage roll deciding whether a response is shown."""

    def __init__(self, chance_percent: float = 100.0, rng: Optional[np.random.Generator] = None) -> None:
        self.chance_percent = clamp(chance_percent, 0.0, 100.0)
        self.rng = rng or np.random.default_rng()

    def roll(self) -> bool:
        value = float(self.rng.uniform(0.0, 100.0))
        visible = value <= self.chance_percent
        logger.debug("response chance roll %.1f/%.1f -> %s", value, self.chance_percent, "show" if visible else "skip")
        return visible

    def apply(self, display: DisplayEmotion) -> DisplayEmotion:
        return display if self.roll() else DisplayEmotion.NEUTRAL


__all__ = [
    "MAX_NOISE_AMPLITUDE",
    "ResponseWeights",
    "ResolvedResponse",
    "ResponseResolver",
    "ResponseChanceGate",
]
