from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from affect_core.models.affect import AffectiveVector


@dataclass
class DriftSettings:
    allow_mood_shift: bool = True
    allow_temperament_shift: bool = True
    mood_gain: float = 0.01
    temperament_gain: float = 0.001  # ~100x slower than mood


def apply_drift(
    mood: AffectiveVector,
    temperament: AffectiveVector,
    fuzzed_valence: float,
    fuzzed_arousal: float,
    settings: DriftSettings,
) -> Tuple[AffectiveVector, AffectiveVector]:
    """Feed a small fraction of a resolved response back into mood/temperament."""

    new_mood = mood
    new_temperament = temperament
    if settings.allow_mood_shift:
        new_mood = mood.shifted(fuzzed_valence * settings.mood_gain, fuzzed_arousal * settings.mood_gain)
    if settings.allow_temperament_shift:
        new_temperament = temperament.shifted(
            fuzzed_valence * settings.temperament_gain,
            fuzzed_arousal * settings.temperament_gain,
        )
    return new_mood, new_temperament


def consolidate_session(
    temperament: AffectiveVector,
    session_start_mood: AffectiveVector,
    current_mood: AffectiveVector,
    fraction: float = 0.1,
) -> AffectiveVector:
    """Move temperament by ``fraction`` of the mood change since session start."""

    return temperament.shifted(
        (current_mood.valence - session_start_mood.valence) * fraction,
        (current_mood.arousal - session_start_mood.arousal) * fraction,
    )


__all__ = ["DriftSettings", "apply_drift", "consolidate_session"]
