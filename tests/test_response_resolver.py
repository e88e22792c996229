from __future__ import annotations

import logging

import numpy as np
import pytest

from affect.runtime.errors import ConfigurationInvalid
from affect.runtime.response import (
    MAX_NOISE_AMPLITUDE,
    ResponseChanceGate,
    ResponseResolver,
    ResponseWeights,
)
from affect_core.models.affect import AffectiveVector
from affect_core.models.mood import DisplayEmotion, MoodCategory


def test_happy_event_in_neutral_mood_without_noise() -> None:
    resolver = ResponseResolver(ResponseWeights(0.3, 0.7), noise_amplitude=0.0)
    out = resolver.resolve(AffectiveVector(8, 4), AffectiveVector(0, 0))
    assert out.mood_category == MoodCategory.NEUTRAL
    assert out.valence == pytest.approx(5.6)
    assert out.arousal == pytest.approx(2.8)
    assert out.display == DisplayEmotion.HAPPY


def test_mood_base_pulls_the_response() -> None:
    resolver = ResponseResolver(ResponseWeights(0.5, 0.5), noise_amplitude=0.0)
    # Gloomy base (-8, -8) drags a mild positive event down to the Neutral edge.
    out = resolver.resolve(AffectiveVector(2, 2), AffectiveVector(-6, -6))
    assert out.mood_category == MoodCategory.GLOOMY
    assert (out.valence, out.arousal) == (pytest.approx(-3.0), pytest.approx(-3.0))
    assert out.display == DisplayEmotion.NEUTRAL


def test_noise_stays_within_amplitude() -> None:
    resolver = ResponseResolver(noise_amplitude=2.0, rng=np.random.default_rng(3))
    event = AffectiveVector(1, -1)
    mood = AffectiveVector(0, 0)
    deviations = []
    for _ in range(200):
        out = resolver.resolve(event, mood)
        deviations.append(abs(out.valence - out.combined_valence))
        deviations.append(abs(out.arousal - out.combined_arousal))
    assert max(deviations) <= 2.0
    assert max(deviations) > 0.0


def test_noise_amplitude_is_clamped() -> None:
    resolver = ResponseResolver(noise_amplitude=-4.0)
    assert resolver.noise_amplitude == 0.0
    assert resolver.set_noise_amplitude(50.0) == MAX_NOISE_AMPLITUDE


def test_missing_mood_base_falls_back_to_neutral(caplog: pytest.LogCaptureFixture) -> None:
    resolver = ResponseResolver(
        ResponseWeights(0.5, 0.5),
        noise_amplitude=0.0,
        mood_bases={MoodCategory.NEUTRAL: AffectiveVector(0, 0)},
    )
    with caplog.at_level(logging.WARNING, logger="affect.runtime.response"):
        out = resolver.resolve(AffectiveVector(4, 0), AffectiveVector(5, 0))
    assert out.mood_category == MoodCategory.HAPPY
    assert out.valence == pytest.approx(2.0)
    assert "no base values for mood Happy" in caplog.text


def test_weights_must_sum_to_one() -> None:
    with pytest.raises(ConfigurationInvalid):
        ResponseWeights(0.5, 0.6)
    with pytest.raises(ConfigurationInvalid):
        ResponseWeights(-0.2, 1.2)


def test_weight_setters_rebalance_and_clamp() -> None:
    weights = ResponseWeights().with_mood_weight(0.4)
    assert (weights.mood, weights.event) == (pytest.approx(0.4), pytest.approx(0.6))
    weights = weights.with_event_weight(1.5)
    assert (weights.mood, weights.event) == (0.0, 1.0)


def test_response_chance_gate_extremes() -> None:
    rng = np.random.default_rng(11)
    always = ResponseChanceGate(100.0, rng)
    never = ResponseChanceGate(0.0, rng)
    for _ in range(50):
        assert always.apply(DisplayEmotion.EXCITED) == DisplayEmotion.EXCITED
        assert never.apply(DisplayEmotion.EXCITED) == DisplayEmotion.NEUTRAL
    assert ResponseChanceGate(250.0).chance_percent == 100.0
