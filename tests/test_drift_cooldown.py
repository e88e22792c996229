from __future__ import annotations

import pytest

from affect.runtime.cooldown import CooldownGate, CooldownPolicy
from affect.runtime.drift import DriftSettings, apply_drift, consolidate_session
from affect.runtime.errors import ConfigurationInvalid
from affect_core.models.affect import AffectiveVector


def test_drift_moves_mood_faster_than_temperament() -> None:
    mood, temperament = apply_drift(
        AffectiveVector(0, 0), AffectiveVector(0, 0), 5.6, 2.8, DriftSettings()
    )
    assert (mood.valence, mood.arousal) == (pytest.approx(0.056), pytest.approx(0.028))
    assert (temperament.valence, temperament.arousal) == (pytest.approx(0.0056), pytest.approx(0.0028))


def test_drift_respects_shift_flags() -> None:
    start = AffectiveVector(1, 1)
    settings = DriftSettings(allow_mood_shift=False, allow_temperament_shift=False)
    assert apply_drift(start, start, 10, 10, settings) == (start, start)
    settings.allow_mood_shift = True
    mood, temperament = apply_drift(start, start, 10, 10, settings)
    assert (mood.valence, mood.arousal) == (pytest.approx(1.1), pytest.approx(1.1))
    assert temperament == start


def test_drift_clamps_at_range_edge() -> None:
    mood, _ = apply_drift(AffectiveVector(9.99, -9.99), AffectiveVector(), 10, -10, DriftSettings())
    assert (mood.valence, mood.arousal) == (10.0, -10.0)


def test_consolidate_session_moves_a_tenth_of_the_delta() -> None:
    result = consolidate_session(AffectiveVector(0, 0), AffectiveVector(1, 1), AffectiveVector(6, -4))
    assert (result.valence, result.arousal) == (pytest.approx(0.5), pytest.approx(-0.5))


@pytest.mark.parametrize("arousal,expected", [(-10.0, 10000), (10.0, 500), (0.0, 5250), (-30.0, 10000)])
def test_cooldown_scales_with_arousal(arousal: float, expected: int) -> None:
    assert CooldownPolicy().cooldown_ms(arousal) == expected


def test_cooldown_policy_validates_bounds() -> None:
    with pytest.raises(ConfigurationInvalid):
        CooldownPolicy(600, 500)
    with pytest.raises(ConfigurationInvalid):
        CooldownPolicy(-1, 500)
    assert CooldownPolicy(0, 0).cooldown_ms(-10) == 0


def test_cooldown_gate_tracks_last_admission() -> None:
    gate = CooldownGate(CooldownPolicy(500, 10000))
    assert gate.can_admit(0.0, 0.0)
    assert gate.remaining_ms(0.0, 0.0) == 0
    gate.admit(1000.0)
    assert not gate.can_admit(10.0, 1200.0)
    assert gate.remaining_ms(10.0, 1200.0) == 300
    assert gate.can_admit(10.0, 1500.0)
    status = gate.status(0.0, 2000.0)
    assert status.to_dict() == {"ready": False, "remaining_ms": 4250, "cooldown_ms": 5250, "arousal": 0.0}
