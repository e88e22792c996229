from __future__ import annotations

import numpy as np
from hypothesis import given, settings
from hypothesis import strategies as st

from affect.runtime.engine import AffectEngine
from affect.runtime.errors import AsleepRejection
from affect.runtime.gauges import NeedGauge, NeedKind
from affect_core.models.mood import MoodCategory, classify_mood
from runtime.config import AffectRuntimeCfg

_affect = st.floats(min_value=-50.0, max_value=50.0, allow_nan=False)
_event = st.tuples(
    st.just("event"),
    _affect,
    _affect,
    st.floats(min_value=-30, max_value=30),
    st.floats(min_value=-30, max_value=30),
)
_tick = st.tuples(st.just("tick"), st.floats(min_value=0.0, max_value=600.0))
_step = st.one_of(_event, _tick, st.just(("loud",)))


@given(v=st.floats(allow_nan=False, allow_infinity=False), a=st.floats(allow_nan=False, allow_infinity=False))
def test_classify_mood_is_total(v: float, a: float) -> None:
    assert isinstance(classify_mood(v, a), MoodCategory)


@settings(max_examples=50, deadline=None)
@given(
    steps=st.lists(_step, min_size=1, max_size=40),
    multiplier=st.sampled_from([1.0, 180.0, 3600.0]),
    seed=st.integers(0, 2**16),
)
def test_mood_and_temperament_stay_in_range(steps, multiplier: float, seed: int) -> None:
    cfg = AffectRuntimeCfg()
    cfg.seed = seed
    engine = AffectEngine(cfg, clock=lambda: 0.0, rng=np.random.default_rng(seed))
    engine.set_cooldown_policy(0, 0)
    engine.set_noise_amplitude(10.0)
    engine.set_time_multiplier(multiplier)
    for i, step in enumerate(steps):
        if step[0] == "event":
            _, v, a, touch, social = step
            engine.register_event(f"e{i}", v, a, touch_delta=touch, social_delta=social)
            try:
                engine.trigger_event(f"e{i}")
            except AsleepRejection:
                assert engine.is_asleep
        elif step[0] == "tick":
            report = engine.tick(step[1])
            assert report.state is engine.sleep_state
        else:
            engine.trigger_event("LoudNoise")
            assert not engine.is_asleep
        for vec in (engine.mood, engine.temperament):
            assert -10.0 <= vec.valence <= 10.0
            assert -10.0 <= vec.arousal <= 10.0
        assert all(0.0 <= value <= 100.0 for value in engine.gauges().values())


@settings(max_examples=75, deadline=None)
@given(
    steps=st.lists(
        st.tuples(st.floats(min_value=0, max_value=5000), st.floats(min_value=-150, max_value=150)),
        max_size=30,
    )
)
def test_gauge_stays_bounded_and_needed_is_edge_triggered(steps) -> None:
    gauge = NeedGauge(kind=NeedKind.SOCIAL, value=50.0, decay_rate_per_s=0.01)
    below = False
    for dt, delta in steps:
        gauge.decay(dt)
        gauge.adjust(delta)
        event = gauge.check()
        assert 0.0 <= gauge.value <= 100.0
        if event == "SocialNeeded":
            assert not below
        below = gauge.value <= gauge.needed
