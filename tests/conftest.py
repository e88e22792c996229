from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import numpy as np
import pytest


def _find_repo_root(start: Path) -> Path:
    cur = start.resolve()
    for candidate in [cur, *cur.parents]:
        if (candidate / "affect").is_dir() and (candidate / "tests").is_dir():
            return candidate
    return cur


repo_root = _find_repo_root(Path(__file__).parent)
repo_root_str = str(repo_root)
if repo_root_str not in sys.path:
    sys.path.insert(0, repo_root_str)

from affect.runtime.engine import AffectEngine  # noqa: E402
from runtime.config import AffectRuntimeCfg, ResponseCfg, TemperamentCfg  # noqa: E402


class FakeClock:
    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def quiet_cfg() -> AffectRuntimeCfg:
    """Neutral temperament, no mood jitter, no response noise."""

    cfg = AffectRuntimeCfg()
    cfg.temperament = TemperamentCfg(valence=0.0, arousal=0.0, randomize_mood=False)
    cfg.response = ResponseCfg(noise_amplitude=0.0)
    cfg.events = [{"keyword": "happy", "valence": 8, "arousal": 4}]
    return cfg


@pytest.fixture
def make_engine(quiet_cfg: AffectRuntimeCfg, clock: FakeClock) -> Callable[..., AffectEngine]:
    def _factory(cfg: AffectRuntimeCfg | None = None, **kwargs) -> AffectEngine:
        kwargs.setdefault("clock", clock)
        kwargs.setdefault("rng", np.random.default_rng(7))
        return AffectEngine(cfg or quiet_cfg, **kwargs)

    return _factory
