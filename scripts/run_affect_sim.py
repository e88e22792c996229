#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Drive an AffectEngine over simulated time and print a JSON summary."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from affect.runtime.engine import AffectEngine, ResponseResult
from affect.runtime.errors import EventRejected
from runtime.config import load_runtime_cfg
from telemetry.affect_emitter import AffectEmitter


class SimClock:
    """Manually advanced clock (seconds)."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = float(start)

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += max(0.0, float(seconds))


def _summarize(responses: Sequence[ResponseResult]) -> Dict[str, Any]:
    if not responses:
        return {"count": 0, "mean_valence": None, "mean_arousal": None, "emotions": {}}
    values = np.array([[r.valence, r.arousal] for r in responses], dtype=float)
    counts: Dict[str, int] = {}
    for r in responses:
        counts[r.display_emotion.value] = counts.get(r.display_emotion.value, 0) + 1
    means = values.mean(axis=0)
    return {
        "count": len(responses),
        "mean_valence": float(means[0]),
        "mean_arousal": float(means[1]),
        "emotions": counts,
    }


def run_simulation(
    engine: AffectEngine,
    clock: SimClock,
    *,
    seconds: float,
    step: float,
    events: Sequence[str] = (),
) -> Dict[str, Any]:
    responses: List[ResponseResult] = []
    rejected: List[Dict[str, Any]] = []
    for keyword in events:
        try:
            responses.append(engine.trigger_event(keyword))
        except EventRejected as exc:
            rejected.append({"event": keyword, "reason": type(exc).__name__, "detail": str(exc)})
    step = max(1e-3, float(step))
    elapsed = 0.0
    while elapsed < seconds:
        clock.advance(step)
        report = engine.tick(step)
        responses.extend(report.responses)
        elapsed += step
    return {
        "simulated_s": elapsed,
        "mood": engine.get_mood().to_dict(),
        "temperament": engine.get_temperament().to_dict(),
        "gauges": engine.gauges(),
        "asleep": engine.is_asleep,
        "responses": [r.to_dict() for r in responses],
        "rejected": rejected,
        "summary": _summarize(responses),
    }


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("--config", default="config/affect.yaml", help="YAML runtime configuration")
    ap.add_argument("--seed", type=int, default=None, help="RNG seed (overrides config)")
    ap.add_argument("--seconds", type=float, default=60.0, help="simulated wall-clock seconds")
    ap.add_argument("--step", type=float, default=1.0, help="tick length in seconds")
    ap.add_argument("--multiplier", type=float, default=None, help="time acceleration (overrides config)")
    ap.add_argument("--event", action="append", default=[], help="event keyword fired before the first tick")
    ap.add_argument("--log", default=None, help="append emitted responses to this JSONL file")
    ap.add_argument("--verbose", action="store_true")
    return ap.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cfg = load_runtime_cfg(args.config)
    if args.seed is not None:
        cfg.seed = args.seed
    if args.multiplier is not None:
        cfg.gauges.time_multiplier = args.multiplier
    clock = SimClock()
    emitter = None
    if args.log:
        emitter = AffectEmitter(transport=lambda payload: None, logfile=Path(args.log))
    engine = AffectEngine(cfg, clock=clock, emitter=emitter)
    result = run_simulation(engine, clock, seconds=args.seconds, step=args.step, events=args.event)
    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
