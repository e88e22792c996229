from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)


@dataclass
class TemperamentCfg:
    valence: float = field(default=5.0)
    arousal: float = field(default=0.0)
    randomize_mood: bool = field(default=True)
    mood_jitter: float = field(default=2.0)


@dataclass
class ResponseCfg:
    mood_weight: float = field(default=0.3)
    event_weight: float = field(default=0.7)
    noise_amplitude: float = field(default=1.0)
    # None disables the response-chance stage entirely.
    response_chance: Optional[float] = field(default=None)


@dataclass
class DriftCfg:
    allow_mood_shift: bool = field(default=True)
    allow_temperament_shift: bool = field(default=True)
    mood_gain: float = field(default=0.01)
    temperament_gain: float = field(default=0.001)
    session_consolidation: float = field(default=0.1)


@dataclass
class CooldownCfg:
    min_ms: int = field(default=500)
    max_ms: int = field(default=10000)


@dataclass
class GaugeCfg:
    initial: float = field(default=50.0)
    hours_to_empty: float = field(default=6.0)
    needed: float = field(default=30.0)
    fulfilled: float = field(default=70.0)


@dataclass
class GaugesCfg:
    touch: GaugeCfg = field(default_factory=lambda: GaugeCfg(hours_to_empty=3.0))
    rest: GaugeCfg = field(default_factory=lambda: GaugeCfg(hours_to_empty=12.0))
    social: GaugeCfg = field(default_factory=lambda: GaugeCfg(hours_to_empty=6.0))
    hunger: GaugeCfg = field(default_factory=lambda: GaugeCfg(hours_to_empty=6.0))
    time_multiplier: float = field(default=1.0)


@dataclass
class SleepCfg:
    enabled: bool = field(default=True)
    max_duration_hours: float = field(default=4.0)
    regen_hours: float = field(default=4.0)
    wake_events: List[str] = field(default_factory=lambda: ["LoudNoise"])


@dataclass
class CommandCfg:
    queue_size: int = field(default=64)


@dataclass
class TelemetryCfg:
    log_path: Optional[str] = field(default=None)


@dataclass
class AffectRuntimeCfg:
    temperament: TemperamentCfg = field(default_factory=TemperamentCfg)
    response: ResponseCfg = field(default_factory=ResponseCfg)
    drift: DriftCfg = field(default_factory=DriftCfg)
    cooldown: CooldownCfg = field(default_factory=CooldownCfg)
    gauges: GaugesCfg = field(default_factory=GaugesCfg)
    sleep: SleepCfg = field(default_factory=SleepCfg)
    commands: CommandCfg = field(default_factory=CommandCfg)
    telemetry: TelemetryCfg = field(default_factory=TelemetryCfg)
    events: List[Dict[str, Any]] = field(default_factory=list)
    seed: Optional[int] = field(default=None)


def load_runtime_cfg(path: str | Path = "config/affect.yaml") -> AffectRuntimeCfg:
    cfg_path = Path(path)
    if not cfg_path.exists():
        return AffectRuntimeCfg()
    try:
        payload = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("failed to read %s (%s); using defaults", cfg_path, exc)
        return AffectRuntimeCfg()
    if not isinstance(payload, dict):
        logger.warning("%s does not contain a mapping; using defaults", cfg_path)
        return AffectRuntimeCfg()
    return cfg_from_mapping(payload)


def cfg_from_mapping(payload: Dict[str, Any]) -> AffectRuntimeCfg:
    return _merge_dataclass(AffectRuntimeCfg(), payload)


def _merge_dataclass(instance, overrides: Dict[str, Any] | None):
    data = {f.name: getattr(instance, f.name) for f in fields(instance)}
    for key, value in (overrides or {}).items():
        if key not in data:
            continue
        current = data[key]
        if is_dataclass(current) and isinstance(value, dict):
            data[key] = _merge_dataclass(current, value)
        else:
            data[key] = value
    return instance.__class__(**data)


__all__ = [
    "load_runtime_cfg",
    "cfg_from_mapping",
    "AffectRuntimeCfg",
    "TemperamentCfg",
    "ResponseCfg",
    "DriftCfg",
    "CooldownCfg",
    "GaugeCfg",
    "GaugesCfg",
    "SleepCfg",
    "CommandCfg",
    "TelemetryCfg",
]
