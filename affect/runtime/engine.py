"""Affect engine: the single owner of mood, temperament, gauges and events.

Pipeline for an external stimulus::

    trigger_event(keyword)
      -> wake-event reflex / asleep rejection
      -> registry lookup          (UnknownEvent)
      -> cooldown gate            (CooldownActive)
      -> ResponseResolver         (mood base + event, noise, display grid)
      -> gauge deltas, drift, reclassification
      -> optional response-chance gate
      -> publish ResponseResult

``tick(dt)`` drains queued commands, then either decays the need gauges
(feeding crossing events through the same resolver, without the cooldown
gate) or, while asleep, regenerates rest until a wake condition fires.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import numpy as np

from affect_core.models.affect import AffectReading, AffectiveVector
from affect_core.models.mood import DisplayEmotion
from affect_core.models.profiles import NEED_EVENT_PROFILES, EventProfile
from runtime.config import AffectRuntimeCfg, GaugeCfg
from telemetry.affect_emitter import AffectEmitter

from .commands import Command, CommandKind, CommandQueue, CommandReceipt
from .cooldown import CooldownGate, CooldownPolicy, CooldownStatus
from .drift import DriftSettings, apply_drift, consolidate_session
from .errors import AffectError, AsleepRejection, ConfigurationInvalid, CooldownActive, UnknownEvent
from .gauges import HOUR_S, GaugeBank, NeedGauge, NeedKind, rate_per_second
from .registry import EventRegistry
from .response import ResponseChanceGate, ResponseResolver, ResponseWeights
from .sleep import WAKE_COMMAND, SleepCycle, SleepSettings, SleepState

logger = logging.getLogger(__name__)

WAKE_UP_TRIGGER = "WakeUp"
SLEEP_TRIGGER = "RestNeeded"
EXHAUSTION_EVENT = "RestUnfulfilled"


@dataclass(frozen=True)
class ResponseResult:
    display_emotion: DisplayEmotion
    valence: float
    arousal: float
    trigger_event: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "display_emotion": self.display_emotion.value,
            "valence": float(self.valence),
            "arousal": float(self.arousal),
            "trigger_event": self.trigger_event,
        }


@dataclass(frozen=True)
class TickReport:
    elapsed_s: float
    state: SleepState
    responses: Tuple[ResponseResult, ...] = field(default_factory=tuple)
    receipts: Tuple[CommandReceipt, ...] = field(default_factory=tuple)


def _discard(payload: Dict[str, object]) -> None:
    return None


def _gauge_from_cfg(kind: NeedKind, cfg: GaugeCfg) -> NeedGauge:
    return NeedGauge(
        kind=kind,
        value=float(cfg.initial),
        decay_rate_per_s=rate_per_second(float(cfg.hours_to_empty)),
        needed=float(cfg.needed),
        fulfilled=float(cfg.fulfilled),
    )


class AffectEngine:
    def __init__(
        self,
        cfg: AffectRuntimeCfg | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        rng: Optional[np.random.Generator] = None,
        emitter: Optional[AffectEmitter] = None,
    ) -> None:
        self.cfg = cfg or AffectRuntimeCfg()
        self._clock = clock
        self._rng = rng if rng is not None else np.random.default_rng(self.cfg.seed)

        response_cfg = self.cfg.response
        self._resolver = ResponseResolver(
            ResponseWeights(response_cfg.mood_weight, response_cfg.event_weight),
            response_cfg.noise_amplitude,
            self._rng,
        )
        self._chance: Optional[ResponseChanceGate] = None
        if response_cfg.response_chance is not None:
            self._chance = ResponseChanceGate(response_cfg.response_chance, self._rng)

        drift_cfg = self.cfg.drift
        self._drift = DriftSettings(
            allow_mood_shift=bool(drift_cfg.allow_mood_shift),
            allow_temperament_shift=bool(drift_cfg.allow_temperament_shift),
            mood_gain=float(drift_cfg.mood_gain),
            temperament_gain=float(drift_cfg.temperament_gain),
        )
        self._consolidation = float(drift_cfg.session_consolidation)

        self._cooldown = CooldownGate(CooldownPolicy(self.cfg.cooldown.min_ms, self.cfg.cooldown.max_ms))

        gauges_cfg = self.cfg.gauges
        self._gauges = GaugeBank(
            [
                _gauge_from_cfg(NeedKind.TOUCH, gauges_cfg.touch),
                _gauge_from_cfg(NeedKind.REST, gauges_cfg.rest),
                _gauge_from_cfg(NeedKind.SOCIAL, gauges_cfg.social),
                _gauge_from_cfg(NeedKind.HUNGER, gauges_cfg.hunger),
            ]
        )
        self._time_multiplier = 1.0
        self.set_time_multiplier(gauges_cfg.time_multiplier)

        sleep_cfg = self.cfg.sleep
        self._sleep = SleepCycle(
            SleepSettings(
                enabled=bool(sleep_cfg.enabled),
                max_duration_s=float(sleep_cfg.max_duration_hours) * HOUR_S,
                regen_rate_per_s=rate_per_second(float(sleep_cfg.regen_hours)),
                wake_events=tuple(str(name) for name in sleep_cfg.wake_events),
            )
        )

        self._registry = EventRegistry()
        self._registry.load(self.cfg.events)
        self._commands = CommandQueue(self.cfg.commands.queue_size)

        if emitter is None and self.cfg.telemetry.log_path:
            emitter = AffectEmitter(transport=_discard, logfile=self.cfg.telemetry.log_path)
        self._emitter = emitter

        temperament_cfg = self.cfg.temperament
        self._temperament = AffectiveVector(temperament_cfg.valence, temperament_cfg.arousal)
        self._randomize_mood = bool(temperament_cfg.randomize_mood)
        self._mood_jitter = max(0.0, float(temperament_cfg.mood_jitter))
        self._mood = self._initial_mood()
        self._session_start_mood = self._mood
        self._last_response: Optional[ResponseResult] = None
        logger.info(
            "affect engine ready: temperament %s (%.2f, %.2f), mood %s (%.2f, %.2f)",
            self._temperament.category.value,
            self._temperament.valence,
            self._temperament.arousal,
            self._mood.category.value,
            self._mood.valence,
            self._mood.arousal,
        )

    # ------------------------------------------------------------------
    # state queries
    # ------------------------------------------------------------------
    @property
    def mood(self) -> AffectiveVector:
        return self._mood

    @property
    def temperament(self) -> AffectiveVector:
        return self._temperament

    @property
    def is_asleep(self) -> bool:
        return self._sleep.is_asleep

    @property
    def sleep_state(self) -> SleepState:
        return self._sleep.state

    @property
    def weights(self) -> ResponseWeights:
        return self._resolver.weights

    @property
    def noise_amplitude(self) -> float:
        return self._resolver.noise_amplitude

    @property
    def cooldown_policy(self) -> CooldownPolicy:
        return self._cooldown.policy

    @property
    def last_response(self) -> Optional[ResponseResult]:
        return self._last_response

    def get_mood(self) -> AffectReading:
        return AffectReading.of(self._mood)

    def get_temperament(self) -> AffectReading:
        return AffectReading.of(self._temperament)

    def get_emotion(self) -> ResponseResult:
        """Last response, or the current mood when nothing has fired yet."""

        if self._last_response is not None:
            return self._last_response
        return ResponseResult(
            display_emotion=DisplayEmotion(self._mood.category.value),
            valence=self._mood.valence,
            arousal=self._mood.arousal,
            trigger_event="",
        )

    def gauges(self) -> Dict[str, float]:
        return self._gauges.snapshot()

    def cooldown_status(self) -> CooldownStatus:
        return self._cooldown.status(self._mood.arousal, self._now_ms())

    # ------------------------------------------------------------------
    # event registry
    # ------------------------------------------------------------------
    def register_event(
        self,
        keyword: str,
        valence: float,
        arousal: float,
        touch_delta: float = 0.0,
        rest_delta: float = 0.0,
        social_delta: float = 0.0,
    ) -> EventProfile:
        return self._registry.register(keyword, valence, arousal, touch_delta, rest_delta, social_delta)

    def delete_event(self, keyword: str) -> bool:
        return self._registry.delete(keyword)

    def list_events(self, include_builtin: bool = False) -> List[str]:
        return self._registry.keywords(include_builtin=include_builtin)

    def export_events(self) -> List[Dict[str, Any]]:
        return self._registry.export()

    # ------------------------------------------------------------------
    # stimulus processing
    # ------------------------------------------------------------------
    def trigger_event(self, keyword: str) -> ResponseResult:
        name = str(keyword or "").strip()
        if self._sleep.settings.is_wake_event(name):
            return self._reflex(name)
        if self._sleep.is_asleep:
            logger.debug("asleep; rejecting '%s'", name)
            raise AsleepRejection(name)
        profile = self._registry.lookup(name)
        if profile is None:
            logger.debug("unknown event '%s'", name)
            raise UnknownEvent(
                name,
                fallback=ResponseResult(DisplayEmotion.NEUTRAL, self._mood.valence, self._mood.arousal, name),
            )
        now_ms = self._now_ms()
        if not self._cooldown.can_admit(self._mood.arousal, now_ms):
            remaining = self._cooldown.remaining_ms(self._mood.arousal, now_ms)
            logger.debug(
                "event '%s' ignored due to cooldown (arousal=%.2f, remaining=%dms)",
                name,
                self._mood.arousal,
                remaining,
            )
            raise CooldownActive(profile.keyword, remaining)
        result = self._respond(profile)
        self._cooldown.admit(now_ms)
        return result

    def tick(self, dt: float) -> TickReport:
        receipts = self._drain_commands()
        elapsed = max(0.0, float(dt)) * self._time_multiplier
        responses: List[ResponseResult] = []
        if self._sleep.is_asleep:
            rest = self._gauges[NeedKind.REST]
            rest.value, reason = self._sleep.regenerate(rest.value, elapsed)
            if reason:
                responses.append(self._wake(reason))
        else:
            crossings = self._gauges.decay(elapsed)
            for name in crossings:
                responses.append(self._respond(NEED_EVENT_PROFILES[name.casefold()]))
            # only the tick on which rest runs out may start a nap
            exhausted = EXHAUSTION_EVENT in crossings
            if exhausted and self._sleep.should_sleep(self._gauges.value(NeedKind.REST)):
                responses.append(self._fall_asleep())
        return TickReport(
            elapsed_s=elapsed,
            state=self._sleep.state,
            responses=tuple(responses),
            receipts=tuple(receipts),
        )

    def wake(self) -> Optional[ResponseResult]:
        if not self._sleep.is_asleep:
            return None
        return self._wake(WAKE_COMMAND)

    def adjust_gauge(self, kind: "str | NeedKind", amount: float) -> float:
        return self._gauges.adjust(kind, amount)

    def submit(self, command: Command) -> bool:
        return self._commands.submit(command)

    # ------------------------------------------------------------------
    # configuration
    # ------------------------------------------------------------------
    def set_temperament(self, valence: float, arousal: float, reinitialize_mood: bool = True) -> AffectReading:
        self._temperament = AffectiveVector(valence, arousal)
        logger.info("temperament set to (%.2f, %.2f)", self._temperament.valence, self._temperament.arousal)
        if reinitialize_mood:
            self.refresh_mood()
        return self.get_temperament()

    def set_randomize_mood(self, randomize: bool, reinitialize_mood: bool = True) -> None:
        self._randomize_mood = bool(randomize)
        if reinitialize_mood:
            self.refresh_mood()

    def refresh_mood(self) -> AffectReading:
        self._mood = self._initial_mood()
        self._session_start_mood = self._mood
        return self.get_mood()

    def set_shift_options(self, allow_mood_shift: bool, allow_temperament_shift: bool) -> None:
        self._drift.allow_mood_shift = bool(allow_mood_shift)
        self._drift.allow_temperament_shift = bool(allow_temperament_shift)

    def set_cooldown_policy(self, min_ms: int, max_ms: int) -> CooldownPolicy:
        policy = CooldownPolicy(int(min_ms), int(max_ms))
        self._cooldown.policy = policy
        logger.info("cooldown policy set to %d-%dms", policy.min_ms, policy.max_ms)
        return policy

    def set_mood_weight(self, weight: float) -> ResponseWeights:
        self._resolver.weights = self._resolver.weights.with_mood_weight(weight)
        return self._resolver.weights

    def set_event_weight(self, weight: float) -> ResponseWeights:
        self._resolver.weights = self._resolver.weights.with_event_weight(weight)
        return self._resolver.weights

    def set_weights(self, mood_weight: float, event_weight: float) -> ResponseWeights:
        self._resolver.weights = ResponseWeights(mood_weight, event_weight)
        return self._resolver.weights

    def set_noise_amplitude(self, amplitude: float) -> float:
        return self._resolver.set_noise_amplitude(amplitude)

    def set_response_chance(self, percent: Optional[float]) -> None:
        """Enable the response-chance stage at ``percent``; ``None`` disables it."""

        self._chance = None if percent is None else ResponseChanceGate(percent, self._rng)

    def set_time_multiplier(self, multiplier: float) -> float:
        value = float(multiplier)
        if value <= 0.0:
            raise ConfigurationInvalid(f"time multiplier must be positive (got {value})")
        self._time_multiplier = value
        return value

    # ------------------------------------------------------------------
    # persistence hooks for the host
    # ------------------------------------------------------------------
    def export_temperament(self) -> Dict[str, float]:
        return self._temperament.to_dict()

    def import_temperament(self, payload: Mapping[str, Any], reinitialize_mood: bool = True) -> AffectReading:
        vector = AffectiveVector.from_mapping(payload)
        return self.set_temperament(vector.valence, vector.arousal, reinitialize_mood=reinitialize_mood)

    def consolidate_session(self) -> AffectReading:
        """Fold a fraction of this session's mood change into temperament."""

        self._temperament = consolidate_session(
            self._temperament,
            self._session_start_mood,
            self._mood,
            self._consolidation,
        )
        self._session_start_mood = self._mood
        return self.get_temperament()

    # ------------------------------------------------------------------
    # internals
    # ------------------------------------------------------------------
    def _now_ms(self) -> float:
        return float(self._clock()) * 1000.0

    def _initial_mood(self) -> AffectiveVector:
        if self._randomize_mood and self._mood_jitter > 0.0:
            j = self._mood_jitter
            return self._temperament.shifted(
                float(self._rng.uniform(-j, j)),
                float(self._rng.uniform(-j, j)),
            )
        return self._temperament

    def _respond(self, profile: EventProfile, *, display: Optional[DisplayEmotion] = None) -> ResponseResult:
        resolved = self._resolver.resolve(profile.vector, self._mood)
        self._gauges.apply_deltas(profile)
        self._mood, self._temperament = apply_drift(
            self._mood,
            self._temperament,
            resolved.valence,
            resolved.arousal,
            self._drift,
        )
        shown = display or resolved.display
        if display is None and self._chance is not None:
            shown = self._chance.apply(shown)
        result = ResponseResult(shown, resolved.valence, resolved.arousal, profile.keyword)
        logger.debug(
            "event '%s' in mood %s -> %s; mood now %s (%.2f, %.2f)",
            profile.keyword,
            resolved.mood_category.value,
            shown.value,
            self._mood.category.value,
            self._mood.valence,
            self._mood.arousal,
        )
        return self._publish(result)

    def _reflex(self, name: str) -> ResponseResult:
        if self._sleep.wake(name):
            self._gauges[NeedKind.REST].sync()
        return self._publish(
            ResponseResult(DisplayEmotion.SURPRISED, self._mood.valence, self._mood.arousal, name)
        )

    def _fall_asleep(self) -> ResponseResult:
        self._sleep.fall_asleep()
        return self._respond(NEED_EVENT_PROFILES[SLEEP_TRIGGER.casefold()], display=DisplayEmotion.SLEEP)

    def _wake(self, reason: str) -> ResponseResult:
        self._sleep.wake(reason)
        # rest regenerated while asleep is the new baseline, not a crossing
        self._gauges[NeedKind.REST].sync()
        return self._publish(
            ResponseResult(DisplayEmotion.NEUTRAL, self._mood.valence, self._mood.arousal, WAKE_UP_TRIGGER)
        )

    def _publish(self, result: ResponseResult) -> ResponseResult:
        self._last_response = result
        if self._emitter is not None:
            self._emitter.emit(result, mood=self.get_mood().to_dict())
        return result

    def _drain_commands(self) -> List[CommandReceipt]:
        receipts: List[CommandReceipt] = []
        for command in self._commands.drain():
            receipts.append(self._execute(command))
        return receipts

    def _execute(self, command: Command) -> CommandReceipt:
        handlers: Dict[CommandKind, Callable[..., Any]] = {
            CommandKind.REGISTER_EVENT: self.register_event,
            CommandKind.DELETE_EVENT: self.delete_event,
            CommandKind.TRIGGER_EVENT: self.trigger_event,
            CommandKind.GET_MOOD: self.get_mood,
            CommandKind.GET_TEMPERAMENT: self.get_temperament,
            CommandKind.GET_EMOTION: self.get_emotion,
            CommandKind.LIST_EVENTS: self.list_events,
            CommandKind.SET_TEMPERAMENT: self.set_temperament,
            CommandKind.SET_SHIFT_OPTIONS: self.set_shift_options,
            CommandKind.SET_COOLDOWN_POLICY: self.set_cooldown_policy,
            CommandKind.ADJUST_GAUGE: self.adjust_gauge,
            CommandKind.WAKE: self.wake,
        }
        try:
            result = handlers[command.kind](**command.args)
        except (AffectError, TypeError, ValueError) as exc:
            logger.debug("command %s failed: %s", command.kind.value, exc)
            return CommandReceipt(command=command, ok=False, error=str(exc))
        return CommandReceipt(command=command, ok=True, result=result)


__all__ = ["AffectEngine", "ResponseResult", "TickReport", "WAKE_UP_TRIGGER", "SLEEP_TRIGGER", "EXHAUSTION_EVENT"]
