"""Stateful affect runtime: registry, resolver, drift, gauges, cooldown, sleep."""

from .commands import Command, CommandKind, CommandQueue, CommandReceipt
from .cooldown import CooldownGate, CooldownPolicy, CooldownStatus
from .drift import DriftSettings, apply_drift, consolidate_session
from .engine import AffectEngine, ResponseResult, TickReport
from .errors import (
    AffectError,
    AsleepRejection,
    ConfigurationInvalid,
    CooldownActive,
    EventRejected,
    UnknownEvent,
)
from .gauges import GaugeBank, NeedGauge, NeedKind
from .registry import EventRegistry
from .response import ResolvedResponse, ResponseChanceGate, ResponseResolver, ResponseWeights
from .sleep import SleepCycle, SleepSettings, SleepState

__all__ = [
    "AffectEngine",
    "ResponseResult",
    "TickReport",
    "Command",
    "CommandKind",
    "CommandQueue",
    "CommandReceipt",
    "CooldownGate",
    "CooldownPolicy",
    "CooldownStatus",
    "DriftSettings",
    "apply_drift",
    "consolidate_session",
    "AffectError",
    "AsleepRejection",
    "ConfigurationInvalid",
    "CooldownActive",
    "EventRejected",
    "UnknownEvent",
    "GaugeBank",
    "NeedGauge",
    "NeedKind",
    "EventRegistry",
    "ResolvedResponse",
    "ResponseChanceGate",
    "ResponseResolver",
    "ResponseWeights",
    "SleepCycle",
    "SleepSettings",
    "SleepState",
]
