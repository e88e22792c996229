"""Arousal-scaled admission window between processed events.

High arousal shortens the window, low arousal lengthens it:

    pct         = clamp((arousal + 10) / 20, 0, 1)
    cooldown_ms = min_ms + int((1 - pct) * (max_ms - min_ms))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from affect_core.models.affect import clamp

from .errors import ConfigurationInvalid


@dataclass(frozen=True)
class CooldownPolicy:
    min_ms: int = 500
    max_ms: int = 10000

    def __post_init__(self) -> None:
        if self.min_ms < 0:
            raise ConfigurationInvalid(f"min cooldown must be >= 0 (got {self.min_ms})")
        if self.max_ms < self.min_ms:
            raise ConfigurationInvalid(
                f"max cooldown ({self.max_ms}ms) must be >= min cooldown ({self.min_ms}ms)"
            )
        object.__setattr__(self, "min_ms", int(self.min_ms))
        object.__setattr__(self, "max_ms", int(self.max_ms))

    def cooldown_ms(self, arousal: float) -> int:
        pct = clamp((arousal + 10.0) / 20.0, 0.0, 1.0)
        return self.min_ms + int((1.0 - pct) * (self.max_ms - self.min_ms))


@dataclass(frozen=True)
class CooldownStatus:
    ready: bool
    remaining_ms: int
    cooldown_ms: int
    arousal: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ready": self.ready,
            "remaining_ms": self.remaining_ms,
            "cooldown_ms": self.cooldown_ms,
            "arousal": float(self.arousal),
        }


class CooldownGate:
    """Tracks the last admission time; times are caller-supplied milliseconds."""

    def __init__(self, policy: CooldownPolicy | None = None) -> None:
        self.policy = policy or CooldownPolicy()
        self.last_admit_ms: Optional[float] = None

    def remaining_ms(self, arousal: float, now_ms: float) -> int:
        if self.last_admit_ms is None:
            return 0
        elapsed = now_ms - self.last_admit_ms
        remaining = self.policy.cooldown_ms(arousal) - int(elapsed)
        return remaining if remaining > 0 else 0

    def can_admit(self, arousal: float, now_ms: float) -> bool:
        if self.last_admit_ms is None:
            return True
        return now_ms - self.last_admit_ms >= self.policy.cooldown_ms(arousal)

    def admit(self, now_ms: float) -> None:
        self.last_admit_ms = float(now_ms)

    def status(self, arousal: float, now_ms: float) -> CooldownStatus:
        return CooldownStatus(
            ready=self.can_admit(arousal, now_ms),
            remaining_ms=self.remaining_ms(arousal, now_ms),
            cooldown_ms=self.policy.cooldown_ms(arousal),
            arousal=arousal,
        )


__all__ = ["CooldownPolicy", "CooldownStatus", "CooldownGate"]
