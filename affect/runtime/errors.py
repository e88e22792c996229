"""Typed, recoverable outcomes raised by the affect runtime.

None of these are fatal. ``EventRejected`` subclasses tell the caller why a
stimulus was not processed; ``ConfigurationInvalid`` is raised before a
setter mutates anything, so the previous configuration stays in force.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .engine import ResponseResult


class AffectError(RuntimeError):
    """Base class for affect runtime errors."""


class EventRejected(AffectError):
    """A stimulus was refused; state is unchanged."""

    def __init__(self, keyword: str, message: str) -> None:
        super().__init__(message)
        self.keyword = keyword


class CooldownActive(EventRejected):
    def __init__(self, keyword: str, remaining_ms: int) -> None:
        super().__init__(keyword, f"event cooldown active for '{keyword}': {remaining_ms}ms remaining")
        self.remaining_ms = int(remaining_ms)


class UnknownEvent(EventRejected):
    """No profile is registered for ``keyword``.

    ``fallback`` is a Neutral response at the current mood that callers may
    present instead.
    """

    def __init__(self, keyword: str, fallback: Optional["ResponseResult"] = None) -> None:
        super().__init__(keyword, f"no event registered for '{keyword}'")
        self.fallback = fallback


class AsleepRejection(EventRejected):
    def __init__(self, keyword: str) -> None:
        super().__init__(keyword, f"agent is asleep; '{keyword}' ignored")


class ConfigurationInvalid(AffectError, ValueError):
    """Raised when a configuration change is inconsistent."""


__all__ = [
    "AffectError",
    "EventRejected",
    "CooldownActive",
    "UnknownEvent",
    "AsleepRejection",
    "ConfigurationInvalid",
]
