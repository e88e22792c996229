"""Bounded command queue decoupling transports from engine mutation.

Timers, UI handlers or a host variable bus enqueue :class:`Command` objects
from wherever they run; the engine drains the queue once per tick on its
own logical thread, so state is only ever mutated by one writer.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Deque, Dict, Iterator, Optional

logger = logging.getLogger(__name__)


class CommandKind(str, Enum):
    REGISTER_EVENT = "register_event"
    DELETE_EVENT = "delete_event"
    TRIGGER_EVENT = "trigger_event"
    GET_MOOD = "get_mood"
    GET_TEMPERAMENT = "get_temperament"
    GET_EMOTION = "get_emotion"
    LIST_EVENTS = "list_events"
    SET_TEMPERAMENT = "set_temperament"
    SET_SHIFT_OPTIONS = "set_shift_options"
    SET_COOLDOWN_POLICY = "set_cooldown_policy"
    ADJUST_GAUGE = "adjust_gauge"
    WAKE = "wake"


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    args: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def of(cls, kind: "str | CommandKind", **args: Any) -> "Command":
        return cls(kind=CommandKind(kind), args=dict(args))


@dataclass(frozen=True)
class CommandReceipt:
    command: Command
    ok: bool
    result: Any = None
    error: Optional[str] = None


class CommandQueue:
    """FIFO with a hard capacity; a full queue drops the newest command."""

    def __init__(self, maxsize: int = 64) -> None:
        if maxsize <= 0:
            raise ValueError("maxsize must be positive.")
        self.maxsize = maxsize
        self._items: Deque[Command] = deque()
        self._lock = threading.Lock()
        self.dropped = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def submit(self, command: Command) -> bool:
        with self._lock:
            if len(self._items) >= self.maxsize:
                self.dropped += 1
                logger.warning("command queue full (%d); dropping %s", self.maxsize, command.kind.value)
                return False
            self._items.append(command)
            return True

    def drain(self) -> Iterator[Command]:
        """Yield every command queued at call time, oldest first."""

        with self._lock:
            pending = list(self._items)
            self._items.clear()
        yield from pending


__all__ = ["CommandKind", "Command", "CommandReceipt", "CommandQueue"]
