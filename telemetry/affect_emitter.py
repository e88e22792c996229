# -*- coding: utf-8 -*-
"""Hand resolved responses to the presentation layer (face / sound / lights)."""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Protocol


class _Result(Protocol):
    def to_dict(self) -> Dict[str, Any]:
        ...


class AffectEmitter:
    """Simple emitter that publishes responses over a callback or stdout."""

    def __init__(
        self,
        *,
        transport: Optional[Callable[[Dict[str, object]], None]] = None,
        logfile: Optional[Path] = None,
    ) -> None:
        self.transport = transport
        self.logfile = Path(logfile) if logfile is not None else None
        if self.logfile is not None:
            self.logfile.parent.mkdir(parents=True, exist_ok=True)

    def emit(
        self,
        result: _Result,
        *,
        mood: Optional[Mapping[str, Any]] = None,
        metadata: Optional[Mapping[str, object]] = None,
    ) -> Dict[str, object]:
        data = result.to_dict()
        payload: Dict[str, object] = {
            "ts": time.time(),
            "emotion": str(data.get("display_emotion", "Neutral")),
            "valence": float(data.get("valence", 0.0)),
            "arousal": float(data.get("arousal", 0.0)),
            "trigger": str(data.get("trigger_event", "")),
            "mood": dict(mood or {}),
            "meta": dict(metadata or {}),
        }
        if self.transport:
            self.transport(payload)
        else:
            print(json.dumps(payload, ensure_ascii=False))
        if self.logfile:
            with self.logfile.open("a", encoding="utf-8") as fh:
                fh.write(json.dumps(payload, ensure_ascii=False) + "\n")
        return payload


__all__ = ["AffectEmitter"]
