from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from affect_core.models.profiles import BUILTIN_EVENT_PROFILES, NEED_EVENT_PROFILES, EventProfile

from .errors import ConfigurationInvalid

logger = logging.getLogger(__name__)


class EventRegistry:
    """Case-insensitive keyword -> EventProfile map.

    User events are held in their own dict and consulted before the
    read-only built-in table. Need-gauge event names are reserved.
    """

    def __init__(self, builtins: Mapping[str, EventProfile] | None = None) -> None:
        self._builtins = builtins if builtins is not None else BUILTIN_EVENT_PROFILES
        self._user: Dict[str, EventProfile] = {}

    def __len__(self) -> int:
        return len(self._user)

    def __contains__(self, keyword: object) -> bool:
        return isinstance(keyword, str) and self.lookup(keyword) is not None

    def register(
        self,
        keyword: str,
        valence: float,
        arousal: float,
        touch_delta: float = 0.0,
        rest_delta: float = 0.0,
        social_delta: float = 0.0,
    ) -> EventProfile:
        name = str(keyword or "").strip()
        if not name:
            raise ConfigurationInvalid("event keyword must not be empty")
        if name.casefold() in NEED_EVENT_PROFILES:
            raise ConfigurationInvalid(f"'{name}' is a reserved need event")
        profile = EventProfile(
            keyword=name,
            valence=valence,
            arousal=arousal,
            touch_delta=touch_delta,
            rest_delta=rest_delta,
            social_delta=social_delta,
        )
        replaced = profile.key in self._user
        self._user[profile.key] = profile
        logger.debug(
            "%s event '%s' (V=%.2f, A=%.2f)",
            "updated" if replaced else "registered",
            name,
            profile.valence,
            profile.arousal,
        )
        return profile

    def delete(self, keyword: str) -> bool:
        return self._user.pop(str(keyword or "").strip().casefold(), None) is not None

    def lookup(self, keyword: str) -> Optional[EventProfile]:
        key = str(keyword or "").strip().casefold()
        if not key:
            return None
        profile = self._user.get(key)
        if profile is not None:
            return profile
        return self._builtins.get(key)

    def keywords(self, *, include_builtin: bool = False) -> List[str]:
        names = [profile.keyword for profile in self._user.values()]
        if include_builtin:
            names.extend(p.keyword for key, p in self._builtins.items() if key not in self._user)
        return sorted(names, key=str.casefold)

    def load(self, entries: Iterable[Mapping[str, Any]]) -> int:
        """Bulk-register configuration entries; malformed rows are skipped."""

        count = 0
        for entry in entries or []:
            if not isinstance(entry, Mapping):
                continue
            try:
                self.register(
                    str(entry.get("keyword") or ""),
                    float(entry.get("valence", 0.0)),
                    float(entry.get("arousal", 0.0)),
                    touch_delta=float(entry.get("touch_delta", 0.0)),
                    rest_delta=float(entry.get("rest_delta", 0.0)),
                    social_delta=float(entry.get("social_delta", 0.0)),
                )
            except (ConfigurationInvalid, TypeError, ValueError) as exc:
                logger.warning("skipping configured event %r: %s", entry, exc)
                continue
            count += 1
        return count

    def export(self) -> List[Dict[str, Any]]:
        return [self._user[key].to_dict() for key in sorted(self._user)]


__all__ = ["EventRegistry"]
