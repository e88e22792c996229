from __future__ import annotations

import logging

import pytest

from affect.runtime.errors import ConfigurationInvalid
from affect.runtime.registry import EventRegistry
from affect_core.models.profiles import (
    BUILTIN_EVENT_PROFILES,
    NEED_EVENT_PROFILES,
    STIMULUS_EVENT_PROFILES,
    EventProfile,
)


def test_builtin_tables_are_read_only_and_complete() -> None:
    assert len(NEED_EVENT_PROFILES) == 12
    assert len(BUILTIN_EVENT_PROFILES) == len(NEED_EVENT_PROFILES) + len(STIMULUS_EVENT_PROFILES)
    with pytest.raises(TypeError):
        NEED_EVENT_PROFILES["touchneeded"] = EventProfile("TouchNeeded", 0, 0)  # type: ignore[index]
    touch = NEED_EVENT_PROFILES["touchfulfilled"]
    assert (touch.valence, touch.arousal, touch.touch_delta) == (8.0, 5.0, 10.0)


def test_event_profile_clamps_and_strips() -> None:
    profile = EventProfile("  Pat ", 14, -11, social_delta=2)
    assert profile.keyword == "Pat"
    assert profile.key == "pat"
    assert (profile.valence, profile.arousal) == (10.0, -10.0)
    assert profile.to_dict()["social_delta"] == 2.0


def test_register_is_case_insensitive_upsert() -> None:
    registry = EventRegistry()
    registry.register("Pat", 5, 2)
    updated = registry.register("PAT", 6, 1, touch_delta=3)
    assert len(registry) == 1
    assert registry.lookup("pat") == updated
    assert registry.keywords() == ["PAT"]
    assert "pat" in registry


def test_register_rejects_empty_and_reserved_keywords() -> None:
    registry = EventRegistry()
    with pytest.raises(ConfigurationInvalid):
        registry.register("   ", 1, 1)
    with pytest.raises(ConfigurationInvalid):
        registry.register("touchneeded", 1, 1)
    assert len(registry) == 0


def test_user_event_shadows_stimulus_builtin_until_deleted() -> None:
    registry = EventRegistry()
    builtin = registry.lookup("NameHeard")
    assert builtin is STIMULUS_EVENT_PROFILES["nameheard"]
    registry.register("nameheard", -3, -3)
    assert registry.lookup("NameHeard").valence == -3.0
    assert registry.delete("NAMEHEARD") is True
    assert registry.lookup("NameHeard") is builtin
    assert registry.delete("NameHeard") is False


def test_keywords_include_builtin_sorted_without_duplicates() -> None:
    registry = EventRegistry()
    registry.register("beingheld", 1, 1)
    registry.register("aardvark", 1, 1)
    names = registry.keywords(include_builtin=True)
    assert names == sorted(names, key=str.casefold)
    assert [n.casefold() for n in names].count("beingheld") == 1
    assert registry.keywords() == ["aardvark", "beingheld"]


def test_load_skips_malformed_rows(caplog: pytest.LogCaptureFixture) -> None:
    registry = EventRegistry()
    with caplog.at_level(logging.WARNING, logger="affect.runtime.registry"):
        count = registry.load(
            [
                {"keyword": "scolded", "valence": -6, "arousal": 4, "social_delta": -2},
                {"keyword": "", "valence": 1, "arousal": 1},
                {"keyword": "odd", "valence": "abc"},
                "not-a-mapping",
            ]
        )
    assert count == 1
    assert registry.export() == [
        {
            "keyword": "scolded",
            "valence": -6.0,
            "arousal": 4.0,
            "touch_delta": 0.0,
            "rest_delta": 0.0,
            "social_delta": -2.0,
        }
    ]
    assert "skipping configured event" in caplog.text
