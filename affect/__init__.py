"""Affective state engine for social robots and virtual companions."""

from .runtime import AffectEngine, ResponseResult, TickReport  # noqa: F401
