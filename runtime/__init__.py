"""Runtime configuration for the affect engine."""

from .config import AffectRuntimeCfg, cfg_from_mapping, load_runtime_cfg  # noqa: F401
