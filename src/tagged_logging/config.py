"""Configuration management."""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

_TRUE = {"1", "true", "yes", "on"}
# Level names loguru knows but stdlib logging does not
_LOGURU_ONLY = ("TRACE", "SUCCESS")


def _load_toml_defaults() -> dict:
    """Load defaults from config.toml (if exists)."""
    try:
        from .config_manager import load_config_file
        return load_config_file()
    except Exception:
        return {}


def _get(key: str, env_key: str | None = None, file_cfg: dict | None = None) -> str | None:
    """Get config value: env var > toml file."""
    env = env_key or f"TAGGED_LOGGING_{key.upper()}"
    val = os.getenv(env)
    if val is not None:
        return val
    val = (file_cfg or {}).get(key)
    if val is not None:
        return str(val).lower() if isinstance(val, bool) else str(val)
    return None


def _level(value: str | None, default: str, extra: tuple = ()) -> str:
    """Upper-cased level name or number; unknown names fall back to ``default``."""
    name = (value or "").strip().upper()
    if name.isdigit() or name in logging.getLevelNamesMapping() or name in extra:
        return name
    return default


@dataclass
class Settings:
    # Threshold for the package's own loguru diagnostics
    log_level: str = "WARNING"
    # Default threshold for StreamSink
    sink_level: str = "DEBUG"
    metrics_enabled: bool = True

    @classmethod
    def load(cls) -> "Settings":
        """Build settings from env vars, then config.toml, then defaults."""
        file_cfg = _load_toml_defaults()
        metrics = _get("metrics_enabled", "TAGGED_LOGGING_METRICS", file_cfg)
        return cls(
            log_level=_level(_get("log_level", file_cfg=file_cfg), cls.log_level, _LOGURU_ONLY),
            sink_level=_level(_get("sink_level", file_cfg=file_cfg), cls.sink_level, ("UNKNOWN",)),
            metrics_enabled=cls.metrics_enabled if metrics is None else metrics.strip().lower() in _TRUE,
        )


config = Settings.load()
