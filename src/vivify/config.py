"""Runtime settings, read from the environment and an optional .env file.

Recognised variables:
    VIVIFY_STRICT      enable strict mode for classes that do not set STRICT
    VIVIFY_LOG_LEVEL   level name applied to the "vivify" logger
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from vivify.types import Settings

ENV_STRICT = "VIVIFY_STRICT"
ENV_LOG_LEVEL = "VIVIFY_LOG_LEVEL"

_TRUTHY = frozenset({"1", "true", "yes", "on"})

# Module-level state
_global_settings: Settings | None = None


def _parse_bool(value: str | None) -> bool:
    if not value:
        return False
    return value.strip().lower() in _TRUTHY


def _apply_log_level(level: str | None) -> None:
    if not level:
        return
    logging.getLogger("vivify").setLevel(level.strip().upper())


def load_settings(dotenv_path: str | Path | None = None) -> Settings:
    """Load settings from the environment, after merging in a .env file.

    Existing environment variables win over values from the .env file.
    """
    from dotenv import load_dotenv

    load_dotenv(dotenv_path)

    settings = Settings(
        strict=_parse_bool(os.environ.get(ENV_STRICT)),
        log_level=os.environ.get(ENV_LOG_LEVEL) or None,
    )
    _apply_log_level(settings["log_level"])
    return settings


def get_settings() -> Settings:
    """Return the active settings, loading them on first use."""
    global _global_settings
    if _global_settings is None:
        _global_settings = load_settings()
    return _global_settings


def configure(strict: bool | None = None, log_level: str | None = None) -> Settings:
    """Override individual settings in-process."""
    global _global_settings
    settings = Settings(**get_settings())
    if strict is not None:
        settings["strict"] = strict
    if log_level is not None:
        settings["log_level"] = log_level
        _apply_log_level(log_level)
    _global_settings = settings
    return settings


def reset_settings() -> None:
    """Forget cached settings so the next lookup re-reads the environment."""
    global _global_settings
    _global_settings = None
