"""Dispatcher settings, read from the environment (and a .env file when present)."""

import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

DEFAULT_HISTORY_SIZE = 100

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class DispatcherSettings(BaseModel):
    """Registry-wide defaults applied to every feed it creates."""

    silent: bool = Field(
        False,
        description="Turn missing/duplicate feed errors into no-ops",
    )
    history_size: int = Field(
        DEFAULT_HISTORY_SIZE,
        description="Items retained per feed (ring buffer); 0 keeps none",
        ge=0,
    )
    raise_delivery_errors: bool = Field(
        True,
        description="Raise DeliveryError after fan-out if any callback failed",
    )
    log_level: str = Field("INFO", description="Level for dispatcher loggers")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise to upper case and accept only standard logging level names."""
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {v!r}")
        return level


def _env_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = (env.get(key) or "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    return default


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    try:
        value = int(env.get(key, default))
    except (ValueError, TypeError):
        return default
    return value if value >= 0 else default


def _env_level(env: Mapping[str, str], key: str, default: str) -> str:
    raw = (env.get(key) or "").strip().upper()
    return raw if raw in _LOG_LEVELS else default


def load_settings(env: Optional[Mapping[str, str]] = None) -> DispatcherSettings:
    """
    Build settings from environment variables:
    DISPATCHER_SILENT, FEED_HISTORY_SIZE, DISPATCHER_RAISE_DELIVERY_ERRORS,
    DISPATCHER_LOG_LEVEL. Unparsable values fall back to defaults.
    When `env` is None the process environment is used, after loading .env.
    """
    if env is None:
        load_dotenv()
        env = os.environ
    return DispatcherSettings(
        silent=_env_bool(env, "DISPATCHER_SILENT", False),
        history_size=_env_int(env, "FEED_HISTORY_SIZE", DEFAULT_HISTORY_SIZE),
        raise_delivery_errors=_env_bool(env, "DISPATCHER_RAISE_DELIVERY_ERRORS", True),
        log_level=_env_level(env, "DISPATCHER_LOG_LEVEL", "INFO"),
    )
