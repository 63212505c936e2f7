import os
from typing import Literal

from pydantic import BaseModel

_TRUTHY = {"1", "true", "yes", "on"}

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseModel):
    language: str | None = None
    log_level: LogLevel = "WARNING"
    filter_invisible: bool = True


def load_settings() -> Settings:
    """Read settings from ``SHADER_NAV_*`` environment variables.

    Raises ``pydantic.ValidationError`` for an unknown log level.
    """
    return Settings(
        language=os.getenv("SHADER_NAV_LANGUAGE") or None,
        log_level=os.getenv("SHADER_NAV_LOG_LEVEL", "WARNING").strip().upper(),
        filter_invisible=os.getenv("SHADER_NAV_FILTER_INVISIBLE", "true").strip().lower() in _TRUTHY,
    )
