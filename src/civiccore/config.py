"""Configuration for civiccore consumers.

Pydantic-validated settings shared by the presentation layer that calls into
civiccore: logging setup and the separators used in hierarchy display
strings. ``load_config_from_env()`` is the only place environment variables
are read.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError
from .hierarchy.constants import DEFAULT_MEMBERSHIP_SEPARATOR, DEFAULT_PATH_SEPARATOR


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CivicConfig(BaseModel):
    """Settings for logging and hierarchy display.

    The separators are passed by callers to ``hierarchy_path()``,
    ``scope_description()`` and ``membership_path()``; the hierarchy
    functions themselves stay free of global state.
    """

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )
    service_name: Optional[str] = Field(
        default=None,
        description="Logger name to configure alongside the root logger",
    )

    # Display
    path_separator: str = Field(
        default=DEFAULT_PATH_SEPARATOR,
        description="Separator for hierarchy paths and scope descriptions",
    )
    membership_separator: str = Field(
        default=DEFAULT_MEMBERSHIP_SEPARATOR,
        description="Separator for per-dimension paths in the hierarchy selector",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    @field_validator("path_separator", "membership_separator")
    @classmethod
    def validate_separator(cls, v: str) -> str:
        if not v:
            raise ValueError("Separator must not be empty")
        return v

    model_config = {
        "extra": "forbid",
    }


def load_config_from_env() -> CivicConfig:
    """Load configuration from environment variables.

    Environment variables:
    - LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_JSON: Use JSON log format (true/false, default: false)
    - SERVICE_NAME: Logger name to configure
    - HIERARCHY_PATH_SEPARATOR: Path separator (default: " - ")
    - HIERARCHY_MEMBERSHIP_SEPARATOR: Selector path separator (default: " / ")

    Raises:
        ConfigurationError: If a variable holds an invalid value.
    """
    import os

    try:
        return CivicConfig(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_json=os.getenv("LOG_JSON", "false").lower() in ("true", "1", "yes"),
            service_name=os.getenv("SERVICE_NAME"),
            path_separator=os.getenv("HIERARCHY_PATH_SEPARATOR", DEFAULT_PATH_SEPARATOR),
            membership_separator=os.getenv("HIERARCHY_MEMBERSHIP_SEPARATOR", DEFAULT_MEMBERSHIP_SEPARATOR),
        )
    except ValidationError as e:
        raise ConfigurationError("Invalid civiccore configuration", errors=e.errors()) from e


__all__ = [
    "CivicConfig",
    "LogLevel",
    "load_config_from_env",
]
