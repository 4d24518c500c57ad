"""Logging utilities for civiccore consumers.

This module provides:
- Logging configuration from CivicConfig
- Safe, bounded previews of payloads
- Secret redaction (auth tokens are consumed by the client and must not leak)
- A formatter and adapter that attach the acting user's id to records
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

from .config import CivicConfig, LogLevel
from .hierarchy.models import User

SECRET_PATTERNS = [
    r'(?i)(?:password|passwd|pwd|secret|token|api[_-]?key|auth[_-]?token)\s*[:=]\s*["\']?([^"\'\s]+)',
    r"(?i)(?:bearer|basic)\s+([a-zA-Z0-9+/=._-]+)",
    r"(?i)(?:authorization)\s*[:=]\s*[\"']?([^\"'\s]+)",
    r"eyJ[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+",  # JWT
]

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "message", "pathname", "process", "processName", "relativeCreated",
        "thread", "threadName", "exc_info", "exc_text", "stack_info",
        "taskName", "user_id",
    }
)


def safe_preview(value: Any, limit: int = 240) -> str:
    """Single-line, length-bounded preview of a value for logging.

    Dicts and lists are rendered as JSON (Arabic kept readable), pydantic
    models through their wire payload. Whitespace is collapsed and the result
    is truncated with an ellipsis.
    """
    if value is None:
        return ""

    if isinstance(value, str):
        s = value
    elif isinstance(value, User):
        s = json.dumps(value.to_payload(), ensure_ascii=False)
    elif isinstance(value, (dict, list)):
        try:
            s = json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            s = str(value)
    else:
        s = str(value)

    s = " ".join(s.split())

    if len(s) > limit:
        return s[: limit - 1] + "…"
    return s


def redact_secrets(text: str, replacement: str = "[REDACTED]") -> str:
    """Replace tokens, passwords and authorization headers in ``text``."""
    if not isinstance(text, str):
        return text

    result = text
    for pattern in SECRET_PATTERNS:
        result = re.sub(pattern, replacement, result, flags=re.IGNORECASE | re.DOTALL)
    return result


def safe_log_value(value: Any, limit: int = 240, redact: bool = True) -> str:
    """Preview plus optional redaction; use for anything that came off the wire."""
    preview = safe_preview(value, limit=limit)
    if redact:
        preview = redact_secrets(preview)
    return preview


class CivicFormatter(logging.Formatter):
    """Formatter emitting JSON or plain text, with the acting user's id."""

    def __init__(
        self,
        json_format: bool = True,
        redact_secrets: bool = True,
        *args: Any,
        **kwargs: Any,
    ):
        super().__init__(*args, **kwargs)
        self.json_format = json_format
        self.redact_secrets = redact_secrets

    def format(self, record: logging.LogRecord) -> str:
        user_id = getattr(record, "user_id", None)

        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if user_id:
            log_data["user_id"] = str(user_id)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and key not in log_data:
                log_data[key] = safe_log_value(value, redact=self.redact_secrets)

        if self.redact_secrets:
            log_data["message"] = redact_secrets(log_data["message"])

        if self.json_format:
            return json.dumps(log_data, default=str, ensure_ascii=False)

        parts = [
            f"[{log_data['timestamp']}]",
            log_data["level"],
            log_data["logger"],
        ]
        if user_id:
            parts.append(f"user_id={log_data['user_id']}")
        parts.append(f": {log_data['message']}")
        return " ".join(parts)


class CivicLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds ``user_id`` to every record.

    Usage:
        logger = get_civic_logger(__name__)
        logger.info("Content filtered", user=current_user)
    """

    def __init__(self, logger: logging.Logger, user_id: Optional[str] = None):
        super().__init__(logger, {})
        self.user_id = user_id

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        user_id = kwargs.pop("user_id", self.user_id)
        user = kwargs.pop("user", None)
        if isinstance(user, User):
            user_id = user_id or user.id

        extra = kwargs.get("extra", {})
        if user_id:
            extra["user_id"] = user_id
        kwargs["extra"] = extra
        return msg, kwargs


def setup_logging(
    config: Optional[CivicConfig] = None,
    json_format: Optional[bool] = None,
    redact_secrets: bool = True,
) -> None:
    """Configure the root logger from ``config``.

    Args:
        config: CivicConfig instance (if None, loads from environment)
        json_format: Overrides ``config.log_json`` when given
        redact_secrets: Whether to redact secrets (default: True)
    """
    if config is None:
        from .config import load_config_from_env

        config = load_config_from_env()

    level_map = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
        LogLevel.CRITICAL: logging.CRITICAL,
    }
    log_level = level_map.get(config.log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        CivicFormatter(
            json_format=config.log_json if json_format is None else json_format,
            redact_secrets=redact_secrets,
        )
    )
    root_logger.addHandler(console_handler)

    if config.service_name:
        logging.getLogger(config.service_name).setLevel(log_level)


def get_civic_logger(name: str, user_id: Optional[str] = None) -> CivicLoggerAdapter:
    """Get a logger adapter bound to an optional user id.

    Example:
        logger = get_civic_logger(__name__, user_id=user.id)
        logger.info("Switched hierarchy")
    """
    return CivicLoggerAdapter(logging.getLogger(name), user_id=user_id)


__all__ = [
    "safe_preview",
    "redact_secrets",
    "safe_log_value",
    "CivicFormatter",
    "CivicLoggerAdapter",
    "setup_logging",
    "get_civic_logger",
]
