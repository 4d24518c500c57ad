"""Exception hierarchy for civiccore.

Hierarchy checks themselves never raise. Errors only surface at the
boundaries: parsing service payloads, gating a hierarchy switch and loading
configuration.

Usage:
    from civiccore.exceptions import CivicCoreError, HierarchySwitchError

    try:
        request = build_switch_request(user, ActiveHierarchy.SECTOR)
    except HierarchySwitchError as e:
        logger.info("Switch not allowed: [%s] %s", e.code, e.message)
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar, cast

__all__ = [
    "CivicCoreError",
    "ConfigurationError",
    "PayloadError",
    "HierarchySwitchError",
    "ErrorRegistry",
    "error_registry",
    "register_error",
]


# ---- Exception Hierarchy ----------------------------------------------------


class CivicCoreError(Exception):
    """Base exception for civiccore.

    Attributes:
        code: Stable error code string (e.g. "HIERARCHY_SWITCH_ERROR").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(CivicCoreError):
    """Invalid or missing configuration."""

    code: str = "CONFIGURATION_ERROR"


class PayloadError(CivicCoreError):
    """Service payload could not be read as a user, targeting or switch reply."""

    code: str = "PAYLOAD_ERROR"


class HierarchySwitchError(CivicCoreError):
    """Hierarchy switch not allowed or rejected by the profile service."""

    code: str = "HIERARCHY_SWITCH_ERROR"


# ---- Error Registry ---------------------------------------------------------

_E = TypeVar("_E", bound=type[CivicCoreError])


class ErrorRegistry:
    """Maps stable error codes to exception classes."""

    def __init__(self) -> None:
        self._errors: dict[str, type[CivicCoreError]] = {}

    def register(self, code: str, error_cls: type[CivicCoreError]) -> None:
        self._errors[code] = error_cls

    def get(self, code: str) -> type[CivicCoreError] | None:
        return self._errors.get(code)

    def all(self) -> dict[str, type[CivicCoreError]]:
        return dict(self._errors)


error_registry = ErrorRegistry()


def register_error(code: str) -> Callable[[_E], _E]:
    """Decorator to register a custom error type.

    Usage:
        @register_error("CONTENT_FETCH_ERROR")
        class ContentFetchError(CivicCoreError):
            code = "CONTENT_FETCH_ERROR"
    """

    def decorator(cls: _E) -> _E:
        error_registry.register(code, cls)
        return cls

    return cast(Callable[[_E], _E], decorator)


error_registry.register("INTERNAL_ERROR", CivicCoreError)
error_registry.register("CONFIGURATION_ERROR", ConfigurationError)
error_registry.register("PAYLOAD_ERROR", PayloadError)
error_registry.register("HIERARCHY_SWITCH_ERROR", HierarchySwitchError)
