"""Error hierarchy for the layoutkit package."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "LayoutKitError",
    "ConfigNotFoundError",
    "ConfigError",
    "InvalidInputError",
    "ErrorCodes",
]


class LayoutKitError(Exception):
    """Base error for all layoutkit errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigNotFoundError(LayoutKitError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(LayoutKitError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class InvalidInputError(LayoutKitError):
    """Raised for invalid arguments passed to the registry API."""

    def __init__(self, message: str = "Invalid input", **kwargs: Any) -> None:
        super().__init__(code="GENERAL_INVALID_INPUT", message=message, **kwargs)


class ErrorCodes:
    """All error codes as constants.

    Example:
        if error.code == ErrorCodes.CONFIG_NOT_FOUND:
            fall_back_to_defaults()
    """

    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    GENERAL_INVALID_INPUT = "GENERAL_INVALID_INPUT"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
