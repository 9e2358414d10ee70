"""Error types and structured classification of transport failures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorCategory(Enum):
    NETWORK = "network"
    TIMEOUT = "timeout"
    AUTHENTICATION = "auth"
    VALIDATION = "validation"
    CONFIGURATION = "config"
    UNKNOWN = "unknown"


class PuncherException(Exception):
    """Base class for errors reported to the user by the CLI."""


class ConfigError(PuncherException):
    """Configuration file could not be read, parsed or validated."""


class MenuConfigurationError(PuncherException):
    """Recurring task menu cannot be built from the configured tasks.

    Raised for more than 26 task groups and for a menu level without any
    selectable keys. Both are configuration defects, never user input errors.
    """


class MissingFieldError(PuncherException, ValueError):
    """A punch body is missing a field its punch type requires."""

    def __init__(self, field: str, punch_type: str):
        self.field = field
        self.punch_type = punch_type
        super().__init__(f"{punch_type} punch has to have '{field}'")


class UnsupportedPunchError(PuncherException):
    """Punch type exists in the API but is not supported here."""


class ApiError(PuncherException):
    """HTTP request to the worktime API failed."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        body: str = "",
    ):
        self.status_code = status_code
        self.category = category
        self.body = body
        super().__init__(message)


@dataclass(frozen=True)
class PuncherError:
    category: ErrorCategory
    message: str
    hint: str = ""
    original_exception: Optional[Exception] = None

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "message": self.message,
            "hint": self.hint,
        }


def classify_status(status_code: int) -> ErrorCategory:
    if status_code in (401, 403):
        return ErrorCategory.AUTHENTICATION
    if status_code in (400, 422):
        return ErrorCategory.VALIDATION
    if status_code in (408, 504):
        return ErrorCategory.TIMEOUT
    return ErrorCategory.UNKNOWN


def classify_exception(exception: Exception) -> PuncherError:
    message = str(exception)
    lowered = message.lower()

    if isinstance(exception, ApiError) and exception.status_code is not None:
        category = classify_status(exception.status_code)
        hint = "Check the 'api_key' in your configuration." if category is ErrorCategory.AUTHENTICATION else ""
        return PuncherError(
            category=category,
            message=message,
            hint=hint,
            original_exception=exception,
        )
    if "timeout" in lowered or "timed out" in lowered:
        return PuncherError(
            category=ErrorCategory.TIMEOUT,
            message=message,
            hint="The worktime API did not answer in time. Try again later.",
            original_exception=exception,
        )
    if "connection" in lowered or "max retries exceeded" in lowered:
        return PuncherError(
            category=ErrorCategory.NETWORK,
            message=message,
            hint="Network error. Check connectivity and retry.",
            original_exception=exception,
        )
    if isinstance(exception, ConfigError):
        return PuncherError(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            original_exception=exception,
        )
    if "invalid" in lowered or "validation" in lowered:
        return PuncherError(
            category=ErrorCategory.VALIDATION,
            message=message,
            original_exception=exception,
        )

    return PuncherError(
        category=ErrorCategory.UNKNOWN,
        message=message,
        original_exception=exception,
    )
