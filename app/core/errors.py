"""Application-level exception types.

Domain errors raised by services and adapters. The exception handlers map
each subclass to an HTTP status and a consistent JSON error body.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients."""

    code: str
    message: str
    hint: str
    max_value: int
    actual_value: int
    cooldown_until: int
    retry_after: int
    max_count: int
    dream_id: str
    region: str
    provider: str
    request_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when request input fails validation."""


class NotFoundAppError(AppError):
    """Raised when a dream or region does not exist."""


class RateLimitedAppError(AppError):
    """Raised when an owner id has exhausted its submission window."""


class ClassifierAppError(AppError):
    """Raised when the classification/translation provider fails."""
