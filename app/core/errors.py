"""
Error kinds and result wrapper shared by the service layer.

Services never raise for expected failures. They return a ServiceResult,
and the route layer unwraps it; a failed result becomes a ServiceError that
the application's exception handler renders as `{"error": <message>}`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Client-visible failure categories."""
    INVALID_INPUT = "invalid_input"
    UPSTREAM_INVALID = "upstream_invalid"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    PREDICTION_FAILED = "prediction_failed"

    @property
    def status_code(self) -> int:
        return 400 if self is ErrorKind.INVALID_INPUT else 500

    @property
    def default_message(self) -> str:
        return _DEFAULT_MESSAGES[self]


_DEFAULT_MESSAGES = {
    ErrorKind.INVALID_INPUT: "Invalid input",
    ErrorKind.UPSTREAM_INVALID: "Invalid weather data",
    ErrorKind.UPSTREAM_UNAVAILABLE: "Failed to fetch weather data",
    ErrorKind.PREDICTION_FAILED: "Prediction failed",
}


class ServiceError(Exception):
    """Raised at the route boundary when a service result is a failure."""

    def __init__(self, kind: ErrorKind, message: Optional[str] = None):
        self.kind = kind
        self.message = message or kind.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """
    Outcome of a service stage: either a value or an error kind.

    Attributes:
        value: The successful result (None on failure)
        error: Error kind (None on success)
        message: Client-facing message for the error
    """
    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, value: T) -> "ServiceResult[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, kind: ErrorKind, message: Optional[str] = None) -> "ServiceResult[T]":
        return cls(error=kind, message=message or kind.default_message)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise ServiceError for a failed result."""
        if self.error is not None:
            raise ServiceError(self.error, self.message)
        return self.value
