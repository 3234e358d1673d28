"""
Jotter Backend: Error Kinds and Results
========================================

What:  The error taxonomy of the API and the result type that carries it.
How:   Validators, the search filter builder and NoteService return a
       `Result` holding either a value or an `AppError`. Route handlers hand
       any error to `error_response()` in jotter.responses, which is the only
       place an error becomes an HTTP status and body.

Taxonomy:
    ErrorKind.INVALID_INPUT  -> 400 (client can fix the request)
    ErrorKind.NOT_FOUND      -> 404 (referenced note does not exist)
    ErrorKind.RATE_LIMITED   -> 429 (client must wait)
    ErrorKind.INTERNAL       -> 500 (store/infrastructure failure)

    `message` is safe to return to the client. `context` is for the server
    log only and is never serialized into a response.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    INTERNAL = "internal"


STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.INTERNAL: 500,
}


@dataclass(frozen=True)
class AppError:
    """
    A request-level failure: what went wrong and what to tell the client.

    Attributes:
        kind:     Category, determines the HTTP status
        message:  User-facing description
        context:  Debug details for logging (never returned to the client)
    """

    kind: ErrorKind
    message: str
    context: Dict[str, Any] = field(default_factory=dict)

    @property
    def status(self) -> int:
        return STATUS_BY_KIND[self.kind]

    @classmethod
    def invalid_input(cls, message: str, **context: Any) -> "AppError":
        return cls(ErrorKind.INVALID_INPUT, message, context)

    @classmethod
    def not_found(cls, message: str, **context: Any) -> "AppError":
        return cls(ErrorKind.NOT_FOUND, message, context)

    @classmethod
    def rate_limited(cls, message: str, **context: Any) -> "AppError":
        return cls(ErrorKind.RATE_LIMITED, message, context)

    @classmethod
    def internal(cls, **context: Any) -> "AppError":
        return cls(ErrorKind.INTERNAL, INTERNAL_ERROR_MESSAGE, context)


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or an error, never both."""

    value: Optional[T] = None
    error: Optional[AppError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: AppError) -> "Result[T]":
        return cls(error=error)
