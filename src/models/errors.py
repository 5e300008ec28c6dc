"""Error taxonomy and result type shared by scanning and parsing."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    # Lexical
    EMPTY_EXPRESSION = "EmptyExpression"
    LENGTH_MISMATCH = "LengthMismatch"
    MALFORMED_TOKEN = "MalformedToken"
    # Semantic
    INVALID_VALUE = "InvalidValue"
    OUT_OF_BOUND = "OutOfBound"


class CronError(Exception):
    """Base error for an invalid cron expression."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(f"{kind.value}: {message}")
        self.kind = kind
        self.message = message


class ScanError(CronError):
    """Raised for lexical problems found by the scanner."""


class SemanticError(CronError):
    """Raised when a well-formed token violates field bounds."""


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a scan or parse: either a value or exactly one error."""
    value: Optional[T] = None
    error: Optional[CronError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the carried error if there is one."""
        if self.error is not None:
            raise self.error
        return self.value

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: CronError) -> "Result[T]":
        return cls(error=error)
