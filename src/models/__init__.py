"""Data models for ChronoCron."""

from .token import Token, TokenKind, FieldName, FIVE_FIELDS, SIX_FIELDS
from .schedule import ParsedSchedule, FieldBounds, FieldValueSet, FIELD_BOUNDS
from .errors import CronError, ScanError, SemanticError, ErrorKind, Result
from .status import CronStatus

__all__ = [
    "Token",
    "TokenKind",
    "FieldName",
    "FIVE_FIELDS",
    "SIX_FIELDS",
    "ParsedSchedule",
    "FieldBounds",
    "FieldValueSet",
    "FIELD_BOUNDS",
    "CronError",
    "ScanError",
    "SemanticError",
    "ErrorKind",
    "Result",
    "CronStatus"
]
