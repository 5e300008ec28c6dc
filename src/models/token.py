"""Tokens produced by the cron scanner."""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class FieldName(str, Enum):
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    MONTH = "month"
    WEEKDAY = "weekday"


class TokenKind(str, Enum):
    ANY = "any"
    NUMBER = "number"
    STEP = "step"
    RANGE = "range"


FIVE_FIELDS = (
    FieldName.MINUTE,
    FieldName.HOUR,
    FieldName.DAY,
    FieldName.MONTH,
    FieldName.WEEKDAY,
)
SIX_FIELDS = (FieldName.SECOND,) + FIVE_FIELDS


@dataclass(frozen=True)
class Token:
    """One scanned list item of a cron field.

    The value depends on the kind: ``"*"`` for ANY, the integer for NUMBER,
    the verbatim lexeme for RANGE and the integer step for STEP.
    """
    lexeme: str
    kind: TokenKind
    value: Union[str, int]
    field: FieldName

    def __str__(self) -> str:
        return (
            f"Token{{lexeme='{self.lexeme}', kind={self.kind.value}, "
            f"value={self.value}, field={self.field.value}}}"
        )
