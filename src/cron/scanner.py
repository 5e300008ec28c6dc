"""Lexical scanning of cron expressions into field-tagged tokens."""

import re
from typing import List
import logging

from models import Token, TokenKind, FieldName, FIVE_FIELDS, SIX_FIELDS
from models import ErrorKind, Result, ScanError

logger = logging.getLogger(__name__)

MIN_FIELDS = len(FIVE_FIELDS)
MAX_FIELDS = len(SIX_FIELDS)

_NUMBER = re.compile(r"[0-9]+")
_RANGE = re.compile(r"[0-9]+-[0-9]+")
# Left side of a step: "*", "a", "-b" or "a-b"
_STEP_BASE = re.compile(r"\*|[0-9]+|[0-9]*-[0-9]+")


class Scanner:
    """Tokenizes a raw cron expression.

    Scanning is all-or-nothing: ``scan()`` returns either the complete token
    list or the first error encountered, never a partial list.
    """

    def __init__(self, expression: str):
        self.expression = expression

    def scan(self) -> Result[List[Token]]:
        """Scan the expression.

        Returns:
            Result holding the token list, or a ScanError
        """
        try:
            return Result.success(self._scan())
        except ScanError as e:
            logger.debug(f"Rejected cron expression '{self.expression}': {e}")
            return Result.failure(e)

    def _scan(self) -> List[Token]:
        if len(self.expression) == 0:
            raise ScanError(ErrorKind.EMPTY_EXPRESSION, "Cron expression has zero length")

        groups = self.expression.split()
        if len(groups) not in (MIN_FIELDS, MAX_FIELDS):
            raise ScanError(
                ErrorKind.LENGTH_MISMATCH,
                f"Invalid number of fields for '{self.expression}'. "
                f"Expected {MIN_FIELDS} or {MAX_FIELDS} fields but got {len(groups)} field(s)"
            )

        names = SIX_FIELDS if len(groups) == MAX_FIELDS else FIVE_FIELDS
        tokens: List[Token] = []
        for group, name in zip(groups, names):
            tokens.extend(self._scan_group(group, name))
        return tokens

    def _scan_group(self, group: str, field: FieldName) -> List[Token]:
        tokens = []
        for item in group.split(","):
            if not item:
                raise self._malformed(f"Invalid list expression '{group}' for field '{field.value}'")
            tokens.append(self._scan_item(item, field))
        return tokens

    def _scan_item(self, item: str, field: FieldName) -> Token:
        first = item[0]

        if first == "*":
            if item == "*":
                return Token(item, TokenKind.ANY, "*", field)
            if item.startswith("*/"):
                return self._scan_step(item, field)
            raise self._malformed(f"Invalid any expression '{item}' for field '{field.value}'")

        if not (_NUMBER.match(first) or first == "-"):
            raise self._malformed(
                f"Invalid cron expression '{self.expression}' in field '{field.value}'"
            )

        if "/" in item:
            return self._scan_step(item, field)

        if "-" in item:
            if not _RANGE.fullmatch(item):
                raise self._malformed(f"Invalid range expression '{item}' for field '{field.value}'")
            return Token(item, TokenKind.RANGE, item, field)

        if not _NUMBER.fullmatch(item):
            raise self._malformed(f"Invalid number '{item}' for field '{field.value}'")
        return Token(item, TokenKind.NUMBER, int(item), field)

    def _scan_step(self, item: str, field: FieldName) -> Token:
        base, _, step = item.partition("/")
        if not (_STEP_BASE.fullmatch(base) and _NUMBER.fullmatch(step)):
            raise self._malformed(f"Invalid step expression '{item}' for field '{field.value}'")
        return Token(item, TokenKind.STEP, int(step), field)

    @staticmethod
    def _malformed(message: str) -> ScanError:
        return ScanError(ErrorKind.MALFORMED_TOKEN, message)


def scan(expression: str) -> Result[List[Token]]:
    """Shortcut for ``Scanner(expression).scan()``."""
    return Scanner(expression).scan()
