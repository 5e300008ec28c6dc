"""Semantic expansion of scanned tokens into a ParsedSchedule."""

from typing import Dict, Iterable, Set
import logging

from models import Token, TokenKind, FieldName, FIVE_FIELDS, SIX_FIELDS
from models import ParsedSchedule, FieldBounds, FIELD_BOUNDS
from models import ErrorKind, Result, SemanticError, CronError
from .scanner import Scanner

logger = logging.getLogger(__name__)

ALIASES: Dict[str, str] = {
    "@yearly": "0 0 1 1 *",
    "@monthly": "0 0 1 * *",
    "@weekly": "0 0 * * 0",
    "@daily": "0 0 * * *",
    "@hourly": "0 * * * *",
    "@minutely": "* * * * *",
}


def resolve_alias(schedule: str) -> str:
    """Return the canonical expression for an alias, or the input unchanged."""
    return ALIASES.get(schedule, schedule)


def parse_expression(schedule: str) -> Result[ParsedSchedule]:
    """Resolve aliases, scan and expand a schedule string.

    Args:
        schedule: One of the recognized aliases or a 5/6-field expression

    Returns:
        Result holding the ParsedSchedule, or the first scan/semantic error
    """
    expression = resolve_alias(schedule)
    scanned = Scanner(expression).scan()
    if not scanned.ok:
        return Result.failure(scanned.error)
    has_seconds = len(expression.split()) == len(SIX_FIELDS)
    return parse_tokens(scanned.value, has_seconds, source=expression)


def parse_tokens(tokens: Iterable[Token], has_seconds: bool, source: str = "") -> Result[ParsedSchedule]:
    """Expand tokens into per-field value sets.

    Items sharing a field are unioned. The first invalid token aborts the
    whole parse; no partial schedule is returned.
    """
    names = SIX_FIELDS if has_seconds else FIVE_FIELDS
    values: Dict[FieldName, Set[int]] = {name: set() for name in names}

    try:
        for token in tokens:
            if token.field not in values:
                raise SemanticError(
                    ErrorKind.INVALID_VALUE,
                    f"Field '{token.field.value}' is not part of a {len(names)}-field expression"
                )
            values[token.field].update(expand_token(token))
    except CronError as e:
        logger.debug(f"Failed to parse cron expression '{source}': {e}")
        return Result.failure(e)

    return Result.success(ParsedSchedule(
        source=source,
        has_seconds=has_seconds,
        fields={name: frozenset(field_values) for name, field_values in values.items()}
    ))


def expand_token(token: Token) -> Set[int]:
    """Return the values a single token permits within its field's bounds."""
    bounds = FIELD_BOUNDS[token.field]

    if token.kind == TokenKind.ANY:
        return set(range(bounds.min, bounds.max + 1))

    if token.kind == TokenKind.NUMBER:
        value = _to_int(token.value, token)
        _check_bounds(value, bounds, token)
        return {value}

    if token.kind == TokenKind.RANGE:
        start, end = _split_range(token.lexeme, token)
        _check_bounds(start, bounds, token)
        _check_bounds(end, bounds, token)
        _check_order(start, end, token)
        return set(range(start, end + 1))

    if token.kind == TokenKind.STEP:
        return _expand_step(token, bounds)

    raise SemanticError(ErrorKind.INVALID_VALUE, f"Unknown token kind '{token.kind}'")


def _expand_step(token: Token, bounds: FieldBounds) -> Set[int]:
    base, _, step_text = token.lexeme.partition("/")
    step = _to_int(step_text, token)
    if step < 1:
        raise SemanticError(
            ErrorKind.INVALID_VALUE,
            f"Step must be at least 1 in '{token.lexeme}' for field '{token.field.value}'"
        )

    if base == "*":
        start, end = bounds.min, bounds.max
    elif "-" in base:
        start_text, end_text = base.split("-", 1)
        start = _to_int(start_text, token) if start_text else bounds.min
        end = _to_int(end_text, token)
    else:
        # "a/n" steps from a to the end of the field
        start, end = _to_int(base, token), bounds.max

    _check_bounds(start, bounds, token)
    _check_bounds(end, bounds, token)
    _check_order(start, end, token)
    return set(range(start, end + 1, step))


def _split_range(text: str, token: Token):
    start_text, sep, end_text = text.partition("-")
    if not sep:
        raise SemanticError(
            ErrorKind.INVALID_VALUE,
            f"Invalid range '{text}' for field '{token.field.value}'"
        )
    return _to_int(start_text, token), _to_int(end_text, token)


def _to_int(value, token: Token) -> int:
    if isinstance(value, int):
        return value
    if not (isinstance(value, str) and value.isascii() and value.isdigit()):
        raise SemanticError(
            ErrorKind.INVALID_VALUE,
            f"Invalid value '{value}' in '{token.lexeme}' for field '{token.field.value}'"
        )
    return int(value)


def _check_bounds(value: int, bounds: FieldBounds, token: Token):
    if not bounds.min <= value <= bounds.max:
        raise SemanticError(
            ErrorKind.OUT_OF_BOUND,
            f"Value {value} in '{token.lexeme}' is out of bounds for field "
            f"'{token.field.value}' ({bounds.min}-{bounds.max})"
        )


def _check_order(start: int, end: int, token: Token):
    if start > end:
        raise SemanticError(
            ErrorKind.INVALID_VALUE,
            f"Range start {start} is greater than end {end} in '{token.lexeme}' "
            f"for field '{token.field.value}'"
        )
