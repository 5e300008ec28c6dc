"""Tests for semantic expansion of cron tokens."""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models import Token, TokenKind, FieldName, ErrorKind, SemanticError, ScanError, CronError
from cron import parse_expression, parse_tokens, resolve_alias, ALIASES


def values(expression, field=FieldName.MINUTE):
    return set(parse_expression(expression).unwrap().values(field))


def parse_error(expression):
    result = parse_expression(expression)
    assert result.ok is False
    assert result.value is None
    return result.error


class TestExpansion:
    """Test value sets produced for each token kind."""

    @pytest.mark.parametrize("field,low,high", [
        (FieldName.SECOND, 0, 59),
        (FieldName.MINUTE, 0, 59),
        (FieldName.HOUR, 0, 23),
        (FieldName.DAY, 1, 31),
        (FieldName.MONTH, 1, 12),
        (FieldName.WEEKDAY, 0, 6),
    ])
    def test_wildcard_full_range(self, field, low, high):
        """Test a bare wildcard expands to the field bounds."""
        assert values("* * * * * *", field) == set(range(low, high + 1))

    def test_number(self):
        """Test a single value."""
        assert values("15 * * * *") == {15}

    def test_range(self):
        """Test inclusive ranges, degenerate ones included."""
        assert values("10-15 * * * *") == {10, 11, 12, 13, 14, 15}
        assert values("5-5 * * * *") == {5}
        assert values("0-0 * * * *") == {0}
        assert values("0-59 * * * *") == set(range(60))
        assert values("* * * 1-12 *", FieldName.MONTH) == set(range(1, 13))

    def test_steps(self):
        """Test wildcard, ranged, open-ended and start-only steps."""
        assert values("*/15 * * * *") == {0, 15, 30, 45}
        assert values("*/1 * * * *") == set(range(60))
        assert values("10-50/20 * * * *") == {10, 30, 50}
        assert values("-6/2 * * * *") == {0, 2, 4, 6}
        assert values("50/3 * * * *") == {50, 53, 56, 59}
        assert values("* */6 * * *", FieldName.HOUR) == {0, 6, 12, 18}
        assert values("* * */10 * *", FieldName.DAY) == {1, 11, 21, 31}

    def test_narrow_steps(self):
        """Test steps wider than their range keep only the start."""
        assert values("*/60 * * * *") == {0}
        assert values("20-25/10 * * * *") == {20}
        assert values("0 0 * * 6/7", FieldName.WEEKDAY) == {6}

    def test_list_union(self):
        """Test list items are unioned."""
        assert values("*/10,30 * * * *") == {0, 10, 20, 30, 40, 50}
        assert values("1,5-7,40-50/5 * * * *") == {1, 5, 6, 7, 40, 45, 50}
        assert values("*,5 * * * *") == set(range(60))

    def test_stepped_single_value_in_list(self):
        """Test a start-only step inside a list expands like a standalone step."""
        assert values("10/5,30 * * * *") == {10, 15, 20, 25, 30, 35, 40, 45, 50, 55}
        assert values("5,10/20 * * * *") == {5, 10, 30, 50}

    def test_five_field_has_no_seconds(self):
        """Test five-field schedules carry no second field."""
        schedule = parse_expression("* * * * *").unwrap()

        assert schedule.has_seconds is False
        assert FieldName.SECOND not in schedule.fields
        assert schedule.source == "* * * * *"

    def test_schedule_is_read_only(self):
        """Test the parsed mapping cannot be modified."""
        schedule = parse_expression("0 0 * * *").unwrap()

        with pytest.raises(TypeError):
            schedule.fields[FieldName.MINUTE] = frozenset({1})
        with pytest.raises(AttributeError):
            schedule.fields[FieldName.MINUTE].add(1)

    def test_schedule_is_hashable(self):
        """Test equal schedules hash alike."""
        first = parse_expression("@daily").unwrap()
        second = parse_expression("0 0 * * *").unwrap()

        assert hash(first) == hash(second)
        assert len({first, second}) == 1


class TestSemanticErrors:
    """Test bound and value validation."""

    @pytest.mark.parametrize("expression", [
        "60 * * * *",
        "* 24 * * *",
        "* * 0 * *",
        "* * 32 * *",
        "* * * 13 *",
        "* * * * 7",
        "60 * * * * *",
        "* * 0-10/2 * *",
        "70-80/2 * * * *",
        "50-70/5 * * * * *",
        "* 20-25/2 * * *",
        "* * * 0-5/2 *",
        "* * * * 1-7/2",
        "55-61 * * * *",
        "11232324512-134414512/1233 * * * *",
        "60/5 * * * *",
    ])
    def test_out_of_bound(self, expression):
        """Test values outside field bounds."""
        err = parse_error(expression)

        assert isinstance(err, SemanticError)
        assert err.kind == ErrorKind.OUT_OF_BOUND

    @pytest.mark.parametrize("expression", [
        "30-10 * * * *",
        "30-10/2 * * * *",
        "*/0 * * * *",
        "5-10/0 * * * *",
        "1,30-10 * * * *",
    ])
    def test_invalid_value(self, expression):
        """Test inverted ranges and zero steps."""
        err = parse_error(expression)

        assert isinstance(err, SemanticError)
        assert err.kind == ErrorKind.INVALID_VALUE

    def test_error_message(self):
        """Test the message names the value, field and bounds."""
        err = parse_error("60 * * * *")

        assert err.message == "Value 60 in '60' is out of bounds for field 'minute' (0-59)"

    def test_scan_errors_pass_through(self):
        """Test lexical errors are reported by parse_expression."""
        err = parse_error("* * * *")

        assert isinstance(err, ScanError)
        assert err.kind == ErrorKind.LENGTH_MISMATCH
        assert "Expected 5 or 6 fields but got 4 field(s)" in err.message

        assert parse_error("").kind == ErrorKind.EMPTY_EXPRESSION
        assert parse_error("1.5-10/2 * * * *").kind == ErrorKind.MALFORMED_TOKEN

    def test_first_error_aborts(self):
        """Test the first invalid field is the one reported."""
        err = parse_error("* 99 * 99 *")

        assert "'hour'" in err.message

    def test_unwrap_raises(self):
        """Test a failed parse raises when unwrapped."""
        with pytest.raises(CronError, match="OutOfBound"):
            parse_expression("* * * * 7").unwrap()


class TestParseTokens:
    """Test expansion of hand-built token lists."""

    def test_range_with_non_integer_text(self):
        """Test range endpoints must be integers."""
        tokens = [Token("a-5", TokenKind.RANGE, "a-5", FieldName.MINUTE)]

        result = parse_tokens(tokens, has_seconds=False)

        assert result.error.kind == ErrorKind.INVALID_VALUE

    def test_second_token_in_five_field_schedule(self):
        """Test a second token is rejected without a second field."""
        tokens = [Token("0", TokenKind.NUMBER, 0, FieldName.SECOND)]

        result = parse_tokens(tokens, has_seconds=False)

        assert result.ok is False

    def test_unions_tokens_of_one_field(self):
        """Test repeated field tokens accumulate."""
        tokens = [
            Token("1", TokenKind.NUMBER, 1, FieldName.HOUR),
            Token("3-4", TokenKind.RANGE, "3-4", FieldName.HOUR),
        ]

        schedule = parse_tokens(tokens, has_seconds=False).unwrap()

        assert schedule.values(FieldName.HOUR) == frozenset({1, 3, 4})


class TestAliases:
    """Test alias substitution."""

    @pytest.mark.parametrize("alias,expression", [
        ("@yearly", "0 0 1 1 *"),
        ("@monthly", "0 0 1 * *"),
        ("@weekly", "0 0 * * 0"),
        ("@daily", "0 0 * * *"),
        ("@hourly", "0 * * * *"),
        ("@minutely", "* * * * *"),
    ])
    def test_alias(self, alias, expression):
        """Test each alias resolves and parses like its expression."""
        assert resolve_alias(alias) == expression
        assert parse_expression(alias).unwrap() == parse_expression(expression).unwrap()

    def test_unknown_alias(self):
        """Test unknown aliases are scanned as-is and rejected."""
        assert "@annually" not in ALIASES
        assert parse_error("@annually").kind == ErrorKind.LENGTH_MISMATCH
