"""Unit tests for display formatting."""

import pytest

from kalkulator_ilmiah import config
from kalkulator_ilmiah.formatting import (
    format_display,
    pending_expression,
    to_exponential,
    to_precision,
)
from kalkulator_ilmiah.types import CalculatorState, Operator


class TestFormatDisplay:
    """Test the display thresholds."""

    def test_short_values_unchanged(self):
        assert format_display("3.14159") == "3.14159"
        assert format_display("0") == "0"
        assert format_display("0.") == "0."
        assert format_display("123456789012") == "123456789012"

    def test_short_tiny_numeral_unchanged(self):
        # nine characters fit the display even though the value is tiny
        assert format_display("0.0000001") == "0.0000001"

    def test_large_value_uses_exponential(self):
        assert format_display("1234567890123") == "1.234568e+12"
        assert format_display("-1234567890123") == "-1.234568e+12"

    def test_tiny_value_uses_exponential(self):
        assert format_display("0.000000100000") == "1.000000e-7"
        assert format_display("1.2345678e-10") == "1.234568e-10"

    def test_mid_range_uses_ten_significant_digits(self):
        assert format_display("0.30000000000000004") == "0.3000000000"
        assert format_display("123456789.123") == "123456789.1"
        assert format_display("3.141592653589793") == "3.141592654"

    def test_long_zero_is_fixed(self):
        assert format_display("0.000000000000") == "0.000000000"

    def test_sentinels(self):
        assert format_display("NaN") == "NaN"
        assert format_display("-Infinity") == "-Infinity"

    def test_display_width_from_config(self, monkeypatch):
        monkeypatch.setattr(config, "DISPLAY_MAX_LENGTH", 20)
        assert format_display("3.141592653589793") == "3.141592653589793"


class TestPrecisionHelpers:
    def test_to_exponential(self):
        assert to_exponential(1234567890123, 6) == "1.234568e+12"
        assert to_exponential(1e-7, 6) == "1.000000e-7"

    def test_to_precision_keeps_trailing_zeros(self):
        assert to_precision(0.5, 10) == "0.5000000000"
        assert to_precision(123.456, 10) == "123.4560000"

    def test_to_precision_small_exponent_stays_fixed(self):
        assert to_precision(0.0000123456789, 10) == "0.00001234567890"

    @pytest.mark.parametrize(
        "value,expected",
        [
            (123456789012.5, "1.234567890e+11"),
            (9999999999.5, "1.000000000e+10"),
            (1.5e-7, "1.500000000e-7"),
        ],
    )
    def test_to_precision_switches_to_exponential(self, value, expected):
        assert to_precision(value, 10) == expected


class TestPendingExpression:
    def test_pending(self):
        state = CalculatorState(current_value="4", previous_value="3", operation=Operator.DIVIDE)
        assert pending_expression(state) == "3 ÷"

    def test_pending_uses_display_format(self):
        state = CalculatorState(previous_value="1234567890123", operation=Operator.ADD)
        assert pending_expression(state) == "1.234568e+12 +"

    def test_nothing_pending(self):
        assert pending_expression(CalculatorState()) == ""
