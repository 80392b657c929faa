import io

import pytest

from modules.integral.core.parse import detect_radix, parse_integral, try_parse_integral
from modules.integral.core.value import Int64, read_integral
from modules.integral.core.widths import (
    INT8,
    INT16,
    INT64,
    STANDARD_WIDTHS,
    UINT8,
    UINT32,
)


class TestDetectRadix:
    @pytest.mark.parametrize(
        "text, radix",
        [
            ("0b101", 2),
            ("0B101", 2),
            ("0x1f", 16),
            ("0X1f", 8),
            ("017", 8),
            ("0", 8),
            ("137", 10),
            ("-5", 10),
            ("", 10),
            (" 0x1", 10),
        ],
    )
    def test_prefixes(self, text, radix):
        assert detect_radix(text) == radix


class TestPrefixedLiterals:
    def test_reference_literals(self):
        assert parse_integral("0b1111") == 15
        assert parse_integral("0x64") == 100
        assert parse_integral("017") == 15
        assert parse_integral("137") == 137

    def test_uppercase_binary_prefix(self):
        assert parse_integral("0B101") == 5

    def test_hex_digits_are_case_insensitive(self):
        assert parse_integral("0xfF") == 255
        assert parse_integral("0xABC") == 0xABC

    def test_uppercase_hex_prefix_is_read_as_octal_zero(self):
        assert parse_integral("0X10") == 0

    def test_octal(self):
        assert parse_integral("0777") == 511
        assert parse_integral("0") == 0


class TestGreedyPrefix:
    def test_decimal_stops_at_letters(self):
        assert parse_integral("7SEVEN") == 7

    def test_no_leading_digit_is_zero(self):
        assert parse_integral("SEVEN") == 0

    def test_binary_stops_at_first_non_binary_digit(self):
        assert parse_integral("0b1021") == 2

    def test_hex_stops_at_first_non_hex_digit(self):
        assert parse_integral("0x1g") == 1

    def test_octal_stops_at_eight_and_nine(self):
        assert parse_integral("0128") == 10
        assert parse_integral("09") == 0

    def test_decimal_stops_at_space(self):
        assert parse_integral("4 2") == 4

    @pytest.mark.parametrize("text", ["", "-", "+", "0b", "0B2", "0x", "0xzz", "SEVEN"])
    def test_unparsable_is_zero(self, text):
        assert parse_integral(text) == 0


class TestDecimalSign:
    def test_signs(self):
        assert parse_integral("-42") == -42
        assert parse_integral("+42") == 42

    def test_leading_whitespace_is_skipped(self):
        assert parse_integral("  \t42") == 42

    def test_negative_into_unsigned_wraps(self):
        assert parse_integral("-1", UINT8) == 255
        assert parse_integral("-2", UINT32) == 2**32 - 2


class TestWidthLimits:
    def test_binary_digit_count_is_bounded_by_value_bits(self):
        assert parse_integral("0b11111111", INT8) == 127
        assert parse_integral("0b11111111", UINT8) == 255
        assert parse_integral("0b1111111110", UINT8) == 255

    def test_decimal_saturates(self):
        assert parse_integral("300", INT8) == 127
        assert parse_integral("-300", INT8) == -128
        assert parse_integral("1000", UINT8) == 255

    def test_hex_and_octal_saturate(self):
        assert parse_integral("0x1ff", UINT8) == 255
        assert parse_integral("0777777", INT16) == 32767

    @pytest.mark.parametrize("width", STANDARD_WIDTHS, ids=lambda width: width.name)
    def test_boundaries_parse_exactly(self, width):
        assert parse_integral(str(width.max_value), width) == width.max_value
        assert parse_integral(str(width.min_value), width) == width.min_value

    def test_default_width_is_int64(self):
        assert parse_integral(str(INT64.max_value)) == INT64.max_value
        assert parse_integral(str(INT64.max_value + 1)) == INT64.max_value

    def test_very_long_decimal_saturates(self):
        assert parse_integral("9" * 5000) == INT64.max_value
        assert parse_integral("-" + "1" * 5000) == INT64.min_value
        assert parse_integral("9" * 5000, UINT8) == 255
        assert try_parse_integral("9" * 5000 + "x", INT8) == (127, None)

    def test_leading_zeros_do_not_count_toward_length(self):
        assert parse_integral("+" + "0" * 5000 + "42") == 42

    def test_very_long_negative_into_unsigned_wraps(self):
        # 10**5000 is a multiple of 2**8.
        assert parse_integral("-1" + "0" * 5000, UINT8) == 0
        assert parse_integral("-1" + "0" * 5000 + "1", UINT8) == 255

    def test_very_long_token_from_stream(self):
        stream = io.StringIO("7" * 4301 + " 5")
        assert read_integral(stream, Int64) == INT64.max_value
        assert read_integral(stream, Int64) == 5


class TestTryParse:
    def test_success_reports_no_error(self):
        assert try_parse_integral("0x64") == (100, None)

    def test_truncated_input_still_parses(self):
        assert try_parse_integral("7SEVEN") == (7, None)

    def test_zero_is_distinguished_from_failure(self):
        assert try_parse_integral("0") == (0, None)
        value, error = try_parse_integral("SEVEN")
        assert value is None
        assert error == "No decimal digits found."

    def test_prefix_without_digits_fails(self):
        assert try_parse_integral("0x")[1] == "No hexadecimal digits after 0x prefix."
        assert try_parse_integral("0b")[1] == "No binary digits after 0b prefix."

    def test_non_string_is_rejected(self):
        with pytest.raises(TypeError):
            try_parse_integral(42)
        with pytest.raises(TypeError):
            parse_integral(None)
