import pytest

from modules.integral.core.parse import parse_integral
from modules.integral.core.radix import (
    effective_radix,
    to_binary,
    to_decimal,
    to_hex,
    to_octal,
    to_radix,
)
from modules.integral.core.widths import INT8, INT32, INT64, STANDARD_WIDTHS

PREFIXES = {2: "0b", 8: "0", 10: "", 16: "0x"}


def _sample_values(width):
    return sorted({0, 1, 7, 100, width.max_value // 3, width.max_value})


class TestRadixFormatting:
    def test_reference_values(self):
        assert to_radix(12, 4) == "30"
        assert to_radix(12, 16) == "c"
        assert to_radix(12, 8) == "14"
        assert to_radix(12, 2) == "1100"

    def test_shortcuts(self):
        assert to_hex(255) == "ff"
        assert to_decimal(255) == "255"
        assert to_octal(255) == "377"
        assert to_binary(255) == "11111111"

    @pytest.mark.parametrize("radix", range(2, 17))
    def test_zero_is_single_digit(self, radix):
        assert to_radix(0, radix) == "0"

    def test_no_padding_or_prefix(self):
        assert to_radix(1, 2) == "1"
        assert to_radix(1, 16) == "1"
        assert to_radix(8, 8) == "10"


class TestRadixCoercion:
    @pytest.mark.parametrize("radix", [0, 1, -2, 17, 36, 1000])
    def test_out_of_range_is_decimal(self, radix):
        for value in (0, 12, 4096, -77):
            assert to_radix(value, radix) == to_radix(value, 10)

    def test_effective_radix(self):
        assert effective_radix(0) == 10
        assert effective_radix(17) == 10
        assert effective_radix(2) == 2
        assert effective_radix(16) == 16


class TestLetterDigits:
    """Radices 11-15 use lowercase letter digits on the general path."""

    def test_single_letter_digits(self):
        assert to_radix(10, 11) == "a"
        assert to_radix(11, 12) == "b"
        assert to_radix(14, 15) == "e"

    def test_multi_digit(self):
        assert to_radix(255, 11) == "212"
        assert to_radix(143, 12) == "bb"


class TestNegativeValues:
    def test_decimal_keeps_sign(self):
        assert to_decimal(-5) == "-5"

    def test_hex_and_octal_use_twos_complement(self):
        assert to_hex(-1, INT32) == "ffffffff"
        assert to_hex(-1) == "f" * 16
        assert to_octal(-1, INT8) == "377"
        assert to_hex(-128, INT8) == "80"

    def test_general_path_formats_magnitude(self):
        assert to_binary(-5) == "101"
        assert to_radix(-12, 4) == "30"


class TestRoundTrip:
    @pytest.mark.parametrize("width", STANDARD_WIDTHS, ids=lambda width: width.name)
    @pytest.mark.parametrize("radix", [2, 8, 10, 16])
    def test_parse_of_format_is_identity(self, width, radix):
        for value in _sample_values(width):
            text = PREFIXES[radix] + to_radix(value, radix, width)
            assert parse_integral(text, width) == value

    @pytest.mark.parametrize("radix", [2, 8, 10, 16])
    def test_format_parse_format_is_stable(self, radix):
        for value in _sample_values(INT64):
            first = to_radix(value, radix)
            again = to_radix(parse_integral(PREFIXES[radix] + first), radix)
            assert again == first
