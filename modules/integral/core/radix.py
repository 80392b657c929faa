from __future__ import annotations

from modules.integral.core.widths import INT64, IntWidth

DIGITS = "0123456789abcdef"
MIN_RADIX = 2
MAX_RADIX = 16
DEFAULT_RADIX = 10


def effective_radix(radix: int) -> int:
    """Radices outside 2..16 (including 0) fall back to decimal."""
    if radix < MIN_RADIX or radix > MAX_RADIX:
        return DEFAULT_RADIX
    return radix


def _to_base(value: int, base: int) -> str:
    # Magnitude only; the general path carries no sign.
    value = abs(value)
    if value == 0:
        return "0"

    digits = []
    while value > 0:
        value, remainder = divmod(value, base)
        digits.append(DIGITS[remainder])
    return "".join(reversed(digits))


def to_radix(value: int, radix: int, width: IntWidth = INT64) -> str:
    """Render ``value`` in ``radix`` without prefix or padding.

    Hexadecimal and octal show negative values as their two's complement
    bit pattern for ``width``; decimal keeps the sign; every other radix
    renders the magnitude.
    """
    radix = effective_radix(radix)
    if radix == 10:
        return str(value)
    if radix == 16:
        return format(width.unsigned_pattern(value), "x")
    if radix == 8:
        return format(width.unsigned_pattern(value), "o")
    return _to_base(value, radix)


def to_hex(value: int, width: IntWidth = INT64) -> str:
    return to_radix(value, 16, width)


def to_decimal(value: int, width: IntWidth = INT64) -> str:
    return to_radix(value, 10, width)


def to_octal(value: int, width: IntWidth = INT64) -> str:
    return to_radix(value, 8, width)


def to_binary(value: int, width: IntWidth = INT64) -> str:
    return to_radix(value, 2, width)
