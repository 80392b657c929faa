from __future__ import annotations

import logging
from typing import Tuple

from modules.integral.core.widths import INT64, IntWidth

logger = logging.getLogger(__name__)

BINARY_DIGITS = frozenset("01")
OCTAL_DIGITS = frozenset("01234567")
DECIMAL_DIGITS = frozenset("0123456789")
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

# Characters a stream extraction skips before a token.
WHITESPACE = " \t\n\r\v\f"

# Longer decimal magnitudes exceed every 64-bit kind.
MAX_DECIMAL_DIGITS = 20
DECIMAL_CHUNK = 18


def detect_radix(text: str) -> int:
    """Infer the radix of a literal from its prefix.

    ``0b``/``0B`` is binary, ``0x`` hexadecimal, any other leading ``0``
    octal, everything else decimal.
    """
    if text.startswith(("0b", "0B")):
        return 2
    if text.startswith("0x"):
        return 16
    if text.startswith("0"):
        return 8
    return 10


def _take_digits(text: str, start: int, allowed: frozenset, limit: int | None = None) -> str:
    end = start
    while end < len(text) and text[end] in allowed:
        end += 1
        if limit is not None and end - start >= limit:
            break
    return text[start:end]


def _fit(value: int, width: IntWidth) -> int:
    if value < 0 and not width.signed:
        return width.wrap(value)
    return width.clamp(value)


def _reduce_decimal(digits: str, modulus: int) -> int:
    value = 0
    for start in range(0, len(digits), DECIMAL_CHUNK):
        chunk = digits[start : start + DECIMAL_CHUNK]
        value = (value * 10 ** len(chunk) + int(chunk, 10)) % modulus
    return value


def _decimal_value(digits: str, sign: int, width: IntWidth) -> int:
    digits = digits.lstrip("0") or "0"
    if sign < 0 and not width.signed:
        return width.wrap(-_reduce_decimal(digits, 1 << width.bits))
    if len(digits) > MAX_DECIMAL_DIGITS:
        return width.min_value if sign < 0 else width.max_value
    return width.clamp(sign * int(digits, 10))


def _parse_digits(text: str, radix: int, width: IntWidth) -> Tuple[int | None, str | None]:
    if radix == 2:
        digits = _take_digits(text, 2, BINARY_DIGITS, limit=width.value_bits)
        if not digits:
            return None, "No binary digits after 0b prefix."
        return int(digits, 2), None

    if radix == 16:
        digits = _take_digits(text, 2, HEX_DIGITS)
        if not digits:
            return None, "No hexadecimal digits after 0x prefix."
        return _fit(int(digits, 16), width), None

    if radix == 8:
        digits = _take_digits(text, 0, OCTAL_DIGITS)
        return _fit(int(digits, 8), width), None

    raw = text.lstrip(WHITESPACE)
    sign = 1
    start = 0
    if raw[:1] in ("+", "-"):
        sign = -1 if raw[0] == "-" else 1
        start = 1
    digits = _take_digits(raw, start, DECIMAL_DIGITS)
    if not digits:
        return None, "No decimal digits found."
    return _decimal_value(digits, sign, width), None


def try_parse_integral(text: str, width: IntWidth = INT64) -> Tuple[int | None, str | None]:
    """Parse ``text`` into an integer of the given width.

    Parsing is greedy: the longest run of valid digits for the detected
    radix is used and anything after it is ignored. Returns
    ``(None, message)`` when not a single digit could be read.
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected str, got {type(text).__name__}")

    radix = detect_radix(text)
    value, error = _parse_digits(text, radix, width)
    if error:
        logger.debug("Unparsable %s literal %r: %s", width.name, text, error)
    return value, error


def parse_integral(text: str, width: IntWidth = INT64) -> int:
    """Parse ``text`` into an integer, yielding ``0`` when nothing parses."""
    value, _ = try_parse_integral(text, width)
    if value is None:
        return 0
    return value
