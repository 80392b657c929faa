from __future__ import annotations

import math
import operator
from functools import total_ordering
from typing import IO, ClassVar, Dict, Iterator

from modules.integral.core.parse import WHITESPACE, parse_integral
from modules.integral.core.radix import to_radix
from modules.integral.core.widths import (
    INT8,
    INT16,
    INT32,
    INT64,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    IntWidth,
)


def _trunc_div(lhs: int, rhs: int) -> int:
    quotient = abs(lhs) // abs(rhs)
    return quotient if (lhs < 0) == (rhs < 0) else -quotient


def _trunc_mod(lhs: int, rhs: int) -> int:
    return lhs - rhs * _trunc_div(lhs, rhs)


def _coerce(value: object, width: IntWidth) -> int:
    if isinstance(value, bool):
        raise TypeError("bool is not an integral value")
    if isinstance(value, Integral):
        return width.wrap(value._value)
    if isinstance(value, int):
        return width.wrap(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise TypeError(f"Cannot convert {value!r} to an integral value")
        return width.wrap(int(value))
    if isinstance(value, str):
        return parse_integral(value, width)
    if hasattr(type(value), "__index__"):
        return width.wrap(operator.index(value))
    raise TypeError(f"Cannot convert {type(value).__name__} to an integral value")


def _operand(value: object) -> int | None:
    if isinstance(value, Integral):
        return value._value
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


@total_ordering
class Integral:
    """Immutable fixed-width integer value.

    Only the width-bound subclasses produced by :func:`integral_type`
    (``Int8`` ... ``UInt64``) can be instantiated. Arithmetic wraps around
    like the native machine type; division truncates toward zero.
    """

    __slots__ = ("_value",)

    width: ClassVar[IntWidth | None] = None

    def __init__(self, value: object = 0) -> None:
        width = type(self).width
        if width is None:
            raise TypeError(
                "Integral is not bound to an integer width; use integral_type()"
            )
        object.__setattr__(self, "_value", _coerce(value, width))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def _rewrap(self, value: int) -> "Integral":
        return type(self)(value)

    # -- arithmetic ---------------------------------------------------------

    def __add__(self, other: object):
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return self._rewrap(self._value + rhs)

    def __radd__(self, other: object):
        return self.__add__(other)

    def __sub__(self, other: object):
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return self._rewrap(self._value - rhs)

    def __rsub__(self, other: object):
        lhs = _operand(other)
        if lhs is None:
            return NotImplemented
        return self._rewrap(lhs - self._value)

    def __mul__(self, other: object):
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return self._rewrap(self._value * rhs)

    def __rmul__(self, other: object):
        return self.__mul__(other)

    def __truediv__(self, other: object):
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return self._rewrap(_trunc_div(self._value, rhs))

    def __rtruediv__(self, other: object):
        lhs = _operand(other)
        if lhs is None:
            return NotImplemented
        return self._rewrap(_trunc_div(lhs, self._value))

    __floordiv__ = __truediv__
    __rfloordiv__ = __rtruediv__

    def __mod__(self, other: object):
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return self._rewrap(_trunc_mod(self._value, rhs))

    def __rmod__(self, other: object):
        lhs = _operand(other)
        if lhs is None:
            return NotImplemented
        return self._rewrap(_trunc_mod(lhs, self._value))

    def __neg__(self) -> "Integral":
        return self._rewrap(-self._value)

    def __pos__(self) -> "Integral":
        return self

    def __abs__(self) -> "Integral":
        return self._rewrap(abs(self._value))

    def increment(self) -> "Integral":
        return self._rewrap(self._value + 1)

    def decrement(self) -> "Integral":
        return self._rewrap(self._value - 1)

    # -- comparison ---------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return self._value == rhs

    def __lt__(self, other: object) -> bool:
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return self._value < rhs

    def __hash__(self) -> int:
        return hash(self._value)

    # -- conversions --------------------------------------------------------

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __float__(self) -> float:
        return float(self._value)

    def __bool__(self) -> bool:
        return self._value != 0

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"

    def to_int(self) -> int:
        return self._value

    def to_str(self) -> str:
        return str(self._value)

    def to_radix(self, radix: int) -> str:
        return to_radix(self._value, radix, self.width)

    def hex(self) -> str:
        return self.to_radix(16)

    def dec(self) -> str:
        return self.to_radix(10)

    def oct(self) -> str:
        return self.to_radix(8)

    def bin(self) -> str:
        return self.to_radix(2)

    # -- numeric properties -------------------------------------------------

    @property
    def odd(self) -> bool:
        return bool(self._value & 1)

    @property
    def even(self) -> bool:
        return not self.odd

    @classmethod
    def min_value(cls) -> int:
        if cls.width is None:
            raise TypeError("Integral is not bound to an integer width")
        return cls.width.min_value

    @classmethod
    def max_value(cls) -> int:
        if cls.width is None:
            raise TypeError("Integral is not bound to an integer width")
        return cls.width.max_value


_TYPES: Dict[IntWidth, type] = {}


def _class_name(width: IntWidth) -> str:
    if width.signed:
        return f"Int{width.bits}"
    return f"UInt{width.bits}"


def integral_type(width: IntWidth) -> type:
    """Return the Integral subclass bound to ``width`` (cached per width)."""
    kind = _TYPES.get(width)
    if kind is None:
        kind = type(_class_name(width), (Integral,), {"__slots__": (), "width": width})
        _TYPES[width] = kind
    return kind


Int8 = integral_type(INT8)
Int16 = integral_type(INT16)
Int32 = integral_type(INT32)
Int64 = integral_type(INT64)
UInt8 = integral_type(UINT8)
UInt16 = integral_type(UINT16)
UInt32 = integral_type(UINT32)
UInt64 = integral_type(UINT64)


def min_of(lhs: Integral, rhs: Integral) -> Integral:
    return lhs if lhs < rhs else rhs


def max_of(lhs: Integral, rhs: Integral) -> Integral:
    return lhs if lhs > rhs else rhs


# Literal factories for the unsigned C types.


def uchar(value: int) -> Integral:
    return UInt8(value)


def ushort(value: int) -> Integral:
    return UInt16(value)


def uint(value: int) -> Integral:
    return UInt32(value)


def ulong(value: int) -> Integral:
    return UInt64(value)


def ulonglong(value: int) -> Integral:
    return UInt64(value)


# Stream adapters.


def _read_token(stream: IO[str]) -> str | None:
    char = stream.read(1)
    while char and char in WHITESPACE:
        char = stream.read(1)
    if not char:
        return None

    chars = []
    while char and char not in WHITESPACE:
        chars.append(char)
        char = stream.read(1)
    return "".join(chars)


def read_integral(stream: IO[str], kind: type = Int64) -> Integral:
    """Read one whitespace-delimited token from ``stream`` and parse it.

    An exhausted stream yields zero.
    """
    token = _read_token(stream)
    return kind(token or "")


def iter_integrals(stream: IO[str], kind: type = Int64) -> Iterator[Integral]:
    while True:
        token = _read_token(stream)
        if token is None:
            return
        yield kind(token)


def write_integral(stream: IO[str], value: Integral) -> IO[str]:
    stream.write(value.dec())
    return stream
