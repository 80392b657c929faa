from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class IntWidth:
    """A fixed-width machine integer kind."""

    name: str
    bits: int
    signed: bool

    @property
    def value_bits(self) -> int:
        return self.bits - 1 if self.signed else self.bits

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        return (1 << self.value_bits) - 1

    def wrap(self, value: int) -> int:
        pattern = value & ((1 << self.bits) - 1)
        if self.signed and pattern > self.max_value:
            return pattern - (1 << self.bits)
        return pattern

    def clamp(self, value: int) -> int:
        return max(self.min_value, min(self.max_value, value))

    def unsigned_pattern(self, value: int) -> int:
        return value & ((1 << self.bits) - 1)

    def contains(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value


INT8 = IntWidth("int8", 8, True)
INT16 = IntWidth("int16", 16, True)
INT32 = IntWidth("int32", 32, True)
INT64 = IntWidth("int64", 64, True)
UINT8 = IntWidth("uint8", 8, False)
UINT16 = IntWidth("uint16", 16, False)
UINT32 = IntWidth("uint32", 32, False)
UINT64 = IntWidth("uint64", 64, False)

STANDARD_WIDTHS: Tuple[IntWidth, ...] = (
    INT8,
    INT16,
    INT32,
    INT64,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
)

# C type names, LP64 sizes.
ALIASES: Dict[str, IntWidth] = {
    "i8": INT8,
    "i16": INT16,
    "i32": INT32,
    "i64": INT64,
    "u8": UINT8,
    "u16": UINT16,
    "u32": UINT32,
    "u64": UINT64,
    "char": INT8,
    "short": INT16,
    "int": INT32,
    "long": INT64,
    "longlong": INT64,
    "uchar": UINT8,
    "ushort": UINT16,
    "uint": UINT32,
    "ulong": UINT64,
    "ulonglong": UINT64,
}


def _normalize_key(value: str) -> str:
    return "".join(char for char in value.lower() if char.isalnum())


def resolve_width(value: object) -> Tuple[IntWidth | None, str | None]:
    if isinstance(value, IntWidth):
        return value, None
    if value is None:
        return None, "Width is required."
    key = _normalize_key(str(value))
    if not key:
        return None, "Width is required."

    for width in STANDARD_WIDTHS:
        if width.name == key:
            return width, None
    width = ALIASES.get(key)
    if width is None:
        return None, f"Unknown integer width: {str(value).strip()}"
    return width, None
