"""Lenient string-to-number parsing and value-to-string conversion."""

from __future__ import annotations

import math
import re
import struct
from decimal import Decimal
from typing import Any

_UINT_RE = re.compile(r"[0-9]+")
_INT_RE = re.compile(r"[+-]?[0-9]+")
_DEC_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_FLOAT_RE = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_SPECIAL_FLOAT_RE = re.compile(r"[+-]?inf(?:inity)?|nan", re.IGNORECASE)

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def _parse_uint(s: str, bits: int) -> int:
    if not _UINT_RE.fullmatch(s):
        return 0
    value = int(s)
    return value if value < 1 << bits else 0


def _parse_int(s: str, bits: int) -> int:
    if not _INT_RE.fullmatch(s):
        return 0
    value = int(s)
    limit = 1 << (bits - 1)
    return value if -limit <= value < limit else 0


def _parse_float(s: str, bits: int) -> float:
    if _SPECIAL_FLOAT_RE.fullmatch(s):
        value = float(s)
    elif _DEC_FLOAT_RE.fullmatch(s):
        value = float(s)
        if math.isinf(value):
            return 0.0
    elif _HEX_FLOAT_RE.fullmatch(s):
        try:
            value = float.fromhex(s)
        except OverflowError:
            return 0.0
    else:
        return 0.0
    if bits == 32 and math.isfinite(value):
        try:
            (value,) = struct.unpack("<f", struct.pack("<f", value))
        except OverflowError:
            return 0.0
    return value


def parse_uint32(s: str) -> int:
    """Parse a decimal unsigned 32-bit integer, or 0 if invalid."""
    return _parse_uint(s, 32)


def parse_int32(s: str) -> int:
    """Parse a decimal signed 32-bit integer, or 0 if invalid."""
    return _parse_int(s, 32)


def parse_uint64(s: str) -> int:
    """Parse a decimal unsigned 64-bit integer, or 0 if invalid."""
    return _parse_uint(s, 64)


def parse_int64(s: str) -> int:
    """Parse a decimal signed 64-bit integer, or 0 if invalid."""
    return _parse_int(s, 64)


def parse_float32(s: str) -> float:
    """Parse a float rounded to single precision, or 0.0 if invalid."""
    return _parse_float(s, 32)


def parse_float64(s: str) -> float:
    """Parse a double precision float, or 0.0 if invalid."""
    return _parse_float(s, 64)


def parse_bool(s: str) -> bool:
    """Parse the usual boolean spellings; anything else is False."""
    if s in _TRUE_WORDS:
        return True
    return False


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return format(Decimal(repr(value)).normalize(), "f")


def to_string(value: Any) -> str:
    """Render numbers, booleans and strings as text; other values give ''."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, str):
        return value
    return ""


def make_key(*args: Any) -> str:
    """Join the text form of every argument with commas."""
    return ",".join(to_string(arg) for arg in args)


def make_uint32_key(value: Any) -> int:
    """Truncate an integer to an unsigned 32-bit value; other types give 0."""
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return value & 0xFFFFFFFF