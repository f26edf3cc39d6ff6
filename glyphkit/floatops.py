"""Single-precision float helpers that reproduce IEEE-754 binary32 behaviour.

Python floats are doubles; the functions here round through binary32 so that
results match the single-precision arithmetic the rasterizer relies on.
"""

from __future__ import annotations

import math
import struct
from collections.abc import Iterable, Sequence

__all__ = [
    "f32",
    "to_bits",
    "from_bits",
    "fabs",
    "is_negative",
    "is_positive",
    "flipsign",
    "copysign",
    "clamp",
    "ceil",
    "floor",
    "trunc",
    "fract",
    "as_i32",
    "sqrt",
    "sub_integer",
    "get_bitmap",
]

_F32 = struct.Struct("<f")
_U32 = struct.Struct("<I")

_SIGN_BIT = 0x8000_0000
_ABS_MASK = 0x7FFF_FFFF
_U32_MASK = 0xFFFF_FFFF
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def f32(value: float) -> float:
    """Round a number to the nearest binary32 value (overflowing to infinity)."""
    try:
        return _F32.unpack(_F32.pack(value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def to_bits(value: float) -> int:
    """Return the raw 32-bit pattern of a number rounded to binary32."""
    return _U32.unpack(_F32.pack(f32(value)))[0]


def from_bits(bits: int) -> float:
    """Interpret the low 32 bits of an integer as a binary32 value."""
    return _F32.unpack(_U32.pack(bits & _U32_MASK))[0]


def fabs(value: float) -> float:
    """Clear the sign bit."""
    return from_bits(to_bits(value) & _ABS_MASK)


def is_negative(value: float) -> bool:
    """True if the sign bit is set, including for -0.0."""
    return to_bits(value) >= _SIGN_BIT


def is_positive(value: float) -> bool:
    """True if the sign bit is clear, including for +0.0."""
    return to_bits(value) < _SIGN_BIT


def flipsign(value: float) -> float:
    """Invert the sign bit."""
    return from_bits(to_bits(value) ^ _SIGN_BIT)


def copysign(value: float, sign: float) -> float:
    """Give ``value`` the sign bit of ``sign``."""
    return from_bits((to_bits(value) & _ABS_MASK) | (to_bits(sign) & _SIGN_BIT))


def clamp(value: float, low: float, high: float) -> float:
    """Limit ``value`` to ``[low, high]``; NaN passes through unchanged."""
    if value < low:
        value = low
    if value > high:
        value = high
    return value


def ceil(x: float) -> float:
    """Round towards positive infinity, keeping binary32 sign-of-zero rules."""
    x = f32(x)
    ui = to_bits(x)
    e = ((ui >> 23) & 0xFF) - 0x7F
    if e >= 23:
        return x
    if e >= 0:
        m = 0x007F_FFFF >> e
        if ui & m == 0:
            return x
        if ui >> 31 == 0:
            ui += m
        ui &= ~m & _U32_MASK
    elif ui >> 31:
        return -0.0
    elif (ui << 1) & _U32_MASK:
        return 1.0
    return from_bits(ui)


def floor(x: float) -> float:
    """Round towards negative infinity, keeping binary32 sign-of-zero rules."""
    x = f32(x)
    ui = to_bits(x)
    e = ((ui >> 23) & 0xFF) - 0x7F
    if e >= 23:
        return x
    if e >= 0:
        m = 0x007F_FFFF >> e
        if ui & m == 0:
            return x
        if ui >> 31:
            ui += m
        ui &= ~m & _U32_MASK
    elif ui >> 31 == 0:
        ui = 0
    elif (ui << 1) & _U32_MASK:
        return -1.0
    return from_bits(ui)


def trunc(x: float) -> float:
    """Round towards zero, keeping the sign of zero."""
    x = f32(x)
    i = to_bits(x)
    e = ((i >> 23) & 0xFF) - 0x7F + 9
    if e >= 23 + 9:
        return x
    if e < 9:
        e = 1
    m = _U32_MASK >> e
    if i & m == 0:
        return x
    return from_bits(i & ~m & _U32_MASK)


def fract(value: float) -> float:
    """The signed fractional part: ``value - trunc(value)``."""
    value = f32(value)
    return f32(value - trunc(value))


def as_i32(value: float) -> int:
    """Convert to a 32-bit integer, truncating and saturating; NaN becomes 0."""
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return _I32_MAX if value > 0 else _I32_MIN
    return max(_I32_MIN, min(_I32_MAX, int(f32(value))))


def sqrt(x: float) -> float:
    """Correctly rounded binary32 square root; negative inputs give NaN."""
    x = f32(x)
    if math.isnan(x):
        return x
    if x == 0.0:
        return x
    if x < 0.0:
        return math.nan
    return f32(math.sqrt(x))


def sub_integer(values: Iterable[float], others: Iterable[int]) -> tuple[float, ...]:
    """Subtract raw integer bit patterns from the bit patterns of ``values``.

    Subtracting 1 steps a float one unit in the last place towards zero.
    """
    return tuple(
        from_bits(to_bits(value) - other) for value, other in zip(values, others, strict=True)
    )


def get_bitmap(accumulation: Sequence[float], length: int) -> bytes:
    """Turn a coverage accumulation buffer into 8-bit coverage values.

    Each output byte is the absolute running sum of the buffer, scaled to
    0..255 and clamped.
    """
    if length > len(accumulation):
        raise ValueError(
            f"bitmap length {length} exceeds accumulation buffer of {len(accumulation)}"
        )
    output = bytearray(length)
    height = 0.0
    for i, delta in enumerate(accumulation[:length]):
        height = f32(height + delta)
        level = clamp(f32(abs(height) * f32(255.9)), 0.0, 255.0)
        output[i] = 0 if math.isnan(level) else int(level)
    return bytes(output)