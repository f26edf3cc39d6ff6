"""Arctangent functions evaluated in binary32 arithmetic."""

from __future__ import annotations

import math

from glyphkit.floatops import copysign, f32, fabs, from_bits, to_bits

__all__ = ["atan", "atan2f", "atan2"]

_ABS_MASK = 0x7FFF_FFFF
_INF_BITS = 0x7F80_0000

_ATAN_HI = tuple(
    f32(v) for v in (4.6364760399e-01, 7.8539812565e-01, 9.8279368877e-01, 1.5707962513e00)
)
_ATAN_LO = tuple(
    f32(v) for v in (5.0121582440e-09, 3.7748947079e-08, 3.4473217170e-08, 7.5497894159e-08)
)
_A_T = tuple(
    f32(v)
    for v in (
        3.3333328366e-01,
        -1.9999158382e-01,
        1.4253635705e-01,
        -1.0648017377e-01,
        6.1687607318e-02,
    )
)
_X1P_120 = from_bits(0x0380_0000)

_PI = f32(3.1415927410e00)
_PI_LO = f32(-8.7422776573e-08)
_HALF_PI = f32(_PI / 2.0)
_QUARTER_PI = f32(_PI / 4.0)
_THREE_QUARTER_PI = f32(f32(3.0 * _PI) / 4.0)

_FAST_PI = f32(math.pi)
_FAST_PI_2 = f32(_FAST_PI / 2.0)
_FAST_PI_4 = f32(_FAST_PI / 4.0)
_FAST_PI_3_4 = f32(_FAST_PI_4 * 3.0)
_FAST_CUBIC = f32(0.1963)
_FAST_LINEAR = f32(0.9817)


def atan(x: float) -> float:
    """The arctangent of ``x`` in radians, computed in binary32."""
    x = f32(x)
    ix = to_bits(x)
    negative = (ix >> 31) != 0
    ix &= _ABS_MASK

    if ix >= 0x4C80_0000:
        # |x| >= 2**26, infinity or NaN
        if math.isnan(x):
            return x
        z = f32(_ATAN_HI[3] + _X1P_120)
        return -z if negative else z

    if ix < 0x3EE0_0000:
        # |x| < 0.4375
        if ix < 0x3980_0000:
            return x
        region = -1
    else:
        x = fabs(x)
        if ix < 0x3F98_0000:
            if ix < 0x3F30_0000:
                # 7/16 <= |x| < 11/16
                x = f32(f32(f32(2.0 * x) - 1.0) / f32(2.0 + x))
                region = 0
            else:
                # 11/16 <= |x| < 19/16
                x = f32(f32(x - 1.0) / f32(x + 1.0))
                region = 1
        elif ix < 0x401C_0000:
            # |x| < 2.4375
            x = f32(f32(x - 1.5) / f32(1.0 + f32(1.5 * x)))
            region = 2
        else:
            # 2.4375 <= |x| < 2**26
            x = f32(-1.0 / x)
            region = 3

    z = f32(x * x)
    w = f32(z * z)
    s1 = f32(z * f32(_A_T[0] + f32(w * f32(_A_T[2] + f32(w * _A_T[4])))))
    s2 = f32(w * f32(_A_T[1] + f32(w * _A_T[3])))
    s = f32(s1 + s2)
    if region < 0:
        return f32(x - f32(x * s))
    z = f32(_ATAN_HI[region] - f32(f32(f32(x * s) - _ATAN_LO[region]) - x))
    return -z if negative else z


def atan2f(y: float, x: float) -> float:
    """The angle of the point ``(x, y)`` in radians, computed in binary32."""
    y = f32(y)
    x = f32(x)
    if math.isnan(x) or math.isnan(y):
        return f32(x + y)
    ix = to_bits(x)
    iy = to_bits(y)
    if ix == 0x3F80_0000:
        return atan(y)
    # 2 * sign(x) + sign(y)
    m = ((iy >> 31) & 1) | ((ix >> 30) & 2)
    ix &= _ABS_MASK
    iy &= _ABS_MASK

    if iy == 0:
        if m in (0, 1):
            return y
        return _PI if m == 2 else -_PI
    if ix == 0:
        return -_HALF_PI if m & 1 else _HALF_PI
    if ix == _INF_BITS:
        if iy == _INF_BITS:
            return (_QUARTER_PI, -_QUARTER_PI, _THREE_QUARTER_PI, -_THREE_QUARTER_PI)[m]
        return (0.0, -0.0, _PI, -_PI)[m]
    if ix + (26 << 23) < iy or iy == _INF_BITS:
        return -_HALF_PI if m & 1 else _HALF_PI

    if m & 2 and iy + (26 << 23) < ix:
        z = 0.0
    else:
        z = atan(fabs(f32(y / x)))

    if m == 0:
        return z
    if m == 1:
        return -z
    if m == 2:
        return f32(_PI - f32(z - _PI_LO))
    return f32(f32(z - _PI_LO) - _PI)


def atan2(x: float, y: float) -> float:
    """A fast polynomial approximation of the angle of the point ``(x, y)``.

    The sign of the result follows ``y``.
    """
    x = f32(x)
    y = f32(y)
    abs_y = fabs(y)
    if x == 0.0:
        if y > 0.0:
            return _FAST_PI_2
        if y == 0.0:
            return 0.0
        return -_FAST_PI_2
    if x > 0.0:
        r = f32(f32(x - abs_y) / f32(x + abs_y))
        c = _FAST_PI_4
    else:
        r = f32(f32(x + abs_y) / f32(abs_y - x))
        c = _FAST_PI_3_4
    cubic = f32(f32(f32(_FAST_CUBIC * r) * r) * r)
    r = f32(f32(cubic - f32(_FAST_LINEAR * r)) + c)
    return copysign(r, y)