"""Glyph outline geometry: curves, flattened line segments and outline bounds.

An outline is fed through :class:`Geometry` as move/line/curve/close commands.
Curves are flattened into straight segments, and :meth:`Geometry.finalize`
moves the segments into a bitmap-relative frame with the y axis pointing down.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Protocol

from glyphkit.floatops import f32, fabs, from_bits, sqrt, to_bits
from glyphkit.trig import atan2

__all__ = [
    "Point",
    "QuadCurve",
    "CubeCurve",
    "Line",
    "OutlineBounds",
    "Glyph",
    "Geometry",
]

_F32_MAX = from_bits(0x7F7F_FFFF)
_ERROR_THRESHOLD = 3.0  # in pixels

_FLOOR_NUDGE = 0
_CEIL_NUDGE = 1


def _weighted_sum(weights: tuple[float, ...], values: tuple[float, ...]) -> float:
    total = 0.0
    for index, (weight, value) in enumerate(zip(weights, values)):
        product = f32(weight * value)
        total = product if index == 0 else f32(total + product)
    return total


@dataclass(frozen=True)
class Point:
    """An absolute position in outline space."""

    x: float = 0.0
    y: float = 0.0

    def scale(self, factor: float) -> Point:
        return Point(f32(self.x * factor), f32(self.y * factor))

    def distance_squared(self, other: Point) -> float:
        dx = f32(self.x - other.x)
        dy = f32(self.y - other.y)
        return f32(f32(dx * dx) + f32(dy * dy))

    def distance(self, other: Point) -> float:
        return sqrt(self.distance_squared(other))

    def midpoint(self, other: Point) -> Point:
        return Point(f32(f32(self.x + other.x) / 2.0), f32(f32(self.y + other.y) / 2.0))


@dataclass(frozen=True)
class QuadCurve:
    """A quadratic Bézier curve from ``a`` through control ``b`` to ``c``."""

    a: Point
    b: Point
    c: Point

    def scale(self, factor: float) -> QuadCurve:
        return QuadCurve(self.a.scale(factor), self.b.scale(factor), self.c.scale(factor))

    def is_flat(self, threshold: float) -> bool:
        d1 = sqrt(self.a.distance_squared(self.b))
        d2 = sqrt(self.b.distance_squared(self.c))
        d3 = sqrt(self.a.distance_squared(self.c))
        return f32(d1 + d2) < f32(threshold * d3)

    def split(self) -> tuple[QuadCurve, QuadCurve]:
        q0 = self.a.midpoint(self.b)
        q1 = self.b.midpoint(self.c)
        r0 = q0.midpoint(q1)
        return QuadCurve(self.a, q0, r0), QuadCurve(r0, q1, self.c)

    def point(self, t: float) -> Point:
        """The point on the curve at time ``t``."""
        tm = f32(1.0 - t)
        weights = (f32(tm * tm), f32(f32(2.0 * tm) * t), f32(t * t))
        return Point(
            _weighted_sum(weights, (self.a.x, self.b.x, self.c.x)),
            _weighted_sum(weights, (self.a.y, self.b.y, self.c.y)),
        )

    def slope(self, t: float) -> tuple[float, float]:
        """The direction of the tangent at time ``t``."""
        tm = f32(1.0 - t)
        weights = (f32(2.0 * tm), f32(2.0 * t))
        x = _weighted_sum(weights, (f32(self.b.x - self.a.x), f32(self.c.x - self.b.x)))
        y = _weighted_sum(weights, (f32(self.b.y - self.a.y), f32(self.c.y - self.b.y)))
        return x, y

    def angle(self, t: float) -> float:
        """The absolute angle of the tangent at time ``t``, in radians."""
        x, y = self.slope(t)
        return fabs(atan2(x, y))


@dataclass(frozen=True)
class CubeCurve:
    """A cubic Bézier curve from ``a`` through controls ``b`` and ``c`` to ``d``."""

    a: Point
    b: Point
    c: Point
    d: Point

    def scale(self, factor: float) -> CubeCurve:
        return CubeCurve(
            self.a.scale(factor), self.b.scale(factor), self.c.scale(factor), self.d.scale(factor)
        )

    def is_flat(self, threshold: float) -> bool:
        d1 = sqrt(self.a.distance_squared(self.b))
        d2 = sqrt(self.b.distance_squared(self.c))
        d3 = sqrt(self.c.distance_squared(self.d))
        d4 = sqrt(self.a.distance_squared(self.d))
        return f32(f32(d1 + d2) + d3) < f32(threshold * d4)

    def split(self) -> tuple[CubeCurve, CubeCurve]:
        q0 = self.a.midpoint(self.b)
        q1 = self.b.midpoint(self.c)
        q2 = self.c.midpoint(self.d)
        r0 = q0.midpoint(q1)
        r1 = q1.midpoint(q2)
        s0 = r0.midpoint(r1)
        return CubeCurve(self.a, q0, r0, s0), CubeCurve(s0, r1, q2, self.d)

    def point(self, t: float) -> Point:
        """The point on the curve at time ``t``."""
        tm = f32(1.0 - t)
        tm2 = f32(tm * tm)
        t2 = f32(t * t)
        weights = (
            f32(tm2 * tm),
            f32(f32(3.0 * tm2) * t),
            f32(f32(3.0 * tm) * t2),
            f32(t2 * t),
        )
        return Point(
            _weighted_sum(weights, (self.a.x, self.b.x, self.c.x, self.d.x)),
            _weighted_sum(weights, (self.a.y, self.b.y, self.c.y, self.d.y)),
        )

    def slope(self, t: float) -> tuple[float, float]:
        """The direction of the tangent at time ``t``."""
        tm = f32(1.0 - t)
        weights = (f32(3.0 * f32(tm * tm)), f32(f32(6.0 * tm) * t), f32(3.0 * f32(t * t)))
        x = _weighted_sum(
            weights,
            (f32(self.b.x - self.a.x), f32(self.c.x - self.b.x), f32(self.d.x - self.c.x)),
        )
        y = _weighted_sum(
            weights,
            (f32(self.b.y - self.a.y), f32(self.c.y - self.b.y), f32(self.d.y - self.c.y)),
        )
        return x, y

    def angle(self, t: float) -> float:
        """The absolute angle of the tangent at time ``t``, in radians."""
        x, y = self.slope(t)
        return fabs(atan2(x, y))


class _HasOrigin(Protocol):
    xmin: float
    ymax: float


@dataclass(frozen=True)
class Line:
    """A straight outline segment with the values the rasterizer walks it with.

    ``coords`` is (x0, y0, x1, y1); ``nudge`` holds the integer steps applied to
    the raw bits of each coordinate before truncation; ``adjustment`` is
    (x_first_adj, y_first_adj, 0, 0); ``params`` is (tdx, tdy, dx, dy).
    """

    coords: tuple[float, float, float, float]
    nudge: tuple[int, int, int, int]
    adjustment: tuple[float, float, float, float]
    params: tuple[float, float, float, float]

    @classmethod
    def between(cls, start: Point, end: Point) -> Line:
        if end.x >= start.x:
            x_start_nudge, x_first_adj = _FLOOR_NUDGE, 1.0
        else:
            x_start_nudge, x_first_adj = _CEIL_NUDGE, 0.0
        if end.y >= start.y:
            y_start_nudge, y_first_adj = _FLOOR_NUDGE, 1.0
        else:
            y_start_nudge, y_first_adj = _CEIL_NUDGE, 0.0
        x_end_nudge = _CEIL_NUDGE if end.x > start.x else _FLOOR_NUDGE
        y_end_nudge = _CEIL_NUDGE if end.y > start.y else _FLOOR_NUDGE

        dx = f32(end.x - start.x)
        dy = f32(end.y - start.y)
        tdx = _F32_MAX if dx == 0.0 else f32(1.0 / dx)
        tdy = math.copysign(math.inf, dy) if dy == 0.0 else f32(1.0 / dy)

        return cls(
            coords=(start.x, start.y, end.x, end.y),
            nudge=(x_start_nudge, y_start_nudge, x_end_nudge, y_end_nudge),
            adjustment=(x_first_adj, y_first_adj, 0.0, 0.0),
            params=(tdx, tdy, dx, dy),
        )

    def reposition(self, bounds: _HasOrigin, reverse: bool) -> Line:
        """Return the line moved so ``(bounds.xmin, bounds.ymax)`` is the origin, y down.

        With ``reverse`` the start and end points swap.
        """
        x0, y0, x1, y1 = self.coords
        if reverse:
            x0, y0, x1, y1 = x1, y1, x0, y0
        start = Point(f32(x0 - bounds.xmin), fabs(f32(y0 - bounds.ymax)))
        end = Point(f32(x1 - bounds.xmin), fabs(f32(y1 - bounds.ymax)))
        return Line.between(start, end)


@dataclass(frozen=True)
class OutlineBounds:
    """The box holding a glyph's outline, in subpixels."""

    xmin: float = 0.0
    ymin: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def scale(self, factor: float) -> OutlineBounds:
        return OutlineBounds(
            xmin=f32(self.xmin * factor),
            ymin=f32(self.ymin * factor),
            width=f32(self.width * factor),
            height=f32(self.height * factor),
        )


@dataclass(frozen=True)
class Glyph:
    """A flattened glyph outline with its advances, in font units."""

    v_lines: tuple[Line, ...] = ()
    m_lines: tuple[Line, ...] = ()
    advance_width: float = 0.0
    advance_height: float = 0.0
    bounds: OutlineBounds = field(default_factory=OutlineBounds)


@dataclass
class _AABB:
    xmin: float = 0.0
    xmax: float = 0.0
    ymin: float = 0.0
    ymax: float = 0.0

    def include(self, x: float, y: float) -> None:
        if x < self.xmin:
            self.xmin = x
        if x > self.xmax:
            self.xmax = x
        if y < self.ymin:
            self.ymin = y
        if y > self.ymax:
            self.ymax = y


class Geometry:
    """Collects outline commands into flattened line segments."""

    def __init__(self, scale: float, units_per_em: float) -> None:
        self._v_lines: list[Line] = []
        self._m_lines: list[Line] = []
        self._bounds = _AABB(xmin=_F32_MAX, xmax=-_F32_MAX, ymin=_F32_MAX, ymax=-_F32_MAX)
        self._start = Point()
        self._previous = Point()
        self._area = 0.0
        self._max_area = f32(f32(_ERROR_THRESHOLD * 2.0) * f32(units_per_em / scale))

    def move_to(self, x0: float, y0: float) -> None:
        point = Point(f32(x0), f32(y0))
        self._start = point
        self._previous = point

    def line_to(self, x0: float, y0: float) -> None:
        point = Point(f32(x0), f32(y0))
        self._push(self._previous, point)
        self._previous = point

    def quad_to(self, x0: float, y0: float, x1: float, y1: float) -> None:
        end = Point(f32(x1), f32(y1))
        self._flatten(QuadCurve(self._previous, Point(f32(x0), f32(y0)), end), end)

    def curve_to(
        self, x0: float, y0: float, x1: float, y1: float, x2: float, y2: float
    ) -> None:
        end = Point(f32(x2), f32(y2))
        curve = CubeCurve(self._previous, Point(f32(x0), f32(y0)), Point(f32(x1), f32(y1)), end)
        self._flatten(curve, end)

    def close(self) -> None:
        if self._start != self._previous:
            self._push(self._previous, self._start)
        self._previous = self._start

    def _flatten(self, curve: QuadCurve | CubeCurve, end: Point) -> None:
        stack = [(self._previous, 0.0, end, 1.0)]
        while stack:
            a, at, c, ct = stack.pop()
            bt = f32(f32(at + ct) * 0.5)
            b = curve.point(bt)
            # Twice the area of the triangle a, b, c.
            area = f32(
                f32(f32(b.x - a.x) * f32(c.y - a.y)) - f32(f32(c.x - a.x) * f32(b.y - a.y))
            )
            if fabs(area) > self._max_area:
                stack.append((a, at, b, bt))
                stack.append((b, bt, c, ct))
            else:
                self._push(a, c)
        self._previous = end

    def _push(self, start: Point, end: Point) -> None:
        # Exact bit comparison: only perfectly horizontal segments are dropped.
        if to_bits(start.y) == to_bits(end.y):
            return
        self._area = f32(self._area + f32(f32(end.y - start.y) * f32(end.x + start.x)))
        line = Line.between(start, end)
        if to_bits(start.x) == to_bits(end.x):
            self._v_lines.append(line)
        else:
            self._m_lines.append(line)
        self._bounds.include(start.x, start.y)
        self._bounds.include(end.x, end.y)

    def finalize(self, advance_width: float, advance_height: float) -> Glyph:
        """Build the glyph from the collected segments."""
        if not self._v_lines and not self._m_lines:
            bounds = _AABB()
            v_lines: tuple[Line, ...] = ()
            m_lines: tuple[Line, ...] = ()
        else:
            bounds = replace(self._bounds)
            reverse = self._area > 0.0
            v_lines = tuple(line.reposition(bounds, reverse) for line in self._v_lines)
            m_lines = tuple(line.reposition(bounds, reverse) for line in self._m_lines)
        return Glyph(
            v_lines=v_lines,
            m_lines=m_lines,
            advance_width=advance_width,
            advance_height=advance_height,
            bounds=OutlineBounds(
                xmin=bounds.xmin,
                ymin=bounds.ymin,
                width=f32(bounds.xmax - bounds.xmin),
                height=f32(bounds.ymax - bounds.ymin),
            ),
        )