import math
from types import SimpleNamespace

import pytest

from glyphkit.floatops import from_bits
from glyphkit.geometry import (
    CubeCurve,
    Geometry,
    Glyph,
    Line,
    OutlineBounds,
    Point,
    QuadCurve,
)

F32_MAX = from_bits(0x7F7F_FFFF)


def _all_coords(glyph):
    return [line.coords for line in glyph.v_lines + glyph.m_lines]


def test_point_midpoint_is_equidistant():
    a = Point(1.0, 2.0)
    b = Point(5.0, -4.0)
    m = a.midpoint(b)
    assert m.distance_squared(a) == m.distance_squared(b)
    assert a.midpoint(a) == a


def test_point_distance():
    assert Point(0.0, 0.0).distance(Point(3.0, 4.0)) == 5.0
    a, b = Point(1.5, -2.0), Point(-7.0, 3.25)
    assert a.distance(b) ** 2 == pytest.approx(a.distance_squared(b), rel=1e-6)


def test_point_scale_round_trip():
    p = Point(1.5, -2.25)
    assert p.scale(2.0).scale(0.5) == p
    assert p.scale(0.0) == Point(0.0, 0.0)


def test_quad_endpoints_and_split():
    q = QuadCurve(Point(0.0, 0.0), Point(5.0, 10.0), Point(10.0, 0.0))
    assert q.point(0.0) == q.a
    assert q.point(1.0) == q.c
    left, right = q.split()
    assert left.a == q.a
    assert right.c == q.c
    assert left.c == right.a == q.point(0.5)


def test_quad_flatness():
    straight = QuadCurve(Point(0.0, 0.0), Point(5.0, 0.0), Point(10.0, 0.0))
    curved = QuadCurve(Point(0.0, 0.0), Point(5.0, 10.0), Point(10.0, 0.0))
    assert straight.is_flat(1.0001)
    assert not curved.is_flat(1.5)


def test_quad_slope_and_angle():
    horizontal = QuadCurve(Point(0.0, 0.0), Point(5.0, 0.0), Point(10.0, 0.0))
    x, y = horizontal.slope(0.3)
    assert y == 0.0
    assert x > 0.0
    assert horizontal.angle(0.3) == pytest.approx(0.0, abs=1e-3)
    vertical = QuadCurve(Point(0.0, 0.0), Point(0.0, 5.0), Point(0.0, 10.0))
    assert vertical.angle(0.7) == pytest.approx(math.pi / 2, rel=1e-6)


def test_quad_scale_round_trip():
    q = QuadCurve(Point(1.0, 2.0), Point(3.0, 4.0), Point(5.0, 6.0))
    assert q.scale(4.0).scale(0.25) == q


def test_cube_endpoints_and_split():
    c = CubeCurve(Point(0.0, 0.0), Point(0.0, 8.0), Point(8.0, 8.0), Point(8.0, 0.0))
    assert c.point(0.0) == c.a
    assert c.point(1.0) == c.d
    left, right = c.split()
    assert left.a == c.a
    assert right.d == c.d
    assert left.d == right.a == c.point(0.5)


def test_cube_flatness_and_angle():
    straight = CubeCurve(Point(0.0, 0.0), Point(0.0, 3.0), Point(0.0, 6.0), Point(0.0, 9.0))
    curved = CubeCurve(Point(0.0, 0.0), Point(0.0, 8.0), Point(8.0, 8.0), Point(8.0, 0.0))
    assert straight.is_flat(1.0001)
    assert not curved.is_flat(1.5)
    assert straight.angle(0.5) == pytest.approx(math.pi / 2, rel=1e-6)
    assert curved.scale(2.0).scale(0.5) == curved


def test_line_between_increasing():
    line = Line.between(Point(0.0, 0.0), Point(2.0, 4.0))
    assert line.coords == (0.0, 0.0, 2.0, 4.0)
    assert line.nudge == (0, 0, 1, 1)
    assert line.adjustment == (1.0, 1.0, 0.0, 0.0)
    tdx, tdy, dx, dy = line.params
    assert (dx, dy) == (2.0, 4.0)
    assert tdx * dx == 1.0
    assert tdy * dy == 1.0


def test_line_between_decreasing():
    line = Line.between(Point(2.0, 4.0), Point(0.0, 0.0))
    assert line.nudge == (1, 1, 0, 0)
    assert line.adjustment == (0.0, 0.0, 0.0, 0.0)
    assert line.params[2:] == (-2.0, -4.0)


def test_line_between_vertical_uses_max_inverse():
    line = Line.between(Point(3.0, 0.0), Point(3.0, 5.0))
    assert line.params[0] == F32_MAX
    assert line.nudge == (0, 0, 0, 1)


def test_line_reposition():
    bounds = SimpleNamespace(xmin=1.0, ymax=10.0)
    line = Line.between(Point(1.0, 10.0), Point(3.0, 4.0))
    assert line.reposition(bounds, False).coords == (0.0, 0.0, 2.0, 6.0)
    assert line.reposition(bounds, True).coords == (2.0, 6.0, 0.0, 0.0)


def test_outline_bounds_scale():
    b = OutlineBounds(1.0, -2.0, 3.0, 4.0)
    assert b.scale(2.0).scale(0.5) == b
    assert OutlineBounds().scale(5.0) == OutlineBounds()


def test_glyph_defaults_empty():
    g = Glyph()
    assert g.v_lines == ()
    assert g.m_lines == ()
    assert g.bounds == OutlineBounds()


def _square(geometry, clockwise):
    geometry.move_to(0.0, 0.0)
    corners = [(0.0, 10.0), (10.0, 10.0), (10.0, 0.0)] if clockwise else [
        (10.0, 0.0),
        (10.0, 10.0),
        (0.0, 10.0),
    ]
    for x, y in corners:
        geometry.line_to(x, y)
    geometry.close()


def test_square_outline():
    geometry = Geometry(40.0, 1000.0)
    _square(geometry, clockwise=False)
    glyph = geometry.finalize(12.0, 7.0)
    assert len(glyph.v_lines) == 2
    assert glyph.m_lines == ()
    assert glyph.bounds == OutlineBounds(0.0, 0.0, 10.0, 10.0)
    assert (glyph.advance_width, glyph.advance_height) == (12.0, 7.0)


def test_orientation_does_not_change_segments():
    ccw = Geometry(40.0, 1000.0)
    _square(ccw, clockwise=False)
    cw = Geometry(40.0, 1000.0)
    _square(cw, clockwise=True)
    assert sorted(_all_coords(ccw.finalize(0.0, 0.0))) == sorted(
        _all_coords(cw.finalize(0.0, 0.0))
    )


def test_close_without_movement_adds_nothing():
    geometry = Geometry(40.0, 1000.0)
    geometry.move_to(0.0, 0.0)
    geometry.line_to(5.0, 5.0)
    geometry.line_to(0.0, 0.0)
    geometry.close()
    glyph = geometry.finalize(0.0, 0.0)
    assert len(glyph.m_lines) == 2
    assert glyph.v_lines == ()


def test_empty_geometry_has_zero_bounds():
    glyph = Geometry(40.0, 1000.0).finalize(3.0, 0.0)
    assert glyph.bounds == OutlineBounds()
    assert glyph.v_lines == () and glyph.m_lines == ()
    assert glyph.advance_width == 3.0


def _curved(scale):
    geometry = Geometry(scale, 1000.0)
    geometry.move_to(0.0, 0.0)
    geometry.quad_to(500.0, 1000.0, 1000.0, 0.0)
    geometry.curve_to(1000.0, -800.0, 0.0, -800.0, 0.0, 0.0)
    geometry.close()
    return geometry.finalize(0.0, 0.0)


def test_curves_stay_inside_bounds():
    glyph = _curved(40.0)
    assert glyph.m_lines
    for x0, y0, x1, y1 in _all_coords(glyph):
        for x in (x0, x1):
            assert 0.0 <= x <= glyph.bounds.width
        for y in (y0, y1):
            assert 0.0 <= y <= glyph.bounds.height


def test_larger_scale_flattens_more_finely():
    coarse = _curved(1.0)
    fine = _curved(100.0)
    assert len(fine.m_lines) + len(fine.v_lines) > len(coarse.m_lines) + len(coarse.v_lines)