"""Coverage rasterizer for flattened glyph outlines."""

from __future__ import annotations

from glyphkit.floatops import (
    as_i32,
    copysign,
    f32,
    fabs,
    fract,
    get_bitmap,
    sub_integer,
    trunc,
)
from glyphkit.geometry import Glyph, Line

__all__ = ["Raster"]

_Quad = tuple[float, float, float, float]


def _truncated(values: _Quad, nudge: tuple[int, int, int, int]) -> _Quad:
    a, b, c, d = (trunc(v) for v in sub_integer(values, nudge))
    return a, b, c, d


class Raster:
    """Accumulates signed area for each pixel and resolves it into 8-bit coverage."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._a = [0.0] * (width * height + 3)

    def draw(
        self,
        glyph: Glyph,
        scale_x: float,
        scale_y: float,
        offset_x: float,
        offset_y: float,
    ) -> None:
        """Add the outline of ``glyph`` scaled and shifted into this raster."""
        scale_x = f32(scale_x)
        scale_y = f32(scale_y)
        scales = (scale_x, scale_y, scale_x, scale_y)
        offsets = (f32(offset_x), f32(offset_y), f32(offset_x), f32(offset_y))
        param_scales = (f32(1.0 / scale_x), f32(1.0 / scale_y), scale_x, scale_y)
        for line in glyph.v_lines:
            self._v_line(line, self._place(line.coords, scales, offsets))
        for line in glyph.m_lines:
            params = tuple(f32(p * q) for p, q in zip(line.params, param_scales))
            self._m_line(line, self._place(line.coords, scales, offsets), params)

    @staticmethod
    def _place(coords: _Quad, scales: _Quad, offsets: _Quad) -> _Quad:
        a, b, c, d = (f32(f32(v * s) + o) for v, s, o in zip(coords, scales, offsets))
        return a, b, c, d

    def _index(self, x: float, y: float) -> int:
        return as_i32(f32(x + f32(y * self.width)))

    def _add(self, index: int, height: float, mid_x: float) -> None:
        if index < 0:
            raise IndexError(f"raster index {index} is out of range")
        m = f32(height * mid_x)
        self._a[index] = f32(self._a[index] + f32(height - m))
        self._a[index + 1] = f32(self._a[index + 1] + m)

    def _v_line(self, line: Line, coords: _Quad) -> None:
        x0, y0, _, y1 = coords
        start_x, start_y, end_x, end_y = _truncated(coords, line.nudge)
        target_y = f32(start_y + line.adjustment[1])
        sy = copysign(1.0, f32(y1 - y0))
        y_prev = y0
        index = self._index(start_x, start_y)
        index_y_inc = as_i32(copysign(float(self.width), sy))
        dist = as_i32(fabs(f32(start_y - end_y)))
        mid_x = fract(x0)
        for _ in range(dist):
            self._add(index, f32(y_prev - target_y), mid_x)
            index += index_y_inc
            y_prev = target_y
            target_y = f32(target_y + sy)
        self._add(self._index(end_x, end_y), f32(y_prev - y1), mid_x)

    def _m_line(self, line: Line, coords: _Quad, params: tuple[float, ...]) -> None:
        x0, y0, x1, y1 = coords
        start_x, start_y, end_x, end_y = _truncated(coords, line.nudge)
        tdx, tdy, dx, dy = params
        target_x = f32(start_x + line.adjustment[0])
        target_y = f32(start_y + line.adjustment[1])
        sx = copysign(1.0, tdx)
        sy = copysign(1.0, tdy)
        tmx = f32(tdx * f32(target_x - x0))
        tmy = f32(tdy * f32(target_y - y0))
        tdx = fabs(tdx)
        tdy = fabs(tdy)
        x_prev = x0
        y_prev = y0
        index = self._index(start_x, start_y)
        index_x_inc = as_i32(sx)
        index_y_inc = as_i32(copysign(float(self.width), sy))
        dist = as_i32(f32(fabs(f32(start_x - end_x)) + fabs(f32(start_y - end_y))))
        for _ in range(dist):
            prev_index = index
            if tmx < tmy:
                y_next = f32(f32(tmx * dy) + y0)
                x_next = target_x
                tmx = f32(tmx + tdx)
                target_x = f32(target_x + sx)
                index += index_x_inc
            else:
                y_next = target_y
                x_next = f32(f32(tmy * dx) + x0)
                tmy = f32(tmy + tdy)
                target_y = f32(target_y + sy)
                index += index_y_inc
            self._add(prev_index, f32(y_prev - y_next), fract(f32(x_prev + x_next) / 2.0))
            x_prev = x_next
            y_prev = y_next
        self._add(
            self._index(end_x, end_y),
            f32(y_prev - y1),
            fract(f32(x_prev + x1) / 2.0),
        )

    def get_bitmap(self) -> bytes:
        """Coverage bytes, row by row from the top left, 0 (empty) to 255 (full)."""
        return get_bitmap(self._a, self.width * self.height)