"""Sizing and positioning records for glyphs, lines and fonts."""

from __future__ import annotations

from dataclasses import dataclass, field

from glyphkit.floatops import f32
from glyphkit.geometry import OutlineBounds

__all__ = ["Metrics", "LineMetrics", "FontSettings", "GlyphRasterConfig"]


@dataclass(frozen=True)
class Metrics:
    """Layout information for a glyph at a fixed scale.

    ``xmin``/``ymin`` are whole pixel offsets of the bitmap's left and bottom
    edges; ``width``/``height`` are its size in pixels; the advances and
    ``bounds`` are in subpixels.
    """

    xmin: int = 0
    ymin: int = 0
    width: int = 0
    height: int = 0
    advance_width: float = 0.0
    advance_height: float = 0.0
    bounds: OutlineBounds = field(default_factory=OutlineBounds)


@dataclass(frozen=True)
class LineMetrics:
    """Line positioning values: ascent, descent, gap and the full line advance."""

    ascent: float
    descent: float
    line_gap: float
    new_line_size: float

    @classmethod
    def from_units(cls, ascent: int, descent: int, line_gap: int) -> LineMetrics:
        """Build from font-unit values; the line size is ascent - descent + gap."""
        return cls(
            ascent=f32(float(ascent)),
            descent=f32(float(descent)),
            line_gap=f32(float(line_gap)),
            new_line_size=f32(float(ascent - descent + line_gap)),
        )

    def scale(self, factor: float) -> LineMetrics:
        return LineMetrics(
            ascent=f32(self.ascent * factor),
            descent=f32(self.descent * factor),
            line_gap=f32(self.line_gap * factor),
            new_line_size=f32(self.new_line_size * factor),
        )


@dataclass(frozen=True)
class FontSettings:
    """Options for loading a font.

    ``collection_index`` picks a face in a font collection; ``scale`` is the
    size in pixels per em that outlines are flattened for.
    """

    collection_index: int = 0
    scale: float = 40.0


@dataclass(frozen=True)
class GlyphRasterConfig:
    """A hashable key identifying one rasterized glyph of one font at one size."""

    glyph_index: int
    px: float
    font_hash: int