"""An immutable font built from flattened glyph outlines, with metrics and rasterization."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from glyphkit.floatops import as_i32, ceil, f32, floor, fract, is_negative
from glyphkit.geometry import Glyph
from glyphkit.metrics import FontSettings, GlyphRasterConfig, LineMetrics, Metrics
from glyphkit.raster import Raster

__all__ = ["Font"]


class Font:
    """A font: glyph outlines, the character map, line metrics and kerning pairs.

    ``char_to_glyph`` maps code points to glyph indices; glyph index 0 is the
    font's default glyph, used for characters the font does not map.
    ``horizontal_kern`` maps ``left_glyph << 16 | right_glyph`` to a kerning
    value in font units.
    """

    def __init__(
        self,
        glyphs: Iterable[Glyph],
        char_to_glyph: Mapping[int, int],
        units_per_em: float,
        horizontal_line_metrics: LineMetrics | None,
        vertical_line_metrics: LineMetrics | None,
        horizontal_kern: Mapping[int, int] | None = None,
        settings: FontSettings | None = None,
        name: str | None = None,
        file_hash: int = 0,
    ) -> None:
        self._glyphs = tuple(glyphs)
        self._char_to_glyph = dict(char_to_glyph)
        for index in self._char_to_glyph.values():
            if not 0 <= index < len(self._glyphs):
                raise ValueError("Attempted to map a codepoint out of bounds.")
        self._units_per_em = f32(units_per_em)
        self._horizontal_line_metrics = horizontal_line_metrics
        self._vertical_line_metrics = vertical_line_metrics
        self._horizontal_kern = None if horizontal_kern is None else dict(horizontal_kern)
        self._settings = settings if settings is not None else FontSettings()
        self._name = name
        self._file_hash = file_hash

    def __hash__(self) -> int:
        return hash(self._file_hash)

    def __repr__(self) -> str:
        return (
            f"Font(name={self._name!r}, settings={self._settings!r}, "
            f"units_per_em={self._units_per_em!r})"
        )

    def name(self) -> str | None:
        """The font's full name, if it has one."""
        return self._name

    def file_hash(self) -> int:
        """A precomputed hash of the font file."""
        return self._file_hash

    def units_per_em(self) -> float:
        return self._units_per_em

    @property
    def settings(self) -> FontSettings:
        return self._settings

    def horizontal_line_metrics(self, px: float) -> LineMetrics | None:
        """Line metrics for horizontal text scaled to ``px`` pixels per em, if present."""
        if self._horizontal_line_metrics is None:
            return None
        return self._horizontal_line_metrics.scale(self.scale_factor(px))

    def vertical_line_metrics(self, px: float) -> LineMetrics | None:
        """Line metrics for vertical text scaled to ``px`` pixels per em, if present."""
        if self._vertical_line_metrics is None:
            return None
        return self._vertical_line_metrics.scale(self.scale_factor(px))

    def scale_factor(self, px: float) -> float:
        """The outline scale factor for a size in pixels per em."""
        return f32(f32(px) / self._units_per_em)

    def horizontal_kern(self, left: str, right: str, px: float) -> float | None:
        """The scaled kerning between two characters, or None if the font has none."""
        return self.horizontal_kern_indexed(
            self.lookup_glyph_index(left), self.lookup_glyph_index(right), px
        )

    def horizontal_kern_indexed(self, left: int, right: int, px: float) -> float | None:
        """The scaled kerning between two glyph indices, or None if the font has none."""
        scale = self.scale_factor(px)
        if self._horizontal_kern is None:
            return None
        value = self._horizontal_kern.get((left << 16) | right)
        if value is None:
            return None
        return f32(f32(float(value)) * scale)

    def metrics(self, character: str, px: float) -> Metrics:
        """Layout metrics for a character; unmapped characters use the default glyph."""
        return self.metrics_indexed(self.lookup_glyph_index(character), px)

    def metrics_indexed(self, index: int, px: float) -> Metrics:
        """Layout metrics for the glyph at ``index``."""
        metrics, _, _ = self._metrics_raw(self.scale_factor(px), self._glyphs[index], 0.0)
        return metrics

    def _metrics_raw(
        self, scale: float, glyph: Glyph, offset: float
    ) -> tuple[Metrics, float, float]:
        bounds = glyph.bounds.scale(scale)
        offset_x = fract(f32(bounds.xmin + offset))
        offset_y = fract(f32(f32(1.0 - fract(bounds.height)) - fract(bounds.ymin)))
        if is_negative(offset_x):
            offset_x = f32(offset_x + 1.0)
        if is_negative(offset_y):
            offset_y = f32(offset_y + 1.0)
        metrics = Metrics(
            xmin=as_i32(floor(bounds.xmin)),
            ymin=as_i32(floor(bounds.ymin)),
            width=max(0, as_i32(ceil(f32(bounds.width + offset_x)))),
            height=max(0, as_i32(ceil(f32(bounds.height + offset_y)))),
            advance_width=f32(scale * glyph.advance_width),
            advance_height=f32(scale * glyph.advance_height),
            bounds=bounds,
        )
        return metrics, offset_x, offset_y

    def rasterize_config(self, config: GlyphRasterConfig) -> tuple[Metrics, bytes]:
        """Rasterize the glyph a raster config names."""
        return self.rasterize_indexed(config.glyph_index, config.px)

    def rasterize(self, character: str, px: float) -> tuple[Metrics, bytes]:
        """Metrics and a coverage bitmap (top-left first, 0..255) for a character."""
        return self.rasterize_indexed(self.lookup_glyph_index(character), px)

    def rasterize_config_subpixel(self, config: GlyphRasterConfig) -> tuple[Metrics, bytes]:
        """Subpixel-rasterize the glyph a raster config names."""
        return self.rasterize_indexed_subpixel(config.glyph_index, config.px)

    def rasterize_subpixel(self, character: str, px: float) -> tuple[Metrics, bytes]:
        """Metrics and an RGB subpixel coverage bitmap for a character."""
        return self.rasterize_indexed_subpixel(self.lookup_glyph_index(character), px)

    def rasterize_indexed(self, index: int, px: float) -> tuple[Metrics, bytes]:
        """Metrics and a coverage bitmap for the glyph at ``index``.

        Sizes of zero or less give default metrics and an empty bitmap.
        """
        return self._rasterize(index, px, 1)

    def rasterize_indexed_subpixel(self, index: int, px: float) -> tuple[Metrics, bytes]:
        """Like :meth:`rasterize_indexed`, with three horizontal samples per pixel.

        The bitmap holds ``width * 3`` bytes per row, read as RGB.
        """
        return self._rasterize(index, px, 3)

    def _rasterize(self, index: int, px: float, samples: int) -> tuple[Metrics, bytes]:
        if px <= 0.0:
            return Metrics(), b""
        glyph = self._glyphs[index]
        scale = self.scale_factor(px)
        metrics, offset_x, offset_y = self._metrics_raw(scale, glyph, 0.0)
        canvas = Raster(metrics.width * samples, metrics.height)
        canvas.draw(glyph, f32(scale * samples), scale, offset_x, offset_y)
        return metrics, canvas.get_bitmap()

    def lookup_glyph_index(self, character: str) -> int:
        """The glyph index for a character, or 0 if the font does not map it."""
        return self._char_to_glyph.get(ord(character), 0)

    def glyph_count(self) -> int:
        """The total number of glyphs in the font."""
        return len(self._glyphs)