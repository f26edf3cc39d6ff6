import pytest

from glyphkit.font import Font
from glyphkit.geometry import Geometry, Glyph
from glyphkit.metrics import FontSettings, GlyphRasterConfig, LineMetrics, Metrics

UPM = 1000.0


def _square_glyph(size=1000.0, advance=500.0):
    geometry = Geometry(FontSettings().scale, UPM)
    geometry.move_to(0.0, 0.0)
    geometry.line_to(size, 0.0)
    geometry.line_to(size, size)
    geometry.line_to(0.0, size)
    geometry.close()
    return geometry.finalize(advance, 0.0)


def _triangle_glyph():
    geometry = Geometry(FontSettings().scale, UPM)
    geometry.move_to(100.0, 0.0)
    geometry.line_to(700.0, 0.0)
    geometry.line_to(400.0, 650.0)
    geometry.close()
    return geometry.finalize(800.0, 0.0)


def _font(kern=None, vertical=None):
    glyphs = [Glyph(), _square_glyph(), _triangle_glyph()]
    return Font(
        glyphs,
        {ord("A"): 1, ord("B"): 2},
        UPM,
        LineMetrics.from_units(800, -200, 100),
        vertical,
        kern,
        FontSettings(),
        "Test Sans",
        12345,
    )


def test_lookup_glyph_index_and_missing():
    font = _font()
    assert font.lookup_glyph_index("A") == 1
    assert font.lookup_glyph_index("B") == 2
    assert font.lookup_glyph_index("Z") == 0


def test_glyph_count():
    assert _font().glyph_count() == 3


def test_accessors():
    font = _font()
    assert font.name() == "Test Sans"
    assert font.file_hash() == 12345
    assert font.units_per_em() == UPM
    assert hash(font) == hash(_font())
    assert "Test Sans" in repr(font)


def test_scale_factor_at_units_per_em_is_one():
    assert _font().scale_factor(UPM) == 1.0


def test_horizontal_line_metrics_unscaled():
    metrics = _font().horizontal_line_metrics(UPM)
    assert metrics == LineMetrics.from_units(800, -200, 100)
    assert metrics.new_line_size == metrics.ascent - metrics.descent + metrics.line_gap


def test_vertical_line_metrics_absent_and_present():
    assert _font().vertical_line_metrics(20.0) is None
    vertical = LineMetrics.from_units(500, -500, 0)
    assert _font(vertical=vertical).vertical_line_metrics(UPM) == vertical


def test_horizontal_kern():
    font = _font(kern={(1 << 16) | 2: -50})
    assert font.horizontal_kern("A", "B", UPM) == -50.0
    assert font.horizontal_kern_indexed(1, 2, UPM) == -50.0
    assert font.horizontal_kern("B", "A", UPM) is None


def test_horizontal_kern_without_table():
    assert _font().horizontal_kern("A", "B", UPM) is None


def test_metrics_of_missing_character_use_default_glyph():
    font = _font()
    assert font.metrics("Z", 20.0) == font.metrics_indexed(0, 20.0)


def test_metrics_advance_at_units_per_em():
    metrics = _font().metrics("A", UPM)
    assert metrics.advance_width == 500.0
    assert metrics.advance_height == 0.0


def test_metrics_bitmap_contains_outline():
    for px in (2.0, 8.0, 10.0, 33.0):
        for char in "AB":
            metrics = _font().metrics(char, px)
            assert metrics.width >= metrics.bounds.width
            assert metrics.height >= metrics.bounds.height


def test_empty_glyph_has_empty_bitmap():
    metrics, bitmap = _font().rasterize("Z", 20.0)
    assert (metrics.width, metrics.height) == (0, 0)
    assert bitmap == b""


@pytest.mark.parametrize("px", [0.0, -4.0])
def test_rasterize_non_positive_size(px):
    assert _font().rasterize("A", px) == (Metrics(), b"")
    assert _font().rasterize_subpixel("A", px) == (Metrics(), b"")


@pytest.mark.parametrize("px", [1024.0, 8.0, 2.0])
@pytest.mark.parametrize("char", ["A", "B"])
def test_rasterize_best_guess(char, px):
    metrics, bitmap = _font().rasterize(char, px)
    assert metrics.width * metrics.height == len(bitmap)
    assert len(bitmap) > 0
    assert any(value > 0 for value in bitmap)


def test_render_all_small():
    font = _font()
    for index in range(font.glyph_count()):
        metrics, bitmap = font.rasterize_indexed(index, 8.0)
        assert metrics.width * metrics.height == len(bitmap)
        if bitmap:
            assert any(value > 0 for value in bitmap)


def test_square_fills_its_bitmap():
    metrics, bitmap = _font().rasterize("A", 10.0)
    assert (metrics.width, metrics.height) == (10, 10)
    assert all(value > 0 for value in bitmap)


def test_subpixel_has_three_samples_per_pixel():
    font = _font()
    metrics, bitmap = font.rasterize_subpixel("B", 20.0)
    plain_metrics, _ = font.rasterize("B", 20.0)
    assert metrics == plain_metrics
    assert len(bitmap) == metrics.width * 3 * metrics.height
    assert any(value > 0 for value in bitmap)


def test_rasterize_config_matches_indexed():
    font = _font()
    config = GlyphRasterConfig(glyph_index=2, px=16.0, font_hash=font.file_hash())
    assert font.rasterize_config(config) == font.rasterize_indexed(2, 16.0)
    assert font.rasterize_config_subpixel(config) == font.rasterize_indexed_subpixel(2, 16.0)


def test_rasterize_character_matches_indexed():
    font = _font()
    assert font.rasterize("B", 12.0) == font.rasterize_indexed(2, 12.0)


def test_out_of_bounds_mapping_raises():
    with pytest.raises(ValueError, match="out of bounds"):
        Font([Glyph()], {ord("A"): 5}, UPM, None, None)


def test_out_of_range_index_raises():
    with pytest.raises(IndexError):
        _font().metrics_indexed(99, 10.0)


def test_missing_line_metrics():
    font = Font([Glyph()], {}, UPM, None, None)
    assert font.horizontal_line_metrics(12.0) is None
    assert font.settings == FontSettings()