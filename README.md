# glyphkit

glyphkit turns glyph outlines into anti-aliased coverage bitmaps and computes
the metrics needed to place them. It is pure Python and uses only the standard
library. Its arithmetic is carried out in single precision (binary32), so the
results are stable from one platform to another.

## Modules

- `glyphkit.geometry`: `Geometry` takes outline commands (`move_to`,
  `line_to`, `quad_to`, `curve_to`, `close`) in font units. It flattens
  quadratic and cubic curves into line segments, with a tolerance set by the
  `scale` and `units_per_em` it was given. `finalize(advance_width,
  advance_height)` returns an immutable `Glyph` holding its line segments and
  its `OutlineBounds`. The module also provides `Point`, `QuadCurve`,
  `CubeCurve` and `Line`.
- `glyphkit.raster`: `Raster(width, height)` accumulates the signed area of a
  glyph drawn with `draw(glyph, scale_x, scale_y, offset_x, offset_y)`.
  `get_bitmap()` returns `width * height` coverage bytes, row by row from the
  top left, where 0 is empty and 255 is full.
- `glyphkit.font`: `Font` is built from a sequence of `Glyph`s, a dict mapping
  code points to glyph indices, units per em, optional horizontal and vertical
  `LineMetrics`, and optional kerning pairs. It provides `metrics`,
  `metrics_indexed`, `rasterize`, `rasterize_indexed`, `rasterize_subpixel`,
  `rasterize_indexed_subpixel`, `rasterize_config`,
  `rasterize_config_subpixel`, `horizontal_kern`, `horizontal_kern_indexed`,
  `horizontal_line_metrics`, `vertical_line_metrics`, `scale_factor`,
  `lookup_glyph_index`, `glyph_count`, `units_per_em`, `name` and
  `file_hash`. A character the font does not map uses glyph 0. A size of zero
  or less gives default metrics and an empty bitmap. If a character is mapped
  to a glyph index that does not exist, the constructor raises `ValueError`.
- `glyphkit.metrics`: the frozen records `Metrics`, `LineMetrics` (with
  `from_units` and `scale`), `FontSettings` (defaults: `collection_index=0`,
  `scale=40.0`) and `GlyphRasterConfig`, a hashable key for caching
  rasterized glyphs.
- `glyphkit.kern`: `parse_kern(data)` reads the first horizontal format 0 or
  format 3 subtable of a TrueType or OpenType `kern` table. It returns a dict
  keyed by `(left << 16) | right`. It returns `None` when the table is
  malformed, has an unknown version, or holds no supported horizontal
  subtable.
- `glyphkit.stream`: `Stream` reads big-endian integers, 2.14 fixed-point
  numbers, tags and arrays from a byte string. It raises `StreamError` (a
  `ValueError`) when a read would run past the end of the data.
- `glyphkit.unicode`: `decode_utf16` decodes big-endian UTF-16. The flag enums
  `LinebreakData` (`NONE`, `SOFT`, `HARD`, with `from_mask` and `mask`) and
  `CharacterData` (`classify`, `is_whitespace`, `is_control`, `is_missing`)
  describe break kinds and character classes.
- `glyphkit.fxhash`: `fxhash(data)` is a fast, non-cryptographic 64-bit hash
  of a byte string.
- `glyphkit.floatops` and `glyphkit.trig`: binary32 helpers such as `f32`,
  `ceil`, `floor`, `trunc`, `fract`, `as_i32`, `sqrt`, `copysign`,
  `get_bitmap`, `atan`, `atan2f` and the fast approximation `atan2`.

## Example

```python
from glyphkit.font import Font
from glyphkit.geometry import Geometry, Glyph
from glyphkit.metrics import LineMetrics

geometry = Geometry(scale=40.0, units_per_em=1000.0)
geometry.move_to(0.0, 0.0)
geometry.line_to(500.0, 0.0)
geometry.line_to(500.0, 500.0)
geometry.line_to(0.0, 500.0)
geometry.close()
square = geometry.finalize(advance_width=600.0, advance_height=0.0)

font = Font(
    glyphs=[Glyph(), square],
    char_to_glyph={ord("A"): 1},
    units_per_em=1000.0,
    horizontal_line_metrics=LineMetrics.from_units(800, -200, 0),
    vertical_line_metrics=None,
)

metrics, bitmap = font.rasterize("A", 20.0)
assert len(bitmap) == metrics.width * metrics.height
```

## Kerning

```python
from glyphkit.kern import parse_kern

with open("kern-table.bin", "rb") as handle:
    pairs = parse_kern(handle.read())
```

## What it does not do

glyphkit does not read font files. You build a `Font` from outlines and a
character map that you supply, for example by feeding a parser's outline
callbacks into `Geometry`. Only the `kern` table can be parsed directly, with
`parse_kern`. The package does not lay out strings of text, and it has no
command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```