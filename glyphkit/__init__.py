"""Glyph outline flattening, coverage rasterization, kerning tables and font metrics."""

__version__ = "0.1.0"