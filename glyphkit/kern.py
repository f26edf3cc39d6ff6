"""Reader for the horizontal pairs of a TrueType/OpenType ``kern`` table."""

from __future__ import annotations

from typing import NamedTuple

from glyphkit.stream import Stream, StreamError

__all__ = ["parse_kern"]

_OPENTYPE = 0x0000
_APPLE = 0x0001


class _SubTableHeader(NamedTuple):
    length: int
    is_horizontal: bool
    format: int


def _pair_key(left: int, right: int) -> int:
    return (left << 16) | right


def _read_opentype_subtable(stream: Stream) -> _SubTableHeader:
    stream.read_u16()  # version
    length = stream.read_u16()
    table_format = stream.read_u8()
    coverage = stream.read_u8()
    return _SubTableHeader(length, coverage & 0x01 == 0x01, table_format)


def _read_apple_subtable(stream: Stream) -> _SubTableHeader:
    length = stream.read_u32()
    coverage = stream.read_u8()
    table_format = stream.read_u8()
    stream.read_u16()  # tuple index
    return _SubTableHeader(length, coverage & 0x80 != 0x80, table_format)


def _read_format0(stream: Stream) -> dict[int, int]:
    pairs = stream.read_u16()
    stream.skip(6)  # searchRange, entrySelector, rangeShift
    mappings: dict[int, int] = {}
    for _ in range(pairs):
        left = stream.read_u16()
        right = stream.read_u16()
        mappings[_pair_key(left, right)] = stream.read_i16()
    return mappings


def _read_format3(stream: Stream) -> dict[int, int] | None:
    glyph_count = stream.read_u16()
    kerning_values_count = stream.read_u8()
    left_classes_count = stream.read_u8()
    right_classes_count = stream.read_u8()
    stream.skip(1)  # reserved flags

    kerning_values = stream.read_i16_slice(kerning_values_count)
    left_classes = stream.read_u8_slice(glyph_count)
    right_classes = stream.read_u8_slice(glyph_count)
    indices = stream.read_u8_slice(left_classes_count * right_classes_count)

    mappings: dict[int, int] = {}
    for left, left_class in enumerate(left_classes):
        for right, right_class in enumerate(right_classes):
            if left_class > left_classes_count or right_class > right_classes_count:
                continue
            index = left_class * right_classes_count + right_class
            if index >= len(indices):
                return None
            value_index = indices[index]
            if value_index >= len(kerning_values):
                return None
            mappings[_pair_key(left, right)] = kerning_values[value_index]
    return mappings


def _parse(stream: Stream) -> dict[int, int] | None:
    version = stream.read_u16()
    if version == _OPENTYPE:
        sub_table_count = stream.read_u16()
        read_subtable = _read_opentype_subtable
    elif version == _APPLE:
        stream.read_u16()  # minor version
        sub_table_count = stream.read_u32()
        read_subtable = _read_apple_subtable
    else:
        return None

    for _ in range(sub_table_count):
        start = stream.offset()
        header = read_subtable(stream)
        if header.format == 0:
            if header.is_horizontal:
                return _read_format0(stream)
        elif header.format == 3:
            if header.is_horizontal:
                return _read_format3(stream)
        else:
            stream.seek(start + header.length)
    return None


def parse_kern(data: bytes) -> dict[int, int] | None:
    """Read the first supported horizontal sub-table of a ``kern`` table.

    Returns a mapping from ``left_glyph << 16 | right_glyph`` to the kerning
    value in font units, or None if the table is malformed, of an unknown
    version, or has no horizontal sub-table in format 0 or 3.
    """
    try:
        return _parse(Stream(data))
    except StreamError:
        return None