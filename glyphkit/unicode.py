"""Text helpers: UTF-16 name decoding, line break priorities and character classes."""

from __future__ import annotations

import enum

__all__ = ["decode_utf16", "LinebreakData", "CharacterData"]

_WHITESPACE_CHARS = frozenset("\t\n\x0c\r ")


def decode_utf16(data: bytes) -> str:
    """Decode big-endian UTF-16 text, such as a font's name records.

    Raises ``UnicodeDecodeError`` (a ``ValueError``) for truncated data or
    unpaired surrogates.
    """
    return bytes(data).decode("utf-16-be")


class LinebreakData(enum.IntFlag):
    """A line break opportunity. Ordering is by priority: HARD > SOFT > NONE."""

    NONE = 0b00
    SOFT = 0b01
    HARD = 0b10

    @classmethod
    def from_mask(
        cls, wrap_soft_breaks: bool, wrap_hard_breaks: bool, has_width: bool
    ) -> LinebreakData:
        """The set of break kinds a layout acts on."""
        mask = cls.NONE
        if wrap_hard_breaks:
            mask |= cls.HARD
        if wrap_soft_breaks and has_width:
            mask |= cls.SOFT
        return cls(mask)

    def is_hard(self) -> bool:
        return int(self) == LinebreakData.HARD

    def is_soft(self) -> bool:
        return int(self) == LinebreakData.SOFT

    def mask(self, other: LinebreakData) -> LinebreakData:
        """Keep only the break kinds present in ``other``."""
        return LinebreakData(int(self) & int(other))


class CharacterData(enum.IntFlag):
    """Metadata about a character laid out with a font."""

    WHITESPACE = 0b001
    CONTROL = 0b010
    MISSING = 0b100

    @classmethod
    def classify(cls, character: str, index: int) -> CharacterData:
        """Classify ``character``; glyph ``index`` 0 marks it missing from the font."""
        flags = cls(0)
        if index == 0:
            flags |= cls.MISSING
        if character in _WHITESPACE_CHARS:
            flags |= cls.WHITESPACE
        code = ord(character)
        if code <= 0x1F or code == 0x7F:
            flags |= cls.CONTROL
        return cls(flags)

    def is_whitespace(self) -> bool:
        """True for ASCII whitespace."""
        return bool(self & CharacterData.WHITESPACE)

    def is_control(self) -> bool:
        """True for ASCII control characters."""
        return bool(self & CharacterData.CONTROL)

    def is_missing(self) -> bool:
        """True if the font has no glyph for the character."""
        return bool(self & CharacterData.MISSING)