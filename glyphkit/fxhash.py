"""The Fx hash: a fast, non-cryptographic 64-bit hash used to fingerprint font data."""

from __future__ import annotations

import struct

__all__ = ["fxhash"]

_ROTATE = 5
_SEED = 0x517C_C1B7_2722_0A95
_MASK = 0xFFFF_FFFF_FFFF_FFFF

_U64 = struct.Struct("<Q")
_U32 = struct.Struct("<I")


def _mix(state: int, word: int) -> int:
    rotated = ((state << _ROTATE) | (state >> (64 - _ROTATE))) & _MASK
    return ((rotated ^ word) * _SEED) & _MASK


def fxhash(data: bytes) -> int:
    """Hash ``data`` eight bytes at a time, then four, then byte by byte.

    Words are read little-endian. The result is an unsigned 64-bit integer.
    Not suitable for any security purpose.
    """
    raw = bytes(data)
    state = 0
    whole = len(raw) - len(raw) % 8
    for (word,) in _U64.iter_unpack(raw[:whole]):
        state = _mix(state, word)
    rest = raw[whole:]
    if len(rest) >= 4:
        state = _mix(state, _U32.unpack(rest[:4])[0])
        rest = rest[4:]
    for byte in rest:
        state = _mix(state, byte)
    return state