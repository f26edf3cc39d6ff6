"""A cursor over big-endian binary font table data."""

from __future__ import annotations

import struct

__all__ = ["StreamError", "Stream"]


class StreamError(ValueError):
    """Raised when a read would run past the end of the data."""


class Stream:
    """Reads big-endian integers and arrays from a byte buffer, advancing an offset."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._offset = 0

    def reset(self) -> None:
        """Move the cursor back to the start."""
        self._offset = 0

    def offset(self) -> int:
        """The current position in bytes."""
        return self._offset

    def seek(self, offset: int) -> None:
        """Move the cursor to an absolute position."""
        self._offset = offset

    def skip(self, count: int) -> None:
        """Move the cursor forward by ``count`` bytes."""
        self._offset += count

    def _take(self, size: int) -> bytes:
        end = self._offset + size
        if self._offset < 0 or end > len(self._data):
            raise StreamError(
                f"cannot read {size} byte(s) at offset {self._offset} "
                f"from {len(self._data)} byte(s)"
            )
        chunk = self._data[self._offset:end]
        self._offset = end
        return chunk

    def _unpack(self, code: str, size: int) -> int:
        return struct.unpack(">" + code, self._take(size))[0]

    def _unpack_array(self, code: str, size: int, length: int) -> tuple[int, ...]:
        return struct.unpack(f">{length}{code}", self._take(size * length))

    def read_u8(self) -> int:
        return self._unpack("B", 1)

    def read_u16(self) -> int:
        return self._unpack("H", 2)

    def read_u32(self) -> int:
        return self._unpack("I", 4)

    def read_i8(self) -> int:
        return self._unpack("b", 1)

    def read_i16(self) -> int:
        return self._unpack("h", 2)

    def read_i32(self) -> int:
        return self._unpack("i", 4)

    def read_f2dot14(self) -> float:
        """Read a signed 2.14 fixed-point number."""
        return self.read_i16() / (1 << 14)

    def read_tag(self) -> bytes:
        """Read a four-byte table tag."""
        return self._take(4)

    def read_u8_slice(self, length: int) -> tuple[int, ...]:
        return self._unpack_array("B", 1, length)

    def read_u16_slice(self, length: int) -> tuple[int, ...]:
        return self._unpack_array("H", 2, length)

    def read_u32_slice(self, length: int) -> tuple[int, ...]:
        return self._unpack_array("I", 4, length)

    def read_i8_slice(self, length: int) -> tuple[int, ...]:
        return self._unpack_array("b", 1, length)

    def read_i16_slice(self, length: int) -> tuple[int, ...]:
        return self._unpack_array("h", 2, length)

    def read_i32_slice(self, length: int) -> tuple[int, ...]:
        return self._unpack_array("i", 4, length)