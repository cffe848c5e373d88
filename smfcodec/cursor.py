from __future__ import annotations

from .errors import OutOfBounds


class ByteCursor:
    """Forward-only reader over an immutable byte buffer."""

    def __init__(self, data: bytes, offset: int = 0) -> None:
        self._data = bytes(data)
        self._offset = offset

    @property
    def buffer(self) -> bytes:
        return self._data

    @property
    def offset(self) -> int:
        return self._offset

    def current_offset(self) -> int:
        return self._offset

    def reset_offset(self) -> None:
        self._offset = 0

    def remaining(self) -> int:
        return max(0, len(self._data) - self._offset)

    def at_end(self) -> bool:
        return self._offset >= len(self._data)

    def peek_u8(self, lookahead: int = 0) -> int:
        pos = self._offset + lookahead
        if pos < 0 or pos >= len(self._data):
            raise OutOfBounds(f"peek at {pos} past end of {len(self._data)}-byte buffer")
        return self._data[pos]

    def read_u8(self) -> int:
        value = self.peek_u8()
        self._offset += 1
        return value

    def read_bytes(self, count: int) -> bytes:
        if count < 0:
            raise ValueError(f"cannot read a negative byte count ({count})")
        end = self._offset + count
        if end > len(self._data):
            raise OutOfBounds(
                f"read of {count} bytes at {self._offset} past end of "
                f"{len(self._data)}-byte buffer"
            )
        chunk = self._data[self._offset : end]
        self._offset = end
        return chunk

    def read_u32_be(self) -> int:
        return int.from_bytes(self.read_bytes(4), "big")

    def step_back(self, count: int = 1) -> None:
        """Un-consume ``count`` bytes."""

        if count < 0 or count > self._offset:
            raise OutOfBounds(f"cannot step back {count} bytes from offset {self._offset}")
        self._offset -= count

    def __repr__(self) -> str:
        return f"ByteCursor(offset={self._offset}, size={len(self._data)})"
