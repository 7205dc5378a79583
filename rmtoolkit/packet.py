"""Fixed-length data packet: head byte, data bytes, check byte, tail byte."""

from __future__ import annotations

import struct
from typing import Any

HEAD_BYTE = 0xFF
TAIL_BYTE = 0x0D


class FixedPacket:
    """A packet of ``capacity`` bytes laid out as [0xff, data..., check, 0x0d]."""

    def __init__(self, capacity: int = 16) -> None:
        if capacity < 3:
            raise ValueError("capacity must be at least 3")
        self.capacity = capacity
        self._buffer = bytearray(capacity)
        self._buffer[0] = HEAD_BYTE
        self._buffer[-1] = TAIL_BYTE

    def clear(self) -> None:
        """Zero the data bytes and the check byte."""
        self._buffer[1:-1] = bytes(self.capacity - 2)

    def set_check_byte(self, value: int) -> None:
        self._buffer[-2] = value

    def copy_from(self, data: bytes) -> None:
        """Replace the whole packet with the first ``capacity`` bytes of ``data``."""
        data = bytes(data)
        if len(data) < self.capacity:
            raise ValueError(f"need {self.capacity} bytes, got {len(data)}")
        self._buffer[:] = data[: self.capacity]

    def buffer(self) -> bytes:
        return bytes(self._buffer)

    def _layout(self, fmt: str, index: int) -> struct.Struct:
        layout = struct.Struct(fmt)
        if not (index > 0 and index + layout.size < self.capacity - 1):
            raise IndexError(
                f"{layout.size} bytes at index {index} do not fit in the data area "
                f"of a {self.capacity}-byte packet"
            )
        return layout

    def load_data(self, fmt: str, value: Any, index: int) -> None:
        """Pack ``value`` with struct format ``fmt`` at byte ``index``."""
        layout = self._layout(fmt, index)
        values = value if isinstance(value, tuple) else (value,)
        layout.pack_into(self._buffer, index, *values)

    def unload_data(self, fmt: str, index: int) -> Any:
        """Unpack struct format ``fmt`` from byte ``index``."""
        layout = self._layout(fmt, index)
        values = layout.unpack_from(self._buffer, index)
        return values[0] if len(values) == 1 else values

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedPacket):
            return NotImplemented
        return self._buffer == other._buffer

    def __repr__(self) -> str:
        return f"FixedPacket(capacity={self.capacity}, buffer={self.buffer().hex()})"