"""Buffered writer for the Avro binary encoding."""

from __future__ import annotations

import struct
from typing import BinaryIO, Callable, Optional

_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


class ShortWriteError(OSError):
    """Raised when the underlying stream accepts fewer bytes than given."""

    def __init__(self, message: str = "short write") -> None:
        super().__init__(message)


class Writer:
    """Accumulates Avro-encoded data in memory and flushes it to a stream.

    ``out`` is any object with a ``write(bytes)`` method, or ``None`` to
    only buffer.  ``buf_size`` is a capacity hint for the internal buffer.
    """

    def __init__(
        self,
        out: Optional[BinaryIO] = None,
        buf_size: int = 0,
        disable_block_size_header: bool = False,
    ) -> None:
        if buf_size < 0:
            raise ValueError("buf_size must not be negative")
        self.out = out
        self.buf_size = buf_size
        self.disable_block_size_header = disable_block_size_header
        self.error: Optional[BaseException] = None
        self._buf = bytearray()

    def reset(self, out: Optional[BinaryIO]) -> None:
        """Attach a new output stream and discard buffered data."""
        self.out = out
        self._buf.clear()

    def buffered(self) -> int:
        """Return the number of buffered bytes."""
        return len(self._buf)

    def buffer(self) -> bytes:
        """Return a copy of the buffered bytes."""
        return bytes(self._buf)

    def flush(self) -> None:
        """Write buffered data to the output stream.

        Does nothing without a stream.  A previously recorded error is
        raised again; a new failure is recorded and raised.
        """
        if self.out is None:
            return
        if self.error is not None:
            raise self.error

        data = bytes(self._buf)
        try:
            written = self.out.write(data)
            if written is not None and written < len(data):
                raise ShortWriteError()
        except Exception as exc:
            if self.error is None:
                self.error = exc
            raise

        self._buf.clear()

    def write(self, data: bytes) -> int:
        """Append raw bytes to the buffer and return how many were added."""
        self._buf += data
        return len(data)

    def write_bool(self, value: bool) -> None:
        self._buf.append(0x01 if value else 0x00)

    def write_int(self, value: int) -> None:
        """Write a 32-bit signed integer as a zig-zag varint."""
        if not _INT32_MIN <= value <= _INT32_MAX:
            raise OverflowError(f"int value out of range: {value}")
        self._encode_varint((value << 1) ^ (value >> 31))

    def write_long(self, value: int) -> None:
        """Write a 64-bit signed integer as a zig-zag varint."""
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise OverflowError(f"long value out of range: {value}")
        self._encode_varint((value << 1) ^ (value >> 63))

    def _encode_varint(self, value: int) -> None:
        if value == 0:
            self._buf.append(0)
            return
        while value > 0:
            byte = value & 0x7F
            value >>= 7
            if value:
                byte |= 0x80
            self._buf.append(byte)

    def write_float(self, value: float) -> None:
        self._buf += struct.pack("<f", value)

    def write_double(self, value: float) -> None:
        self._buf += struct.pack("<d", value)

    def write_bytes(self, data: bytes) -> None:
        self.write_long(len(data))
        self._buf += data

    def write_string(self, value: str) -> None:
        encoded = value.encode("utf-8")
        self.write_long(len(encoded))
        self._buf += encoded

    def write_block_header(self, length: int, size: int) -> None:
        """Write a block count, with the byte size when it is known and enabled."""
        if size > 0 and not self.disable_block_size_header:
            self.write_long(-length)
            self.write_long(size)
            return
        self.write_long(length)

    def write_block_cb(self, callback: Callable[["Writer"], int]) -> int:
        """Write a block whose items are produced by ``callback``.

        The callback writes the items and returns their count; the block
        header is placed in front of them afterwards.
        """
        start = len(self._buf)
        length = callback(self)
        captured = bytes(self._buf[start:])
        del self._buf[start:]
        self.write_block_header(length, len(captured))
        self._buf += captured
        return length