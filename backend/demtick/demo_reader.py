# demo_reader.py

import struct
import logging

from demtick.exceptions import UnexpectedEndOfData

logger = logging.getLogger(__name__)


class DemoReader:
    """
    Sequential little-endian reader over an in-memory demo buffer.
    Supports:
      - fixed-width int32 / float32 / byte reads
      - fixed-length text reads (lossy UTF-8)
      - checked skips of declared payload lengths
      - unchecked relative seeks
    """

    INT32 = struct.Struct('<i')
    FLOAT32 = struct.Struct('<f')

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.pos = 0

    def tell(self) -> int:
        return self.pos

    def remaining(self) -> int:
        if self.pos < 0:
            return 0
        return max(0, len(self.data) - self.pos)

    def eof(self) -> bool:
        return self.pos >= len(self.data)

    def read_bytes(self, size: int) -> bytes:
        """Consume exactly `size` bytes."""
        # A negative declared length can never be satisfied
        if size < 0 or self.pos < 0 or self.pos + size > len(self.data):
            raise UnexpectedEndOfData(self.pos, size, self.remaining())
        out = self.data[self.pos:self.pos + size]
        self.pos += size
        return out

    def read_byte(self) -> int:
        return self.read_bytes(1)[0]

    def read_int32(self) -> int:
        return self.INT32.unpack(self.read_bytes(4))[0]

    def read_float32(self) -> float:
        return self.FLOAT32.unpack(self.read_bytes(4))[0]

    def read_string(self, size: int) -> str:
        """Read a fixed-length text field, replacing malformed sequences.

        Embedded and trailing NULs are kept; trimming is left to callers.
        """
        return self.read_bytes(size).decode('utf-8', errors='replace')

    def skip(self, size: int) -> None:
        """Skip a declared payload, failing if it runs past the buffer"""
        self.read_bytes(size)

    def seek_relative(self, offset: int) -> int:
        # Not bounds-checked; the next read fails if the offset is out of range
        self.pos += offset
        return self.pos


def hexdump(data: bytes, base_offset: int = 0) -> str:
    """Dump bytes in a readable format for debugging"""
    lines = []
    for i in range(0, len(data), 16):
        chunk = data[i:i+16]
        hex_values = ' '.join(f'{b:02x}' for b in chunk)
        ascii_values = ''.join(chr(b) if 32 <= b <= 126 else '.' for b in chunk)
        lines.append(f"{base_offset + i:04x}: {hex_values:48s} {ascii_values}")
    return '\n'.join(lines)
