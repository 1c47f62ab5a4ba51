"""Bit-level I/O: MSB-first packing within each byte.

The last byte of a stream may be partially filled; padding bits are zero and
are never read because END_OF_STREAM terminates decoding first.
"""

from __future__ import annotations

from typing import Protocol

from huffc.errors import TruncatedStream


class BitSink(Protocol):
    def write_bit(self, bit: int) -> None: ...


class BitSource(Protocol):
    def read_bit(self) -> int: ...

    def eof(self) -> bool: ...


class BitWriter:
    def __init__(self) -> None:
        self._out = bytearray()
        self._current = 0
        self._count = 0
        self.nbits = 0

    def write_bit(self, bit: int) -> None:
        self._current = (self._current << 1) | (1 if bit else 0)
        self._count += 1
        self.nbits += 1
        if self._count == 8:
            self._out.append(self._current)
            self._current = 0
            self._count = 0

    def write_bits(self, bits: str) -> None:
        for ch in bits:
            self.write_bit(1 if ch == "1" else 0)

    def getvalue(self) -> bytes:
        """Packed bytes so far, last byte zero-padded."""
        if self._count == 0:
            return bytes(self._out)
        return bytes(self._out) + bytes([self._current << (8 - self._count)])


class BitReader:
    def __init__(self, data: bytes, offset: int = 0) -> None:
        self._data = bytes(data)
        self._pos = offset * 8
        self._end = len(self._data) * 8

    def read_bit(self) -> int:
        if self._pos >= self._end:
            raise TruncatedStream("bitstream terminato")
        byte = self._data[self._pos >> 3]
        bit = (byte >> (7 - (self._pos & 7))) & 1
        self._pos += 1
        return bit

    def eof(self) -> bool:
        return self._pos >= self._end

    @property
    def remaining(self) -> int:
        return self._end - self._pos
