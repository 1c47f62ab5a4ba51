from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from huffc.core.bitio import BitSink
from huffc.core.code_table import CodeTable, build_code_table
from huffc.core.freq_map import build_frequency_map
from huffc.core.header import pack_header
from huffc.core.symbols import END_OF_STREAM, symbol_repr
from huffc.core.tree import huffman_tree
from huffc.errors import CorruptPayload


@dataclass(frozen=True)
class EncodeResult:
    nbits: int
    bits: str  # '0'/'1', utile per test e debug


def _emit(code: str, sink: Optional[BitSink]) -> None:
    if sink is None:
        return
    for ch in code:
        sink.write_bit(1 if ch == "1" else 0)


def encode(data: bytes, table: CodeTable, sink: Optional[BitSink] = None) -> EncodeResult:
    """Write the code of every byte of ``data``, then the END_OF_STREAM code.

    With ``sink=None`` nothing is written (dry run); the result is the same.
    """
    if END_OF_STREAM not in table:
        raise CorruptPayload("code table senza END_OF_STREAM")

    parts: list[str] = []
    for b in data:
        code = table.get(b)
        if code is None:
            raise CorruptPayload(f"simbolo senza codice: {symbol_repr(b)}")
        _emit(code, sink)
        parts.append(code)

    eos = table[END_OF_STREAM]
    _emit(eos, sink)
    parts.append(eos)

    bits = "".join(parts)
    return EncodeResult(nbits=len(bits), bits=bits)


@dataclass(frozen=True)
class SizeEstimate:
    raw_bytes: int
    header_bytes: int
    body_bits: int

    @property
    def body_bytes(self) -> int:
        return (self.body_bits + 7) // 8

    @property
    def total_bytes(self) -> int:
        return self.header_bytes + self.body_bytes

    @property
    def ratio(self) -> float:
        return self.total_bytes / self.raw_bytes if self.raw_bytes else 0.0


def estimate(data: bytes) -> SizeEstimate:
    """Size of the compressed artifact for ``data`` without producing it."""
    fmap = build_frequency_map(data)
    with huffman_tree(fmap) as root:
        table = build_code_table(root)
    res = encode(data, table)
    return SizeEstimate(
        raw_bytes=len(data), header_bytes=len(pack_header(fmap)), body_bits=res.nbits
    )
