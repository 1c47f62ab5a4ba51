"""Verification of compressed artifacts.

Policy: light by default (header only), ``full`` decodes the whole body and
cross-checks it against the header.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from huffc.core.bitio import BitReader
from huffc.core.decoder import decode
from huffc.core.freq_map import FrequencyMap, build_frequency_map
from huffc.core.header import unpack_header
from huffc.core.tree import huffman_tree, tree_depth
from huffc.errors import CorruptPayload, IntegrityError


@dataclass(frozen=True)
class VerifyReport:
    header_size: int
    body_size: int
    n_symbols: int
    literal_total: int
    max_code_len: int
    decoded: bool
    padding_bits: int | None = None


def verify_blob(blob: bytes, *, full: bool = False) -> VerifyReport:
    fmap, body_offset = unpack_header(blob)
    body_size = len(blob) - body_offset

    with huffman_tree(fmap) as root:
        max_len = max(1, tree_depth(root))
        if not full:
            return VerifyReport(
                header_size=body_offset,
                body_size=body_size,
                n_symbols=len(fmap),
                literal_total=fmap.literal_total(),
                max_code_len=max_len,
                decoded=False,
            )
        reader = BitReader(blob, body_offset)
        data = decode(reader, root)

    padding = reader.remaining
    if padding >= 8:
        raise CorruptPayload(f"byte in eccesso dopo END_OF_STREAM ({padding} bit)")
    for _ in range(padding):
        if reader.read_bit() != 0:
            raise CorruptPayload("bit di padding non nulli")

    _check_counts(fmap, data)

    return VerifyReport(
        header_size=body_offset,
        body_size=body_size,
        n_symbols=len(fmap),
        literal_total=fmap.literal_total(),
        max_code_len=max_len,
        decoded=True,
        padding_bits=padding,
    )


def _check_counts(header_map: FrequencyMap, data: bytes) -> None:
    if len(data) != header_map.literal_total():
        raise IntegrityError(
            f"byte decodificati {len(data)} != totale header {header_map.literal_total()}"
        )
    if build_frequency_map(data) != header_map:
        raise IntegrityError("frequenze decodificate diverse da quelle dell'header")


def verify_compressed_file(path: str | Path, *, full: bool = False) -> VerifyReport:
    return verify_blob(Path(path).read_bytes(), full=full)
