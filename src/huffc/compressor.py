"""Compress / decompress orchestration.

compress:   FrequencyMap -> tree -> code table -> header + encoded body
decompress: header -> FrequencyMap -> tree -> decoded body

Each call owns its map, tree and code table; the tree is released exactly
once, when the ``huffman_tree`` block exits.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from huffc.config import DEFAULT_CONFIG, HuffcConfig
from huffc.core.bitio import BitReader, BitWriter
from huffc.core.code_table import build_code_table
from huffc.core.decoder import decode
from huffc.core.encoder import encode
from huffc.core.freq_map import FrequencyMap, build_frequency_map, read_source
from huffc.core.header import pack_header, unpack_header
from huffc.core.tree import huffman_tree
from huffc.errors import HuffcError, UsageError
from huffc.naming import compressed_name, decompressed_name, literal_compressed_name


@dataclass(frozen=True)
class CompressedArtifact:
    blob: bytes
    bits: str
    nbits: int
    freq_map: FrequencyMap
    header_size: int


@dataclass(frozen=True)
class CompressResult:
    bits: str
    nbits: int
    input_size: int
    input_is_file: bool
    output_path: Path
    output_size: int

    @property
    def ratio(self) -> float:
        return self.output_size / self.input_size if self.input_size else 0.0


@dataclass(frozen=True)
class DecompressResult:
    data: bytes
    input_size: int
    output_path: Path

    @property
    def text(self) -> str:
        # latin-1: un carattere per byte, sempre reversibile
        return self.data.decode("latin-1")


def compress_bytes(data: bytes) -> CompressedArtifact:
    fmap = build_frequency_map(data)
    with huffman_tree(fmap) as root:
        table = build_code_table(root)

    header = pack_header(fmap)
    writer = BitWriter()
    res = encode(data, table, writer)
    return CompressedArtifact(
        blob=header + writer.getvalue(),
        bits=res.bits,
        nbits=res.nbits,
        freq_map=fmap,
        header_size=len(header),
    )


def decompress_bytes(blob: bytes) -> bytes:
    fmap, body_offset = unpack_header(blob)
    reader = BitReader(blob, body_offset)
    with huffman_tree(fmap) as root:
        return decode(reader, root)


def compress(
    name: str | Path,
    output: str | Path | None = None,
    *,
    config: HuffcConfig | None = None,
) -> CompressResult:
    """Compress the file ``name`` (or, if no such file exists, the name itself).

    The artifact goes to ``output`` or, by default, ``name`` + suffix; for
    literal content the default is a sanitized name in the current directory.
    Returns the emitted bit string for verification.
    """
    cfg = config or DEFAULT_CONFIG
    src = read_source(name, literal_fallback=cfg.literal_fallback, encoding=cfg.name_encoding)
    art = compress_bytes(src.data)

    if output is not None:
        out_path = Path(output)
    elif src.is_file:
        out_path = compressed_name(name, cfg.suffix)
    else:
        out_path = literal_compressed_name(str(name), cfg.suffix)

    try:
        out_path.write_bytes(art.blob)
    except OSError as e:
        raise UsageError(f"impossibile scrivere {out_path}: {e.strerror or e}") from e
    return CompressResult(
        bits=art.bits,
        nbits=art.nbits,
        input_size=len(src.data),
        input_is_file=src.is_file,
        output_path=out_path,
        output_size=len(art.blob),
    )


def decompress(
    name: str | Path,
    output: str | Path | None = None,
    *,
    config: HuffcConfig | None = None,
) -> DecompressResult:
    """Decompress ``name``; output defaults to e.g. ``example.txt.huf -> example_unc.txt``."""
    cfg = config or DEFAULT_CONFIG
    blob = Path(name).read_bytes()
    out_path = (
        Path(output) if output is not None else decompressed_name(name, cfg.suffix, cfg.unc_tag)
    )

    fmap, body_offset = unpack_header(blob)
    reader = BitReader(blob, body_offset)
    try:
        with huffman_tree(fmap) as root, out_path.open("wb") as fp:
            data = decode(reader, root, fp)
    except HuffcError:
        # niente output parziale se il body e' corrotto/troncato
        out_path.unlink(missing_ok=True)
        raise

    return DecompressResult(data=data, input_size=len(blob), output_path=out_path)
