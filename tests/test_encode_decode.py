from __future__ import annotations

import io
import random

import pytest

from huffc.core.bitio import BitReader, BitWriter
from huffc.core.code_table import build_code_table
from huffc.core.decoder import decode
from huffc.core.encoder import encode, estimate
from huffc.core.freq_map import FrequencyMap, build_frequency_map
from huffc.core.symbols import END_OF_STREAM
from huffc.core.tree import huffman_tree
from huffc.errors import CorruptPayload, TreeReleasedError, TruncatedStream


def _roundtrip(data: bytes) -> tuple[bytes, str]:
    fmap = build_frequency_map(data)
    with huffman_tree(fmap) as root:
        table = build_code_table(root)
        w = BitWriter()
        res = encode(data, table, w)
        assert w.nbits == res.nbits == len(res.bits)
        out = decode(BitReader(w.getvalue()), root)
    return out, res.bits


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"a",
        b"aaab",
        b"a" * 1000,
        bytes(range(256)),
        "perché sì: ünïcødé\n".encode("utf-8"),
        b"\x00\x00\x00\xff\x00",
    ],
)
def test_roundtrip(data: bytes) -> None:
    out, _ = _roundtrip(data)
    assert out == data


def test_roundtrip_random_blobs() -> None:
    rng = random.Random(1234)
    for n in (1, 2, 7, 64, 999):
        data = bytes(rng.choice(b"abcdeeeeee\x00\xff") for _ in range(n))
        out, _ = _roundtrip(data)
        assert out == data


def test_known_vector_aaab_bits() -> None:
    out, bits = _roundtrip(b"aaab")
    assert bits == "1110001"
    assert out == b"aaab"


def test_empty_input_emits_only_eos_code() -> None:
    _, bits = _roundtrip(b"")
    assert bits == "0"


def test_dry_run_matches_live_encoding() -> None:
    data = b"abracadabra"
    with huffman_tree(build_frequency_map(data)) as root:
        table = build_code_table(root)
    live = encode(data, table, BitWriter())
    dry = encode(data, table)
    assert dry == live


def test_encode_unknown_byte_raises() -> None:
    with huffman_tree(build_frequency_map(b"ab")) as root:
        table = build_code_table(root)
    with pytest.raises(CorruptPayload):
        encode(b"abc", table)


def test_decoder_writes_to_output_stream() -> None:
    data = b"hello hello"
    fmap = build_frequency_map(data)
    buf = io.BytesIO()
    with huffman_tree(fmap) as root:
        table = build_code_table(root)
        w = BitWriter()
        encode(data, table, w)
        out = decode(BitReader(w.getvalue()), root, buf)
    assert out == data
    assert buf.getvalue() == data


def test_truncated_body_raises() -> None:
    with huffman_tree(build_frequency_map(b"aaab")) as root:
        with pytest.raises(TruncatedStream):
            decode(BitReader(b""), root)
        # "111000" senza l'ultimo bit di EOS: il padding (0) porta su b, poi finisce
        with pytest.raises(TruncatedStream):
            decode(BitReader(b"\xe0"), root)


def test_single_leaf_rejects_one_bit() -> None:
    with huffman_tree(build_frequency_map(b"")) as root:
        assert decode(BitReader(b"\x00"), root) == b""
        with pytest.raises(CorruptPayload):
            decode(BitReader(b"\x80"), root)


def test_single_literal_leaf_without_eos_hits_truncation() -> None:
    fmap = FrequencyMap()
    fmap.put(ord("z"), 3)
    with huffman_tree(fmap) as root:
        table = build_code_table(root)
        assert table == {ord("z"): "0"}
        with pytest.raises(TruncatedStream):
            decode(BitReader(b"\x00"), root)
    assert END_OF_STREAM not in table


def test_estimate() -> None:
    est = estimate(b"a" * 1000)
    assert est.raw_bytes == 1000
    assert est.body_bits == 1001
    assert est.body_bytes == 126
    assert est.header_bytes == 11
    assert est.total_bytes == 137
    assert est.ratio < 1.0


def test_decode_on_released_tree_raises() -> None:
    for data in (b"", b"aaab"):
        with huffman_tree(build_frequency_map(data)) as root:
            pass
        with pytest.raises(TreeReleasedError):
            decode(BitReader(b"\x00"), root)
