from __future__ import annotations

from pathlib import Path

import pytest

from huffc.compressor import compress, compress_bytes, decompress, decompress_bytes
from huffc.config import HuffcConfig
from huffc.core.freq_map import build_frequency_map
from huffc.core.symbols import END_OF_STREAM
from huffc.errors import BadMagic, MissingInput, TruncatedStream, UsageError


def test_compress_bytes_known_vector() -> None:
    art = compress_bytes(b"aaab")
    assert art.bits == "1110001"
    assert art.nbits == 7
    assert art.blob.hex() == "48554601030061030062010101" + "e2"
    assert art.header_size == 13
    assert decompress_bytes(art.blob) == b"aaab"


def test_empty_roundtrip() -> None:
    art = compress_bytes(b"")
    assert art.blob.hex() == "48554601010101" + "00"
    assert decompress_bytes(art.blob) == b""


def test_repeated_byte_is_smaller_than_input() -> None:
    data = b"a" * 1000
    art = compress_bytes(data)
    assert art.freq_map.items() == [(ord("a"), 1000), (END_OF_STREAM, 1)]
    assert len(art.blob) < len(data)
    assert decompress_bytes(art.blob) == data


def test_two_runs_are_byte_identical() -> None:
    data = b"she sells sea shells by the sea shore" * 5
    assert compress_bytes(data).blob == compress_bytes(data).blob


def test_file_roundtrip_with_derived_names(tmp_path: Path) -> None:
    src = tmp_path / "example.txt"
    data = "FATTURA 1001\nRIGA ARTICOLO: vite M3 qty=10\nTOTALE 12.00\n".encode("utf-8")
    src.write_bytes(data)

    res = compress(src)
    assert res.input_is_file
    assert res.output_path == tmp_path / "example.txt.huf"
    assert res.output_path.read_bytes()[:3] == b"HUF"
    assert res.input_size == len(data)
    assert res.output_size == res.output_path.stat().st_size
    assert res.bits == compress_bytes(data).bits

    back = decompress(res.output_path)
    assert back.output_path == tmp_path / "example_unc.txt"
    assert back.output_path.read_bytes() == data
    assert back.data == data
    assert back.text == data.decode("latin-1")


def test_explicit_output_paths(tmp_path: Path) -> None:
    src = tmp_path / "in.bin"
    src.write_bytes(bytes(range(256)) * 4)
    out = tmp_path / "packed.bin"
    back = tmp_path / "restored.bin"

    compress(src, out)
    decompress(out, back)
    assert back.read_bytes() == src.read_bytes()


def test_literal_name_fallback(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    res = compress("aaab")
    assert not res.input_is_file
    assert res.bits == "1110001"
    assert (tmp_path / "aaab.huf").is_file()

    back = decompress("aaab.huf")
    assert back.data == b"aaab"
    assert (tmp_path / "aaab_unc").read_bytes() == b"aaab"


def test_literal_fallback_disabled(tmp_path: Path) -> None:
    cfg = HuffcConfig(literal_fallback=False)
    with pytest.raises(MissingInput):
        compress(tmp_path / "nope.txt", config=cfg)


def test_custom_suffix(tmp_path: Path) -> None:
    src = tmp_path / "notes.md"
    src.write_bytes(b"# notes\n")
    cfg = HuffcConfig(suffix=".hz", unc_tag=".out")
    res = compress(src, config=cfg)
    assert res.output_path == tmp_path / "notes.md.hz"
    back = decompress(res.output_path, config=cfg)
    assert back.output_path == tmp_path / "notes.out.md"


def test_decompress_truncated_leaves_no_output(tmp_path: Path) -> None:
    src = tmp_path / "a.txt"
    src.write_bytes(b"aaab")
    res = compress(src)
    blob = res.output_path.read_bytes()
    res.output_path.write_bytes(blob[:-1])

    with pytest.raises(TruncatedStream):
        decompress(res.output_path)
    assert not (tmp_path / "a_unc.txt").exists()


def test_decompress_rejects_foreign_file(tmp_path: Path) -> None:
    p = tmp_path / "x.huf"
    p.write_bytes(b"PK\x03\x04")
    with pytest.raises(BadMagic):
        decompress(p)


def test_frequency_map_of_artifact_matches_input() -> None:
    data = b"mississippi"
    art = compress_bytes(data)
    assert art.freq_map == build_frequency_map(data)
    assert art.freq_map.literal_total() == len(data)


def test_empty_literal_name_is_compressed(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    res = compress("")
    assert not res.input_is_file
    assert res.input_size == 0
    assert res.bits == "0"
    assert res.output_path == Path("literal.huf")
    assert (tmp_path / "literal.huf").is_file()

    back = decompress(res.output_path)
    assert back.data == b""


def test_literal_name_with_separators_stays_in_cwd(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    res = compress("no/such/dir/text")
    assert not res.input_is_file
    assert res.output_path == Path("no_such_dir_text.huf")
    assert (tmp_path / "no_such_dir_text.huf").is_file()
    assert not (tmp_path / "no").exists()

    assert decompress(res.output_path).data == b"no/such/dir/text"


def test_unwritable_output_is_a_usage_error(tmp_path: Path) -> None:
    src = tmp_path / "a.txt"
    src.write_bytes(b"abc")
    with pytest.raises(UsageError, match="impossibile scrivere"):
        compress(src, tmp_path / "missing-dir" / "a.huf")
