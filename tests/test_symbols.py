from __future__ import annotations

import copy
import pickle

import pytest

from huffc.core.symbols import END_OF_STREAM, EndOfStream, is_literal, is_symbol, symbol_repr


def test_end_of_stream_is_a_singleton() -> None:
    assert EndOfStream() is END_OF_STREAM
    assert copy.deepcopy(END_OF_STREAM) is END_OF_STREAM
    assert pickle.loads(pickle.dumps(END_OF_STREAM)) is END_OF_STREAM


def test_literal_range() -> None:
    assert is_literal(0) and is_literal(255)
    assert not is_literal(256)
    assert not is_literal(True)
    assert not is_literal(END_OF_STREAM)
    assert is_symbol(END_OF_STREAM)


def test_symbol_repr() -> None:
    assert symbol_repr(ord("a")) == "'a'"
    assert symbol_repr(0x0A) == "0x0a"
    assert symbol_repr(END_OF_STREAM) == "EOS"


def test_symbol_repr_rejects_non_symbols() -> None:
    with pytest.raises(TypeError):
        symbol_repr("a")  # type: ignore[arg-type]
