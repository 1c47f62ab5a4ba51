from __future__ import annotations

from typing import BinaryIO, Optional

from huffc.core.bitio import BitSource
from huffc.core.code_table import SINGLE_LEAF_CODE
from huffc.core.symbols import END_OF_STREAM, Symbol
from huffc.core.tree import HuffmanNode, Internal, Leaf, children
from huffc.errors import CorruptPayload, TreeReleasedError, TruncatedStream


def decode(source: BitSource, root: HuffmanNode, out: Optional[BinaryIO] = None) -> bytes:
    """Walk the tree bit by bit until the END_OF_STREAM leaf.

    Every decoded literal is appended to the returned bytes and, if given,
    written to ``out``. Running out of bits first raises TruncatedStream.
    """
    if root.released:
        raise TreeReleasedError("decodifica su albero rilasciato")
    if isinstance(root, Leaf):
        return _decode_single_leaf(source, root, out)

    buf = bytearray()
    node: HuffmanNode = root
    while True:
        if source.eof():
            raise TruncatedStream(
                f"bitstream finito prima di END_OF_STREAM ({len(buf)} byte decodificati)"
            )
        if not isinstance(node, Internal):
            raise CorruptPayload("cursore di decodifica su un nodo non interno")
        zero, one = children(node)
        node = zero if source.read_bit() == 0 else one
        if isinstance(node, Leaf):
            if node.symbol is END_OF_STREAM:
                break
            _put(buf, node.symbol, out)
            node = root
    return bytes(buf)


def _decode_single_leaf(source: BitSource, root: Leaf, out: Optional[BinaryIO]) -> bytes:
    # Albero degenere: ogni simbolo e' il bit fisso SINGLE_LEAF_CODE, nessuna discesa.
    expected = int(SINGLE_LEAF_CODE)
    buf = bytearray()
    while True:
        if source.eof():
            raise TruncatedStream(
                f"bitstream finito prima di END_OF_STREAM ({len(buf)} byte decodificati)"
            )
        if source.read_bit() != expected:
            raise CorruptPayload("bit inatteso per albero a foglia singola")
        if root.symbol is END_OF_STREAM:
            break
        _put(buf, root.symbol, out)
    return bytes(buf)


def _put(buf: bytearray, sym: Symbol, out: Optional[BinaryIO]) -> None:
    if not isinstance(sym, int):
        raise CorruptPayload(f"foglia senza letterale: {sym!r}")
    buf.append(sym)
    if out is not None:
        out.write(bytes((sym,)))
