from __future__ import annotations

import heapq
import itertools
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Optional, Union

from huffc.core.freq_map import FrequencyMap
from huffc.core.symbols import Symbol
from huffc.errors import EmptyFrequencyMap, TreeReleasedError

# -------------------
# Nodi Huffman
#
# Tie-break canonico: (weight, seq). Le foglie ricevono seq 0..n-1 nell'ordine
# di freq_map.keys(); ogni nodo interno riceve il seq successivo alla creazione.
# -------------------


@dataclass(eq=False)
class Leaf:
    weight: int
    seq: int
    symbol: Symbol
    released: bool = False


@dataclass(eq=False)
class Internal:
    weight: int
    seq: int
    zero: Optional["HuffmanNode"]
    one: Optional["HuffmanNode"]
    released: bool = False


HuffmanNode = Union[Leaf, Internal]


def build_tree(freq_map: FrequencyMap) -> HuffmanNode:
    """Build the Huffman tree for ``freq_map``.

    The first node popped becomes ``zero``, the second ``one``. A map with a
    single entry yields that leaf as the root.
    """
    if len(freq_map) == 0:
        raise EmptyFrequencyMap("frequency map vuota: serve almeno END_OF_STREAM")

    heap: list[tuple[int, int, HuffmanNode]] = []
    counter = itertools.count()

    for sym in freq_map.keys():
        seq = next(counter)
        node = Leaf(weight=freq_map.get(sym), seq=seq, symbol=sym)
        heapq.heappush(heap, (node.weight, seq, node))

    while len(heap) > 1:
        w1, _, n1 = heapq.heappop(heap)
        w2, _, n2 = heapq.heappop(heap)
        parent = Internal(weight=w1 + w2, seq=next(counter), zero=n1, one=n2)
        heapq.heappush(heap, (parent.weight, parent.seq, parent))

    return heap[0][2]


def release_tree(root: HuffmanNode) -> None:
    """Tear the tree down: every internal node drops its children.

    Every node, a single-leaf root included, is marked released.
    """
    if root.released:
        raise TreeReleasedError("albero gia' rilasciato")
    _release(root)


def _release(node: Optional[HuffmanNode]) -> None:
    if node is None:
        return
    node.released = True
    if isinstance(node, Leaf):
        return
    _release(node.zero)
    _release(node.one)
    node.zero = None
    node.one = None


@contextmanager
def huffman_tree(freq_map: FrequencyMap) -> Iterator[HuffmanNode]:
    """Build a tree owned by the ``with`` block and release it on exit."""
    root = build_tree(freq_map)
    try:
        yield root
    finally:
        release_tree(root)


def children(node: Internal) -> tuple[HuffmanNode, HuffmanNode]:
    if node.released or node.zero is None or node.one is None:
        raise TreeReleasedError("nodo interno senza figli (albero rilasciato?)")
    return node.zero, node.one


def iter_leaves(root: HuffmanNode) -> Iterator[tuple[Leaf, int]]:
    """Yield (leaf, depth) depth-first, zero branch before one."""
    stack: list[tuple[HuffmanNode, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, Leaf):
            yield node, depth
            continue
        zero, one = children(node)
        stack.append((one, depth + 1))
        stack.append((zero, depth + 1))


def tree_depth(root: HuffmanNode) -> int:
    return max(depth for _, depth in iter_leaves(root))
