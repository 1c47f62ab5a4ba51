from __future__ import annotations

from typing import Dict

from huffc.core.freq_map import FrequencyMap
from huffc.core.symbols import Symbol
from huffc.core.tree import HuffmanNode, Leaf, children

# Codice di una radice-foglia (albero degenere, un solo simbolo): 1 bit fisso.
SINGLE_LEAF_CODE = "0"

CodeTable = Dict[Symbol, str]


def build_code_table(root: HuffmanNode) -> CodeTable:
    """Map every leaf symbol to its root-to-leaf path ('0' = zero, '1' = one)."""
    if isinstance(root, Leaf):
        return {root.symbol: SINGLE_LEAF_CODE}

    codes: CodeTable = {}
    path: list[str] = []

    def dfs(node: HuffmanNode) -> None:
        if isinstance(node, Leaf):
            codes[node.symbol] = "".join(path)
            return
        zero, one = children(node)
        path.append("0")
        dfs(zero)
        path.pop()
        path.append("1")
        dfs(one)
        path.pop()

    dfs(root)
    return codes


def is_prefix_free(table: CodeTable) -> bool:
    # dopo l'ordinamento, un prefisso precede sempre le sue estensioni
    codes = sorted(table.values())
    return all(not b.startswith(a) for a, b in zip(codes, codes[1:]))


def expected_bits(table: CodeTable, freq_map: FrequencyMap) -> int:
    """Body size in bits for the input described by ``freq_map``."""
    return sum(len(table[sym]) * count for sym, count in freq_map.items())
