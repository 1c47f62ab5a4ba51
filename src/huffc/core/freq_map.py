"""Frequency model: symbol -> count, plus the dual-mode input reader.

The insertion order of the map is part of the format: it fixes the sequence
numbers used as tie-break when the tree is built, so the header stores the
entries in the same order.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from huffc.core.symbols import END_OF_STREAM, Symbol, is_symbol, symbol_repr
from huffc.errors import FrozenMapError, MissingInput, UsageError


class FrequencyMap:
    """Insertion-ordered mapping Symbol -> positive count."""

    __slots__ = ("_counts", "_frozen")

    def __init__(self) -> None:
        self._counts: dict[Symbol, int] = {}
        self._frozen = False

    def put(self, sym: Symbol, count: int) -> None:
        if self._frozen:
            raise FrozenMapError("frequency map congelata: put non ammesso")
        if not is_symbol(sym):
            raise UsageError(f"simbolo non valido: {sym!r}")
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise UsageError(f"count non valido per {symbol_repr(sym)}: {count!r}")
        self._counts[sym] = count

    def get(self, sym: Symbol) -> int:
        return self._counts[sym]

    def contains_key(self, sym: Symbol) -> bool:
        return sym in self._counts

    def keys(self) -> list[Symbol]:
        return list(self._counts)

    def items(self) -> list[tuple[Symbol, int]]:
        return list(self._counts.items())

    def freeze(self) -> "FrequencyMap":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def literal_total(self) -> int:
        """Sum of all counts except END_OF_STREAM (== input length)."""
        return sum(c for s, c in self._counts.items() if s is not END_OF_STREAM)

    def __len__(self) -> int:
        return len(self._counts)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._counts)

    def __contains__(self, sym: object) -> bool:
        return sym in self._counts

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrequencyMap):
            return NotImplemented
        return self._counts == other._counts

    def __repr__(self) -> str:
        body = ", ".join(f"{symbol_repr(s)}: {c}" for s, c in self._counts.items())
        return f"FrequencyMap({{{body}}})"


def build_frequency_map(data: bytes) -> FrequencyMap:
    """Count every byte of ``data`` and append END_OF_STREAM with count 1.

    Literals keep first-occurrence order; END_OF_STREAM is always last.
    """
    fmap = FrequencyMap()
    for b in data:
        if fmap.contains_key(b):
            fmap.put(b, fmap.get(b) + 1)
        else:
            fmap.put(b, 1)
    fmap.put(END_OF_STREAM, 1)
    return fmap.freeze()


@dataclass(frozen=True)
class SourceData:
    data: bytes
    is_file: bool


def read_source(
    name: str | Path, *, literal_fallback: bool = True, encoding: str = "utf-8"
) -> SourceData:
    """Read the input to compress.

    If ``name`` is a regular file its content is returned; otherwise the
    name itself is treated as the literal content (``literal_fallback``).
    """
    p = Path(name)
    try:
        if p.is_file():
            return SourceData(data=p.read_bytes(), is_file=True)
    except (OSError, ValueError):
        # nomi non validi come path (es. NUL, troppo lunghi): contenuto letterale
        pass
    if not literal_fallback:
        raise MissingInput(f"file di input non trovato: {name}")
    return SourceData(data=str(name).encode(encoding), is_file=False)


def count_source(
    name: str | Path, *, literal_fallback: bool = True, encoding: str = "utf-8"
) -> FrequencyMap:
    src = read_source(name, literal_fallback=literal_fallback, encoding=encoding)
    return build_frequency_map(src.data)
