from __future__ import annotations

from typing import Union


class EndOfStream:
    """Marker symbol terminating the encoded body.

    Only one instance exists (``END_OF_STREAM``). It is a separate type so it
    can never collide with a literal byte value.
    """

    __slots__ = ()
    _instance: "EndOfStream | None" = None

    def __new__(cls) -> "EndOfStream":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "END_OF_STREAM"

    def __reduce__(self):
        return (EndOfStream, ())


END_OF_STREAM = EndOfStream()

# 0..255 per i letterali, END_OF_STREAM per il marker
Symbol = Union[int, EndOfStream]


def is_literal(sym: object) -> bool:
    # bool e' sottoclasse di int: escluso
    return isinstance(sym, int) and not isinstance(sym, bool) and 0 <= sym <= 0xFF


def is_symbol(sym: object) -> bool:
    return sym is END_OF_STREAM or is_literal(sym)


def symbol_repr(sym: Symbol) -> str:
    """Human readable form: printable ASCII quoted, other bytes as hex, EOS."""
    if sym is END_OF_STREAM:
        return "EOS"
    if not isinstance(sym, int):
        raise TypeError(f"simbolo non valido: {sym!r}")
    if 0x21 <= sym <= 0x7E:
        return repr(chr(sym))
    return f"0x{sym:02x}"
