from __future__ import annotations

from typing import Tuple

from huffc.core.freq_map import FrequencyMap
from huffc.core.symbols import END_OF_STREAM
from huffc.core.varint import dec_varint, enc_varint
from huffc.errors import BadMagic, CorruptPayload, UnsupportedVersion, UsageError

MAGIC = b"HUF"
VERSION = 1

TAG_LITERAL = 0
TAG_EOS = 1

# Limite di sanita' sul numero di entry: 256 letterali + END_OF_STREAM
MAX_ENTRIES = 257


# -------------------
# Header
# [MAGIC(3)|VER(1)|varint(N)|repeat N: TAG(1) [SYM(1) se literal] varint(count)]
# seguito dal body (bit MSB-first, ultimo byte con padding a zero)
# -------------------
def pack_header(freq_map: FrequencyMap) -> bytes:
    out = bytearray()
    out += MAGIC
    out.append(VERSION)
    out += enc_varint(len(freq_map))
    for sym, count in freq_map.items():
        if sym is END_OF_STREAM:
            out.append(TAG_EOS)
        else:
            out.append(TAG_LITERAL)
            out.append(sym)
        out += enc_varint(count)
    return bytes(out)


def unpack_header(blob: bytes) -> Tuple[FrequencyMap, int]:
    """Parse the header of ``blob``; return (frozen map, body offset)."""
    if len(blob) < len(MAGIC) or blob[: len(MAGIC)] != MAGIC:
        raise BadMagic("magic non valido: non e' un file huffc")
    idx = len(MAGIC)
    if idx >= len(blob):
        raise CorruptPayload("header troncato (version)")
    version = blob[idx]
    idx += 1
    if version != VERSION:
        raise UnsupportedVersion(f"versione header non supportata: {version}")

    try:
        n, idx = dec_varint(blob, idx)
    except ValueError as e:
        raise CorruptPayload(f"header: {e}") from e
    if n == 0:
        raise CorruptPayload("header senza entry")
    if n > MAX_ENTRIES:
        raise CorruptPayload(f"header: troppe entry ({n})")

    fmap = FrequencyMap()
    for _ in range(n):
        if idx >= len(blob):
            raise CorruptPayload("header troncato (tag)")
        tag = blob[idx]
        idx += 1
        if tag == TAG_EOS:
            sym = END_OF_STREAM
        elif tag == TAG_LITERAL:
            if idx >= len(blob):
                raise CorruptPayload("header troncato (simbolo)")
            sym = blob[idx]
            idx += 1
        else:
            raise CorruptPayload(f"header: tag sconosciuto {tag}")

        try:
            count, idx = dec_varint(blob, idx)
        except ValueError as e:
            raise CorruptPayload(f"header: {e}") from e

        if fmap.contains_key(sym):
            raise CorruptPayload("header: simbolo duplicato")
        try:
            fmap.put(sym, count)
        except UsageError as e:
            raise CorruptPayload(f"header: {e}") from e

    if not fmap.contains_key(END_OF_STREAM):
        raise CorruptPayload("header senza END_OF_STREAM")
    return fmap.freeze(), idx
