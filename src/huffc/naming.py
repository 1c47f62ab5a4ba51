"""Derived file names for compressed / decompressed artifacts.

  x.txt            -> x.txt.huf
  example.txt.huf  -> example_unc.txt
  notes.huf        -> notes_unc
  "no/such dir"    -> no_such_dir.huf   (literal content, no such file)
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_SUFFIX = ".huf"
DEFAULT_UNC_TAG = "_unc"


def compressed_name(name: str | Path, suffix: str = DEFAULT_SUFFIX) -> Path:
    p = Path(name)
    return p.with_name(p.name + suffix)


def decompressed_name(
    name: str | Path, suffix: str = DEFAULT_SUFFIX, unc_tag: str = DEFAULT_UNC_TAG
) -> Path:
    p = Path(name)
    base = p.name
    if base.endswith(suffix) and len(base) > len(suffix):
        base = base[: -len(suffix)]

    # estensione = dal primo '.' (escluso un eventuale '.' iniziale)
    pos = base.find(".", 1)
    if pos < 0:
        return p.with_name(base + unc_tag)
    return p.with_name(base[:pos] + unc_tag + base[pos:])


# nome di fallback per contenuto letterale vuoto o tutto non stampabile
LITERAL_FALLBACK_STEM = "literal"
LITERAL_STEM_MAX = 64


def literal_compressed_name(content: str, suffix: str = DEFAULT_SUFFIX) -> Path:
    """Output name for literal content: a single file in the current directory.

    Path separators and other unsafe characters become '_', so the content
    never selects a directory.
    """
    stem = "".join(c if c.isalnum() or c in "-_." else "_" for c in content)
    stem = stem.strip("._")[:LITERAL_STEM_MAX]
    if not stem:
        stem = LITERAL_FALLBACK_STEM
    return Path(stem + suffix)
