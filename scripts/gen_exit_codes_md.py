#!/usr/bin/env python3
"""Render docs/exit_codes.md from huffc.errors.EXIT_CODES.

  python scripts/gen_exit_codes_md.py           # rewrite the file
  python scripts/gen_exit_codes_md.py --check   # exit 1 if it is stale
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO = Path(__file__).resolve().parents[1]
DOC = REPO / "docs" / "exit_codes.md"


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    p.add_argument("--check", action="store_true", help="Compare instead of writing")
    ns = p.parse_args(argv)

    sys.path.insert(0, str(REPO / "src"))
    from huffc.errors import render_exit_codes_markdown  # noqa: E402

    rendered = render_exit_codes_markdown()
    current = DOC.read_text(encoding="utf-8") if DOC.is_file() else None

    if ns.check:
        if current != rendered:
            print(f"[huffc] {DOC} is stale: run scripts/gen_exit_codes_md.py", file=sys.stderr)
            return 1
        print(f"[huffc] {DOC} up to date")
        return 0

    if current == rendered:
        print(f"[huffc] {DOC} unchanged")
        return 0
    DOC.parent.mkdir(parents=True, exist_ok=True)
    DOC.write_text(rendered, encoding="utf-8")
    print(f"[huffc] wrote {DOC}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
