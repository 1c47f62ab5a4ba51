"""Run the import-layering tests of tests/test_arch_boundaries.py without pytest.

Exit codes: 0 all rules hold, 2 a rule is violated, 3 the checker itself failed.
"""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

TEST_FILE = Path(__file__).resolve().parents[1] / "tests" / "test_arch_boundaries.py"


def _load_rules() -> list[tuple[str, object]]:
    spec = importlib.util.spec_from_file_location("huffc_arch_rules", TEST_FILE)
    if spec is None or spec.loader is None:
        raise RuntimeError(f"cannot load {TEST_FILE}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    return [
        (name, fn)
        for name, fn in sorted(vars(module).items())
        if name.startswith("test_") and callable(fn)
    ]


def main() -> int:
    if not TEST_FILE.is_file():
        print(f"ERROR: {TEST_FILE} not found.", file=sys.stderr)
        return 3
    try:
        rules = _load_rules()
    except Exception as e:
        print(f"ERROR: cannot load boundary rules: {e}", file=sys.stderr)
        return 3
    if not rules:
        print("ERROR: no boundary rules found.", file=sys.stderr)
        return 3

    failed = 0
    for name, fn in rules:
        try:
            fn()  # type: ignore[operator]
        except AssertionError as e:
            failed += 1
            print(f"FAIL {name}\n{e}", file=sys.stderr)
            continue
        print(f"ok   {name}")

    if failed:
        return 2
    print(f"OK: {len(rules)} architecture rules respected.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
