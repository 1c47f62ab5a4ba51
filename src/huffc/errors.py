"""Exceptions raised by huffc and the CLI exit code each one maps to.

EXIT_CODES is the only table of exit codes; docs/exit_codes.md is rendered
from it (scripts/gen_exit_codes_md.py) and a test keeps the two in sync.
"""

from __future__ import annotations

from dataclasses import dataclass

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_UNSUPPORTED_VERSION = 11
EXIT_MISSING_INPUT = 12
EXIT_INTEGRITY = 13


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Bad arguments or config, empty frequency map, unwritable output"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Corrupt or truncated artifact, unexpected error"),
    ExitCodeInfo(EXIT_UNSUPPORTED_VERSION, "UNSUPPORTED_VERSION", "Header version not supported"),
    ExitCodeInfo(EXIT_MISSING_INPUT, "MISSING_INPUT", "Input file not found with literal fallback disabled"),
    ExitCodeInfo(EXIT_INTEGRITY, "INTEGRITY", "Decoded body does not match the header counts"),
)


def exit_code_info(code: int) -> ExitCodeInfo | None:
    for e in EXIT_CODES:
        if e.code == int(code):
            return e
    return None


class HuffcError(Exception):
    """Base error for huffc."""

    exit_code: int = EXIT_GENERIC


class UsageError(HuffcError):
    exit_code = EXIT_USAGE


class EmptyFrequencyMap(UsageError):
    """A tree was requested from a map with no entries (not even END_OF_STREAM)."""


class FrozenMapError(UsageError):
    pass


class TreeReleasedError(UsageError):
    pass


class CorruptPayload(HuffcError):
    exit_code = EXIT_GENERIC


class BadMagic(CorruptPayload):
    pass


class TruncatedStream(CorruptPayload):
    """Bits ran out before the END_OF_STREAM code was reached."""


class UnsupportedVersion(HuffcError):
    exit_code = EXIT_UNSUPPORTED_VERSION


class MissingInput(HuffcError):
    exit_code = EXIT_MISSING_INPUT


class IntegrityError(HuffcError):
    exit_code = EXIT_INTEGRITY


def exceptions_by_exit_code() -> dict[int, list[str]]:
    """Names of HuffcError and all its subclasses, grouped by exit code."""
    out: dict[int, list[str]] = {}
    pending: list[type[HuffcError]] = [HuffcError]
    while pending:
        cls = pending.pop()
        out.setdefault(cls.exit_code, []).append(cls.__name__)
        pending.extend(cls.__subclasses__())
    return {code: sorted(names) for code, names in out.items()}


def render_exit_codes_markdown() -> str:
    """Content of docs/exit_codes.md: one row per code, with the exceptions raised as it."""
    by_code = exceptions_by_exit_code()
    lines = [
        "# huffc exit codes",
        "",
        "Generated from `src/huffc/errors.py` by `scripts/gen_exit_codes_md.py`.",
        "",
        "| Code | Name | Meaning | Raised as |",
        "|---:|---|---|---|",
    ]
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        raised = ", ".join(f"`{n}`" for n in by_code.get(e.code, [])) or "-"
        lines.append(f"| {e.code} | `{e.name}` | {e.description} | {raised} |")
    return "\n".join(lines) + "\n"
