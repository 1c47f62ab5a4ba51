"""huffc CLI.

This is the stable CLI entrypoint (console-script: ``huffc``).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from huffc.config import DEFAULT_CONFIG, ConfigError, HuffcConfig, load_config
from huffc.errors import EXIT_GENERIC, EXIT_USAGE, HuffcError


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def _add_config_arg(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--config",
        default=None,
        help="Config JSON (huffc.config.v1). Use '@file.json' to load from file, or pass JSON inline.",
    )


def _config_from(ns: argparse.Namespace) -> HuffcConfig:
    if getattr(ns, "config", None) is None:
        return DEFAULT_CONFIG
    return load_config(str(ns.config))


def _print_stats(label: str, in_name: str | Path, in_size: int, out_path: Path, out_size: int) -> None:
    ratio = out_size / in_size if in_size else 0.0
    print(f"=== huffc {label} ===")
    print(f"Input    : {in_name} ({in_size} byte)")
    print(f"Output   : {out_path} ({out_size} byte)")
    print(f"Ratio    : {ratio:.3f} (1.0 = no compression)")


def _cmd_compress(ns: argparse.Namespace) -> int:
    from huffc.compressor import compress

    cfg = _config_from(ns)
    res = compress(ns.input, ns.output, config=cfg)
    if not res.input_is_file:
        print(f"[huffc] '{ns.input}' is not a file: compressing the name as literal content", file=sys.stderr)
    if not ns.quiet:
        _print_stats("compress", ns.input, res.input_size, res.output_path, res.output_size)
        print(f"Body     : {res.nbits} bit")
    if ns.print_bits:
        print(res.bits)
    return 0


def _cmd_decompress(ns: argparse.Namespace) -> int:
    from huffc.compressor import decompress

    cfg = _config_from(ns)
    res = decompress(ns.input, ns.output, config=cfg)
    if not ns.quiet:
        _print_stats("decompress", ns.input, res.input_size, res.output_path, len(res.data))
    return 0


def _cmd_verify(ns: argparse.Namespace) -> int:
    from huffc.verify import verify_compressed_file

    rep = verify_compressed_file(ns.input, full=bool(ns.full))
    print(
        f"OK header={rep.header_size}B body={rep.body_size}B symbols={rep.n_symbols} "
        f"literals={rep.literal_total} max_code_len={rep.max_code_len}"
    )
    return 0


def _cmd_estimate(ns: argparse.Namespace) -> int:
    from huffc.core.encoder import estimate
    from huffc.core.freq_map import read_source

    cfg = _config_from(ns)
    src = read_source(ns.input, literal_fallback=cfg.literal_fallback, encoding=cfg.name_encoding)
    est = estimate(src.data)
    print(f"Raw      : {est.raw_bytes} byte")
    print(f"Header   : {est.header_bytes} byte")
    print(f"Body     : {est.body_bits} bit ({est.body_bytes} byte)")
    print(f"Total    : {est.total_bytes} byte (ratio {est.ratio:.3f})")
    return 0


def _cmd_show(ns: argparse.Namespace) -> int:
    from huffc.core.code_table import build_code_table
    from huffc.core.header import unpack_header
    from huffc.core.symbols import symbol_repr
    from huffc.core.tree import huffman_tree

    blob = Path(ns.input).read_bytes()
    fmap, body_offset = unpack_header(blob)
    with huffman_tree(fmap) as root:
        table = build_code_table(root)

    print(f"=== {ns.input} ===")
    print(f"Header   : {body_offset} byte, {len(fmap)} symbols")
    print(f"Body     : {len(blob) - body_offset} byte")
    print(f"{'symbol':>8}  {'count':>10}  code")
    for sym in fmap.keys():
        print(f"{symbol_repr(sym):>8}  {fmap.get(sym):>10}  {table[sym]}")
    return 0


def _cmd_config_validate(ns: argparse.Namespace) -> int:
    # load is the validation
    load_config(str(ns.config))
    print("OK")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="huffc", description="Static Huffman compressor")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_c = sub.add_parser("compress", help="Compress a file (or a literal string if no such file)")
    p_c.add_argument("input")
    p_c.add_argument("-o", "--output", type=Path, default=None, help="Output path (default: INPUT.huf)")
    p_c.add_argument("--print-bits", action="store_true", help="Print the encoded body as 0/1")
    p_c.add_argument("-q", "--quiet", action="store_true", help="Do not print stats")
    _add_config_arg(p_c)
    _add_common_args(p_c)

    p_d = sub.add_parser("decompress", help="Decompress a .huf file")
    p_d.add_argument("input", type=Path)
    p_d.add_argument(
        "-o", "--output", type=Path, default=None, help="Output path (default: NAME_unc.EXT)"
    )
    p_d.add_argument("-q", "--quiet", action="store_true", help="Do not print stats")
    _add_config_arg(p_d)
    _add_common_args(p_d)

    p_v = sub.add_parser("verify", help="Verify a compressed file")
    p_v.add_argument("input", type=Path)
    p_v.add_argument("--full", action="store_true", help="Decode the whole body and cross-check")
    _add_common_args(p_v)

    p_e = sub.add_parser("estimate", help="Dry run: compressed size without writing anything")
    p_e.add_argument("input")
    _add_config_arg(p_e)
    _add_common_args(p_e)

    p_s = sub.add_parser("show", help="Show frequency map and code table of a compressed file")
    p_s.add_argument("input", type=Path)
    _add_common_args(p_s)

    p_cv = sub.add_parser("config-validate", help="Validate a config (huffc.config.v1)")
    p_cv.add_argument("config", help="Config JSON (@file.json or inline JSON)")
    _add_common_args(p_cv)

    return p


_COMMANDS = {
    "compress": _cmd_compress,
    "decompress": _cmd_decompress,
    "verify": _cmd_verify,
    "estimate": _cmd_estimate,
    "show": _cmd_show,
    "config-validate": _cmd_config_validate,
}


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        return _COMMANDS[ns.cmd](ns)
    except SystemExit:
        raise
    except ConfigError as e:
        # Treat as usage/config error.
        if getattr(ns, "debug", False):
            raise
        print(f"[huffc] {e}", file=sys.stderr)
        return EXIT_USAGE
    except HuffcError as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[huffc] {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", EXIT_GENERIC) or EXIT_GENERIC)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[huffc] error: {e}", file=sys.stderr)
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
