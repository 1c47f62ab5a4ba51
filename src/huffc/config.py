"""Configuration (v1) for huffc.

This module intentionally stays *small* and strict:
  - JSON only
  - explicit schema id
  - unknown keys are rejected
"""

from __future__ import annotations

import codecs
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

CONFIG_ID_V1 = "huffc.config.v1"


class ConfigError(ValueError):
    pass


def _config_text(config_arg: str) -> tuple[str, str]:
    """Return (origin, JSON text); origin is 'inline' or the file path."""
    s = config_arg.strip()
    if not s:
        raise ConfigError("config: argomento vuoto")
    if not s.startswith("@"):
        return "inline", s
    p = Path(s[1:]).expanduser()
    try:
        return str(p), p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"config: file non trovato o illeggibile: {p}") from e


def _parse_object(origin: str, text: str) -> dict[str, Any]:
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"config: JSON {origin} non valido (riga {e.lineno}, col {e.colno}): {e.msg}"
        ) from e
    if not isinstance(obj, dict):
        raise ConfigError(
            f"config: il JSON {origin} deve essere un oggetto, non {type(obj).__name__}"
        )
    return obj


def _optional_str(obj: dict[str, Any], key: str, default: str) -> str:
    if key not in obj:
        return default
    v = obj.get(key)
    if not isinstance(v, str) or not v.strip():
        raise ConfigError(f"config: campo '{key}' deve essere una stringa non vuota")
    return v.strip()


def _optional_bool(obj: dict[str, Any], key: str, default: bool) -> bool:
    if key not in obj:
        return default
    v = obj.get(key)
    if isinstance(v, bool):
        return v
    raise ConfigError(f"config: campo '{key}' deve essere booleano")


@dataclass(frozen=True)
class HuffcConfig:
    """Naming convention and input policy for compress/decompress."""

    suffix: str = ".huf"
    unc_tag: str = "_unc"
    literal_fallback: bool = True
    name_encoding: str = "utf-8"


DEFAULT_CONFIG = HuffcConfig()


def load_config(config_arg: str) -> HuffcConfig:
    """Load and validate a config.

    config_arg:
      - '@file.json'
      - inline JSON object
    """
    obj = _parse_object(*_config_text(config_arg))

    allowed = {"spec", "suffix", "unc_tag", "literal_fallback", "name_encoding"}
    extra = sorted(set(obj.keys()) - allowed)
    if extra:
        raise ConfigError(f"config: chiavi non supportate: {', '.join(extra)}")

    spec_id = obj.get("spec")
    if spec_id != CONFIG_ID_V1:
        raise ConfigError(f"config: spec non supportata: {spec_id!r} (attesa {CONFIG_ID_V1!r})")

    suffix = _optional_str(obj, "suffix", DEFAULT_CONFIG.suffix)
    if not suffix.startswith("."):
        raise ConfigError("config: 'suffix' deve iniziare con '.'")

    name_encoding = _optional_str(obj, "name_encoding", DEFAULT_CONFIG.name_encoding)
    try:
        codecs.lookup(name_encoding)
    except LookupError as e:
        raise ConfigError(f"config: encoding sconosciuto: {name_encoding}") from e

    return HuffcConfig(
        suffix=suffix,
        unc_tag=_optional_str(obj, "unc_tag", DEFAULT_CONFIG.unc_tag),
        literal_fallback=_optional_bool(obj, "literal_fallback", DEFAULT_CONFIG.literal_fallback),
        name_encoding=name_encoding,
    )
