"""
tvm_abi.config — address prefix, tokenizer defaults and decode caps.

This module centralizes configuration for the codec. It has NO third-party
deps and is safe to import very early.

Configuration precedence:
  1) Environment variables (TVM_ABI_*)
  2) Hardcoded safe defaults below

Key env vars (case-insensitive where enum-like):
  - TVM_ABI_ADDRESS_PREFIX     (int)    default: 0x41 (TRON mainnet/testnets)
  - TVM_ABI_TOKENIZER_MODE     (str)    default: lenient   (lenient|strict)
  - TVM_ABI_MAX_DECODE_BYTES   (int)    default: 1_048_576 (1 MiB)
  - TVM_ABI_LOG_LEVEL          (str)    default: WARNING
  - TVM_ABI_LOG_FORMAT         (str)    default: auto      (json|text|auto)

Usage:
    from tvm_abi.config import load_config
    CFG = load_config()
    if CFG.tokenizer_mode == "strict": ...
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Optional

from .errors import ConfigError

_TOKENIZER_MODES = ("lenient", "strict")
_LOG_FORMATS = ("json", "text", "auto")
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


# ----------------------------- helpers ---------------------------------------


def _env_int(name: str, default: int, *, min_v: int, max_v: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        v = int(raw.strip(), 0)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer", value=raw) from e
    if v < min_v:
        return min_v
    if v > max_v:
        return max_v
    return v


def _env_choice(name: str, default: str, choices: tuple[str, ...], *, upper: bool = False) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    val = raw.strip().upper() if upper else raw.strip().lower()
    if val not in choices:
        raise ConfigError(f"{name} must be one of {', '.join(choices)}", value=raw)
    return val


# ------------------------------- config --------------------------------------


@dataclass(frozen=True)
class AbiConfig:
    # Leading byte of a 21-byte TVM address (0x41 → base58 "T...").
    address_prefix: int

    # Default tokenizer mode for high-level helpers and the CLI.
    tokenizer_mode: str

    # Upper bound on payloads accepted by decode().
    max_decode_bytes: int

    # Logging
    log_level: str
    log_format: str

    @property
    def log_json(self) -> Optional[bool]:
        if self.log_format == "auto":
            return None
        return self.log_format == "json"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "address_prefix": f"0x{self.address_prefix:02x}",
            "tokenizer_mode": self.tokenizer_mode,
            "max_decode_bytes": self.max_decode_bytes,
            "log_level": self.log_level,
            "log_format": self.log_format,
        }


@lru_cache(maxsize=1)
def load_config() -> AbiConfig:
    """
    Build and cache an AbiConfig from environment + safe defaults.
    Call `load_config.cache_clear()` after changing the environment.
    """
    return AbiConfig(
        address_prefix=_env_int("TVM_ABI_ADDRESS_PREFIX", 0x41, min_v=0x00, max_v=0xFF),
        tokenizer_mode=_env_choice("TVM_ABI_TOKENIZER_MODE", "lenient", _TOKENIZER_MODES),
        max_decode_bytes=_env_int(
            "TVM_ABI_MAX_DECODE_BYTES", 1_048_576, min_v=1_024, max_v=268_435_456
        ),
        log_level=_env_choice("TVM_ABI_LOG_LEVEL", "WARNING", _LOG_LEVELS, upper=True),
        log_format=_env_choice("TVM_ABI_LOG_FORMAT", "auto", _LOG_FORMATS),
    )


__all__ = ["AbiConfig", "load_config"]
