"""
tvm_abi.hashing — digest providers and hex helpers
==================================================

- Keccak-256 (pycryptodome) for method selectors
- Hex helpers (`to_hex`, `from_hex`) with 0x-prefix handling

`keccak256` is the default hash provider consumed by the signature builder;
callers may inject any `Callable[[bytes], bytes]` returning 32 bytes instead.
"""

from __future__ import annotations

import binascii
from typing import Callable

from Crypto.Hash import keccak as _keccak

__all__ = [
    "HashProvider",
    "to_hex",
    "from_hex",
    "keccak256",
]

HashProvider = Callable[[bytes], bytes]


# ---------------------------------------------------------------------------
# Hex helpers
# ---------------------------------------------------------------------------


def to_hex(b: bytes, prefix: str = "0x") -> str:
    """Convert bytes to a lower-case hex string with optional prefix (default `0x`)."""
    if not isinstance(b, (bytes, bytearray, memoryview)):
        raise TypeError("to_hex expects bytes-like input")
    return (prefix or "") + binascii.hexlify(bytes(b)).decode("ascii")


def from_hex(s: str | bytes | bytearray | memoryview) -> bytes:
    """
    Parse hex into bytes. Accepts strings with/without 0x prefix and ignores
    leading/trailing whitespace. Odd-length input is rejected.
    """
    if isinstance(s, (bytes, bytearray, memoryview)):
        s = bytes(s).decode("ascii")
    if not isinstance(s, str):
        raise TypeError("from_hex expects str or bytes-like input")

    s = s.strip()
    if s[:2] in ("0x", "0X"):
        s = s[2:]
    if len(s) % 2:
        raise ValueError("hex string must have an even number of digits")
    try:
        return binascii.unhexlify(s)
    except binascii.Error as e:
        raise ValueError(f"invalid hex string: {e}") from e


# ---------------------------------------------------------------------------
# Digests
# ---------------------------------------------------------------------------


def keccak256(data: bytes | bytearray | memoryview) -> bytes:
    """Keccak-256 (pre-standard SHA-3) digest of `data`."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("keccak256 expects bytes-like input")
    h = _keccak.new(digest_bits=256)
    h.update(bytes(data))
    return h.digest()
