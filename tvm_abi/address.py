"""
TVM address codec
=================

A TVM address is 20 raw bytes (the same width the ABI encodes in a word).
On chain and in wallets it is carried with a one-byte network prefix
(0x41 by default, see `TVM_ABI_ADDRESS_PREFIX`) and shown as base58check:

    raw20                    = 1f0a...  (20 bytes, ABI word payload)
    prefixed hex             = 41 || raw20
    base58check              = "T..."   (base58(prefixed || dsha256(prefixed)[:4]))

Usage
-----
    raw = parse_address("TLa2f6VPqDgRE67v1736s7bJ8Ray5wYjU7")
    to_base58(raw)      # "TLa2f6VPqDgRE67v1736s7bJ8Ray5wYjU7"
    to_hex_address(raw) # "41..."
"""

from __future__ import annotations

import binascii
from typing import Optional

import base58

from .config import load_config
from .errors import AddressError

__all__ = [
    "ADDRESS_SIZE",
    "to_base58",
    "from_base58",
    "to_hex_address",
    "parse_address",
    "is_address",
]

ADDRESS_SIZE = 20


def _prefix(prefix: Optional[int]) -> int:
    return load_config().address_prefix if prefix is None else prefix


def _check_raw(raw: bytes) -> bytes:
    if not isinstance(raw, (bytes, bytearray)) or len(raw) != ADDRESS_SIZE:
        raise AddressError("address payload must be exactly 20 bytes", size=len(raw))
    return bytes(raw)


def to_base58(raw: bytes, *, prefix: Optional[int] = None) -> str:
    """Render 20 raw address bytes as base58check text."""
    payload = bytes([_prefix(prefix)]) + _check_raw(raw)
    return base58.b58encode_check(payload).decode("ascii")


def from_base58(text: str, *, prefix: Optional[int] = None) -> bytes:
    """Decode base58check text into 20 raw address bytes, validating the prefix."""
    try:
        payload = base58.b58decode_check(text)
    except ValueError as e:
        raise AddressError("invalid base58check address", address=text) from e
    if len(payload) != ADDRESS_SIZE + 1:
        raise AddressError("base58 address has wrong length", address=text, size=len(payload))
    if payload[0] != _prefix(prefix):
        raise AddressError("address prefix mismatch", address=text, prefix=f"0x{payload[0]:02x}")
    return payload[1:]


def to_hex_address(raw: bytes, *, prefix: Optional[int] = None) -> str:
    return f"{_prefix(prefix):02x}" + _check_raw(raw).hex()


def parse_address(text: str, *, prefix: Optional[int] = None) -> bytes:
    """
    Accept any common textual form and return 20 raw bytes:
      - base58check ("T...")
      - prefixed hex, 42 digits ("41..."), with or without 0x
      - bare hex, 40 digits, with or without 0x
    """
    if not isinstance(text, str):
        raise AddressError("address must be a string")
    s = text.strip()
    has_0x = s[:2] in ("0x", "0X")
    body = s[2:] if has_0x else s

    if len(body) in (2 * ADDRESS_SIZE, 2 * ADDRESS_SIZE + 2):
        try:
            raw = binascii.unhexlify(body)
        except ValueError:
            raw = None
        if raw is not None:
            if len(raw) == ADDRESS_SIZE:
                return raw
            if raw[0] != _prefix(prefix):
                raise AddressError("address prefix mismatch", address=text, prefix=f"0x{raw[0]:02x}")
            return raw[1:]

    if not has_0x:
        return from_base58(s, prefix=prefix)
    raise AddressError("invalid hex address", address=text)


def is_address(text: str, *, prefix: Optional[int] = None) -> bool:
    try:
        parse_address(text, prefix=prefix)
    except AddressError:
        return False
    return True
