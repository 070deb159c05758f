"""
Contract-ABI encoding (head/tail layout, 32-byte words).

Layout
------
A sequence of tokens is laid out as a *head* followed by a *tail*:

- static token   → encoded inline in the head
- dynamic token  → a 32-byte big-endian offset in the head (relative to the
                   start of the enclosing sequence), content appended to the tail

Primitives
----------
- bool:        uint256 word 0 or 1
- uintN:       big-endian, left-padded with zeros to 32 bytes
- intN:        two's complement, sign-extended to 32 bytes
- address:     20 raw bytes, left-padded with zeros
- bytesN:      raw bytes, right-padded with zeros
- bytes/string: length word || content right-padded to a multiple of 32
- T[]:         length word || encode(items)
- T[k], tuple: encode(items)   (inline when every item is static)

The output is bit-compatible with the standard contract ABI and its length
is always a multiple of 32.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from .tokens import (
    AddressToken,
    ArrayToken,
    BoolToken,
    BytesToken,
    FixedArrayToken,
    FixedBytesToken,
    IntToken,
    StringToken,
    Token,
    TupleToken,
    UintToken,
    is_dynamic_token,
)
from .types import WORD

__all__ = [
    "encode_word",
    "encode_token",
    "encode",
]

log = logging.getLogger(__name__)

_UINT256_MAX = (1 << 256) - 1
_INT256_MIN = -(1 << 255)
_INT256_MAX = (1 << 255) - 1


# ──────────────────────────────────────────────────────────────────────────────
# Low-level helpers
# ──────────────────────────────────────────────────────────────────────────────


def encode_word(n: int) -> bytes:
    """One big-endian uint256 word."""
    if n < 0 or n > _UINT256_MAX:
        raise ValueError(f"value does not fit in a uint256 word: {n}")
    return n.to_bytes(WORD, "big")


def _pad_right(b: bytes) -> bytes:
    rem = len(b) % WORD
    return b if rem == 0 else b + b"\x00" * (WORD - rem)


def _head_size(token: Token) -> int:
    if is_dynamic_token(token):
        return WORD
    if isinstance(token, (FixedArrayToken, TupleToken)):
        return sum(_head_size(t) for t in token.items)
    return WORD


# ──────────────────────────────────────────────────────────────────────────────
# Token encoders
# ──────────────────────────────────────────────────────────────────────────────


def encode_token(token: Token) -> bytes:
    """Full encoding of a single token (what goes in its head or tail slot)."""
    if isinstance(token, BoolToken):
        return encode_word(1 if token.value else 0)

    if isinstance(token, UintToken):
        return encode_word(token.value)

    if isinstance(token, IntToken):
        if token.value < _INT256_MIN or token.value > _INT256_MAX:
            raise ValueError(f"value does not fit in an int256 word: {token.value}")
        return token.value.to_bytes(WORD, "big", signed=True)

    if isinstance(token, AddressToken):
        return token.value.rjust(WORD, b"\x00")

    if isinstance(token, FixedBytesToken):
        if len(token.value) > WORD:
            raise ValueError("fixed bytes longer than one word")
        return token.value.ljust(WORD, b"\x00")

    if isinstance(token, BytesToken):
        return encode_word(len(token.value)) + _pad_right(token.value)

    if isinstance(token, StringToken):
        raw = token.value.encode("utf-8")
        return encode_word(len(raw)) + _pad_right(raw)

    if isinstance(token, ArrayToken):
        return encode_word(len(token.items)) + _encode_sequence(token.items)

    if isinstance(token, (FixedArrayToken, TupleToken)):
        return _encode_sequence(token.items)

    raise TypeError(f"not an ABI token: {token!r}")


def _encode_sequence(tokens: Sequence[Token]) -> bytes:
    head_len = sum(_head_size(t) for t in tokens)
    heads: List[bytes] = []
    tails: List[bytes] = []
    tail_len = 0
    for t in tokens:
        enc = encode_token(t)
        if is_dynamic_token(t):
            heads.append(encode_word(head_len + tail_len))
            tails.append(enc)
            tail_len += len(enc)
        else:
            heads.append(enc)
    return b"".join(heads) + b"".join(tails)


# ──────────────────────────────────────────────────────────────────────────────
# High-level entry point
# ──────────────────────────────────────────────────────────────────────────────


def encode(tokens: Iterable[Token]) -> bytes:
    """
    Encode a sequence of top-level tokens (e.g. function arguments) using the
    head/tail layout. Tokens are taken as-is; shape checks against declared
    types happen in the tokenizer.
    """
    items = list(tokens)
    out = _encode_sequence(items)
    log.debug("encoded %d tokens", len(items), extra={"size": len(out)})
    return out
