"""
Inverse of encoding.py: contract-ABI head/tail payload → tokens.

Conventions mirrored from the encoder:
- static types are read inline from the head, one word each (fixed arrays and
  tuples of static types span several consecutive words)
- dynamic types are reached through a head word holding an offset relative to
  the start of the enclosing sequence

Failure modes (no partial results are ever returned):
- DecodeTruncatedError      a word, length or content runs past the buffer end
- DecodeInvalidOffsetError  a head offset points outside the buffer
- DecodeInvalidValueError   a word is not a canonical encoding of its type
                            (dirty padding, bool not 0/1, invalid UTF-8, ...),
                            or the decoded output outgrows the payload

Head offsets may legally point anywhere inside the buffer, so several heads
can alias one tail. Every decode call therefore carries an output budget of
`_BUDGET_FACTOR * len(payload) + _BUDGET_FLOOR` units (one per token or
element slot, plus one per content byte); exceeding it is a
DecodeInvalidValueError.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from ..config import load_config
from ..errors import (
    DecodeInvalidOffsetError,
    DecodeInvalidValueError,
    DecodeTruncatedError,
)
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
)
from .types import (
    WORD,
    AddressType,
    ArrayType,
    BoolType,
    BytesType,
    FixedArrayType,
    FixedBytesType,
    IntType,
    StringType,
    TupleType,
    TypeDescriptor,
    UIntType,
)

__all__ = [
    "decode",
]

log = logging.getLogger(__name__)

_BUDGET_FACTOR = 4
_BUDGET_FLOOR = 4096


# ──────────────────────────────────────────────────────────────────────────────
# Word readers
# ──────────────────────────────────────────────────────────────────────────────


def _read_exact(buf: bytes, offset: int, n: int) -> bytes:
    j = offset + n
    if j > len(buf):
        raise DecodeTruncatedError(offset, n, len(buf))
    return buf[offset:j]


def _read_word(buf: bytes, offset: int) -> bytes:
    return _read_exact(buf, offset, WORD)


def _read_uint(buf: bytes, offset: int) -> int:
    return int.from_bytes(_read_word(buf, offset), "big")


def _read_offset(buf: bytes, slot: int, base: int) -> int:
    rel = _read_uint(buf, slot)
    target = base + rel
    if target > len(buf):
        raise DecodeInvalidOffsetError(slot, rel, len(buf))
    return target


class _Budget:
    """Remaining output units for one decode call."""

    __slots__ = ("left", "limit")

    def __init__(self, limit: int) -> None:
        self.left = limit
        self.limit = limit

    def charge(self, typ: TypeDescriptor, units: int) -> None:
        self.left -= units
        if self.left < 0:
            raise DecodeInvalidValueError(
                typ.name, "decoded output exceeds payload budget", limit=self.limit
            )


# ──────────────────────────────────────────────────────────────────────────────
# Static (inline) values
# ──────────────────────────────────────────────────────────────────────────────


def _decode_static(typ: TypeDescriptor, buf: bytes, pos: int, budget: _Budget) -> Token:
    budget.charge(typ, 1)

    if isinstance(typ, FixedArrayType):
        step = typ.inner.head_size
        return FixedArrayToken(
            tuple(_decode_static(typ.inner, buf, pos + i * step, budget) for i in range(typ.length))
        )

    if isinstance(typ, TupleType):
        items: List[Token] = []
        for c in typ.components:
            items.append(_decode_static(c, buf, pos, budget))
            pos += c.head_size
        return TupleToken(tuple(items))

    word = _read_word(buf, pos)

    if isinstance(typ, BoolType):
        v = int.from_bytes(word, "big")
        if v not in (0, 1):
            raise DecodeInvalidValueError(typ.name, "expected 0 or 1", offset=pos)
        return BoolToken(v == 1)

    if isinstance(typ, UIntType):
        v = int.from_bytes(word, "big")
        if v > typ.max_value:
            raise DecodeInvalidValueError(typ.name, "value exceeds bit width", offset=pos)
        return UintToken(v)

    if isinstance(typ, IntType):
        v = int.from_bytes(word, "big", signed=True)
        if v < typ.min_value or v > typ.max_value:
            raise DecodeInvalidValueError(typ.name, "value exceeds bit width", offset=pos)
        return IntToken(v)

    if isinstance(typ, AddressType):
        if any(word[:12]):
            raise DecodeInvalidValueError(typ.name, "non-zero padding", offset=pos)
        return AddressToken(word[12:])

    if isinstance(typ, FixedBytesType):
        if any(word[typ.size :]):
            raise DecodeInvalidValueError(typ.name, "non-zero padding", offset=pos)
        return FixedBytesToken(word[: typ.size])

    raise TypeError(f"not a static ABI type: {typ!r}")


# ──────────────────────────────────────────────────────────────────────────────
# Dynamic values (content at an offset)
# ──────────────────────────────────────────────────────────────────────────────


def _decode_dynamic(typ: TypeDescriptor, buf: bytes, pos: int, budget: _Budget) -> Token:
    budget.charge(typ, 1)

    if isinstance(typ, (BytesType, StringType)):
        n = _read_uint(buf, pos)
        raw = _read_exact(buf, pos + WORD, n)
        budget.charge(typ, n)
        if isinstance(typ, BytesType):
            return BytesToken(raw)
        try:
            return StringToken(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise DecodeInvalidValueError(typ.name, "content is not valid UTF-8", offset=pos) from e

    if isinstance(typ, ArrayType):
        n = _read_uint(buf, pos)
        start = pos + WORD
        step = typ.inner.head_size
        if step and n * step > len(buf) - start:
            raise DecodeTruncatedError(start, n * step, len(buf))
        if not step and n > load_config().max_decode_bytes:
            raise DecodeInvalidValueError(typ.name, "element count too large", count=n)
        budget.charge(typ, n)
        return ArrayToken(tuple(_decode_sequence([typ.inner] * n, buf, start, budget)))

    if isinstance(typ, FixedArrayType):
        return FixedArrayToken(
            tuple(_decode_sequence([typ.inner] * typ.length, buf, pos, budget))
        )

    if isinstance(typ, TupleType):
        return TupleToken(tuple(_decode_sequence(typ.components, buf, pos, budget)))

    raise TypeError(f"not a dynamic ABI type: {typ!r}")


def _decode_sequence(
    types: Sequence[TypeDescriptor], buf: bytes, base: int, budget: _Budget
) -> List[Token]:
    out: List[Token] = []
    cursor = base
    for typ in types:
        if typ.is_dynamic:
            target = _read_offset(buf, cursor, base)
            out.append(_decode_dynamic(typ, buf, target, budget))
        else:
            out.append(_decode_static(typ, buf, cursor, budget))
        cursor += typ.head_size
    return out


# ──────────────────────────────────────────────────────────────────────────────
# High-level entry points
# ──────────────────────────────────────────────────────────────────────────────


def decode(types: Sequence[TypeDescriptor], data: bytes) -> List[Token]:
    """
    Decode `data` as a head/tail sequence of values of the given `types`.
    Returns one token per type, each matching its descriptor's shape.
    """
    buf = bytes(data)
    limit = load_config().max_decode_bytes
    if len(buf) > limit:
        raise DecodeInvalidValueError("payload", "exceeds max_decode_bytes", size=len(buf), limit=limit)
    budget = _Budget(_BUDGET_FACTOR * len(buf) + _BUDGET_FLOOR)
    tokens = _decode_sequence(list(types), buf, 0, budget)
    log.debug("decoded %d tokens", len(tokens), extra={"size": len(buf)})
    return tokens

