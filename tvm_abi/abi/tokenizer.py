"""
Text → token conversion.

A single recursive tokenizer handles arrays (`[a, b]`) and tuples (`(a, b)`)
the same way in every mode; only leaf values are parsed by a mode-specific
strategy:

lenient (used for building calls from user input)
    uint/int   decimal (`-12`) or 0x-hex (`0xff`, `-0x10`)
    bool       true | false | 1 | 0
    address    base58check `T...`, 41-prefixed hex, or 20-byte hex; 0x optional
    bytes      hex, 0x optional
    bytesN     hex, 0x optional; shorter input is right-padded
    string     quoted ("a, b") or bare text

strict (exact canonical forms)
    uint/int   exactly 64 hex digits, no prefix (int in two's complement)
    bool       true | false
    address    exactly 40 hex digits, no prefix
    bytes      hex, no prefix
    bytesN     hex, no prefix, exactly N bytes
    string     taken verbatim
"""

from __future__ import annotations

import re
from enum import Enum
from typing import List, Sequence, Union

from ..address import parse_address
from ..errors import (
    AddressError,
    TokenArityMismatch,
    TokenOutOfRange,
    TokenTypeMismatch,
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
    "TokenizerMode",
    "LenientStrategy",
    "StrictStrategy",
    "tokenize",
    "tokenize_all",
]

_DEC_RE = re.compile(r"-?[0-9]+")
_HEX_NUM_RE = re.compile(r"-?0[xX][0-9a-fA-F]+")
_HEX_RE = re.compile(r"(?:[0-9a-fA-F]{2})*")
_WORD_HEX_RE = re.compile(r"[0-9a-fA-F]{64}")
_ADDR_HEX_RE = re.compile(r"[0-9a-fA-F]{40}")


class TokenizerMode(str, Enum):
    LENIENT = "lenient"
    STRICT = "strict"


# ──────────────────────────────────────────────────────────────────────────────
# Leaf strategies
# ──────────────────────────────────────────────────────────────────────────────


def _check_uint(typ: UIntType, v: int, text: str) -> UintToken:
    if v < 0 or v > typ.max_value:
        raise TokenOutOfRange(typ.name, text)
    return UintToken(v)


def _check_int(typ: IntType, v: int, text: str) -> IntToken:
    if v < typ.min_value or v > typ.max_value:
        raise TokenOutOfRange(typ.name, text)
    return IntToken(v)


def _unhex(typ: TypeDescriptor, text: str, body: str) -> bytes:
    if not _HEX_RE.fullmatch(body):
        raise TokenTypeMismatch(typ.name, text, "expected an even number of hex digits")
    return bytes.fromhex(body)


def _strip_0x(s: str) -> str:
    return s[2:] if s[:2] in ("0x", "0X") else s


class LenientStrategy:
    """Best-effort coercion of user-typed values."""

    def parse_bool(self, typ: BoolType, text: str) -> BoolToken:
        s = text.strip()
        if s in ("true", "1"):
            return BoolToken(True)
        if s in ("false", "0"):
            return BoolToken(False)
        raise TokenTypeMismatch(typ.name, text)

    def _number(self, typ: TypeDescriptor, text: str) -> int:
        s = text.strip()
        if _DEC_RE.fullmatch(s):
            return int(s, 10)
        if _HEX_NUM_RE.fullmatch(s):
            return int(s, 16)
        raise TokenTypeMismatch(typ.name, text, "expected decimal or 0x-hex")

    def parse_uint(self, typ: UIntType, text: str) -> UintToken:
        return _check_uint(typ, self._number(typ, text), text)

    def parse_int(self, typ: IntType, text: str) -> IntToken:
        return _check_int(typ, self._number(typ, text), text)

    def parse_address(self, typ: AddressType, text: str) -> AddressToken:
        try:
            return AddressToken(parse_address(text))
        except AddressError as e:
            raise TokenTypeMismatch(typ.name, text, e.message) from e

    def parse_bytes(self, typ: BytesType, text: str) -> BytesToken:
        return BytesToken(_unhex(typ, text, _strip_0x(text.strip())))

    def parse_fixed_bytes(self, typ: FixedBytesType, text: str) -> FixedBytesToken:
        raw = _unhex(typ, text, _strip_0x(text.strip()))
        if len(raw) > typ.size:
            raise TokenOutOfRange(typ.name, text)
        return FixedBytesToken(raw.ljust(typ.size, b"\x00"))

    def parse_string(self, typ: StringType, text: str) -> StringToken:
        if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
            return StringToken(_unquote(text[1:-1]))
        return StringToken(text)


class StrictStrategy:
    """Exact canonical forms only; no prefixes, no padding, no coercion."""

    def parse_bool(self, typ: BoolType, text: str) -> BoolToken:
        if text == "true":
            return BoolToken(True)
        if text == "false":
            return BoolToken(False)
        raise TokenTypeMismatch(typ.name, text, "expected true or false")

    def _word(self, typ: TypeDescriptor, text: str) -> bytes:
        if not _WORD_HEX_RE.fullmatch(text):
            raise TokenTypeMismatch(typ.name, text, "expected 64 hex digits")
        return bytes.fromhex(text)

    def parse_uint(self, typ: UIntType, text: str) -> UintToken:
        return _check_uint(typ, int.from_bytes(self._word(typ, text), "big"), text)

    def parse_int(self, typ: IntType, text: str) -> IntToken:
        return _check_int(typ, int.from_bytes(self._word(typ, text), "big", signed=True), text)

    def parse_address(self, typ: AddressType, text: str) -> AddressToken:
        if not _ADDR_HEX_RE.fullmatch(text):
            raise TokenTypeMismatch(typ.name, text, "expected 40 hex digits")
        return AddressToken(bytes.fromhex(text))

    def parse_bytes(self, typ: BytesType, text: str) -> BytesToken:
        return BytesToken(_unhex(typ, text, text))

    def parse_fixed_bytes(self, typ: FixedBytesType, text: str) -> FixedBytesToken:
        raw = _unhex(typ, text, text)
        if len(raw) > typ.size:
            raise TokenOutOfRange(typ.name, text)
        if len(raw) < typ.size:
            raise TokenTypeMismatch(typ.name, text, f"expected exactly {typ.size} bytes")
        return FixedBytesToken(raw)

    def parse_string(self, typ: StringType, text: str) -> StringToken:
        return StringToken(text)


Strategy = Union[LenientStrategy, StrictStrategy]

_STRATEGIES = {
    TokenizerMode.LENIENT: LenientStrategy(),
    TokenizerMode.STRICT: StrictStrategy(),
}


# ──────────────────────────────────────────────────────────────────────────────
# Composite splitting (shared by every mode)
# ──────────────────────────────────────────────────────────────────────────────


def _unquote(s: str) -> str:
    out: List[str] = []
    escaped = False
    for ch in s:
        if escaped:
            out.append(ch)
            escaped = False
        elif ch == "\\":
            escaped = True
        else:
            out.append(ch)
    if escaped:
        out.append("\\")
    return "".join(out)


def _split_composite(typ: TypeDescriptor, text: str, open_ch: str, close_ch: str) -> List[str]:
    """
    Split `[a, b, c]` / `(a, b, c)` into element texts, honouring nested
    brackets/parens and double-quoted strings (with backslash escapes).
    """
    s = text.strip()
    if len(s) < 2 or s[0] != open_ch or s[-1] != close_ch:
        raise TokenTypeMismatch(typ.name, text, f"expected {open_ch}...{close_ch}")
    body = s[1:-1]
    if not body.strip():
        return []

    items: List[str] = []
    depth = 0
    in_quotes = False
    escaped = False
    start = 0
    for i, ch in enumerate(body):
        if in_quotes:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_quotes = False
            continue
        if ch == '"':
            in_quotes = True
        elif ch in "[(":
            depth += 1
        elif ch in "])":
            depth -= 1
            if depth < 0:
                raise TokenTypeMismatch(typ.name, text, "unbalanced brackets")
        elif ch == "," and depth == 0:
            items.append(body[start:i].strip())
            start = i + 1
    if depth != 0 or in_quotes:
        raise TokenTypeMismatch(typ.name, text, "unbalanced brackets or quotes")
    items.append(body[start:].strip())
    if any(item == "" for item in items):
        raise TokenTypeMismatch(typ.name, text, "empty element")
    return items


def _tokenize(typ: TypeDescriptor, text: str, strategy: Strategy) -> Token:
    if isinstance(typ, ArrayType):
        parts = _split_composite(typ, text, "[", "]")
        return ArrayToken(tuple(_tokenize(typ.inner, p, strategy) for p in parts))

    if isinstance(typ, FixedArrayType):
        parts = _split_composite(typ, text, "[", "]")
        if len(parts) != typ.length:
            raise TokenArityMismatch(typ.name, typ.length, len(parts))
        return FixedArrayToken(tuple(_tokenize(typ.inner, p, strategy) for p in parts))

    if isinstance(typ, TupleType):
        parts = _split_composite(typ, text, "(", ")")
        if len(parts) != len(typ.components):
            raise TokenArityMismatch(typ.name, len(typ.components), len(parts))
        return TupleToken(tuple(_tokenize(c, p, strategy) for c, p in zip(typ.components, parts)))

    if isinstance(typ, BoolType):
        return strategy.parse_bool(typ, text)
    if isinstance(typ, UIntType):
        return strategy.parse_uint(typ, text)
    if isinstance(typ, IntType):
        return strategy.parse_int(typ, text)
    if isinstance(typ, AddressType):
        return strategy.parse_address(typ, text)
    if isinstance(typ, FixedBytesType):
        return strategy.parse_fixed_bytes(typ, text)
    if isinstance(typ, BytesType):
        return strategy.parse_bytes(typ, text)
    if isinstance(typ, StringType):
        return strategy.parse_string(typ, text)

    raise TypeError(f"not an ABI type descriptor: {typ!r}")


# ──────────────────────────────────────────────────────────────────────────────
# Public API
# ──────────────────────────────────────────────────────────────────────────────


def tokenize(
    typ: TypeDescriptor,
    text: str,
    mode: Union[TokenizerMode, str] = TokenizerMode.LENIENT,
) -> Token:
    """Convert `text` to a token of shape `typ`, parsing leaves per `mode`."""
    return _tokenize(typ, text, _STRATEGIES[TokenizerMode(mode)])


def tokenize_all(
    types: Sequence[TypeDescriptor],
    texts: Sequence[str],
    mode: Union[TokenizerMode, str] = TokenizerMode.LENIENT,
) -> List[Token]:
    """
    Tokenize parallel lists of descriptors and texts. The lists must have equal
    length; a mismatch is a caller bug and raises ValueError immediately.
    """
    if len(types) != len(texts):
        raise ValueError(f"types and values length mismatch: {len(types)} != {len(texts)}")
    strategy = _STRATEGIES[TokenizerMode(mode)]
    return [_tokenize(t, v, strategy) for t, v in zip(types, texts)]
