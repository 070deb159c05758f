"""
ABI type descriptors and the type-string parser.

A descriptor is an immutable tree built from the textual type grammar:

    T := bool | address | string | bytes | bytesN | uintN | intN | uint | int
       | "(" [T ("," T)*] ")"          tuple
       | T "[]"                        dynamic array
       | T "[" N "]"                   fixed array, N >= 1

with N ∈ [1, 32] for bytesN and N ∈ {8, 16, ..., 256} for (u)intN. The bare
`uint` / `int` names are aliases for the 256-bit widths.

TVM-native aliases (`trcToken` → `uint256`) are substituted on the raw string
by `resolve_alias()` before the grammar is applied.

Every descriptor knows its canonical name (`.name`), whether it is dynamic in
the head/tail layout (`.is_dynamic`) and how many bytes it occupies in a head
(`.head_size`).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Tuple, Union

from ..errors import MalformedTypeError

__all__ = [
    "WORD",
    "BoolType",
    "UIntType",
    "IntType",
    "AddressType",
    "FixedBytesType",
    "BytesType",
    "StringType",
    "ArrayType",
    "FixedArrayType",
    "TupleType",
    "TypeDescriptor",
    "TYPE_ALIASES",
    "MAX_TYPE_DEPTH",
    "resolve_alias",
    "parse_type",
    "parse_types",
]

# Size of one ABI word in bytes.
WORD = 32

# Chain-native designators rewritten before parsing.
TYPE_ALIASES = {
    "trcToken": "uint256",
}

_ALIAS_RE = re.compile(
    r"(?<![A-Za-z0-9_])(" + "|".join(map(re.escape, TYPE_ALIASES)) + r")(?![A-Za-z0-9_])"
)
_INT_RE = re.compile(r"(u?int)([0-9]*)")
_BYTES_RE = re.compile(r"bytes([0-9]+)")
_DIGITS_RE = re.compile(r"[0-9]+")

# Deepest accepted nesting of array suffixes and tuples.
MAX_TYPE_DEPTH = 64


# ──────────────────────────────────────────────────────────────────────────────
# Descriptors
# ──────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class BoolType:
    @property
    def name(self) -> str:
        return "bool"

    is_dynamic = False
    head_size = WORD


@dataclass(frozen=True)
class UIntType:
    bits: int = 256

    @property
    def name(self) -> str:
        return f"uint{self.bits}"

    @property
    def max_value(self) -> int:
        return (1 << self.bits) - 1

    is_dynamic = False
    head_size = WORD


@dataclass(frozen=True)
class IntType:
    bits: int = 256

    @property
    def name(self) -> str:
        return f"int{self.bits}"

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1))

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1

    is_dynamic = False
    head_size = WORD


@dataclass(frozen=True)
class AddressType:
    @property
    def name(self) -> str:
        return "address"

    is_dynamic = False
    head_size = WORD


@dataclass(frozen=True)
class FixedBytesType:
    size: int

    @property
    def name(self) -> str:
        return f"bytes{self.size}"

    is_dynamic = False
    head_size = WORD


@dataclass(frozen=True)
class BytesType:
    @property
    def name(self) -> str:
        return "bytes"

    is_dynamic = True
    head_size = WORD


@dataclass(frozen=True)
class StringType:
    @property
    def name(self) -> str:
        return "string"

    is_dynamic = True
    head_size = WORD


@dataclass(frozen=True)
class ArrayType:
    inner: "TypeDescriptor"

    @property
    def name(self) -> str:
        return f"{self.inner.name}[]"

    is_dynamic = True
    head_size = WORD


@dataclass(frozen=True)
class FixedArrayType:
    inner: "TypeDescriptor"
    length: int

    @property
    def name(self) -> str:
        return f"{self.inner.name}[{self.length}]"

    @property
    def is_dynamic(self) -> bool:
        return self.inner.is_dynamic

    @property
    def head_size(self) -> int:
        if self.is_dynamic:
            return WORD
        return self.inner.head_size * self.length


@dataclass(frozen=True)
class TupleType:
    components: Tuple["TypeDescriptor", ...]

    @property
    def name(self) -> str:
        return "(" + ",".join(c.name for c in self.components) + ")"

    @property
    def is_dynamic(self) -> bool:
        return any(c.is_dynamic for c in self.components)

    @property
    def head_size(self) -> int:
        if self.is_dynamic:
            return WORD
        return sum(c.head_size for c in self.components)


TypeDescriptor = Union[
    BoolType,
    UIntType,
    IntType,
    AddressType,
    FixedBytesType,
    BytesType,
    StringType,
    ArrayType,
    FixedArrayType,
    TupleType,
]


# ──────────────────────────────────────────────────────────────────────────────
# Parser for textual type specs
# ──────────────────────────────────────────────────────────────────────────────


def resolve_alias(type_string: str) -> str:
    """Rewrite chain-native aliases (e.g. `trcToken`) to their standard ABI names."""
    return _ALIAS_RE.sub(lambda m: TYPE_ALIASES[m.group(1)], type_string)


def parse_type(type_string: str) -> TypeDescriptor:
    """
    Parse a textual type spec into a descriptor tree.

    Raises MalformedTypeError on unknown names, out-of-range widths, unbalanced
    brackets or parentheses, nesting deeper than MAX_TYPE_DEPTH, and anything
    outside the ASCII grammar.
    """
    if not isinstance(type_string, str) or not type_string:
        raise MalformedTypeError(str(type_string), "type spec must be a non-empty string")
    if not type_string.isascii():
        raise MalformedTypeError(type_string, "type spec must be ASCII")
    return _parse(resolve_alias(type_string), type_string)


def parse_types(type_strings: List[str]) -> List[TypeDescriptor]:
    return [parse_type(t) for t in type_strings]


def _parse(s: str, original: str, depth: int = 0) -> TypeDescriptor:
    if depth > MAX_TYPE_DEPTH:
        raise MalformedTypeError(original, "nesting too deep")
    if not s:
        raise MalformedTypeError(original, "empty type")

    if s.endswith("]"):
        i = s.rfind("[")
        if i <= 0:
            raise MalformedTypeError(original, "unbalanced brackets")
        inner = _parse(s[:i], original, depth + 1)
        dim = s[i + 1 : -1]
        if dim == "":
            return ArrayType(inner)
        if not _DIGITS_RE.fullmatch(dim) or dim.startswith("0"):
            raise MalformedTypeError(original, f"invalid array length {dim!r}")
        return FixedArrayType(inner, int(dim))

    if s.startswith("("):
        if not s.endswith(")"):
            raise MalformedTypeError(original, "unbalanced parentheses")
        body = s[1:-1]
        if body == "":
            return TupleType(())
        parts = _split_top_level(body, original)
        return TupleType(tuple(_parse(part, original, depth + 1) for part in parts))

    return _parse_elementary(s, original)


def _split_top_level(body: str, original: str) -> List[str]:
    """Split a tuple body on commas that are not nested in () or []."""
    parts: List[str] = []
    depth = 0
    start = 0
    for i, ch in enumerate(body):
        if ch in "([":
            depth += 1
        elif ch in ")]":
            depth -= 1
            if depth < 0:
                raise MalformedTypeError(original, "unbalanced parentheses")
        elif ch == "," and depth == 0:
            parts.append(body[start:i])
            start = i + 1
    if depth != 0:
        raise MalformedTypeError(original, "unbalanced parentheses")
    parts.append(body[start:])
    if any(p == "" for p in parts):
        raise MalformedTypeError(original, "empty tuple component")
    return parts


def _parse_elementary(s: str, original: str) -> TypeDescriptor:
    if s == "bool":
        return BoolType()
    if s == "address":
        return AddressType()
    if s == "string":
        return StringType()
    if s == "bytes":
        return BytesType()

    m = _BYTES_RE.fullmatch(s)
    if m:
        digits = m.group(1)
        n = int(digits)
        if digits.startswith("0") or n < 1 or n > WORD:
            raise MalformedTypeError(original, "bytesN length must be in 1..32")
        return FixedBytesType(n)

    m = _INT_RE.fullmatch(s)
    if m:
        kind, digits = m.groups()
        if digits == "":
            bits = 256
        else:
            if digits.startswith("0"):
                raise MalformedTypeError(original, "invalid integer bit width")
            bits = int(digits)
            _assert_bits(bits, original)
        return UIntType(bits) if kind == "uint" else IntType(bits)

    raise MalformedTypeError(original, "unsupported type")


def _assert_bits(bits: int, original: str) -> None:
    if bits < 8 or bits > 256 or bits % 8:
        raise MalformedTypeError(original, "bit width must be a multiple of 8 in 8..256")
