"""
In-memory ABI values ("tokens").

Each token class mirrors one descriptor shape. Tokens are frozen and compare
by value, so `decode(types, encode(tokens)) == tokens` can be checked with
plain equality.

`FixedArrayToken` is distinct from `ArrayToken` because the encoder works on
tokens alone and the two are laid out differently (no length word for
fixed-size arrays).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

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
    "BoolToken",
    "UintToken",
    "IntToken",
    "AddressToken",
    "FixedBytesToken",
    "BytesToken",
    "StringToken",
    "ArrayToken",
    "FixedArrayToken",
    "TupleToken",
    "Token",
    "is_dynamic_token",
    "matches",
]


@dataclass(frozen=True)
class BoolToken:
    value: bool


@dataclass(frozen=True)
class UintToken:
    value: int


@dataclass(frozen=True)
class IntToken:
    value: int


@dataclass(frozen=True)
class AddressToken:
    value: bytes  # exactly 20 raw bytes, no network prefix

    def __post_init__(self) -> None:
        if len(self.value) != 20:
            raise ValueError("address token must hold exactly 20 bytes")


@dataclass(frozen=True)
class FixedBytesToken:
    value: bytes


@dataclass(frozen=True)
class BytesToken:
    value: bytes


@dataclass(frozen=True)
class StringToken:
    value: str


@dataclass(frozen=True)
class ArrayToken:
    items: Tuple["Token", ...] = ()


@dataclass(frozen=True)
class FixedArrayToken:
    items: Tuple["Token", ...] = ()


@dataclass(frozen=True)
class TupleToken:
    items: Tuple["Token", ...] = ()


Token = Union[
    BoolToken,
    UintToken,
    IntToken,
    AddressToken,
    FixedBytesToken,
    BytesToken,
    StringToken,
    ArrayToken,
    FixedArrayToken,
    TupleToken,
]


def is_dynamic_token(token: Token) -> bool:
    if isinstance(token, (BytesToken, StringToken, ArrayToken)):
        return True
    if isinstance(token, (FixedArrayToken, TupleToken)):
        return any(is_dynamic_token(t) for t in token.items)
    return False


def matches(token: Token, typ: TypeDescriptor) -> bool:
    """True if `token` has the shape (and value ranges) described by `typ`."""
    if isinstance(typ, BoolType):
        return isinstance(token, BoolToken)
    if isinstance(typ, UIntType):
        return isinstance(token, UintToken) and 0 <= token.value <= typ.max_value
    if isinstance(typ, IntType):
        return isinstance(token, IntToken) and typ.min_value <= token.value <= typ.max_value
    if isinstance(typ, AddressType):
        return isinstance(token, AddressToken)
    if isinstance(typ, FixedBytesType):
        return isinstance(token, FixedBytesToken) and len(token.value) == typ.size
    if isinstance(typ, BytesType):
        return isinstance(token, BytesToken)
    if isinstance(typ, StringType):
        return isinstance(token, StringToken)
    if isinstance(typ, ArrayType):
        return isinstance(token, ArrayToken) and all(matches(t, typ.inner) for t in token.items)
    if isinstance(typ, FixedArrayType):
        return (
            isinstance(token, FixedArrayToken)
            and len(token.items) == typ.length
            and all(matches(t, typ.inner) for t in token.items)
        )
    if isinstance(typ, TupleType):
        return (
            isinstance(token, TupleToken)
            and len(token.items) == len(typ.components)
            and all(matches(t, c) for t, c in zip(token.items, typ.components))
        )
    return False
