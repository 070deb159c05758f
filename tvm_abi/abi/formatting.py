r"""
Token → display string.

Rendering rules:
- address        base58check ("T...")
- string         double-quoted, with \\ \" \n \r \t \0 and \u{..} escapes
- uint / int     decimal
- bool           true / false
- bytes, bytesN  lowercase hex, no 0x prefix
- T[] / T[k]     "[a, b, c]"
- tuple          the placeholder "tuple(...)"

Tuples are not rendered recursively; callers that display decoded values
depend on the placeholder.
"""

from __future__ import annotations

from typing import List

from ..address import to_base58
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

__all__ = ["TUPLE_PLACEHOLDER", "quote_string", "format_token"]

TUPLE_PLACEHOLDER = "tuple(...)"

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def quote_string(s: str) -> str:
    out: List[str] = ['"']
    for ch in s:
        esc = _ESCAPES.get(ch)
        if esc is not None:
            out.append(esc)
        elif not ch.isprintable():
            out.append(f"\\u{{{ord(ch):x}}}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)


def format_token(token: Token) -> str:
    if isinstance(token, AddressToken):
        return to_base58(token.value)
    if isinstance(token, StringToken):
        return quote_string(token.value)
    if isinstance(token, (UintToken, IntToken)):
        return str(token.value)
    if isinstance(token, BoolToken):
        return "true" if token.value else "false"
    if isinstance(token, (BytesToken, FixedBytesToken)):
        return token.value.hex()
    if isinstance(token, (ArrayToken, FixedArrayToken)):
        return "[" + ", ".join(format_token(t) for t in token.items) + "]"
    if isinstance(token, TupleToken):
        return TUPLE_PLACEHOLDER
    raise TypeError(f"not an ABI token: {token!r}")
