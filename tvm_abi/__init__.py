"""
tvm_abi — contract-ABI parameter codec for the TRON virtual machine.

A small, stable façade over the codec so wallets and CLIs can rely on a
consistent API:

- encode_params(types, values) -> bytes
    Parse type strings, tokenize user-typed values leniently, encode head/tail.
- decode_params(types, data) -> list[str]
    Decode returned data (hex or bytes) and render each value for display.
- encode_call(signature_or_entry, values) -> bytes
    4-byte selector followed by the encoded parameters.
- method_name / selector / pretty_signature
    Canonical signature, keccak-derived selector, human-readable declaration.

The lower-level pieces (descriptors, tokens, tokenizer, encoder, decoder,
formatter) live in `tvm_abi.abi`.
"""

from __future__ import annotations

from .abi import (
    AbiEntry,
    AbiParam,
    EntryType,
    StateMutability,
    TokenizerMode,
    decode,
    encode,
    format_token,
    input_types,
    load_abi,
    method_name,
    output_types,
    parse_type,
    pretty_signature,
    selector,
    tokenize,
)
from .errors import (
    AbiError,
    DecodeError,
    FormatError,
    TokenizeError,
    TypeParseError,
)
from .params import decode_output, decode_params, encode_call, encode_params
from .version import __version__


def version() -> str:
    """Return the tvm_abi semantic version string."""
    return __version__


__all__ = [
    "__version__",
    "version",
    # high level
    "encode_params",
    "decode_params",
    "encode_call",
    "decode_output",
    # building blocks
    "parse_type",
    "tokenize",
    "TokenizerMode",
    "encode",
    "decode",
    "format_token",
    # entries & signatures
    "AbiEntry",
    "AbiParam",
    "EntryType",
    "StateMutability",
    "load_abi",
    "method_name",
    "selector",
    "pretty_signature",
    "input_types",
    "output_types",
    # errors
    "AbiError",
    "TypeParseError",
    "TokenizeError",
    "DecodeError",
    "FormatError",
]
