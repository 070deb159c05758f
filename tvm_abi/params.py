"""
tvm_abi.params
--------------

High-level helpers used by wallets and CLIs to build contract calls from
user-typed strings and to render returned data:

    encode_params(["address", "uint256"], ["TLa2f6...", "100"])  -> bytes
    decode_params(["uint256", "bool"], "0x...")                 -> ["100", "true"]
    encode_call("transfer(address,uint256)", [...])             -> selector || params
    decode_output(entry, "0x...")                               -> formatted outputs

Type strings go through alias resolution (`trcToken` → `uint256`) before
parsing; values are tokenized leniently unless a mode is given.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Union

from .abi.decoding import decode
from .abi.encoding import encode
from .abi.entry import AbiEntry
from .abi.formatting import format_token
from .abi.signature import fnhash, method_name, output_types
from .abi.tokenizer import TokenizerMode, tokenize_all
from .abi.types import TypeDescriptor, parse_type
from .errors import TokenizeError
from .hashing import HashProvider, from_hex

__all__ = [
    "parse_param_types",
    "encode_params",
    "decode_params",
    "encode_call",
    "decode_output",
]

log = logging.getLogger(__name__)


def parse_param_types(types: Sequence[str]) -> List[TypeDescriptor]:
    return [parse_type(t) for t in types]


def encode_params(
    types: Sequence[str],
    values: Sequence[str],
    *,
    mode: Union[TokenizerMode, str] = TokenizerMode.LENIENT,
) -> bytes:
    """
    Encode textual `values` declared as `types`. The two lists must have the
    same length (ValueError otherwise; that is a caller bug, not bad input).
    """
    if len(types) != len(values):
        raise ValueError(f"types and values length mismatch: {len(types)} != {len(values)}")
    descriptors = parse_param_types(types)
    try:
        tokens = tokenize_all(descriptors, values, mode)
    except TokenizeError as e:
        raise e.with_context(types=list(types)) from e
    data = encode(tokens)
    log.debug("encoded params", extra={"types": list(types), "size": len(data)})
    return data


def decode_params(types: Sequence[str], data: Union[str, bytes]) -> List[str]:
    """Decode hex (0x optional) or raw bytes returned for `types` into display strings."""
    descriptors = parse_param_types(types)
    raw = from_hex(data) if isinstance(data, str) else bytes(data)
    tokens = decode(descriptors, raw)
    return [format_token(t) for t in tokens]


def encode_call(
    method: Union[str, AbiEntry],
    values: Sequence[str],
    *,
    types: Optional[Sequence[str]] = None,
    hasher: Optional[HashProvider] = None,
    mode: Union[TokenizerMode, str] = TokenizerMode.LENIENT,
) -> bytes:
    """
    Build call data: 4-byte selector followed by the encoded parameters.

    `method` is an ABI entry or a signature such as "transfer(address,uint256)";
    for a signature the parameter types are read from it unless `types` is given.
    """
    if isinstance(method, AbiEntry):
        signature = method_name(method)
        param_types = list(types) if types is not None else [p.type for p in method.inputs]
    else:
        signature = method.strip()
        param_types = list(types) if types is not None else _signature_types(signature)
    return fnhash(signature, hasher) + encode_params(param_types, values, mode=mode)


def decode_output(entry: AbiEntry, data: Union[str, bytes]) -> List[str]:
    return decode_params(output_types(entry), data)


def _signature_types(signature: str) -> List[str]:
    open_at = signature.find("(")
    if open_at <= 0 or not signature.endswith(")"):
        raise ValueError(f"not a method signature: {signature!r}")
    body = signature[open_at + 1 : -1]
    if not body:
        return []
    # Reuse the type grammar to split top-level commas (tuples may nest).
    return [c.name for c in parse_type(f"({body})").components]  # type: ignore[union-attr]
