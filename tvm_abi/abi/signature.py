"""
Signatures and selectors for ABI entries.

    method_name(entry)      -> "transfer(address,uint256)"
    selector(entry)         -> keccak256(method_name)[:4]
    pretty_signature(entry) -> "function transfer(address to, uint256 value) returns (bool)"

`method_name` uses the raw declared type strings (no alias rewriting, no
canonicalisation), so the selector is a pure function of the entry's name and
input types; parameter names never affect it.
"""

from __future__ import annotations

import io
from typing import List, Optional, TextIO

from ..errors import FormatIoError
from ..hashing import HashProvider, keccak256
from .entry import AbiEntry, AbiParam, EntryType, StateMutability

__all__ = [
    "SELECTOR_SIZE",
    "fnhash",
    "method_name",
    "selector",
    "pretty_signature",
    "input_types",
    "output_types",
]

SELECTOR_SIZE = 4

_KIND = {
    EntryType.FUNCTION: "function",
    EntryType.FALLBACK: "function",
    EntryType.EVENT: "event",
    EntryType.CONSTRUCTOR: "constructor",
}


def fnhash(signature: str, hasher: Optional[HashProvider] = None) -> bytes:
    """First 4 bytes of the hash of a canonical signature string."""
    return (hasher or keccak256)(signature.encode("utf-8"))[:SELECTOR_SIZE]


def input_types(entry: AbiEntry) -> List[str]:
    return [p.type for p in entry.inputs]


def output_types(entry: AbiEntry) -> List[str]:
    return [p.type for p in entry.outputs]


def method_name(entry: AbiEntry) -> str:
    return f"{entry.name}({','.join(input_types(entry))})"


def selector(entry: AbiEntry, hasher: Optional[HashProvider] = None) -> bytes:
    return fnhash(method_name(entry), hasher)


def _pretty_arg(p: AbiParam) -> str:
    if not p.name:
        return p.type
    if p.indexed:
        return f"{p.type} indexed {p.name}"
    return f"{p.type} {p.name}"


def _write_signature(out: TextIO, entry: AbiEntry) -> None:
    out.write(_KIND.get(entry.type, ""))
    if entry.type is not EntryType.FALLBACK:
        out.write(f" {entry.name}")
    out.write("(" + ", ".join(_pretty_arg(p) for p in entry.inputs) + ")")
    if entry.payable:
        out.write(" payable")
    if entry.state_mutability is StateMutability.VIEW:
        out.write(" view")
    if entry.outputs:
        out.write(" returns (" + ", ".join(output_types(entry)) + ")")


def pretty_signature(entry: AbiEntry) -> str:
    """
    Human-readable declaration:

        <kind> <name>(<args>)[ payable][ view][ returns (<types>)]

    Fallback entries keep the `function` kind but drop the name. Writer
    faults are reported as FormatIoError.
    """
    buf = io.StringIO()
    try:
        _write_signature(buf, entry)
    except (OSError, ValueError) as e:
        raise FormatIoError("failed to write signature", entry=entry.name, reason=str(e)) from e
    return buf.getvalue()
