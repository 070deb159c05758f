"""
ABI entry model (functions, events, constructors, fallbacks).

Entries are read-only inputs to the signature builder. They are usually
loaded from a contract's published ABI, either the TRON node shape

    {"entrys": [{"type": "Function", "name": "transfer",
                 "stateMutability": "Nonpayable", "inputs": [...], ...}]}

or a bare list of entries in the Solidity/ethers shape (lower-case type and
mutability names). Both are accepted by `load_abi`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple, Union

__all__ = [
    "EntryType",
    "StateMutability",
    "AbiParam",
    "AbiEntry",
    "load_abi",
]


class EntryType(str, Enum):
    UNKNOWN = "unknown"
    FUNCTION = "function"
    FALLBACK = "fallback"
    EVENT = "event"
    CONSTRUCTOR = "constructor"
    RECEIVE = "receive"
    ERROR = "error"

    @classmethod
    def parse(cls, raw: Any) -> "EntryType":
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw or "").strip().lower())
        except ValueError:
            return cls.UNKNOWN


class StateMutability(str, Enum):
    UNKNOWN = "unknown"
    PURE = "pure"
    VIEW = "view"
    NONPAYABLE = "nonpayable"
    PAYABLE = "payable"

    @classmethod
    def parse(cls, raw: Any) -> "StateMutability":
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw or "").strip().lower())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class AbiParam:
    type: str
    name: str = ""
    indexed: bool = False

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "AbiParam":
        return cls(
            type=str(d.get("type", "")),
            name=str(d.get("name") or ""),
            indexed=bool(d.get("indexed", False)),
        )


@dataclass(frozen=True)
class AbiEntry:
    name: str = ""
    type: EntryType = EntryType.FUNCTION
    inputs: Tuple[AbiParam, ...] = field(default_factory=tuple)
    outputs: Tuple[AbiParam, ...] = field(default_factory=tuple)
    payable: bool = False
    state_mutability: StateMutability = StateMutability.UNKNOWN
    constant: bool = False
    anonymous: bool = False

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "AbiEntry":
        mutability = StateMutability.parse(d.get("stateMutability", d.get("state_mutability")))
        return cls(
            name=str(d.get("name") or ""),
            type=EntryType.parse(d.get("type", "function")),
            inputs=tuple(AbiParam.from_dict(p) for p in d.get("inputs") or ()),
            outputs=tuple(AbiParam.from_dict(p) for p in d.get("outputs") or ()),
            payable=bool(d.get("payable", mutability is StateMutability.PAYABLE)),
            state_mutability=mutability,
            constant=bool(d.get("constant", False)),
            anonymous=bool(d.get("anonymous", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type.value,
            "inputs": [{"name": p.name, "type": p.type, "indexed": p.indexed} for p in self.inputs],
            "outputs": [{"name": p.name, "type": p.type} for p in self.outputs],
            "payable": self.payable,
            "stateMutability": self.state_mutability.value,
            "constant": self.constant,
            "anonymous": self.anonymous,
        }


def load_abi(source: Union[str, Path, Mapping[str, Any], List[Any]]) -> List[AbiEntry]:
    """
    Load entries from a path, a JSON string, or already-parsed JSON.

    Accepts `{"entrys": [...]}`, `{"abi": [...]}` (also nested under
    `{"abi": {"entrys": [...]}}`) or a bare list.
    """
    obj: Any = source
    if isinstance(source, Path) or (isinstance(source, str) and not source.lstrip().startswith(("[", "{"))):
        obj = json.loads(Path(source).read_text(encoding="utf-8"))
    elif isinstance(source, str):
        obj = json.loads(source)

    while isinstance(obj, Mapping):
        if "entrys" in obj:
            obj = obj["entrys"]
        elif "abi" in obj:
            obj = obj["abi"]
        else:
            raise ValueError("ABI object must contain 'entrys' or 'abi'")
    if not isinstance(obj, list):
        raise ValueError("ABI must be a list of entries")
    return [AbiEntry.from_dict(e) for e in obj]
