"""
tvm_abi.errors
--------------

A small, consistent error system for the ABI codec.

Design goals
------------
- One root `AbiError` with machine-friendly `code` and optional `data`.
- One family per stage: type parsing, tokenizing, decoding, formatting.
- Safe JSON representation (`to_dict`) suitable for logs and CLI output.
- Nothing is retryable: inputs are deterministic, so a retry cannot change
  the outcome.

Caller contract violations (e.g. parallel type/value lists of different
length) are *not* modelled here; they raise `ValueError` at the call site.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

__all__ = [
    "AbiErrorCode",
    "AbiError",
    "ConfigError",
    "AddressError",
    "TypeParseError",
    "MalformedTypeError",
    "TokenizeError",
    "TokenTypeMismatch",
    "TokenOutOfRange",
    "TokenArityMismatch",
    "DecodeError",
    "DecodeTruncatedError",
    "DecodeInvalidOffsetError",
    "DecodeInvalidValueError",
    "FormatError",
    "FormatIoError",
]


class AbiErrorCode(str, Enum):
    CONFIG = "ABI/CONFIG"
    ADDRESS = "ABI/ADDRESS"

    TYPE_MALFORMED = "ABI/TYPE_MALFORMED"

    TOKEN_TYPE_MISMATCH = "ABI/TOKEN_TYPE_MISMATCH"
    TOKEN_OUT_OF_RANGE = "ABI/TOKEN_OUT_OF_RANGE"
    TOKEN_ARITY_MISMATCH = "ABI/TOKEN_ARITY_MISMATCH"

    DECODE_TRUNCATED = "ABI/DECODE_TRUNCATED"
    DECODE_INVALID_OFFSET = "ABI/DECODE_INVALID_OFFSET"
    DECODE_INVALID_VALUE = "ABI/DECODE_INVALID_VALUE"

    FORMAT_IO = "ABI/FORMAT_IO"


@dataclass(eq=False)
class AbiError(Exception):
    """
    Root error for the ABI codec.

    Attributes
    ----------
    code: str
        Machine-stable error code (see AbiErrorCode).
    message: str
        Human hint suitable for logs.
    data: dict
        Optional machine data (type strings, offsets, sizes). JSON-serializable.
    retryable: bool
        Always False for codec errors; kept for interop with callers that
        inspect it.
    cause: Optional[BaseException]
        Wrapped original exception; not included in equality comparison.
    """

    code: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    retryable: bool = False
    cause: Optional[BaseException] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        super().__init__(f"{self.code}: {self.message}")

    def with_context(self, **ctx: Any) -> "AbiError":
        """Return a copy with extra context merged into `data`."""
        err = _clone(self)
        err.data = {**self.data, **_jsonmap(ctx)}
        return err

    def to_dict(self, include_cause: bool = False) -> Dict[str, Any]:
        out = {
            "code": _code_str(self.code),
            "message": self.message,
            "data": _jsonmap(self.data),
            "retryable": self.retryable,
        }
        if include_cause and self.cause is not None:
            out["cause"] = {
                "type": type(self.cause).__name__,
                "message": str(self.cause),
            }
        return out

    def __str__(self) -> str:  # pragma: no cover - human formatting
        parts = [f"{_code_str(self.code)}: {self.message}"]
        if self.data:
            preview = ", ".join(f"{k}={_preview(v)}" for k, v in self.data.items())
            parts.append(f"[{preview}]")
        return " ".join(parts)


class ConfigError(AbiError):
    def __init__(self, message="invalid configuration", **data: Any) -> None:
        super().__init__(code=AbiErrorCode.CONFIG, message=message, data=_jsonmap(data))


class AddressError(AbiError):
    def __init__(self, message="invalid address", **data: Any) -> None:
        super().__init__(code=AbiErrorCode.ADDRESS, message=message, data=_jsonmap(data))


# ---------------------------------------------------------------------------
# Type descriptor parsing
# ---------------------------------------------------------------------------


class TypeParseError(AbiError):
    """Base for failures while parsing a type string."""


class MalformedTypeError(TypeParseError):
    def __init__(self, type_string: str, reason: str = "malformed type") -> None:
        super().__init__(
            code=AbiErrorCode.TYPE_MALFORMED,
            message=f"{reason}: {type_string!r}",
            data={"type": type_string, "reason": reason},
        )


# ---------------------------------------------------------------------------
# Tokenizing
# ---------------------------------------------------------------------------


class TokenizeError(AbiError):
    """Base for text that does not fit its declared type."""


class TokenTypeMismatch(TokenizeError):
    def __init__(self, type_name: str, text: str, reason: str = "") -> None:
        msg = f"cannot read {text!r} as {type_name}"
        if reason:
            msg += f" ({reason})"
        super().__init__(
            code=AbiErrorCode.TOKEN_TYPE_MISMATCH,
            message=msg,
            data={"type": type_name, "text": text},
        )


class TokenOutOfRange(TokenizeError):
    def __init__(self, type_name: str, text: str) -> None:
        super().__init__(
            code=AbiErrorCode.TOKEN_OUT_OF_RANGE,
            message=f"value {text!r} out of range for {type_name}",
            data={"type": type_name, "text": text},
        )


class TokenArityMismatch(TokenizeError):
    def __init__(self, type_name: str, expected: int, got: int) -> None:
        super().__init__(
            code=AbiErrorCode.TOKEN_ARITY_MISMATCH,
            message=f"{type_name} expects {expected} elements, got {got}",
            data={"type": type_name, "expected": expected, "got": got},
        )


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


class DecodeError(AbiError):
    """Base for binary payloads inconsistent with the declared types."""


class DecodeTruncatedError(DecodeError):
    def __init__(self, offset: int, needed: int, size: int) -> None:
        super().__init__(
            code=AbiErrorCode.DECODE_TRUNCATED,
            message=f"need {needed} bytes at offset {offset}, buffer has {size}",
            data={"offset": offset, "needed": needed, "size": size},
        )


class DecodeInvalidOffsetError(DecodeError):
    def __init__(self, slot: int, offset: int, size: int) -> None:
        super().__init__(
            code=AbiErrorCode.DECODE_INVALID_OFFSET,
            message=f"head slot at {slot} points to invalid offset {offset}",
            data={"slot": slot, "offset": offset, "size": size},
        )


class DecodeInvalidValueError(DecodeError):
    def __init__(self, type_name: str, reason: str, **data: Any) -> None:
        super().__init__(
            code=AbiErrorCode.DECODE_INVALID_VALUE,
            message=f"invalid {type_name} encoding: {reason}",
            data=_jsonmap({"type": type_name, **data}),
        )


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


class FormatError(AbiError):
    """Base for failures while rendering signatures."""


class FormatIoError(FormatError):
    def __init__(self, message="failed to write signature", **data: Any) -> None:
        super().__init__(code=AbiErrorCode.FORMAT_IO, message=message, data=_jsonmap(data))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _clone(err: AbiError) -> AbiError:
    new = Exception.__new__(type(err))
    new.__dict__.update(err.__dict__)
    Exception.__init__(new, *err.args)
    return new


def _code_str(code: Any) -> str:
    return code.value if isinstance(code, Enum) else str(code)


def _jsonmap(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: _coerce_json(v) for k, v in data.items()}


def _coerce_json(v: Any) -> Any:
    # Keep JSON primitives; stringify the rest; hex-encode bytes.
    if v is None or isinstance(v, (bool, int, float, str, list, dict)):
        return v
    if isinstance(v, (bytes, bytearray)):
        return v.hex()
    return str(v)


def _preview(v: Any, limit: int = 96) -> str:
    s = str(_coerce_json(v))
    return s if len(s) <= limit else s[:limit] + "…"
