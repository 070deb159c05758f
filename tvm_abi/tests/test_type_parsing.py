from __future__ import annotations

import pytest

from tvm_abi.abi.types import (
    MAX_TYPE_DEPTH,
    AddressType,
    ArrayType,
    BoolType,
    BytesType,
    FixedArrayType,
    FixedBytesType,
    IntType,
    StringType,
    TupleType,
    UIntType,
    parse_type,
    resolve_alias,
)
from tvm_abi.errors import MalformedTypeError, TypeParseError


# ---------------------------------------------------------------------------
# Elementary types
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "spec, expected",
    [
        ("bool", BoolType()),
        ("address", AddressType()),
        ("string", StringType()),
        ("bytes", BytesType()),
        ("bytes1", FixedBytesType(1)),
        ("bytes32", FixedBytesType(32)),
        ("uint8", UIntType(8)),
        ("uint256", UIntType(256)),
        ("uint", UIntType(256)),
        ("int16", IntType(16)),
        ("int", IntType(256)),
    ],
)
def test_elementary_types(spec, expected) -> None:
    assert parse_type(spec) == expected


def test_canonical_names() -> None:
    assert parse_type("uint").name == "uint256"
    assert parse_type("int").name == "int256"
    assert parse_type("(uint,bool[])[2]").name == "(uint256,bool[])[2]"


# ---------------------------------------------------------------------------
# Composites
# ---------------------------------------------------------------------------


def test_arrays_nest_left_to_right() -> None:
    t = parse_type("uint8[2][]")
    assert t == ArrayType(FixedArrayType(UIntType(8), 2))
    assert t.is_dynamic


def test_tuples_and_nested_tuples() -> None:
    t = parse_type("(bool,(uint8,string),address[3])")
    assert t == TupleType(
        (
            BoolType(),
            TupleType((UIntType(8), StringType())),
            FixedArrayType(AddressType(), 3),
        )
    )
    assert t.is_dynamic  # contains a string
    assert parse_type("()") == TupleType(())


def test_static_composites_report_inline_head_size() -> None:
    assert parse_type("(bool,uint8)").head_size == 64
    assert parse_type("uint256[3]").head_size == 96
    assert parse_type("(uint8,bool)[2]").head_size == 128
    assert parse_type("string[2]").head_size == 32
    assert not parse_type("(bool,uint8)[2]").is_dynamic


# ---------------------------------------------------------------------------
# Aliases
# ---------------------------------------------------------------------------


def test_trc_token_is_uint256() -> None:
    assert parse_type("trcToken") == UIntType(256)
    assert parse_type("trcToken[]") == ArrayType(UIntType(256))
    assert parse_type("(address,trcToken)") == TupleType((AddressType(), UIntType(256)))


def test_alias_only_replaces_whole_names() -> None:
    assert resolve_alias("trcToken") == "uint256"
    assert resolve_alias("(trcToken,bool)") == "(uint256,bool)"
    assert resolve_alias("trcTokens") == "trcTokens"


# ---------------------------------------------------------------------------
# Malformed specs
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "spec",
    [
        "",
        "uint9",
        "uint0",
        "uint264",
        "uint08",
        "int7",
        "bytes0",
        "bytes33",
        "bytes01",
        "uint256[",
        "uint256]",
        "uint256[0]",
        "uint256[-1]",
        "uint256[x]",
        "[]",
        "(uint256",
        "uint256)",
        "(uint256,)",
        "(,bool)",
        "(bool))",
        "((bool)",
        "(bool,uint8[)]",
        "float",
        "Uint256",
        "uint 256",
        "string[]]",
        "bytes²",
    ],
)
def test_malformed_specs_raise(spec: str) -> None:
    with pytest.raises(MalformedTypeError) as ei:
        parse_type(spec)
    assert isinstance(ei.value, TypeParseError)
    assert ei.value.to_dict()["code"] == "ABI/TYPE_MALFORMED"


def test_non_string_spec_raises_malformed() -> None:
    with pytest.raises(MalformedTypeError):
        parse_type(None)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Nesting depth
# ---------------------------------------------------------------------------


def test_nesting_up_to_the_limit_is_accepted() -> None:
    t = parse_type("uint8" + "[]" * MAX_TYPE_DEPTH)
    for _ in range(MAX_TYPE_DEPTH):
        assert isinstance(t, ArrayType)
        t = t.inner
    assert t == UIntType(8)
    assert parse_type("(" * MAX_TYPE_DEPTH + "bool" + ")" * MAX_TYPE_DEPTH).is_dynamic is False


@pytest.mark.parametrize(
    "spec",
    [
        "uint8" + "[]" * (MAX_TYPE_DEPTH + 1),
        "(" * (MAX_TYPE_DEPTH + 1) + "bool" + ")" * (MAX_TYPE_DEPTH + 1),
        "(" * 5000 + "boo" + ")" * 5000,
        "(" * 5000 + "bool" + ")" * 5000,
        "bool" + "[2]" * 5000,
    ],
)
def test_deep_nesting_is_malformed_not_a_crash(spec: str) -> None:
    with pytest.raises(MalformedTypeError) as ei:
        parse_type(spec)
    assert ei.value.data["reason"] == "nesting too deep"
