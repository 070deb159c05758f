from __future__ import annotations

import pytest

from tvm_abi import AbiEntry, AbiParam, TokenizerMode
from tvm_abi.errors import TokenOutOfRange, TokenTypeMismatch
from tvm_abi.hashing import to_hex
from tvm_abi.params import decode_output, decode_params, encode_call, encode_params

USDT_BASE58 = "TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t"
USDT_RAW = bytes.fromhex("a614f803b6fd780986a42c78ec9c7f77e6ded13c")


def _word(n: int) -> bytes:
    return n.to_bytes(32, "big")


def test_encode_params_static_pair() -> None:
    data = encode_params(["uint256", "bool"], ["100", "true"])
    assert len(data) == 64
    assert data[:32] == b"\x00" * 31 + b"\x64"
    assert data[32:] == b"\x00" * 31 + b"\x01"


def test_trc_token_alias_encodes_like_uint256() -> None:
    for value in ("0", "1000001", "0xffff"):
        assert encode_params(["trcToken"], [value]) == encode_params(["uint256"], [value])
    assert encode_params(["trcToken[]"], ["[1,2]"]) == encode_params(["uint256[]"], ["[1,2]"])


def test_strict_mode_is_selectable() -> None:
    padded = "00" * 31 + "64"
    assert encode_params(["uint256"], [padded], mode=TokenizerMode.STRICT) == _word(100)
    with pytest.raises(TokenTypeMismatch):
        encode_params(["uint256"], ["100"], mode="strict")


def test_length_mismatch_is_a_caller_error() -> None:
    with pytest.raises(ValueError):
        encode_params(["uint256", "bool"], ["1"])


def test_tokenize_errors_carry_the_declared_types() -> None:
    with pytest.raises(TokenOutOfRange) as ei:
        encode_params(["uint8", "bool"], ["300", "true"])
    assert ei.value.data["types"] == ["uint8", "bool"]


def test_decode_params_renders_display_strings() -> None:
    data = encode_params(["uint256", "address", "string", "bytes"], ["100", USDT_BASE58, "hi", "0xbeef"])
    assert decode_params(["uint256", "address", "string", "bytes"], to_hex(data)) == [
        "100",
        USDT_BASE58,
        '"hi"',
        "beef",
    ]
    # raw bytes and unprefixed hex are accepted too
    assert decode_params(["uint256"], _word(7)) == ["7"]
    assert decode_params(["uint256"], _word(7).hex()) == ["7"]


def test_decode_params_rejects_odd_hex() -> None:
    with pytest.raises(ValueError):
        decode_params(["uint256"], "0xabc")


def test_encode_call_from_signature() -> None:
    data = encode_call("transfer(address,uint256)", [USDT_BASE58, "100"])
    assert data[:4].hex() == "a9059cbb"
    assert data[4:] == b"\x00" * 12 + USDT_RAW + _word(100)


def test_encode_call_with_nested_tuple_signature() -> None:
    data = encode_call("f((uint256,bool),string)", ["(1,true)", "x"])
    assert len(data) == 4 + 32 * 5
    assert data[4:36] == _word(1)
    assert data[36:68] == _word(1)
    assert data[68:100] == _word(96)


def test_encode_call_without_arguments() -> None:
    assert encode_call("totalSupply()", []).hex() == "18160ddd"


def test_encode_call_from_entry_and_explicit_types() -> None:
    entry = AbiEntry(
        name="balanceOf",
        inputs=(AbiParam("address", "who"),),
        outputs=(AbiParam("uint256", ""),),
    )
    data = encode_call(entry, [USDT_BASE58])
    assert data[:4].hex() == "70a08231"
    assert data[4:] == b"\x00" * 12 + USDT_RAW
    assert encode_call("balanceOf(address)", [USDT_BASE58], types=["address"]) == data


def test_encode_call_rejects_non_signatures() -> None:
    with pytest.raises(ValueError):
        encode_call("transfer", ["1"])


def test_decode_output_uses_entry_outputs() -> None:
    entry = AbiEntry(
        name="info",
        outputs=(AbiParam("bool", "ok"), AbiParam("uint256[]", "ids")),
    )
    data = _word(1) + _word(64) + _word(2) + _word(5) + _word(6)
    assert decode_output(entry, data) == ["true", "[5, 6]"]
