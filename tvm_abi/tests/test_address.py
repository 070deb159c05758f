from __future__ import annotations

import pytest

from tvm_abi.address import (
    from_base58,
    is_address,
    parse_address,
    to_base58,
    to_hex_address,
)
from tvm_abi.errors import AddressError

USDT_BASE58 = "TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t"
USDT_HEX = "41a614f803b6fd780986a42c78ec9c7f77e6ded13c"
USDT_RAW = bytes.fromhex(USDT_HEX[2:])


def test_base58_both_ways() -> None:
    assert to_base58(USDT_RAW) == USDT_BASE58
    assert from_base58(USDT_BASE58) == USDT_RAW


def test_hex_rendering_carries_prefix() -> None:
    assert to_hex_address(USDT_RAW) == USDT_HEX
    assert to_hex_address(USDT_RAW, prefix=0xA0).startswith("a0")


@pytest.mark.parametrize(
    "text",
    [
        USDT_BASE58,
        f"  {USDT_BASE58}  ",
        USDT_HEX,
        "0x" + USDT_HEX,
        USDT_HEX.upper(),
        USDT_HEX[2:],
        "0x" + USDT_HEX[2:],
    ],
)
def test_parse_accepts_common_forms(text: str) -> None:
    assert parse_address(text) == USDT_RAW
    assert is_address(text)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "T",
        USDT_BASE58[:-1] + ("1" if USDT_BASE58[-1] != "1" else "2"),  # checksum broken
        "a0" + USDT_HEX[2:],  # wrong network prefix
        "0x" + "zz" * 20,
        "0x1234",
        "0" * 39,
    ],
)
def test_parse_rejects_invalid(text: str) -> None:
    with pytest.raises(AddressError):
        parse_address(text)
    assert not is_address(text)


def test_raw_payload_must_be_twenty_bytes() -> None:
    with pytest.raises(AddressError):
        to_base58(b"\x00" * 19)


def test_prefix_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    from tvm_abi.config import load_config

    monkeypatch.setenv("TVM_ABI_ADDRESS_PREFIX", "0xa0")
    load_config.cache_clear()
    text = to_base58(USDT_RAW)
    assert text != USDT_BASE58
    assert from_base58(text) == USDT_RAW
    with pytest.raises(AddressError):
        from_base58(USDT_BASE58)
