from __future__ import annotations

import io
import json
import logging

import pytest

from tvm_abi import logging as alog
from tvm_abi.config import load_config
from tvm_abi.errors import (
    AbiError,
    AbiErrorCode,
    ConfigError,
    DecodeInvalidValueError,
    MalformedTypeError,
    TokenArityMismatch,
)

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


def test_defaults() -> None:
    cfg = load_config()
    assert cfg.address_prefix == 0x41
    assert cfg.tokenizer_mode == "lenient"
    assert cfg.max_decode_bytes == 1_048_576
    assert cfg.log_level == "WARNING"
    assert cfg.log_json is None
    assert cfg.as_dict()["address_prefix"] == "0x41"


def test_env_overrides_and_clamping(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TVM_ABI_TOKENIZER_MODE", "STRICT")
    monkeypatch.setenv("TVM_ABI_MAX_DECODE_BYTES", "10")
    monkeypatch.setenv("TVM_ABI_LOG_LEVEL", "debug")
    monkeypatch.setenv("TVM_ABI_LOG_FORMAT", "json")
    load_config.cache_clear()
    cfg = load_config()
    assert cfg.tokenizer_mode == "strict"
    assert cfg.max_decode_bytes == 1024
    assert cfg.log_level == "DEBUG"
    assert cfg.log_json is True


def test_config_is_cached_until_cleared(monkeypatch: pytest.MonkeyPatch) -> None:
    first = load_config()
    monkeypatch.setenv("TVM_ABI_TOKENIZER_MODE", "strict")
    assert load_config() is first
    load_config.cache_clear()
    assert load_config().tokenizer_mode == "strict"


@pytest.mark.parametrize(
    "key, value",
    [
        ("TVM_ABI_TOKENIZER_MODE", "fuzzy"),
        ("TVM_ABI_MAX_DECODE_BYTES", "lots"),
        ("TVM_ABI_LOG_FORMAT", "xml"),
        ("TVM_ABI_ADDRESS_PREFIX", "T"),
    ],
)
def test_bad_env_values_raise_config_error(monkeypatch: pytest.MonkeyPatch, key: str, value: str) -> None:
    monkeypatch.setenv(key, value)
    load_config.cache_clear()
    with pytest.raises(ConfigError) as ei:
        load_config()
    assert ei.value.data["value"] == value


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


def test_to_dict_is_json_safe() -> None:
    err = DecodeInvalidValueError("bytes4", "non-zero padding", raw=b"\x01\x02")
    d = err.to_dict()
    assert d["code"] == AbiErrorCode.DECODE_INVALID_VALUE.value
    assert d["data"] == {"type": "bytes4", "raw": "0102"}
    assert d["retryable"] is False
    json.dumps(d)


def test_with_context_returns_an_enriched_copy() -> None:
    err = TokenArityMismatch("uint8[2]", 2, 3)
    richer = err.with_context(types=["uint8[2]"], arg=0)
    assert isinstance(richer, TokenArityMismatch)
    assert richer.data["expected"] == 2
    assert richer.data["arg"] == 0
    assert "arg" not in err.data


def test_errors_are_exceptions_with_readable_text() -> None:
    err = MalformedTypeError("uint9", "unsupported integer width")
    assert isinstance(err, AbiError)
    assert isinstance(err, Exception)
    assert "ABI/TYPE_MALFORMED" in str(err)
    assert "uint9" in str(err)


def test_cause_is_optional_in_dict() -> None:
    err = ConfigError("bad", value="x")
    err.cause = KeyError("x")
    assert "cause" not in err.to_dict()
    assert err.to_dict(include_cause=True)["cause"]["type"] == "KeyError"


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_logging_includes_extras(_restore_root_logger) -> None:
    buf = io.StringIO()
    alog.configure(json=True, level="DEBUG", stream=buf)
    alog.get_logger("tvm_abi.test").debug("encoded", extra={"size": 64, "raw": b"\xab"})
    record = json.loads(buf.getvalue().strip().splitlines()[-1])
    assert record["msg"] == "encoded"
    assert record["level"] == "DEBUG"
    assert record["size"] == 64
    assert record["raw"] == "ab"


def test_text_logging_respects_level(_restore_root_logger) -> None:
    buf = io.StringIO()
    alog.configure(json=False, level="WARNING", stream=buf)
    log = alog.get_logger("tvm_abi.test")
    log.info("hidden")
    log.warning("shown", extra={"offset": 32})
    out = buf.getvalue()
    assert "hidden" not in out
    assert "shown" in out
    assert "offset=32" in out


def test_configure_from_config(monkeypatch: pytest.MonkeyPatch, _restore_root_logger) -> None:
    monkeypatch.setenv("TVM_ABI_LOG_LEVEL", "error")
    load_config.cache_clear()
    alog.configure_from_config(load_config())
    assert logging.getLogger().level == logging.ERROR
    alog.configure_from_config(load_config(), level="DEBUG")
    assert logging.getLogger().level == logging.DEBUG
