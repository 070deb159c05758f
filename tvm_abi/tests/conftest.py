from __future__ import annotations

import pytest

from tvm_abi.config import load_config


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch: pytest.MonkeyPatch):
    """Every test starts from default configuration (no TVM_ABI_* overrides)."""
    for key in (
        "TVM_ABI_ADDRESS_PREFIX",
        "TVM_ABI_TOKENIZER_MODE",
        "TVM_ABI_MAX_DECODE_BYTES",
        "TVM_ABI_LOG_LEVEL",
        "TVM_ABI_LOG_FORMAT",
    ):
        monkeypatch.delenv(key, raising=False)
    load_config.cache_clear()
    yield
    load_config.cache_clear()
