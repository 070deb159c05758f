"""tvm_abi.version — semantic version with env and metadata overrides.

Resolution order (first match wins):
- TVM_ABI_VERSION environment variable (exact value)
- installed package metadata for the `tvm-abi` distribution
- BASE_VERSION + '+dev'
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import metadata as importlib_metadata
from typing import Optional

# Bump on changes to encoded output or public API.
BASE_VERSION = "0.3.0"


def _pkg_metadata_version(dist_name: str = "tvm-abi") -> Optional[str]:
    """Try to read installed package version; None if unavailable."""
    try:
        v = importlib_metadata.version(dist_name)
    except importlib_metadata.PackageNotFoundError:
        return None
    return v if v and v != "0.0.0" else None


@lru_cache(maxsize=1)
def compute_version() -> str:
    val = os.getenv("TVM_ABI_VERSION")
    if val:
        return val

    meta_v = _pkg_metadata_version()
    if meta_v:
        return meta_v

    return f"{BASE_VERSION}+dev"


__version__ = compute_version()

__all__ = ["__version__", "BASE_VERSION", "compute_version"]
