"""
tvm_abi.cli
-----------

Command-line entrypoint, exposed as the `tvm-abi` console script
(`tvm_abi.cli.main:app`) and as `python -m tvm_abi.cli`.
"""

from __future__ import annotations

from .main import app, get_app

__all__ = ["app", "get_app"]
