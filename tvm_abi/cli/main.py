#!/usr/bin/env python3
"""
tvm_abi.cli.main
================

Command-line front-end for the codec.

Examples:
  python -m tvm_abi.cli encode uint256 bool -v 100 -v true
  python -m tvm_abi.cli decode uint256 bool --data 0x...0064...0001
  python -m tvm_abi.cli selector "transfer(address,uint256)"
  python -m tvm_abi.cli signatures build/Token.abi.json
  python -m tvm_abi.cli call build/Token.abi.json transfer -v TLa2f6... -v 100

Exit codes:
  0 on success, 2 on invalid input (bad type, value, payload or ABI file).
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, List, NoReturn, Optional

import typer

from .. import logging as alog
from ..abi.entry import AbiEntry, EntryType, load_abi
from ..abi.signature import fnhash, method_name, pretty_signature, selector
from ..abi.tokenizer import TokenizerMode
from ..config import load_config
from ..errors import AbiError
from ..hashing import to_hex
from ..params import decode_params, encode_call, encode_params
from ..version import __version__

app = typer.Typer(
    name="tvm-abi",
    add_completion=False,
    no_args_is_help=True,
    help="Encode/decode TVM contract-ABI parameters and inspect ABI entries.",
)

log = logging.getLogger(__name__)


# -------------------- utils --------------------


def _die(msg: str, code: int = 2) -> NoReturn:
    sys.stderr.write(msg.rstrip() + "\n")
    raise typer.Exit(code)


def _fail(exc: Exception) -> NoReturn:
    log.debug("command failed", exc_info=exc)
    if isinstance(exc, AbiError):
        _die(f"error: {exc.to_dict()['code']}: {exc.message}")
    _die(f"error: {exc}")


def _mode(strict: bool) -> TokenizerMode:
    if strict:
        return TokenizerMode.STRICT
    return TokenizerMode(load_config().tokenizer_mode)


def _load_entries(path: Path) -> List[AbiEntry]:
    try:
        return load_abi(path)
    except (OSError, ValueError) as e:
        _die(f"error: cannot load ABI from {path}: {e}")


def _find_entry(entries: List[AbiEntry], method: str) -> AbiEntry:
    functions = [e for e in entries if e.type is EntryType.FUNCTION]
    if "(" in method:
        matches = [e for e in functions if method_name(e) == method]
    else:
        matches = [e for e in functions if e.name == method]
    if not matches:
        _die(f"error: no function {method!r} in ABI")
    if len(matches) > 1:
        options = ", ".join(method_name(e) for e in matches)
        _die(f"error: {method!r} is overloaded; use one of: {options}")
    return matches[0]


def _emit(obj: Any, json_out: bool) -> None:
    if json_out:
        typer.echo(json.dumps(obj, indent=2, sort_keys=True))
    elif isinstance(obj, list):
        for line in obj:
            typer.echo(line)
    else:
        typer.echo(obj)


# -------------------- commands --------------------


@app.command("encode")
def cmd_encode(
    types: List[str] = typer.Argument(..., help="Parameter types, e.g. address uint256 'bool[]'."),
    values: List[str] = typer.Option([], "--value", "-v", help="Parameter value (repeat once per type)."),
    strict: bool = typer.Option(False, "--strict", help="Require canonical value forms."),
) -> None:
    """Encode parameters and print the payload as 0x-hex."""
    if len(types) != len(values):
        _die(f"error: got {len(types)} types but {len(values)} values")
    try:
        data = encode_params(types, values, mode=_mode(strict))
    except (AbiError, ValueError) as e:
        _fail(e)
    typer.echo(to_hex(data))


@app.command("decode")
def cmd_decode(
    types: List[str] = typer.Argument(..., help="Expected result types."),
    data: str = typer.Option(..., "--data", "-d", help="Hex payload (0x optional)."),
    json_out: bool = typer.Option(False, "--json", help="Output a JSON array."),
) -> None:
    """Decode a payload and print one formatted value per line."""
    try:
        rendered = decode_params(types, data)
    except (AbiError, ValueError) as e:
        _fail(e)
    _emit(rendered, json_out)


@app.command("selector")
def cmd_selector(
    signature: str = typer.Argument(..., help='Canonical signature, e.g. "transfer(address,uint256)".'),
) -> None:
    """Print the 4-byte method selector of a signature."""
    typer.echo(to_hex(fnhash(signature.strip())))


@app.command("signatures")
def cmd_signatures(
    abi_path: Path = typer.Argument(..., help="ABI JSON file ({'entrys': [...]} or a list)."),
    json_out: bool = typer.Option(False, "--json", help="Output JSON."),
) -> None:
    """List every entry with its selector (functions) and pretty signature."""
    rows = []
    for entry in _load_entries(abi_path):
        try:
            pretty = pretty_signature(entry)
        except AbiError as e:
            _fail(e)
        sel = to_hex(selector(entry), prefix="") if entry.type is EntryType.FUNCTION else None
        rows.append({"selector": sel, "method": method_name(entry), "signature": pretty})
    if json_out:
        _emit(rows, True)
        return
    for r in rows:
        typer.echo(f"{r['selector'] or '-' * 8}  {r['signature']}")


@app.command("call")
def cmd_call(
    abi_path: Path = typer.Argument(..., help="ABI JSON file."),
    method: str = typer.Argument(..., help="Function name, or full signature for overloads."),
    values: List[str] = typer.Option([], "--value", "-v", help="Argument value (repeat per input)."),
    strict: bool = typer.Option(False, "--strict", help="Require canonical value forms."),
) -> None:
    """Build call data (selector || encoded arguments) for an ABI function."""
    entry = _find_entry(_load_entries(abi_path), method)
    if len(entry.inputs) != len(values):
        _die(f"error: {method_name(entry)} takes {len(entry.inputs)} arguments, got {len(values)}")
    try:
        data = encode_call(entry, values, mode=_mode(strict))
    except (AbiError, ValueError) as e:
        _fail(e)
    typer.echo(to_hex(data))


@app.command("config")
def cmd_config() -> None:
    """Show the effective configuration."""
    _emit({**load_config().as_dict(), "version": __version__}, True)


@app.callback()
def _main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override TVM_ABI_LOG_LEVEL."),
) -> None:
    try:
        cfg = load_config()
    except AbiError as e:
        _fail(e)
    alog.configure_from_config(cfg, level=log_level)


def get_app() -> typer.Typer:
    return app


if __name__ == "__main__":
    app()
